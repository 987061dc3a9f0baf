"""Classify runtime values for serialization.

Every value handed to the engine belongs to exactly one :py:class:`Category`.
The scalar and container categories are dispatched on the concrete Python type
with :py:func:`functools.singledispatch`. Everything else is classified by its
associated type, as reported by the engine's type lookup function.

Reference https://docs.python.org/3/library/json.html#py-to-json-table for the
scalar conversions performed by the default codec.
"""
from __future__ import annotations

__all__ = ['Category', 'classify', 'to_builtin']

import enum
import functools
import inspect
import logging
import types
import typing

import numpy

from tagcodec.utils import _MissingType
from tagcodec.utils import class_name_of

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


class Category(enum.Enum):
    """The closed set of value categories recognized by the engine."""
    EMPTY = 'empty'
    ABSENT = 'absent'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    TOKEN = 'token'
    CALLABLE = 'callable'
    MAPPING = 'mapping'
    SEQUENCE = 'sequence'
    INSTANCE = 'instance'
    UNKNOWN = 'unknown'

    @property
    def is_scalar(self) -> bool:
        return self in (Category.EMPTY, Category.BOOLEAN, Category.NUMBER, Category.STRING)


@functools.singledispatch
def _category(value) -> typing.Optional[Category]:
    """Provide a dispatching function for categories determined by the concrete type."""
    # Not decided by the concrete type alone. See classify().
    return None


@_category.register(type(None))
def _(value) -> Category:
    return Category.EMPTY


@_category.register(_MissingType)
def _(value) -> Category:
    return Category.ABSENT


@_category.register(bool)
@_category.register(numpy.bool_)
def _(value) -> Category:
    return Category.BOOLEAN


@_category.register(int)
@_category.register(float)
@_category.register(numpy.integer)
@_category.register(numpy.floating)
def _(value) -> Category:
    return Category.NUMBER


@_category.register(str)
def _(value) -> Category:
    return Category.STRING


@_category.register(list)
@_category.register(tuple)
def _(value) -> Category:
    return Category.SEQUENCE


@_category.register(type)
@_category.register(types.FunctionType)
@_category.register(types.BuiltinFunctionType)
@_category.register(types.MethodType)
@_category.register(functools.partial)
def _(value) -> Category:
    return Category.CALLABLE


@_category.register(types.ModuleType)
def _(value) -> Category:
    return Category.UNKNOWN


def classify(value, get_type: typing.Callable[[object], typing.Any] = type) -> Category:
    """Determine the category of *value*.

    Args:
        value: any Python object.
        get_type: look up the type associated with *value*. Instances whose
            associated type is :py:class:`dict` (or None) are plain mappings.

    A dict subclass is not a plain mapping. Its instances are classified as
    registered-type instances and need a serializer, like any other class.
    """
    category = _category(value)
    if category is not None:
        return category
    if inspect.isroutine(value):
        return Category.CALLABLE

    value_type = get_type(value)
    if value_type is None or value_type is dict:
        return Category.MAPPING
    if value_type is object:
        # Bare object() instances only carry identity.
        return Category.TOKEN
    if class_name_of(value_type) is None:
        return Category.UNKNOWN
    return Category.INSTANCE


def to_builtin(value):
    """Convert a scalar to the equivalent built-in Python object.

    numpy scalars are unwrapped with ``item()``. Other values are returned unaltered.
    """
    if isinstance(value, numpy.generic):
        return value.item()
    return value
