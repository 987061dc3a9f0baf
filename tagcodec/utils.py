"""Utility functions and constants shared by the tagcodec modules."""

__all__ = ['MISSING', 'is_valid_class_name', 'class_name_of']

import typing


class _MissingType:
    """Type of the :py:data:`MISSING` singleton."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'MISSING'


MISSING = _MissingType()
"""Marker for an absent value.

A mapping entry whose value is MISSING is left out of the serialized output.
MISSING is not allowed as a sequence element.
"""


def is_valid_class_name(name) -> bool:
    """Check whether *name* can be used as a registered type name.

    Valid names are non-empty strings made of one or more period-delimited
    Python identifiers, such as ``Point`` or ``geometry.Point``.
    """
    if not isinstance(name, str) or not name:
        return False
    return all(part.isidentifier() for part in name.split('.'))


def class_name_of(obj) -> typing.Optional[str]:
    """Get the intrinsic name of a class or named entity, or None."""
    name = getattr(obj, '__name__', None)
    if isinstance(name, str):
        return name
    return None
