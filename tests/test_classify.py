"""Test the value classification used to dispatch serialization."""
from __future__ import annotations

import collections
import fractions
import functools
import logging
import math

import numpy
import pytest
from tagcodec.classify import Category
from tagcodec.classify import classify
from tagcodec.classify import to_builtin
from tagcodec.utils import MISSING

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


class Spam:
    def method(self):
        ...


@pytest.mark.parametrize('value, category', [
    (None, Category.EMPTY),
    (MISSING, Category.ABSENT),
    (True, Category.BOOLEAN),
    (False, Category.BOOLEAN),
    (numpy.bool_(True), Category.BOOLEAN),
    (0, Category.NUMBER),
    (-1.5, Category.NUMBER),
    (numpy.int64(3), Category.NUMBER),
    (numpy.float32(0.5), Category.NUMBER),
    ('', Category.STRING),
    ('spam', Category.STRING),
    ({}, Category.MAPPING),
    ({'spam': 'eggs'}, Category.MAPPING),
    ([], Category.SEQUENCE),
    ((1, 2), Category.SEQUENCE),
    (object(), Category.TOKEN),
    (len, Category.CALLABLE),
    (lambda: None, Category.CALLABLE),
    (Spam, Category.CALLABLE),
    (Spam().method, Category.CALLABLE),
    (str.upper, Category.CALLABLE),
    (functools.partial(int, '1'), Category.CALLABLE),
    (Spam(), Category.INSTANCE),
    (fractions.Fraction(1, 3), Category.INSTANCE),
    (collections.OrderedDict(), Category.INSTANCE),
    (math, Category.UNKNOWN),
])
def test_classify(value, category):
    assert classify(value) is category


def test_booleans_are_not_numbers():
    # bool is a subclass of int.
    assert classify(True) is Category.BOOLEAN
    assert classify(1) is Category.NUMBER


def test_classify_with_type_lookup():
    """The associated type decides between plain mappings, tokens and instances."""
    instance = Spam()
    assert classify(instance) is Category.INSTANCE
    assert classify(instance, get_type=lambda obj: dict) is Category.MAPPING
    assert classify(instance, get_type=lambda obj: None) is Category.MAPPING
    assert classify(instance, get_type=lambda obj: object) is Category.TOKEN
    # An associated type without a name.
    assert classify(instance, get_type=lambda obj: object()) is Category.UNKNOWN
    # Scalars do not depend on the look-up.
    assert classify('spam', get_type=lambda obj: None) is Category.STRING


def test_scalar_categories():
    scalars = {category for category in Category if category.is_scalar}
    assert scalars == {Category.EMPTY, Category.BOOLEAN, Category.NUMBER, Category.STRING}


def test_to_builtin():
    value = to_builtin(numpy.int64(3))
    assert value == 3
    assert type(value) is int

    value = to_builtin(numpy.bool_(False))
    assert value is False

    assert type(to_builtin(numpy.float32(0.5))) is float
    assert to_builtin('spam') == 'spam'
    assert to_builtin(None) is None
