"""Test the wire convention for tagged instances."""
from __future__ import annotations

import pytest
from tagcodec.exceptions import DeserializeError
from tagcodec.exceptions import UnrecognizedShapeError
from tagcodec.tags import CLASS_NAME_KEY
from tagcodec.tags import PAYLOAD_KEY
from tagcodec.tags import TaggedPayload
from tagcodec.tags import is_tagged
from tagcodec.tags import make_tag
from tagcodec.tags import read_tag


def test_make_tag():
    tag = make_tag('Point', '1,2')
    assert tag == {CLASS_NAME_KEY: 'Point', PAYLOAD_KEY: '1,2'}
    assert list(tag) == [CLASS_NAME_KEY, PAYLOAD_KEY]
    assert is_tagged(tag)
    assert read_tag(tag) == TaggedPayload('Point', '1,2')


def test_sentinel_is_not_a_class_name():
    assert not CLASS_NAME_KEY.isidentifier()


def test_is_tagged():
    assert not is_tagged({})
    assert not is_tagged({'p': 'spam'})
    assert not is_tagged([CLASS_NAME_KEY])
    assert not is_tagged(CLASS_NAME_KEY)
    # Presence of the sentinel is enough to claim the shape.
    assert is_tagged({CLASS_NAME_KEY: 'Point'})


@pytest.mark.parametrize('obj', [
    {CLASS_NAME_KEY: 'Point'},
    {CLASS_NAME_KEY: 'Point', PAYLOAD_KEY: '1,2', 'extra': 1},
    {CLASS_NAME_KEY: 'Point', 'q': '1,2'},
    {CLASS_NAME_KEY: '', PAYLOAD_KEY: '1,2'},
    {CLASS_NAME_KEY: 42, PAYLOAD_KEY: '1,2'},
    {CLASS_NAME_KEY: 'Point', PAYLOAD_KEY: [1, 2]},
    {CLASS_NAME_KEY: 'Point', PAYLOAD_KEY: None},
])
def test_read_malformed_tag(obj):
    with pytest.raises(UnrecognizedShapeError):
        read_tag(obj)
    assert issubclass(UnrecognizedShapeError, DeserializeError)
