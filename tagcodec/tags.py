"""Wire convention for instances of registered types.

An instance is represented as a plain mapping with exactly two members::

    {"<5Er1]": "Point", "p": "1,2"}

The sentinel key (:py:data:`CLASS_NAME_KEY`) holds the type name. The payload
key (:py:data:`PAYLOAD_KEY`) holds the string produced by the type's own
serialize function. The payload is opaque here. It is handed verbatim to the
matching deserialize function or constructor.

No other marker is introduced. Plain mappings and sequences keep the native
representation of the underlying codec.
"""
from __future__ import annotations

__all__ = ['CLASS_NAME_KEY', 'PAYLOAD_KEY', 'TaggedPayload', 'make_tag', 'is_tagged', 'read_tag']

import typing

from tagcodec.exceptions import UnrecognizedShapeError

# The sentinel is deliberately not a valid identifier, so it cannot collide
# with a registered class name.
CLASS_NAME_KEY = '<5Er1]'
PAYLOAD_KEY = 'p'


class TaggedPayload(typing.NamedTuple):
    """The decoded contents of a tagged mapping."""
    name: str
    payload: str


def make_tag(name: str, payload: str) -> dict:
    """Build the tagged mapping for an instance of type *name*."""
    return {CLASS_NAME_KEY: name, PAYLOAD_KEY: payload}


def is_tagged(obj) -> bool:
    """Check whether a decoded mapping claims to be a tagged payload.

    Only the presence of the sentinel key is checked. Use :py:func:`read_tag`
    to validate the rest of the shape.
    """
    return isinstance(obj, dict) and CLASS_NAME_KEY in obj


def read_tag(obj: dict) -> TaggedPayload:
    """Extract the type name and payload from a tagged mapping.

    Raises:
        UnrecognizedShapeError if *obj* is not exactly a two-member mapping
        with a non-empty string name and a string payload.
    """
    if len(obj) != 2 or PAYLOAD_KEY not in obj:
        raise UnrecognizedShapeError(
            f'Tagged mapping must contain exactly {CLASS_NAME_KEY!r} and {PAYLOAD_KEY!r}. Got keys {list(obj)!r}.')
    name = obj[CLASS_NAME_KEY]
    payload = obj[PAYLOAD_KEY]
    if not isinstance(name, str) or not name:
        raise UnrecognizedShapeError(f'Tagged mapping has an invalid class name: {name!r}')
    if not isinstance(payload, str):
        raise UnrecognizedShapeError(f'Tagged payload for {name!r} must be a string. Got {type(payload).__name__}.')
    return TaggedPayload(name, payload)
