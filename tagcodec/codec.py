"""Underlying text codecs.

The engine only needs an ``encode(value) -> str`` and ``decode(text) -> value``
pair. :py:class:`JsonCodec` provides the default pair in terms of the standard
library :py:mod:`json` module.

Note that the following are equivalent.
    json.dumps(obj, *, cls=None, **kw)
    json.JSONEncoder(**kw).encode(obj)
"""
from __future__ import annotations

__all__ = ['Codec', 'JsonCodec']

import json
import logging
import typing

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


@typing.runtime_checkable
class Codec(typing.Protocol):
    """Scalar and structural text transcoding primitives."""

    def encode(self, value) -> str:
        ...

    def decode(self, text: str):
        ...


class JsonCodec:
    """Produce compact JSON text.

    Key order follows the insertion order of the encoded mappings. NaN and
    infinite floats are rejected, since they have no JSON representation.

    Keyword arguments override the options passed to :py:func:`json.dumps`.
    """
    dumps_options: typing.ClassVar[typing.Mapping[str, typing.Any]] = {
        'ensure_ascii': True,
        'separators': (',', ':'),
        'allow_nan': False,
    }

    def __init__(self, **dumps_options):
        self._options = dict(self.dumps_options)
        self._options.update(dumps_options)

    def encode(self, value) -> str:
        return json.dumps(value, **self._options)

    def decode(self, text: typing.Union[str, bytes]):
        return json.loads(text)

    def __repr__(self):
        return f'{self.__class__.__name__}()'
