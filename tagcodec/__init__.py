"""Round-trip instances of registered classes through a text codec.

tagcodec extends a plain data codec (JSON by default) with a tagging convention
and a type registry, so that instances of registered classes are reconstructed
as such when the text is read back::

    import tagcodec

    engine = tagcodec.create()

    @engine.register
    class Point:
        def __init__(self, x, y):
            self.x, self.y = x, y

        def serialize(self):
            return f'{self.x},{self.y}'

        @classmethod
        def deserialize(cls, payload):
            return cls(*map(int, payload.split(',')))

    text = engine.serialize({'p': Point(1, 2)})
    # '{"p":{"<5Er1]":"Point","p":"1,2"}}'
    value = engine.deserialize(text)
"""

__all__ = [
    'create',
    'ambient_namespace',
    'Engine',
    'JsonCodec',
    'MISSING',
    'CLASS_NAME_KEY',
    'PAYLOAD_KEY',
    'TagCodecError',
    'ConfigError',
    'SerializeError',
    'DeserializeError',
]

import logging

from tagcodec.codec import JsonCodec
from tagcodec.context import ambient_namespace
from tagcodec.context import create
from tagcodec.engine import Engine
from tagcodec.exceptions import ConfigError
from tagcodec.exceptions import DeserializeError
from tagcodec.exceptions import SerializeError
from tagcodec.exceptions import TagCodecError
from tagcodec.tags import CLASS_NAME_KEY
from tagcodec.tags import PAYLOAD_KEY
from tagcodec.utils import MISSING

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))
