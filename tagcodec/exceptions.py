"""Core tagcodec exceptions.

Errors are grouped by the phase that raises them. Configuration errors come
from engine construction and registry mutation, serialization errors from
:py:meth:`tagcodec.engine.Engine.serialize`, and deserialization errors from
the tag-resolving walk of :py:meth:`tagcodec.engine.Engine.deserialize`.

Errors raised by the underlying codec (such as :py:class:`json.JSONDecodeError`
for malformed text) are not wrapped.
"""

__all__ = [
    'TagCodecError',
    'ConfigError',
    'MissingCapabilityError',
    'InvalidNameError',
    'DuplicateNameError',
    'NotFoundError',
    'SerializeError',
    'UnsupportedTypeError',
    'UnsupportedElementError',
    'UnknownRuntimeTypeError',
    'InvalidClassNameError',
    'MissingSerializerError',
    'NonStringPayloadError',
    'DeserializeError',
    'UnknownClassError',
    'MissingDeserializerError',
    'UnrecognizedShapeError',
]


class TagCodecError(Exception):
    """Base exception for tagcodec package errors.

    Users should be able to use this base class to catch errors
    emitted by tagcodec.
    """


class ConfigError(TagCodecError):
    """An engine could not be configured, or the type registry was misused."""


class MissingCapabilityError(ConfigError):
    """A required collaborator (codec function, namespace, type lookup) could not be resolved."""


class InvalidNameError(ConfigError):
    """A type name is missing or is not a valid class name."""


class DuplicateNameError(ConfigError):
    """A type name is already registered."""


class NotFoundError(ConfigError):
    """No type is registered under the requested name."""


class SerializeError(TagCodecError):
    """A value could not be serialized."""


class UnsupportedTypeError(SerializeError):
    """Callables and opaque token values are never serializable."""


class UnsupportedElementError(SerializeError):
    """A sequence element produced no output.

    Sequence positions are significant, so an element cannot be dropped.
    """


class UnknownRuntimeTypeError(SerializeError):
    """The value does not belong to any serializable category."""


class InvalidClassNameError(SerializeError):
    """An instance's type does not have a usable class name."""


class MissingSerializerError(SerializeError):
    """No serialize function could be found for an instance."""


class NonStringPayloadError(SerializeError):
    """A serialize function returned something other than a string."""


class DeserializeError(TagCodecError):
    """A decoded structure could not be reconstructed."""


class UnknownClassError(DeserializeError):
    """A tagged payload names a type that is neither registered nor ambient."""


class MissingDeserializerError(DeserializeError):
    """A tagged type has no deserialize function and cannot be constructed."""


class UnrecognizedShapeError(DeserializeError):
    """A mapping carries the class tag but does not have the tagged payload shape."""
