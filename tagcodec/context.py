"""Assemble an Engine from supplied or ambient collaborators.

An engine needs an ambient namespace, a codec (*encode* and *decode*), and a
type look-up function. Each of these is resolved by trying an ordered tuple of
resolver functions, so the resolution order is plain data that can be checked
directly. The first resolver to produce a value wins.

There is no module-level default engine. Call :py:func:`create` once and pass
the engine to the code that needs it.
"""
from __future__ import annotations

__all__ = ['create', 'ambient_namespace', 'CAPABILITY_RESOLVERS']

import builtins
import collections.abc
import logging
import typing

from tagcodec.codec import Codec
from tagcodec.codec import JsonCodec
from tagcodec.engine import Engine
from tagcodec.exceptions import MissingCapabilityError

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

AMBIENT_CODEC_NAME = 'JSON'

Options = typing.Mapping[str, typing.Any]
Resolver = typing.Callable[[Options, typing.Mapping[str, typing.Any]], typing.Any]


# Built-in classes that describe or wrap other objects instead of holding a value.
_EXCLUDED_BUILTINS = frozenset({'type', 'object', 'super', 'memoryview', 'property', 'staticmethod', 'classmethod'})


def ambient_namespace() -> typing.Dict[str, typing.Any]:
    """Get a new default ambient namespace.

    Contains the built-in value classes and the default codec under the name
    ``JSON``. Built-in functions such as *eval* and *open* are left out, as are
    exceptions and classes like *type*, *object* and *super*. A tag name can
    only ever select a class that is constructed from a value.

    The namespace has no ``type`` entry, so :py:func:`create` falls back to the
    built-in :py:class:`type` for type look-up.
    """
    namespace = {name: obj for name, obj in vars(builtins).items()
                 if isinstance(obj, type)
                 and not issubclass(obj, BaseException)
                 and name not in _EXCLUDED_BUILTINS}
    namespace[AMBIENT_CODEC_NAME] = JsonCodec()
    return namespace


def _from_option(key: str) -> Resolver:
    def resolver(options, namespace):
        return options.get(key)
    return resolver


def _from_option_codec(attribute: str) -> Resolver:
    def resolver(options, namespace):
        return getattr(options.get('codec'), attribute, None)
    return resolver


def _from_ambient_codec(attribute: str) -> Resolver:
    def resolver(options, namespace):
        return getattr(namespace.get(AMBIENT_CODEC_NAME), attribute, None)
    return resolver


def _from_ambient(name: str) -> Resolver:
    def resolver(options, namespace):
        return namespace.get(name)
    return resolver


def _from_builtins(name: str) -> Resolver:
    def resolver(options, namespace):
        return getattr(builtins, name, None)
    return resolver


CAPABILITY_RESOLVERS: typing.Mapping[str, typing.Tuple[Resolver, ...]] = {
    'encode': (_from_option('encode'), _from_option_codec('encode'), _from_ambient_codec('encode')),
    'decode': (_from_option('decode'), _from_option_codec('decode'), _from_ambient_codec('decode')),
    'get_type': (_from_option('get_type'), _from_ambient('type'), _from_builtins('type')),
}
"""Resolution order for each callable capability of an Engine."""


def _resolve(capability: str, options: Options, namespace: typing.Mapping[str, typing.Any]) -> typing.Callable:
    value = None
    for resolver in CAPABILITY_RESOLVERS[capability]:
        value = resolver(options, namespace)
        if value is not None:
            break
    if not callable(value):
        raise MissingCapabilityError(f'{capability!r} must be provided.')
    return value


def create(*,
           namespace: typing.Mapping[str, typing.Any] = None,
           context: typing.MutableMapping[str, typing.Any] = None,
           codec: Codec = None,
           encode: typing.Callable[[typing.Any], str] = None,
           decode: typing.Callable[[str], typing.Any] = None,
           get_type: typing.Callable[[typing.Any], typing.Any] = None) -> Engine:
    """Create a new Engine.

    Args:
        namespace: ambient name look-up. Defaults to :py:func:`ambient_namespace`.
        context: backing store for the type registry. Defaults to a new, empty dict.
        codec: object providing *encode* and *decode*.
        encode: codec function. Takes precedence over *codec*.
        decode: codec function. Takes precedence over *codec*.
        get_type: type look-up function. Defaults to the ambient ``type``, then the built-in one.

    Raises:
        MissingCapabilityError if a required collaborator cannot be resolved.
    """
    if namespace is None:
        namespace = ambient_namespace()
    if not isinstance(namespace, collections.abc.Mapping):
        raise MissingCapabilityError("'namespace' must be a mapping.")
    if context is None:
        context = dict()

    options = dict(codec=codec, encode=encode, decode=decode, get_type=get_type)
    resolved = {capability: _resolve(capability, options, namespace) for capability in CAPABILITY_RESOLVERS}

    engine = Engine(namespace=namespace, registry=context, **resolved)
    logger.info(f'Created {engine!r}.')
    return engine
