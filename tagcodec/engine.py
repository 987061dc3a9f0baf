"""Provide serialization and deserialization of registered class instances.

The :py:class:`Engine` layers a class-tagging convention on top of an
underlying text codec. Plain data (scalars, dicts, lists) keeps the native
representation of the codec. Instances of other classes are converted to tagged
mappings (see :py:mod:`tagcodec.tags`) on the way out and reconstructed through
the type registry on the way in.

Serialization is done in two steps. The value is first converted to a plain
structure of built-in objects, then the structure is passed to the codec's
*encode* function once. Deserialization reverses the steps: the codec's
*decode* function produces a plain structure, which is then walked to replace
tagged mappings with reconstructed instances.
"""
from __future__ import annotations

__all__ = ['Engine']

import collections.abc
import inspect
import logging
import typing
import warnings

from tagcodec.classify import Category
from tagcodec.classify import classify
from tagcodec.classify import to_builtin
from tagcodec.exceptions import InvalidClassNameError
from tagcodec.exceptions import MissingDeserializerError
from tagcodec.exceptions import MissingSerializerError
from tagcodec.exceptions import NonStringPayloadError
from tagcodec.exceptions import UnknownClassError
from tagcodec.exceptions import UnknownRuntimeTypeError
from tagcodec.exceptions import UnsupportedElementError
from tagcodec.exceptions import UnsupportedTypeError
from tagcodec.registry import ResolutionChain
from tagcodec.registry import TypeRegistry
from tagcodec.tags import TaggedPayload
from tagcodec.tags import is_tagged
from tagcodec.tags import make_tag
from tagcodec.tags import read_tag
from tagcodec.utils import MISSING
from tagcodec.utils import class_name_of
from tagcodec.utils import is_valid_class_name

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

T = typing.TypeVar('T')


def _instance_serializer(value) -> typing.Optional[typing.Callable[[], typing.Any]]:
    """Get the bound ``serialize()`` method of an instance, if it has one.

    A ``serialize`` defined as a staticmethod or classmethod belongs to the
    type, and is found through the resolution chain instead.
    """
    static = inspect.getattr_static(value, 'serialize', None)
    if static is None or isinstance(static, (staticmethod, classmethod)):
        return None
    method = getattr(value, 'serialize', None)
    if callable(method):
        return method
    return None


class Engine:
    """Serialize and deserialize values, including instances of registered types.

    Usually created with :py:func:`tagcodec.create`.

    Args:
        encode: underlying codec function producing text from plain data.
        decode: underlying codec function producing plain data from text.
        get_type: look up the type associated with a value.
        namespace: ambient name look-up, consulted after the registry.
        registry: the type registry, or a mapping to back a new registry.

    Absent values (:py:data:`tagcodec.MISSING`) are treated differently
    depending on where they occur. As a dict value, the key is silently
    dropped from the output. As a list or tuple element, UnsupportedElementError
    is raised, because dropping an element would shift the positions of the
    others. The dropped key is not restored by deserialization.

    Recursion follows the nesting of the value. Circular references are not
    detected and end in RecursionError.
    """

    def __init__(self, *,
                 encode: typing.Callable[[typing.Any], str],
                 decode: typing.Callable[[str], typing.Any],
                 get_type: typing.Callable[[typing.Any], typing.Any] = type,
                 namespace: typing.Mapping[str, typing.Any] = None,
                 registry: typing.Union[TypeRegistry, typing.MutableMapping[str, typing.Any]] = None):
        self._encode = encode
        self._decode = decode
        self._get_type = get_type
        if namespace is None:
            namespace = {}
        self._namespace = namespace
        if not isinstance(registry, TypeRegistry):
            registry = TypeRegistry(registry)
        self._registry = registry
        self._chain = ResolutionChain.standard(self._registry, self._namespace)

    @property
    def classes(self) -> typing.Mapping[str, typing.Any]:
        """Read-only view of the registered types."""
        return self._registry.view()

    @property
    def resolution_chain(self) -> typing.Tuple[str, ...]:
        """Names of the tiers searched for serialize/deserialize functions, in order."""
        return self._chain.tiers

    def add_class(self, type_, name: str = None) -> None:
        """Register *type_* for deserialization, under *name* or its ``__name__``.

        Instances of a class registered under *name* are tagged with *name*.

        Raises:
            InvalidNameError, DuplicateNameError
        """
        self._registry.add(type_, name)

    def remove_class(self, name) -> None:
        """Remove a registered type.

        *name* is a string, an object with a *name* attribute, or a class.

        Raises:
            InvalidNameError, NotFoundError
        """
        self._registry.remove(name)

    @typing.overload
    def register(self, type_: T, /, *, name: str = None) -> T:
        ...

    @typing.overload
    def register(self, *, name: str) -> typing.Callable[[T], T]:
        ...

    def register(self, *args, name: str = None):
        """Register and return a class.

        May be used as a decorator, with or without the *name* argument::

            @engine.register
            class Point: ...

            @engine.register(name='geometry.Point')
            class Point: ...
        """
        if len(args) > 1:
            raise TypeError('Wrong number of positional arguments. Expected zero or one.')

        def wrap(type_):
            self.add_class(type_, name)
            return type_

        if len(args) == 1:
            # Assume we were called as a regular decorator.
            return wrap(args[0])
        # Assume we were called as a parameterized decorator (with parentheses).
        return wrap

    def serialize(self, value) -> str:
        """Produce the text representation of *value*.

        An absent value produces an empty string.

        Errors from the underlying codec are not caught. The default JsonCodec
        raises ValueError for NaN and infinite floats.

        Raises:
            SerializeError if *value*, or anything nested in it, cannot be serialized.
            ValueError from the default codec for a non-finite float.
        """
        structure = self.encode(value)
        if structure is MISSING:
            return ''
        return self._encode(structure)

    def deserialize(self, text):
        """Reconstruct a value from its text representation.

        Errors from the underlying codec (such as for malformed text) are not caught.

        Raises:
            DeserializeError if a tagged mapping cannot be reconstructed.
        """
        return self.decode(self._decode(text))

    def encode(self, value):
        """Convert *value* to a structure of plain, codec-ready Python objects.

        Returns MISSING if the value is absent.
        """
        category = classify(value, self._get_type)
        if category is Category.ABSENT:
            return MISSING
        elif category.is_scalar:
            return to_builtin(value)
        elif category is Category.TOKEN:
            raise UnsupportedTypeError(f'Token values cannot be serialized. {value!r}')
        elif category is Category.CALLABLE:
            label = getattr(value, '__qualname__', None) or getattr(value, '__name__', None) or repr(value)
            raise UnsupportedTypeError(f'Callable cannot be serialized. {label}')
        elif category is Category.MAPPING:
            return self._encode_mapping(value)
        elif category is Category.SEQUENCE:
            return self._encode_sequence(value)
        elif category is Category.INSTANCE:
            return self._encode_instance(value)
        else:
            assert category is Category.UNKNOWN
            raise UnknownRuntimeTypeError(f'Unknown type. {type(value).__name__}')

    def decode(self, data):
        """Replace tagged mappings in a decoded structure with reconstructed instances.

        Dicts and lists are updated in place. The (possibly replaced) root is returned.
        """
        if isinstance(data, dict):
            if is_tagged(data):
                return self._instantiate(read_tag(data))
            for key, value in list(data.items()):
                if isinstance(key, str):
                    data[key] = self.decode(value)
            return data
        if isinstance(data, list):
            for index, value in enumerate(data):
                data[index] = self.decode(value)
            return data
        return data

    def _encode_mapping(self, obj) -> dict:
        if isinstance(obj, collections.abc.Mapping):
            items = obj.items()
        elif hasattr(obj, '__dict__'):
            # Own attributes of an object that the type lookup reports as a plain mapping.
            items = vars(obj).items()
        else:
            raise UnknownRuntimeTypeError(f'Cannot enumerate the members of {obj!r}.')
        encoded = {}
        for key, value in items:
            if not isinstance(key, str):
                warnings.warn(f'Skipping non-string key {key!r}.', stacklevel=4)
                continue
            member = self.encode(value)
            if member is not MISSING:
                encoded[key] = member
        return encoded

    def _encode_sequence(self, obj) -> list:
        encoded = []
        for index, value in enumerate(obj):
            element = self.encode(value)
            if element is MISSING:
                raise UnsupportedElementError(f'Sequence cannot contain an absent value (index {index}).')
            encoded.append(element)
        return encoded

    def _encode_instance(self, obj) -> dict:
        obj_type = self._get_type(obj)
        # A type registered under an explicit name is tagged with that name.
        name = self._registry.name_of(obj_type) or class_name_of(obj_type)
        if not is_valid_class_name(name):
            raise InvalidClassNameError(f'A valid class name is required to serialize {obj!r}. Got {name!r}.')

        method = _instance_serializer(obj)
        if method is not None:
            payload = method()
        else:
            serializer = self._chain.resolve(obj_type, name, 'serialize')
            if serializer is None:
                raise MissingSerializerError(
                    f'{name}.serialize() or a registered serialize function must be provided to serialize {name}.')
            payload = serializer(obj)
        if not isinstance(payload, str):
            raise NonStringPayloadError(f'serialize for {name} must return str. Got {type(payload).__name__}.')
        return make_tag(name, payload)

    def _lookup(self, name: str):
        if name in self._registry:
            return self._registry[name]
        if name in self._namespace:
            return self._namespace[name]
        raise UnknownClassError(f'Could not find {name!r} class.')

    def _instantiate(self, tag: TaggedPayload):
        entry = self._lookup(tag.name)
        deserializer = self._chain.resolve(entry, tag.name, 'deserialize')
        if deserializer is not None:
            return deserializer(tag.payload)
        if callable(entry):
            logger.debug(f'Constructing {tag.name} from its payload.')
            return entry(tag.payload)
        raise MissingDeserializerError(f'A deserialize function must be provided for {tag.name!r}.')

    def __repr__(self):
        return f'{self.__class__.__name__}(classes={list(self._registry)!r})'
