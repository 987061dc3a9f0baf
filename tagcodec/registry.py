"""Type registry and serializer/deserializer look-up.

The registry maps type names to *descriptors*. A descriptor is normally the
class itself, but any object is accepted. For instance, an object providing only
``serialize`` and ``deserialize`` functions can be registered under the name of
a class that it does not own.

Serialize/deserialize functions are located with a :py:class:`ResolutionChain`.
The tiers are checked in order:

    1. the descriptor itself;
    2. the registry entry with the same name (the "context");
    3. the ambient namespace entry with the same name.

This allows a type to be supplemented with (de)serialization behavior without
modifying the type.
"""
from __future__ import annotations

__all__ = ['TypeRegistry', 'ResolutionChain', 'Tier']

import collections.abc
import inspect
import logging
import types
import typing

from tagcodec.exceptions import DuplicateNameError
from tagcodec.exceptions import InvalidNameError
from tagcodec.exceptions import NotFoundError
from tagcodec.utils import class_name_of
from tagcodec.utils import is_valid_class_name

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


class TypeRegistry(collections.abc.Mapping):
    """Registered types for one engine, keyed by name.

    The registry keeps no data of its own beyond the backing *context* mapping,
    which is updated in place. Look-up is by exact name only.

    Not thread-safe. Hosts must not mutate the registry while another thread
    is serializing or deserializing with the same engine.
    """

    def __init__(self, context: typing.MutableMapping[str, typing.Any] = None):
        if context is None:
            context = dict()
        self._context = context

    def add(self, type_, name: str = None) -> str:
        """Register *type_* under *name*, or under its intrinsic name.

        Returns:
            The name used for the registration.

        Raises:
            InvalidNameError if no valid name can be determined.
            DuplicateNameError if the name is already registered.
        """
        if name is None:
            name = class_name_of(type_)
        if not is_valid_class_name(name):
            raise InvalidNameError(f'A valid name must be provided to register {type_!r}. Got {name!r}.')
        if name in self._context:
            raise DuplicateNameError(f'{name!r} already exists in context.')
        self._context[name] = type_
        logger.debug(f'Registered {type_!r} as {name!r}.')
        return name

    def remove(self, name) -> None:
        """Remove the registration for *name*.

        *name* may be a string, an object with a ``name`` attribute, or a class
        (identified by its ``__name__``).

        Raises:
            InvalidNameError if *name* does not identify a valid class name.
            NotFoundError if nothing is registered under the name.
        """
        if not isinstance(name, str):
            attr = getattr(name, 'name', None)
            name = attr if isinstance(attr, str) else class_name_of(name)
        if not is_valid_class_name(name):
            raise InvalidNameError(f'A valid class name must be provided. Got {name!r}.')
        if name not in self._context:
            raise NotFoundError(f'{name!r} does not exist.')
        del self._context[name]
        logger.debug(f'Removed registration for {name!r}.')

    def name_of(self, type_) -> typing.Optional[str]:
        """Get the first name under which *type_* itself is registered, if any."""
        for name, entry in self._context.items():
            if entry is type_:
                return name
        return None

    def names(self) -> typing.Tuple[str, ...]:
        return tuple(self._context)

    def view(self) -> typing.Mapping[str, typing.Any]:
        """Get a read-only view of the registered descriptors."""
        return types.MappingProxyType(self._context)

    def __getitem__(self, name: str):
        return self._context[name]

    def __iter__(self):
        return iter(self._context)

    def __len__(self) -> int:
        return len(self._context)

    def __repr__(self):
        return f'{self.__class__.__name__}({list(self._context)!r})'


class Tier(typing.NamedTuple):
    """One step of a resolution chain.

    *lookup* is called with ``(descriptor, name)`` and returns the object to
    inspect for the requested function, or None to skip the tier.
    """
    name: str
    lookup: typing.Callable[[typing.Any, str], typing.Any]


class ResolutionChain:
    """Ordered look-up of serialize/deserialize functions.

    The chain is fixed when it is created. Inspect it through :py:attr:`tiers`.
    """

    def __init__(self, tiers: typing.Iterable[Tier]):
        self._tiers = tuple(tiers)

    @classmethod
    def standard(cls,
                 registry: typing.Mapping[str, typing.Any],
                 namespace: typing.Mapping[str, typing.Any]) -> 'ResolutionChain':
        """Build the descriptor, context, ambient chain used by the engine."""
        return cls((
            Tier('descriptor', lambda descriptor, name: descriptor),
            Tier('context', lambda descriptor, name: registry.get(name)),
            Tier('ambient', lambda descriptor, name: namespace.get(name)),
        ))

    @property
    def tiers(self) -> typing.Tuple[str, ...]:
        return tuple(tier.name for tier in self._tiers)

    def resolve(self, descriptor, name: str, attribute: str) -> typing.Optional[typing.Callable]:
        """Find the first callable *attribute* along the chain, or None."""
        for tier in self._tiers:
            source = tier.lookup(descriptor, name)
            if source is None:
                continue
            function = getattr(source, attribute, None)
            if not callable(function):
                continue
            if inspect.isclass(source) and inspect.isfunction(inspect.getattr_static(source, attribute, None)):
                # An instance method needs an instance; only static and class methods qualify.
                continue
            logger.debug(f'Resolved {attribute} for {name!r} from the {tier.name} tier.')
            return function
        return None

    def __repr__(self):
        return f'{self.__class__.__name__}({self.tiers!r})'
