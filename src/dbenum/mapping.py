"""
Enum field mapping declarations.

A host record declares its enum fields as a mapping of field name to one of:

- a mapping spec string, ``'TypeIdentifier'`` or ``'TypeIdentifier:nullable'``
- an Enumerable class (non-nullable)
- an EnumField, usually built with ``nullable(EnumClass)``

Specs are parsed once into EnumField values when the host class is created.
The type identifier itself is resolved lazily on each use, so a mapping that
names a missing or non-Enumerable type only fails when the field is touched.

Type identifiers resolve in this order:

1. Class objects are used as-is
2. Names registered with register_enum()
3. Dotted import paths ``package.module.ClassName`` (when
   EnumOptions.resolve_imports is enabled)
"""
import importlib
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

import cachetools
from dbenum.enumerable import is_enumerable_class
from dbenum.exceptions import EnumConfigurationError
from dbenum.options import DEFAULT_OPTIONS, EnumOptions

__all__ = [
    'NULLABLE',
    'EnumField',
    'EnumMapping',
    'nullable',
    'parse_mapping_spec',
    'register_enum',
    'unregister_enum',
    'get_registered_enums',
    'resolve_enum_class',
    'clear_resolver_cache',
]

logger = logging.getLogger(__name__)

NULLABLE = 'nullable'
SEPARATOR = ':'

# Registry of identifier -> enum class
_ENUM_REGISTRY: dict[str, type] = {}

_import_cache = cachetools.LRUCache(maxsize=256)


@dataclass(frozen=True)
class EnumField:
    """Parsed enum field declaration.
    """
    name: str
    enum: str | type
    nullable: bool = False

    @property
    def identifier(self) -> str:
        """Printable type identifier for messages.
        """
        if isinstance(self.enum, type):
            return f'{self.enum.__module__}.{self.enum.__qualname__}'
        return self.enum

    def resolve(self, options: EnumOptions = DEFAULT_OPTIONS) -> type:
        return resolve_enum_class(self.enum, options)

    def is_null(self, value: Any) -> bool:
        """Check if value is an absent value this field is allowed to hold.
        """
        return self.nullable and value is None


def nullable(enum: str | type) -> EnumField:
    """Declare a nullable enum field.

    The field name is filled in when the declaring mapping is parsed.
    """
    return EnumField(name='', enum=enum, nullable=True)


def parse_mapping_spec(name: str, spec: Any) -> EnumField:
    """Parse a single mapping declaration into an EnumField.

    Only the exact suffix ``nullable`` marks a string spec nullable. Any other
    suffix (empty, different case, trailing whitespace) leaves the field
    non-nullable, so a typo never silently accepts None. A separator in the
    first position is not a separator: ``':nullable'`` is a bare identifier.
    """
    if isinstance(spec, EnumField):
        return EnumField(name=name, enum=spec.enum, nullable=spec.nullable)

    if isinstance(spec, type):
        return EnumField(name=name, enum=spec)

    if not isinstance(spec, str):
        raise EnumConfigurationError(
            f'Enum mapping for {name!r} must be a type identifier string, '
            f'a class or an EnumField, got {type(spec).__name__}')

    if spec.find(SEPARATOR) > 0:
        identifier, suffix = spec.split(SEPARATOR, 1)
        return EnumField(name=name, enum=identifier, nullable=suffix == NULLABLE)

    return EnumField(name=name, enum=spec)


class EnumMapping(Mapping[str, EnumField]):
    """Read-only mapping of field name -> EnumField for one host class.
    """

    def __init__(self, declaration: Mapping[str, Any] | None = None) -> None:
        self._fields = {
            name: parse_mapping_spec(name, spec)
            for name, spec in (declaration or {}).items()
        }

    def __getitem__(self, name: str) -> EnumField:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        specs = ', '.join(
            f'{name}={field.identifier}{":nullable" if field.nullable else ""}'
            for name, field in self._fields.items())
        return f'EnumMapping({specs})'


def register_enum(name: str | None = None):
    """Decorator to register an enum class under a type identifier.

    Usage:
        @register_enum()
        class StatusEnum(IndexedEnum):
            ...

        @register_enum('post_status')
        class PostStatus(IndexedEnum):
            ...
    """
    def decorator(cls: type) -> type:
        identifier = name or cls.__name__
        if SEPARATOR in identifier:
            raise EnumConfigurationError(
                f'Enum identifier {identifier!r} must not contain {SEPARATOR!r}')
        _ENUM_REGISTRY[identifier] = cls
        logger.debug(f'Registered enum {cls.__qualname__} as {identifier!r}')
        return cls
    return decorator


def unregister_enum(name: str) -> None:
    _ENUM_REGISTRY.pop(name, None)


def get_registered_enums() -> dict[str, type]:
    """Return a copy of the identifier -> class registry.
    """
    return dict(_ENUM_REGISTRY)


def _import_enum_class(path: str) -> type | None:
    """Import ``package.module.ClassName``, returning None when not found.

    Only successful lookups are memoized, so a path that becomes importable
    later (plugin path added, circular import finished) still resolves.
    """
    if path in _import_cache:
        return _import_cache[path]
    module_name, _, attr = path.rpartition('.')
    if not module_name:
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        logger.debug(f'Could not import module {module_name!r} for enum {path!r}: {e}')
        return None
    cls = getattr(module, attr, None)
    if cls is not None:
        _import_cache[path] = cls
    return cls


def clear_resolver_cache() -> None:
    """Forget memoized import-path resolutions.
    """
    _import_cache.clear()


def resolve_enum_class(identifier: str | type,
                       options: EnumOptions = DEFAULT_OPTIONS) -> type:
    """Resolve a type identifier to an Enumerable class.

    Raises EnumConfigurationError when the identifier names nothing or names
    a type that does not implement Enumerable.
    """
    if isinstance(identifier, type):
        cls = identifier
    else:
        cls = _ENUM_REGISTRY.get(identifier)
        if cls is None and options.resolve_imports:
            cls = _import_enum_class(identifier)
        if cls is None:
            raise EnumConfigurationError(f'Enum type {identifier!r} could not be resolved')
        logger.debug(f'Resolved enum identifier {identifier!r} to {cls!r}')

    if not is_enumerable_class(cls):
        raise EnumConfigurationError(
            f'Expected {getattr(cls, "__qualname__", cls)!r} to implement Enumerable '
            '(make, get_index, get_value)')
    return cls
