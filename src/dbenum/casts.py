"""
Attribute cast declarations.

A host record declares casts as a mapping of field name -> cast name. Casts
are applied when an attribute is read, and they decide which projection of
an enum is stored: integer casts store the index, every other cast (or no
cast) stores the value.

Cast names are case-insensitive. Unknown cast names leave values untouched.
"""
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

__all__ = [
    'CASTERS',
    'cast_value',
    'has_cast',
    'is_primitive',
]


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {'1', 'true', 't', 'yes', 'y', 'on'}
    return bool(value)


CASTERS: dict[str, Callable[[Any], Any]] = {
    'int': int,
    'integer': int,
    'float': float,
    'double': float,
    'real': float,
    'str': str,
    'string': str,
    'bool': _to_bool,
    'boolean': _to_bool,
}


def _normalize(cast: str | None) -> str | None:
    return cast.strip().lower() if isinstance(cast, str) else None


def has_cast(casts: Mapping[str, str], key: str,
             types: Iterable[str] | None = None) -> bool:
    """Check if key has a cast, optionally restricted to the given cast names.
    """
    cast = _normalize(casts.get(key))
    if cast is None:
        return False
    if types is None:
        return True
    return cast in {_normalize(t) for t in types}


def cast_value(cast: str | None, value: Any) -> Any:
    """Apply a cast to a raw attribute value.

    None is never cast. Enum members and other non-primitive values pass
    through so a cast cannot clobber an already materialized object.
    """
    if value is None:
        return None
    caster = CASTERS.get(_normalize(cast))
    if caster is None or not isinstance(value, int | float | str):
        return value
    try:
        return caster(value)
    except (TypeError, ValueError):
        logger.debug(f'Could not cast {value!r} with {cast!r}, returning raw value')
        return value


def is_primitive(value: Any) -> bool:
    """Check if value is a storage primitive an enum factory accepts.

    bool is excluded even though it subclasses int.
    """
    return isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool))
