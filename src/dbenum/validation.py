"""
Validation rules and payload transformation for enum input.

Rules answer whether a raw input names a member of an enum type, without
raising, so they can sit in front of HasEnums writes:

    rule = EnumValueRule(StatusEnum)
    rule.passes('status', 'Published')      # True
    rule.validate('status', 'Nope')         # raises EnumValidationError

transform_enums() turns the enum fields of an incoming payload (query string,
form or JSON body) into members in one pass.
"""
import logging
from collections.abc import Mapping
from typing import Any

from dbenum.casts import is_primitive
from dbenum.enumerable import Enumerable
from dbenum.exceptions import EnumValidationError, InvalidEnumError
from dbenum.exceptions import NotNullableError
from dbenum.mapping import EnumField, parse_mapping_spec

__all__ = [
    'EnumRule',
    'EnumIndexRule',
    'EnumValueRule',
    'transform_enums',
]

logger = logging.getLogger(__name__)

# Errors an Enumerable factory raises for an unrecognized primitive
FACTORY_ERRORS = (ValueError, TypeError, LookupError)


class EnumRule:
    """Passes when the enum factory accepts the value (index, value or name).

    Rules hold no per-call state, so one instance can guard several fields.
    """

    description = 'a valid'

    def __init__(self, enum: type) -> None:
        self.enum = enum

    def passes(self, attribute: str, value: Any) -> bool:
        return self._make(value) is not None

    def message(self, attribute: str) -> str:
        return f'The {attribute} field is not {self.description} {self.enum.__name__}.'

    def validate(self, attribute: str, value: Any) -> None:
        if not self.passes(attribute, value):
            raise EnumValidationError(attribute, self.message(attribute))

    def _make(self, value: Any) -> Any:
        if not is_primitive(value):
            return value if isinstance(value, self.enum) else None
        try:
            return self.enum.make(value)
        except FACTORY_ERRORS as e:
            logger.debug(f'{self.enum.__name__} rejected {value!r}: {e}')
            return None

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.enum.__name__})'


class EnumIndexRule(EnumRule):
    """Passes when value is an integer index of the enum.
    """

    description = 'a valid index of'

    def passes(self, attribute: str, value: Any) -> bool:
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        enum = self._make(value)
        return enum is not None and enum.get_index() == value


class EnumValueRule(EnumRule):
    """Passes when value is the symbolic value of a member.
    """

    description = 'a valid value of'

    def passes(self, attribute: str, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        enum = self._make(value)
        return enum is not None and enum.get_value() == value


def transform_enums(data: Mapping[str, Any],
                    transformations: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of data with the listed keys made into enum members.

    transformations maps key -> enum declaration, in any form an ``enums``
    mapping accepts (class, ``'Identifier[:nullable]'`` or EnumField). Keys
    missing from data are skipped. None is kept for nullable declarations and
    rejected otherwise. A member of a different Enumerable class raises
    InvalidEnumError; unrecognized primitives raise from the factory.
    """
    result = dict(data)
    for key, spec in transformations.items():
        if key not in result:
            continue
        field: EnumField = parse_mapping_spec(key, spec)
        value = result[key]
        if field.is_null(value):
            continue
        enum_class = field.resolve()
        if value is None:
            raise NotNullableError(f'{enum_class.__name__} field {key} is not nullable')
        if isinstance(value, Enumerable) and not isinstance(value, enum_class):
            raise InvalidEnumError('payload', key, enum_class, type(value))
        result[key] = value if isinstance(value, enum_class) else enum_class.make(value)
    return result
