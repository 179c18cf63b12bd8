"""
Enum attributes for database records.

Records declare which fields hold enums; HasEnums exposes those fields as
Enumerable members while storing them as integers or strings:

- Reads materialize a member from the stored primitive
- Writes accept members or primitives and store the index (integer casts)
  or the value (everything else)
- Query scopes normalize enum candidates into stored primitives
"""
__version__ = '0.1.0'

from dbenum.enumerable import Enumerable, IndexedEnum
from dbenum.exceptions import EnumConfigurationError, EnumError
from dbenum.exceptions import EnumValidationError, InvalidEnumError
from dbenum.exceptions import NoSuchEnumField, NotNullableError
from dbenum.has_enums import HasEnums
from dbenum.mapping import EnumField, EnumMapping, nullable, register_enum
from dbenum.mapping import resolve_enum_class, unregister_enum
from dbenum.options import EnumOptions
from dbenum.query import Query
from dbenum.record import Record
from dbenum.validation import EnumIndexRule, EnumRule, EnumValueRule
from dbenum.validation import transform_enums

__all__ = [
    'Enumerable',
    'IndexedEnum',
    'HasEnums',
    'Record',
    'Query',
    'EnumOptions',
    'EnumField',
    'EnumMapping',
    'nullable',
    'register_enum',
    'unregister_enum',
    'resolve_enum_class',
    'EnumRule',
    'EnumIndexRule',
    'EnumValueRule',
    'transform_enums',
    'EnumError',
    'EnumConfigurationError',
    'NotNullableError',
    'InvalidEnumError',
    'NoSuchEnumField',
    'EnumValidationError',
]
