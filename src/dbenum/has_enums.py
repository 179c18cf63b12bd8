"""
Enum attribute adapter.

HasEnums composes into a host record and exposes declared fields as
Enumerable members while storing them as primitives. Reads materialize a
member from the stored primitive, writes store either the member index (for
integer-cast fields) or its value (for everything else).

The host must provide:

- get_attribute(key) / set_attribute(key, value): generic accessors
  (HasEnums overrides both and calls the host's through super())
- set_raw_attribute(key, value): write to raw storage
- has_cast(key, types): cast declaration lookup

Record implements all of them. Mix HasEnums in before the host so its
overrides win:

    class Post(HasEnums, Record):
        casts = {'priority': 'int'}
        enums = {
            'status': StatusEnum,
            'priority': 'PriorityEnum',
            'category': 'app.enums.CategoryEnum:nullable',
        }

Query scopes normalize enum candidates into stored primitives before they
reach the builder:

    Post.query().where_enum('status', [StatusEnum.Draft, 'Published'])
"""
import logging
from collections.abc import Mapping
from typing import Any, Self

from dbenum.casts import is_primitive
from dbenum.enumerable import Enumerable
from dbenum.exceptions import InvalidEnumError, NoSuchEnumField
from dbenum.exceptions import NotNullableError
from dbenum.mapping import EnumField, EnumMapping
from dbenum.options import DEFAULT_OPTIONS, EnumOptions

from libb import isiterable

__all__ = ['HasEnums']

logger = logging.getLogger(__name__)


class HasEnums:
    """Mixin adding enum coercion to a host record.
    """

    enums: Mapping[str, Any] = {}
    enum_options: EnumOptions = DEFAULT_OPTIONS

    _enum_fields: EnumMapping = EnumMapping()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._enum_fields = EnumMapping(cls.enums)

    # Accessors

    def get_attribute(self, key: str) -> Any:
        value = super().get_attribute(key)
        if self.is_enum_attribute(key):
            return self.get_enum_attribute(key, value)
        return value

    def set_attribute(self, key: str, value: Any) -> Self:
        if self.is_enum_attribute(key):
            return self.set_enum_attribute(key, value)
        return super().set_attribute(key, value)

    # Query scopes

    def scope_where_enum(self, builder: Any, key: str, enumerables: Any) -> Any:
        """Constrain key to the given enums, see builder.where_in().
        """
        return self._build_enum_scope(builder, 'where_in', key, enumerables)

    def scope_or_where_enum(self, builder: Any, key: str, enumerables: Any) -> Any:
        """OR-constrain key to the given enums, see builder.or_where_in().
        """
        return self._build_enum_scope(builder, 'or_where_in', key, enumerables)

    def scope_where_not_enum(self, builder: Any, key: str, enumerables: Any) -> Any:
        """Exclude the given enums for key, see builder.where_not_in().
        """
        return self._build_enum_scope(builder, 'where_not_in', key, enumerables)

    def scope_or_where_not_enum(self, builder: Any, key: str, enumerables: Any) -> Any:
        """OR-exclude the given enums for key, see builder.or_where_not_in().
        """
        return self._build_enum_scope(builder, 'or_where_not_in', key, enumerables)

    # Mapping lookups

    def is_enum_attribute(self, key: str) -> bool:
        return key in self._enum_fields

    def get_enum_field(self, key: str) -> EnumField:
        return self._enum_fields[key]

    def get_enum_class(self, key: str) -> type:
        """Resolve the declared enum class for key.

        Raises EnumConfigurationError if the declared type cannot be found or
        does not implement Enumerable.
        """
        return self.get_enum_field(key).resolve(self.enum_options)

    def is_nullable_enum(self, key: str, value: Any) -> bool:
        """Check if key is declared nullable and value is None.
        """
        return self.get_enum_field(key).is_null(value)

    # Coercion

    def get_enum_attribute(self, key: str, value: Any) -> Enumerable | None:
        if self.is_nullable_enum(key, value):
            return value
        return self.as_enum(self.get_enum_class(key), value)

    def set_enum_attribute(self, key: str, value: Any) -> Self:
        enum_class = self.get_enum_class(key)

        # nullable None leaves storage untouched
        if self.is_nullable_enum(key, value):
            return self

        if is_primitive(value):
            value = self.as_enum(enum_class, value)

        if value is None:
            raise NotNullableError(
                f'{enum_class.__name__} field {type(self).__name__}.{key} is not nullable')

        if not isinstance(value, enum_class):
            raise InvalidEnumError(type(self).__name__, key, enum_class, type(value))

        self.set_raw_attribute(key, self.get_stored_value(key, value))
        return self

    def get_stored_value(self, key: str, enum: Enumerable) -> int | str:
        """Storage primitive for enum: the index for integer casts, else the value.
        """
        if self.has_cast(key, self.enum_options.integer_casts):
            return enum.get_index()
        return enum.get_value()

    @staticmethod
    def as_enum(enum_class: type, value: Any) -> Enumerable:
        if isinstance(value, Enumerable):
            return value
        return enum_class.make(value)

    def _build_enum_scope(self, builder: Any, method: str, key: str,
                          enumerables: Any) -> Any:
        if not self.is_enum_attribute(key):
            raise NoSuchEnumField(key, type(self).__name__)

        if not isiterable(enumerables) or isinstance(enumerables, str):
            enumerables = [enumerables]

        values = [self._scope_value(key, value) for value in enumerables]
        logger.debug(f'{type(self).__name__}.{key} {method} {values!r}')
        return getattr(builder, method)(key, values)

    def _scope_value(self, key: str, value: Any) -> int | str | None:
        """Primitive that is stored for value, None for a nullable None.
        """
        enum = self.get_enum_attribute(key, value)
        if enum is None:
            return None
        enum_class = self.get_enum_class(key)
        if not isinstance(enum, enum_class):
            raise InvalidEnumError(type(self).__name__, key, enum_class, type(enum))
        return self.get_stored_value(key, enum)
