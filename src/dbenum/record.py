"""
Minimal persistent record host.

Record holds raw attribute storage and cast declarations, and routes Python
attribute syntax through get_attribute/set_attribute so mixins such as
HasEnums can intercept reads and writes:

    class Post(HasEnums, Record):
        table = posts
        casts = {'status_index': 'int'}
        enums = {'status': StatusEnum, 'status_index': 'StatusEnum'}

    post = Post(status='Published')
    post.status            # StatusEnum.Published
    post.attributes        # {'status': 'Published'}

Record does not persist anything. Rows come in through from_row() and go out
through get_attributes(); statements are built with query().

Fields named like a Record attribute (fill, query, table, casts, attributes,
...) are reserved for attribute syntax; reach them with get_attribute() and
set_attribute().
"""
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Self

import sqlalchemy as sa
from dbenum.casts import cast_value
from dbenum.casts import has_cast as _has_cast

from libb import attrdict

if TYPE_CHECKING:
    from dbenum.query import Query

__all__ = ['Record']


class Record:
    """Base class for records with raw attribute storage and casts.
    """

    casts: Mapping[str, str] = {}
    table: sa.Table | None = None

    def __init__(self, **attributes: Any) -> None:
        object.__setattr__(self, 'attributes', {})
        self.fill(**attributes)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Self:
        """Hydrate a record from a database row without coercion.
        """
        record = cls()
        record.set_raw_attributes(row)
        return record

    @classmethod
    def query(cls) -> 'Query':
        from dbenum.query import Query
        return Query(cls, cls.table)

    def fill(self, **attributes: Any) -> Self:
        for key, value in attributes.items():
            self.set_attribute(key, value)
        return self

    # Attribute access

    def get_attribute(self, key: str) -> Any:
        """Read an attribute, applying its declared cast.
        """
        return cast_value(self.get_casts().get(key), self.get_raw_attribute(key))

    def set_attribute(self, key: str, value: Any) -> Self:
        self.set_raw_attribute(key, value)
        return self

    def get_raw_attribute(self, key: str) -> Any:
        return self.attributes.get(key)

    def set_raw_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def set_raw_attributes(self, attributes: Mapping[str, Any]) -> None:
        self.attributes.clear()
        self.attributes.update(attributes)

    def get_attributes(self) -> dict[str, Any]:
        """Copy of the raw attribute storage, suitable for an insert.
        """
        return dict(self.attributes)

    # Casts

    def get_casts(self) -> Mapping[str, str]:
        return type(self).casts

    def has_cast(self, key: str, types: Iterable[str] | None = None) -> bool:
        return _has_cast(self.get_casts(), key, types)

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        return {key: self.get_attribute(key) for key in self.attributes}

    def to_attrdict(self) -> attrdict:
        return attrdict(self.to_dict())

    # Python attribute syntax

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_') or 'attributes' not in self.__dict__:
            raise AttributeError(name)
        return self.get_attribute(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith('_'):
            object.__setattr__(self, name, value)
            return
        if name == 'attributes' or hasattr(type(self), name):
            raise AttributeError(
                f'{name!r} is reserved by {type(self).__name__}, '
                f'use set_attribute({name!r}, value) for a field of that name')
        self.set_attribute(name, value)

    def __repr__(self) -> str:
        fields = ', '.join(f'{k}={v!r}' for k, v in self.attributes.items())
        return f'{type(self).__name__}({fields})'
