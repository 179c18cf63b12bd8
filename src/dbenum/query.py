"""
Predicate-list query builder over SQLAlchemy Core.

Query collects where clauses for one record type and compiles them onto a
``sqlalchemy.select()`` of the record's table. Clauses combine with SQL
precedence: consecutive AND clauses form a group and OR starts a new group,
so ``where_in(a).where_in(b).or_where_in(c)`` means ``(a AND b) OR c``.

Attribute access falls back to the record's query scopes, so a scope method
``scope_where_enum(self, builder, key, values)`` is reachable as
``Query.where_enum(key, values)``.

Query builds statements only; executing them is up to the caller:

    with engine.connect() as cn:
        rows = cn.execute(Post.query().where_enum('status', 'Draft').statement)
"""
import logging
from collections.abc import Iterable
from typing import Any, Self

import sqlalchemy as sa

__all__ = ['Query']

logger = logging.getLogger(__name__)

AND = 'and'
OR = 'or'


class Query:
    """Builder of list predicates for a record's table.
    """

    def __init__(self, model: type, table: sa.Table | None = None) -> None:
        table = table if table is not None else getattr(model, 'table', None)
        if table is None:
            raise ValueError(f'{model.__name__} has no table to query')
        self.model = model
        self.table = table
        self.wheres: list[tuple[str, sa.ColumnElement]] = []

    def column(self, key: str) -> sa.ColumnElement:
        try:
            return self.table.c[key]
        except KeyError:
            raise ValueError(f'Table {self.table.name} has no column {key!r}') from None

    # Predicates

    def where(self, key: str, value: Any) -> Self:
        return self._add_where(AND, self._equals(key, value))

    def or_where(self, key: str, value: Any) -> Self:
        return self._add_where(OR, self._equals(key, value))

    def where_in(self, key: str, values: Iterable[Any]) -> Self:
        return self._add_where(AND, self._in(key, values))

    def or_where_in(self, key: str, values: Iterable[Any]) -> Self:
        return self._add_where(OR, self._in(key, values))

    def where_not_in(self, key: str, values: Iterable[Any]) -> Self:
        return self._add_where(AND, sa.not_(self._in(key, values)))

    def or_where_not_in(self, key: str, values: Iterable[Any]) -> Self:
        return self._add_where(OR, sa.not_(self._in(key, values)))

    # Compilation

    @property
    def criterion(self) -> sa.ColumnElement | None:
        """Combined where criterion, None when no clause was added.
        """
        if not self.wheres:
            return None
        groups: list[list[sa.ColumnElement]] = [[]]
        for boolean, clause in self.wheres:
            if boolean == OR and groups[-1]:
                groups.append([])
            groups[-1].append(clause)
        return sa.or_(*(sa.and_(*group) for group in groups))

    @property
    def statement(self) -> sa.Select:
        stmt = sa.select(self.table)
        criterion = self.criterion
        if criterion is not None:
            stmt = stmt.where(criterion)
        return stmt

    def __str__(self) -> str:
        return str(self.statement)

    # Scopes

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_') or 'model' not in self.__dict__:
            raise AttributeError(name)
        scope = getattr(self.model, f'scope_{name}', None)
        if scope is None:
            raise AttributeError(f'{type(self).__name__} has no attribute or scope {name!r}')

        def apply(*args: Any, **kwargs: Any) -> Self:
            scope(self.model(), self, *args, **kwargs)
            return self
        return apply

    def _add_where(self, boolean: str, clause: sa.ColumnElement) -> Self:
        self.wheres.append((boolean, clause))
        return self

    def _equals(self, key: str, value: Any) -> sa.ColumnElement:
        column = self.column(key)
        return column.is_(None) if value is None else column == value

    def _in(self, key: str, values: Iterable[Any]) -> sa.ColumnElement:
        values = list(values)
        column = self.column(key)
        present = [v for v in values if v is not None]
        clause = column.in_(present)
        if len(present) < len(values):
            clause = sa.or_(clause, column.is_(None))
        logger.debug(f'{self.table.name}.{key} IN {values!r}')
        return clause
