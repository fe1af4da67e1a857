"""
Data manipulation statements: SELECT, INSERT, UPDATE, DELETE and set
operations between SELECTs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from ..dialects.base import UnionFeature
from ..expressions.base import Expression, Serializer, Statement
from ..expressions.basics import as_column
from ..expressions.clauses import CommonTableExpressionGroup, ConflictStrategy, Returning
from ..expressions.syntax import ExpressionList, Group, Literal, as_identifier, as_value


def _append_limit_offset(stmt: Statement, limit: Optional[int], offset: Optional[int]) -> None:
    if limit is not None:
        stmt.append("LIMIT", Literal.numeric(limit))
    elif offset is not None and stmt.dialect.offset_without_limit is not None:
        stmt.append("LIMIT", stmt.dialect.offset_without_limit)
    if offset is not None:
        stmt.append("OFFSET", Literal.numeric(offset))


def _append_list(stmt: Statement, keyword: str, items: Sequence[Expression]) -> None:
    if items:
        stmt.append_clause(keyword, ExpressionList(items))


@dataclass(frozen=True)
class Select:
    """
    ``SELECT [DISTINCT] columns [FROM tables] [joins] [WHERE ...] [GROUP BY ...]
    [HAVING ...] [ORDER BY ...] [LIMIT n] [OFFSET n] [lock]``.

    Clauses backed by empty data are left out entirely.
    """

    columns: Sequence[str | Expression] = ()
    tables: Sequence[str | Expression] = ()
    distinct: bool = False
    joins: Sequence[Expression] = ()
    predicate: Optional[Expression] = None
    group_by: Sequence[str | Expression] = ()
    having: Optional[Expression] = None
    order_by: Sequence[Expression] = ()
    limit: Optional[int] = None
    offset: Optional[int] = None
    locking_clause: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(as_column(c) for c in self.columns))
        object.__setattr__(self, "tables", tuple(as_identifier(t) for t in self.tables))
        object.__setattr__(self, "joins", tuple(self.joins))
        object.__setattr__(self, "group_by", tuple(as_column(c) for c in self.group_by))
        object.__setattr__(self, "order_by", tuple(self.order_by))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append("SELECT")
            if self.distinct:
                stmt.append("DISTINCT")
            stmt.append(ExpressionList(self.columns))
            _append_list(stmt, "FROM", self.tables)
            stmt.append(ExpressionList(self.joins, separator=" "))
            stmt.append_clause("WHERE", self.predicate)
            _append_list(stmt, "GROUP BY", self.group_by)
            stmt.append_clause("HAVING", self.having)
            _append_list(stmt, "ORDER BY", self.order_by)
            _append_limit_offset(stmt, self.limit, self.offset)
            stmt.append(self.locking_clause)


@dataclass(frozen=True)
class Insert:
    """
    ``INSERT [modifier] INTO table (columns) VALUES (...), ... [conflict]
    [RETURNING ...]``, or ``INSERT ... INTO table (columns) <query>``.

    Row values that are not expressions are bound.
    """

    table: str | Expression
    columns: Sequence[str | Expression] = ()
    values: Sequence[Sequence[Any]] = ()
    value_query: Optional[Expression] = None
    conflict_strategy: Optional[ConflictStrategy] = None
    returning: Optional[Returning] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))
        object.__setattr__(self, "columns", tuple(as_identifier(c) for c in self.columns))
        rows = tuple(tuple(as_value(value) for value in row) for row in self.values)
        object.__setattr__(self, "values", rows)

    def serialize(self, serializer: Serializer) -> None:
        strategy = self.conflict_strategy
        with serializer.statement() as stmt:
            stmt.append("INSERT")
            if strategy is not None:
                stmt.append(strategy.query_modifier(serializer))
            stmt.append("INTO", self.table)
            if self.columns:
                stmt.append(Group(self.columns))
            if self.values:
                stmt.append("VALUES", ExpressionList([Group(row) for row in self.values]))
            elif self.value_query is not None:
                stmt.append(self.value_query)
            stmt.append(strategy)
            stmt.append(self.returning)


@dataclass(frozen=True)
class Update:
    """
    ``[WITH ...] UPDATE table SET assignments [WHERE ...] [RETURNING ...]``.
    """

    table: str | Expression
    values: Sequence[Expression] = ()
    predicate: Optional[Expression] = None
    returning: Optional[Returning] = None
    table_expression_group: Optional[CommonTableExpressionGroup] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))
        object.__setattr__(self, "values", tuple(self.values))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.table_expression_group)
            stmt.append("UPDATE", self.table)
            _append_list(stmt, "SET", self.values)
            stmt.append_clause("WHERE", self.predicate)
            stmt.append(self.returning)


@dataclass(frozen=True)
class Delete:
    """
    ``[WITH ...] DELETE FROM table [WHERE ...] [RETURNING ...]``.

    Without a predicate every row is deleted.
    """

    table: str | Expression
    predicate: Optional[Expression] = None
    returning: Optional[Returning] = None
    table_expression_group: Optional[CommonTableExpressionGroup] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.table_expression_group)
            stmt.append("DELETE FROM", self.table)
            stmt.append_clause("WHERE", self.predicate)
            stmt.append(self.returning)


class UnionType(Enum):
    UNION = "union"
    UNION_ALL = "union_all"
    INTERSECT = "intersect"
    INTERSECT_ALL = "intersect_all"
    EXCEPT = "except"
    EXCEPT_ALL = "except_all"


# keyword, required feature, whether duplicates are removed
_JOINER_SYNTAX = {
    UnionType.UNION: ("UNION", UnionFeature.UNION, True),
    UnionType.UNION_ALL: ("UNION", UnionFeature.UNION_ALL, False),
    UnionType.INTERSECT: ("INTERSECT", UnionFeature.INTERSECT, True),
    UnionType.INTERSECT_ALL: ("INTERSECT", UnionFeature.INTERSECT_ALL, False),
    UnionType.EXCEPT: ("EXCEPT", UnionFeature.EXCEPT, True),
    UnionType.EXCEPT_ALL: ("EXCEPT", UnionFeature.EXCEPT_ALL, False),
}


@dataclass(frozen=True)
class UnionJoiner:
    """
    The set operator between two SELECTs. Operators the dialect lacks are
    dropped with a warning, leaving the database to reject the query.
    """

    type: UnionType

    def serialize(self, serializer: Serializer) -> None:
        keyword, feature, uniqued = _JOINER_SYNTAX[self.type]
        features = serializer.dialect.union_features
        if feature not in features:
            serializer.logger.warning(
                "The %s dialect does not support %s%s.",
                serializer.dialect.name,
                keyword,
                "" if uniqued else " ALL",
            )
            return
        with serializer.statement() as stmt:
            stmt.append(keyword)
            if not uniqued:
                stmt.append("ALL")
            elif UnionFeature.EXPLICIT_DISTINCT in features:
                stmt.append("DISTINCT")


@dataclass(frozen=True)
class Union:
    """
    ``[WITH ...] select (joiner select)* [ORDER BY ...] [LIMIT n] [OFFSET n]``.

    With no further selects this renders exactly the initial select; the
    union's own ordering, limit and offset are only emitted alongside a joiner.
    """

    initial_query: Select
    unions: Sequence[Tuple[UnionJoiner, Select]] = ()
    order_by: Sequence[Expression] = ()
    limit: Optional[int] = None
    offset: Optional[int] = None
    table_expression_group: Optional[CommonTableExpressionGroup] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unions", tuple(tuple(pair) for pair in self.unions))
        object.__setattr__(self, "order_by", tuple(self.order_by))

    def add(self, query: Select, *, distinct: bool = True) -> "Union":
        """
        Return a new union with ``query`` appended by ``UNION``, or by
        ``UNION ALL`` when ``distinct`` is false.
        """
        joiner = UnionJoiner(UnionType.UNION if distinct else UnionType.UNION_ALL)
        return self.add_joined(query, joiner)

    def add_joined(self, query: Select, joiner: UnionJoiner) -> "Union":
        return Union(
            self.initial_query,
            self.unions + ((joiner, query),),
            order_by=self.order_by,
            limit=self.limit,
            offset=self.offset,
            table_expression_group=self.table_expression_group,
        )

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.table_expression_group)
            if not self.unions:
                stmt.append(self.initial_query)
                return
            parenthesize = UnionFeature.PARENTHESIZED_SUBQUERIES in stmt.dialect.union_features
            stmt.append(Group(self.initial_query) if parenthesize else self.initial_query)
            for joiner, query in self.unions:
                stmt.append(joiner, Group(query) if parenthesize else query)
            _append_list(stmt, "ORDER BY", self.order_by)
            _append_limit_offset(stmt, self.limit, self.offset)
