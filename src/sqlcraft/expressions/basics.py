"""
Basic building blocks shared by queries and clauses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Sequence, Tuple

from ..dialects.base import UpsertSyntax
from ..errors import precondition
from .base import Expression, Serializer, as_expression
from .syntax import Function, Group, Literal, as_identifier, as_value


def as_column(part: Any) -> Expression:
    if isinstance(part, str):
        return Column(part)
    return part


@dataclass(frozen=True)
class Column:
    """
    A column reference, optionally qualified by its table: ``"users"."id"``.

    ``Column("*")`` renders an unquoted ``*``.
    """

    name: str | Expression
    table: str | Expression | None = None

    def __post_init__(self) -> None:
        if self.name == "*":
            object.__setattr__(self, "name", Literal.all())
        else:
            object.__setattr__(self, "name", as_identifier(self.name))
        if self.table is not None:
            object.__setattr__(self, "table", as_identifier(self.table))

    def serialize(self, serializer: Serializer) -> None:
        if self.table is not None:
            self.table.serialize(serializer)
            serializer.write(".")
        self.name.serialize(serializer)


@dataclass(frozen=True)
class QualifiedTable:
    """
    A table optionally qualified by its schema: ``"public"."users"``.
    """

    table: str | Expression
    space: str | Expression | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))
        if self.space is not None:
            object.__setattr__(self, "space", as_identifier(self.space))

    def serialize(self, serializer: Serializer) -> None:
        if self.space is not None:
            self.space.serialize(serializer)
            serializer.write(".")
        self.table.serialize(serializer)


@dataclass(frozen=True)
class Alias:
    expression: Expression
    alias: str | Expression

    def __post_init__(self) -> None:
        object.__setattr__(self, "alias", as_identifier(self.alias))

    def serialize(self, serializer: Serializer) -> None:
        self.expression.serialize(serializer)
        serializer.write(" AS ")
        self.alias.serialize(serializer)


@dataclass(frozen=True)
class Between:
    """
    ``operand BETWEEN lower AND upper``; a string operand names a column and
    non-expression bounds are bound.
    """

    operand: Any
    lower_bound: Any
    upper_bound: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "operand", as_column(self.operand))
        object.__setattr__(self, "lower_bound", as_value(self.lower_bound))
        object.__setattr__(self, "upper_bound", as_value(self.upper_bound))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.operand)
            stmt.append("BETWEEN", self.lower_bound)
            stmt.append("AND", self.upper_bound)


@dataclass(frozen=True)
class Constraint:
    """
    A column or table constraint, optionally named with ``CONSTRAINT name``.
    """

    algorithm: Expression
    name: str | Expression | None = None

    def __post_init__(self) -> None:
        if self.name is not None:
            object.__setattr__(self, "name", as_identifier(self.name))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            if self.name is not None:
                stmt.append("CONSTRAINT", stmt.dialect.normalize_constraint(self.name))
            stmt.append(self.algorithm)


@dataclass(frozen=True)
class DataType:
    """
    A column data type. Dialects may override how any of these render.
    """

    kind: str
    custom: Optional[Expression] = None

    SMALLINT: ClassVar["DataType"]
    INT: ClassVar["DataType"]
    BIGINT: ClassVar["DataType"]
    REAL: ClassVar["DataType"]
    TEXT: ClassVar["DataType"]
    BLOB: ClassVar["DataType"]
    TIMESTAMP: ClassVar["DataType"]

    _BUILTIN = {
        "smallint": "SMALLINT",
        "int": "INTEGER",
        "bigint": "BIGINT",
        "real": "REAL",
        "text": "TEXT",
        "blob": "BLOB",
    }

    def __post_init__(self) -> None:
        if self.kind == "custom":
            precondition(self.custom is not None, "A custom data type needs an expression")
        else:
            precondition(self.kind in self._BUILTIN, f"Unknown data type '{self.kind}'")

    @classmethod
    def of(cls, expression: str | Expression) -> "DataType":
        return cls("custom", as_expression(expression))

    @classmethod
    def enum(cls, *cases: str | Expression) -> "DataType":
        from .clauses import EnumDataType

        return cls.of(EnumDataType(cases))

    def serialize(self, serializer: Serializer) -> None:
        override = serializer.dialect.custom_data_type(self)
        if override is not None:
            override.serialize(serializer)
        elif self.custom is not None:
            self.custom.serialize(serializer)
        else:
            serializer.write(self._BUILTIN[self.kind])


DataType.SMALLINT = DataType("smallint")
DataType.INT = DataType("int")
DataType.BIGINT = DataType("bigint")
DataType.REAL = DataType("real")
DataType.TEXT = DataType("text")
DataType.BLOB = DataType("blob")
DataType.TIMESTAMP = DataType.of("TIMESTAMP")


class Direction(Enum):
    ASCENDING = "ASC"
    DESCENDING = "DESC"
    NULL = "NULL"
    NOT_NULL = "NOT NULL"

    def serialize(self, serializer: Serializer) -> None:
        serializer.write(self.value)


class ForeignKeyAction(Enum):
    NO_ACTION = "NO ACTION"
    RESTRICT = "RESTRICT"
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"

    def serialize(self, serializer: Serializer) -> None:
        serializer.write(self.value)


@dataclass(frozen=True)
class Distinct:
    """
    ``DISTINCT (a, b)``; renders nothing when there are no arguments.
    """

    args: Sequence[str | Expression] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(as_identifier(arg) for arg in self.args))

    @classmethod
    def all(cls) -> "Distinct":
        return cls((Literal.all(),))

    def serialize(self, serializer: Serializer) -> None:
        if not self.args:
            return
        with serializer.statement() as stmt:
            stmt.append("DISTINCT", Group(self.args))


@dataclass(frozen=True)
class NestedSubpath:
    """
    Access to a nested JSON value inside a column, rendered by the dialect.

    Dialects without JSON subpath support contribute nothing.
    """

    column: str | Expression
    path: Sequence[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "column", as_identifier(self.column))
        object.__setattr__(self, "path", tuple(self.path))

    def serialize(self, serializer: Serializer) -> None:
        precondition(bool(self.path), "A nested subpath must contain at least one path element.")
        expression = serializer.dialect.nested_subpath_expression(self.column, self.path)
        if expression is not None:
            expression.serialize(serializer)


@dataclass(frozen=True)
class Case:
    """
    ``CASE [expression] WHEN c THEN r ... [ELSE alternative] END``.
    """

    cases: Sequence[Tuple[Expression, Expression]]
    expression: Optional[Expression] = None
    alternative: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "cases", tuple(tuple(case) for case in self.cases))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append("CASE", self.expression)
            for condition, result in self.cases:
                stmt.append("WHEN", condition, "THEN", result)
            if self.alternative is not None:
                stmt.append("ELSE", self.alternative)
            stmt.append("END")


@dataclass(frozen=True)
class ExcludedColumn:
    """
    The value a conflicting insert tried to write to ``name``.
    """

    name: str | Expression

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_column(self.name))

    def serialize(self, serializer: Serializer) -> None:
        syntax = serializer.dialect.upsert_syntax
        if syntax is UpsertSyntax.STANDARD:
            serializer.write("EXCLUDED.")
            self.name.serialize(serializer)
        elif syntax is UpsertSyntax.MYSQL_LIKE:
            Function("VALUES", (self.name,)).serialize(serializer)


@dataclass(frozen=True)
class ColumnAssignment:
    """
    ``column = value`` as used by ``UPDATE ... SET`` and upserts. Values that
    are not expressions are bound.
    """

    column: str | Expression
    value: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "column", as_column(self.column))
        object.__setattr__(self, "value", as_value(self.value))

    @classmethod
    def excluded(cls, column: str | Expression) -> "ColumnAssignment":
        return cls(column, ExcludedColumn(column))

    def serialize(self, serializer: Serializer) -> None:
        self.column.serialize(serializer)
        # always a plain "=" here; comparison operators may differ per dialect
        serializer.write(" = ")
        self.value.serialize(serializer)
