"""
Clause-level nodes: column definitions, constraints, joins, ordering,
conflict handling, common table expressions and friends.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from ..dialects.base import EnumSyntax, UpsertSyntax
from ..errors import precondition
from .base import Expression, Serializer, as_expression
from .basics import DataType, as_column
from .syntax import ExpressionList, Group, Literal, as_identifier


def _default_value(value: Any) -> Expression:
    if isinstance(value, bool):
        return Literal.boolean(value)
    if isinstance(value, (int, float)):
        return Literal.numeric(value)
    if isinstance(value, str):
        return Literal.string(value)
    return value


@dataclass(frozen=True)
class ColumnConstraint:
    """
    A constraint attached to one column definition.

    Use the constructors: ``primary_key()``, ``not_null()``, ``unique()``,
    ``check(expr)``, ``collate(name)``, ``default(value)``,
    ``references(table, column)``, ``generated(expr)`` and ``custom(expr)``.
    """

    kind: str
    expression: Optional[Expression] = None
    auto_increment: bool = False

    _KINDS = (
        "primary_key",
        "not_null",
        "unique",
        "check",
        "collate",
        "default",
        "foreign_key",
        "generated",
        "custom",
    )

    def __post_init__(self) -> None:
        precondition(self.kind in self._KINDS, f"Unknown column constraint '{self.kind}'")

    @classmethod
    def primary_key(cls, auto_increment: bool = True) -> "ColumnConstraint":
        return cls("primary_key", auto_increment=auto_increment)

    @classmethod
    def not_null(cls) -> "ColumnConstraint":
        return cls("not_null")

    @classmethod
    def unique(cls) -> "ColumnConstraint":
        return cls("unique")

    @classmethod
    def check(cls, expression: Expression) -> "ColumnConstraint":
        return cls("check", expression)

    @classmethod
    def collate(cls, name: str | Expression) -> "ColumnConstraint":
        return cls("collate", as_identifier(name))

    @classmethod
    def default(cls, value: Any) -> "ColumnConstraint":
        return cls("default", _default_value(value))

    @classmethod
    def references(
        cls,
        table: str | Expression,
        column: str | Expression,
        *,
        on_delete: Optional[Expression] = None,
        on_update: Optional[Expression] = None,
    ) -> "ColumnConstraint":
        return cls(
            "foreign_key",
            ForeignKey(table, [column], on_delete=on_delete, on_update=on_update),
        )

    @classmethod
    def generated(cls, expression: Expression) -> "ColumnConstraint":
        return cls("generated", expression)

    @classmethod
    def custom(cls, expression: str | Expression) -> "ColumnConstraint":
        return cls("custom", as_expression(expression))

    def serialize(self, serializer: Serializer) -> None:
        if self.kind == "primary_key":
            self._serialize_primary_key(serializer)
        elif self.kind == "not_null":
            serializer.write("NOT NULL")
        elif self.kind == "unique":
            serializer.write("UNIQUE")
        elif self.kind == "check":
            serializer.write("CHECK ")
            Group(self.expression).serialize(serializer)
        elif self.kind == "collate":
            serializer.write("COLLATE ")
            self.expression.serialize(serializer)
        elif self.kind == "default":
            serializer.write("DEFAULT ")
            self.expression.serialize(serializer)
        elif self.kind == "generated":
            serializer.write("GENERATED ALWAYS AS ")
            Group(self.expression).serialize(serializer)
            serializer.write(" STORED")
        else:
            self.expression.serialize(serializer)

    def _serialize_primary_key(self, serializer: Serializer) -> None:
        dialect = serializer.dialect
        if not self.auto_increment:
            serializer.write("PRIMARY KEY")
        elif not dialect.supports_auto_increment:
            serializer.logger.warning("%s does not support auto-increment; skipping", dialect.name)
            serializer.write("PRIMARY KEY")
        elif dialect.auto_increment_function is not None:
            serializer.write(
                f"{dialect.literal_default} {dialect.auto_increment_function} PRIMARY KEY"
            )
        else:
            serializer.write(f"PRIMARY KEY {dialect.auto_increment_clause}")


@dataclass(frozen=True)
class TableConstraint:
    """
    A constraint spanning one or more columns of a table.
    """

    kind: str
    columns: Sequence[str | Expression] = ()
    expression: Optional[Expression] = None

    def __post_init__(self) -> None:
        precondition(
            self.kind in ("primary_key", "unique", "check", "foreign_key"),
            f"Unknown table constraint '{self.kind}'",
        )
        object.__setattr__(self, "columns", tuple(as_identifier(c) for c in self.columns))

    @classmethod
    def primary_key(cls, *columns: str | Expression) -> "TableConstraint":
        return cls("primary_key", columns)

    @classmethod
    def unique(cls, *columns: str | Expression) -> "TableConstraint":
        return cls("unique", columns)

    @classmethod
    def check(cls, expression: Expression) -> "TableConstraint":
        return cls("check", expression=expression)

    @classmethod
    def foreign_key(
        cls, columns: Sequence[str | Expression], references: "ForeignKey"
    ) -> "TableConstraint":
        return cls("foreign_key", columns, references)

    def serialize(self, serializer: Serializer) -> None:
        if self.kind == "primary_key":
            serializer.write("PRIMARY KEY ")
            Group(self.columns).serialize(serializer)
        elif self.kind == "unique":
            serializer.write("UNIQUE ")
            Group(self.columns).serialize(serializer)
        elif self.kind == "check":
            serializer.write("CHECK ")
            Group(self.expression).serialize(serializer)
        else:
            serializer.write("FOREIGN KEY ")
            Group(self.columns).serialize(serializer)
            serializer.write(" ")
            self.expression.serialize(serializer)


@dataclass(frozen=True)
class ForeignKey:
    """
    ``REFERENCES table (columns) [ON DELETE action] [ON UPDATE action]``.
    """

    table: str | Expression
    columns: Sequence[str | Expression]
    on_delete: Optional[Expression] = None
    on_update: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))
        object.__setattr__(self, "columns", tuple(as_identifier(c) for c in self.columns))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append("REFERENCES", self.table, Group(self.columns))
            stmt.append_clause("ON DELETE", self.on_delete)
            stmt.append_clause("ON UPDATE", self.on_update)


@dataclass(frozen=True)
class ColumnDefinition:
    column: str | Expression
    data_type: DataType | Expression
    constraints: Sequence[Expression] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "column", as_identifier(self.column))
        object.__setattr__(self, "constraints", tuple(self.constraints))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.column, self.data_type)
            if self.constraints:
                stmt.append(ExpressionList(self.constraints, separator=" "))


@dataclass(frozen=True)
class AlterColumnType:
    """
    A new type for an existing column, used by ``AlterTable.modify_columns``.
    """

    column: str | Expression
    data_type: DataType | Expression

    def __post_init__(self) -> None:
        object.__setattr__(self, "column", as_identifier(self.column))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.column)
            stmt.append(stmt.dialect.alter_table_syntax.alter_column_definition_type_keyword)
            stmt.append(self.data_type)


@dataclass(frozen=True)
class EnumDataType:
    """
    An inline enumeration type. Falls back to ``TEXT`` where inline enums are
    not available.
    """

    cases: Sequence[str | Expression]

    def __post_init__(self) -> None:
        cases = tuple(Literal.string(c) if isinstance(c, str) else c for c in self.cases)
        object.__setattr__(self, "cases", cases)

    def serialize(self, serializer: Serializer) -> None:
        syntax = serializer.dialect.enum_syntax
        if syntax is EnumSyntax.INLINE:
            serializer.write("ENUM")
            Group(self.cases).serialize(serializer)
            return
        if syntax is EnumSyntax.TYPE_NAME:
            serializer.logger.warning(
                "Inline enum types are not intended for %s; use CreateEnum and a named type instead.",
                serializer.dialect.name,
            )
        DataType.TEXT.serialize(serializer)


class DropBehavior(Enum):
    RESTRICT = "RESTRICT"
    CASCADE = "CASCADE"

    def serialize(self, serializer: Serializer) -> None:
        serializer.write(self.value)


class JoinMethod(Enum):
    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    def serialize(self, serializer: Serializer) -> None:
        serializer.write(self.value)


@dataclass(frozen=True)
class Join:
    method: JoinMethod | Expression
    table: str | Expression
    expression: Expression

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.method, "JOIN", self.table)
            stmt.append_clause("ON", self.expression)


class LockingClause(Enum):
    """
    Row-locking request on a SELECT. Dropped on dialects without locks.
    """

    UPDATE = "update"
    SHARE = "share"

    def serialize(self, serializer: Serializer) -> None:
        dialect = serializer.dialect
        if self is LockingClause.SHARE:
            clause = dialect.shared_select_lock
        else:
            clause = dialect.exclusive_select_lock
        if clause is not None:
            serializer.write(clause)


@dataclass(frozen=True)
class OrderBy:
    expression: str | Expression
    direction: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "expression", as_column(self.expression))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.expression, self.direction)


@dataclass(frozen=True)
class Returning:
    columns: Sequence[str | Expression]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(as_column(c) for c in self.columns))

    def serialize(self, serializer: Serializer) -> None:
        if not self.columns:
            return
        if not serializer.dialect.supports_returning:
            serializer.logger.warning(
                "%s does not support RETURNING; clause dropped", serializer.dialect.name
            )
            return
        with serializer.statement() as stmt:
            stmt.append("RETURNING", ExpressionList(self.columns))


@dataclass(frozen=True)
class Subquery:
    """
    A SELECT wrapped in parentheses for use as a value or table.
    """

    query: Expression

    def serialize(self, serializer: Serializer) -> None:
        Group(self.query).serialize(serializer)


@dataclass(frozen=True)
class UnionSubquery:
    query: Expression

    def serialize(self, serializer: Serializer) -> None:
        Group(self.query).serialize(serializer)


@dataclass(frozen=True)
class CommonTableExpression:
    """
    ``alias [(columns)] AS (query)`` inside a ``WITH`` group.
    """

    alias: str | Expression
    query: Expression
    columns: Sequence[str | Expression] = ()
    recursive: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "alias", as_identifier(self.alias))
        object.__setattr__(self, "columns", tuple(as_identifier(c) for c in self.columns))

    def serialize(self, serializer: Serializer) -> None:
        query = self.query
        if not isinstance(query, (Subquery, UnionSubquery, Group)):
            query = Group(query)
        with serializer.statement() as stmt:
            stmt.append(self.alias)
            if self.columns:
                stmt.append(Group(self.columns))
            stmt.append("AS", query)


@dataclass(frozen=True)
class CommonTableExpressionGroup:
    """
    ``WITH [RECURSIVE] cte, ...``; renders nothing when empty.
    """

    table_expressions: Sequence[Expression]

    def __post_init__(self) -> None:
        object.__setattr__(self, "table_expressions", tuple(self.table_expressions))

    def serialize(self, serializer: Serializer) -> None:
        if not self.table_expressions:
            return
        recursive = any(
            isinstance(cte, CommonTableExpression) and cte.recursive
            for cte in self.table_expressions
        )
        with serializer.statement() as stmt:
            stmt.append("WITH")
            if recursive:
                stmt.append("RECURSIVE")
            stmt.append(ExpressionList(self.table_expressions))


@dataclass(frozen=True)
class ConflictAction:
    """
    What an upsert does on conflict: nothing, or update the listed
    assignments (optionally filtered by ``predicate``).
    """

    assignments: Optional[Sequence[Expression]] = None
    predicate: Optional[Expression] = None

    def __post_init__(self) -> None:
        if self.assignments is not None:
            object.__setattr__(self, "assignments", tuple(self.assignments))

    @classmethod
    def no_action(cls) -> "ConflictAction":
        return cls()

    @classmethod
    def update(
        cls, assignments: Sequence[Expression], predicate: Optional[Expression] = None
    ) -> "ConflictAction":
        return cls(tuple(assignments), predicate)

    @property
    def is_update(self) -> bool:
        return self.assignments is not None


class InsertModifier:
    """
    The ``IGNORE`` in MySQL's ``INSERT IGNORE INTO``.
    """

    def serialize(self, serializer: Serializer) -> None:
        serializer.write("IGNORE")


@dataclass(frozen=True)
class ConflictStrategy:
    """
    Upsert policy attached to an INSERT.

    Rendered at two points: ``query_modifier`` supplies the early token after
    ``INSERT`` and ``serialize`` renders the trailing conflict clause.
    """

    targets: Sequence[str | Expression]
    action: ConflictAction = ConflictAction()

    def __post_init__(self) -> None:
        object.__setattr__(self, "targets", tuple(as_column(t) for t in self.targets))

    def query_modifier(self, serializer: Serializer) -> Optional[Expression]:
        if serializer.dialect.upsert_syntax is UpsertSyntax.MYSQL_LIKE and not self.action.is_update:
            return InsertModifier()
        return None

    def serialize(self, serializer: Serializer) -> None:
        syntax = serializer.dialect.upsert_syntax
        action = self.action
        if syntax is UpsertSyntax.UNSUPPORTED:
            serializer.logger.warning(
                "%s does not support upserts; conflict clause dropped", serializer.dialect.name
            )
            return
        if action.is_update:
            precondition(
                bool(action.assignments),
                "An update conflict action needs at least one assignment; use no_action() instead.",
            )
        if syntax is UpsertSyntax.MYSQL_LIKE:
            if action.is_update:
                with serializer.statement() as stmt:
                    stmt.append("ON DUPLICATE KEY UPDATE", ExpressionList(action.assignments))
            return
        with serializer.statement() as stmt:
            stmt.append("ON CONFLICT")
            if self.targets:
                stmt.append(Group(self.targets))
            if action.is_update:
                stmt.append("DO UPDATE SET", ExpressionList(action.assignments))
                stmt.append_clause("WHERE", action.predicate)
            else:
                stmt.append("DO NOTHING")
