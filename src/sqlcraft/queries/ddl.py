"""
Data definition statements for tables, indexes and named enum types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..dialects.base import EnumSyntax
from ..expressions.base import Expression, Serializer
from ..expressions.basics import as_column
from ..expressions.syntax import ExpressionList, Group, Literal, Raw, as_identifier

# Used when a dialect has no column modification syntax so the database rejects the statement.
_FALLBACK_ALTER_CLAUSE = "ALTER COLUMN"


def _identifiers(items: Sequence[str | Expression]) -> Tuple[Expression, ...]:
    return tuple(as_identifier(item) for item in items)


@dataclass(frozen=True)
class CreateTable:
    """
    ``CREATE [TEMPORARY] TABLE [IF NOT EXISTS] name (columns, constraints)``
    or ``CREATE TABLE name AS query``.

    A single space separates the table name from its definition group:
    ``CREATE TABLE "t" ("id" INTEGER)``.
    """

    table: str | Expression
    columns: Sequence[Expression] = ()
    table_constraints: Sequence[Expression] = ()
    temporary: bool = False
    if_not_exists: bool = False
    as_query: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "table_constraints", tuple(self.table_constraints))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append("CREATE")
            if self.temporary:
                stmt.append("TEMPORARY")
            stmt.append("TABLE")
            if self.if_not_exists:
                if stmt.dialect.supports_if_exists:
                    stmt.append("IF NOT EXISTS")
                else:
                    stmt.logger.warning("%s does not support IF NOT EXISTS", stmt.dialect.name)
            stmt.append(self.table)
            definitions = self.columns + self.table_constraints
            if definitions:
                stmt.append(Group(definitions))
            stmt.append_clause("AS", self.as_query)


@dataclass(frozen=True)
class AlterTable:
    """
    ``ALTER TABLE name [RENAME TO new] [ADD ..., DROP ..., MODIFY ...]``.

    Additions come first, then removals, then column modifications, joined
    with ``", "``: ``ALTER TABLE "t" ADD "a" INTEGER, DROP "b"``. Dropped
    table constraints render as ``DROP CONSTRAINT name``. Dialects
    that only take one alteration per statement still get every alteration;
    a warning is logged and the database reports the failure. Without a
    dialect modification clause, modified columns fall back to
    ``ALTER COLUMN`` and a warning is logged.
    """

    table: str | Expression
    rename_to: str | Expression | None = None
    add_columns: Sequence[Expression] = ()
    modify_columns: Sequence[Expression] = ()
    drop_columns: Sequence[str | Expression] = ()
    add_table_constraints: Sequence[Expression] = ()
    drop_table_constraints: Sequence[str | Expression] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))
        if self.rename_to is not None:
            object.__setattr__(self, "rename_to", as_identifier(self.rename_to))
        object.__setattr__(self, "add_columns", tuple(self.add_columns))
        object.__setattr__(self, "modify_columns", tuple(self.modify_columns))
        object.__setattr__(self, "drop_columns", _identifiers(self.drop_columns))
        object.__setattr__(self, "add_table_constraints", tuple(self.add_table_constraints))
        object.__setattr__(self, "drop_table_constraints", _identifiers(self.drop_table_constraints))

    def alterations(self, serializer: Serializer) -> List[Tuple[str, Expression]]:
        syntax = serializer.dialect.alter_table_syntax
        modify = syntax.alter_column_definition_clause or _FALLBACK_ALTER_CLAUSE
        result: List[Tuple[str, Expression]] = []
        result.extend(("ADD", item) for item in self.add_columns + self.add_table_constraints)
        result.extend(("DROP", item) for item in self.drop_columns)
        result.extend(
            ("DROP CONSTRAINT", serializer.dialect.normalize_constraint(item))
            for item in self.drop_table_constraints
        )
        result.extend((modify, item) for item in self.modify_columns)
        return result

    def serialize(self, serializer: Serializer) -> None:
        syntax = serializer.dialect.alter_table_syntax
        alterations = self.alterations(serializer)
        if not syntax.allows_batch and len(alterations) > 1:
            serializer.logger.warning(
                "%s does not support multiple alterations per ALTER TABLE; "
                "issue one statement per alteration instead.",
                serializer.dialect.name,
            )
        if syntax.alter_column_definition_clause is None and self.modify_columns:
            serializer.logger.warning(
                "%s does not support column modifications.", serializer.dialect.name
            )
        with serializer.statement() as stmt:
            stmt.append("ALTER TABLE", self.table)
            stmt.append_clause("RENAME TO", self.rename_to)
            stmt.append(ExpressionList([_Alteration(verb, item) for verb, item in alterations]))


@dataclass(frozen=True)
class _Alteration:
    verb: str
    definition: Expression

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.verb, self.definition)


@dataclass(frozen=True)
class DropTable:
    """
    ``DROP [TEMPORARY] TABLE [IF EXISTS] name [behavior]``.
    """

    table: str | Expression
    if_exists: bool = False
    behavior: Optional[Expression] = None
    temporary: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", as_identifier(self.table))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append("DROP")
            if self.temporary:
                stmt.append("TEMPORARY")
            stmt.append("TABLE")
            if self.if_exists and stmt.dialect.supports_if_exists:
                stmt.append("IF EXISTS")
            stmt.append(self.table)
            if stmt.dialect.supports_drop_behavior:
                stmt.append(self.behavior)


class IndexModifier:
    UNIQUE = Raw("UNIQUE")


@dataclass(frozen=True)
class CreateIndex:
    """
    ``CREATE [UNIQUE] INDEX name ON table (columns) [WHERE predicate]``.

    The index name is always emitted; every supported database requires it.
    """

    name: str | Expression
    table: str | Expression
    columns: Sequence[str | Expression] = ()
    modifier: Optional[Expression] = None
    predicate: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_identifier(self.name))
        object.__setattr__(self, "table", as_identifier(self.table))
        object.__setattr__(self, "columns", tuple(as_column(c) for c in self.columns))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append("CREATE", self.modifier, "INDEX", self.name)
            stmt.append("ON", self.table, Group(self.columns))
            stmt.append_clause("WHERE", self.predicate)


@dataclass(frozen=True)
class DropIndex:
    """
    ``DROP INDEX [IF EXISTS] name [ON table] [behavior]``.
    """

    name: str | Expression
    if_exists: bool = False
    owning_object: str | Expression | None = None
    behavior: Optional[Expression] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_identifier(self.name))
        if self.owning_object is not None:
            object.__setattr__(self, "owning_object", as_identifier(self.owning_object))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append("DROP INDEX")
            if self.if_exists and stmt.dialect.supports_if_exists:
                stmt.append("IF EXISTS")
            stmt.append(self.name)
            stmt.append_clause("ON", self.owning_object)
            if stmt.dialect.supports_drop_behavior:
                stmt.append(self.behavior)


def _warn_unless_named_enums(serializer: Serializer, statement: str) -> None:
    if serializer.dialect.enum_syntax is not EnumSyntax.TYPE_NAME:
        serializer.logger.warning(
            "%s does not support named enum types; %s emitted anyway.",
            serializer.dialect.name,
            statement,
        )


def _enum_value(value: str | Expression) -> Expression:
    return Literal.string(value) if isinstance(value, str) else value


@dataclass(frozen=True)
class CreateEnum:
    """
    ``CREATE TYPE name AS ENUM ('a', 'b')``.
    """

    name: str | Expression
    values: Sequence[str | Expression]

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_identifier(self.name))
        object.__setattr__(self, "values", tuple(_enum_value(v) for v in self.values))

    def serialize(self, serializer: Serializer) -> None:
        _warn_unless_named_enums(serializer, "CREATE TYPE")
        with serializer.statement() as stmt:
            stmt.append("CREATE TYPE", self.name)
            stmt.append("AS ENUM", Group(self.values))


@dataclass(frozen=True)
class AlterEnum:
    name: str | Expression
    value: str | Expression | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_identifier(self.name))
        if self.value is not None:
            object.__setattr__(self, "value", _enum_value(self.value))

    def serialize(self, serializer: Serializer) -> None:
        _warn_unless_named_enums(serializer, "ALTER TYPE")
        with serializer.statement() as stmt:
            stmt.append("ALTER TYPE", self.name)
            stmt.append_clause("ADD VALUE", self.value)


@dataclass(frozen=True)
class DropEnum:
    name: str | Expression
    if_exists: bool = False
    cascade: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_identifier(self.name))

    def serialize(self, serializer: Serializer) -> None:
        _warn_unless_named_enums(serializer, "DROP TYPE")
        with serializer.statement() as stmt:
            stmt.append("DROP TYPE")
            if self.if_exists:
                stmt.append("IF EXISTS")
            stmt.append(self.name)
            if self.cascade:
                stmt.append("CASCADE")
