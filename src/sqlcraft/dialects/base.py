"""
Dialect descriptors describing the SQL syntax a target database accepts.

A ``Dialect`` is a frozen record: every capability has a default, so a
partially specified dialect still renders baseline SQL. Variants are derived
with ``Dialect.replace`` rather than by subclassing.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING, Callable, Optional, Sequence

if TYPE_CHECKING:
    from ..expressions.base import Expression
    from ..expressions.basics import DataType


class EnumSyntax(Enum):
    """How enumerated column types are expressed."""

    INLINE = "inline"  # ENUM('a', 'b') on the column, MySQL style
    TYPE_NAME = "type_name"  # standalone CREATE TYPE, PostgreSQL style
    UNSUPPORTED = "unsupported"


class UpsertSyntax(Enum):
    STANDARD = "standard"  # ON CONFLICT ... DO NOTHING / DO UPDATE
    MYSQL_LIKE = "mysql_like"  # INSERT IGNORE / ON DUPLICATE KEY UPDATE
    UNSUPPORTED = "unsupported"


class UnionFeature(Flag):
    NONE = 0
    UNION = auto()
    UNION_ALL = auto()
    INTERSECT = auto()
    INTERSECT_ALL = auto()
    EXCEPT = auto()
    EXCEPT_ALL = auto()
    EXPLICIT_DISTINCT = auto()
    PARENTHESIZED_SUBQUERIES = auto()


class TriggerCreateFeature(Flag):
    NONE = 0
    REQUIRES_FOR_EACH_ROW = auto()
    SUPPORTS_BODY = auto()
    SUPPORTS_CONDITION = auto()
    SUPPORTS_DEFINER = auto()
    SUPPORTS_FOR_EACH = auto()
    SUPPORTS_ORDER = auto()
    SUPPORTS_UPDATE_COLUMNS = auto()
    SUPPORTS_CONSTRAINTS = auto()
    POSTGRESQL_CHECKS = auto()
    CONDITION_REQUIRES_PARENTHESES = auto()


class TriggerDropFeature(Flag):
    NONE = 0
    SUPPORTS_TABLE_NAME = auto()
    SUPPORTS_CASCADE = auto()


@dataclass(frozen=True)
class TriggerSyntax:
    create: TriggerCreateFeature = TriggerCreateFeature.NONE
    drop: TriggerDropFeature = TriggerDropFeature.NONE


@dataclass(frozen=True)
class AlterTableSyntax:
    """
    ``alter_column_definition_clause`` is the verb used to change a column's
    definition (``MODIFY``, ``ALTER COLUMN``); ``None`` means the database
    cannot alter columns at all. ``alter_column_definition_type_keyword`` is
    placed between the column and its new type when required.
    """

    alter_column_definition_clause: str | None = None
    alter_column_definition_type_keyword: str | None = None
    allows_batch: bool = True


# Placeholder styles -------------------------------------------------------
def qmark_placeholder(position: int) -> str:
    return "?"


def numeric_placeholder(position: int) -> str:
    return f":{position}"


def dollar_placeholder(position: int) -> str:
    return f"${position}"


def format_placeholder(position: int) -> str:
    return "%s"


PLACEHOLDER_STYLES: dict[str, Callable[[int], str]] = {
    "qmark": qmark_placeholder,
    "numeric": numeric_placeholder,
    "dollar": dollar_placeholder,
    "format": format_placeholder,
    # pyformat drivers also accept positional %s with a sequence of binds
    "pyformat": format_placeholder,
}


def lowercase_boolean(value: bool) -> str:
    return "true" if value else "false"


def _quote(value: str, quote: str) -> str:
    escaped = value.replace(quote, quote + quote)
    return f"{quote}{escaped}{quote}"


@dataclass(frozen=True)
class Dialect:
    """
    Read-only description of one database's SQL syntax and quirks.

    Shared freely between threads and render calls. Hooks (the callable
    fields) must be pure and must not raise; each has a public accessor
    method that applies the documented default when the hook is unset.
    """

    name: str = "generic"
    identifier_quote: str = '"'
    literal_string_quote: str = "'"
    param_style: str = "qmark"
    placeholder: Callable[[int], str] = qmark_placeholder
    boolean_literal: Callable[[bool], str] = lowercase_boolean
    literal_default: str = "DEFAULT"
    supports_auto_increment: bool = True
    auto_increment_clause: str = "AUTOINCREMENT"
    auto_increment_function: str | None = None
    supports_if_exists: bool = True
    enum_syntax: EnumSyntax = EnumSyntax.UNSUPPORTED
    supports_drop_behavior: bool = False
    supports_returning: bool = False
    trigger_syntax: TriggerSyntax = TriggerSyntax()
    alter_table_syntax: AlterTableSyntax = AlterTableSyntax()
    upsert_syntax: UpsertSyntax = UpsertSyntax.UNSUPPORTED
    union_features: UnionFeature = UnionFeature.UNION | UnionFeature.UNION_ALL
    shared_select_lock: str | None = None
    exclusive_select_lock: str | None = None
    offset_without_limit: str | None = None
    data_type_override: Optional[Callable[["DataType"], Optional["Expression"]]] = None
    constraint_normalizer: Optional[Callable[["Expression"], "Expression"]] = None
    subpath_renderer: Optional[Callable[["Expression", Sequence[str]], Optional["Expression"]]] = None

    # Accessors ----------------------------------------------------------
    def bind_placeholder(self, position: int) -> str:
        return self.placeholder(position)

    def literal_boolean(self, value: bool) -> str:
        return self.boolean_literal(value)

    def quote_identifier(self, identifier: str) -> str:
        return _quote(identifier, self.identifier_quote)

    def quote_string(self, value: str) -> str:
        return _quote(value, self.literal_string_quote)

    def custom_data_type(self, data_type: "DataType") -> Optional["Expression"]:
        if self.data_type_override is None:
            return None
        return self.data_type_override(data_type)

    def normalize_constraint(self, identifier: "Expression") -> "Expression":
        if self.constraint_normalizer is None:
            return identifier
        return self.constraint_normalizer(identifier)

    def nested_subpath_expression(
        self, column: "Expression", path: Sequence[str]
    ) -> Optional["Expression"]:
        if self.subpath_renderer is None:
            return None
        return self.subpath_renderer(column, path)

    def replace(self, **changes) -> "Dialect":
        """
        Return a copy with the given fields changed.
        """
        return dataclasses.replace(self, **changes)

    def with_param_style(self, param_style: str) -> "Dialect":
        try:
            placeholder = PLACEHOLDER_STYLES[param_style]
        except KeyError:
            available = ", ".join(sorted(PLACEHOLDER_STYLES))
            raise ValueError(
                f"Unknown param style '{param_style}'. Available: {available}"
            ) from None
        return self.replace(param_style=param_style, placeholder=placeholder)


GENERIC_DIALECT = Dialect()
