"""
PostgreSQL dialect.

Placeholders default to the server-side ``$1, $2`` numbering (the ``dollar``
style); pass ``param_style="format"`` for DB-API drivers such as psycopg that
expect ``%s``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..expressions.syntax import ExpressionList, Group, Literal, Raw
from .base import (
    AlterTableSyntax,
    Dialect,
    EnumSyntax,
    TriggerCreateFeature,
    TriggerDropFeature,
    TriggerSyntax,
    UnionFeature,
    UpsertSyntax,
    dollar_placeholder,
)


def _json_path(column, path: Sequence[str]):
    parts = [column]
    for index, key in enumerate(path):
        parts.append(Raw("->>" if index == len(path) - 1 else "->"))
        parts.append(Literal.string(key))
    return Group(ExpressionList(parts, separator=""))


def _data_type(data_type) -> Optional[Raw]:
    if data_type.kind == "blob":
        return Raw("BYTEA")
    return None


POSTGRES_DIALECT = Dialect(
    name="postgresql",
    param_style="dollar",
    placeholder=dollar_placeholder,
    supports_auto_increment=True,
    auto_increment_clause="GENERATED BY DEFAULT AS IDENTITY",
    enum_syntax=EnumSyntax.TYPE_NAME,
    supports_drop_behavior=True,
    supports_returning=True,
    trigger_syntax=TriggerSyntax(
        create=TriggerCreateFeature.SUPPORTS_FOR_EACH
        | TriggerCreateFeature.POSTGRESQL_CHECKS
        | TriggerCreateFeature.SUPPORTS_CONDITION
        | TriggerCreateFeature.CONDITION_REQUIRES_PARENTHESES
        | TriggerCreateFeature.SUPPORTS_CONSTRAINTS
        | TriggerCreateFeature.SUPPORTS_UPDATE_COLUMNS,
        drop=TriggerDropFeature.SUPPORTS_CASCADE | TriggerDropFeature.SUPPORTS_TABLE_NAME,
    ),
    alter_table_syntax=AlterTableSyntax(
        alter_column_definition_clause="ALTER COLUMN",
        alter_column_definition_type_keyword="SET DATA TYPE",
    ),
    upsert_syntax=UpsertSyntax.STANDARD,
    union_features=(
        UnionFeature.UNION
        | UnionFeature.UNION_ALL
        | UnionFeature.INTERSECT
        | UnionFeature.INTERSECT_ALL
        | UnionFeature.EXCEPT
        | UnionFeature.EXCEPT_ALL
        | UnionFeature.EXPLICIT_DISTINCT
        | UnionFeature.PARENTHESIZED_SUBQUERIES
    ),
    shared_select_lock="FOR SHARE",
    exclusive_select_lock="FOR UPDATE",
    data_type_override=_data_type,
    subpath_renderer=_json_path,
)


def get_postgres_dialect(param_style: str = "dollar") -> Dialect:
    if param_style == POSTGRES_DIALECT.param_style:
        return POSTGRES_DIALECT
    return POSTGRES_DIALECT.with_param_style(param_style)
