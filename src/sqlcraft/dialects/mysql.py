"""
MySQL dialect, also used for MariaDB.
"""

from __future__ import annotations

import hashlib
from typing import Optional, Sequence

from ..expressions.syntax import ExpressionList, Group, Identifier, Literal, Raw
from .base import (
    AlterTableSyntax,
    Dialect,
    EnumSyntax,
    TriggerCreateFeature,
    TriggerSyntax,
    UnionFeature,
    UpsertSyntax,
    format_placeholder,
)

MAX_IDENTIFIER_LENGTH = 64


def _json_path(column, path: Sequence[str]):
    return Group(
        ExpressionList(
            [column, Raw("->>"), Literal.string("$." + ".".join(path))],
            separator="",
        )
    )


def _shorten_constraint(identifier):
    if isinstance(identifier, Identifier) and len(identifier.name) > MAX_IDENTIFIER_LENGTH:
        return Identifier(hashlib.sha1(identifier.name.encode("utf-8")).hexdigest())
    return identifier


def _data_type(data_type) -> Optional[Raw]:
    # TEXT columns cannot be indexed or given defaults without a length.
    if data_type.kind == "text":
        return Raw("VARCHAR(255)")
    return None


MYSQL_DIALECT = Dialect(
    name="mysql",
    identifier_quote="`",
    param_style="format",
    placeholder=format_placeholder,
    supports_auto_increment=True,
    auto_increment_clause="AUTO_INCREMENT",
    enum_syntax=EnumSyntax.INLINE,
    supports_drop_behavior=True,
    trigger_syntax=TriggerSyntax(
        create=TriggerCreateFeature.SUPPORTS_BODY
        | TriggerCreateFeature.SUPPORTS_ORDER
        | TriggerCreateFeature.SUPPORTS_DEFINER
        | TriggerCreateFeature.REQUIRES_FOR_EACH_ROW,
    ),
    alter_table_syntax=AlterTableSyntax(alter_column_definition_clause="MODIFY COLUMN"),
    upsert_syntax=UpsertSyntax.MYSQL_LIKE,
    union_features=(
        UnionFeature.UNION
        | UnionFeature.UNION_ALL
        | UnionFeature.INTERSECT
        | UnionFeature.INTERSECT_ALL
        | UnionFeature.EXCEPT
        | UnionFeature.EXCEPT_ALL
        | UnionFeature.PARENTHESIZED_SUBQUERIES
    ),
    shared_select_lock="LOCK IN SHARE MODE",
    exclusive_select_lock="FOR UPDATE",
    offset_without_limit="18446744073709551615",
    data_type_override=_data_type,
    constraint_normalizer=_shorten_constraint,
    subpath_renderer=_json_path,
)


def get_mysql_dialect(param_style: str = "format") -> Dialect:
    if param_style == MYSQL_DIALECT.param_style:
        return MYSQL_DIALECT
    return MYSQL_DIALECT.with_param_style(param_style)
