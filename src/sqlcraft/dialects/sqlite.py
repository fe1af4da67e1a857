"""
SQLite dialect.
"""

from __future__ import annotations

from typing import Sequence

from ..expressions.syntax import Function, Literal
from .base import (
    AlterTableSyntax,
    Dialect,
    TriggerCreateFeature,
    TriggerSyntax,
    UnionFeature,
    UpsertSyntax,
)


def _json_extract(column, path: Sequence[str]):
    return Function("json_extract", (column, Literal.string("$." + ".".join(path))))


SQLITE_DIALECT = Dialect(
    name="sqlite",
    param_style="qmark",
    supports_auto_increment=True,
    auto_increment_clause="AUTOINCREMENT",
    supports_returning=True,
    trigger_syntax=TriggerSyntax(
        create=TriggerCreateFeature.SUPPORTS_BODY
        | TriggerCreateFeature.SUPPORTS_CONDITION
        | TriggerCreateFeature.SUPPORTS_UPDATE_COLUMNS,
    ),
    alter_table_syntax=AlterTableSyntax(allows_batch=False),
    upsert_syntax=UpsertSyntax.STANDARD,
    union_features=(
        UnionFeature.UNION | UnionFeature.UNION_ALL | UnionFeature.INTERSECT | UnionFeature.EXCEPT
    ),
    # SQLite has no bare OFFSET; a negative limit means "no limit".
    offset_without_limit="-1",
    subpath_renderer=_json_extract,
)


def get_sqlite_dialect() -> Dialect:
    return SQLITE_DIALECT
