"""
Dialect registry.

Dialects are looked up by name or by the scheme of a DSN, so
``get_dialect("postgresql+psycopg")`` and ``get_dialect("psql")`` both
resolve to the PostgreSQL descriptor.
"""

from __future__ import annotations

from typing import Dict, List

from .base import (
    GENERIC_DIALECT,
    AlterTableSyntax,
    Dialect,
    EnumSyntax,
    TriggerCreateFeature,
    TriggerDropFeature,
    TriggerSyntax,
    UnionFeature,
    UpsertSyntax,
)
from .mysql import MYSQL_DIALECT, get_mysql_dialect
from .postgres import POSTGRES_DIALECT, get_postgres_dialect
from .sqlite import SQLITE_DIALECT, get_sqlite_dialect

_REGISTRY: Dict[str, Dialect] = {}


def register_dialect(dialect: Dialect, *aliases: str) -> None:
    """
    Make ``dialect`` available under its name and any extra aliases.
    """
    for key in (dialect.name, *aliases):
        _REGISTRY[key.lower()] = dialect


def get_dialect(name: str) -> Dialect:
    key = name.lower().split("+", 1)[0]
    try:
        return _REGISTRY[key]
    except KeyError:
        available = ", ".join(available_dialects())
        raise KeyError(f"Unknown dialect '{name}'. Available: {available}") from None


def available_dialects() -> List[str]:
    return sorted(_REGISTRY)


register_dialect(GENERIC_DIALECT)
register_dialect(SQLITE_DIALECT, "sqlite3")
register_dialect(POSTGRES_DIALECT, "postgres", "psql")
register_dialect(MYSQL_DIALECT, "mariadb")

__all__ = [
    "AlterTableSyntax",
    "Dialect",
    "EnumSyntax",
    "GENERIC_DIALECT",
    "MYSQL_DIALECT",
    "POSTGRES_DIALECT",
    "SQLITE_DIALECT",
    "TriggerCreateFeature",
    "TriggerDropFeature",
    "TriggerSyntax",
    "UnionFeature",
    "UpsertSyntax",
    "available_dialects",
    "get_dialect",
    "get_mysql_dialect",
    "get_postgres_dialect",
    "get_sqlite_dialect",
    "register_dialect",
]
