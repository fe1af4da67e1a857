"""
sqlcraft public package initialization.

Expression trees are built from the nodes in ``sqlcraft.expressions`` and
``sqlcraft.queries`` and rendered with ``Database.serialize``.
"""

from .dialects import (  # noqa: F401
    Dialect,
    available_dialects,
    get_dialect,
    get_mysql_dialect,
    get_postgres_dialect,
    get_sqlite_dialect,
    register_dialect,
)
from .expressions import (  # noqa: F401
    Alias,
    BinaryExpression,
    BinaryOperator,
    Bind,
    Column,
    ColumnAssignment,
    ColumnConstraint,
    ColumnDefinition,
    ConflictAction,
    ConflictStrategy,
    DataType,
    Function,
    Identifier,
    Literal,
    OrderBy,
    QueryString,
    Raw,
    Returning,
    Serializer,
)
from .queries import (  # noqa: F401
    AlterTable,
    CreateIndex,
    CreateTable,
    CreateTrigger,
    Delete,
    DropTable,
    DropTrigger,
    Insert,
    Select,
    Union,
    Update,
)
from .database import Database, RenderedQuery  # noqa: F401
from .errors import ContractViolation  # noqa: F401

__all__ = [
    "Alias",
    "AlterTable",
    "BinaryExpression",
    "BinaryOperator",
    "Bind",
    "Column",
    "ColumnAssignment",
    "ColumnConstraint",
    "ColumnDefinition",
    "ConflictAction",
    "ConflictStrategy",
    "ContractViolation",
    "CreateIndex",
    "CreateTable",
    "CreateTrigger",
    "DataType",
    "Database",
    "Delete",
    "Dialect",
    "DropTable",
    "DropTrigger",
    "Function",
    "Identifier",
    "Insert",
    "Literal",
    "OrderBy",
    "QueryString",
    "Raw",
    "RenderedQuery",
    "Returning",
    "Select",
    "Serializer",
    "Union",
    "Update",
    "available_dialects",
    "get_dialect",
    "get_mysql_dialect",
    "get_postgres_dialect",
    "get_sqlite_dialect",
    "register_dialect",
]
