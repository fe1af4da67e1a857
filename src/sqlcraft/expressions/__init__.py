"""
Expression nodes and the serializer that renders them.
"""

from .base import Clause, Expression, Serializer, Statement
from .syntax import (
    BinaryExpression,
    BinaryOperator,
    Bind,
    ExpressionList,
    Function,
    Group,
    Identifier,
    Literal,
    QueryString,
    Raw,
)
from .basics import (
    Alias,
    Between,
    Case,
    Column,
    ColumnAssignment,
    Constraint,
    DataType,
    Direction,
    Distinct,
    ExcludedColumn,
    ForeignKeyAction,
    NestedSubpath,
    QualifiedTable,
)
from .clauses import (
    AlterColumnType,
    ColumnConstraint,
    ColumnDefinition,
    CommonTableExpression,
    CommonTableExpressionGroup,
    ConflictAction,
    ConflictStrategy,
    DropBehavior,
    EnumDataType,
    ForeignKey,
    InsertModifier,
    Join,
    JoinMethod,
    LockingClause,
    OrderBy,
    Returning,
    Subquery,
    TableConstraint,
    UnionSubquery,
)

__all__ = [
    "Alias",
    "AlterColumnType",
    "Between",
    "BinaryExpression",
    "BinaryOperator",
    "Bind",
    "Case",
    "Clause",
    "Column",
    "ColumnAssignment",
    "ColumnConstraint",
    "ColumnDefinition",
    "CommonTableExpression",
    "CommonTableExpressionGroup",
    "ConflictAction",
    "ConflictStrategy",
    "Constraint",
    "DataType",
    "Direction",
    "Distinct",
    "DropBehavior",
    "EnumDataType",
    "ExcludedColumn",
    "Expression",
    "ExpressionList",
    "ForeignKey",
    "ForeignKeyAction",
    "Function",
    "Group",
    "Identifier",
    "InsertModifier",
    "Join",
    "JoinMethod",
    "Literal",
    "LockingClause",
    "NestedSubpath",
    "OrderBy",
    "QualifiedTable",
    "QueryString",
    "Raw",
    "Returning",
    "Serializer",
    "Statement",
    "Subquery",
    "TableConstraint",
    "UnionSubquery",
]
