"""
Primitive syntax nodes: raw text, identifiers, literals, binds, lists and
operators.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence, Tuple

from ..errors import precondition
from .base import Expression, Serializer, as_expression


def is_expression(value: Any) -> bool:
    return callable(getattr(value, "serialize", None))


def as_identifier(part: str | Expression) -> Expression:
    if isinstance(part, str):
        return Identifier(part)
    return part


def as_value(value: Any) -> Expression:
    """
    Pass expressions through; anything else becomes a bound value.
    """
    if is_expression(value):
        return value
    return Bind(value)


def as_group_items(value: Expression | Iterable[Expression]) -> Tuple[Expression, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


@dataclass(frozen=True)
class Raw:
    """
    Text written verbatim. Never put untrusted input here; use ``Bind``.
    """

    sql: str

    def serialize(self, serializer: Serializer) -> None:
        serializer.write(self.sql)


@dataclass(frozen=True)
class Identifier:
    name: str

    def serialize(self, serializer: Serializer) -> None:
        serializer.write(serializer.dialect.quote_identifier(self.name))


@dataclass(frozen=True)
class Literal:
    """
    A literal value written inline rather than bound.

    Build instances with the class methods: ``Literal.string("x")``,
    ``Literal.numeric(3)``, ``Literal.boolean(True)``, ``Literal.null()``,
    ``Literal.all()`` and ``Literal.default()``.
    """

    kind: str
    value: Any = None

    _KINDS = ("string", "numeric", "boolean", "null", "all", "default")

    def __post_init__(self) -> None:
        precondition(self.kind in self._KINDS, f"Unknown literal kind '{self.kind}'")

    @classmethod
    def string(cls, value: str) -> "Literal":
        return cls("string", value)

    @classmethod
    def numeric(cls, value: int | float | str) -> "Literal":
        return cls("numeric", str(value))

    @classmethod
    def boolean(cls, value: bool) -> "Literal":
        return cls("boolean", bool(value))

    @classmethod
    def null(cls) -> "Literal":
        return cls("null")

    @classmethod
    def all(cls) -> "Literal":
        return cls("all")

    @classmethod
    def default(cls) -> "Literal":
        return cls("default")

    def serialize(self, serializer: Serializer) -> None:
        dialect = serializer.dialect
        if self.kind == "string":
            serializer.write(dialect.quote_string(self.value))
        elif self.kind == "numeric":
            serializer.write(self.value)
        elif self.kind == "boolean":
            serializer.write(dialect.literal_boolean(self.value))
        elif self.kind == "null":
            serializer.write("NULL")
        elif self.kind == "all":
            serializer.write("*")
        else:
            serializer.write(dialect.literal_default)


@dataclass(frozen=True)
class Bind:
    """
    A value sent out-of-band and represented by a placeholder in the text.
    """

    value: Any

    @classmethod
    def group(cls, values: Iterable[Any]) -> "Group":
        return Group([cls(value) for value in values])

    def serialize(self, serializer: Serializer) -> None:
        serializer.write_bind(self.value)


@dataclass(frozen=True)
class ExpressionList:
    """
    Expressions joined by ``separator``. Items rendering to nothing are
    skipped so no stray separators are left behind.
    """

    expressions: Sequence[Expression]
    separator: str = ", "

    def __post_init__(self) -> None:
        object.__setattr__(self, "expressions", tuple(self.expressions))

    def serialize(self, serializer: Serializer) -> None:
        first = True
        for expression in self.expressions:
            text = serializer.render(expression)
            if not text:
                continue
            if not first:
                serializer.write(self.separator)
            serializer.write(text)
            first = False


@dataclass(frozen=True)
class Group:
    """
    Parenthesised, comma-separated expressions: ``(a, b, c)``.
    """

    expressions: Expression | Sequence[Expression]

    def __post_init__(self) -> None:
        object.__setattr__(self, "expressions", as_group_items(self.expressions))

    def serialize(self, serializer: Serializer) -> None:
        serializer.write("(")
        ExpressionList(self.expressions).serialize(serializer)
        serializer.write(")")


@dataclass(frozen=True)
class Function:
    name: str
    args: Sequence[str | Expression] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(as_identifier(arg) for arg in self.args))

    @classmethod
    def coalesce(cls, *expressions: Expression) -> "Function":
        return cls("COALESCE", expressions)

    def serialize(self, serializer: Serializer) -> None:
        serializer.write(self.name)
        Group(self.args).serialize(serializer)


class BinaryOperator(Enum):
    EQUAL = "="
    NOT_EQUAL = "<>"
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN_OR_EQUAL = "<="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    IN = "IN"
    NOT_IN = "NOT IN"
    AND = "AND"
    OR = "OR"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    ADD = "+"
    SUBTRACT = "-"
    IS = "IS"
    IS_NOT = "IS NOT"
    CONCATENATE = "||"

    def serialize(self, serializer: Serializer) -> None:
        if self is BinaryOperator.CONCATENATE:
            # || means logical OR on MySQL; callers should pick a function.
            serializer.logger.warning(
                "|| is not rendered because it is not portable; use Function('CONCAT', ...) "
                "for MySQL or Raw('||') for PostgreSQL and SQLite."
            )
            return
        serializer.write(self.value)


@dataclass(frozen=True)
class BinaryExpression:
    """
    ``left op right``.

    A string ``left`` names a column; a ``right`` that is not an expression
    is bound, so ``BinaryExpression("name", BinaryOperator.EQUAL, "bob")``
    renders ``"name" = ?`` with ``"bob"`` bound.
    """

    left: Any
    op: BinaryOperator | Expression | str
    right: Any

    def __post_init__(self) -> None:
        from .basics import as_column

        object.__setattr__(self, "left", as_column(self.left))
        object.__setattr__(self, "op", as_expression(self.op))
        object.__setattr__(self, "right", as_value(self.right))

    def serialize(self, serializer: Serializer) -> None:
        with serializer.statement() as stmt:
            stmt.append(self.left, self.op, self.right)


class QueryString:
    """
    Raw SQL template mixing verbatim text with embedded expressions.

    ``QueryString("SELECT * FROM ", Identifier("users"), " WHERE id = ", Bind(1))``
    """

    def __init__(self, *fragments: str | Expression) -> None:
        self.fragments: Tuple[Expression, ...] = tuple(as_expression(f) for f in fragments)

    def __add__(self, other: "QueryString | str | Expression") -> "QueryString":
        if isinstance(other, QueryString):
            return QueryString(*self.fragments, *other.fragments)
        return QueryString(*self.fragments, other)

    def __radd__(self, other: str | Expression) -> "QueryString":
        return QueryString(other, *self.fragments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryString):
            return NotImplemented
        return self.fragments == other.fragments

    def __hash__(self) -> int:
        return hash(self.fragments)

    def __repr__(self) -> str:
        return f"QueryString{self.fragments!r}"

    @classmethod
    def join(cls, separator: str, strings: Iterable["QueryString"]) -> "QueryString":
        fragments: list[Expression] = []
        for index, string in enumerate(strings):
            if index:
                fragments.append(Raw(separator))
            fragments.extend(string.fragments)
        return cls(*fragments)

    def serialize(self, serializer: Serializer) -> None:
        for fragment in self.fragments:
            fragment.serialize(serializer)
