"""
Expression contract, serializer and statement helper.

Every node renders itself by calling ``serialize(serializer)``. All
communication happens through side effects on the serializer: text is
appended with ``write`` and bound values with ``write_bind``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, List, Protocol, Union

if TYPE_CHECKING:
    from ..database import Database
    from ..dialects.base import Dialect


class Expression(Protocol):
    """
    Minimal capability every node implements.
    """

    def serialize(self, serializer: "Serializer") -> None: ...


Part = Union[str, Expression, None]


class Serializer:
    """
    Accumulates SQL text and the ordered list of bound values for one render.

    A serializer is created per top-level render call and is never shared.
    The number of binds always equals the number of placeholders written.
    """

    def __init__(self, database: "Database") -> None:
        self.database = database
        self.binds: List[Any] = []
        self._chunks: List[str] = []

    @property
    def dialect(self) -> "Dialect":
        return self.database.dialect

    @property
    def logger(self) -> logging.Logger:
        return self.database.logger

    @property
    def sql(self) -> str:
        return "".join(self._chunks)

    def write(self, sql: str) -> None:
        if sql:
            self._chunks.append(sql)

    def write_bind(self, value: Any) -> None:
        self.binds.append(value)
        self.write(self.dialect.bind_placeholder(len(self.binds)))

    @contextmanager
    def capture(self) -> Iterator[List[str]]:
        """
        Redirect written text into a scratch list for the duration of the block.

        Binds keep accumulating on the serializer, so placeholder numbering
        is unaffected as long as the captured text is written back in order.
        """
        saved = self._chunks
        captured: List[str] = []
        self._chunks = captured
        try:
            yield captured
        finally:
            self._chunks = saved

    def render(self, expression: Expression) -> str:
        """
        Render ``expression`` and return its text without emitting it.
        """
        with self.capture() as chunks:
            expression.serialize(self)
        return "".join(chunks)

    @contextmanager
    def statement(self) -> Iterator["Statement"]:
        statement = Statement(self)
        yield statement
        statement.serialize(self)


def as_expression(part: str | Expression) -> Expression:
    if isinstance(part, str):
        from .syntax import Raw

        return Raw(part)
    return part


class Statement:
    """
    Space-joined accumulator used inside a single node's ``serialize`` call.

    Parts are stored unrendered and emitted when the ``statement()`` block
    exits: the first part, then every following part preceded by exactly one
    space. Parts that render to nothing are skipped.
    """

    def __init__(self, serializer: Serializer) -> None:
        self.serializer = serializer
        self.parts: List[Expression] = []

    @property
    def dialect(self) -> "Dialect":
        return self.serializer.dialect

    @property
    def logger(self) -> logging.Logger:
        return self.serializer.logger

    def append(self, *parts: Part) -> None:
        for part in parts:
            if part is not None:
                self.parts.append(as_expression(part))

    def append_clause(self, keyword: str, expression: Expression | None) -> None:
        """
        Append ``keyword expression``, omitting both when the expression is
        absent or renders to nothing.
        """
        if expression is not None:
            self.parts.append(Clause(keyword, expression))

    def extend(self, parts: Iterable[Part]) -> None:
        self.append(*parts)

    def serialize(self, serializer: Serializer) -> None:
        first = True
        for part in self.parts:
            text = serializer.render(part)
            if not text:
                continue
            if not first:
                serializer.write(" ")
            serializer.write(text)
            first = False


@dataclass(frozen=True)
class Clause:
    """
    A keyword followed by a body, dropped entirely when the body is empty.
    """

    keyword: str
    body: Expression

    def serialize(self, serializer: Serializer) -> None:
        text = serializer.render(self.body)
        if text:
            serializer.write(f"{self.keyword} {text}")
