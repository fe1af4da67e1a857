"""
``CREATE TRIGGER`` and ``DROP TRIGGER``.

Trigger syntax differs more between databases than anything else, so which
clauses are emitted is decided entirely by the dialect's trigger flags.
Options the dialect does not understand are ignored, except for the body,
procedure and definer which must match what the dialect accepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..dialects.base import TriggerCreateFeature as Feature
from ..dialects.base import TriggerDropFeature
from ..errors import precondition
from ..expressions.base import Expression, Serializer
from ..expressions.basics import as_column
from ..expressions.clauses import DropBehavior
from ..expressions.syntax import ExpressionList, Group, as_identifier


class _Keyword(Enum):
    def serialize(self, serializer: Serializer) -> None:
        serializer.write(self.value)


class TriggerWhen(_Keyword):
    BEFORE = "BEFORE"
    AFTER = "AFTER"
    INSTEAD = "INSTEAD OF"


class TriggerEvent(_Keyword):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    TRUNCATE = "TRUNCATE"


class TriggerTiming(_Keyword):
    """
    Deferrability of a constraint trigger.
    """

    DEFERRABLE = "DEFERRABLE INITIALLY IMMEDIATE"
    DEFERRED_BY_DEFAULT = "DEFERRABLE INITIALLY DEFERRED"
    NOT_DEFERRABLE = "NOT DEFERRABLE"


class TriggerEach(_Keyword):
    ROW = "FOR EACH ROW"
    STATEMENT = "FOR EACH STATEMENT"


class TriggerOrder(_Keyword):
    FOLLOWS = "FOLLOWS"
    PRECEDES = "PRECEDES"


@dataclass(frozen=True)
class CreateTrigger:
    """
    ``CREATE [CONSTRAINT] TRIGGER name [DEFINER = x] when event [OF cols]
    ON table [FROM other] [timing] [FOR EACH ...] [WHEN cond] [order other]
    BEGIN body END;`` or ``... EXECUTE PROCEDURE proc``.

    Either ``body`` or ``procedure`` is required depending on whether the
    dialect supports inline bodies. Inconsistent combinations raise
    ``ContractViolation`` when rendered.
    """

    name: str | Expression
    table: str | Expression
    when: TriggerWhen | Expression
    event: TriggerEvent | Expression
    columns: Sequence[str | Expression] = ()
    is_constraint: bool = False
    timing: Optional[Expression] = None
    referenced_table: str | Expression | None = None
    each: Optional[Expression] = None
    condition: Optional[Expression] = None
    procedure: str | Expression | None = None
    definer: Optional[Expression] = None
    body: Optional[Sequence[Expression]] = None
    order: Optional[Expression] = None
    order_trigger_name: str | Expression | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_identifier(self.name))
        object.__setattr__(self, "table", as_identifier(self.table))
        object.__setattr__(self, "columns", tuple(as_column(c) for c in self.columns))
        if self.referenced_table is not None:
            object.__setattr__(self, "referenced_table", as_identifier(self.referenced_table))
        if self.procedure is not None:
            object.__setattr__(self, "procedure", as_identifier(self.procedure))
        if self.body is not None:
            object.__setattr__(self, "body", tuple(self.body))
        if self.order_trigger_name is not None:
            object.__setattr__(self, "order_trigger_name", as_identifier(self.order_trigger_name))

    def _check(self, features: Feature) -> None:
        when, event, each = self.when, self.event, self.each
        instead = when is TriggerWhen.INSTEAD
        if Feature.POSTGRESQL_CHECKS in features:
            precondition(
                not (instead and event is TriggerEvent.UPDATE and self.columns),
                "INSTEAD OF UPDATE triggers do not support lists of columns.",
            )
            precondition(
                not instead or each is TriggerEach.ROW,
                "INSTEAD OF triggers must be FOR EACH ROW.",
            )
            precondition(
                Feature.SUPPORTS_UPDATE_COLUMNS not in features
                or not self.columns
                or event is TriggerEvent.UPDATE,
                "Only UPDATE triggers may specify a list of columns.",
            )
            precondition(
                Feature.SUPPORTS_CONDITION not in features or not instead or self.condition is None,
                "INSTEAD OF triggers do not support WHEN conditions.",
            )
            if Feature.SUPPORTS_CONSTRAINTS in features:
                precondition(
                    not self.is_constraint or when is TriggerWhen.AFTER,
                    "CONSTRAINT triggers may only be AFTER triggers.",
                )
                precondition(
                    not self.is_constraint or each is TriggerEach.ROW,
                    "CONSTRAINT triggers may only be FOR EACH ROW.",
                )
                precondition(
                    self.is_constraint or self.timing is None,
                    "Timing may only be specified on CONSTRAINT triggers.",
                )
        precondition(
            Feature.SUPPORTS_DEFINER in features or self.definer is None,
            "A definer must not be specified when the dialect does not support it.",
        )
        precondition(
            Feature.SUPPORTS_BODY not in features or self.body is not None,
            "A trigger body is required.",
        )
        precondition(
            Feature.SUPPORTS_BODY in features or self.procedure is not None,
            "A trigger procedure is required.",
        )

    def serialize(self, serializer: Serializer) -> None:
        features = serializer.dialect.trigger_syntax.create
        self._check(features)
        constraints = Feature.SUPPORTS_CONSTRAINTS in features

        with serializer.statement() as stmt:
            stmt.append("CREATE")
            if constraints and self.is_constraint:
                stmt.append("CONSTRAINT")
            stmt.append("TRIGGER", self.name)
            if self.definer is not None and Feature.SUPPORTS_DEFINER in features:
                stmt.append("DEFINER =", self.definer)
            stmt.append(self.when, self.event)
            if self.columns and Feature.SUPPORTS_UPDATE_COLUMNS in features:
                stmt.append("OF", ExpressionList(self.columns))
            stmt.append("ON", self.table)
            if constraints:
                stmt.append_clause("FROM", self.referenced_table)
                stmt.append(self.timing)

            if Feature.REQUIRES_FOR_EACH_ROW in features or (
                (Feature.SUPPORTS_FOR_EACH | Feature.SUPPORTS_CONSTRAINTS) in features
                and self.is_constraint
            ):
                stmt.append(TriggerEach.ROW)
            elif Feature.SUPPORTS_FOR_EACH in features:
                stmt.append(self.each)

            if self.condition is not None and Feature.SUPPORTS_CONDITION in features:
                if Feature.CONDITION_REQUIRES_PARENTHESES in features:
                    stmt.append("WHEN", Group(self.condition))
                else:
                    stmt.append("WHEN", self.condition)

            if (
                self.order is not None
                and self.order_trigger_name is not None
                and Feature.SUPPORTS_ORDER in features
            ):
                stmt.append(self.order, self.order_trigger_name)

            if Feature.SUPPORTS_BODY in features and self.body is not None:
                stmt.append("BEGIN", ExpressionList(self.body, separator=" "), "END;")
            elif self.procedure is not None:
                stmt.append("EXECUTE PROCEDURE", self.procedure)


@dataclass(frozen=True)
class DropTrigger:
    """
    ``DROP TRIGGER [IF EXISTS] name [ON table] [behavior]``.

    The table and drop behavior are only emitted where the dialect takes them.
    """

    name: str | Expression
    table: str | Expression | None = None
    if_exists: bool = False
    behavior: Expression = DropBehavior.RESTRICT

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_identifier(self.name))
        if self.table is not None:
            object.__setattr__(self, "table", as_identifier(self.table))

    def serialize(self, serializer: Serializer) -> None:
        dialect = serializer.dialect
        drop = dialect.trigger_syntax.drop
        with serializer.statement() as stmt:
            stmt.append("DROP TRIGGER")
            if self.if_exists and dialect.supports_if_exists:
                stmt.append("IF EXISTS")
            stmt.append(self.name)
            if TriggerDropFeature.SUPPORTS_TABLE_NAME in drop:
                stmt.append_clause("ON", self.table)
            if TriggerDropFeature.SUPPORTS_CASCADE in drop:
                stmt.append(self.behavior)
