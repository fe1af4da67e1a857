"""
Database façade: which dialect to render for and where to log.

Execution is out of scope; ``serialize`` hands back SQL text plus the bound
values in placeholder order for whatever driver the caller uses.
"""

from __future__ import annotations

import logging
from typing import Any, List, NamedTuple, Optional

from .dialects import GENERIC_DIALECT, Dialect, get_dialect
from .expressions.base import Expression, Serializer
from .security.dsns import DSNConfig, dsn_from_env, parse_dsn
from .security.redaction import redact_binds
from .utils import get_logger, time_call

DEFAULT_ENV_VAR = "SQLCRAFT_DSN"

# DB-API drivers whose placeholders differ from the dialect's default.
_DRIVER_PARAM_STYLES = {
    "psycopg": "format",
    "psycopg2": "format",
    "pg8000": "format",
    "asyncpg": "dollar",
    "pymysql": "format",
    "mysqldb": "format",
}


class RenderedQuery(NamedTuple):
    sql: str
    binds: List[Any]


class Database:
    """
    Bundles a dialect and a logger for rendering expression trees.

    ``dialect`` may be a ``Dialect`` or a registered name such as
    ``"postgresql"``; ``None`` renders with the generic baseline dialect.
    Each rendered query is logged at ``query_log_level`` (``None`` turns
    this off) with bound values redacted, and renders slower than
    ``slow_render_ms`` are reported as warnings.
    """

    def __init__(
        self,
        dialect: Dialect | str | None = None,
        *,
        logger: Optional[logging.Logger] = None,
        query_log_level: Optional[int] = logging.DEBUG,
        slow_render_ms: float = 50,
        label: Optional[str] = None,
    ) -> None:
        if dialect is None:
            dialect = GENERIC_DIALECT
        elif isinstance(dialect, str):
            dialect = get_dialect(dialect)
        self.dialect: Dialect = dialect
        self.logger = logger or get_logger("database")
        self.query_log_level = query_log_level
        self.slow_render_ms = slow_render_ms
        self.label = label

    @classmethod
    def from_dsn(cls, dsn: str | DSNConfig, **kwargs: Any) -> "Database":
        """
        Pick the dialect from a DSN's scheme.

        ``postgresql+psycopg://...`` resolves to PostgreSQL with ``%s``
        placeholders; a ``paramstyle`` query option overrides the driver's
        default. Credentials never leave this method unredacted.
        """
        config = dsn if isinstance(dsn, DSNConfig) else parse_dsn(dsn)
        dialect = get_dialect(config.dialect_name)
        param_style = config.query.get("paramstyle") or _DRIVER_PARAM_STYLES.get(
            (config.driver or "").lower()
        )
        if param_style and param_style != dialect.param_style:
            dialect = dialect.with_param_style(param_style)
        kwargs.setdefault("label", config.redacted())
        return cls(dialect, **kwargs)

    @classmethod
    def from_env(cls, env_var: str = DEFAULT_ENV_VAR, **kwargs: Any) -> "Database":
        return cls.from_dsn(dsn_from_env(env_var), **kwargs)

    def logging_to(self, logger: logging.Logger) -> "Database":
        """
        Return a copy that logs to ``logger`` instead.
        """
        return Database(
            self.dialect,
            logger=logger,
            query_log_level=self.query_log_level,
            slow_render_ms=self.slow_render_ms,
            label=self.label,
        )

    def serialize(self, expression: Expression) -> RenderedQuery:
        serializer = Serializer(self)
        with time_call(
            f"{self.dialect.name} render", self.logger, threshold_ms=self.slow_render_ms
        ) as timer:
            expression.serialize(serializer)
            timer.sql = serializer.sql
            timer.params = redact_binds(serializer.binds)
        if self.query_log_level is not None:
            self.logger.log(
                self.query_log_level,
                "%s | binds=%s",
                serializer.sql,
                timer.params,
                extra={"dialect": self.dialect.name, "database": self.label},
            )
        return RenderedQuery(serializer.sql, serializer.binds)

    def __repr__(self) -> str:
        target = f" {self.label}" if self.label else ""
        return f"<Database {self.dialect.name}{target}>"
