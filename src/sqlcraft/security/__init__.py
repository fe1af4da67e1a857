"""Security helpers for sqlcraft."""

from .dsns import DSNConfig, dsn_from_env, parse_dsn
from .redaction import redact_binds, redact_value

__all__ = ["DSNConfig", "dsn_from_env", "parse_dsn", "redact_binds", "redact_value"]
