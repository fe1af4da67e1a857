"""DSN parsing and redaction used to pick a dialect from a connection string."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse

from .redaction import REDACTED_VALUE, redact_query_params


@dataclass(frozen=True)
class DSNConfig:
    scheme: str
    username: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    path: str = ""
    query: dict[str, str] = field(default_factory=dict)

    @property
    def dialect_name(self) -> str:
        """
        The database part of the scheme: ``postgresql+psycopg`` gives ``postgresql``.
        """
        return self.scheme.split("+", 1)[0].lower()

    @property
    def driver(self) -> Optional[str]:
        if "+" not in self.scheme:
            return None
        return self.scheme.split("+", 1)[1]

    def redacted(self) -> str:
        """
        Return the DSN with credentials and sensitive options masked.
        """
        netloc = ""
        if self.username:
            netloc += self.username
            if self.password:
                netloc += f":{REDACTED_VALUE}"
            netloc += "@"
        if self.host:
            netloc += self.host
        if self.port:
            netloc += f":{self.port}"

        # built by hand so "sqlite:///path" keeps its empty authority
        result = f"{self.scheme}://{netloc}{self.path}"
        if self.query:
            result += "?" + urlencode(redact_query_params(self.query))
        return result


def parse_dsn(dsn: str) -> DSNConfig:
    parsed = urlparse(dsn)
    if not parsed.scheme:
        raise ValueError(f"DSN has no scheme: {dsn!r}")
    return DSNConfig(
        scheme=parsed.scheme,
        username=parsed.username,
        password=parsed.password,
        host=parsed.hostname,
        port=parsed.port,
        database=parsed.path.lstrip("/") or None,
        path=parsed.path or "",
        query={key: values[0] for key, values in parse_qs(parsed.query).items()},
    )


def dsn_from_env(env_var: str) -> DSNConfig:
    value = os.getenv(env_var)
    if not value:
        raise ValueError(f"Environment variable {env_var} is not set")
    return parse_dsn(value)
