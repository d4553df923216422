"""Immutable connection settings threaded through every gateway call."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path

from sqlgate.audit import FileLogSink, LogSink
from sqlgate.config import get_gateway_url, get_log_file, get_password, get_user
from sqlgate.models.wire import Credentials
from sqlgate.transport import HttpxTransport, Transport


@dataclass(frozen=True)
class Connection:
    """Where and how to reach the gateway.

    A Connection holds no per-call state, so one value can be shared by any
    number of concurrent calls. The ``with_*`` builders return a new value.
    """

    url: str
    transport: Transport
    credentials: Credentials | None = None
    log_sink: LogSink | None = None

    @classmethod
    def init(cls, url: str, transport: Transport | None = None) -> Connection:
        """Create a Connection for ``url``, using httpx unless a transport is given."""
        return cls(url=url, transport=transport if transport is not None else HttpxTransport())

    @classmethod
    def from_env(cls, transport: Transport | None = None) -> Connection:
        """Create a Connection from SQLGATE_* environment variables."""
        conn = cls.init(get_gateway_url(), transport)
        user, password = get_user(), get_password()
        if user is not None and password is not None:
            conn = conn.with_auth(user, password)
        log_file = get_log_file()
        if log_file is not None:
            conn = conn.with_log_file(log_file)
        return conn

    def with_auth(self, user: str, password: str) -> Connection:
        return dataclasses.replace(self, credentials=Credentials(user=user, password=password))

    def with_log_file(self, path: Path | str) -> Connection:
        """Audit every request to ``path`` (appended, never truncated)."""
        return self.with_log_sink(FileLogSink(path))

    def with_log_sink(self, sink: LogSink) -> Connection:
        return dataclasses.replace(self, log_sink=sink)

    def __repr__(self) -> str:
        # Never print the password
        user = self.credentials.user if self.credentials is not None else None
        return f"Connection(url={self.url!r}, user={user!r}, log_sink={self.log_sink!r})"
