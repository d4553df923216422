"""Shared test fixtures."""

import json
import sqlite3

import httpx
import pytest
import pytest_asyncio

from sqlgate.connection import Connection
from sqlgate.transport import HttpxTransport

GATEWAY_URL = "http://gateway.test/test"


class FakeGateway:
    """In-process stand-in for the SQL gateway.

    Speaks the same JSON protocol over an in-memory SQLite database. Each
    request runs as one transaction and is rolled back if any entry fails,
    which is what the real gateway does.
    """

    def __init__(self, credentials: dict[str, str] | None = None):
        self.db = sqlite3.connect(":memory:", isolation_level=None)
        self.credentials = credentials
        self.requests: list[bytes] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.content)
        body = json.loads(request.content)

        if self.credentials is not None and body.get("credentials") != self.credentials:
            return httpx.Response(401, text="Unauthorized")

        results: list[dict[str, object]] = []
        self.db.execute("BEGIN")
        try:
            for entry in body["transaction"]:
                values = entry.get("values", {})
                if "query" in entry:
                    cursor = self.db.execute(entry["query"], values)
                    cols = [c[0] for c in cursor.description or []]
                    rows = [dict(zip(cols, r, strict=True)) for r in cursor.fetchall()]
                    results.append({"success": True, "resultSet": rows})
                else:
                    cursor = self.db.execute(entry["statement"], values)
                    results.append({"success": True, "rowsUpdated": max(cursor.rowcount, 0)})
        except sqlite3.Error as e:
            self.db.execute("ROLLBACK")
            return httpx.Response(500, text=str(e))
        self.db.execute("COMMIT")
        return httpx.Response(200, json={"results": results})

    def run(self, sql: str, params: tuple = ()) -> list[tuple]:
        """Run SQL directly against the backing database (test setup/inspection)."""
        return self.db.execute(sql, params).fetchall()

    def close(self) -> None:
        self.db.close()


class RecordingSink:
    """Log sink that keeps appended lines in memory."""

    def __init__(self):
        self.lines: list[bytes] = []

    async def append(self, data: bytes) -> None:
        self.lines.append(data)


class BrokenSink:
    """Log sink whose every append fails."""

    def __init__(self, exc: Exception | None = None):
        self.exc = exc or PermissionError("read-only filesystem")
        self.attempts = 0

    async def append(self, data: bytes) -> None:
        self.attempts += 1
        raise self.exc


@pytest.fixture
def gateway():
    """Fake gateway with a ``people`` table."""
    gw = FakeGateway()
    gw.run(
        "CREATE TABLE people ("
        "id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER, "
        "score REAL, active INTEGER, joined INTEGER)"
    )
    yield gw
    gw.close()


@pytest_asyncio.fixture
async def conn(gateway):
    """Connection routed to the fake gateway."""
    transport = HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(gateway.handle)))
    yield Connection.init(GATEWAY_URL, transport)
    await transport.close()


@pytest.fixture
def static_conn():
    """Factory for connections whose gateway always gives the same answer."""

    def make(status: int = 200, **response_kwargs) -> Connection:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, **response_kwargs)

        transport = HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        return Connection.init(GATEWAY_URL, transport)

    return make


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def broken_sink():
    return BrokenSink()
