"""Public gateway operations.

Each operation sends exactly one HTTP request. When the connection has a log
sink, the request body is appended to it first; that append can fail without
affecting the call. Nothing is retried.
"""

import logging
from typing import TypeVar

from sqlgate import audit
from sqlgate.connection import Connection
from sqlgate.protocol import (
    Query,
    Statement,
    build_query_request,
    build_statements_request,
    parse_query_response,
    parse_statement_response,
)
from sqlgate.results import exactly_one, maybe_one

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def get_all(conn: Connection, query: Query[T]) -> list[T]:
    """Run a query and decode every returned row, in server order."""
    body = build_query_request(conn.credentials, query)
    await audit.record(conn.log_sink, conn.url, body)
    logger.debug("POST %s (query)", conn.url)
    response = await conn.transport.post(conn.url, body)
    return parse_query_response(response, query.decoder)


async def get_one(conn: Connection, query: Query[T]) -> T:
    """Run a query that must return exactly one row.

    Raises NoResultError for zero rows and MultipleResultsError for more.
    """
    return exactly_one(await get_all(conn, query))


async def get_maybe_one(conn: Connection, query: Query[T]) -> T | None:
    """Run a query and return its row if it returned exactly one, else None."""
    return maybe_one(await get_all(conn, query))


async def transaction(conn: Connection, statements: list[Statement]) -> list[int]:
    """Run statements atomically; return one affected-row count per statement.

    Raises DecodeError if the gateway answers with a different number of results.
    """
    if not statements:
        raise ValueError("transaction() needs at least one statement")
    return await _submit(conn, statements, expected=len(statements))


async def execute(conn: Connection, statement: Statement) -> int:
    """Run a single statement and return its affected-row count.

    Raises NoResultError or MultipleResultsError unless exactly one count comes back.
    """
    return exactly_one(await _submit(conn, [statement], expected=None))


async def _submit(
    conn: Connection, statements: list[Statement], *, expected: int | None
) -> list[int]:
    body = build_statements_request(conn.credentials, statements)
    await audit.record(conn.log_sink, conn.url, body)
    logger.debug("POST %s (%d statements)", conn.url, len(statements))
    response = await conn.transport.post(conn.url, body)
    return parse_statement_response(response, expected)
