"""Mapping between queries/statements and the gateway's JSON wire format.

Request::

    {"credentials": {"user": "...", "password": "..."},
     "transaction": [{"query": "SELECT ... WHERE id = :id", "values": {"id": 1}}]}

Reads send one ``query`` entry; writes send one or more ``statement`` entries,
which the gateway runs as a single all-or-nothing transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from sqlgate.decode import Decoder, evaluate
from sqlgate.encode import Value, values_object
from sqlgate.errors import DecodeError, StatementFailedError
from sqlgate.models.wire import (
    Credentials,
    QueryResponse,
    RequestBody,
    StatementResponse,
    TransactionEntry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Query(Generic[T]):
    """A read: SQL text, its parameters and the decoder for each row."""

    text: str
    parameters: list[Value]
    decoder: Decoder[T]


@dataclass(frozen=True)
class Statement:
    """A write or DDL statement. Yields an affected-row count."""

    text: str
    parameters: list[Value] = field(default_factory=list)


def build_query_request(credentials: Credentials | None, query: Query[Any]) -> bytes:
    """Serialize a single-entry ``query`` transaction."""
    entry = TransactionEntry(kind="query", sql=query.text, values=values_object(query.parameters))
    return RequestBody(credentials=credentials, transaction=[entry]).to_json_bytes()


def build_statements_request(
    credentials: Credentials | None, statements: list[Statement]
) -> bytes:
    """Serialize a ``statement`` transaction, preserving statement order."""
    entries = [
        TransactionEntry(kind="statement", sql=stmt.text, values=values_object(stmt.parameters))
        for stmt in statements
    ]
    return RequestBody(credentials=credentials, transaction=entries).to_json_bytes()


def parse_query_response(body: Any, decoder: Decoder[T]) -> list[T]:
    """Decode every row of the sole result set, in server order."""
    try:
        response = QueryResponse.model_validate(body)
    except ValidationError as e:
        raise DecodeError(f"malformed query response: {e}") from e

    if len(response.results) != 1:
        raise DecodeError(f"expected one query result, got {len(response.results)}")
    result = response.results[0]
    if not result.success:
        raise StatementFailedError(0, result.error or "query reported failure")

    rows = [evaluate(decoder, row) for row in result.result_set]
    logger.debug("Decoded %d rows", len(rows))
    return rows


def parse_statement_response(body: Any, expected: int | None = None) -> list[int]:
    """Return one affected-row count per submitted statement, in order.

    When ``expected`` is given, a response with a different number of results
    raises DecodeError.
    """
    try:
        response = StatementResponse.model_validate(body)
    except ValidationError as e:
        raise DecodeError(f"malformed statement response: {e}") from e

    if expected is not None and len(response.results) != expected:
        raise DecodeError(f"expected {expected} statement results, got {len(response.results)}")

    counts: list[int] = []
    for index, result in enumerate(response.results):
        if not result.success:
            raise StatementFailedError(index, result.error or "statement reported failure")
        if result.rows_updated is None:
            raise DecodeError(f"missing field `rowsUpdated` in result {index}")
        counts.append(result.rows_updated)
    return counts
