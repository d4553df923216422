"""Wire-format models."""

from sqlgate.models.wire import (
    Credentials,
    QueryResponse,
    QueryResult,
    RequestBody,
    StatementResponse,
    StatementResult,
    TransactionEntry,
)

__all__ = [
    "Credentials",
    "QueryResponse",
    "QueryResult",
    "RequestBody",
    "StatementResponse",
    "StatementResult",
    "TransactionEntry",
]
