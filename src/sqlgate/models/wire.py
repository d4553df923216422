"""Wire-format models for the gateway's JSON request and response bodies."""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class Credentials(BaseModel):
    """User/password pair embedded in every request body."""

    model_config = ConfigDict(frozen=True)

    user: str
    password: str


class TransactionEntry(BaseModel):
    """One entry of the ``transaction`` array.

    ``kind`` is ``"query"`` for reads and ``"statement"`` for writes; it becomes
    the key holding the SQL text on the wire.
    """

    kind: Literal["query", "statement"] = Field(exclude=True)
    sql: str = Field(exclude=True)
    values: dict[str, Any] = Field(default_factory=dict)

    @model_serializer(mode="wrap")
    def _wire_shape(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {self.kind: self.sql, **handler(self)}


class RequestBody(BaseModel):
    """Top-level request body."""

    credentials: Credentials | None = None
    transaction: list[TransactionEntry]

    def to_json_bytes(self) -> bytes:
        """Serialize for sending. ``credentials`` is omitted entirely when unset."""
        payload = self.model_dump()
        if self.credentials is None:
            del payload["credentials"]
        # NaN and infinities have no JSON form; raises ValueError
        return json.dumps(payload, separators=(",", ":"), allow_nan=False).encode()


class QueryResult(BaseModel):
    """Result entry for a ``query`` transaction entry."""

    success: bool
    result_set: list[dict[str, Any]] = Field(default_factory=list, alias="resultSet")
    error: str | None = None


class StatementResult(BaseModel):
    """Result entry for a ``statement`` transaction entry."""

    success: bool
    rows_updated: int | None = Field(default=None, alias="rowsUpdated")
    error: str | None = None


class QueryResponse(BaseModel):
    results: list[QueryResult]


class StatementResponse(BaseModel):
    results: list[StatementResult]
