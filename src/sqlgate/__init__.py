"""Typed async client for a SQL-over-HTTP gateway."""

from sqlgate import decode, encode
from sqlgate.audit import FileLogSink, LogSink
from sqlgate.client import execute, get_all, get_maybe_one, get_one, transaction
from sqlgate.connection import Connection
from sqlgate.decode import Decoder
from sqlgate.encode import Value
from sqlgate.errors import (
    DecodeError,
    GatewayError,
    MultipleResultsError,
    NoResultError,
    SqlGateError,
    StatementFailedError,
    TransportError,
)
from sqlgate.protocol import Query, Statement
from sqlgate.transport import HttpxTransport, Transport

__all__ = [
    "Connection",
    "DecodeError",
    "Decoder",
    "FileLogSink",
    "GatewayError",
    "HttpxTransport",
    "LogSink",
    "MultipleResultsError",
    "NoResultError",
    "Query",
    "SqlGateError",
    "Statement",
    "StatementFailedError",
    "Transport",
    "TransportError",
    "Value",
    "decode",
    "encode",
    "execute",
    "get_all",
    "get_maybe_one",
    "get_one",
    "transaction",
]
