"""Exception hierarchy for gateway operations.

``GatewayError`` is the generic failure kind callers usually catch: transport
and decode problems both surface through it. The subclasses exist so a caller
(or a log line) can still tell them apart.
"""


class SqlGateError(Exception):
    """Base class for every error raised by sqlgate."""


class GatewayError(SqlGateError):
    """A request could not be completed or its response could not be used."""

    def __init__(self, message: str) -> None:
        """Initialize with a human-readable message."""
        super().__init__(message)
        self.message = message


class TransportError(GatewayError):
    """Network failure or non-2xx HTTP status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialize with the transport message and optional HTTP status."""
        super().__init__(message)
        self.status_code = status_code


class DecodeError(GatewayError):
    """A row or response body did not match what the decoder expected."""


class StatementFailedError(GatewayError):
    """The gateway reported ``success: false`` for one entry of a transaction."""

    def __init__(self, index: int, message: str) -> None:
        """Initialize with the failing entry's position and the server message."""
        super().__init__(f"statement {index} failed: {message}")
        self.index = index


class NoResultError(SqlGateError):
    """A single-result operation received no rows."""

    def __init__(self) -> None:
        """Initialize with a fixed message."""
        super().__init__("expected one result, got none")


class MultipleResultsError(SqlGateError):
    """A single-result operation received more than one row."""

    def __init__(self, count: int) -> None:
        """Initialize with the number of rows actually returned."""
        super().__init__(f"expected one result, got {count}")
        self.count = count
