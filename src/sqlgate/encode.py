"""Named scalar parameters bound to ``:name`` placeholders in SQL text."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

JsonScalar = int | float | str | None


class ValueKind(StrEnum):
    """Scalar kinds a parameter can carry."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    NULL = "null"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class Value:
    """A parameter value together with the placeholder name it binds to."""

    key: str
    kind: ValueKind
    payload: int | float | str | bool | datetime | None = None

    def to_wire(self) -> JsonScalar:
        """Return the JSON scalar sent to the gateway."""
        if self.kind is ValueKind.BOOL:
            # The gateway stores booleans as integers
            return 1 if self.payload else 0
        if self.kind is ValueKind.TIMESTAMP and isinstance(self.payload, datetime):
            return to_millis(self.payload)
        if self.kind is ValueKind.NULL:
            return None
        return self.payload  # type: ignore[return-value]


def to_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def from_millis(millis: int) -> datetime:
    """Inverse of :func:`to_millis`, always timezone-aware UTC."""
    return EPOCH + timedelta(milliseconds=millis)


def integer(key: str, value: int) -> Value:
    return Value(key, ValueKind.INT, value)


def floating(key: str, value: float) -> Value:
    return Value(key, ValueKind.FLOAT, value)


def string(key: str, value: str) -> Value:
    return Value(key, ValueKind.STRING, value)


def boolean(key: str, value: bool) -> Value:
    return Value(key, ValueKind.BOOL, value)


def null(key: str) -> Value:
    """A parameter explicitly sent as JSON ``null``."""
    return Value(key, ValueKind.NULL)


def timestamp(key: str, value: datetime | int) -> Value:
    """A point in time, given as a datetime or as epoch milliseconds."""
    if isinstance(value, bool) or not isinstance(value, (datetime, int)):
        raise TypeError(f"timestamp() needs a datetime or int milliseconds, got {value!r}")
    return Value(key, ValueKind.TIMESTAMP, value)


def values_object(parameters: list[Value]) -> dict[str, JsonScalar]:
    """Build the ``values`` object for one transaction entry.

    Raises ValueError when two parameters share a key.
    """
    out: dict[str, JsonScalar] = {}
    for param in parameters:
        if param.key in out:
            raise ValueError(f"Duplicate parameter name: {param.key}")
        out[param.key] = param.to_wire()
    return out
