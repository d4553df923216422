"""Row decoders: composable descriptions of how to read one result row.

A decoder is a pure value built from five variants: ``Field``, ``Succeed``,
``Fail``, ``Map`` and ``AndThen``. Nothing happens until :func:`evaluate` runs
it against a row (a JSON object from the gateway's ``resultSet``). The
``get2``..``get8`` helpers combine several field decoders into one typed value
and are written only in terms of ``and_then``/``map``/``succeed``.

Example::

    person = decode.get2(
        Person,
        decode.integer("id"),
        decode.nullable(decode.string("name")),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlgate.encode import from_millis
from sqlgate.errors import DecodeError

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
E = TypeVar("E")
F = TypeVar("F")
G = TypeVar("G")
H = TypeVar("H")

Row = Mapping[str, Any]


# --- Primitive kinds ---


@dataclass(frozen=True)
class Primitive(Generic[T]):
    """Coerces one raw JSON scalar into a Python value or raises DecodeError."""

    label: str
    convert: Callable[[Any], T]


def _to_int(raw: Any) -> int:
    # bool is an int subclass but never a valid integer column
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    raise DecodeError(f"expected an integer, got {raw!r}")


def _to_float(raw: Any) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    raise DecodeError(f"expected a number, got {raw!r}")


def _to_string(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    raise DecodeError(f"expected a string, got {raw!r}")


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        raise DecodeError(f"expected an integer or string in boolean field, got {raw!r}")
    if isinstance(raw, int):
        if raw == 1:
            return True
        if raw == 0:
            return False
        raise DecodeError("unexpected integer in boolean field")
    if isinstance(raw, str):
        if raw == "TRUE":
            return True
        if raw == "FALSE":
            return False
        raise DecodeError("unexpected string in boolean field")
    raise DecodeError(f"expected an integer or string in boolean field, got {raw!r}")


def _to_timestamp(raw: Any) -> datetime:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return from_millis(raw)
    if isinstance(raw, float) and raw.is_integer():
        return from_millis(int(raw))
    raise DecodeError(f"expected integer milliseconds, got {raw!r}")


INT: Primitive[int] = Primitive("int", _to_int)
FLOAT: Primitive[float] = Primitive("float", _to_float)
STRING: Primitive[str] = Primitive("string", _to_string)
BOOL: Primitive[bool] = Primitive("bool", _to_bool)
TIMESTAMP: Primitive[datetime] = Primitive("timestamp", _to_timestamp)


def nullable_kind(inner: Primitive[T]) -> Primitive[T | None]:
    """Wrap a primitive so JSON ``null`` decodes to None."""

    def convert(raw: Any) -> T | None:
        if raw is None:
            return None
        return inner.convert(raw)

    return Primitive(f"nullable {inner.label}", convert)


# --- Decoder variants ---


class Decoder(Generic[T]):
    """Base class of the decoder variants."""

    def map(self, fn: Callable[[T], U]) -> Decoder[U]:
        """Transform the decoded value."""
        return Map(self, fn)

    def and_then(self, fn: Callable[[T], Decoder[U]]) -> Decoder[U]:
        """Pick the next decoder based on the decoded value."""
        return AndThen(self, fn)

    def decode(self, row: Row) -> T:
        """Evaluate this decoder against ``row``."""
        return evaluate(self, row)


@dataclass(frozen=True)
class Field(Decoder[T]):
    name: str
    kind: Primitive[T]


@dataclass(frozen=True)
class Succeed(Decoder[T]):
    value: T


@dataclass(frozen=True)
class Fail(Decoder[Any]):
    message: str


@dataclass(frozen=True)
class Map(Decoder[U]):
    inner: Decoder[Any]
    fn: Callable[[Any], U]


@dataclass(frozen=True)
class AndThen(Decoder[U]):
    inner: Decoder[Any]
    fn: Callable[[Any], Decoder[U]]


def evaluate(decoder: Decoder[T], row: Row) -> T:
    """Run ``decoder`` against one row.

    Raises DecodeError on a missing field, a wrongly shaped value, or an
    explicit ``fail``.
    """
    if isinstance(decoder, Field):
        if decoder.name not in row:
            raise DecodeError(f"missing field `{decoder.name}`")
        return decoder.kind.convert(row[decoder.name])
    if isinstance(decoder, Succeed):
        return decoder.value
    if isinstance(decoder, Fail):
        raise DecodeError(decoder.message)
    if isinstance(decoder, Map):
        return decoder.fn(evaluate(decoder.inner, row))
    if isinstance(decoder, AndThen):
        following = decoder.fn(evaluate(decoder.inner, row))
        if not isinstance(following, Decoder):
            raise TypeError(f"and_then callback must return a Decoder, got {following!r}")
        return evaluate(following, row)
    raise TypeError(f"Unknown decoder: {decoder!r}")


# --- Constructors ---


def field(name: str, kind: Primitive[T]) -> Decoder[T]:
    return Field(name, kind)


def integer(name: str) -> Decoder[int]:
    return Field(name, INT)


def floating(name: str) -> Decoder[float]:
    return Field(name, FLOAT)


def string(name: str) -> Decoder[str]:
    return Field(name, STRING)


def boolean(name: str) -> Decoder[bool]:
    """Boolean column stored as 0/1 or as the strings "TRUE"/"FALSE"."""
    return Field(name, BOOL)


def timestamp(name: str) -> Decoder[datetime]:
    """Integer milliseconds since the epoch, decoded to an aware UTC datetime."""
    return Field(name, TIMESTAMP)


def nullable(decoder: Decoder[T]) -> Decoder[T | None]:
    """Make a field decoder accept JSON ``null`` (decoded as None)."""
    if not isinstance(decoder, Field):
        raise TypeError("nullable() only wraps field decoders")
    return Field(decoder.name, nullable_kind(decoder.kind))


def succeed(value: T) -> Decoder[T]:
    return Succeed(value)


def fail(message: str) -> Decoder[Any]:
    return Fail(message)


# --- Field combination ---


def get2(fn: Callable[[A, B], T], d1: Decoder[A], d2: Decoder[B]) -> Decoder[T]:
    """Decode two fields from the same row and combine them with ``fn``."""
    return d1.and_then(lambda a: d2.map(lambda b: fn(a, b)))


def _combine(fn: Callable[..., T], decoders: tuple[Decoder[Any], ...]) -> Decoder[T]:
    collected: Decoder[tuple[Any, ...]] = succeed(())
    for decoder in decoders:
        collected = get2(lambda acc, value: (*acc, value), collected, decoder)
    return collected.map(lambda values: fn(*values))


def get3(
    fn: Callable[[A, B, C], T], d1: Decoder[A], d2: Decoder[B], d3: Decoder[C]
) -> Decoder[T]:
    return _combine(fn, (d1, d2, d3))


def get4(
    fn: Callable[[A, B, C, D], T],
    d1: Decoder[A],
    d2: Decoder[B],
    d3: Decoder[C],
    d4: Decoder[D],
) -> Decoder[T]:
    return _combine(fn, (d1, d2, d3, d4))


def get5(
    fn: Callable[[A, B, C, D, E], T],
    d1: Decoder[A],
    d2: Decoder[B],
    d3: Decoder[C],
    d4: Decoder[D],
    d5: Decoder[E],
) -> Decoder[T]:
    return _combine(fn, (d1, d2, d3, d4, d5))


def get6(
    fn: Callable[[A, B, C, D, E, F], T],
    d1: Decoder[A],
    d2: Decoder[B],
    d3: Decoder[C],
    d4: Decoder[D],
    d5: Decoder[E],
    d6: Decoder[F],
) -> Decoder[T]:
    return _combine(fn, (d1, d2, d3, d4, d5, d6))


def get7(
    fn: Callable[[A, B, C, D, E, F, G], T],
    d1: Decoder[A],
    d2: Decoder[B],
    d3: Decoder[C],
    d4: Decoder[D],
    d5: Decoder[E],
    d6: Decoder[F],
    d7: Decoder[G],
) -> Decoder[T]:
    return _combine(fn, (d1, d2, d3, d4, d5, d6, d7))


def get8(
    fn: Callable[[A, B, C, D, E, F, G, H], T],
    d1: Decoder[A],
    d2: Decoder[B],
    d3: Decoder[C],
    d4: Decoder[D],
    d5: Decoder[E],
    d6: Decoder[F],
    d7: Decoder[G],
    d8: Decoder[H],
) -> Decoder[T]:
    return _combine(fn, (d1, d2, d3, d4, d5, d6, d7, d8))
