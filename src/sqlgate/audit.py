"""Best-effort audit log of every request sent to the gateway.

Each call appends one line::

    {"time":"2026-01-02T03:04:05Z","url":"http://...","request":{...}}

where ``request`` is the exact JSON body about to be POSTed. Failures to write
are logged and discarded; they never affect the database call.
"""

import asyncio
import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class LogSink(Protocol):
    """Append-only destination for audit lines."""

    async def append(self, data: bytes) -> None:
        """Append ``data``. May raise; callers treat failures as non-fatal."""
        ...


class FileLogSink:
    """Appends to a file, opening and closing it on every call."""

    def __init__(self, path: Path | str) -> None:
        """Initialize with the log file path."""
        self.path = Path(path)

    async def append(self, data: bytes) -> None:
        """Append ``data`` without touching existing content."""
        await asyncio.to_thread(self._append_sync, data)

    def _append_sync(self, data: bytes) -> None:
        with self.path.open("ab") as fh:
            fh.write(data)

    def __repr__(self) -> str:
        return f"FileLogSink({str(self.path)!r})"


def format_line(url: str, body: bytes, *, now: datetime | None = None) -> bytes:
    """Build one audit line. ``body`` is embedded verbatim."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%SZ")
    prefix = '{"time":' + json.dumps(stamp) + ',"url":' + json.dumps(url) + ',"request":'
    return prefix.encode() + body + b"}\n"


async def record(sink: LogSink | None, url: str, body: bytes) -> None:
    """Append an audit line to ``sink`` if one is configured. Never raises."""
    if sink is None:
        return
    try:
        await sink.append(format_line(url, body))
    except Exception:
        logger.warning("Audit log append failed for %r", sink, exc_info=True)
