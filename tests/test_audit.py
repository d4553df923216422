"""Tests for the audit log side-channel."""

import json
import logging
from datetime import UTC, datetime, timedelta, timezone

import pytest

from sqlgate.audit import FileLogSink, LogSink, format_line, record


def test_format_line_embeds_body_verbatim():
    body = b'{"transaction":[{"query":"SELECT 1","values":{}}]}'
    line = format_line("http://h/db", body, now=datetime(2024, 1, 2, 3, 4, 5, 678, tzinfo=UTC))
    assert line == (
        b'{"time":"2024-01-02T03:04:05Z","url":"http://h/db","request":' + body + b"}\n"
    )
    assert json.loads(line)["request"] == json.loads(body)


def test_format_line_converts_to_utc():
    local = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    line = format_line("u", b"{}", now=local)
    assert json.loads(line)["time"] == "2024-01-02T03:04:05Z"


def test_format_line_escapes_url():
    line = format_line('http://h/"odd"', b"{}")
    assert json.loads(line)["url"] == 'http://h/"odd"'


def test_sinks_conform_to_protocol(recording_sink, broken_sink, tmp_path):
    assert isinstance(FileLogSink(tmp_path / "x.log"), LogSink)
    assert isinstance(recording_sink, LogSink)
    assert isinstance(broken_sink, LogSink)


@pytest.mark.asyncio
async def test_file_sink_appends(tmp_path):
    path = tmp_path / "audit.log"
    path.write_bytes(b"first\n")
    sink = FileLogSink(path)
    await sink.append(b"second\n")
    await sink.append(b"third\n")
    assert path.read_bytes() == b"first\nsecond\nthird\n"


@pytest.mark.asyncio
async def test_file_sink_creates_missing_file(tmp_path):
    path = tmp_path / "new.log"
    await FileLogSink(path).append(b"x\n")
    assert path.read_bytes() == b"x\n"


@pytest.mark.asyncio
async def test_record_without_sink_is_noop():
    await record(None, "http://h/db", b"{}")


@pytest.mark.asyncio
async def test_record_writes_one_line(recording_sink):
    await record(recording_sink, "http://h/db", b'{"a":1}')
    assert len(recording_sink.lines) == 1
    assert recording_sink.lines[0].endswith(b'"request":{"a":1}}\n')


@pytest.mark.asyncio
async def test_record_swallows_and_logs_failure(broken_sink, caplog):
    with caplog.at_level(logging.WARNING, logger="sqlgate.audit"):
        await record(broken_sink, "http://h/db", b"{}")
    assert broken_sink.attempts == 1
    assert "Audit log append failed" in caplog.text


@pytest.mark.asyncio
async def test_record_swallows_os_error(tmp_path):
    directory = tmp_path / "is_a_dir"
    directory.mkdir()
    await record(FileLogSink(directory), "http://h/db", b"{}")
