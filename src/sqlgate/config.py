"""Environment-variable-based configuration."""

import os
from pathlib import Path


def get_gateway_url() -> str:
    """Return the gateway database URL from SQLGATE_URL."""
    return os.environ.get("SQLGATE_URL", "http://localhost:12321/test")


def get_user() -> str | None:
    """Return the gateway user from SQLGATE_USER, if set."""
    return os.environ.get("SQLGATE_USER") or None


def get_password() -> str | None:
    """Return the gateway password from SQLGATE_PASSWORD, if set."""
    return os.environ.get("SQLGATE_PASSWORD") or None


def get_log_file() -> Path | None:
    """Return the audit log path from SQLGATE_LOG_FILE, if set."""
    raw = os.environ.get("SQLGATE_LOG_FILE")
    if not raw:
        return None
    return Path(raw).expanduser()


def get_timeout() -> float:
    """Return the HTTP timeout in seconds from SQLGATE_TIMEOUT."""
    return float(os.environ.get("SQLGATE_TIMEOUT", "10.0"))


def get_log_level() -> str:
    """Return the logging level from SQLGATE_LOG_LEVEL."""
    return os.environ.get("SQLGATE_LOG_LEVEL", "WARNING")
