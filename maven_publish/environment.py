"""Environment helpers shared by the command-line entry point."""

from __future__ import annotations

import datetime as dt
import os

__all__ = ["MOCK_ENV_VAR", "MOCK_TIMESTAMP", "current_timestamp", "mock_mode_enabled"]

MOCK_ENV_VAR = "MOCK_NEXUS"
MOCK_TIMESTAMP = "11111111111111"


def mock_mode_enabled() -> bool:
    """Return ``True`` when :data:`MOCK_ENV_VAR` is set to a non-empty value."""
    return bool(os.environ.get(MOCK_ENV_VAR))


def current_timestamp() -> str:
    """Return the ``lastUpdated`` value for a publish run.

    Mock runs use :data:`MOCK_TIMESTAMP` so generated descriptors are
    reproducible; otherwise the current UTC time is formatted as
    ``yyyymmddHHMMss``.
    """

    if mock_mode_enabled():
        return MOCK_TIMESTAMP
    return dt.datetime.now(tz=dt.UTC).strftime("%Y%m%d%H%M%S")
