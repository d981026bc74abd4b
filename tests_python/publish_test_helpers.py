"""Shared helpers for the publisher test suites."""

from __future__ import annotations

import hashlib
from pathlib import Path

from maven_publish import UploadPlan

__all__ = ["expected_digest", "remote_to_local", "write_config", "write_file"]


def write_file(path: Path, content: bytes = b"data") -> Path:
    """Create ``path`` with ``content``, ensuring parent directories exist."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def write_config(root: Path, body: str, name: str = "publish.toml") -> Path:
    """Write a TOML publish configuration beneath ``root``.

    Parameters
    ----------
    root : Path
        Directory receiving the configuration file.
    body : str
        TOML text.
    name : str, default="publish.toml"
        File name to use.

    Returns
    -------
    Path
        Path to the written configuration.
    """

    return write_file(root / name, body.encode("utf-8"))


def remote_to_local(plan: UploadPlan) -> dict[str, Path]:
    """Invert ``plan`` so tests can look entries up by remote path."""

    return {entry.remote_path: entry.local_path for entry in plan}


def expected_digest(data: bytes, algorithm: str) -> str:
    """Return the hex digest of ``data`` computed independently."""

    return hashlib.new(algorithm, data).hexdigest()
