"""Digest helpers for staged descriptors and artifact sidecars."""

from __future__ import annotations

import hashlib
from pathlib import Path

from .layout import DIGEST_SUFFIXES

__all__ = ["digest", "sidecar_path", "write_digest_sidecars"]


def digest(data: bytes) -> tuple[str, str]:
    """Return the MD5 and SHA-1 hex digests of ``data``.

    Parameters
    ----------
    data:
        Exact bytes to hash. Callers must read files in binary mode so no
        text decoding alters the digest.

    Returns
    -------
    tuple[str, str]
        ``(md5_hex, sha1_hex)`` in lowercase hexadecimal.

    Examples
    --------
    >>> digest(b"")[0]
    'd41d8cd98f00b204e9800998ecf8427e'
    """

    return hashlib.md5(data).hexdigest(), hashlib.sha1(data).hexdigest()


def sidecar_path(path: Path, algorithm: str) -> Path:
    """Return ``path`` with ``.<algorithm>`` appended to its name."""
    return path.with_name(f"{path.name}.{algorithm}")


def write_digest_sidecars(path: Path, data: bytes) -> dict[str, Path]:
    """Write ``.md5`` and ``.sha1`` sidecars for ``data`` next to ``path``.

    Each sidecar holds the bare hex digest, which is the format Maven
    clients read back when verifying downloads. ``path`` itself is not
    written.

    Returns
    -------
    dict[str, Path]
        Mapping of algorithm name to the sidecar written for it.
    """

    sidecars: dict[str, Path] = {}
    for algorithm, hex_digest in zip(DIGEST_SUFFIXES, digest(data), strict=True):
        target = sidecar_path(path, algorithm)
        target.write_text(hex_digest, encoding="ascii")
        sidecars[algorithm] = target
    return sidecars
