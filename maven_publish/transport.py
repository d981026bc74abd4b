"""Transports that move one staged file to one repository URL.

Two implementations are provided: :class:`CurlTransport` shells out to
``curl`` through :mod:`plumbum`, and :class:`MockTransport` answers from a
table so the pipeline can be exercised without a network.
"""

from __future__ import annotations

import dataclasses
import os
import threading
import typing as typ
from pathlib import Path

from plumbum import local

if typ.TYPE_CHECKING:
    from plumbum.commands.base import BaseCommand

    from .config import AuthConfig

__all__ = [
    "DEFAULT_NOPROXY",
    "CurlTransport",
    "MockTransport",
    "TransferResult",
    "Transport",
    "is_transfer_success",
]

DEFAULT_NOPROXY = "127.0.0.1"


def is_transfer_success(status: str, exit_code: int | None) -> bool:
    """Return ``True`` for a ``2xx`` status or a zero transport exit code.

    Either condition alone is enough: ``curl`` exits ``0`` for any HTTP
    response it managed to receive, so a ``500`` with exit code ``0`` still
    counts as delivered.

    Examples
    --------
    >>> is_transfer_success("201", 7), is_transfer_success("500", 0)
    (True, True)
    >>> is_transfer_success("500", 22)
    False
    """

    return status[:1] == "2" or exit_code == 0


@dataclasses.dataclass(slots=True, frozen=True)
class TransferResult:
    """What the transport observed for one upload."""

    url: str
    status: str
    exit_code: int | None

    @property
    def ok(self) -> bool:
        """Whether the upload counts as successful."""
        return is_transfer_success(self.status, self.exit_code)

    @property
    def error_message(self) -> str:
        """Failure description reported when :attr:`ok` is ``False``."""
        return f"Status code {self.status} for {self.url}"


class Transport(typ.Protocol):
    """Capability uploading ``local_path`` to ``url``."""

    def upload(self, local_path: Path, url: str) -> TransferResult:
        """Upload ``local_path`` and report the outcome."""
        ...


class CurlTransport:
    """Upload files with ``curl --upload-file`` (an HTTP ``PUT``).

    Parameters
    ----------
    auth : AuthConfig | None, optional
        Credentials passed to ``curl -u``.
    insecure : bool, default=False
        Skip TLS certificate verification.
    noproxy : str, default="127.0.0.1"
        Comma separated hosts that bypass any configured proxy.
    cwd : Path | None, optional
        Working directory for the ``curl`` process.
    curl : BaseCommand | None, optional
        Command to run instead of ``curl`` from ``PATH``.
    """

    def __init__(
        self,
        *,
        auth: AuthConfig | None = None,
        insecure: bool = False,
        noproxy: str = DEFAULT_NOPROXY,
        cwd: Path | None = None,
        curl: BaseCommand | None = None,
    ) -> None:
        self.auth = auth
        self.insecure = insecure
        self.noproxy = noproxy or DEFAULT_NOPROXY
        self.cwd = cwd
        self._curl = curl

    def build_arguments(self, local_path: Path, url: str) -> list[str]:
        """Return the ``curl`` argument list used for ``local_path``."""

        arguments = [
            "--silent",
            "--output",
            os.devnull,
            "--write-out",
            "%{http_code}",
            "--upload-file",
            str(Path(local_path).resolve()),
            "--noproxy",
            self.noproxy,
        ]
        if self.auth is not None:
            arguments.extend(["-u", f"{self.auth.username}:{self.auth.password}"])
        if self.insecure:
            arguments.append("--insecure")
        arguments.append(url)
        return arguments

    def upload(self, local_path: Path, url: str) -> TransferResult:
        """Run ``curl`` for ``local_path`` and capture its status and exit code.

        Raises
        ------
        plumbum.CommandNotFound
            Raised when ``curl`` is not on ``PATH``.
        """

        curl = self._curl if self._curl is not None else local["curl"]
        bound = curl[tuple(self.build_arguments(local_path, url))]
        exit_code, stdout, _stderr = bound.run(retcode=None, cwd=self.cwd)
        return TransferResult(
            url=url, status=stdout.strip().strip('"'), exit_code=exit_code
        )


class MockTransport:
    """Deterministic in-memory transport.

    ``responses`` maps URL suffixes to ``(status, exit_code)`` pairs. The
    longest matching suffix wins; unmatched URLs get ``default``. Every call
    is recorded in :attr:`calls`, safely across threads.

    Examples
    --------
    >>> transport = MockTransport({"widget-1.0.jar": ("500", 22)})
    >>> transport.upload(Path("w.jar"), "http://repo/widget-1.0.jar").ok
    False
    >>> transport.upload(Path("pom.xml"), "http://repo/widget-1.0.pom").status
    '201'
    """

    def __init__(
        self,
        responses: typ.Mapping[str, tuple[str, int | None]] | None = None,
        *,
        default: tuple[str, int | None] = ("201", 0),
    ) -> None:
        self.responses = dict(responses or {})
        self.default = default
        self.calls: list[tuple[Path, str]] = []
        self._lock = threading.Lock()

    def _response_for(self, url: str) -> tuple[str, int | None]:
        matches = [suffix for suffix in self.responses if url.endswith(suffix)]
        if not matches:
            return self.default
        return self.responses[max(matches, key=len)]

    def upload(self, local_path: Path, url: str) -> TransferResult:
        """Record the call and return the configured outcome for ``url``."""
        with self._lock:
            self.calls.append((local_path, url))
        status, exit_code = self._response_for(url)
        return TransferResult(url=url, status=status, exit_code=exit_code)

    @property
    def uploaded_urls(self) -> list[str]:
        """URLs passed to :meth:`upload`, in call order."""
        with self._lock:
            return [url for _path, url in self.calls]
