"""Drive an :class:`~maven_publish.plan.UploadPlan` through a transport.

Serial runs upload in plan order and stop at the first failure, so later
entries are never attempted. Parallel runs submit every entry at once and
wait for all of them, then report the first failure seen while joining.
"""

from __future__ import annotations

import dataclasses
import sys
import typing as typ
from concurrent.futures import ThreadPoolExecutor, as_completed

from .errors import AggregateFailure, TransferFailure

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .plan import UploadPlan
    from .transport import TransferResult, Transport

__all__ = ["PublishOutcome", "UploadScheduler"]

_SEPARATOR = "-------------------------------------------"


@dataclasses.dataclass(slots=True)
class PublishOutcome:
    """Aggregate result of a publish run."""

    error: TransferFailure | None = None
    results: list[TransferResult] = dataclasses.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """``True`` when every attempted transfer succeeded."""
        return self.error is None

    @property
    def attempted_urls(self) -> list[str]:
        """URLs whose transfer was attempted, in completion order."""
        return [result.url for result in self.results]

    def raise_for_failure(self) -> None:
        """Raise :class:`AggregateFailure` when the run did not succeed."""
        if self.error is not None:
            raise AggregateFailure(self.error)


class UploadScheduler:
    """Execute upload plans serially or in parallel.

    Parameters
    ----------
    transport : Transport
        Capability performing each individual upload.
    parallel : bool, default=False
        Submit every upload at once instead of one after another.
    quiet : bool, default=False
        Suppress progress output.
    """

    def __init__(
        self, transport: Transport, *, parallel: bool = False, quiet: bool = False
    ) -> None:
        self.transport = transport
        self.parallel = parallel
        self.quiet = quiet

    def run(self, plan: UploadPlan, base_url: str) -> PublishOutcome:
        """Upload every entry of ``plan`` beneath ``base_url``."""

        tasks = [(entry.local_path, f"{base_url}/{entry.remote_path}") for entry in plan]
        runner = self._run_parallel if self.parallel else self._run_serial
        outcome = runner(tasks)
        self._report(outcome)
        return outcome

    def _upload(self, local_path: Path, url: str) -> TransferResult:
        if not self.quiet:
            print(f"Uploading to {url}\n\n")
        return self.transport.upload(local_path, url)

    def _run_serial(self, tasks: list[tuple[Path, str]]) -> PublishOutcome:
        outcome = PublishOutcome()
        for local_path, url in tasks:
            result = self._upload(local_path, url)
            outcome.results.append(result)
            if not result.ok:
                outcome.error = TransferFailure(result)
                break
        return outcome

    def _run_parallel(self, tasks: list[tuple[Path, str]]) -> PublishOutcome:
        outcome = PublishOutcome()
        if not tasks:
            return outcome
        with ThreadPoolExecutor(max_workers=len(tasks)) as executor:
            futures = [
                executor.submit(self._upload, local_path, url)
                for local_path, url in tasks
            ]
            for future in as_completed(futures):
                result = future.result()
                outcome.results.append(result)
                if not result.ok and outcome.error is None:
                    outcome.error = TransferFailure(result)
        return outcome

    def _report(self, outcome: PublishOutcome) -> None:
        if self.quiet:
            return
        print(f"{_SEPARATOR}\n")
        if outcome.error is not None:
            print(f"Artifact Upload failed\n{outcome.error}", file=sys.stderr)
        else:
            print("Artifacts uploaded successfully")
