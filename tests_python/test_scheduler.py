"""Tests for the serial and parallel upload schedulers."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from maven_publish import (
    AggregateFailure,
    MockTransport,
    TransferResult,
    UploadPlan,
    UploadScheduler,
)

BASE_URL = "http://repo.example/releases"


def make_plan(count: int) -> UploadPlan:
    """Return a plan with ``count`` entries named ``file-1`` onwards."""
    plan = UploadPlan()
    for index in range(1, count + 1):
        plan.add(Path(f"file-{index}"), f"group/file-{index}")
    return plan


class BarrierTransport(MockTransport):
    """Mock transport whose uploads only finish once all have started."""

    def __init__(self, parties: int, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.barrier = threading.Barrier(parties, timeout=5)

    def upload(self, local_path: Path, url: str) -> TransferResult:
        self.barrier.wait()
        return super().upload(local_path, url)


def test_serial_uploads_in_plan_order(mock_transport: MockTransport) -> None:
    """Serial runs visit every entry in plan order."""
    outcome = UploadScheduler(mock_transport, quiet=True).run(make_plan(4), BASE_URL)

    assert outcome.ok
    assert mock_transport.uploaded_urls == [
        f"{BASE_URL}/group/file-{index}" for index in range(1, 5)
    ]


def test_serial_stops_at_first_failure() -> None:
    """Entries after a failing upload are never attempted."""
    transport = MockTransport({"file-2": ("500", 22)})

    outcome = UploadScheduler(transport, quiet=True).run(make_plan(5), BASE_URL)

    assert not outcome.ok
    assert transport.uploaded_urls == [
        f"{BASE_URL}/group/file-1",
        f"{BASE_URL}/group/file-2",
    ], "uploads after the failure must not start"
    assert str(outcome.error) == f"Status code 500 for {BASE_URL}/group/file-2"


def test_parallel_issues_every_upload_concurrently() -> None:
    """Parallel runs start all uploads before any of them completes."""
    transport = BarrierTransport(6)

    outcome = UploadScheduler(transport, parallel=True, quiet=True).run(
        make_plan(6), BASE_URL
    )

    assert outcome.ok
    assert sorted(transport.uploaded_urls) == sorted(
        f"{BASE_URL}/group/file-{index}" for index in range(1, 7)
    ), "each target must be uploaded exactly once"


def test_parallel_finishes_all_uploads_despite_failure() -> None:
    """A failing upload does not stop the remaining parallel uploads."""
    transport = MockTransport({"file-2": ("500", 22)})

    outcome = UploadScheduler(transport, parallel=True, quiet=True).run(
        make_plan(5), BASE_URL
    )

    assert not outcome.ok
    assert len(transport.uploaded_urls) == 5, "every upload should run to completion"
    assert len(outcome.results) == 5
    assert "500" in str(outcome.error)


def test_parallel_reports_a_failure_when_several_fail() -> None:
    """With several failures one of them is surfaced."""
    transport = MockTransport({"file-1": ("500", 22), "file-3": ("503", 22)})

    outcome = UploadScheduler(transport, parallel=True, quiet=True).run(
        make_plan(4), BASE_URL
    )

    assert not outcome.ok
    assert outcome.error is not None
    assert outcome.error.result.status in {"500", "503"}


@pytest.mark.parametrize("parallel", [False, True])
def test_empty_plan_succeeds(parallel: bool, mock_transport: MockTransport) -> None:
    """Nothing to upload counts as success."""
    outcome = UploadScheduler(mock_transport, parallel=parallel, quiet=True).run(
        UploadPlan(), BASE_URL
    )

    assert outcome.ok
    assert mock_transport.calls == []


def test_raise_for_failure_wraps_transfer_failure() -> None:
    """The aggregate error carries the triggering transfer message."""
    transport = MockTransport({"file-1": ("500", 22)})
    outcome = UploadScheduler(transport, quiet=True).run(make_plan(1), BASE_URL)

    with pytest.raises(AggregateFailure, match="Status code 500") as exc:
        outcome.raise_for_failure()

    assert exc.value.failure is outcome.error


def test_progress_output_respects_quiet(
    mock_transport: MockTransport, capsys: pytest.CaptureFixture[str]
) -> None:
    """Progress lines are printed unless the scheduler is quiet."""
    UploadScheduler(mock_transport).run(make_plan(1), BASE_URL)
    loud = capsys.readouterr().out
    UploadScheduler(mock_transport, quiet=True).run(make_plan(1), BASE_URL)
    quiet = capsys.readouterr().out

    assert f"Uploading to {BASE_URL}/group/file-1\n\n\n" in loud
    assert "Artifacts uploaded successfully" in loud
    assert quiet == ""


def test_failure_summary_goes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """A failed run prints the failure after the separator."""
    transport = MockTransport({"file-1": ("500", 22)})

    UploadScheduler(transport).run(make_plan(1), BASE_URL)

    captured = capsys.readouterr()
    assert "Artifact Upload failed" in captured.err
    assert f"Status code 500 for {BASE_URL}/group/file-1" in captured.err
