"""Shared fixtures for the publisher test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from maven_publish import ArtifactSpec, Coordinate, MockTransport
from maven_publish.environment import MOCK_ENV_VAR


@pytest.fixture(autouse=True)
def _clear_mock_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep an exported ``MOCK_NEXUS`` from leaking into the tests."""

    monkeypatch.delenv(MOCK_ENV_VAR, raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an isolated workspace directory."""

    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def staging_dir(workspace: Path) -> Path:
    """Return a staging directory that does not exist yet."""

    return workspace / "build" / "poms"


@pytest.fixture
def release_coordinate() -> Coordinate:
    """Return the canonical release coordinate."""

    return Coordinate("com.example", "widget", "1.0.0")


@pytest.fixture
def snapshot_coordinate() -> Coordinate:
    """Return the canonical snapshot coordinate."""

    return Coordinate("com.example", "widget", "1.0.0-SNAPSHOT")


@pytest.fixture
def jar_artifact(workspace: Path) -> ArtifactSpec:
    """Write a small jar payload and describe it."""

    path = workspace / "widget.jar"
    path.write_bytes(b"PK\x03\x04 widget payload \xff\xfe")
    return ArtifactSpec(path=path, packaging="jar")


@pytest.fixture
def mock_transport() -> MockTransport:
    """Return a transport that accepts every upload."""

    return MockTransport()
