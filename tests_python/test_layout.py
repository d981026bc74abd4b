"""Tests for the repository layout helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from maven_publish import ArtifactSpec, Coordinate, artifact_filename, is_snapshot, resolve


@pytest.mark.parametrize(
    ("group_id", "expected"),
    [
        ("com.example", "com/example/widget"),
        ("org.acme.tools.deep", "org/acme/tools/deep/widget"),
        ("single", "single/widget"),
    ],
)
def test_group_path_replaces_every_dot(group_id: str, expected: str) -> None:
    """Each dot in the group becomes one path separator."""
    layout = resolve(Coordinate(group_id, "widget", "2.0"))

    assert layout.group_path == expected, "group path should mirror the group id"
    assert layout.version_path.startswith(f"{layout.group_path}/"), (
        "version path must live beneath the group path"
    )
    assert layout.version_path == f"{expected}/2.0"


def test_layout_exposes_descriptor_locations(release_coordinate: Coordinate) -> None:
    """Metadata and POM locations follow the Maven convention."""
    layout = resolve(release_coordinate)

    assert layout.artifact_base_name == "widget-1.0.0"
    assert layout.group_metadata_path == "com/example/widget/maven-metadata.xml"
    assert (
        layout.version_metadata_path == "com/example/widget/1.0.0/maven-metadata.xml"
    )
    assert layout.pom_path == "com/example/widget/1.0.0/widget-1.0.0.pom"


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("1.0-SNAPSHOT", True),
        ("1.0-snapshot", True),
        ("2.3.4-SnapShot", True),
        ("SNAPSHOT", True),
        ("1.0", False),
        ("1.0-SNAPSHOT-1", False),
        ("", False),
    ],
)
def test_is_snapshot_matches_suffix_case_insensitively(
    version: str, expected: bool
) -> None:
    """Only a trailing SNAPSHOT, in any casing, marks a snapshot."""
    assert is_snapshot(version) is expected


@pytest.mark.parametrize(
    ("packaging", "classifier", "expected"),
    [
        ("jar", None, "widget-1.0.0.jar"),
        ("jar", "", "widget-1.0.0.jar"),
        ("jar", "sources", "widget-1.0.0-sources.jar"),
        ("tar.gz", "linux-x86_64", "widget-1.0.0-linux-x86_64.tar.gz"),
        ("zip", "javadoc", "widget-1.0.0-javadoc.zip"),
    ],
)
def test_artifact_filename_is_deterministic(
    release_coordinate: Coordinate,
    packaging: str,
    classifier: str | None,
    expected: str,
) -> None:
    """Filenames join base name, classifier and packaging with fixed separators."""
    artifact = ArtifactSpec(Path("payload"), packaging, classifier)

    assert artifact_filename(resolve(release_coordinate), artifact) == expected
