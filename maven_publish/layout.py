"""Maven repository layout derived from a coordinate.

The helpers here are pure: they never touch the filesystem or the network.

Usage
-----
Resolve the remote directories for a coordinate::

    from maven_publish.layout import Coordinate, resolve

    layout = resolve(Coordinate("com.example", "widget", "1.0.0"))
    layout.pom_path  # 'com/example/widget/1.0.0/widget-1.0.0.pom'
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

__all__ = [
    "DIGEST_SUFFIXES",
    "METADATA_FILENAME",
    "ArtifactSpec",
    "Coordinate",
    "RepositoryLayout",
    "artifact_filename",
    "is_snapshot",
    "resolve",
]

METADATA_FILENAME = "maven-metadata.xml"
DIGEST_SUFFIXES: tuple[str, str] = ("md5", "sha1")
_SNAPSHOT_SUFFIX = "snapshot"


@dataclasses.dataclass(slots=True, frozen=True)
class Coordinate:
    """Identify a publishable unit by ``group_id``, ``artifact_id`` and ``version``."""

    group_id: str
    artifact_id: str
    version: str


@dataclasses.dataclass(slots=True, frozen=True)
class ArtifactSpec:
    """A local file published under the coordinate.

    Parameters
    ----------
    path : Path
        Local file whose bytes are uploaded verbatim.
    packaging : str
        Extension-like packaging type, for example ``"jar"``.
    classifier : str | None, optional
        Qualifier such as ``"sources"``. Empty strings count as absent.
    """

    path: Path
    packaging: str
    classifier: str | None = None


@dataclasses.dataclass(slots=True, frozen=True)
class RepositoryLayout:
    """Remote paths for a coordinate, relative to the repository URL."""

    group_path: str
    version_path: str
    artifact_base_name: str

    @property
    def group_metadata_path(self) -> str:
        """Location of the group-level ``maven-metadata.xml``."""
        return f"{self.group_path}/{METADATA_FILENAME}"

    @property
    def version_metadata_path(self) -> str:
        """Location of the version-level ``maven-metadata.xml``."""
        return f"{self.version_path}/{METADATA_FILENAME}"

    @property
    def pom_path(self) -> str:
        """Location of the POM descriptor."""
        return f"{self.version_path}/{self.artifact_base_name}.pom"

    def artifact_path(self, filename: str) -> str:
        """Return the remote location of ``filename`` inside the version directory."""
        return f"{self.version_path}/{filename}"


def resolve(coordinate: Coordinate) -> RepositoryLayout:
    """Return the :class:`RepositoryLayout` for ``coordinate``.

    Examples
    --------
    >>> layout = resolve(Coordinate("org.acme.tools", "anvil", "2.1"))
    >>> layout.group_path
    'org/acme/tools/anvil'
    >>> layout.version_path
    'org/acme/tools/anvil/2.1'
    >>> layout.artifact_base_name
    'anvil-2.1'
    """

    group_path = f"{coordinate.group_id.replace('.', '/')}/{coordinate.artifact_id}"
    return RepositoryLayout(
        group_path=group_path,
        version_path=f"{group_path}/{coordinate.version}",
        artifact_base_name=f"{coordinate.artifact_id}-{coordinate.version}",
    )


def is_snapshot(version: str) -> bool:
    """Return ``True`` when ``version`` ends with ``SNAPSHOT`` in any casing.

    Examples
    --------
    >>> is_snapshot("1.0-SNAPSHOT"), is_snapshot("1.0-snapshot"), is_snapshot("1.0")
    (True, True, False)
    """

    return version.lower().endswith(_SNAPSHOT_SUFFIX)


def artifact_filename(layout: RepositoryLayout, artifact: ArtifactSpec) -> str:
    """Return the published filename for ``artifact``.

    Examples
    --------
    >>> layout = resolve(Coordinate("com.example", "widget", "1.0.0"))
    >>> artifact_filename(layout, ArtifactSpec(Path("w.jar"), "jar"))
    'widget-1.0.0.jar'
    >>> artifact_filename(layout, ArtifactSpec(Path("w.jar"), "jar", "sources"))
    'widget-1.0.0-sources.jar'
    """

    if artifact.classifier:
        return f"{layout.artifact_base_name}-{artifact.classifier}.{artifact.packaging}"
    return f"{layout.artifact_base_name}.{artifact.packaging}"
