"""Render descriptors and digest sidecars into the staging directory.

Every file the publisher uploads, apart from the artifacts themselves, is
written here before any transfer starts:

``outer.xml``
    Group-level ``maven-metadata.xml``.
``inner.xml``
    Version-level ``maven-metadata.xml``. Always written, only uploaded for
    snapshot versions.
``pom.xml``
    Project descriptor.
``artifact.<remote filename>.md5`` / ``.sha1``
    Digests of each artifact payload.
"""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path
from xml.sax.saxutils import escape

from .checksum_utils import write_digest_sidecars
from .errors import LocalIOError

if typ.TYPE_CHECKING:
    from .layout import ArtifactSpec, Coordinate
    from .template_utils import Renderer

__all__ = [
    "GROUP_METADATA_NAME",
    "POM_NAME",
    "VERSION_METADATA_NAME",
    "StagedArtifact",
    "StagedDescriptors",
    "assemble",
    "stage_artifact_digests",
]

GROUP_METADATA_NAME = "outer.xml"
VERSION_METADATA_NAME = "inner.xml"
POM_NAME = "pom.xml"

_DEFAULT_PACKAGING = "pom"


@dataclasses.dataclass(slots=True, frozen=True)
class StagedDescriptors:
    """Paths of the three descriptors written by :func:`assemble`."""

    staging_dir: Path
    group_metadata: Path
    version_metadata: Path
    pom: Path


@dataclasses.dataclass(slots=True, frozen=True)
class StagedArtifact:
    """Artifact payload paired with the digest sidecars staged for it."""

    artifact: ArtifactSpec
    filename: str
    sidecars: dict[str, Path]


def _initialize_staging_dir(staging_dir: Path) -> None:
    """Create ``staging_dir`` and any missing parents; existing files are kept."""

    try:
        staging_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        message = f"Cannot create staging directory {staging_dir}: {exc}"
        raise LocalIOError(message) from exc


def _save(staging_dir: Path, name: str, content: str) -> Path:
    """Write ``content`` to ``staging_dir / name`` alongside its sidecars."""

    target = staging_dir / name
    data = content.encode("utf-8")
    try:
        target.write_bytes(data)
        write_digest_sidecars(target, data)
    except OSError as exc:
        message = f"Cannot write staged descriptor {target}: {exc}"
        raise LocalIOError(message) from exc
    return target


def _base_context(coordinate: Coordinate, last_updated: str) -> dict[str, str]:
    return {
        "group_id": escape(coordinate.group_id),
        "artifact_id": escape(coordinate.artifact_id),
        "version": escape(coordinate.version),
        "last_updated": escape(last_updated),
    }


def _snapshot_versions(
    context: dict[str, str],
    artifacts: typ.Sequence[ArtifactSpec],
    render: Renderer,
) -> str:
    """Render one ``<snapshotVersion>`` block for the POM and each artifact."""

    entries: list[tuple[str, str | None]] = [(_DEFAULT_PACKAGING, None)]
    entries.extend((artifact.packaging, artifact.classifier) for artifact in artifacts)
    blocks = []
    for extension, classifier in entries:
        classifier_element = (
            f"        <classifier>{escape(classifier)}</classifier>\n"
            if classifier
            else ""
        )
        fields = context | {
            "extension": escape(extension),
            "classifier_element": classifier_element,
        }
        blocks.append(render("snapshot-version.xml", fields).rstrip("\n"))
    return "\n".join(blocks)


def assemble(
    coordinate: Coordinate,
    last_updated: str,
    render: Renderer,
    staging_dir: Path,
    artifacts: typ.Sequence[ArtifactSpec] = (),
) -> StagedDescriptors:
    """Render the group metadata, version metadata and POM into ``staging_dir``.

    Parameters
    ----------
    coordinate : Coordinate
        Coordinate being published.
    last_updated : str
        ``yyyymmddHHMMss`` timestamp recorded in both metadata files.
    render : Renderer
        Collaborator turning a template name and field mapping into text.
    staging_dir : Path
        Directory receiving the descriptors. Created with parents if absent;
        files from earlier runs are overwritten.
    artifacts : Sequence[ArtifactSpec], optional
        Artifacts listed in the POM packaging and the snapshot versions.

    Returns
    -------
    StagedDescriptors
        Paths of the three descriptors. Each has ``.md5`` and ``.sha1``
        sidecars next to it.

    Raises
    ------
    LocalIOError
        Raised when the directory or any descriptor cannot be written.
    """

    _initialize_staging_dir(staging_dir)
    context = _base_context(coordinate, last_updated)
    packaging = artifacts[0].packaging if artifacts else _DEFAULT_PACKAGING
    version_context = context | {
        "snapshot_versions": _snapshot_versions(context, artifacts, render)
    }

    return StagedDescriptors(
        staging_dir=staging_dir,
        group_metadata=_save(
            staging_dir, GROUP_METADATA_NAME, render("project-metadata.xml", context)
        ),
        version_metadata=_save(
            staging_dir,
            VERSION_METADATA_NAME,
            render("latest-metadata.xml", version_context),
        ),
        pom=_save(
            staging_dir,
            POM_NAME,
            render("pom.xml", context | {"packaging": escape(packaging)}),
        ),
    )


def stage_artifact_digests(
    staging_dir: Path, artifact: ArtifactSpec, filename: str
) -> StagedArtifact:
    """Read ``artifact`` and stage its digest sidecars.

    The sidecars are named ``artifact.<filename>.md5`` and
    ``artifact.<filename>.sha1``. The payload itself stays where it is.

    Raises
    ------
    LocalIOError
        Raised when the artifact cannot be read or a sidecar cannot be written.
    """

    try:
        data = artifact.path.read_bytes()
    except OSError as exc:
        message = f"Cannot read artifact {artifact.path}: {exc}"
        raise LocalIOError(message) from exc

    try:
        sidecars = write_digest_sidecars(staging_dir / f"artifact.{filename}", data)
    except OSError as exc:
        message = f"Cannot write digests for artifact {artifact.path}: {exc}"
        raise LocalIOError(message) from exc
    return StagedArtifact(artifact=artifact, filename=filename, sidecars=sidecars)
