"""Map staged and caller-supplied files onto their remote repository paths."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from .checksum_utils import sidecar_path
from .layout import DIGEST_SUFFIXES, artifact_filename, is_snapshot, resolve
from .staging import stage_artifact_digests

if typ.TYPE_CHECKING:
    from .layout import ArtifactSpec, Coordinate
    from .staging import StagedDescriptors

__all__ = ["UploadEntry", "UploadPlan", "build_upload_plan"]


@dataclasses.dataclass(slots=True, frozen=True)
class UploadEntry:
    """A local file and the repository path it is uploaded to."""

    local_path: Path
    remote_path: str


class UploadPlan:
    """Ordered mapping of local files to remote paths.

    Entries keep the order in which they were added. Adding a local path a
    second time replaces its remote path without moving it.
    """

    def __init__(self) -> None:
        self._mapping: dict[Path, str] = {}

    def add(self, local_path: Path, remote_path: str) -> None:
        """Map ``local_path`` to ``remote_path``."""
        self._mapping[local_path] = remote_path

    def add_with_sidecars(
        self,
        local_path: Path,
        remote_path: str,
        sidecars: typ.Mapping[str, Path] | None = None,
    ) -> None:
        """Map ``local_path`` and its ``.md5``/``.sha1`` sidecars.

        ``sidecars`` maps algorithm names to sidecar files; when omitted they
        are expected next to ``local_path``.
        """

        self.add(local_path, remote_path)
        for algorithm in DIGEST_SUFFIXES:
            source = (
                sidecars[algorithm]
                if sidecars is not None
                else sidecar_path(local_path, algorithm)
            )
            self.add(source, f"{remote_path}.{algorithm}")

    @property
    def entries(self) -> list[UploadEntry]:
        """Return the planned uploads in insertion order."""
        return [UploadEntry(local, remote) for local, remote in self._mapping.items()]

    @property
    def remote_paths(self) -> list[str]:
        """Return the remote paths in insertion order."""
        return list(self._mapping.values())

    def as_dict(self) -> dict[Path, str]:
        """Return a copy of the local to remote mapping."""
        return dict(self._mapping)

    def __iter__(self) -> typ.Iterator[UploadEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._mapping)


def build_upload_plan(
    coordinate: Coordinate,
    artifacts: typ.Sequence[ArtifactSpec],
    staged: StagedDescriptors,
) -> UploadPlan:
    """Return the :class:`UploadPlan` for ``coordinate``.

    Parameters
    ----------
    coordinate : Coordinate
        Coordinate being published.
    artifacts : Sequence[ArtifactSpec]
        Caller-supplied payloads. Each one is read here so its digest
        sidecars can be staged.
    staged : StagedDescriptors
        Descriptors previously written by :func:`maven_publish.staging.assemble`.

    Returns
    -------
    UploadPlan
        Group metadata, version metadata for snapshots only, the POM, then
        each artifact, every payload followed by its two sidecars.

    Raises
    ------
    LocalIOError
        Raised when any artifact cannot be read. No plan is returned in that
        case.
    """

    layout = resolve(coordinate)
    plan = UploadPlan()

    plan.add_with_sidecars(staged.group_metadata, layout.group_metadata_path)
    # Non-snapshot versions still stage inner.xml; it is simply never uploaded.
    if is_snapshot(coordinate.version):
        plan.add_with_sidecars(staged.version_metadata, layout.version_metadata_path)
    plan.add_with_sidecars(staged.pom, layout.pom_path)

    for artifact in artifacts:
        filename = artifact_filename(layout, artifact)
        staged_artifact = stage_artifact_digests(staged.staging_dir, artifact, filename)
        plan.add_with_sidecars(
            artifact.path,
            layout.artifact_path(filename),
            sidecars=staged_artifact.sidecars,
        )

    return plan
