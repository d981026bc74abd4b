"""Command-line entry point for the publisher.

Examples
--------
Publish the artifacts described in ``publish.toml``::

    maven-publish publish.toml --parallel

Stage descriptors and print the planned uploads without transferring::

    maven-publish publish.toml --dry-run

Exercise the whole pipeline against the in-memory transport::

    MOCK_NEXUS=1 maven-publish publish.toml
"""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path

import cyclopts
from plumbum.commands import CommandNotFound, ProcessExecutionError

from .config import PublishConfig, load_config
from .environment import mock_mode_enabled
from .errors import PublishError
from .plan import UploadPlan
from .publish import prepare_upload_plan, publish, target_url
from .transport import MockTransport

app = cyclopts.App(
    name="maven-publish",
    help="Publish artifacts to a Maven repository using a TOML configuration file.",
)


def _render_summary(config: PublishConfig, plan: UploadPlan) -> str:
    lines = ["Planned uploads:"]
    lines.extend(
        f"  - {entry.local_path} -> {target_url(config, entry.remote_path)}"
        for entry in plan
    )
    return "\n".join(lines)


@app.default
def main(
    config_file: Path,
    *,
    parallel: bool | None = None,
    quiet: bool | None = None,
    dry_run: bool = False,
) -> None:
    """Publish the coordinate described by ``config_file``.

    Parameters
    ----------
    config_file:
        Path to the TOML publish configuration.
    parallel:
        Upload every file at once. Overrides the file's ``parallel`` value.
    quiet:
        Suppress progress output. Overrides the file's ``quiet`` value.
    dry_run:
        Stage descriptors and print the planned uploads without uploading.
    """
    try:
        config = load_config(Path(config_file))
        if parallel is not None:
            config = dataclasses.replace(config, parallel=parallel)
        if quiet is not None:
            config = dataclasses.replace(config, quiet=quiet)

        if dry_run:
            print(_render_summary(config, prepare_upload_plan(config)))
            return

        transport = MockTransport() if mock_mode_enabled() else None
        publish(config, transport).raise_for_failure()
    except (
        FileNotFoundError,
        PublishError,
        ProcessExecutionError,
        CommandNotFound,
    ) as exc:
        print(f"::error title=Publish Failure::{exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    app()
