"""Top-level publish pipeline.

The pipeline runs in three strictly ordered phases: descriptors and digest
sidecars are staged on disk, the upload plan is built (reading every
artifact), and only then are transfers scheduled.

Usage
-----
Publish with the default ``curl`` transport::

    from maven_publish import publish

    outcome = publish(
        {
            "group_id": "com.example",
            "artifact_id": "widget",
            "version": "1.0.0",
            "url": "https://repo.example.com/releases",
            "artifact": "build/widget.jar",
            "packaging": "jar",
        }
    )
    outcome.raise_for_failure()
"""

from __future__ import annotations

import typing as typ
from collections.abc import Mapping

from .config import PublishConfig, from_mapping
from .environment import current_timestamp
from .plan import build_upload_plan
from .scheduler import UploadScheduler
from .staging import assemble
from .template_utils import render_template
from .transport import CurlTransport

if typ.TYPE_CHECKING:
    from .plan import UploadPlan
    from .scheduler import PublishOutcome
    from .template_utils import Renderer
    from .transport import Transport

__all__ = ["build_transport", "prepare_upload_plan", "publish", "target_url"]


def build_transport(config: PublishConfig) -> CurlTransport:
    """Return a :class:`CurlTransport` configured from ``config``."""
    return CurlTransport(
        auth=config.auth,
        insecure=config.insecure,
        noproxy=config.noproxy,
        cwd=config.cwd,
    )


def target_url(config: PublishConfig, remote_path: str) -> str:
    """Return the URL ``remote_path`` is uploaded to."""
    return f"{config.url}/{remote_path}"


def prepare_upload_plan(
    config: PublishConfig,
    *,
    last_updated: str | None = None,
    render: Renderer = render_template,
) -> UploadPlan:
    """Stage descriptors and sidecars for ``config`` and return the upload plan.

    Raises
    ------
    LocalIOError
        Raised when staging fails or an artifact cannot be read.
    """

    staged = assemble(
        config.coordinate,
        last_updated or current_timestamp(),
        render,
        config.staging_dir,
        config.artifacts,
    )
    return build_upload_plan(config.coordinate, config.artifacts, staged)


def publish(
    options: PublishConfig | Mapping[str, typ.Any],
    transport: Transport | None = None,
    *,
    last_updated: str | None = None,
    render: Renderer = render_template,
) -> PublishOutcome:
    """Publish the coordinate described by ``options``.

    Parameters
    ----------
    options : PublishConfig | Mapping[str, Any]
        Publish request. Mappings are validated with
        :func:`maven_publish.config.from_mapping` before anything is written.
    transport : Transport | None, optional
        Upload capability; defaults to :func:`build_transport`.
    last_updated : str | None, optional
        ``lastUpdated`` timestamp for the metadata descriptors.
    render : Renderer, optional
        Template renderer used for the descriptors.

    Returns
    -------
    PublishOutcome
        Success, or the first transfer failure observed.

    Raises
    ------
    ConfigurationError
        Raised when ``options`` lacks required fields.
    LocalIOError
        Raised when staging fails; no upload is attempted.
    """

    config = options if isinstance(options, PublishConfig) else from_mapping(options)
    plan = prepare_upload_plan(config, last_updated=last_updated, render=render)
    scheduler = UploadScheduler(
        transport if transport is not None else build_transport(config),
        parallel=config.parallel,
        quiet=config.quiet,
    )
    return scheduler.run(plan, config.url)
