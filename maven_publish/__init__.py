"""Publish build artifacts to a Maven-layout repository."""

from .config import AuthConfig, PublishConfig, from_mapping, load_config
from .errors import (
    AggregateFailure,
    ConfigurationError,
    LocalIOError,
    PublishError,
    TransferFailure,
)
from .layout import ArtifactSpec, Coordinate, artifact_filename, is_snapshot, resolve
from .plan import UploadEntry, UploadPlan, build_upload_plan
from .publish import prepare_upload_plan, publish
from .scheduler import PublishOutcome, UploadScheduler
from .transport import CurlTransport, MockTransport, TransferResult, Transport

__all__ = [
    "AggregateFailure",
    "ArtifactSpec",
    "AuthConfig",
    "ConfigurationError",
    "Coordinate",
    "CurlTransport",
    "LocalIOError",
    "MockTransport",
    "PublishConfig",
    "PublishError",
    "PublishOutcome",
    "TransferFailure",
    "TransferResult",
    "Transport",
    "UploadEntry",
    "UploadPlan",
    "UploadScheduler",
    "artifact_filename",
    "build_upload_plan",
    "from_mapping",
    "is_snapshot",
    "load_config",
    "prepare_upload_plan",
    "publish",
    "resolve",
]
