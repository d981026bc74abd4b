"""Exception hierarchy shared by the publishing pipeline."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .transport import TransferResult

__all__ = [
    "AggregateFailure",
    "ConfigurationError",
    "LocalIOError",
    "PublishError",
    "TransferFailure",
]


class PublishError(RuntimeError):
    """Base class for every error raised while publishing artifacts."""


class ConfigurationError(PublishError):
    """Raised when the publish request is missing required fields."""


class LocalIOError(PublishError):
    """Raised when staging or reading local files fails."""


class TransferFailure(PublishError):
    """A single upload that the transport reported as unsuccessful."""

    def __init__(self, result: TransferResult) -> None:
        super().__init__(result.error_message)
        self.result = result


class AggregateFailure(PublishError):
    """Publish-level failure carrying the triggering transfer's message."""

    def __init__(self, failure: TransferFailure) -> None:
        super().__init__(str(failure))
        self.failure = failure
