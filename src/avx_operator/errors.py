"""Exception hierarchy for avx-operator."""

from __future__ import annotations

from pathlib import Path

BODY_EXCERPT_LIMIT = 2048


class ControllerError(Exception):
    """Base exception for all controller client errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(ControllerError):
    """Client settings could not be resolved."""


class TransportFailure(ControllerError):
    """The request never produced a terminal response.

    Raised for network errors, HTTP status errors and oversized bodies. The
    ``stage`` names where the call broke (``login``, ``call``, ``submit``,
    ``poll``).
    """

    def __init__(
        self,
        action: str,
        stage: str,
        message: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(f"{action}: {stage} failed: {message}", hint=hint)
        self.action = action
        self.stage = stage


class OperationCancelled(TransportFailure):
    """The caller's cancel event fired before the job reached a terminal state."""

    def __init__(self, action: str, stage: str = "poll") -> None:
        super().__init__(action, stage, "cancelled by caller")


class OperationTimedOut(TransportFailure):
    """The background job did not finish before the deadline."""

    def __init__(self, action: str, timeout_secs: float) -> None:
        super().__init__(
            action,
            "poll",
            f"still in progress after {timeout_secs:g}s",
            hint="Raise AVX_ASYNC_TIMEOUT_SECS if the controller is known to be slow.",
        )
        self.timeout_secs = timeout_secs


class DecodeFailure(ControllerError):
    """A response body or artifact payload did not have the expected shape."""

    def __init__(self, action: str, stage: str, message: str, *, body: str | None = None) -> None:
        excerpt = None
        if body is not None:
            excerpt = body[:BODY_EXCERPT_LIMIT]
            if len(body) > BODY_EXCERPT_LIMIT:
                excerpt += f"... ({len(body)} chars total)"
        text = f"{action}: {stage} failed: {message}"
        if excerpt is not None:
            text += f"\nBody: {excerpt}"
        super().__init__(text)
        self.action = action
        self.stage = stage
        self.body = excerpt


class APIRejected(ControllerError):
    """The controller answered ``return=false``."""

    def __init__(self, action: str, method: str, reason: str) -> None:
        super().__init__(f"rest API {action} {method} failed: {reason}")
        self.action = action
        self.method = method
        self.reason = reason


class NotFoundError(ControllerError):
    """The controller reports that the object does not exist.

    Read and delete operations raise this so callers can treat absence as a
    normal condition with ``except NotFoundError``.
    """

    def __init__(
        self,
        message: str = "object not found",
        *,
        action: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.action = action
        self.reason = reason


class ResultMissingError(ControllerError):
    """A successful call did not yield a value the caller needs."""


class ArtifactWriteError(ControllerError):
    """An artifact could not be written to disk."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"failed to write artifact {path}: {message}")
        self.path = path
