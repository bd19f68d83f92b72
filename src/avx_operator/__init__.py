import logging

from .artifacts import (
    FileArtifactWriter,
    InMemoryArtifactWriter,
    artifact_file_name,
    extract,
    ha_artifact_file_name,
    persist_artifact,
)
from .config import ControllerSettings, build_client
from .controller_client import ControllerClient
from .dispatcher import AsyncDispatcher, build_request
from .domain_types import (
    Artifact,
    ArtifactKind,
    AsyncOperation,
    DispatchResult,
    PartialResult,
    ResponseEnvelope,
)
from .errors import (
    APIRejected,
    ArtifactWriteError,
    ConfigurationError,
    ControllerError,
    DecodeFailure,
    NotFoundError,
    OperationCancelled,
    OperationTimedOut,
    ResultMissingError,
    TransportFailure,
)
from .hooks import HookRegistry, capture_field
from .http_transport import HttpControllerTransport
from .result_checker import Classification, NotFoundChecker, basic_check, classify
from .transport import ControllerTransport, FakeControllerTransport

logging.getLogger("avx_operator").addHandler(logging.NullHandler())

__all__ = [
    "APIRejected",
    "Artifact",
    "ArtifactKind",
    "ArtifactWriteError",
    "AsyncDispatcher",
    "AsyncOperation",
    "Classification",
    "ConfigurationError",
    "ControllerClient",
    "ControllerError",
    "ControllerSettings",
    "ControllerTransport",
    "DecodeFailure",
    "DispatchResult",
    "FakeControllerTransport",
    "FileArtifactWriter",
    "HookRegistry",
    "HttpControllerTransport",
    "InMemoryArtifactWriter",
    "NotFoundChecker",
    "NotFoundError",
    "OperationCancelled",
    "OperationTimedOut",
    "PartialResult",
    "ResponseEnvelope",
    "ResultMissingError",
    "TransportFailure",
    "artifact_file_name",
    "basic_check",
    "build_client",
    "build_request",
    "capture_field",
    "classify",
    "extract",
    "ha_artifact_file_name",
    "persist_artifact",
]
