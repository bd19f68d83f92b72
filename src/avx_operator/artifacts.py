"""ZTP artifacts produced by gateway-creation jobs.

Binary images arrive base64-encoded in ``results``; cloud-init scripts arrive
as plain text. File names are derived from gateway and site identifiers and
must stay stable because provisioning automation looks for them.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from .domain_types import Artifact, ArtifactKind
from .errors import ArtifactWriteError, DecodeFailure

log = logging.getLogger(__name__)


def extract(result_payload: Any, kind: ArtifactKind, *, action: str = "artifact") -> bytes:
    if not isinstance(result_payload, str):
        raise DecodeFailure(action, "artifact", f"expected a string payload, got {type(result_payload).__name__}")
    if kind is ArtifactKind.BINARY:
        try:
            return base64.b64decode(result_payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeFailure(action, "artifact", f"invalid base64 ISO content: {exc}") from exc
    return result_payload.encode("utf-8")


def artifact_file_name(gw_name: str, site_id: str, kind: ArtifactKind) -> str:
    if kind is ArtifactKind.BINARY:
        return f"{gw_name}-{site_id}.iso"
    return f"{gw_name}-{site_id}-cloud-init.txt"


def ha_artifact_file_name(site_id: str, kind: ArtifactKind) -> str:
    if kind is ArtifactKind.BINARY:
        return f"{site_id}-hagw.iso"
    return f"{site_id}-hagw-cloud-init.txt"


class ArtifactWriter(Protocol):
    def write(self, path: Path, data: bytes) -> Path: ...


class FileArtifactWriter(ArtifactWriter):
    def write(self, path: Path, data: bytes) -> Path:
        try:
            with open(path, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise ArtifactWriteError(path, str(exc)) from exc
        return path


@dataclass
class InMemoryArtifactWriter:
    files: dict[Path, bytes] = field(default_factory=dict)

    def write(self, path: Path, data: bytes) -> Path:
        self.files[path] = data
        return path


def persist_artifact(
    writer: ArtifactWriter,
    directory: str | Path,
    file_name: str,
    result_payload: Any,
    kind: ArtifactKind,
    *,
    action: str = "artifact",
) -> Artifact | None:
    """Decode ``result_payload`` and hand it to ``writer``.

    Returns ``None`` when the job produced no payload. Decoding happens
    before the file is opened, so malformed content never leaves a file
    behind.
    """
    if result_payload is None or result_payload == "":
        return None
    data = extract(result_payload, kind, action=action)
    path = writer.write(Path(directory) / file_name, data)
    log.info("wrote %d bytes to %s", len(data), path)
    return Artifact(file_name=file_name, kind=kind, data=data, path=path)
