from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .errors import ResultMissingError
from .result_checker import ResultChecker, basic_check

ResponseHook = Callable[[Mapping[str, Any]], Optional[str]]


@dataclass(frozen=True)
class ResponseEnvelope:
    return_flag: bool
    reason: str
    results: Any
    extras: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AsyncOperation:
    action: str
    payload: Any
    checker: ResultChecker = basic_check
    hooks: tuple[ResponseHook, ...] = ()
    timeout_secs: float | None = None

    def with_hook(self, hook: ResponseHook) -> AsyncOperation:
        return dataclasses.replace(self, hooks=self.hooks + (hook,))

    def with_checker(self, checker: ResultChecker) -> AsyncOperation:
        return dataclasses.replace(self, checker=checker)


@dataclass(frozen=True)
class PartialResult:
    generated_name: str | None = None
    group_uuid: str | None = None
    group_name: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> PartialResult:
        def _str(key: str) -> str | None:
            value = payload.get(key)
            return value if isinstance(value, str) and value else None

        return cls(
            generated_name=_str("ha_gw_name") or _str("gw_name"),
            group_uuid=_str("group_uuid"),
            group_name=_str("group_name"),
        )


@dataclass(frozen=True)
class DispatchResult:
    action: str
    envelope: ResponseEnvelope
    payload: Mapping[str, Any]
    hook_value: str | None
    partial: PartialResult

    def resolve(self, fallback: str | None, *, what: str = "result name") -> str:
        """Pick the hook value, then the caller's fallback, else fail."""
        if self.hook_value:
            return self.hook_value
        if fallback:
            return fallback
        raise ResultMissingError(f"{what} not found in {self.action} response")


class ArtifactKind(Enum):
    BINARY = "iso"
    TEXT = "cloud-init"

    @classmethod
    def from_ztp_file_type(cls, ztp_file_type: str | None) -> ArtifactKind:
        # anything other than "iso" is delivered as cloud-init text
        if (ztp_file_type or "").strip().lower() == "iso":
            return cls.BINARY
        return cls.TEXT


@dataclass(frozen=True)
class Artifact:
    file_name: str
    kind: ArtifactKind
    data: bytes
    path: Path | None = None
