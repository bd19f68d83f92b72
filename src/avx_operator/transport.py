from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from .errors import OperationCancelled

IN_PROGRESS = "REQUEST_IN_PROGRESS"


class ControllerTransport(Protocol):
    def login(self, username: str, password: str) -> str: ...

    def call(self, params: Mapping[str, Any]) -> str: ...

    def submit_async(
        self,
        params: Mapping[str, Any],
        *,
        timeout_secs: float | None = None,
        cancel: threading.Event | None = None,
    ) -> str: ...


@dataclass
class FakeControllerTransport:
    """In-memory transport that replays scripted terminal bodies.

    ``responses`` items are consumed in order; dicts are JSON-encoded,
    strings are returned verbatim and exceptions are raised. With nothing
    scripted every call succeeds with empty results.
    """

    cid: str = "fake-cid"
    responses: list[Any] = field(default_factory=list)
    requests: list[dict[str, Any]] = field(default_factory=list)

    def login(self, username: str, password: str) -> str:
        return self.cid

    def call(self, params: Mapping[str, Any]) -> str:
        self.requests.append(dict(params))
        return self._next()

    def submit_async(
        self,
        params: Mapping[str, Any],
        *,
        timeout_secs: float | None = None,
        cancel: threading.Event | None = None,
    ) -> str:
        self.requests.append(dict(params))
        if cancel is not None and cancel.is_set():
            raise OperationCancelled(str(params.get("action", "")), stage="submit")
        return self._next()

    def _next(self) -> str:
        if not self.responses:
            return json.dumps({"return": True, "reason": "", "results": ""})
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, str):
            return item
        return json.dumps(item)
