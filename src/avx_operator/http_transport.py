from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Mapping

import httpx

from .errors import (
    APIRejected,
    DecodeFailure,
    OperationCancelled,
    OperationTimedOut,
    TransportFailure,
)
from .transport import IN_PROGRESS, ControllerTransport

log = logging.getLogger(__name__)

DEFAULT_MAX_BODY_BYTES = 64 << 20


def encode_form(params: Mapping[str, Any]) -> dict[str, str]:
    """Flatten request params into the controller's form encoding."""
    form: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            form[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple, dict)):
            form[key] = json.dumps(value)
        else:
            form[key] = str(value)
    return form


def _peek(body: str) -> dict[str, Any] | None:
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


class HttpControllerTransport(ControllerTransport):
    def __init__(
        self,
        base_url: str,
        timeout_secs: float = 15.0,
        poll_interval_secs: float = 10.0,
        async_timeout_secs: float = 3600.0,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
        api_path: str = "/v1/api",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{api_path}"
        self.timeout = timeout_secs
        self.poll_interval = poll_interval_secs
        self.async_timeout = async_timeout_secs
        self.max_body_bytes = max_body_bytes
        self.headers = {"Accept": "application/json"}

    def login(self, username: str, password: str) -> str:
        params = {"action": "login", "username": username, "password": password}
        with httpx.Client(timeout=self.timeout) as client:
            body = self._post(client, params, action="login", stage="login")

        data = _peek(body)
        if data is None:
            raise DecodeFailure("login", "decode", "response is not a JSON object", body=body)
        if not data.get("return"):
            raise APIRejected("login", "Post", str(data.get("reason", "")))
        cid = data.get("CID")
        if not isinstance(cid, str) or not cid:
            raise DecodeFailure("login", "decode", "response carries no CID", body=body)
        return cid

    def call(self, params: Mapping[str, Any]) -> str:
        action = str(params.get("action", ""))
        with httpx.Client(timeout=self.timeout) as client:
            return self._post(client, params, action=action, stage="call")

    def submit_async(
        self,
        params: Mapping[str, Any],
        *,
        timeout_secs: float | None = None,
        cancel: threading.Event | None = None,
    ) -> str:
        """Submit a background job and block until it is terminal.

        The submit response carries the job id in ``results``; the job is
        then polled with ``check_task_status`` until the controller stops
        answering ``REQUEST_IN_PROGRESS``. That last body is returned as is,
        including ``return=false`` failures.

        Raises:
            OperationCancelled: ``cancel`` was set before the job finished.
            OperationTimedOut: the job outlived ``timeout_secs``.
            TransportFailure: a request failed at the HTTP level.
        """
        action = str(params.get("action", ""))
        deadline = timeout_secs if timeout_secs is not None else self.async_timeout
        stop = cancel if cancel is not None else threading.Event()
        started = time.monotonic()

        if stop.is_set():
            raise OperationCancelled(action, stage="submit")

        with httpx.Client(timeout=self.timeout) as client:
            body = self._post(client, params, action=action, stage="submit")
            accepted = _peek(body)
            if accepted is None or not accepted.get("return"):
                return body
            request_id = accepted.get("results")
            if not isinstance(request_id, str) or not request_id:
                # Nothing to track: the controller finished inline.
                return body

            log.debug("%s accepted as background request %s", action, request_id)
            poll = {
                "action": "check_task_status",
                "CID": params.get("CID", ""),
                "id": request_id,
                "pos": 0,
            }
            attempt = 0
            while True:
                if stop.wait(self.poll_interval):
                    raise OperationCancelled(action)
                if time.monotonic() - started > deadline:
                    raise OperationTimedOut(action, deadline)

                attempt += 1
                body = self._post(client, poll, action=action, stage="poll")
                status = _peek(body)
                if status is not None and status.get("return") and status.get("results") == IN_PROGRESS:
                    log.debug("%s still in progress (poll %d)", action, attempt)
                    continue
                return body

    def _post(self, client: httpx.Client, params: Mapping[str, Any], *, action: str, stage: str) -> str:
        # Read at most max_body_bytes + 1 bytes; never buffer an oversized body.
        chunks: list[bytes] = []
        size = 0
        try:
            with client.stream("POST", self.api_url, data=encode_form(params), headers=self.headers) as resp:
                resp.raise_for_status()
                for chunk in resp.iter_bytes():
                    size += len(chunk)
                    if size > self.max_body_bytes:
                        raise TransportFailure(
                            action, stage, f"response body too large (>{self.max_body_bytes} bytes)"
                        )
                    chunks.append(chunk)
        except httpx.HTTPError as exc:
            raise TransportFailure(action, stage, str(exc)) from exc
        return b"".join(chunks).decode("utf-8", errors="replace")
