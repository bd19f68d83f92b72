"""Submission and completion handling for long-running controller operations.

The dispatcher forces every operation into asynchronous mode, hands it to the
transport (which blocks until the background job is terminal), then decodes
the terminal envelope, classifies it and runs the response hooks:

    submit -> decode -> check -> hooks

Each stage runs only if the previous one succeeded.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
from types import MappingProxyType
from typing import Any, Mapping

import httpx

from .domain_types import AsyncOperation, DispatchResult, PartialResult, ResponseEnvelope
from .errors import ControllerError, DecodeFailure, TransportFailure
from .hooks import HookRegistry
from .result_checker import ResultChecker
from .transport import ControllerTransport

log = logging.getLogger(__name__)

_ENVELOPE_KEYS = ("return", "reason", "results")


def payload_to_params(payload: Any) -> dict[str, Any]:
    """Copy a mapping or dataclass payload into a fresh request dict.

    Dataclass fields use ``metadata["form"]`` as their wire name, ``"-"``
    keeps a field off the wire, and ``None`` values are dropped.
    """
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        params: dict[str, Any] = {}
        for f in dataclasses.fields(payload):
            name = f.metadata.get("form", f.name)
            if name == "-":
                continue
            value = getattr(payload, f.name)
            if value is None:
                continue
            params[name] = value
        return params
    if isinstance(payload, Mapping):
        return {k: v for k, v in payload.items() if v is not None}
    raise TypeError(f"payload must be a mapping or a dataclass, got {type(payload).__name__}")


def build_request(operation: AsyncOperation, session_id: str) -> dict[str, Any]:
    request = payload_to_params(operation.payload)
    request["action"] = operation.action
    request["CID"] = session_id
    request["async"] = True
    return request


def decode_envelope(action: str, body: str) -> ResponseEnvelope:
    try:
        data = json.loads(body)
    except (TypeError, json.JSONDecodeError) as exc:
        raise DecodeFailure(action, "decode", f"invalid JSON: {exc}", body=str(body)) from exc
    if not isinstance(data, dict):
        raise DecodeFailure(action, "decode", "response is not a JSON object", body=body)

    flag = data.get("return")
    if not isinstance(flag, bool):
        raise DecodeFailure(action, "decode", "response has no boolean 'return' field", body=body)
    reason = data.get("reason")
    return ResponseEnvelope(
        return_flag=flag,
        reason=reason if isinstance(reason, str) else ("" if reason is None else str(reason)),
        results=data.get("results"),
        extras={k: v for k, v in data.items() if k not in _ENVELOPE_KEYS},
    )


def check_envelope(action: str, method: str, envelope: ResponseEnvelope, checker: ResultChecker) -> None:
    error = checker(action, method, envelope.reason, envelope.return_flag)
    if error is not None:
        log.warning("%s %s rejected: %s", action, method, envelope.reason)
        raise error


def payload_mapping(envelope: ResponseEnvelope) -> dict[str, Any]:
    """Untyped view of a successful envelope for hooks.

    ``results`` objects (or strings holding a JSON object) are layered over
    the envelope's top-level extras. Any other shape contributes nothing.
    """
    results = envelope.results
    if isinstance(results, str):
        try:
            results = json.loads(results)
        except json.JSONDecodeError:
            results = None
    mapping = dict(envelope.extras)
    if isinstance(results, dict):
        mapping.update(results)
    return mapping


class AsyncDispatcher:
    def __init__(self, transport: ControllerTransport, session_id: str) -> None:
        self.transport = transport
        self.session_id = session_id

    def submit(self, operation: AsyncOperation, cancel: threading.Event | None = None) -> DispatchResult:
        action = operation.action
        if not action:
            raise ValueError("operation action must be non-empty")
        request = build_request(operation, self.session_id)

        log.debug("submitting %s", action)
        try:
            body = self.transport.submit_async(request, timeout_secs=operation.timeout_secs, cancel=cancel)
        except ControllerError:
            raise
        except (httpx.HTTPError, OSError) as exc:
            raise TransportFailure(action, "submit", str(exc)) from exc

        envelope = decode_envelope(action, body)
        check_envelope(action, "Post", envelope, operation.checker)

        payload = MappingProxyType(payload_mapping(envelope))
        hook_value = HookRegistry(operation.hooks).run(payload)
        log.debug("%s completed (%d hooks)", action, len(operation.hooks))
        return DispatchResult(
            action=action,
            envelope=envelope,
            payload=payload,
            hook_value=hook_value,
            partial=PartialResult.from_mapping(payload),
        )
