from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

import httpx

from .dispatcher import AsyncDispatcher, check_envelope, decode_envelope, payload_to_params
from .domain_types import AsyncOperation, DispatchResult, ResponseEnvelope
from .errors import ConfigurationError, ControllerError, TransportFailure
from .result_checker import ResultChecker, basic_check
from .transport import ControllerTransport

log = logging.getLogger(__name__)


class ControllerClient:
    """Session-bound entry point for controller calls.

    The session id (CID) is set at construction or by :meth:`login` and is
    only read while a call is in flight.
    """

    def __init__(self, transport: ControllerTransport, cid: str | None = None) -> None:
        self.transport = transport
        self._cid = cid

    @property
    def cid(self) -> str:
        if not self._cid:
            raise ConfigurationError("no controller session", hint="Call login() or set AVX_CONTROLLER_CID.")
        return self._cid

    def login(self, username: str, password: str) -> str:
        self._cid = self.transport.login(username, password)
        log.debug("controller session established")
        return self._cid

    def post_api(
        self,
        action: str,
        params: Mapping[str, Any] | Any,
        checker: ResultChecker = basic_check,
    ) -> ResponseEnvelope:
        """Run a short synchronous call and return its checked envelope."""
        request = payload_to_params(params)
        request["action"] = action
        request["CID"] = self.cid
        try:
            body = self.transport.call(request)
        except ControllerError:
            raise
        except (httpx.HTTPError, OSError) as exc:
            raise TransportFailure(action, "call", str(exc)) from exc

        envelope = decode_envelope(action, body)
        check_envelope(action, "Post", envelope, checker)
        return envelope

    def post_async_api(self, operation: AsyncOperation, cancel: threading.Event | None = None) -> DispatchResult:
        return AsyncDispatcher(self.transport, self.cid).submit(operation, cancel=cancel)
