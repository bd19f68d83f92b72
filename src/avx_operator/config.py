from __future__ import annotations

import os
from dataclasses import dataclass

from .controller_client import ControllerClient
from .errors import ConfigurationError, ControllerError
from .http_transport import HttpControllerTransport
from .transport import FakeControllerTransport


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, str(default)).strip()
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ControllerSettings:
    base_url: str
    username: str | None
    password: str | None
    cid: str | None
    timeout_secs: float = 15.0
    poll_interval_secs: float = 10.0
    async_timeout_secs: float = 3600.0

    @classmethod
    def from_env(cls) -> ControllerSettings:
        return cls(
            base_url=os.getenv("AVX_CONTROLLER_URL", "").strip(),
            username=os.getenv("AVX_CONTROLLER_USERNAME", "").strip() or None,
            password=os.getenv("AVX_CONTROLLER_PASSWORD", "") or None,
            cid=os.getenv("AVX_CONTROLLER_CID", "").strip() or None,
            timeout_secs=_float_env("AVX_HTTP_TIMEOUT_SECS", 15.0),
            poll_interval_secs=_float_env("AVX_ASYNC_POLL_SECS", 10.0),
            async_timeout_secs=_float_env("AVX_ASYNC_TIMEOUT_SECS", 3600.0),
        )


def build_client(settings: ControllerSettings | None = None) -> ControllerClient:
    settings = settings or ControllerSettings.from_env()
    if not settings.base_url:
        return ControllerClient(FakeControllerTransport(), cid="fake-cid")

    transport = HttpControllerTransport(
        base_url=settings.base_url,
        timeout_secs=settings.timeout_secs,
        poll_interval_secs=settings.poll_interval_secs,
        async_timeout_secs=settings.async_timeout_secs,
    )
    client = ControllerClient(transport, cid=settings.cid)
    if settings.cid:
        return client

    if not settings.username or not settings.password:
        raise ConfigurationError(
            "controller credentials missing",
            hint="Set AVX_CONTROLLER_CID or AVX_CONTROLLER_USERNAME and AVX_CONTROLLER_PASSWORD.",
        )
    # Admission: a session must exist before any call is made
    try:
        client.login(settings.username, settings.password)
    except ControllerError as exc:
        raise ConfigurationError(f"controller login failed: {exc}") from exc
    return client
