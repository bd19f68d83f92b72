from __future__ import annotations

import pytest
from avx_operator.controller_client import ControllerClient
from avx_operator.transport import FakeControllerTransport


@pytest.fixture
def transport() -> FakeControllerTransport:
    return FakeControllerTransport(cid="test-cid")


@pytest.fixture
def client(transport: FakeControllerTransport) -> ControllerClient:
    return ControllerClient(transport, cid="test-cid")
