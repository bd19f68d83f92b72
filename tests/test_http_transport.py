from __future__ import annotations

import json
import threading
from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest
from avx_operator.errors import (
    APIRejected,
    DecodeFailure,
    OperationCancelled,
    OperationTimedOut,
    TransportFailure,
)
from avx_operator.http_transport import HttpControllerTransport, encode_form


def _stream(data: Any, chunk_size: int = 16) -> MagicMock:
    raw = (data if isinstance(data, str) else json.dumps(data)).encode("utf-8")
    resp = MagicMock()
    resp.status_code = 200
    resp.iter_bytes.return_value = [raw[i : i + chunk_size] for i in range(0, len(raw), chunk_size)]
    ctx = MagicMock()
    ctx.__enter__.return_value = resp
    ctx.__exit__.return_value = False
    return ctx


def _transport(**kwargs: Any) -> HttpControllerTransport:
    return HttpControllerTransport(base_url="https://ctrl.local", poll_interval_secs=0, **kwargs)


SUBMIT = {"action": "create_multicloud_ha_gateway", "CID": "cid-1", "async": True}


def test_encode_form_flattens_values() -> None:
    form = encode_form({"async": True, "sync": False, "skip": None, "count": 3, "tags": ["a", "b"]})
    assert form == {"async": "true", "sync": "false", "count": "3", "tags": '["a", "b"]'}


def test_call_posts_form_to_api_url() -> None:
    client = _transport()
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream({"return": True, "results": "ok"})
        body = client.call({"action": "get_controller_feature", "CID": "cid-1"})

    assert json.loads(body)["results"] == "ok"
    assert mock_stream.call_args.args == ("POST", "https://ctrl.local/v1/api")
    assert mock_stream.call_args.kwargs["data"]["action"] == "get_controller_feature"


def test_submit_async_polls_until_terminal() -> None:
    client = _transport()
    final = {"return": True, "reason": "", "results": {"ha_gw_name": "gw-1-hagw"}}
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.side_effect = [
            _stream({"return": True, "results": "req-42"}),
            _stream({"return": True, "results": "REQUEST_IN_PROGRESS"}),
            _stream({"return": True, "results": "REQUEST_IN_PROGRESS"}),
            _stream(final),
        ]
        body = client.submit_async(SUBMIT)

    assert json.loads(body) == final
    assert mock_stream.call_count == 4
    assert mock_stream.call_args_list[0].kwargs["data"]["async"] == "true"
    poll = mock_stream.call_args_list[1].kwargs["data"]
    assert poll == {"action": "check_task_status", "CID": "cid-1", "id": "req-42", "pos": "0"}


def test_submit_async_returns_rejected_submit_without_polling() -> None:
    client = _transport()
    rejected = {"return": False, "reason": "gateway quota exceeded"}
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream(rejected)
        body = client.submit_async(SUBMIT)

    assert json.loads(body) == rejected
    assert mock_stream.call_count == 1


def test_submit_async_stops_on_failed_job() -> None:
    client = _transport()
    failed = {"return": False, "reason": "subnet overlaps"}
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.side_effect = [
            _stream({"return": True, "results": "req-1"}),
            _stream(failed),
        ]
        body = client.submit_async(SUBMIT)

    assert json.loads(body) == failed


def test_submit_async_cancelled_before_submit() -> None:
    client = _transport()
    cancel = threading.Event()
    cancel.set()
    with patch.object(httpx.Client, "stream") as mock_stream:
        with pytest.raises(OperationCancelled):
            client.submit_async(SUBMIT, cancel=cancel)
        mock_stream.assert_not_called()


def test_submit_async_cancelled_while_polling() -> None:
    client = _transport()
    cancel = threading.Event()

    def accept(*args: Any, **kwargs: Any) -> MagicMock:
        cancel.set()
        return _stream({"return": True, "results": "req-7"})

    with patch.object(httpx.Client, "stream", side_effect=accept) as mock_stream:
        with pytest.raises(OperationCancelled) as exc_info:
            client.submit_async(SUBMIT, cancel=cancel)

    assert mock_stream.call_count == 1
    assert exc_info.value.stage == "poll"
    assert not isinstance(exc_info.value, APIRejected)


def test_submit_async_times_out() -> None:
    client = _transport()
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream({"return": True, "results": "req-9"})
        with pytest.raises(OperationTimedOut) as exc_info:
            client.submit_async(SUBMIT, timeout_secs=-1)

    assert isinstance(exc_info.value, TransportFailure)
    assert exc_info.value.action == "create_multicloud_ha_gateway"


def test_http_error_becomes_transport_failure() -> None:
    client = _transport()
    with patch.object(httpx.Client, "stream", side_effect=httpx.ConnectError("refused")):
        with pytest.raises(TransportFailure) as exc_info:
            client.submit_async(SUBMIT)

    assert exc_info.value.stage == "submit"
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_oversized_body_is_rejected() -> None:
    client = _transport(max_body_bytes=10)
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream({"return": True, "results": "x" * 100})
        with pytest.raises(TransportFailure, match="too large"):
            client.call({"action": "list_vpcs_summary"})


def test_body_cap_counts_bytes_not_characters() -> None:
    # 30 two-byte characters: 30 chars of text, 60 bytes on the wire.
    body = json.dumps({"return": True, "results": "é" * 30}, ensure_ascii=False)
    assert len(body) < 70 < len(body.encode("utf-8"))
    client = _transport(max_body_bytes=70)
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream(body)
        with pytest.raises(TransportFailure, match="too large"):
            client.call({"action": "list_vpcs_summary"})


def test_oversized_stream_stops_reading() -> None:
    client = _transport(max_body_bytes=64)
    resp = MagicMock()
    resp.iter_bytes.return_value = iter([b"x" * 40, b"x" * 40, b"never-read"])
    ctx = MagicMock()
    ctx.__enter__.return_value = resp
    ctx.__exit__.return_value = False
    with patch.object(httpx.Client, "stream", return_value=ctx):
        with pytest.raises(TransportFailure, match="too large") as exc_info:
            client.submit_async(SUBMIT)

    assert exc_info.value.stage == "submit"
    assert next(resp.iter_bytes.return_value) == b"never-read"
    ctx.__exit__.assert_called_once()


def test_multibyte_body_within_cap_is_decoded() -> None:
    body = json.dumps({"return": True, "results": "é" * 30}, ensure_ascii=False)
    client = _transport()
    with patch.object(httpx.Client, "stream") as mock_stream:
        # Chunk boundary splits a two-byte character.
        mock_stream.return_value = _stream(body, chunk_size=7)
        assert json.loads(client.call({"action": "list_vpcs_summary"}))["results"] == "é" * 30


def test_login_returns_cid() -> None:
    client = _transport()
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream({"return": True, "CID": "session-9"})
        assert client.login("admin", "secret") == "session-9"

    assert mock_stream.call_args.kwargs["data"] == {"action": "login", "username": "admin", "password": "secret"}


def test_login_rejected() -> None:
    client = _transport()
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream({"return": False, "reason": "Invalid username or password"})
        with pytest.raises(APIRejected, match="Invalid username"):
            client.login("admin", "wrong")


def test_login_without_cid_is_decode_failure() -> None:
    client = _transport()
    with patch.object(httpx.Client, "stream") as mock_stream:
        mock_stream.return_value = _stream({"return": True})
        with pytest.raises(DecodeFailure, match="no CID"):
            client.login("admin", "secret")


@pytest.mark.integration
def test_http_transport_init_does_not_connect() -> None:
    client = HttpControllerTransport(base_url="https://invalid.local")
    assert client.base_url == "https://invalid.local"
