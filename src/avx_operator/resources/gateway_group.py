from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..controller_client import ControllerClient
from ..dispatcher import payload_to_params
from ..domain_types import AsyncOperation
from ..errors import NotFoundError
from ..hooks import capture_field
from ..result_checker import NotFoundChecker


@dataclass(frozen=True)
class GatewayGroup:
    group_name: str
    cloud_type: int
    gw_type: str
    account_name: str | None = None
    vpc_id: str | None = None
    region: str | None = None
    group_uuid: str | None = field(default=None, metadata={"form": "-"})

    @classmethod
    def from_results(cls, results: Mapping[str, Any]) -> GatewayGroup:
        return cls(
            group_name=str(results.get("group_name", "")),
            cloud_type=int(results.get("cloud_type", 0) or 0),
            gw_type=str(results.get("gw_type", "")),
            account_name=results.get("account_name"),
            vpc_id=results.get("vpc_id"),
            region=results.get("region"),
            group_uuid=results.get("group_uuid"),
        )


def create_gateway_group(
    client: ControllerClient,
    group: GatewayGroup,
    cancel: threading.Event | None = None,
) -> GatewayGroup:
    """Create ``group`` and return a copy carrying the controller-assigned UUID.

    The controller may normalise the group name; when the completed job
    reports one, the returned copy carries it.
    """
    operation = AsyncOperation("create_gateway_group", group).with_hook(capture_field("group_uuid"))
    result = client.post_async_api(operation, cancel=cancel)
    return dataclasses.replace(
        group,
        group_uuid=result.resolve(result.partial.group_uuid, what="gateway group uuid"),
        group_name=result.partial.group_name or group.group_name,
    )


def get_gateway_group(client: ControllerClient, group_uuid: str) -> GatewayGroup:
    envelope = client.post_api(
        "get_gateway_group_details",
        {"group_uuid": group_uuid},
        checker=NotFoundChecker(),
    )
    if not isinstance(envelope.results, dict):
        raise NotFoundError(f"gateway group {group_uuid} not found", action="get_gateway_group_details")
    return GatewayGroup.from_results({"group_uuid": group_uuid, **envelope.results})


def delete_gateway_group(
    client: ControllerClient,
    group_uuid: str,
    missing_ok: bool = True,
    cancel: threading.Event | None = None,
) -> None:
    operation = AsyncOperation("delete_gateway_group", {"group_uuid": group_uuid}, checker=NotFoundChecker())
    try:
        client.post_async_api(operation, cancel=cancel)
    except NotFoundError:
        if not missing_ok:
            raise


def update_gateway_group(client: ControllerClient, group: GatewayGroup) -> None:
    if not group.group_uuid:
        raise ValueError(f"gateway group {group.group_name!r} has no uuid; create it first")
    params = payload_to_params(group)
    params["group_uuid"] = group.group_uuid
    client.post_api("update_gateway_group", params)
