"""HA gateway creation.

The controller may generate the HA gateway name itself; it only appears in
the completed job's payload, so a ``ha_gw_name`` hook is registered on every
create. Some edge cloud types also return a ZTP artifact in ``results``.
"""

from __future__ import annotations

import base64
import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Sequence

from ..artifacts import (
    ArtifactWriter,
    FileArtifactWriter,
    artifact_file_name,
    ha_artifact_file_name,
    persist_artifact,
)
from ..controller_client import ControllerClient
from ..domain_types import Artifact, ArtifactKind, AsyncOperation, DispatchResult
from ..hooks import capture_field

log = logging.getLogger(__name__)

CREATE_HA_ACTION = "create_multicloud_ha_gateway"

# Controller cloud-type bitmask values for edge platforms.
EDGE_CSP = 65536
EDGE_NEO = 262144
EDGE_EQUINIX = 524288
EDGE_MEGAPORT = 1048576
EDGE_SELF_MANAGED = 2097152


def _form(name: str) -> Any:
    return field(default=None, metadata={"form": name})


@dataclass(frozen=True)
class SpokeHaGateway:
    primary_gw_name: str
    cloud_type: int
    gw_name: str | None = _form("ha_gw_name")
    account_name: str | None = None
    vpc_id: str | None = None
    gw_size: str | None = None
    subnet: str | None = _form("gw_subnet")
    region: str | None = None
    zone: str | None = None
    eip: str | None = None
    insane_mode: str | None = None
    tag_json: str | None = None
    autogen_hagw_name: str | None = None
    async_mode: bool = field(default=False, metadata={"form": "async"})


@dataclass(frozen=True)
class TransitHaGateway:
    primary_gw_name: str
    cloud_type: int
    gw_name: str | None = _form("ha_gw_name")
    account_name: str | None = None
    vpc_id: str | None = None
    gw_size: str | None = None
    subnet: str | None = _form("gw_subnet")
    region: str | None = None
    zone: str | None = None
    bgp_lan_subnet: str | None = _form("bgp_lan_specify_subnet")
    insane_mode: str | None = None
    tag_json: str | None = None
    autogen_hagw_name: str | None = None
    device_id: str | None = None
    interfaces: str | None = None
    interface_mapping: str | None = None
    ztp_file_type: str | None = None
    ztp_file_download_path: str | None = _form("-")
    mgmt_egress_ip: str | None = None
    async_mode: bool = field(default=False, metadata={"form": "async"})


@dataclass(frozen=True)
class EdgeSpokeHa:
    primary_gw_name: str
    site_id: str
    ztp_file_type: str = "cloud-init"
    ztp_file_download_path: str | None = _form("-")
    interface_list: Sequence[dict[str, Any]] = field(default=(), metadata={"form": "-"})
    mgmt_egress_ip: str | None = None


@dataclass(frozen=True)
class HaGatewayCreated:
    gw_name: str
    artifact: Artifact | None = None


def _create_ha(client: ControllerClient, payload: Any, cancel: threading.Event | None) -> DispatchResult:
    operation = AsyncOperation(action=CREATE_HA_ACTION, payload=payload).with_hook(capture_field("ha_gw_name"))
    return client.post_async_api(operation, cancel=cancel)


def _resolve_name(result: DispatchResult, requested: str | None) -> str:
    name = result.resolve(requested, what="HA gateway name")
    if result.hook_value:
        log.info("HA gateway name from async response: %s", name)
    else:
        log.info("Using requested HA gateway name: %s", name)
    return name


def create_spoke_ha_gateway(
    client: ControllerClient,
    gateway: SpokeHaGateway,
    cancel: threading.Event | None = None,
) -> str:
    result = _create_ha(client, gateway, cancel)
    return _resolve_name(result, gateway.gw_name)


def _transit_ztp_kind(gateway: TransitHaGateway) -> ArtifactKind | None:
    """Artifact kind a transit HA create returns, or None when it returns none.

    Equinix and Megaport always hand back a cloud-init script. Self-managed
    edge honours ``ztp_file_type``. Other edge platforms are provisioned
    out of band and produce no file.
    """
    if gateway.cloud_type in (EDGE_EQUINIX, EDGE_MEGAPORT):
        return ArtifactKind.TEXT
    if gateway.cloud_type == EDGE_SELF_MANAGED:
        return ArtifactKind.from_ztp_file_type(gateway.ztp_file_type)
    return None


def create_transit_ha_gateway(
    client: ControllerClient,
    gateway: TransitHaGateway,
    writer: ArtifactWriter | None = None,
    cancel: threading.Event | None = None,
) -> HaGatewayCreated:
    result = _create_ha(client, gateway, cancel)
    name = _resolve_name(result, gateway.gw_name)

    artifact = None
    kind = _transit_ztp_kind(gateway)
    if kind is not None and gateway.ztp_file_download_path:
        artifact = persist_artifact(
            writer or FileArtifactWriter(),
            gateway.ztp_file_download_path,
            artifact_file_name(name, gateway.vpc_id or "", kind),
            result.envelope.results,
            kind,
            action=CREATE_HA_ACTION,
        )
    return HaGatewayCreated(gw_name=name, artifact=artifact)


def create_edge_spoke_ha(
    client: ControllerClient,
    gateway: EdgeSpokeHa,
    writer: ArtifactWriter | None = None,
    cancel: threading.Event | None = None,
) -> HaGatewayCreated:
    kind = ArtifactKind.from_ztp_file_type(gateway.ztp_file_type)
    interfaces = json.dumps(list(gateway.interface_list)).encode("utf-8")
    payload = {
        "primary_gw_name": gateway.primary_gw_name,
        "site_id": gateway.site_id,
        "ztp_file_type": gateway.ztp_file_type,
        "interfaces": base64.b64encode(interfaces).decode("ascii"),
        "mgmt_egress_ip": gateway.mgmt_egress_ip,
        "no_progress_bar": True,
        "cloud_init": kind is ArtifactKind.TEXT,
    }
    result = _create_ha(client, payload, cancel)
    name = _resolve_name(result, None)

    artifact = None
    if gateway.ztp_file_download_path:
        artifact = persist_artifact(
            writer or FileArtifactWriter(),
            gateway.ztp_file_download_path,
            ha_artifact_file_name(gateway.site_id, kind),
            result.envelope.results,
            kind,
            action=CREATE_HA_ACTION,
        )
    return HaGatewayCreated(gw_name=name, artifact=artifact)
