from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from ..controller_client import ControllerClient
from ..errors import NotFoundError


@dataclass(frozen=True)
class AzurePeer:
    vnet1: str = field(metadata={"form": "req_vpc_id"})
    vnet2: str = field(metadata={"form": "acc_vpc_id"})
    account_name1: str | None = field(default=None, metadata={"form": "req_account_name"})
    account_name2: str | None = field(default=None, metadata={"form": "acc_account_name"})
    region1: str | None = field(default=None, metadata={"form": "req_region"})
    region2: str | None = field(default=None, metadata={"form": "acc_region"})
    # Read back from the controller, never sent.
    vnet_cidr1: Sequence[str] = field(default=(), metadata={"form": "-"})
    vnet_cidr2: Sequence[str] = field(default=(), metadata={"form": "-"})


def _str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _cidrs(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def create_azure_peer(client: ControllerClient, peer: AzurePeer) -> None:
    client.post_api("arm_peer_vnet_pair", peer)


def get_azure_peer(client: ControllerClient, peer: AzurePeer) -> AzurePeer:
    envelope = client.post_api("list_arm_peer_vnet_pairs", {})
    pairs = envelope.results if isinstance(envelope.results, list) else []
    for pair in pairs:
        if not isinstance(pair, dict):
            continue
        requester = pair.get("requester")
        accepter = pair.get("accepter")
        if not isinstance(requester, dict) or not isinstance(accepter, dict):
            continue
        if requester.get("vpc_id") != peer.vnet1 or accepter.get("vpc_id") != peer.vnet2:
            continue
        return AzurePeer(
            vnet1=peer.vnet1,
            vnet2=peer.vnet2,
            account_name1=_str(requester.get("account_name")),
            account_name2=_str(accepter.get("account_name")),
            region1=_str(requester.get("region")),
            region2=_str(accepter.get("region")),
            vnet_cidr1=_cidrs(requester.get("vpc_cidr")),
            vnet_cidr2=_cidrs(accepter.get("vpc_cidr")),
        )
    raise NotFoundError(f"Azure peering {peer.vnet1} <-> {peer.vnet2} not found", action="list_arm_peer_vnet_pairs")


def delete_azure_peer(client: ControllerClient, peer: AzurePeer) -> None:
    client.post_api("arm_unpeer_vnet_pair", {"vpc_name1": peer.vnet1, "vpc_name2": peer.vnet2})
