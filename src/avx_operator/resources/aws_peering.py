from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from ..controller_client import ControllerClient
from ..errors import NotFoundError, ResultMissingError

log = logging.getLogger(__name__)

_PEERING_ID = re.compile(r"pcx-\w+")


def _form(name: str) -> Any:
    return field(default=None, metadata={"form": name})


@dataclass(frozen=True)
class AWSPeer:
    vpc_id1: str = field(metadata={"form": "peer1_vpc_id"})
    vpc_id2: str = field(metadata={"form": "peer2_vpc_id"})
    account_name1: str | None = _form("peer1_account_name")
    account_name2: str | None = _form("peer2_account_name")
    region1: str | None = _form("peer1_region")
    region2: str | None = _form("peer2_region")
    # Comma-separated route table ids.
    rtb_list1: str | None = _form("peer1_rtb_id")
    rtb_list2: str | None = _form("peer2_rtb_id")


def _peering_id(results: Any) -> str | None:
    """Pull the ``pcx-...`` connection id out of the create response text."""
    text = results.get("text") if isinstance(results, dict) else None
    if not isinstance(text, str):
        return None
    match = _PEERING_ID.search(text)
    return match.group(0) if match else None


def create_aws_peer(client: ControllerClient, peer: AWSPeer) -> str:
    """Create the peering and return its AWS connection id."""
    envelope = client.post_api("create_aws_peering", peer)
    peering_id = _peering_id(envelope.results)
    if peering_id is None:
        raise ResultMissingError(
            "AWS peering id not found in create_aws_peering response",
            hint="The peering may exist; look it up with get_aws_peer.",
        )
    return peering_id


def _route_tables(side: Mapping[str, Any]) -> str | None:
    tables = side.get("peering_route_tables")
    if not isinstance(tables, list) or not tables:
        return None
    return ",".join(str(t) for t in tables)


def get_aws_peer(client: ControllerClient, peer: AWSPeer) -> AWSPeer:
    envelope = client.post_api("list_aws_peerings", {})
    results = envelope.results if isinstance(envelope.results, dict) else {}
    pairs = results.get("pair_list")
    for pair in pairs if isinstance(pairs, list) else []:
        if not isinstance(pair, dict):
            continue
        requester = pair.get("requester")
        accepter = pair.get("accepter")
        if not isinstance(requester, dict) or not isinstance(accepter, dict):
            continue
        if requester.get("vpc_id") != peer.vpc_id1 or accepter.get("vpc_id") != peer.vpc_id2:
            continue
        return replace(
            peer,
            account_name1=requester.get("account_name"),
            account_name2=accepter.get("account_name"),
            region1=requester.get("region"),
            region2=accepter.get("region"),
            rtb_list1=_route_tables(requester) or peer.rtb_list1,
            rtb_list2=_route_tables(accepter) or peer.rtb_list2,
        )

    log.debug("no AWS peering between VPC %s and %s is present", peer.vpc_id1, peer.vpc_id2)
    raise NotFoundError(f"AWS peering {peer.vpc_id1} <-> {peer.vpc_id2} not found", action="list_aws_peerings")


def delete_aws_peer(client: ControllerClient, peer: AWSPeer) -> None:
    client.post_api("delete_aws_peering", peer)
