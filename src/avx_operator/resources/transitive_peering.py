from __future__ import annotations

import logging
from dataclasses import dataclass

from ..controller_client import ControllerClient
from ..errors import NotFoundError
from ..result_checker import NotFoundChecker

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransPeer:
    source: str
    nexthop: str
    reachable_cidr: str


def create_trans_peer(client: ControllerClient, peer: TransPeer) -> None:
    client.post_api("add_extended_vpc_peer", peer)


def get_trans_peer(client: ControllerClient, peer: TransPeer) -> TransPeer:
    envelope = client.post_api("list_extended_vpc_peer", peer)
    entries = envelope.results if isinstance(envelope.results, list) else []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if entry.get("source") == peer.source and entry.get("nexthop") == peer.nexthop:
            return TransPeer(
                source=peer.source,
                nexthop=peer.nexthop,
                reachable_cidr=str(entry.get("reachable_cidr", "")),
            )

    log.debug(
        "transitive peering between %s and %s with subnet %s not found",
        peer.source,
        peer.nexthop,
        peer.reachable_cidr,
    )
    raise NotFoundError(
        f"transitive peering {peer.source} -> {peer.nexthop} not found",
        action="list_extended_vpc_peer",
    )


def delete_trans_peer(client: ControllerClient, peer: TransPeer, missing_ok: bool = True) -> None:
    try:
        client.post_api("delete_extended_vpc_peer", peer, checker=NotFoundChecker())
    except NotFoundError:
        if not missing_ok:
            raise
