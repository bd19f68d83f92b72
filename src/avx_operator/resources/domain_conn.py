from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from ..controller_client import ControllerClient
from ..domain_types import AsyncOperation
from ..errors import NotFoundError
from ..result_checker import NotFoundChecker


@dataclass(frozen=True)
class DomainConn:
    """Connection between route domains on two transit gateways."""

    tgw_name1: str
    domain_name1: str
    tgw_name2: str
    domain_name2: str

    @property
    def destination(self) -> str:
        return f"{self.tgw_name2}:{self.domain_name2}"

    def form(self) -> dict[str, Any]:
        return {
            "tgw_name": self.tgw_name1,
            "source_route_domain_name": self.domain_name1,
            "destination_route_domain_name": self.destination,
        }


def create_domain_conn(client: ControllerClient, conn: DomainConn, cancel: threading.Event | None = None) -> None:
    client.post_async_api(AsyncOperation("add_connection_between_route_domains", conn.form()), cancel=cancel)


def get_domain_conn(client: ControllerClient, conn: DomainConn) -> DomainConn:
    """Return ``conn`` if the controller lists it, else raise :class:`NotFoundError`."""
    envelope = client.post_api(
        "list_connected_route_domains",
        {"tgw_name": conn.tgw_name1, "route_domain_name": conn.domain_name1},
        checker=NotFoundChecker(),
    )
    results = envelope.results if isinstance(envelope.results, dict) else {}
    connected = results.get("connected_domain_names") or []
    if conn.destination in connected:
        return conn
    raise NotFoundError(
        f"route domain {conn.domain_name1} on {conn.tgw_name1} is not connected to {conn.destination}",
        action="list_connected_route_domains",
    )


def delete_domain_conn(client: ControllerClient, conn: DomainConn, cancel: threading.Event | None = None) -> None:
    client.post_async_api(AsyncOperation("delete_connection_between_route_domains", conn.form()), cancel=cancel)
