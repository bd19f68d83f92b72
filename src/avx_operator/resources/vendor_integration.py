"""FireNet firewall vendor integration.

Two flavours: per-instance vendor info (``VendorInfo``) and a firewall
manager such as Panorama fronting a whole FireNet gateway
(``FirewallManager``). Both are plain synchronous calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..controller_client import ControllerClient

FIREWALL_MANAGER_CONFIG_MODE_DEFAULT = "DEFAULT"
FIREWALL_MANAGER_CONFIG_MODE_ADVANCE = "ADVANCE"


@dataclass(frozen=True)
class VendorInfo:
    vpc_id: str
    firewall_id: str
    firewall_vendor: str | None = None
    firewall_name: str | None = None
    user: str | None = None
    password: str | None = None
    api_token: str | None = None
    route_table: str | None = None
    public_ip: str | None = None


@dataclass(frozen=True)
class FirewallTemplateConfig:
    template: str | None = None
    template_stack: str | None = None
    route_table: str | None = None

    def to_dict(self) -> dict[str, str]:
        return {k: v for k, v in vars(self).items() if v}


@dataclass(frozen=True)
class FirewallManager:
    vpc_id: str
    gw_name: str
    firewall_vendor: str | None = None
    public_ip: str | None = None
    user: str | None = None
    password: str | None = None
    template: str | None = None
    template_stack: str | None = None
    route_table: str | None = None
    # Keyed by firewall instance id; only used in ADVANCE mode.
    firewall_template_config: Mapping[str, FirewallTemplateConfig] = field(default_factory=dict)
    config_mode: str | None = None
    save: bool = False
    sync: bool = False


def edit_firenet_firewall_vendor_info(client: ControllerClient, info: VendorInfo) -> None:
    client.post_api("edit_firenet_firewall_vendor_info", info)


def show_firenet_firewall_vendor_config(client: ControllerClient, info: VendorInfo) -> None:
    """Ask the controller to push its route config to the firewall instance."""
    client.post_api(
        "show_firenet_firewall_vendor_config",
        {"vpc_id": info.vpc_id, "firewall_id": info.firewall_id, "sync": True},
    )


def edit_firenet_firewall_manager_vendor_info(client: ControllerClient, manager: FirewallManager) -> None:
    params: dict[str, Any] = {
        "vpc_id": manager.vpc_id,
        "gw_name": manager.gw_name,
        "firewall_vendor": manager.firewall_vendor,
        "public_ip": manager.public_ip,
        "user": manager.user,
        "password": manager.password,
        "template": manager.template,
        "template_stack": manager.template_stack,
        "route_table": manager.route_table,
        "config_mode": manager.config_mode,
    }
    if manager.firewall_template_config:
        params["firewall_template_config"] = {
            instance: cfg.to_dict() for instance, cfg in manager.firewall_template_config.items()
        }
    # Only transmitted when set.
    if manager.save:
        params["save"] = True
    if manager.sync:
        params["sync"] = True
    client.post_api("edit_firenet_firewall_manager_vendor_info", params)


def sync_firenet_firewall_manager_vendor_config(client: ControllerClient, manager: FirewallManager) -> None:
    client.post_api(
        "show_firenet_firewall_vendor_config",
        {"vpc_id": manager.vpc_id, "gw_name": manager.gw_name, "sync": True},
    )
