from .aws_peering import AWSPeer, create_aws_peer, delete_aws_peer, get_aws_peer
from .azure_peering import AzurePeer, create_azure_peer, delete_azure_peer, get_azure_peer
from .domain_conn import DomainConn, create_domain_conn, delete_domain_conn, get_domain_conn
from .feature_config import FeatureStatus, disable_feature, enable_feature, get_feature_status
from .gateway_group import (
    GatewayGroup,
    create_gateway_group,
    delete_gateway_group,
    get_gateway_group,
    update_gateway_group,
)
from .ha_gateway import (
    EdgeSpokeHa,
    HaGatewayCreated,
    SpokeHaGateway,
    TransitHaGateway,
    create_edge_spoke_ha,
    create_spoke_ha_gateway,
    create_transit_ha_gateway,
)
from .transitive_peering import TransPeer, create_trans_peer, delete_trans_peer, get_trans_peer
from .vendor_integration import (
    FIREWALL_MANAGER_CONFIG_MODE_ADVANCE,
    FIREWALL_MANAGER_CONFIG_MODE_DEFAULT,
    FirewallManager,
    FirewallTemplateConfig,
    VendorInfo,
    edit_firenet_firewall_manager_vendor_info,
    edit_firenet_firewall_vendor_info,
    show_firenet_firewall_vendor_config,
    sync_firenet_firewall_manager_vendor_config,
)

__all__ = [
    "AWSPeer",
    "AzurePeer",
    "DomainConn",
    "EdgeSpokeHa",
    "FIREWALL_MANAGER_CONFIG_MODE_ADVANCE",
    "FIREWALL_MANAGER_CONFIG_MODE_DEFAULT",
    "FeatureStatus",
    "FirewallManager",
    "FirewallTemplateConfig",
    "GatewayGroup",
    "HaGatewayCreated",
    "SpokeHaGateway",
    "TransPeer",
    "TransitHaGateway",
    "VendorInfo",
    "create_aws_peer",
    "create_azure_peer",
    "create_domain_conn",
    "create_edge_spoke_ha",
    "create_gateway_group",
    "create_spoke_ha_gateway",
    "create_trans_peer",
    "create_transit_ha_gateway",
    "delete_aws_peer",
    "delete_azure_peer",
    "delete_domain_conn",
    "delete_gateway_group",
    "delete_trans_peer",
    "disable_feature",
    "edit_firenet_firewall_manager_vendor_info",
    "edit_firenet_firewall_vendor_info",
    "enable_feature",
    "get_aws_peer",
    "get_azure_peer",
    "get_domain_conn",
    "get_feature_status",
    "get_gateway_group",
    "get_trans_peer",
    "show_firenet_firewall_vendor_config",
    "sync_firenet_firewall_manager_vendor_config",
    "update_gateway_group",
]
