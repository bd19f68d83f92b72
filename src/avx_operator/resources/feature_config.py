from __future__ import annotations

from dataclasses import dataclass

from ..controller_client import ControllerClient


@dataclass(frozen=True)
class FeatureStatus:
    feature: str
    enabled: bool


def enable_feature(client: ControllerClient, feature: str) -> None:
    client.post_api("enable_controller_feature", {"feature": feature})


def disable_feature(client: ControllerClient, feature: str) -> None:
    client.post_api("disable_controller_feature", {"feature": feature})


def get_feature_status(client: ControllerClient, feature: str) -> FeatureStatus:
    envelope = client.post_api("get_controller_feature", {"feature": feature})
    results = envelope.results if isinstance(envelope.results, dict) else {}
    return FeatureStatus(feature=feature, enabled=bool(results.get("enabled", False)))
