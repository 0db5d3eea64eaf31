"""The two recognized layouts of the navigation manifest."""

from dataclasses import dataclass
from typing import Any


@dataclass
class FlatManifest:
    """``{"navigation": [group, ...]}``."""

    groups: list[Any]


@dataclass
class TabbedManifest:
    """``{"navigation": {"tabs": [{"tab": ..., "groups": [...]}, ...]}}``."""

    tabs: list[Any]


ManifestShape = FlatManifest | TabbedManifest


def detect_manifest_shape(document: dict[str, Any]) -> ManifestShape:
    """Classify ``document`` and normalize it in place so the shape's lists are live.

    A missing or malformed ``navigation`` value becomes an empty flat list.
    """
    navigation = document.get("navigation")
    if isinstance(navigation, dict) and "tabs" in navigation:
        if not isinstance(navigation["tabs"], list):
            navigation["tabs"] = []
        return TabbedManifest(tabs=navigation["tabs"])
    if not isinstance(navigation, list):
        document["navigation"] = []
    return FlatManifest(groups=document["navigation"])
