"""
Network registry.

Each supported ledger network is described by a :class:`NetworkConfig` and
registered by name when its module is imported.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class NetworkConfig:
    """Connection details for one ledger network."""

    name: str
    display_name: str
    rpc_url: str
    faucet_url: Optional[str] = None
    enabled: bool = True
    extra_config: dict[str, Any] = field(default_factory=dict)


_NETWORKS: dict[str, NetworkConfig] = {}


def register_network(network: NetworkConfig) -> None:
    """Register (or replace) a network under its lowercase name."""
    _NETWORKS[network.name.lower()] = network


def get_network(name: str) -> Optional[NetworkConfig]:
    """Look up a registered network, or None if unknown."""
    return _NETWORKS.get(name.lower())


def list_networks(enabled_only: bool = True) -> list[NetworkConfig]:
    """All registered networks, sorted by name."""
    return sorted(
        (n for n in _NETWORKS.values() if n.enabled or not enabled_only),
        key=lambda n: n.name,
    )
