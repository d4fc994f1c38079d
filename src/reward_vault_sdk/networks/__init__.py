from reward_vault_sdk.networks.base import (
    NetworkConfig,
    get_network,
    list_networks,
    register_network,
)
from reward_vault_sdk.networks.sui import (
    DEVNET,
    LOCALNET,
    MAINNET,
    MIST_PER_SUI,
    TESTNET,
    get_fullnode_url,
    mist_to_sui,
)

__all__ = [
    "NetworkConfig",
    "get_network",
    "list_networks",
    "register_network",
    "MAINNET",
    "TESTNET",
    "DEVNET",
    "LOCALNET",
    "MIST_PER_SUI",
    "get_fullnode_url",
    "mist_to_sui",
]
