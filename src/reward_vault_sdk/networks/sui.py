"""
Sui network configurations.

Public fullnode endpoints for the four standard Sui environments. Localnet
matches the defaults of ``sui start``.
"""

from decimal import Decimal
from typing import Union

from reward_vault_sdk.networks.base import NetworkConfig, get_network, register_network

# 1 SUI = 10^9 MIST
MIST_PER_SUI = 1_000_000_000

MAINNET = NetworkConfig(
    name="mainnet",
    display_name="Sui Mainnet",
    rpc_url="https://fullnode.mainnet.sui.io:443",
)

TESTNET = NetworkConfig(
    name="testnet",
    display_name="Sui Testnet",
    rpc_url="https://fullnode.testnet.sui.io:443",
    faucet_url="https://faucet.testnet.sui.io",
)

DEVNET = NetworkConfig(
    name="devnet",
    display_name="Sui Devnet",
    rpc_url="https://fullnode.devnet.sui.io:443",
    faucet_url="https://faucet.devnet.sui.io",
)

LOCALNET = NetworkConfig(
    name="localnet",
    display_name="Sui Localnet",
    rpc_url="http://127.0.0.1:9000",
    faucet_url="http://127.0.0.1:9123",
)

for network in (MAINNET, TESTNET, DEVNET, LOCALNET):
    register_network(network)


def get_fullnode_url(network_name: str = "mainnet") -> str:
    """
    Fullnode JSON-RPC URL for a registered network.

    Raises:
        ValueError: If the network is not registered
    """
    network = get_network(network_name)
    if network is None:
        raise ValueError(f"Unknown network: {network_name}")
    return network.rpc_url


def mist_to_sui(mist: Union[int, str]) -> Decimal:
    """Convert a MIST balance (as returned by the RPC, often a string) to SUI."""
    return Decimal(int(mist)) / MIST_PER_SUI
