"""
Reward vault SDK configuration.

Uses pydantic-settings to load values from the environment or a ``.env``
file. The signing key is held as a ``SecretStr`` and only unwrapped when a
:class:`~reward_vault_sdk.signing.VaultSigner` is built from it.
"""

import logging
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reward_vault_sdk.deadline import DEFAULT_DEADLINE_MARGIN_MS
from reward_vault_sdk.encoding import normalize_address
from reward_vault_sdk.models import DEFAULT_MODULE_NAME
from reward_vault_sdk.networks import get_fullnode_url
from reward_vault_sdk.signing import VaultSigner


class RewardVaultSettings(BaseSettings):
    """Configuration for talking to a deployed reward vault."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Signing authority
    evm_private_key: SecretStr = Field(..., description="secp256k1 key of an authorized signer")

    # Ledger
    network: Literal["mainnet", "testnet", "devnet", "localnet"] = Field(default="mainnet")
    rpc_url: Optional[str] = Field(default=None, description="Overrides the network's fullnode URL")
    rpc_timeout: float = Field(default=30.0, description="Timeout in seconds")

    # Vault deployment
    package_id: str = Field(..., description="Published vault package")
    vault_id: Optional[str] = Field(default=None, description="RewardVault object id")
    module_name: str = Field(default=DEFAULT_MODULE_NAME)

    # Authorization
    project_id: int = Field(default=0, ge=0)
    deadline_margin_ms: int = Field(default=DEFAULT_DEADLINE_MARGIN_MS, ge=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @field_validator("vault_id", "rpc_url", mode="before")
    @classmethod
    def _empty_to_none(cls, value):
        return value or None

    @field_validator("package_id")
    @classmethod
    def _normalize_package(cls, value: str) -> str:
        return normalize_address(value)

    @property
    def fullnode_url(self) -> str:
        return self.rpc_url or get_fullnode_url(self.network)

    def build_signer(self) -> VaultSigner:
        return VaultSigner(self.evm_private_key.get_secret_value())


def configure_logging(level: str = "INFO") -> None:
    """Basic console logging for scripts using the SDK."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
