"""Tests for settings loading and network lookup."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from reward_vault_sdk.config import RewardVaultSettings
from reward_vault_sdk.networks import (
    MIST_PER_SUI,
    NetworkConfig,
    get_fullnode_url,
    get_network,
    list_networks,
    mist_to_sui,
    register_network,
)
from tests.conftest import PACKAGE_ID, SIGNER_KEY


class TestRewardVaultSettings:
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVM_PRIVATE_KEY", SIGNER_KEY)
        monkeypatch.setenv("NETWORK", "testnet")
        monkeypatch.setenv("PACKAGE_ID", "0xd9")
        monkeypatch.setenv("DEADLINE_MARGIN_MS", "120000")

        settings = RewardVaultSettings(_env_file=None)
        assert settings.network == "testnet"
        assert settings.package_id == "0x" + "0" * 62 + "d9"
        assert settings.deadline_margin_ms == 120_000
        assert settings.fullnode_url == "https://fullnode.testnet.sui.io:443"

    def test_key_is_secret(self) -> None:
        settings = RewardVaultSettings(evm_private_key=SIGNER_KEY, package_id=PACKAGE_ID, _env_file=None)
        assert SIGNER_KEY not in repr(settings)
        assert settings.build_signer().address.startswith("0x")

    def test_defaults(self) -> None:
        settings = RewardVaultSettings(evm_private_key=SIGNER_KEY, package_id=PACKAGE_ID, _env_file=None)
        assert settings.module_name == "reward_vault_sui"
        assert settings.deadline_margin_ms == 60_000
        assert settings.project_id == 0
        assert settings.vault_id is None

    def test_rpc_url_override(self) -> None:
        settings = RewardVaultSettings(
            evm_private_key=SIGNER_KEY, package_id=PACKAGE_ID, rpc_url="http://node:9000", _env_file=None
        )
        assert settings.fullnode_url == "http://node:9000"

    def test_empty_vault_id_is_none(self) -> None:
        settings = RewardVaultSettings(
            evm_private_key=SIGNER_KEY, package_id=PACKAGE_ID, vault_id="", _env_file=None
        )
        assert settings.vault_id is None

    def test_key_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("EVM_PRIVATE_KEY", raising=False)
        with pytest.raises(Exception):
            RewardVaultSettings(_env_file=None)

    def test_package_id_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PACKAGE_ID", raising=False)
        with pytest.raises(ValidationError, match="package_id"):
            RewardVaultSettings(evm_private_key=SIGNER_KEY, _env_file=None)

    @pytest.mark.parametrize("package_id", ["", "0xnothex"])
    def test_invalid_package_id_rejected(self, package_id: str) -> None:
        """A bad package id fails at load time, not at the first Move call."""
        with pytest.raises(ValidationError, match="package_id"):
            RewardVaultSettings(evm_private_key=SIGNER_KEY, package_id=package_id, _env_file=None)

    def test_negative_margin_rejected(self) -> None:
        with pytest.raises(Exception):
            RewardVaultSettings(
                evm_private_key=SIGNER_KEY, package_id=PACKAGE_ID, deadline_margin_ms=-1, _env_file=None
            )


class TestNetworks:
    def test_builtin_networks(self) -> None:
        names = [n.name for n in list_networks()]
        assert names == ["devnet", "localnet", "mainnet", "testnet"]

    def test_fullnode_url(self) -> None:
        assert get_fullnode_url() == "https://fullnode.mainnet.sui.io:443"
        assert get_fullnode_url("LOCALNET") == "http://127.0.0.1:9000"

    def test_unknown_network(self) -> None:
        assert get_network("nope") is None
        with pytest.raises(ValueError, match="Unknown network"):
            get_fullnode_url("nope")

    def test_register_disabled_network(self) -> None:
        register_network(
            NetworkConfig(name="staging", display_name="Staging", rpc_url="http://s", enabled=False)
        )
        assert get_network("staging").rpc_url == "http://s"
        assert "staging" not in [n.name for n in list_networks()]
        assert "staging" in [n.name for n in list_networks(enabled_only=False)]

    def test_mist_to_sui(self) -> None:
        assert MIST_PER_SUI == 10**9
        assert mist_to_sui("1500000000") == Decimal("1.5")
        assert mist_to_sui(1) == Decimal("0.000000001")
