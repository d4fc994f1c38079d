"""Shared pytest fixtures for reward vault tests."""

from __future__ import annotations

import pytest

from reward_vault_sdk.client import RewardVaultClient
from reward_vault_sdk.models import EpochInfo
from reward_vault_sdk.signing import VaultSigner
from tests.fixtures.mock_vault import FakeLedger, MockVault

# Well-known throwaway key from the web3.py documentation
SIGNER_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
OTHER_KEY = "0x" + "22" * 32

PACKAGE_ID = "0xd94252d8e5f5561ada000d29bb6437d2f45d94811099d3d230ce87ee56a89cab"
SENDER = "0x" + "ab" * 32

EPOCH_START_MS = 1_699_900_000_000
EPOCH_DURATION_MS = 86_400_000


@pytest.fixture
def signer() -> VaultSigner:
    return VaultSigner(SIGNER_KEY)


@pytest.fixture
def other_signer() -> VaultSigner:
    return VaultSigner(OTHER_KEY)


@pytest.fixture
def epoch() -> EpochInfo:
    return EpochInfo(epoch_start_ms=EPOCH_START_MS, epoch_duration_ms=EPOCH_DURATION_MS)


@pytest.fixture
def mock_vault() -> MockVault:
    """Contract double whose clock sits in the middle of the epoch."""
    return MockVault(PACKAGE_ID, SENDER, now_ms=EPOCH_START_MS + EPOCH_DURATION_MS // 2)


@pytest.fixture
def ledger(epoch: EpochInfo, mock_vault: MockVault) -> FakeLedger:
    return FakeLedger(epoch, mock_vault)


@pytest.fixture
def vault_client(
    signer: VaultSigner, ledger: FakeLedger, mock_vault: MockVault
) -> RewardVaultClient:
    """Client connected to a freshly created vault authorizing ``signer``."""
    client = RewardVaultClient(signer, ledger, mock_vault, PACKAGE_ID)
    client.create_vault([signer.address])
    return client
