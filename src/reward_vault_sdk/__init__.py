"""
reward-vault-sdk: off-chain authorization for Sui reward vaults.

Vault operations (deposit, claim, withdraw) are encoded into a fixed
canonical message, signed with an EVM secp256k1 key and verified on-chain by
recovering the signer's address.
"""

__version__ = "0.1.0"

from reward_vault_sdk.client import RewardVaultClient
from reward_vault_sdk.config import RewardVaultSettings, configure_logging
from reward_vault_sdk.deadline import (
    DEFAULT_DEADLINE_MARGIN_MS,
    compute_deadline,
    deadline_from_epoch,
    fetch_deadline,
)
from reward_vault_sdk.decoding import (
    DEPOSIT_EVENT_TYPE,
    REWARDS_CLAIMED_EVENT_TYPE,
    WITHDRAWAL_EVENT_TYPE,
    decode_event,
    decode_vault_object,
    decode_vault_state,
)
from reward_vault_sdk.encoding import encode_asset_type, encode_payload, normalize_address
from reward_vault_sdk.errors import (
    DeadlineUnavailable,
    EventNotFound,
    InvalidAddress,
    MalformedTypeName,
    RewardVaultError,
    RpcError,
    SchemaMismatch,
    SigningError,
)
from reward_vault_sdk.models import (
    SUI_TYPE_ARG,
    AssetTypeName,
    AuthorizedOperation,
    EpochInfo,
    OperationKind,
    OperationPayload,
    RewardsClaimedEvent,
    RewardVaultState,
    TokenDepositedEvent,
    TokenWithdrawalEvent,
    TransactionResult,
)
from reward_vault_sdk.operations import (
    MoveCall,
    OperationBuilder,
    build_create_vault_call,
    build_move_call,
    extract_event,
    extract_events,
    generate_payment_id,
)
from reward_vault_sdk.rpc import LedgerClient, SuiRpcClient, TransactionSubmitter
from reward_vault_sdk.signing import VaultSigner, recover_signer, verify_authorization

__all__ = [
    "__version__",
    # Client
    "RewardVaultClient",
    "RewardVaultSettings",
    "configure_logging",
    # Encoding and signing
    "encode_payload",
    "encode_asset_type",
    "normalize_address",
    "VaultSigner",
    "recover_signer",
    "verify_authorization",
    # Deadlines
    "DEFAULT_DEADLINE_MARGIN_MS",
    "compute_deadline",
    "deadline_from_epoch",
    "fetch_deadline",
    # Operations
    "OperationBuilder",
    "MoveCall",
    "build_move_call",
    "build_create_vault_call",
    "extract_event",
    "extract_events",
    "generate_payment_id",
    # Decoding
    "DEPOSIT_EVENT_TYPE",
    "REWARDS_CLAIMED_EVENT_TYPE",
    "WITHDRAWAL_EVENT_TYPE",
    "decode_event",
    "decode_vault_state",
    "decode_vault_object",
    # Ledger
    "LedgerClient",
    "SuiRpcClient",
    "TransactionSubmitter",
    # Models
    "SUI_TYPE_ARG",
    "AssetTypeName",
    "AuthorizedOperation",
    "EpochInfo",
    "OperationKind",
    "OperationPayload",
    "RewardVaultState",
    "TokenDepositedEvent",
    "TokenWithdrawalEvent",
    "RewardsClaimedEvent",
    "TransactionResult",
    # Errors
    "RewardVaultError",
    "MalformedTypeName",
    "InvalidAddress",
    "SigningError",
    "DeadlineUnavailable",
    "EventNotFound",
    "SchemaMismatch",
    "RpcError",
]
