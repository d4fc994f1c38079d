"""
Data model for reward vault operations.

Values built locally before signing (payloads, authorized operations) are
frozen dataclasses. Values decoded from ledger responses (epochs, events,
vault state) are pydantic models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from reward_vault_sdk.encoding import U64_MAX, check_u64, normalize_address
from reward_vault_sdk.errors import MalformedTypeName

TYPE_NAME_SEPARATOR = "::"

# Fully qualified type of the native SUI coin
SUI_TYPE_ARG = "0x2::sui::SUI"

# Move module of the published vault package
DEFAULT_MODULE_NAME = "reward_vault_sui"


class OperationKind(str, Enum):
    """Vault operation; the value is the Move entry function name."""

    DEPOSIT = "deposit"
    CLAIM = "claim"
    WITHDRAW = "withdraw"


@dataclass(frozen=True)
class AssetTypeName:
    """Fully qualified coin type, e.g. ``0x2::sui::SUI``."""

    module_address: str
    module_name: str
    type_name: str

    @classmethod
    def parse(cls, value: str) -> "AssetTypeName":
        """
        Split ``address::module::type`` into its three parts.

        Raises:
            MalformedTypeName: If the string does not have exactly three
                non-empty ``::`` separated parts
        """
        if not isinstance(value, str):
            raise MalformedTypeName(f"Asset type must be a string, got {type(value).__name__}")
        parts = value.split(TYPE_NAME_SEPARATOR)
        if len(parts) != 3:
            raise MalformedTypeName(
                f"Asset type {value!r} must have exactly 3 '::' separated parts, got {len(parts)}"
            )
        if not all(parts):
            raise MalformedTypeName(f"Asset type {value!r} has an empty part")
        return cls(module_address=parts[0], module_name=parts[1], type_name=parts[2])

    def __str__(self) -> str:
        return TYPE_NAME_SEPARATOR.join((self.module_address, self.module_name, self.type_name))

    @property
    def is_sui(self) -> bool:
        """True for the native SUI coin, whatever form its address is written in."""
        return (
            normalize_address(self.module_address) == normalize_address("0x2")
            and self.module_name == "sui"
            and self.type_name == "SUI"
        )


@dataclass(frozen=True)
class OperationPayload:
    """
    Everything the vault signs over for one operation.

    ``account`` is the depositor for deposits and the recipient for claims and
    withdrawals. It is normalized to a 0x-prefixed 32-byte hex address.
    """

    payment_id: int
    project_id: int
    account: str
    asset_type: AssetTypeName
    amount: int
    deadline: int

    def __post_init__(self):
        for name in ("payment_id", "project_id", "amount", "deadline"):
            check_u64(getattr(self, name), name)
        # frozen dataclass: bypass __setattr__ for normalization
        object.__setattr__(self, "account", normalize_address(self.account))
        if isinstance(self.asset_type, str):
            object.__setattr__(self, "asset_type", AssetTypeName.parse(self.asset_type))


@dataclass(frozen=True)
class AuthorizedOperation:
    """A payload together with its canonical bytes and signature, ready to submit."""

    kind: OperationKind
    payload: OperationPayload
    canonical_bytes: bytes
    signature: bytes

    @property
    def payment_id(self) -> int:
        return self.payload.payment_id

    @property
    def project_id(self) -> int:
        return self.payload.project_id

    @property
    def amount(self) -> int:
        return self.payload.amount

    @property
    def deadline(self) -> int:
        return self.payload.deadline

    @property
    def signature_hex(self) -> str:
        return "0x" + self.signature.hex()


# ============================================================
# Ledger data
# ============================================================


class EpochInfo(BaseModel):
    """Start and duration of the current epoch, in milliseconds."""

    epoch_start_ms: int = Field(..., alias="epochStartTimestampMs", ge=0)
    epoch_duration_ms: int = Field(..., alias="epochDurationMs", ge=0)

    class Config:
        populate_by_name = True


class TransactionResult(BaseModel):
    """Executed transaction as reported by the ledger."""

    digest: Optional[str] = None
    events: list[dict[str, Any]] = Field(default_factory=list)
    object_changes: list[dict[str, Any]] = Field(default_factory=list, alias="objectChanges")

    class Config:
        populate_by_name = True


class RewardVaultState(BaseModel):
    """Persisted vault object: its id, owner and authorized EVM signers."""

    id: str
    owner: str
    signers: frozenset[str]

    class Config:
        frozen = True


class VaultEvent(BaseModel):
    """Fields shared by every vault confirmation event."""

    payment_id: int = Field(..., ge=0, le=U64_MAX)
    project_id: int = Field(..., ge=0, le=U64_MAX)
    token: str
    amount: int = Field(..., ge=0, le=U64_MAX)
    deadline: int = Field(..., ge=0, le=U64_MAX)

    @field_validator("token", mode="before")
    @classmethod
    def _unwrap_type_name(cls, value: Any) -> Any:
        # std::type_name::TypeName is emitted as {"name": "..."}
        if isinstance(value, dict) and "name" in value:
            return value["name"]
        return value


class TokenDepositedEvent(VaultEvent):
    """Emitted by ``deposit``."""


class TokenWithdrawalEvent(VaultEvent):
    """Emitted by ``withdraw``."""

    recipient: str


class RewardsClaimedEvent(VaultEvent):
    """Emitted by ``claim``."""

    recipient: str
