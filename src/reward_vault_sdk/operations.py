"""
Preparation of authorized vault operations.

Deposit, claim and withdraw differ only in the entry function they call and
the event they emit, so a single :class:`OperationBuilder` prepares all three
and :func:`build_move_call` dispatches on :class:`OperationKind` to lay out the
entry-point arguments.

Example:
    >>> builder = OperationBuilder(VaultSigner("0x..."))
    >>> op = builder.prepare_deposit(
    ...     account="0xabc...",
    ...     amount=100,
    ...     asset_type="0x2::sui::SUI",
    ...     epoch_info=ledger.get_epoch_info(),
    ... )
    >>> call = build_move_call(op, package_id="0xd94...", vault_id="0x26c...")
    >>> result = submitter.submit(call)
    >>> event = extract_event(result, OperationKind.DEPOSIT)
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from reward_vault_sdk.decoding import decode_event, is_event_of_kind
from reward_vault_sdk.deadline import DEFAULT_DEADLINE_MARGIN_MS, deadline_from_epoch
from reward_vault_sdk.encoding import (
    encode_address,
    encode_byte_vector,
    encode_byte_vectors,
    encode_payload,
    encode_u64,
    normalize_address,
)
from reward_vault_sdk.errors import EventNotFound, SchemaMismatch
from reward_vault_sdk.models import (
    DEFAULT_MODULE_NAME,
    SUI_TYPE_ARG,
    AssetTypeName,
    AuthorizedOperation,
    EpochInfo,
    OperationKind,
    OperationPayload,
    TransactionResult,
    VaultEvent,
)
from reward_vault_sdk.signing import VaultSigner

logger = logging.getLogger(__name__)

# Shared Clock object passed to every entry point that checks the deadline
CLOCK_OBJECT_ID = "0x6"

CREATE_VAULT_FUNCTION = "create_reward_vault"
VAULT_STRUCT_NAME = "RewardVault"


def generate_payment_id() -> int:
    """Draw a uniformly random u64 from the OS CSPRNG."""
    return int.from_bytes(secrets.token_bytes(8), "little")


# ============================================================
# Move call description
# ============================================================


@dataclass(frozen=True)
class ObjectArg:
    """Reference to an on-chain object by id."""

    object_id: str


@dataclass(frozen=True)
class PureArg:
    """BCS-encoded pure value."""

    value: bytes


@dataclass(frozen=True)
class SplitCoinArg:
    """
    Coin of ``amount`` split off in the same transaction.

    SUI is split from the gas coin. Any other ``coin_type`` must be split from
    a coin object of that type owned by the sender.
    """

    amount: int
    coin_type: str = SUI_TYPE_ARG

    @property
    def from_gas(self) -> bool:
        return AssetTypeName.parse(self.coin_type).is_sui


CallArg = Union[ObjectArg, PureArg, SplitCoinArg]


@dataclass(frozen=True)
class MoveCall:
    """
    A single entry function call, handed to the transaction submitter.

    The submitter is responsible for turning this into a programmable
    transaction, signing it with the sender key and executing it.
    """

    target: str
    arguments: tuple[CallArg, ...]
    type_arguments: tuple[str, ...] = ()

    @property
    def function(self) -> str:
        return self.target.rsplit("::", 1)[-1]


def _target(package_id: str, module: str, function: str) -> str:
    return f"{normalize_address(package_id)}::{module}::{function}"


def build_move_call(
    operation: AuthorizedOperation,
    package_id: str,
    vault_id: str,
    module: str = DEFAULT_MODULE_NAME,
) -> MoveCall:
    """
    Lay out the entry-point arguments for an authorized operation.

    Argument order is fixed by the vault contract:

    - deposit: vault, payment_id, project_id, coin, deadline, signature, clock
    - claim / withdraw: vault, payment_id, project_id, recipient, amount,
      deadline, signature, clock
    """
    payload = operation.payload
    head: list[CallArg] = [
        ObjectArg(normalize_address(vault_id)),
        PureArg(encode_u64(payload.payment_id)),
        PureArg(encode_u64(payload.project_id)),
    ]
    if operation.kind is OperationKind.DEPOSIT:
        body: list[CallArg] = [SplitCoinArg(payload.amount, str(payload.asset_type))]
    else:
        body = [PureArg(encode_address(payload.account)), PureArg(encode_u64(payload.amount))]
    tail: list[CallArg] = [
        PureArg(encode_u64(payload.deadline)),
        PureArg(encode_byte_vector(operation.signature)),
        ObjectArg(normalize_address(CLOCK_OBJECT_ID)),
    ]
    return MoveCall(
        target=_target(package_id, module, operation.kind.value),
        arguments=tuple(head + body + tail),
        type_arguments=(str(payload.asset_type),),
    )


def build_create_vault_call(
    package_id: str,
    signers: Iterable[str],
    module: str = DEFAULT_MODULE_NAME,
) -> MoveCall:
    """
    Describe the ``create_reward_vault`` call for an initial signer set.

    Args:
        package_id: Published vault package
        signers: Hex-encoded EVM addresses of the authorized signers
        module: Vault Move module
    """
    signer_bytes = []
    for signer in signers:
        digits = signer[2:] if signer[:2] in ("0x", "0X") else signer
        try:
            raw = bytes.fromhex(digits)
        except ValueError as e:
            raise ValueError(f"Invalid signer address: {signer!r}") from e
        if len(raw) != 20:
            raise ValueError(f"Signer must be a 20-byte EVM address: {signer!r}")
        signer_bytes.append(raw)
    if not signer_bytes:
        raise ValueError("At least one signer is required")
    return MoveCall(
        target=_target(package_id, module, CREATE_VAULT_FUNCTION),
        arguments=(PureArg(encode_byte_vectors(signer_bytes)),),
    )


# ============================================================
# Operation builder
# ============================================================


class OperationBuilder:
    """
    Prepares signed vault operations.

    Each call draws a fresh payment id, so concurrent callers never share
    state. Nothing touches the network: the epoch is supplied by the caller.
    """

    def __init__(
        self,
        signer: VaultSigner,
        *,
        project_id: int = 0,
        margin_ms: int = DEFAULT_DEADLINE_MARGIN_MS,
    ):
        self.signer = signer
        self.project_id = project_id
        self.margin_ms = margin_ms

    def prepare(
        self,
        kind: OperationKind,
        account: str,
        amount: int,
        asset_type: Union[AssetTypeName, str],
        epoch_info: EpochInfo,
        *,
        project_id: Optional[int] = None,
        payment_id: Optional[int] = None,
    ) -> AuthorizedOperation:
        """
        Build, encode and sign one operation.

        Args:
            kind: Deposit, claim or withdraw
            account: Depositor (deposit) or recipient (claim/withdraw)
            amount: Amount in the coin's smallest unit
            asset_type: Coin type, parsed or as ``address::module::type``
            epoch_info: Current epoch, used for the deadline
            project_id: Overrides the builder's project id
            payment_id: Fixed payment id (a random one is drawn by default)

        Raises:
            MalformedTypeName: If the asset type is malformed
            InvalidAddress: If the account is not a valid address
            SigningError: If signing fails
        """
        kind = OperationKind(kind)
        if isinstance(asset_type, str):
            asset_type = AssetTypeName.parse(asset_type)

        payload = OperationPayload(
            payment_id=generate_payment_id() if payment_id is None else payment_id,
            project_id=self.project_id if project_id is None else project_id,
            account=account,
            asset_type=asset_type,
            amount=amount,
            deadline=deadline_from_epoch(epoch_info, self.margin_ms),
        )
        canonical_bytes = encode_payload(payload)
        signature = self.signer.sign(canonical_bytes)

        logger.debug(
            "Prepared %s payment_id=%d amount=%d deadline=%d",
            kind.value,
            payload.payment_id,
            payload.amount,
            payload.deadline,
        )
        return AuthorizedOperation(
            kind=kind,
            payload=payload,
            canonical_bytes=canonical_bytes,
            signature=signature,
        )

    def prepare_deposit(
        self, account: str, amount: int, asset_type, epoch_info: EpochInfo, **kwargs: Any
    ) -> AuthorizedOperation:
        return self.prepare(OperationKind.DEPOSIT, account, amount, asset_type, epoch_info, **kwargs)

    def prepare_claim(
        self, recipient: str, amount: int, asset_type, epoch_info: EpochInfo, **kwargs: Any
    ) -> AuthorizedOperation:
        return self.prepare(OperationKind.CLAIM, recipient, amount, asset_type, epoch_info, **kwargs)

    def prepare_withdraw(
        self, recipient: str, amount: int, asset_type, epoch_info: EpochInfo, **kwargs: Any
    ) -> AuthorizedOperation:
        return self.prepare(OperationKind.WITHDRAW, recipient, amount, asset_type, epoch_info, **kwargs)


# ============================================================
# Transaction results
# ============================================================


def extract_events(
    result: TransactionResult,
    kind: OperationKind,
    module: str = DEFAULT_MODULE_NAME,
) -> list[VaultEvent]:
    """Decode every confirmation event of ``kind`` in a transaction result."""
    return [
        decode_event(event, kind, module)
        for event in result.events
        if is_event_of_kind(event, kind, module)
    ]


def extract_event(
    result: TransactionResult,
    kind: OperationKind,
    module: str = DEFAULT_MODULE_NAME,
) -> VaultEvent:
    """
    Return the confirmation event of ``kind`` from a successful transaction.

    Raises:
        EventNotFound: If the transaction emitted no such event
        SchemaMismatch: If the event is present but malformed
    """
    events = extract_events(result, kind, module)
    if not events:
        raise EventNotFound(
            f"Transaction {result.digest or '<unknown>'} emitted no {kind.value} event"
        )
    return events[0]


def find_created_object_id(object_changes: list[dict], object_type: Optional[str] = None) -> str:
    """
    Id of the first object created by a transaction.

    Args:
        object_changes: ``objectChanges`` of the transaction result
        object_type: Only consider created objects whose type contains this

    Raises:
        SchemaMismatch: If no object was created
    """
    for change in object_changes:
        if change.get("type") != "created":
            continue
        if object_type and object_type not in str(change.get("objectType", "")):
            continue
        if "objectId" in change:
            return change["objectId"]
    raise SchemaMismatch("Transaction created no matching object")


def find_published_package_id(object_changes: list[dict]) -> str:
    """
    Id of the package published by a transaction.

    Raises:
        SchemaMismatch: If no package was published
    """
    for change in object_changes:
        if change.get("type") == "published" and "packageId" in change:
            return change["packageId"]
    raise SchemaMismatch("Transaction published no package")
