"""
Decoding of vault events and vault object state.

Purely structural: maps the JSON the ledger returns for the vault contract's
events and objects into typed records, and raises :class:`SchemaMismatch`
when the shape is not what the contract emits.
"""

import base64
import binascii
from typing import Any

from pydantic import ValidationError

from reward_vault_sdk.encoding import normalize_address
from reward_vault_sdk.errors import InvalidAddress, SchemaMismatch
from reward_vault_sdk.models import (
    DEFAULT_MODULE_NAME,
    OperationKind,
    RewardsClaimedEvent,
    RewardVaultState,
    TokenDepositedEvent,
    TokenWithdrawalEvent,
    VaultEvent,
)

EVENT_NAMES: dict[OperationKind, str] = {
    OperationKind.DEPOSIT: "TokenDeposited",
    OperationKind.CLAIM: "RewardsClaimed",
    OperationKind.WITHDRAW: "TokenWithdrawal",
}

EVENT_MODELS: dict[OperationKind, type[VaultEvent]] = {
    OperationKind.DEPOSIT: TokenDepositedEvent,
    OperationKind.CLAIM: RewardsClaimedEvent,
    OperationKind.WITHDRAW: TokenWithdrawalEvent,
}

DEPOSIT_EVENT_TYPE = f"::{DEFAULT_MODULE_NAME}::TokenDeposited"
REWARDS_CLAIMED_EVENT_TYPE = f"::{DEFAULT_MODULE_NAME}::RewardsClaimed"
WITHDRAWAL_EVENT_TYPE = f"::{DEFAULT_MODULE_NAME}::TokenWithdrawal"


def event_type_tag(kind: OperationKind, module: str = DEFAULT_MODULE_NAME) -> str:
    """Type tag suffix identifying the confirmation event of ``kind``."""
    return f"::{module}::{EVENT_NAMES[kind]}"


def is_event_of_kind(
    raw_event: Any, kind: OperationKind, module: str = DEFAULT_MODULE_NAME
) -> bool:
    """True if the raw event's type contains the tag for ``kind``."""
    if not isinstance(raw_event, dict):
        return False
    event_type = raw_event.get("type")
    return isinstance(event_type, str) and event_type_tag(kind, module) in event_type


def decode_event(
    raw_event: Any, expected_kind: OperationKind, module: str = DEFAULT_MODULE_NAME
) -> VaultEvent:
    """
    Decode one raw ledger event into the typed record for ``expected_kind``.

    Args:
        raw_event: Event dict with ``type`` and ``parsedJson`` keys
        expected_kind: Operation whose confirmation event is expected
        module: Move module that emitted the event

    Raises:
        SchemaMismatch: If the type tag or the event fields do not match
    """
    if not isinstance(raw_event, dict):
        raise SchemaMismatch(f"Event must be an object, got {type(raw_event).__name__}")
    if not is_event_of_kind(raw_event, expected_kind, module):
        raise SchemaMismatch(
            f"Event type {raw_event.get('type')!r} is not "
            f"{event_type_tag(expected_kind, module)!r}"
        )
    parsed = raw_event.get("parsedJson")
    if not isinstance(parsed, dict):
        raise SchemaMismatch("Event has no parsedJson object")
    try:
        return EVENT_MODELS[expected_kind].model_validate(parsed)
    except ValidationError as e:
        raise SchemaMismatch(f"Invalid {EVENT_NAMES[expected_kind]} event: {e}") from e


def _decode_byte_vector(value: Any) -> bytes:
    """vector<u8> as returned by the ledger: int list, 0x-hex or base64."""
    if isinstance(value, list):
        if not all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in value):
            raise SchemaMismatch(f"Byte vector has non-u8 items: {value!r}")
        return bytes(value)
    if isinstance(value, str):
        try:
            if value.startswith("0x"):
                return bytes.fromhex(value[2:])
            return base64.b64decode(value, validate=True)
        except (ValueError, binascii.Error) as e:
            raise SchemaMismatch(f"Undecodable byte vector {value!r}") from e
    raise SchemaMismatch(f"Byte vector must be a list or string, got {type(value).__name__}")


def _field(fields: dict, name: str) -> Any:
    if name not in fields:
        raise SchemaMismatch(f"Vault object is missing field {name!r}")
    return fields[name]


def decode_vault_state(raw_object_fields: Any) -> RewardVaultState:
    """
    Decode the ``fields`` of a vault Move object.

    Expected shape::

        {
            "id": {"id": "0x..."},
            "owner": "0x...",
            "signers": {"fields": {"contents": [[189, 17, ...], ...]}},
        }

    Raises:
        SchemaMismatch: If a field is missing or has the wrong shape
    """
    if not isinstance(raw_object_fields, dict):
        raise SchemaMismatch(
            f"Vault fields must be an object, got {type(raw_object_fields).__name__}"
        )

    uid = _field(raw_object_fields, "id")
    if isinstance(uid, dict):
        uid = uid.get("id")
    if not isinstance(uid, str):
        raise SchemaMismatch(f"Vault id has unexpected shape: {uid!r}")

    try:
        object_id = normalize_address(uid)
        owner = normalize_address(_field(raw_object_fields, "owner"))
    except InvalidAddress as e:
        raise SchemaMismatch(str(e)) from e

    # VecSet<vector<u8>> is a struct wrapping `contents`
    signer_set = _field(raw_object_fields, "signers")
    if isinstance(signer_set, dict) and isinstance(signer_set.get("fields"), dict):
        signer_set = signer_set["fields"]
    if not isinstance(signer_set, dict) or not isinstance(signer_set.get("contents"), list):
        raise SchemaMismatch(f"Vault signers have unexpected shape: {signer_set!r}")

    signers = frozenset(
        "0x" + _decode_byte_vector(item).hex() for item in signer_set["contents"]
    )
    return RewardVaultState(id=object_id, owner=owner, signers=signers)


def decode_vault_object(object_data: Any) -> RewardVaultState:
    """Decode the ``data`` of a ``sui_getObject`` response with content shown."""
    if not isinstance(object_data, dict):
        raise SchemaMismatch("Object response has no data")
    content = object_data.get("content")
    if not isinstance(content, dict) or content.get("dataType") != "moveObject":
        raise SchemaMismatch("Object is not a Move object")
    return decode_vault_state(content.get("fields"))
