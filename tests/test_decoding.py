"""Tests for event and vault state decoding."""

import base64

import pytest

from reward_vault_sdk.decoding import (
    DEPOSIT_EVENT_TYPE,
    REWARDS_CLAIMED_EVENT_TYPE,
    WITHDRAWAL_EVENT_TYPE,
    decode_event,
    decode_vault_object,
    decode_vault_state,
    event_type_tag,
)
from reward_vault_sdk.errors import SchemaMismatch
from reward_vault_sdk.models import (
    OperationKind,
    RewardsClaimedEvent,
    TokenDepositedEvent,
    TokenWithdrawalEvent,
)

PACKAGE = "0x" + "d9" * 32
OWNER = "0x" + "ab" * 32
SIGNER = bytes.fromhex("bd11861d13cafa8ad6e143da7034f8a907cd47a8")


def raw_event(name: str, **parsed) -> dict:
    body = {
        "payment_id": "18446744073709551615",
        "project_id": "0",
        "token": {"name": "0" * 63 + "2::sui::SUI"},
        "amount": "40",
        "deadline": "1700000060000",
    }
    body.update(parsed)
    return {"type": f"{PACKAGE}::reward_vault_sui::{name}", "parsedJson": body}


def vault_fields(**overrides) -> dict:
    fields = {
        "id": {"id": "0x" + "26" * 32},
        "owner": OWNER,
        "signers": {
            "type": "0x2::vec_set::VecSet<vector<u8>>",
            "fields": {"contents": [list(SIGNER)]},
        },
    }
    fields.update(overrides)
    return fields


class TestEventTypes:
    def test_constants(self) -> None:
        assert DEPOSIT_EVENT_TYPE == "::reward_vault_sui::TokenDeposited"
        assert REWARDS_CLAIMED_EVENT_TYPE == "::reward_vault_sui::RewardsClaimed"
        assert WITHDRAWAL_EVENT_TYPE == "::reward_vault_sui::TokenWithdrawal"

    def test_custom_module(self) -> None:
        assert event_type_tag(OperationKind.CLAIM, "vault") == "::vault::RewardsClaimed"


class TestDecodeEvent:
    """Test decode_event function."""

    def test_deposit(self) -> None:
        event = decode_event(raw_event("TokenDeposited"), OperationKind.DEPOSIT)
        assert isinstance(event, TokenDepositedEvent)
        assert event.payment_id == 2**64 - 1
        assert event.amount == 40
        assert event.deadline == 1_700_000_060_000
        assert event.token == "0" * 63 + "2::sui::SUI"

    def test_withdrawal(self) -> None:
        event = decode_event(
            raw_event("TokenWithdrawal", recipient=OWNER), OperationKind.WITHDRAW
        )
        assert isinstance(event, TokenWithdrawalEvent)
        assert event.recipient == OWNER

    def test_claim_with_plain_token(self) -> None:
        event = decode_event(
            raw_event("RewardsClaimed", recipient=OWNER, token="0x2::sui::SUI"),
            OperationKind.CLAIM,
        )
        assert isinstance(event, RewardsClaimedEvent)
        assert event.token == "0x2::sui::SUI"

    def test_wrong_kind(self) -> None:
        with pytest.raises(SchemaMismatch, match="TokenWithdrawal"):
            decode_event(raw_event("TokenDeposited"), OperationKind.WITHDRAW)

    def test_missing_recipient(self) -> None:
        with pytest.raises(SchemaMismatch):
            decode_event(raw_event("RewardsClaimed"), OperationKind.CLAIM)

    def test_missing_field(self) -> None:
        event = raw_event("TokenDeposited")
        del event["parsedJson"]["deadline"]
        with pytest.raises(SchemaMismatch):
            decode_event(event, OperationKind.DEPOSIT)

    def test_out_of_range(self) -> None:
        with pytest.raises(SchemaMismatch):
            decode_event(raw_event("TokenDeposited", amount=str(2**64)), OperationKind.DEPOSIT)

    @pytest.mark.parametrize(
        "event",
        [
            None,
            "TokenDeposited",
            {"parsedJson": {}},
            {"type": f"{PACKAGE}::reward_vault_sui::TokenDeposited"},
            {"type": f"{PACKAGE}::reward_vault_sui::TokenDeposited", "parsedJson": []},
        ],
    )
    def test_bad_shape(self, event) -> None:
        with pytest.raises(SchemaMismatch):
            decode_event(event, OperationKind.DEPOSIT)


class TestDecodeVaultState:
    """Test decode_vault_state function."""

    def test_decodes_fields(self) -> None:
        state = decode_vault_state(vault_fields())
        assert state.id == "0x" + "26" * 32
        assert state.owner == OWNER
        assert state.signers == frozenset({"0x" + SIGNER.hex()})

    def test_all_signers_are_kept(self) -> None:
        other = b"\x11" * 20
        state = decode_vault_state(
            vault_fields(signers={"fields": {"contents": [list(SIGNER), list(other)]}})
        )
        assert state.signers == frozenset({"0x" + SIGNER.hex(), "0x" + other.hex()})

    def test_hex_and_base64_vectors(self) -> None:
        contents = ["0x" + SIGNER.hex(), base64.b64encode(b"\x22" * 20).decode()]
        state = decode_vault_state(vault_fields(signers={"contents": contents}))
        assert state.signers == frozenset({"0x" + SIGNER.hex(), "0x" + "22" * 20})

    def test_plain_string_id(self) -> None:
        assert decode_vault_state(vault_fields(id="0x26")).id == "0x" + "0" * 62 + "26"

    def test_empty_signer_set(self) -> None:
        state = decode_vault_state(vault_fields(signers={"fields": {"contents": []}}))
        assert state.signers == frozenset()

    def test_state_is_frozen(self) -> None:
        state = decode_vault_state(vault_fields())
        with pytest.raises(Exception):
            state.owner = "0x1"

    @pytest.mark.parametrize("missing", ["id", "owner", "signers"])
    def test_missing_field(self, missing: str) -> None:
        fields = vault_fields()
        del fields[missing]
        with pytest.raises(SchemaMismatch, match=missing):
            decode_vault_state(fields)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": {"id": 5}},
            {"owner": "nobody"},
            {"signers": {"fields": {}}},
            {"signers": {"fields": {"contents": [[256]]}}},
            {"signers": {"fields": {"contents": ["0xzz"]}}},
            {"signers": {"fields": {"contents": [12]}}},
        ],
    )
    def test_bad_shape(self, overrides: dict) -> None:
        with pytest.raises(SchemaMismatch):
            decode_vault_state(vault_fields(**overrides))

    def test_not_a_dict(self) -> None:
        with pytest.raises(SchemaMismatch):
            decode_vault_state([])


class TestDecodeVaultObject:
    def test_move_object(self) -> None:
        data = {"objectId": "0x26", "content": {"dataType": "moveObject", "fields": vault_fields()}}
        assert decode_vault_object(data).owner == OWNER

    def test_package_rejected(self) -> None:
        with pytest.raises(SchemaMismatch, match="Move object"):
            decode_vault_object({"content": {"dataType": "package"}})

    def test_no_data(self) -> None:
        with pytest.raises(SchemaMismatch):
            decode_vault_object(None)
