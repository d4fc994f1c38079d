"""
Canonical byte encoding of vault operations.

The vault contract recomputes the signed message on-chain by concatenating
the operation fields in a fixed order::

    payment_id (u64 LE) || project_id (u64 LE) || account (32 bytes)
        || asset type || amount (u64 LE) || deadline (u64 LE)

where the asset type is the 32-byte module address followed by the raw ASCII
``::module::Type`` suffix. There are no length prefixes, so the message is
only ever hashed, never decoded. Any deviation in width, endianness or order
produces a different digest and the contract rejects the signature.

This module also holds the BCS primitives used to serialize pure Move call
arguments (``u64``, ``address``, ``vector<u8>``).
"""

import logging
import struct
from typing import TYPE_CHECKING, Iterable, Union

from reward_vault_sdk.errors import InvalidAddress

if TYPE_CHECKING:
    from reward_vault_sdk.models import AssetTypeName, OperationPayload

logger = logging.getLogger(__name__)

U64_MAX = 2**64 - 1
ADDRESS_LENGTH = 32

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def normalize_address(value: str) -> str:
    """
    Normalize a ledger address to ``0x`` + 64 lowercase hex digits.

    Short forms such as ``0x2`` are left-padded with zeros.

    Raises:
        InvalidAddress: If the value is not hex or longer than 32 bytes
    """
    if not isinstance(value, str):
        raise InvalidAddress(f"Address must be a string, got {type(value).__name__}")
    digits = value[2:] if value[:2] in ("0x", "0X") else value
    if not digits or not set(digits) <= _HEX_DIGITS:
        raise InvalidAddress(f"Invalid address: {value!r}")
    if len(digits) > ADDRESS_LENGTH * 2:
        raise InvalidAddress(f"Address longer than {ADDRESS_LENGTH} bytes: {value!r}")
    return "0x" + digits.lower().rjust(ADDRESS_LENGTH * 2, "0")


def check_u64(value: int, name: str = "u64 value") -> int:
    """
    Validate that ``value`` is an integer in ``[0, 2**64 - 1]``.

    Raises:
        ValueError: If it is not an int (bools included) or out of range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} out of u64 range: {value}")
    return value


def encode_u64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as 8 little-endian bytes."""
    return struct.pack("<Q", check_u64(value))


def encode_address(value: str) -> bytes:
    """Encode an address as its raw 32 bytes."""
    return bytes.fromhex(normalize_address(value)[2:])


def encode_asset_type(asset_type: Union["AssetTypeName", str]) -> bytes:
    """
    Encode a coin type as ``address_bytes || b"::" || module || b"::" || type``.

    Args:
        asset_type: Parsed type name, or a ``address::module::type`` string

    Raises:
        MalformedTypeName: If a string does not have exactly three parts
    """
    from reward_vault_sdk.models import AssetTypeName

    if isinstance(asset_type, str):
        asset_type = AssetTypeName.parse(asset_type)
    suffix = f"::{asset_type.module_name}::{asset_type.type_name}"
    return encode_address(asset_type.module_address) + suffix.encode("utf-8")


def encode_payload(payload: "OperationPayload") -> bytes:
    """Build the canonical message for an operation payload."""
    message = b"".join(
        (
            encode_u64(payload.payment_id),
            encode_u64(payload.project_id),
            encode_address(payload.account),
            encode_asset_type(payload.asset_type),
            encode_u64(payload.amount),
            encode_u64(payload.deadline),
        )
    )
    logger.debug(
        "Encoded payment %d (%d bytes) for %s",
        payload.payment_id,
        len(message),
        payload.account,
    )
    return message


# ============================================================
# BCS primitives for Move call arguments
# ============================================================


def encode_uleb128(value: int) -> bytes:
    """Encode a non-negative integer as ULEB128 (BCS sequence length prefix)."""
    if value < 0:
        raise ValueError(f"ULEB128 value must be non-negative: {value}")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def encode_byte_vector(data: bytes) -> bytes:
    """BCS ``vector<u8>``: length prefix followed by the bytes."""
    return encode_uleb128(len(data)) + bytes(data)


def encode_byte_vectors(items: Iterable[bytes]) -> bytes:
    """BCS ``vector<vector<u8>>``."""
    items = list(items)
    return encode_uleb128(len(items)) + b"".join(encode_byte_vector(item) for item in items)
