"""
secp256k1 authorization of canonical vault messages.

The vault stores the EVM addresses of its authorized signers and recovers the
signer from ``(keccak256(message), signature)`` on-chain, the same way
``ecrecover`` works on EVM chains. Signatures are 65 bytes ``r || s || v``
with ``v`` in EVM form (27/28).

Example:
    >>> signer = VaultSigner("0x...")
    >>> signature = signer.sign(encode_payload(payload))
    >>> recover_signer(encode_payload(payload), signature) == signer.address
    True
"""

import logging
from typing import Iterable

from eth_account import Account
from eth_keys import keys
from web3 import Web3

from reward_vault_sdk.errors import SigningError

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65

# Offset between the raw recovery id (0/1) and EVM-style v (27/28)
V_OFFSET = 27


def message_digest(canonical_bytes: bytes) -> bytes:
    """keccak256 of the canonical message."""
    return bytes(Web3.keccak(primitive=bytes(canonical_bytes)))


class VaultSigner:
    """
    Holds one secp256k1 key and signs canonical vault messages with it.

    The key is passed in explicitly; nothing is read from the environment.
    """

    def __init__(self, private_key: str):
        """
        Args:
            private_key: Hex-encoded secp256k1 private key (with or without 0x)

        Raises:
            SigningError: If the key cannot be loaded
        """
        try:
            self._account = Account.from_key(private_key)
        except Exception as e:
            raise SigningError(f"Invalid signing key: {e}") from e

    def __repr__(self) -> str:
        return f"VaultSigner(address={self.address})"

    @property
    def address(self) -> str:
        """Checksummed EVM address of the key."""
        return self._account.address

    @property
    def signer_bytes(self) -> bytes:
        """The 20 address bytes, as stored in the vault's signer set."""
        return bytes.fromhex(self.address[2:])

    def sign(self, canonical_bytes: bytes) -> bytes:
        """
        Sign ``keccak256(canonical_bytes)``.

        Returns:
            65-byte recoverable signature ``r || s || v``

        Raises:
            SigningError: If the signing computation fails
        """
        digest = message_digest(canonical_bytes)
        try:
            signed = self._account.unsafe_sign_hash(digest)
        except Exception as e:
            raise SigningError(f"Failed to sign digest: {e}") from e

        signature = bytes(signed.signature)
        if len(signature) != SIGNATURE_LENGTH:
            raise SigningError(f"Unexpected signature length {len(signature)}")
        logger.debug("Signed digest 0x%s as %s", digest.hex(), self.address)
        return signature


def recover_signer(canonical_bytes: bytes, signature: bytes) -> str:
    """
    Recover the checksummed EVM address that signed ``canonical_bytes``.

    Accepts ``v`` either as a raw recovery id (0/1) or EVM-style (27/28).

    Raises:
        SigningError: If the signature is malformed or not recoverable
    """
    signature = bytes(signature)
    if len(signature) != SIGNATURE_LENGTH:
        raise SigningError(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )
    v = signature[64]
    if v >= V_OFFSET:
        v -= V_OFFSET
    try:
        sig = keys.Signature(signature_bytes=signature[:64] + bytes([v]))
        public_key = sig.recover_public_key_from_msg_hash(message_digest(canonical_bytes))
    except Exception as e:
        raise SigningError(f"Cannot recover signer: {e}") from e
    return public_key.to_checksum_address()


def verify_authorization(
    canonical_bytes: bytes, signature: bytes, signers: Iterable[str]
) -> bool:
    """
    Check a signature the way the vault contract does.

    Args:
        canonical_bytes: The message that was signed
        signature: 65-byte recoverable signature
        signers: Authorized EVM addresses (hex, any case)

    Returns:
        True if the recovered address is one of ``signers``
    """
    try:
        recovered = recover_signer(canonical_bytes, signature)
    except SigningError as e:
        logger.debug("Signature rejected: %s", e)
        return False
    authorized = {s.lower() for s in signers}
    return recovered.lower() in authorized
