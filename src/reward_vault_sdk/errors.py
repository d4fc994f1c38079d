"""
Exceptions raised by the reward vault SDK.

Every error derives from :class:`RewardVaultError` so callers can catch the
whole family at once. Caller mistakes about values (a bad type name, a bad
address) also derive from ``ValueError``.
"""


class RewardVaultError(Exception):
    """Base class for all reward vault SDK errors."""


class MalformedTypeName(RewardVaultError, ValueError):
    """Asset type string is not exactly ``address::module::type``."""


class InvalidAddress(RewardVaultError, ValueError):
    """Value is not a hex encoded 32-byte ledger address."""


class SigningError(RewardVaultError):
    """The secp256k1 key could not be loaded or used to sign or recover."""


class DeadlineUnavailable(RewardVaultError):
    """
    The current epoch could not be read, so no deadline can be computed.

    Safe to retry the whole operation: payment id and deadline are
    regenerated together on every attempt.
    """


class EventNotFound(RewardVaultError):
    """A successful transaction did not emit the expected confirmation event."""


class SchemaMismatch(RewardVaultError):
    """Ledger data did not have the shape the vault contract emits."""


class RpcError(RewardVaultError):
    """The JSON-RPC endpoint answered with an error object."""

    def __init__(self, code: int, message: str, data=None):
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data
