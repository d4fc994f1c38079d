"""
High-level reward vault client.

Ties the pieces together for the usual flow: read the epoch, prepare and sign
the operation, hand the Move call to the submitter, and pull the confirmation
event out of the result. Each operation is exactly one submission; nothing is
retried.

Example:
    >>> settings = RewardVaultSettings()
    >>> client = RewardVaultClient.from_settings(settings, submitter=my_submitter)
    >>> vault_id = client.create_vault([client.signer.address])
    >>> deposited = client.deposit(account="0xabc...", amount=100)
    >>> claimed = client.claim(recipient="0xabc...", amount=60)
    >>> withdrawn = client.withdraw(recipient="0xabc...", amount=40)
"""

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Union

from reward_vault_sdk.decoding import decode_vault_object
from reward_vault_sdk.deadline import DEFAULT_DEADLINE_MARGIN_MS, fetch_epoch
from reward_vault_sdk.encoding import normalize_address
from reward_vault_sdk.models import (
    DEFAULT_MODULE_NAME,
    SUI_TYPE_ARG,
    AssetTypeName,
    OperationKind,
    RewardsClaimedEvent,
    RewardVaultState,
    TokenDepositedEvent,
    TokenWithdrawalEvent,
    VaultEvent,
)
from reward_vault_sdk.operations import (
    VAULT_STRUCT_NAME,
    OperationBuilder,
    build_create_vault_call,
    build_move_call,
    extract_event,
    extract_events,
    find_created_object_id,
)
from reward_vault_sdk.rpc import LedgerClient, SuiRpcClient, TransactionSubmitter
from reward_vault_sdk.signing import VaultSigner

if TYPE_CHECKING:
    from reward_vault_sdk.config import RewardVaultSettings

logger = logging.getLogger(__name__)


class RewardVaultClient:
    """
    Client for one deployed reward vault.

    Provides:
    - create_vault(): create a vault with an initial signer set
    - deposit(): move funds from the sender into the vault
    - claim(): pay out rewards to a recipient
    - withdraw(): pay out deposited funds to a recipient
    - get_vault_state(): read owner and signers
    """

    def __init__(
        self,
        signer: VaultSigner,
        ledger: LedgerClient,
        submitter: TransactionSubmitter,
        package_id: str,
        *,
        vault_id: Optional[str] = None,
        module: str = DEFAULT_MODULE_NAME,
        deadline_margin_ms: int = DEFAULT_DEADLINE_MARGIN_MS,
        project_id: int = 0,
    ):
        """
        Initialize the vault client.

        Args:
            signer: Authorized signer for vault operations
            ledger: Reader for epoch, objects and transactions
            submitter: Executes Move calls on the ledger
            package_id: Published vault package
            vault_id: Existing vault object (set by create_vault otherwise)
            module: Vault Move module
            deadline_margin_ms: Safety margin added past the epoch end
            project_id: Default project id for operations
        """
        self.signer = signer
        self.ledger = ledger
        self.submitter = submitter
        self.package_id = normalize_address(package_id)
        self.vault_id = vault_id
        self.module = module
        self.builder = OperationBuilder(
            signer, project_id=project_id, margin_ms=deadline_margin_ms
        )

    @classmethod
    def from_settings(
        cls,
        settings: "RewardVaultSettings",
        submitter: TransactionSubmitter,
        ledger: Optional[LedgerClient] = None,
    ) -> "RewardVaultClient":
        """Build a client from settings, creating a JSON-RPC reader if none is given."""
        signer = settings.build_signer()
        if ledger is None:
            ledger = SuiRpcClient(settings.fullnode_url, timeout=settings.rpc_timeout)
        return cls(
            signer,
            ledger,
            submitter,
            settings.package_id,
            vault_id=settings.vault_id,
            module=settings.module_name,
            deadline_margin_ms=settings.deadline_margin_ms,
            project_id=settings.project_id,
        )

    def _require_vault(self) -> str:
        if not self.vault_id:
            raise ValueError("No vault id configured; call create_vault() first")
        return self.vault_id

    def create_vault(self, signers: Iterable[str]) -> str:
        """
        Create a reward vault authorizing ``signers``.

        Args:
            signers: Hex EVM addresses allowed to sign operations

        Returns:
            Object id of the new vault (also stored on the client)
        """
        call = build_create_vault_call(self.package_id, signers, self.module)
        result = self.submitter.submit(call)
        self.vault_id = find_created_object_id(
            result.object_changes, f"::{self.module}::{VAULT_STRUCT_NAME}"
        )
        logger.info("Created reward vault %s", self.vault_id)
        return self.vault_id

    def _execute(
        self,
        kind: OperationKind,
        account: str,
        amount: int,
        asset_type: Union[AssetTypeName, str],
        project_id: Optional[int],
    ) -> VaultEvent:
        vault_id = self._require_vault()
        epoch = fetch_epoch(self.ledger)
        operation = self.builder.prepare(
            kind, account, amount, asset_type, epoch, project_id=project_id
        )
        call = build_move_call(operation, self.package_id, vault_id, self.module)

        logger.info(
            "Submitting %s of %d %s (payment_id=%d)",
            kind.value,
            amount,
            operation.payload.asset_type,
            operation.payment_id,
        )
        result = self.submitter.submit(call)
        return extract_event(result, kind, self.module)

    def deposit(
        self,
        account: str,
        amount: int,
        asset_type: Union[AssetTypeName, str] = SUI_TYPE_ARG,
        project_id: Optional[int] = None,
    ) -> TokenDepositedEvent:
        """
        DEPOSIT: move ``amount`` of ``asset_type`` from the sender into the vault.

        The contract rebuilds the signed message with the transaction sender
        as the account, so ``account`` must be the address the submitter signs
        transactions with. Submitters that expose
        a ``sender`` attribute are checked before anything is signed.

        Raises:
            ValueError: If ``account`` differs from the submitter's sender
            DeadlineUnavailable: If the epoch could not be read
            EventNotFound: If the transaction emitted no TokenDeposited event
        """
        sender = getattr(self.submitter, "sender", None)
        if sender is not None and normalize_address(account) != normalize_address(sender):
            raise ValueError(
                f"Deposit account {account} is not the transaction sender {sender}"
            )
        return self._execute(OperationKind.DEPOSIT, account, amount, asset_type, project_id)

    def claim(
        self,
        recipient: str,
        amount: int,
        asset_type: Union[AssetTypeName, str] = SUI_TYPE_ARG,
        project_id: Optional[int] = None,
    ) -> RewardsClaimedEvent:
        """CLAIM: pay ``amount`` of rewards from the vault to ``recipient``."""
        return self._execute(OperationKind.CLAIM, recipient, amount, asset_type, project_id)

    def withdraw(
        self,
        recipient: str,
        amount: int,
        asset_type: Union[AssetTypeName, str] = SUI_TYPE_ARG,
        project_id: Optional[int] = None,
    ) -> TokenWithdrawalEvent:
        """WITHDRAW: pay ``amount`` of deposited funds from the vault to ``recipient``."""
        return self._execute(OperationKind.WITHDRAW, recipient, amount, asset_type, project_id)

    def get_vault_state(self) -> RewardVaultState:
        """Read the vault's owner and authorized signers."""
        return decode_vault_object(self.ledger.get_object_state(self._require_vault()))

    def get_events(self, digest: str, kind: OperationKind) -> list[VaultEvent]:
        """Confirmation events of ``kind`` emitted by an executed transaction."""
        result = self.ledger.get_transaction_result(digest)
        return extract_events(result, kind, self.module)
