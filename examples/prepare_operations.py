"""
Prepare signed vault operations against a live network.

Reads the current epoch from the configured fullnode, signs a deposit, a
claim and a withdrawal, and prints the Move calls a transaction submitter
would execute. If a vault id is configured, each signature is also checked
against the vault's on-chain signer set.

Run with:
    export EVM_PRIVATE_KEY=0x...
    export NETWORK=testnet
    export PACKAGE_ID=0x...
    export VAULT_ID=0x...        # optional
    python examples/prepare_operations.py 0xYourSuiAddress
"""

import logging
import sys

from reward_vault_sdk import (
    SUI_TYPE_ARG,
    OperationBuilder,
    RewardVaultSettings,
    SuiRpcClient,
    build_move_call,
    configure_logging,
    decode_vault_object,
    verify_authorization,
)
from reward_vault_sdk.deadline import fetch_epoch

logger = logging.getLogger("prepare_operations")

# Same amounts as the reference deployment's smoke test
AMOUNTS = {"deposit": 100, "claim": 60, "withdraw": 40}


def main(account: str) -> int:
    settings = RewardVaultSettings()
    configure_logging(settings.log_level)

    signer = settings.build_signer()
    builder = OperationBuilder(
        signer,
        project_id=settings.project_id,
        margin_ms=settings.deadline_margin_ms,
    )
    logger.info("Signing as %s on %s", signer.address, settings.network)

    with SuiRpcClient(settings.fullnode_url, timeout=settings.rpc_timeout) as rpc:
        epoch = fetch_epoch(rpc)
        vault_state = None
        if settings.vault_id:
            vault_state = decode_vault_object(rpc.get_object_state(settings.vault_id))
            logger.info("Vault signers: %s", ", ".join(sorted(vault_state.signers)))

    vault_id = settings.vault_id or "0x0"
    for kind, amount in AMOUNTS.items():
        operation = builder.prepare(kind, account, amount, SUI_TYPE_ARG, epoch)
        call = build_move_call(operation, settings.package_id, vault_id, settings.module_name)

        print(f"{call.target}<{', '.join(call.type_arguments)}>")
        print(f"  payment_id = {operation.payment_id}")
        print(f"  deadline   = {operation.deadline}")
        print(f"  signature  = {operation.signature_hex}")
        if vault_state is not None:
            ok = verify_authorization(
                operation.canonical_bytes, operation.signature, vault_state.signers
            )
            print(f"  authorized = {ok}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    sys.exit(main(sys.argv[1]))
