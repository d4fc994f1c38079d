"""
Signature deadlines.

A signed operation expires at the end of the current epoch plus a safety
margin, so it stays valid while the transaction is in flight.
"""

import logging
from typing import TYPE_CHECKING

from reward_vault_sdk.errors import DeadlineUnavailable
from reward_vault_sdk.models import EpochInfo

if TYPE_CHECKING:
    from reward_vault_sdk.rpc import LedgerClient

logger = logging.getLogger(__name__)

# One minute past the end of the epoch
DEFAULT_DEADLINE_MARGIN_MS = 60_000


def compute_deadline(
    epoch_start_ms: int,
    epoch_duration_ms: int,
    margin_ms: int = DEFAULT_DEADLINE_MARGIN_MS,
) -> int:
    """Return ``epoch_start_ms + epoch_duration_ms + margin_ms``."""
    for name, value in (
        ("epoch_start_ms", epoch_start_ms),
        ("epoch_duration_ms", epoch_duration_ms),
        ("margin_ms", margin_ms),
    ):
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
    return epoch_start_ms + epoch_duration_ms + margin_ms


def deadline_from_epoch(epoch: EpochInfo, margin_ms: int = DEFAULT_DEADLINE_MARGIN_MS) -> int:
    return compute_deadline(epoch.epoch_start_ms, epoch.epoch_duration_ms, margin_ms)


def fetch_epoch(ledger: "LedgerClient") -> EpochInfo:
    """
    Read the current epoch from the ledger.

    Raises:
        DeadlineUnavailable: If the read fails for any reason
    """
    try:
        epoch = ledger.get_epoch_info()
    except Exception as e:
        raise DeadlineUnavailable(f"Could not read current epoch: {e}") from e
    logger.debug(
        "Epoch started at %d ms, lasts %d ms",
        epoch.epoch_start_ms,
        epoch.epoch_duration_ms,
    )
    return epoch


def fetch_deadline(ledger: "LedgerClient", margin_ms: int = DEFAULT_DEADLINE_MARGIN_MS) -> int:
    """Read the current epoch and compute a deadline from it."""
    return deadline_from_epoch(fetch_epoch(ledger), margin_ms)
