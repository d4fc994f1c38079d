"""
Read access to the Sui ledger over JSON-RPC.

Transaction building and submission are left to an external
:class:`TransactionSubmitter`; this module only defines that interface and a
synchronous reader for the epoch, objects and executed transactions.
"""

import itertools
import logging
from typing import Any, Optional, Protocol

import httpx
from pydantic import ValidationError

from reward_vault_sdk.errors import RpcError, SchemaMismatch
from reward_vault_sdk.models import SUI_TYPE_ARG, EpochInfo, TransactionResult
from reward_vault_sdk.operations import MoveCall

logger = logging.getLogger(__name__)


class LedgerClient(Protocol):
    """Read operations the vault client needs from the ledger."""

    def get_epoch_info(self) -> EpochInfo: ...

    def get_object_state(self, object_id: str) -> dict[str, Any]: ...

    def get_transaction_result(self, digest: str) -> TransactionResult: ...


class TransactionSubmitter(Protocol):
    """
    Builds, signs and executes a Move call, waiting for it to be final.

    Failures are raised to the caller unchanged. A submitter may expose the
    address it signs with as ``sender``; deposits are checked against it.
    A :class:`~reward_vault_sdk.operations.SplitCoinArg` is split from the gas
    coin for SUI and from a sender-owned coin of its ``coin_type`` otherwise.
    """

    def submit(self, call: MoveCall) -> TransactionResult: ...


class SuiRpcClient:
    """
    Minimal synchronous Sui JSON-RPC client.

    Example:
        >>> with SuiRpcClient("https://fullnode.testnet.sui.io:443") as rpc:
        ...     epoch = rpc.get_epoch_info()
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            url: Fullnode JSON-RPC endpoint
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (e.g. with a mock transport)
        """
        self.url = url
        self._client = client or httpx.Client(timeout=timeout)
        self._ids = itertools.count(1)

    def __enter__(self) -> "SuiRpcClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def call(self, method: str, params: list[Any]) -> Any:
        """
        Issue one JSON-RPC request and return its ``result``.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            RpcError: If the node answers with an error object
            SchemaMismatch: If the response is malformed or has no result
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        logger.debug("RPC %s", method)
        response = self._client.post(self.url, json=payload)
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise SchemaMismatch(f"RPC response to {method} is not a JSON object")

        error = body.get("error")
        if error:
            if not isinstance(error, dict):
                raise SchemaMismatch(f"RPC response to {method} has a malformed error: {error!r}")
            raise RpcError(
                code=error.get("code", 0),
                message=error.get("message", "Unknown error"),
                data=error.get("data"),
            )
        if "result" not in body:
            raise SchemaMismatch(f"RPC response to {method} has no result")
        return body["result"]

    def get_epoch_info(self) -> EpochInfo:
        """Start and duration of the current epoch."""
        result = self.call("suix_getLatestSuiSystemState", [])
        try:
            return EpochInfo.model_validate(result)
        except ValidationError as e:
            raise SchemaMismatch(f"Invalid system state: {e}") from e

    def get_object_state(self, object_id: str) -> dict[str, Any]:
        """
        Object data (including Move content) for ``object_id``.

        Raises:
            SchemaMismatch: If the object does not exist or has no data
        """
        result = self.call("sui_getObject", [object_id, {"showContent": True}])
        if result.get("error"):
            raise SchemaMismatch(f"Object {object_id} unavailable: {result['error']}")
        data = result.get("data")
        if not isinstance(data, dict):
            raise SchemaMismatch(f"Object {object_id} has no data")
        return data

    def get_transaction_result(self, digest: str) -> TransactionResult:
        """Events and object changes of an executed transaction."""
        result = self.call(
            "sui_getTransactionBlock",
            [digest, {"showEvents": True, "showObjectChanges": True}],
        )
        try:
            return TransactionResult.model_validate(result)
        except ValidationError as e:
            raise SchemaMismatch(f"Invalid transaction block {digest}: {e}") from e

    def get_balance(self, owner: str, coin_type: str = SUI_TYPE_ARG) -> int:
        """Total balance of ``coin_type`` owned by ``owner``, in base units."""
        result = self.call("suix_getBalance", [owner, coin_type])
        try:
            return int(result["totalBalance"])
        except (KeyError, TypeError, ValueError) as e:
            raise SchemaMismatch(f"Invalid balance response: {result!r}") from e
