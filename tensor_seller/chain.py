import logging
from dataclasses import dataclass
from typing import Optional

from httpx import HTTPError
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException, TransactionExpiredBlockheightExceededError, UnconfirmedTxError
from solana.rpc.types import TxOpts
from solders.signature import Signature

from .errors import BroadcastError
from .wallet import SaleTx

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
SOLSCAN_TX_URL = "https://solscan.io/tx/{signature}"

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class LatestBlockhash:
    blockhash: str
    last_valid_block_height: int

class SolanaGateway:
    """Reads blockhashes from and broadcasts transactions to a Solana RPC node.

    Every call waits for the ``confirmed`` commitment level.
    """

    def __init__(self, rpc_url: str = MAINNET_RPC_URL, rpc_client: Optional[AsyncClient] = None):
        self.rpc_url = rpc_url
        self.rpc_client = rpc_client or AsyncClient(rpc_url, commitment=Confirmed)
        self._last_valid_block_height: Optional[int] = None

    async def aclose(self) -> None:
        await self.rpc_client.close()

    async def get_latest_blockhash(self) -> LatestBlockhash:
        """Fetch the latest blockhash.

        Raises:
            BroadcastError: If the RPC node cannot be reached or rejects the call
        """
        try:
            resp = await self.rpc_client.get_latest_blockhash(Confirmed)
        except (RPCException, SolanaRpcException, HTTPError) as exc:
            raise BroadcastError(f"Failed to fetch latest blockhash from {self.rpc_url}: {exc}") from exc
        latest = LatestBlockhash(
            blockhash=str(resp.value.blockhash),
            last_valid_block_height=resp.value.last_valid_block_height,
        )
        self._last_valid_block_height = latest.last_valid_block_height
        return latest

    async def send_and_confirm(self, tx: SaleTx) -> Signature:
        """Submit a signed transaction and block until it is confirmed.

        Args:
            tx: A signed sale transaction

        Returns:
            The transaction signature

        Raises:
            BroadcastError: If the node rejects the transaction, it fails on
                chain, or it is not confirmed before its blockhash expires
        """
        try:
            resp = await self.rpc_client.send_raw_transaction(
                bytes(tx), opts=TxOpts(skip_confirmation=True, preflight_commitment=Confirmed)
            )
            signature = resp.value
            status = await self.rpc_client.confirm_transaction(
                signature,
                commitment=Confirmed,
                last_valid_block_height=self._last_valid_block_height,
            )
        except (RPCException, SolanaRpcException, UnconfirmedTxError, TransactionExpiredBlockheightExceededError, HTTPError) as exc:
            raise BroadcastError(f"Failed to send transaction {tx.signature()}: {exc}") from exc

        statuses = status.value
        if statuses and statuses[0] is not None and statuses[0].err is not None:
            raise BroadcastError(f"Transaction {signature} failed: {statuses[0].err}")

        logger.info("Transaction confirmed: %s", SOLSCAN_TX_URL.format(signature=signature))
        return signature
