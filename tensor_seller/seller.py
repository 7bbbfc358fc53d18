"""Sell one NFT from a wallet into the best Tensor collection bid."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from solders.keypair import Keypair
from solders.signature import Signature

from .chain import SolanaGateway
from .client import SellTxOptions, TensorClient
from .errors import EmptyResultError, NoBidError, TensorSellerError
from .selector import BidSelected, NoAcceptableBid, NoBidReason, select_bid
from .types import PortfolioEntry, SellTxResponse, lamports_to_sol
from .wallet import sign_sale_txs

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SaleSucceeded:
    response: SellTxResponse
    signatures: List[Signature] = field(default_factory=list)

@dataclass(frozen=True)
class SaleFailed:
    error: TensorSellerError

SaleOutcome = Union[SaleSucceeded, SaleFailed]

class NFTSeller:
    """Sells at most one NFT per run from the wallet's portfolio.

    Collections are tried in the order the portfolio endpoint returns them and
    the first one that yields an acceptable bid and an owned mint is sold.
    """

    def __init__(self, client: TensorClient, gateway: SolanaGateway, keypair: Keypair):
        self.client = client
        self.gateway = gateway
        self.keypair = keypair
        self.wallet_address = str(keypair.pubkey())
        self._signatures: List[Signature] = []

    async def run(self, min_price: Optional[int] = None) -> SaleOutcome:
        """Run one sale and report the outcome instead of raising.

        Args:
            min_price: The minimum sale price in lamports, if any
        """
        try:
            response = await self.sell_nft(min_price)
        except TensorSellerError as exc:
            logger.error("Error in sell process: %s", exc)
            return SaleFailed(error=exc)
        return SaleSucceeded(response=response, signatures=list(self._signatures))

    async def sell_nft(self, min_price: Optional[int] = None) -> SellTxResponse:
        """Sell one NFT into the best acceptable bid.

        Args:
            min_price: The minimum sale price in lamports, if any

        Returns:
            The sell response of the collection that was sold

        Raises:
            EmptyResultError: If the wallet holds no collections
            NoBidError: If no collection had both an acceptable bid and a mint
            ApiError, MalformedResponseError, SigningError, BroadcastError:
                On the first failing step; nothing is retried
        """
        self._signatures = []
        logger.info("Starting NFT sale process for wallet %s", self.wallet_address)

        portfolio = await self.client.get_portfolio(self.wallet_address)
        if not portfolio:
            raise EmptyResultError("No collections found in portfolio")

        logger.info("Collections found: %s", [
            {"name": c.name, "id": c.id, "mint_count": c.mint_count} for c in portfolio
        ])

        for collection in portfolio:
            response = await self._sell_from_collection(collection, min_price)
            if response is not None:
                return response

        raise NoBidError("No suitable bids found in any collection")

    async def _sell_from_collection(
        self,
        collection: PortfolioEntry,
        min_price: Optional[int]
    ) -> Optional[SellTxResponse]:
        """Try to sell one mint of ``collection``; None means skip it."""
        bids = await self.client.get_collection_bids(collection.id)
        if not bids.bids:
            logger.info("No bids found for collection %s", collection.name)
            return None

        selection = select_bid(bids.bids, min_price)
        if isinstance(selection, NoAcceptableBid):
            if selection.reason == NoBidReason.BELOW_FLOOR:
                logger.info(
                    "No valid bids found above minimum price of %s for %s",
                    lamports_to_sol(selection.floor), collection.name,
                )
            else:
                logger.info("No valid bids found for %s", collection.name)
            return None

        logger.info(
            "Best bid: amount=%s address=%s remaining=%d",
            lamports_to_sol(selection.bid.amount), selection.bid.address, selection.bid.remaining(),
        )
        logger.info("Submission floor is %d lamports", selection.submission_floor)

        inventory = await self.client.get_inventory_by_collection(self.wallet_address, collection.id)
        mint = inventory.first_mint()
        if mint is None:
            logger.info("No mints found in collection: %s. Skipping.", collection.name)
            return None
        logger.info("Selling mint %s", mint)

        return await self._execute_sale(mint, selection)

    async def _execute_sale(self, mint: str, selection: BidSelected) -> SellTxResponse:
        latest = await self.gateway.get_latest_blockhash()
        options = (
            SellTxOptions.new()
            .with_seller(self.wallet_address)
            .with_mint(mint)
            .with_bid(selection.bid)
            .with_min_price(selection.submission_floor)
            .with_blockhash(latest.blockhash)
        )
        sell_response = await self.client.request_sell_tx(options)
        logger.debug("Sell response: %s", sell_response.raw)

        txs = sign_sale_txs(sell_response.txs, self.keypair)
        logger.info("Signed %d transaction(s)", len(txs))

        for tx in txs:
            logger.info("Sending transaction %s", tx.signature())
            self._signatures.append(await self.gateway.send_and_confirm(tx))

        return sell_response
