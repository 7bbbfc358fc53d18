from dataclasses import dataclass
from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import urlencode
from httpx import AsyncClient
from pydantic import BaseModel, ValidationError
from .errors import MalformedResponseError
from .http import TensorHttpClient
from .types import (
    Bid, CollectionBids, CollectionInventory,
    PortfolioEntry, SellTxResponse,
)

MAINNET_BASE_URL = "https://api.mainnet.tensordev.io/api/v1"

PORTFOLIO_ROUTE = "/user/portfolio"
COLLECTION_BIDS_ROUTE = "/collections/coll_bids"
INVENTORY_BY_COLLECTION_ROUTE = "/user/inventory_by_collection"
SELL_TX_ROUTE = "/tx/sell"

DEFAULT_BIDS_LIMIT = 5
DEFAULT_INVENTORY_LIMIT = 3

M = TypeVar('M', bound=BaseModel)

@dataclass
class SellTxOptions:
    seller: Optional[str] = None
    mint: Optional[str] = None
    bid_address: Optional[str] = None
    min_price: int = 0
    blockhash: Optional[str] = None

    @classmethod
    def new(cls) -> "SellTxOptions":
        return cls()

    def with_seller(self, seller: str) -> "SellTxOptions":
        self.seller = seller
        return self

    def with_mint(self, mint: str) -> "SellTxOptions":
        self.mint = mint
        return self

    def with_bid(self, bid: Optional[Bid]) -> "SellTxOptions":
        if bid is None:
            self.bid_address = None
        else:
            self.bid_address = bid.address
        return self

    def with_min_price(self, min_price: int) -> "SellTxOptions":
        self.min_price = min_price
        return self

    def with_blockhash(self, blockhash: str) -> "SellTxOptions":
        self.blockhash = blockhash
        return self

    def build_request_path(self) -> str:
        """
        Builds the path at which the sell request will be sent, with query params
        """
        if not self.seller or not self.mint or not self.blockhash:
            raise ValueError("seller, mint and blockhash must be set to build a sell request")

        params = {
            "seller": self.seller,
            "mint": self.mint,
            # An empty bidAddress lets the marketplace pick the bid itself
            "bidAddress": self.bid_address if self.bid_address is not None else "",
            "minPrice": str(self.min_price),
            "blockhash": self.blockhash,
        }
        return f"{SELL_TX_ROUTE}?{urlencode(params)}"

class TensorClient:
    """Client for the Tensor marketplace API.

    Wraps the raw HTTP client and validates each response into a typed model
    before handing it back.
    """

    def __init__(self, api_key: str, base_url: str = MAINNET_BASE_URL, async_client: Optional[AsyncClient] = None):
        """Initialize a new TensorClient.

        Args:
            api_key: The Tensor API key
            base_url: The base URL of the Tensor API
            async_client: An optional preconfigured httpx client
        """
        self.http_client = TensorHttpClient(base_url, api_key, async_client=async_client)

    @classmethod
    def new_mainnet_client(cls, api_key: str) -> "TensorClient":
        return cls(api_key, MAINNET_BASE_URL)

    async def __aenter__(self) -> "TensorClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def get_portfolio(self, wallet: str) -> List[PortfolioEntry]:
        """Fetch the collections held by a wallet.

        Args:
            wallet: The wallet address

        Returns:
            The collections in the order the API returned them

        Raises:
            ApiError: If the request fails
            MalformedResponseError: If the response is not a list of collections
        """
        query = urlencode({"wallet": wallet, "includeCompressed": "true"})
        payload = await self.http_client.get(f"{PORTFOLIO_ROUTE}?{query}")
        if not isinstance(payload, list):
            raise MalformedResponseError(f"Expected a list from {PORTFOLIO_ROUTE}, got {type(payload).__name__}")
        return [self._parse(PortfolioEntry, item, PORTFOLIO_ROUTE) for item in payload]

    async def get_collection_bids(self, coll_id: str, limit: int = DEFAULT_BIDS_LIMIT) -> CollectionBids:
        """Fetch the top bids for a collection.

        Raises:
            ApiError: If the request fails
            MalformedResponseError: If a bid is missing required fields
        """
        query = urlencode({"collId": coll_id, "limit": limit})
        payload = await self.http_client.get(f"{COLLECTION_BIDS_ROUTE}?{query}")
        return self._parse(CollectionBids, payload, COLLECTION_BIDS_ROUTE)

    async def get_inventory_by_collection(
        self,
        wallet: str,
        coll_id: str,
        limit: int = DEFAULT_INVENTORY_LIMIT
    ) -> CollectionInventory:
        """Fetch the mints a wallet holds in one collection.

        Raises:
            ApiError: If the request fails
            MalformedResponseError: If a mint entry is missing its address
        """
        query = urlencode({"wallet": wallet, "collId": coll_id, "limit": limit})
        payload = await self.http_client.get(f"{INVENTORY_BY_COLLECTION_ROUTE}?{query}")
        return self._parse(CollectionInventory, payload or {}, INVENTORY_BY_COLLECTION_ROUTE)

    async def request_sell_tx(self, options: SellTxOptions) -> SellTxResponse:
        """Ask Tensor to build the transactions that sell a mint into a bid.

        Args:
            options: The seller, mint, bid, floor and blockhash of the sale

        Returns:
            The unsigned transactions, with the raw response attached

        Raises:
            ApiError: If the request fails
            MalformedResponseError: If the response carries no usable transactions
        """
        payload = await self.http_client.get(options.build_request_path())
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Expected an object from {SELL_TX_ROUTE}, got {type(payload).__name__}")
        return self._parse(SellTxResponse, {**payload, "raw": payload}, SELL_TX_ROUTE)

    def _parse(self, model: Type[M], payload: Any, route: str) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(f"Unexpected response from {route}: {exc}") from exc
