from .client import TensorClient, SellTxOptions
from .chain import SolanaGateway
from .errors import (
    TensorSellerError, ConfigError, ApiError, MalformedResponseError,
    EmptyResultError, NoBidError, SigningError, BroadcastError,
)
from .http import TensorHttpClient
from .selector import select_bid, BidSelected, NoAcceptableBid, NoBidReason
from .seller import NFTSeller, SaleOutcome, SaleSucceeded, SaleFailed
from .types import Bid, PortfolioEntry, SellTxResponse

__all__ = [
    "TensorClient",
    "SellTxOptions",
    "TensorHttpClient",
    "SolanaGateway",
    "NFTSeller",
    "SaleOutcome",
    "SaleSucceeded",
    "SaleFailed",
    "select_bid",
    "BidSelected",
    "NoAcceptableBid",
    "NoBidReason",
    "Bid",
    "PortfolioEntry",
    "SellTxResponse",
    "TensorSellerError",
    "ConfigError",
    "ApiError",
    "MalformedResponseError",
    "EmptyResultError",
    "NoBidError",
    "SigningError",
    "BroadcastError",
]
