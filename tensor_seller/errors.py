from typing import Any, Optional

class TensorSellerError(Exception):
    """Base class for every failure the seller reports."""

class ConfigError(TensorSellerError):
    """Missing or invalid credential, key material or command-line argument."""

class ApiError(TensorSellerError):
    """The Tensor API could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

class MalformedResponseError(TensorSellerError):
    """A Tensor API response did not match the expected shape."""

class EmptyResultError(TensorSellerError):
    """The wallet portfolio came back empty."""

class NoBidError(TensorSellerError):
    """No collection had both an acceptable bid and an owned mint."""

class SigningError(TensorSellerError):
    """A sale transaction could not be decoded or signed by the wallet."""

class BroadcastError(TensorSellerError):
    """The Solana RPC node could not be reached, rejected a transaction or did not confirm it."""
