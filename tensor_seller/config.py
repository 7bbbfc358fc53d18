import os
from dataclasses import dataclass
from dotenv import load_dotenv
from solders.keypair import Keypair

from .chain import MAINNET_RPC_URL
from .client import MAINNET_BASE_URL
from .errors import ConfigError
from .wallet import load_keypair

@dataclass(frozen=True)
class SellerConfig:
    api_key: str
    private_key: str
    api_url: str = MAINNET_BASE_URL
    rpc_url: str = MAINNET_RPC_URL

    def keypair(self) -> Keypair:
        return load_keypair(self.private_key)

    def __repr__(self) -> str:
        return f"SellerConfig(api_url={self.api_url!r}, rpc_url={self.rpc_url!r})"

def load_config() -> SellerConfig:
    """Build the seller configuration from the environment.

    A ``.env`` file in the working directory is loaded first.

    Returns:
        The seller configuration

    Raises:
        ConfigError: If TENSOR_API_KEY or PRIVATE_KEY is not set
    """
    load_dotenv()

    api_key = os.getenv("TENSOR_API_KEY")
    if not api_key:
        raise ConfigError("TENSOR_API_KEY not found in environment variables")

    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ConfigError("PRIVATE_KEY not found in environment variables")

    return SellerConfig(
        api_key=api_key,
        private_key=private_key,
        api_url=os.getenv("TENSOR_API_URL") or MAINNET_BASE_URL,
        rpc_url=os.getenv("SOLANA_RPC_URL") or MAINNET_RPC_URL,
    )
