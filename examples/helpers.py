from typing import Tuple
from solders.keypair import Keypair
from tensor_seller import TensorClient, SolanaGateway
from tensor_seller.client import MAINNET_BASE_URL
from tensor_seller.config import load_config

def get_client() -> TensorClient:
    """Get a TensorClient instance from environment variables.

    Returns:
        A TensorClient configured from TENSOR_API_KEY and TENSOR_API_URL

    Raises:
        ConfigError: If required environment variables are not set
    """
    config = load_config()
    if config.api_url == MAINNET_BASE_URL:
        return TensorClient.new_mainnet_client(config.api_key)
    return TensorClient(config.api_key, config.api_url)

def get_wallet() -> Tuple[SolanaGateway, Keypair]:
    """Get a Solana gateway and keypair from environment variables.

    Raises:
        ConfigError: If PRIVATE_KEY is missing or malformed
    """
    config = load_config()
    return SolanaGateway(config.rpc_url), config.keypair()
