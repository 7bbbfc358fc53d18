"""Command-line entry point: ``tensor-seller [min_price_sol]``."""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import List, Optional

from .chain import SolanaGateway
from .client import TensorClient
from .config import SellerConfig, load_config
from .errors import ConfigError
from .seller import NFTSeller, SaleOutcome, SaleSucceeded
from .types import LAMPORTS_PER_SOL

logger = logging.getLogger("tensor_seller")

INVALID_MIN_PRICE = (
    "Please provide a valid minimum price in SOL as a command-line argument (e.g., 0.001)"
)

def parse_min_price(text: Optional[str]) -> Optional[int]:
    """Convert a minimum price in SOL to lamports.

    Args:
        text: The raw argument, or None when it was omitted

    Returns:
        The price in lamports rounded down, or None

    Raises:
        ConfigError: If the value is not a finite number greater than zero
    """
    if text is None:
        return None
    try:
        sol = Decimal(text.strip())
    except InvalidOperation as exc:
        raise ConfigError(INVALID_MIN_PRICE) from exc
    if not sol.is_finite() or sol <= 0:
        raise ConfigError(INVALID_MIN_PRICE)
    return int((sol * LAMPORTS_PER_SOL).to_integral_value(rounding=ROUND_FLOOR))

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tensor-seller",
        description="Sell one NFT from your wallet into the best Tensor collection bid.",
    )
    parser.add_argument(
        "min_price_sol",
        nargs="?",
        default=None,
        help="minimum sale price in SOL; defaults to 80%% of the best bid",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log API responses")
    return parser

async def sell(config: SellerConfig, min_price: Optional[int]) -> SaleOutcome:
    keypair = config.keypair()
    logger.info("Wallet Public Key: %s", keypair.pubkey())

    gateway = SolanaGateway(config.rpc_url)
    try:
        async with TensorClient(config.api_key, config.api_url) as client:
            seller = NFTSeller(client, gateway, keypair)
            return await seller.run(min_price)
    finally:
        await gateway.aclose()

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        min_price = parse_min_price(args.min_price_sol)
        config = load_config()
        config.keypair()
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    outcome = asyncio.run(sell(config, min_price))
    if isinstance(outcome, SaleSucceeded):
        logger.info("Sale complete: %d transaction(s) confirmed", len(outcome.signatures))
        return 0
    return 1

if __name__ == "__main__":
    sys.exit(main())
