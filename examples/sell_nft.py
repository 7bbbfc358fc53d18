"""Example of selling one NFT with an explicit floor of 0.5 SOL."""

import asyncio
from tensor_seller import NFTSeller
from examples.helpers import get_client, get_wallet

MIN_PRICE_LAMPORTS = 500_000_000  # 0.5 SOL

async def sell_with_floor() -> None:
    """Sell the first sellable NFT for at least 0.5 SOL."""
    gateway, keypair = get_wallet()
    try:
        async with get_client() as client:
            seller = NFTSeller(client, gateway, keypair)
            print("Selling...")
            response = await seller.sell_nft(MIN_PRICE_LAMPORTS)
            print(f"Sold with {len(response.txs)} transaction(s)")
    finally:
        await gateway.aclose()

if __name__ == "__main__":
    asyncio.run(sell_with_floor())
