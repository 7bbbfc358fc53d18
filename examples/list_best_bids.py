"""Example of inspecting the best bid for every collection in a wallet, without selling."""

import asyncio
from tensor_seller import select_bid, BidSelected
from tensor_seller.config import load_config
from tensor_seller.types import lamports_to_sol
from examples.helpers import get_client

async def list_best_bids() -> None:
    """Print the bid the seller would pick for each collection."""
    wallet = str(load_config().keypair().pubkey())

    async with get_client() as client:
        print(f"Fetching portfolio for {wallet}...")
        portfolio = await client.get_portfolio(wallet)
        if not portfolio:
            raise ValueError("No collections found")

        for collection in portfolio:
            bids = await client.get_collection_bids(collection.id)
            selection = select_bid(bids.bids)
            if isinstance(selection, BidSelected):
                print(f"{collection.name}: best bid {lamports_to_sol(selection.bid.amount)}, "
                      f"floor {lamports_to_sol(selection.submission_floor)}")
            else:
                print(f"{collection.name}: no acceptable bid ({selection.reason.value})")

if __name__ == "__main__":
    asyncio.run(list_best_bids())
