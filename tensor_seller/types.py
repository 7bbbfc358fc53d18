from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List, Any

LAMPORTS_PER_SOL = 1_000_000_000

def lamports_to_sol(lamports: int) -> str:
    """Format a lamport amount as SOL with five decimals, e.g. ``1.50000 SOL``."""
    return f"{lamports / LAMPORTS_PER_SOL:.5f} SOL"

class BaseModelWithConfig(BaseModel):
    """Base model with common configuration"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

class PortfolioEntry(BaseModelWithConfig):
    """One collection held by the wallet."""
    id: str
    name: str
    mint_count: int = Field(alias="mintCount", default=0)

class Bid(BaseModelWithConfig):
    """A standing collection bid.

    The API reports ``amount`` in lamports, sometimes as a numeric string.
    """
    address: str
    amount: int
    quantity: int
    filled_quantity: int = Field(alias="filledQuantity", default=0)

    def remaining(self) -> int:
        return self.quantity - self.filled_quantity

    def is_open(self) -> bool:
        return self.quantity > self.filled_quantity

class CollectionBids(BaseModelWithConfig):
    bids: List[Bid] = Field(default_factory=list)

    @field_validator("bids", mode="before")
    @classmethod
    def null_bids_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

class InventoryMint(BaseModelWithConfig):
    mint: Optional[str] = None

class CollectionInventory(BaseModelWithConfig):
    mints: List[InventoryMint] = Field(default_factory=list)

    @field_validator("mints", mode="before")
    @classmethod
    def null_mints_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def first_mint(self) -> Optional[str]:
        """The first listed mint, or None when it is missing or blank."""
        if not self.mints or not self.mints[0].mint:
            return None
        return self.mints[0].mint

class SellTxEncoding(BaseModelWithConfig):
    """A single base64 transaction returned by the sell endpoint.

    Legacy transactions arrive under ``tx`` and versioned ones under ``txV0``.
    """
    tx: Optional[str] = None
    tx_v0: Optional[str] = Field(alias="txV0", default=None)

    @model_validator(mode='after')
    def validate_encoding(self) -> 'SellTxEncoding':
        if not self.tx and not self.tx_v0:
            raise ValueError("One of tx or txV0 must be set")
        return self

    def is_versioned(self) -> bool:
        # txV0 wins when both are present
        return bool(self.tx_v0)

    def payload(self) -> str:
        return self.tx_v0 if self.tx_v0 else self.tx

class SellTxResponse(BaseModelWithConfig):
    txs: List[SellTxEncoding]
    raw: Any = Field(default=None, exclude=True)
