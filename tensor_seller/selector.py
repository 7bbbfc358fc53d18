"""Bid selection and price-floor enforcement."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from .types import Bid

# Submission floor without a user floor: 80% of the selected bid
DEFAULT_FLOOR_NUMERATOR = 8
DEFAULT_FLOOR_DENOMINATOR = 10

class NoBidReason(str, Enum):
    NO_BIDS = "no_bids"
    NO_OPEN_BIDS = "no_open_bids"
    BELOW_FLOOR = "below_floor"

@dataclass(frozen=True)
class BidSelected:
    bid: Bid
    submission_floor: int

@dataclass(frozen=True)
class NoAcceptableBid:
    reason: NoBidReason
    floor: int

BidSelection = Union[BidSelected, NoAcceptableBid]

def default_submission_floor(amount: int) -> int:
    """80% of ``amount``, rounded down."""
    return amount * DEFAULT_FLOOR_NUMERATOR // DEFAULT_FLOOR_DENOMINATOR

def select_bid(bids: Sequence[Bid], min_price: Optional[int] = None) -> BidSelection:
    """Pick the best acceptable bid.

    Bids that are fully filled or below the floor are discarded, and the
    highest remaining amount wins; among equal amounts the first one in
    ``bids`` is kept.

    The filter floor is ``min_price`` or 0. The floor submitted with the sale
    is ``min_price`` unchanged when given, otherwise 80% of the selected bid.

    Args:
        bids: The bids for one collection
        min_price: The user's minimum price in lamports, if any

    Returns:
        ``BidSelected`` with the submission floor, or ``NoAcceptableBid``
    """
    floor = min_price if min_price is not None else 0

    if not bids:
        return NoAcceptableBid(reason=NoBidReason.NO_BIDS, floor=floor)

    candidates = [bid for bid in bids if bid.is_open() and bid.amount >= floor]
    if not candidates:
        reason = NoBidReason.BELOW_FLOOR if min_price is not None else NoBidReason.NO_OPEN_BIDS
        return NoAcceptableBid(reason=reason, floor=floor)

    # max() keeps the first of equal elements
    best = max(candidates, key=lambda bid: bid.amount)

    if min_price is None:
        submission_floor = default_submission_floor(best.amount)
    else:
        submission_floor = min_price
    return BidSelected(bid=best, submission_floor=submission_floor)
