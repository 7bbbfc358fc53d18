"""Shared test fixtures."""

import base64

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message, MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction, VersionedTransaction

from tensor_seller.types import Bid


def make_bid(amount: int, quantity: int = 1, filled: int = 0, address: str = "") -> Bid:
    return Bid(
        address=address or f"bid-{amount}-{quantity}-{filled}",
        amount=amount,
        quantity=quantity,
        filledQuantity=filled,
    )


def _transfer_ix(source: Pubkey):
    return transfer(TransferParams(from_pubkey=source, to_pubkey=Pubkey.new_unique(), lamports=1))


def legacy_tx_b64(signer: Pubkey, payer: Pubkey | None = None) -> str:
    message = Message.new_with_blockhash([_transfer_ix(signer)], payer or signer, Hash.default())
    return base64.b64encode(bytes(Transaction.new_unsigned(message))).decode()


def versioned_tx_b64(signer: Pubkey, payer: Pubkey | None = None) -> str:
    message = MessageV0.try_compile(payer or signer, [_transfer_ix(signer)], [], Hash.default())
    signatures = [Signature.default()] * message.header.num_required_signatures
    return base64.b64encode(bytes(VersionedTransaction.populate(message, signatures))).decode()


@pytest.fixture
def keypair() -> Keypair:
    return Keypair()
