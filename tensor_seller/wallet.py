"""Keypair loading and transaction signing."""

import base64
import binascii
from dataclasses import dataclass
from typing import List, Sequence, Union

import base58
from solders.keypair import Keypair
from solders.message import to_bytes_versioned
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction, VersionedTransaction

from .errors import ConfigError, SigningError
from .types import SellTxEncoding

SECRET_KEY_LENGTH = 64

def load_keypair(secret: str) -> Keypair:
    """Decode a base58 64-byte secret key into a keypair.

    Raises:
        ConfigError: If the secret is not valid base58 or has the wrong length
    """
    try:
        raw = base58.b58decode(secret.strip())
    except ValueError as exc:
        raise ConfigError(f"Failed to create wallet: {exc}") from exc
    if len(raw) != SECRET_KEY_LENGTH:
        raise ConfigError(f"Failed to create wallet: expected {SECRET_KEY_LENGTH} secret key bytes, got {len(raw)}")
    try:
        return Keypair.from_bytes(raw)
    except ValueError as exc:
        raise ConfigError(f"Failed to create wallet: {exc}") from exc

def _signer_index(account_keys: Sequence[Pubkey], num_required_signatures: int, pubkey: Pubkey) -> int:
    signers = list(account_keys[:num_required_signatures])
    if pubkey not in signers:
        raise SigningError(f"Wallet {pubkey} is not a required signer of the sale transaction")
    return signers.index(pubkey)

@dataclass
class LegacySaleTx:
    transaction: Transaction

    def sign(self, keypair: Keypair) -> None:
        message = self.transaction.message
        _signer_index(message.account_keys, message.header.num_required_signatures, keypair.pubkey())
        # partial_sign keeps any signatures the marketplace already attached
        self.transaction.partial_sign([keypair], message.recent_blockhash)

    def signature(self) -> Signature:
        return self.transaction.signatures[0]

    def __bytes__(self) -> bytes:
        return bytes(self.transaction)

@dataclass
class VersionedSaleTx:
    transaction: VersionedTransaction

    def sign(self, keypair: Keypair) -> None:
        message = self.transaction.message
        index = _signer_index(message.account_keys, message.header.num_required_signatures, keypair.pubkey())
        signatures = list(self.transaction.signatures)
        signatures[index] = keypair.sign_message(to_bytes_versioned(message))
        self.transaction = VersionedTransaction.populate(message, signatures)

    def signature(self) -> Signature:
        return self.transaction.signatures[0]

    def __bytes__(self) -> bytes:
        return bytes(self.transaction)

SaleTx = Union[LegacySaleTx, VersionedSaleTx]

def decode_sale_tx(encoding: SellTxEncoding) -> SaleTx:
    """Deserialize one sell-endpoint entry into its transaction type.

    Raises:
        SigningError: If the payload is not a valid base64 transaction
    """
    try:
        raw = base64.b64decode(encoding.payload(), validate=True)
        if encoding.is_versioned():
            return VersionedSaleTx(VersionedTransaction.from_bytes(raw))
        return LegacySaleTx(Transaction.from_bytes(raw))
    except (binascii.Error, ValueError) as exc:
        kind = "versioned" if encoding.is_versioned() else "legacy"
        raise SigningError(f"Could not deserialize {kind} sale transaction: {exc}") from exc

def sign_sale_txs(encodings: Sequence[SellTxEncoding], keypair: Keypair) -> List[SaleTx]:
    """Decode and sign every transaction of a sell response, in order."""
    signed: List[SaleTx] = []
    for encoding in encodings:
        tx = decode_sale_tx(encoding)
        tx.sign(keypair)
        signed.append(tx)
    return signed
