"""Unit tests for SolanaGateway with a mocked RPC client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException, UnconfirmedTxError
from solders.hash import Hash
from solders.keypair import Keypair
from solders.signature import Signature

from tensor_seller.chain import SolanaGateway
from tensor_seller.errors import BroadcastError
from tensor_seller.types import SellTxEncoding
from tensor_seller.wallet import decode_sale_tx
from tests.conftest import legacy_tx_b64


def _gateway() -> tuple:
    rpc = AsyncMock()
    rpc.get_latest_blockhash.return_value = MagicMock(
        value=MagicMock(blockhash=Hash.default(), last_valid_block_height=42)
    )
    rpc.send_raw_transaction.return_value = MagicMock(value=Signature.default())
    rpc.confirm_transaction.return_value = MagicMock(value=[MagicMock(err=None)])
    return SolanaGateway("http://rpc.test", rpc_client=rpc), rpc


def _unreachable(exc: Exception, call_name: str) -> SolanaRpcException:
    def call() -> None:
        pass

    call.__name__ = call_name
    return SolanaRpcException(exc, call)


def _signed_tx(keypair: Keypair):
    tx = decode_sale_tx(SellTxEncoding(tx=legacy_tx_b64(keypair.pubkey())))
    tx.sign(keypair)
    return tx


class TestLatestBlockhash:
    async def test_returns_blockhash_string(self) -> None:
        gateway, _ = _gateway()

        latest = await gateway.get_latest_blockhash()

        assert latest.blockhash == str(Hash.default())
        assert latest.last_valid_block_height == 42

    async def test_rpc_error_becomes_broadcast_error(self) -> None:
        gateway, rpc = _gateway()
        rpc.get_latest_blockhash.side_effect = RPCException("node down")

        with pytest.raises(BroadcastError):
            await gateway.get_latest_blockhash()

    async def test_unreachable_node_becomes_broadcast_error(self) -> None:
        gateway, rpc = _gateway()
        rpc.get_latest_blockhash.side_effect = _unreachable(ConnectionError("refused"), "get_latest_blockhash")

        with pytest.raises(BroadcastError):
            await gateway.get_latest_blockhash()


class TestSendAndConfirm:
    async def test_sends_raw_bytes_and_waits_for_confirmation(self, keypair: Keypair) -> None:
        gateway, rpc = _gateway()
        await gateway.get_latest_blockhash()
        tx = _signed_tx(keypair)

        signature = await gateway.send_and_confirm(tx)

        assert signature == Signature.default()
        assert rpc.send_raw_transaction.await_args.args[0] == bytes(tx)
        assert rpc.confirm_transaction.await_args.kwargs["last_valid_block_height"] == 42

    async def test_failed_transaction_raises(self, keypair: Keypair) -> None:
        gateway, rpc = _gateway()
        rpc.confirm_transaction.return_value = MagicMock(value=[MagicMock(err="InstructionError")])

        with pytest.raises(BroadcastError, match="InstructionError"):
            await gateway.send_and_confirm(_signed_tx(keypair))

    async def test_rejected_transaction_raises(self, keypair: Keypair) -> None:
        gateway, rpc = _gateway()
        rpc.send_raw_transaction.side_effect = RPCException("blockhash not found")

        with pytest.raises(BroadcastError):
            await gateway.send_and_confirm(_signed_tx(keypair))

        rpc.confirm_transaction.assert_not_awaited()

    async def test_unconfirmed_transaction_raises(self, keypair: Keypair) -> None:
        gateway, rpc = _gateway()
        rpc.confirm_transaction.side_effect = UnconfirmedTxError("timed out")

        with pytest.raises(BroadcastError):
            await gateway.send_and_confirm(_signed_tx(keypair))

    async def test_unreachable_node_on_send_raises(self, keypair: Keypair) -> None:
        gateway, rpc = _gateway()
        rpc.send_raw_transaction.side_effect = _unreachable(ConnectionError("refused"), "send_raw_transaction")

        with pytest.raises(BroadcastError):
            await gateway.send_and_confirm(_signed_tx(keypair))

        rpc.confirm_transaction.assert_not_awaited()
