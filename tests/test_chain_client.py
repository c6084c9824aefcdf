"""Testes do cliente JSON-RPC da rede."""

from __future__ import annotations

import unittest
from decimal import Decimal

from fakes import CHAIN_URL, OWNER, FakeRelay

from sonix.adapters.chain import ChainClient
from sonix.config.constants import SMART_WALLET_FACTORY, SMART_WALLET_SELECTOR
from sonix.core.exceptions import InvalidAPIResponseException


class TestChainClient(unittest.IsolatedAsyncioTestCase):

    async def test_saldo_em_ether(self) -> None:
        relay = FakeRelay().rpc("eth_getBalance", {"result": hex(15 * 10 ** 17)})

        saldo = await ChainClient(relay, CHAIN_URL).get_balance(OWNER)

        self.assertEqual(saldo, Decimal("1.5"))
        self.assertEqual(relay.requests[0].url, CHAIN_URL)
        self.assertEqual(relay.requests[0].params, [OWNER, "latest"])

    async def test_erro_rpc(self) -> None:
        relay = FakeRelay().rpc("eth_getBalance", {"error": {"message": "header not found"}})

        with self.assertRaises(InvalidAPIResponseException):
            await ChainClient(relay, CHAIN_URL).get_balance(OWNER)

    async def test_smart_address(self) -> None:
        relay = FakeRelay().rpc("eth_call", {"result": "0x" + "0" * 24 + "AB" * 20})

        smart = await ChainClient(relay, CHAIN_URL).get_smart_address(OWNER)

        self.assertEqual(smart, "0x" + "ab" * 20)
        call, bloco = relay.requests[0].params
        self.assertEqual(bloco, "latest")
        self.assertEqual(call["to"], SMART_WALLET_FACTORY)
        self.assertEqual(
            call["data"],
            SMART_WALLET_SELECTOR + OWNER[2:].lower().rjust(64, "0") + "0" * 64,
        )

    async def test_smart_address_vazio(self) -> None:
        for resultado in ("0x", "", "0x1234"):
            with self.subTest(resultado=resultado):
                relay = FakeRelay().rpc("eth_call", {"result": resultado})
                self.assertIsNone(await ChainClient(relay, CHAIN_URL).get_smart_address(OWNER))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
