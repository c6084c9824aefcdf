"""
Cliente JSON-RPC do nó da rede.

Usado para leitura de saldo e resolução do endereço da smart wallet.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

from eth_utils import from_wei

from sonix.config.constants import SMART_WALLET_FACTORY, SMART_WALLET_SELECTOR
from sonix.core.exceptions import InvalidAPIResponseException
from sonix.core.interfaces import Transport


class ChainClient:
    """Chamadas `eth_*` via Transport."""

    def __init__(self, transport: Transport, rpc_url: str, factory: str = SMART_WALLET_FACTORY):
        self.transport = transport
        self.rpc_url = rpc_url
        self.factory = factory
        self._request_id = 0

    async def _rpc(self, method: str, params: List[Any]) -> Any:
        self._request_id += 1
        response = await self.transport.request(
            self.rpc_url,
            "POST",
            {"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params},
        )
        body = response.body if isinstance(response.body, dict) else {}
        if body.get("error"):
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise InvalidAPIResponseException(f"{method} falhou: {message}", details={"method": method})
        if "result" not in body:
            raise InvalidAPIResponseException(f"{method} sem resultado", details={"method": method})
        return body["result"]

    async def get_balance(self, address: str) -> Decimal:
        """Saldo nativo em ether."""
        result = await self._rpc("eth_getBalance", [address, "latest"])
        return Decimal(from_wei(int(result, 16), "ether"))

    async def get_smart_address(self, owner: str) -> Optional[str]:
        """
        Resolve o endereço da smart wallet de `owner` na factory.

        Returns:
            Endereço em minúsculas ou None quando a factory não devolve nada.
        """
        padded_owner = owner.lower().replace("0x", "").rjust(64, "0")
        salt = "0" * 64
        data = f"{SMART_WALLET_SELECTOR}{padded_owner}{salt}"

        result = await self._rpc("eth_call", [{"to": self.factory, "data": data}, "latest"])
        if not result or result == "0x" or len(result) < 66:
            return None
        return f"0x{result[26:]}".lower()
