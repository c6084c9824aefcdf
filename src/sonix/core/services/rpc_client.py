"""
Cliente JSON-RPC do relay.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sonix.config.constants import DEFAULT_RELAY_HEADERS
from sonix.core.domain.relay import RelayResponse
from sonix.core.interfaces import Transport


class RelayRpcClient:
    """
    Envia chamadas `{jsonrpc, id, method, params}` ao relay.

    O id começa em 1 e é incrementado a cada chamada, inclusive quando o
    transporte falha. Erros de transporte sobem sem retry.
    """

    def __init__(self, transport: Transport, relay_url: str, owner: Optional[str] = None):
        self.transport = transport
        self.relay_url = relay_url
        self.owner = owner
        self._next_id = 1

    @property
    def next_id(self) -> int:
        return self._next_id

    def _headers(self, extra: Optional[Dict[str, str]]) -> Dict[str, str]:
        headers = dict(DEFAULT_RELAY_HEADERS)
        if self.owner:
            headers["x-owner"] = self.owner
        if extra:
            headers.update(extra)
        return headers

    async def call(self, method: str, params: Dict[str, Any],
                   headers: Optional[Dict[str, str]] = None) -> RelayResponse:
        request_id = self._next_id
        self._next_id += 1

        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
        response = await self.transport.request(self.relay_url, "POST", payload, self._headers(headers))
        return RelayResponse.from_transport(response)
