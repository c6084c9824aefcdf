"""
Entidades de resposta do transporte e do relay.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TransportResponse:
    """Resposta HTTP normalizada (2xx vira status 200)."""

    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return self.status == 200


@dataclass(frozen=True)
class RelayResponse:
    """Corpo de uma resposta JSON-RPC do relay."""

    status: int
    result: Any = None
    error: Optional[Dict[str, Any]] = None
    raw: Any = None

    @classmethod
    def from_transport(cls, response: TransportResponse) -> RelayResponse:
        body = response.body if isinstance(response.body, dict) else {}
        error = body.get("error")
        if error is not None and not isinstance(error, dict):
            error = {"message": str(error)}
        return cls(status=response.status, result=body.get("result"), error=error, raw=response.body)

    @property
    def ok(self) -> bool:
        return self.status == 200

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        return str(self.error.get("message") or "Unknown")

    @property
    def nested_error(self) -> Optional[Dict[str, Any]]:
        """Erro de execução on-chain em `result.hash` (distinto do campo `error`)."""
        if not isinstance(self.result, dict):
            return None
        tx = self.result.get("hash")
        if isinstance(tx, dict) and tx.get("errorTypes"):
            return tx
        return None

    @property
    def nested_error_details(self) -> str:
        nested = self.nested_error or {}
        actual = nested.get("actualError")
        if isinstance(actual, dict) and actual.get("details"):
            return str(actual["details"])
        return str(nested.get("errorTypes", "unknown"))
