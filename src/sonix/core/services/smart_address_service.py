"""
Resolução dos endereços de smart wallet das contas configuradas.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from sonix.adapters.chain.chain_client import ChainClient
from sonix.core.exceptions import SonixBaseException
from sonix.core.interfaces import Signer
from sonix.core.services.base_service import BaseService


@dataclass
class SmartAddressResult:
    indice: int
    owner: Optional[str]
    smart_address: Optional[str]

    def as_line(self) -> str:
        if self.smart_address:
            return self.smart_address
        return f"Error processing wallet {self.indice}: {self.owner or '-'}"


class SmartAddressService(BaseService):
    """Consulta a factory para cada segredo e grava um endereço por linha."""

    def __init__(self, chain: ChainClient, signer_factory: Callable[[], Signer], logger: Optional[Any] = None):
        super().__init__(logger)
        self.chain = chain
        self.signer_factory = signer_factory

    async def resolve(self, secrets: Sequence[str]) -> List[SmartAddressResult]:
        resultados = []
        for indice, secret in enumerate(secrets, start=1):
            owner = None
            smart = None
            try:
                owner = self.signer_factory().derive_wallet(secret).address
                smart = await self.chain.get_smart_address(owner)
            except SonixBaseException as e:
                self._logger.erro(f"Erro ao processar carteira {indice}: {e}", exc_info=False)

            if smart:
                self._logger.info(f"Carteira {indice}: {owner} -> {smart}")
            resultados.append(SmartAddressResult(indice=indice, owner=owner, smart_address=smart))
        return resultados

    @staticmethod
    def write(resultados: Sequence[SmartAddressResult], output: Path | str) -> Path:
        path = Path(output)
        path.write_text("".join(f"{r.as_line()}\n" for r in resultados), encoding="utf-8")
        return path
