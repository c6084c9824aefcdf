"""
Classe base para serviços.

Define funcionalidades comuns e padrões para todos os serviços.
"""

from __future__ import annotations

import asyncio
from abc import ABC
from typing import Any, Optional

from sonix.core.interfaces import Sleeper


class BaseService(ABC):
    """
    Classe base abstrata para todos os serviços.

    Fornece o logger e a espera cooperativa (injetável nos testes).
    """

    def __init__(self, logger: Optional[Any] = None, sleep: Optional[Sleeper] = None):
        """
        Inicializa o serviço.

        Args:
            logger: Serviço de logging (opcional)
            sleep: Função de espera assíncrona (padrão: asyncio.sleep)
        """
        self._logger = logger or self._get_default_logger()
        self._sleep = sleep or asyncio.sleep

    def _get_default_logger(self) -> Any:
        """
        Obtém logger padrão se nenhum foi fornecido.

        Returns:
            Logger padrão
        """
        from sonix.infrastructure.logging import get_logger
        return get_logger()

    async def aguardar(self, segundos: float, mensagem: Optional[str] = None) -> None:
        """
        Suspende a tarefa atual registrando o motivo da espera.

        Args:
            segundos: Duração da espera
            mensagem: Texto registrado em nível debug
        """
        if mensagem:
            self._logger.debug(mensagem, espera=f"{segundos:g}s")
        await self._sleep(segundos)

    @property
    def logger(self) -> Any:
        """Acesso ao logger do serviço."""
        return self._logger

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
