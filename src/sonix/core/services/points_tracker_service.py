"""
Consulta de pontos do jogador no gateway do arcade.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sonix.config.models import TimingConfig
from sonix.core.domain.points import Points
from sonix.core.exceptions import InvalidAPIResponseException, SonixBaseException
from sonix.core.interfaces import Sleeper, Transport
from sonix.core.services.base_service import BaseService


class PointsTrackerService(BaseService):
    """
    Mantém o snapshot de pontos (hoje/total) de uma conta.

    Falhas nunca interrompem o fluxo: são registradas e o snapshot
    anterior é mantido.
    """

    def __init__(
        self,
        transport: Transport,
        points_url: str,
        smart_address: Optional[str],
        timing: Optional[TimingConfig] = None,
        logger: Optional[Any] = None,
        sleep: Optional[Sleeper] = None,
    ):
        super().__init__(logger, sleep)
        self.transport = transport
        self.points_url = points_url
        self.smart_address = smart_address
        self.timing = timing or TimingConfig()
        self.points = Points()

    async def refresh_points(self) -> Points:
        if not self.smart_address:
            self._logger.debug("Smart address não configurado, pulando consulta de pontos")
            return self.points

        await self.aguardar(self.timing.step_delay, "Consultando pontos atuais")
        try:
            response = await self.transport.request(f"{self.points_url}?wallet={self.smart_address}", "GET")
            if not response.ok:
                raise InvalidAPIResponseException("Failed to get points", details={"status": response.status})

            body = response.body
            if not isinstance(body, dict) or "today" not in body or "totalPoints" not in body:
                raise InvalidAPIResponseException("Resposta de pontos malformada")

            self.points = Points(today=body["today"], total=body["totalPoints"], updated_at=datetime.now())
        except SonixBaseException as e:
            self._logger.erro(f"Erro ao consultar pontos: {e}", exc_info=False)
            return self.points

        self._logger.info(f"Pontos: hoje {self.points.today} | total {self.points.total}")
        return self.points
