"""
Agregado de colaboradores de uma conta.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from sonix.adapters.chain.chain_client import ChainClient
from sonix.config.models import AppConfig
from sonix.core.domain.account import Conta
from sonix.core.interfaces import Signer, Sleeper, Transport
from sonix.core.services.game_orchestrator_service import GameOrchestratorService, build_game_definitions
from sonix.core.services.points_tracker_service import PointsTrackerService
from sonix.core.services.profile_service import ArcadeProfileService
from sonix.core.services.rpc_client import RelayRpcClient
from sonix.core.services.session_manager_service import SessionManagerService


@dataclass
class AccountRuntime:
    """
    Estado exclusivo de uma conta: sessão, pontos e mapa de jogos.

    Nada aqui é compartilhado entre contas além da configuração.
    """

    conta: Conta
    transport: Transport
    signer: Signer
    rpc: RelayRpcClient
    session: SessionManagerService
    points: PointsTrackerService
    profile: ArcadeProfileService
    games: GameOrchestratorService
    logger: Any

    @classmethod
    def build(
        cls,
        conta: Conta,
        config: AppConfig,
        transport_factory: Callable[[Optional[str]], Transport],
        signer_factory: Callable[[], Signer],
        logger: Any,
        sleep: Optional[Sleeper] = None,
    ) -> AccountRuntime:
        transport = transport_factory(conta.proxy)
        signer = signer_factory()
        rpc = RelayRpcClient(transport, config.relay.relay_url)

        points = PointsTrackerService(
            transport, config.relay.points_url, conta.smart_address,
            timing=config.timing, logger=logger, sleep=sleep,
        )
        session = SessionManagerService(
            signer, rpc, config.relay.token_approval_contract,
            timing=config.timing, retry=config.retry, points_tracker=points,
            logger=logger, sleep=sleep,
        )
        profile = ArcadeProfileService(
            signer, transport, ChainClient(transport, config.relay.chain_rpc_url),
            config.relay.airdrop_url, config.accounts.referrer_code,
            timing=config.timing, logger=logger, sleep=sleep,
        )
        games = GameOrchestratorService(
            session, rpc, points,
            build_game_definitions(config.games, config.relay.arcade_contract),
            smart_address=conta.smart_address, games=config.games, timing=config.timing,
            logger=logger, sleep=sleep,
        )
        return cls(
            conta=conta, transport=transport, signer=signer, rpc=rpc, session=session,
            points=points, profile=profile, games=games, logger=logger,
        )

    def close(self) -> None:
        self.transport.close()
