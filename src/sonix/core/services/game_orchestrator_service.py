"""
Orquestrador dos jogos do arcade.

Joga cada jogo repetidamente até o relay informar o limite diário,
classificando cada resposta e aplicando a recuperação adequada.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Mapping, Optional

from sonix.config.constants import MINES_CLAIM_DATA, MINES_GAME
from sonix.config.models import GamesConfig, TimingConfig
from sonix.core.domain.game import GameDefinition, GameState, PlayOutcome
from sonix.core.domain.relay import RelayResponse
from sonix.core.exceptions import (
    GamePlayException,
    NetworkException,
    PermitRejectedException,
    RefundException,
    ReiterationException,
    SonixBaseException,
    UnknownGameException,
)
from sonix.core.interfaces import Sleeper
from sonix.core.services.base_service import BaseService
from sonix.core.services.points_tracker_service import PointsTrackerService
from sonix.core.services.rpc_client import RelayRpcClient
from sonix.core.services.session_manager_service import SessionManagerService

MINES = MINES_GAME


def classify_play_response(response: RelayResponse) -> PlayOutcome:
    """
    Classifica a resposta de uma jogada.

    A ordem importa: a mensagem de erro é testada antes do erro on-chain
    aninhado em `result.hash`.
    """
    if not response.has_error:
        return PlayOutcome.SUCCESS

    message = response.error_message
    if "limit" in message:
        return PlayOutcome.LIMITED
    if "random number" in message:
        return PlayOutcome.RANDOMNESS_PENDING
    if "Permit" in message:
        return PlayOutcome.PERMIT_REJECTED
    if response.nested_error is not None:
        return PlayOutcome.SOFT_FAILURE
    return PlayOutcome.FAILED


def build_game_definitions(config: GamesConfig, arcade_contract: str = "") -> Dict[str, GameDefinition]:
    """Monta as definições a partir da tabela de payloads configurada."""
    definitions = {}
    for name, payload in config.payloads.items():
        call = {"dest": payload["dest"], "data": payload["data"], "value": payload.get("value", "0n")}
        claim = None
        if name == MINES and arcade_contract:
            claim = {"dest": arcade_contract, "data": MINES_CLAIM_DATA, "value": "0n"}
        definitions[name] = GameDefinition(name=name, call=call, claim_call=claim)
    return definitions


class GameOrchestratorService(BaseService):
    """Jogadas, recuperação e mapa de estado por jogo de uma conta."""

    def __init__(
        self,
        session: SessionManagerService,
        rpc: RelayRpcClient,
        points_tracker: PointsTrackerService,
        definitions: Mapping[str, GameDefinition],
        smart_address: Optional[str] = None,
        games: Optional[GamesConfig] = None,
        timing: Optional[TimingConfig] = None,
        logger: Optional[Any] = None,
        sleep: Optional[Sleeper] = None,
    ):
        super().__init__(logger, sleep)
        self.session = session
        self.rpc = rpc
        self.points_tracker = points_tracker
        self.definitions = dict(definitions)
        self.smart_address = smart_address
        self.config = games or GamesConfig()
        self.timing = timing or TimingConfig()
        self.states: Dict[str, GameState] = {}
        self.reset_games()

    def reset_games(self, names: Optional[Iterable[str]] = None) -> None:
        """Zera o estado dos jogos (início de ciclo)."""
        for name in names or self.definitions:
            self.states[name] = GameState()

    def state_of(self, name: str) -> GameState:
        if name not in self.definitions:
            raise UnknownGameException(f"Undefined game: [{name}]", details={"game": name})
        return self.states.setdefault(name, GameState())

    async def _game_wait(self, name: str, segundos: float, mensagem: str) -> None:
        state = self.state_of(name)
        state.status.message = mensagem
        state.status.wait_until = datetime.now() + timedelta(seconds=segundos)
        await self.aguardar(segundos, f"[{name}] {mensagem}")

    def _call_params(self, call: Dict[str, Any]) -> Dict[str, Any]:
        part, permit = self.session.capability
        return {"call": call, "owner": self.session.owner, "part": part, "permit": permit}

    # ------------------------------------------------------------------
    # Jogada
    # ------------------------------------------------------------------

    async def play_game(self, name: str) -> PlayOutcome:
        """
        Executa uma jogada e aplica a classificação da resposta.

        Raises:
            UnknownGameException: Jogo não configurado
            PermitNotSubmittedException: Sem permit válido
            PermitRejectedException: Relay rejeitou o permit
            GamePlayException: Erro não reconhecido
            RandomnessRecoveryException: Recuperação falhou
        """
        state = self.state_of(name)
        definition = self.definitions[name]
        params = self._call_params(definition.call)

        await self._game_wait(name, self.timing.game_wait, f"Playing game: [{name}]")
        response = await self.rpc.call("call", params)
        outcome = classify_play_response(response)
        state.last_outcome = outcome
        state.plays += 1
        message = response.error_message

        if outcome is PlayOutcome.SUCCESS:
            await self._game_wait(name, self.timing.game_wait, f"Successfully played game: [{name}]")
        elif outcome is PlayOutcome.LIMITED:
            state.mark_limited(message)
            self._logger.aviso(f"Jogo {name} atingiu o limite: {message}")
            await self._game_wait(name, self.timing.game_wait, message)
        elif outcome is PlayOutcome.RANDOMNESS_PENDING:
            await self._game_wait(name, self.timing.randomness_cooldown, message)
            await self.recover_randomness(name)
        elif outcome is PlayOutcome.PERMIT_REJECTED:
            raise PermitRejectedException(
                f"Failed to play game: [{name}], error: {message}", details={"game": name}
            )
        elif outcome is PlayOutcome.SOFT_FAILURE:
            detail = response.nested_error_details
            state.status.message = f"Play game failed: {detail}"
            self._logger.aviso(f"Jogada de {name} falhou on-chain: {detail}")
        else:
            raise GamePlayException(
                f"Failed to play game: [{name}], error: {message}", details={"game": name}
            )

        return outcome

    async def claim(self, name: str) -> None:
        """Reivindica o prêmio de um jogo com etapa de claim (mines)."""
        definition = self.definitions[name]
        if definition.claim_call is None:
            if name == MINES:
                self._logger.aviso(f"Claim de {name} ignorado: relay.arcade_contract não configurado")
            return

        await self._game_wait(name, self.timing.claim_confirmation_wait, "Placed")
        await self._game_wait(name, self.timing.claim_confirmation_wait, f"Claiming {name} game reward")

        response = await self.rpc.call("call", self._call_params(definition.claim_call))
        if response.has_error:
            mensagem = f"Failed to claim {name} game: {response.error_message}"
            self._logger.aviso(mensagem)
        elif response.nested_error is not None:
            mensagem = f"Claim failed: {response.nested_error_details}"
            self._logger.aviso(mensagem)
        else:
            mensagem = f"Successfully played and claimed {name} game."
            self._logger.sucesso(mensagem)
        await self._game_wait(name, self.timing.game_wait, mensagem)

    async def play_round(self, name: str) -> PlayOutcome:
        """Jogada seguida do claim, quando o jogo tem um e não ficou limitado."""
        outcome = await self.play_game(name)
        if not self.state_of(name).limited:
            await self.claim(name)
        return outcome

    # ------------------------------------------------------------------
    # Recuperação do número aleatório
    # ------------------------------------------------------------------

    async def recover_randomness(self, name: str) -> None:
        if self.config.randomness_recovery == "refund":
            await self.refund(name)
        else:
            await self.re_iterate(name)

    async def _recovery_call(self, method: str, name: str, error_class) -> None:
        try:
            response = await self.rpc.call(method, {"game": name, "player": self.smart_address})
        except NetworkException as e:
            raise error_class(f"Failed to {method} game {name}", details={"game": name}, cause=e) from e

        if not response.ok or response.has_error:
            raise error_class(
                f"Failed to {method} game {name}: {response.error_message or response.status}",
                details={"game": name},
            )

    async def re_iterate(self, name: str) -> None:
        """
        Raises:
            ReiterationException: Relay recusou o reIterate
        """
        await self.aguardar(self.timing.step_delay, f"Reiterando {name} por falta do número aleatório")
        await self._recovery_call("reIterate", name, ReiterationException)
        self._logger.info(f"Jogo {name} reiterado")

    async def refund(self, name: str) -> None:
        """
        Raises:
            RefundException: Relay recusou o reembolso
        """
        await self.aguardar(self.timing.step_delay, f"Reembolsando {name} por falta do número aleatório")
        await self._recovery_call("refund", name, RefundException)
        self._logger.info(f"Jogo {name} reembolsado")

    # ------------------------------------------------------------------
    # Laços
    # ------------------------------------------------------------------

    async def play_until_limited(self, name: str) -> GameState:
        """
        Joga até o limite do jogo.

        Erros aguardam o backoff fixo e repetem o mesmo jogo. Uma rejeição
        do permit o invalida, e ele é obtido de novo antes da próxima jogada.
        """
        state = self.state_of(name)
        attempts = 0

        while not state.limited:
            if self.config.max_game_attempts and attempts >= self.config.max_game_attempts:
                self._logger.aviso(f"Jogo {name} abandonado após {attempts} tentativas")
                break
            attempts += 1

            try:
                if not self.session.state.has_capability:
                    await self.session.acquire_permit()
                await self.play_round(name)
                await self.points_tracker.refresh_points()
            except UnknownGameException:
                raise
            except PermitRejectedException as e:
                self.session.invalidate_permit()
                await self._game_wait(name, self.timing.game_retry_backoff, str(e))
            except SonixBaseException as e:
                self._logger.erro(f"Erro ao jogar {name}: {e}", exc_info=False)
                await self._game_wait(name, self.timing.game_retry_backoff, str(e))

        return state

    async def play_all(self, order: Optional[Iterable[str]] = None) -> Dict[str, GameState]:
        """Joga todos os jogos na ordem configurada."""
        for name in order or self.config.order:
            with self._logger.etapa(f"Jogo {name}", mensagem_inicial=f"Jogando {name} até o limite",
                                    mensagem_sucesso=f"{name} concluído"):
                await self.play_until_limited(name)
        return dict(self.states)
