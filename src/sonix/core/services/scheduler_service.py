"""
Agendador dos ciclos das contas.

Cada conta roda em uma tarefa asyncio própria, repetindo o ciclo completo
(conexão → perfil → sessão → permit → jogos) a cada intervalo. Um
supervisor reinicia o conjunto quando uma exceção escapa de todas as
recuperações por conta.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from sonix.adapters.repositories.file_account_repository import FileAccountRepository
from sonix.config.models import AppConfig
from sonix.core.domain.account import Conta
from sonix.core.domain.execution import CicloResult
from sonix.core.interfaces import Signer, Sleeper, Transport
from sonix.core.services.account_runtime import AccountRuntime
from sonix.core.services.base_service import BaseService
from sonix.infrastructure.logging.log_reset import LogResetter, NoopLogResetter


class SchedulerService(BaseService):
    """Executa os ciclos de todas as contas concorrentemente."""

    def __init__(
        self,
        config: AppConfig,
        transport_factory: Callable[[Optional[str]], Transport],
        signer_factory: Callable[[], Signer],
        log_resetter: Optional[LogResetter] = None,
        logger: Optional[Any] = None,
        sleep: Optional[Sleeper] = None,
    ):
        super().__init__(logger, sleep)
        self.config = config
        self.transport_factory = transport_factory
        self.signer_factory = signer_factory
        self.log_resetter = log_resetter or NoopLogResetter()

    def build_runtime(self, conta: Conta) -> AccountRuntime:
        logger = self._logger.com_contexto(conta=conta.rotulo)
        return AccountRuntime.build(
            conta, self.config, self.transport_factory, self.signer_factory, logger, self._sleep
        )

    # ------------------------------------------------------------------
    # Ciclo
    # ------------------------------------------------------------------

    async def _step(self, resultado: CicloResult, nome: str, acao: Callable[[], Awaitable[Any]]) -> Any:
        try:
            retorno = await acao()
        except Exception as e:
            resultado.adicionar_etapa(nome, False, erro=str(e))
            raise
        resultado.adicionar_etapa(nome, True)
        return retorno

    async def run_cycle(self, runtime: AccountRuntime, numero: int = 1) -> CicloResult:
        """
        Executa um ciclo completo para a conta.

        Qualquer erro aborta o ciclo e é propagado depois de registrado no
        resultado.
        """
        resultado = CicloResult(conta=runtime.conta.rotulo, numero=numero)
        runtime.games.reset_games()
        step = lambda nome, acao: self._step(resultado, nome, acao)

        wallet = await step("connect", lambda: runtime.session.connect(runtime.conta))
        resultado.endereco = wallet.address
        await step("balance", runtime.profile.fetch_balance)
        await step("connection_message", runtime.profile.sign_connection_message)
        await step("user", runtime.profile.fetch_user)
        pontos = await step("points", runtime.points.refresh_points)
        resultado.pontos_iniciais = pontos.total
        await step("referrer", runtime.profile.try_update_referrer)
        await step("session", runtime.session.create_session)
        await step("permit", runtime.session.acquire_permit)
        if self.config.games.register_on_start:
            await step("register", runtime.session.register)

        estados = await step("games", runtime.games.play_all)
        resultado.jogos = {nome: estado.status.message for nome, estado in estados.items()}
        resultado.pontos_finais = runtime.points.points.total
        resultado.sucesso_geral = True
        return resultado

    async def run_account(self, conta: Conta, max_cycles: Optional[int] = None) -> List[CicloResult]:
        """
        Laço de ciclos de uma conta.

        Sucesso aguarda o intervalo entre ciclos; falha aguarda o atraso de
        retry e recomeça pela conexão.
        """
        max_cycles = max_cycles if max_cycles is not None else self.config.scheduler.max_cycles
        runtime = self.build_runtime(conta)
        logger = runtime.logger
        resultados: List[CicloResult] = []
        numero = 0

        logger.info(f"Conta iniciada: {conta.rotulo}")
        try:
            while max_cycles is None or numero < max_cycles:
                numero += 1
                try:
                    resultado = await self.run_cycle(runtime, numero)
                except Exception as e:
                    falha = CicloResult(conta=conta.rotulo, numero=numero, erro_fatal=str(e))
                    resultados.append(falha)
                    logger.erro(f"Erro no ciclo {numero}: {e}", exc_info=False)
                    if max_cycles is not None and numero >= max_cycles:
                        break
                    await self.aguardar(
                        self.config.timing.cycle_retry_delay,
                        f"Tentando novamente em {self.config.timing.cycle_retry_delay:g}s",
                    )
                    continue

                resultados.append(resultado)
                logger.sucesso(f"Ciclo {numero} concluído para {resultado.endereco}", **resultado.get_resumo())
                if max_cycles is not None and numero >= max_cycles:
                    break
                await self.aguardar(
                    self.config.timing.cycle_interval,
                    f"Aguardando próximo ciclo: {self.config.timing.cycle_interval:g}s",
                )
        finally:
            runtime.close()

        return resultados

    # ------------------------------------------------------------------
    # Supervisor
    # ------------------------------------------------------------------

    async def _run_set(self, contas: Sequence[Conta], max_cycles: Optional[int]) -> Dict[str, List[CicloResult]]:
        tasks = [
            asyncio.create_task(self.run_account(conta, max_cycles), name=conta.rotulo)
            for conta in contas
        ]
        try:
            resultados = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return {conta.rotulo: res for conta, res in zip(contas, resultados)}

    async def run_all(self, contas: Sequence[Conta], max_cycles: Optional[int] = None) -> Dict[str, List[CicloResult]]:
        """
        Inicia uma tarefa por conta e supervisiona o conjunto.

        Raises:
            InvalidConfigException: Quantidade de proxies incompatível ou tabela
                de jogos incompleta
        """
        self.config.validate_games()
        proxies = sum(1 for conta in contas if conta.proxy)
        FileAccountRepository.validate_proxies(len(contas), proxies)

        if not contas:
            self._logger.aviso("Nenhuma conta para processar")
            return {}

        if self.config.scheduler.reset_logs_on_start:
            self.log_resetter.reset()

        max_restarts = self.config.scheduler.max_restarts
        restarts = 0
        self._logger.info(f"Iniciando {len(contas)} contas")

        while True:
            try:
                return await self._run_set(contas, max_cycles)
            except Exception as e:
                restarts += 1
                self._logger.critico(f"Erro crítico, reiniciando contas: {e}", exception=e)
                if max_restarts is not None and restarts > max_restarts:
                    raise
                await self.aguardar(
                    self.config.timing.cycle_retry_delay,
                    f"Reiniciando contas em {self.config.timing.cycle_retry_delay:g}s (reinício {restarts})",
                )
