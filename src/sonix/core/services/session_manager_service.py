"""
Gerenciador de Sessão do relay.

Conduz a máquina de estados sessão → permit → part de uma conta:

    DISCONNECTED → CONNECTED → SESSION_CREATED → PERMIT_REQUESTED
                 → PERMIT_SIGNED → PERMIT_SUBMITTED

Nenhuma chamada de jogo pode sair sem o `part` e a assinatura do permit
obtidos no ciclo atual.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional, Tuple

from sonix.adapters.chain.calldata import MAX_UINT256, encode_approve
from sonix.config.constants import SESSION_TTL_MS
from sonix.config.models import RetryConfig, TimingConfig
from sonix.core.domain.account import Conta, Wallet
from sonix.core.domain.session import SessionStage, SessionState, TypedData
from sonix.core.exceptions import (
    InvalidAPIResponseException,
    NetworkException,
    PermitNotSubmittedException,
    PermitRequestException,
    PermitSubmissionException,
    RetryExhaustedException,
    SessionCreationException,
    SessionStageException,
    SonixBaseException,
)
from sonix.core.interfaces import Signer, Sleeper
from sonix.core.services.base_service import BaseService
from sonix.core.services.rpc_client import RelayRpcClient


def parse_typed_message(raw: Any) -> TypedData:
    """
    Extrai domain/types/message do `typedMessage` devolvido pelo relay.

    Aceita string JSON ou dict, com o conteúdo em `json` ou direto na raiz.

    Raises:
        ValueError: Estrutura inesperada
    """
    data = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(data, dict):
        raise ValueError("typedMessage não é um objeto")
    if isinstance(data.get("json"), dict):
        data = data["json"]

    missing = [k for k in ("domain", "types", "message") if not isinstance(data.get(k), dict)]
    if missing:
        raise ValueError(f"typedMessage sem campos: {', '.join(missing)}")
    return TypedData(domain=data["domain"], types=data["types"], message=data["message"])


class SessionManagerService(BaseService):
    """Sessão, permit e registro do token de uma conta."""

    def __init__(
        self,
        signer: Signer,
        rpc: RelayRpcClient,
        token_approval_contract: str,
        timing: Optional[TimingConfig] = None,
        retry: Optional[RetryConfig] = None,
        points_tracker: Optional[Any] = None,
        clock_ms=None,
        logger: Optional[Any] = None,
        sleep: Optional[Sleeper] = None,
    ):
        super().__init__(logger, sleep)
        self.signer = signer
        self.rpc = rpc
        self.token_approval_contract = token_approval_contract
        self.timing = timing or TimingConfig()
        self.retry = retry or RetryConfig()
        self.points_tracker = points_tracker
        self._clock_ms = clock_ms or (lambda: int(time.time() * 1000))
        self.state = SessionState()
        self.wallet: Optional[Wallet] = None

    # ------------------------------------------------------------------
    # Estado
    # ------------------------------------------------------------------

    @property
    def stage(self) -> SessionStage:
        return self.state.stage

    @property
    def owner(self) -> str:
        if self.wallet is None:
            raise SessionStageException("Conta não conectada", details={"stage": self.stage.name})
        return self.wallet.address

    @property
    def part(self) -> Optional[str]:
        return self.state.part

    @property
    def permit_signature(self) -> Optional[str]:
        return self.state.permit_signature

    def _require(self, minimum: SessionStage, exact: bool = False) -> None:
        current = self.state.stage
        if (exact and current is not minimum) or current < minimum:
            raise SessionStageException(
                f"Etapa requer {minimum.name}, atual: {current.name}",
                details={"required": minimum.name, "current": current.name},
            )

    @property
    def capability(self) -> Tuple[str, str]:
        """
        Par (part, assinatura do permit) exigido pelas chamadas de jogo.

        Raises:
            PermitNotSubmittedException: Permit ainda não submetido neste ciclo
        """
        if not self.state.has_capability:
            raise PermitNotSubmittedException(
                "Permit não submetido", details={"stage": self.stage.name}
            )
        return self.state.part, self.state.permit_signature

    # ------------------------------------------------------------------
    # Etapas
    # ------------------------------------------------------------------

    async def connect(self, conta: Conta) -> Wallet:
        """
        Deriva a carteira da conta.

        Raises:
            InvalidCredentialException: Segredo não é chave privada nem mnemônico
        """
        await self.aguardar(self.timing.step_delay, f"Conectando conta {conta.indice}")
        wallet = self.signer.derive_wallet(conta.segredo)
        self._logger.info(f"Tipo da conta: {wallet.tipo.value}")

        self.wallet = wallet
        self.rpc.owner = wallet.address
        self.state = SessionState(stage=SessionStage.CONNECTED, owner=wallet.address)
        self._logger.info(f"Endereço da carteira: {wallet.address}")
        return wallet

    async def create_session(self) -> int:
        """
        Cria a sessão no relay válida por 24h.

        Returns:
            Expiração da sessão (epoch ms)

        Raises:
            SessionCreationException: Status diferente de 200 ou erro HTTP
        """
        self._require(SessionStage.CONNECTED)
        await self.aguardar(self.timing.step_delay, "Criando sessão")

        until = self._clock_ms() + SESSION_TTL_MS
        try:
            response = await self.rpc.call("createSession", {"owner": self.owner, "until": until})
        except NetworkException as e:
            raise SessionCreationException("Failed to create session", cause=e) from e

        if not response.ok:
            raise SessionCreationException("Failed to create session", details={"status": response.status})

        # Uma nova sessão substitui a anterior e invalida o permit antigo
        self.state.reset_permit()
        self.state.stage = SessionStage.SESSION_CREATED
        self.state.expires_at_ms = until
        self._logger.info("Sessão criada com sucesso")
        return until

    async def request_permit_message(self) -> TypedData:
        """
        Obtém a mensagem tipada do permit.

        Raises:
            PermitRequestException: Qualquer falha (status, transporte, erro RPC, payload)
        """
        self._require(SessionStage.SESSION_CREATED)
        await self.aguardar(self.timing.step_delay, "Solicitando permit do contrato do arcade")

        try:
            response = await self.rpc.call("permitTypedMessage", {"owner": self.owner})
        except NetworkException as e:
            raise PermitRequestException("Failed to create Sonic Arcade session", cause=e) from e

        if not response.ok:
            raise PermitRequestException(
                "Failed to create Sonic Arcade session", details={"status": response.status}
            )
        if response.has_error:
            raise PermitRequestException(
                f"Failed to create Sonic Arcade session: {response.error_message}"
            )

        result = response.result if isinstance(response.result, dict) else {}
        try:
            typed_data = parse_typed_message(result.get("typedMessage"))
        except (ValueError, TypeError) as e:
            raise PermitRequestException("typedMessage inválido", cause=e) from e

        self.state.reset_permit()
        self.state.typed_data = typed_data
        self.state.stage = SessionStage.PERMIT_REQUESTED
        self._logger.debug("Permit criado")
        return typed_data

    def sign_permit(self, typed_data: Optional[TypedData] = None) -> str:
        """Assina a mensagem tipada do permit (sem rede)."""
        self._require(SessionStage.PERMIT_REQUESTED, exact=True)
        typed_data = typed_data or self.state.typed_data

        signature = self.signer.sign_typed_data(typed_data.domain, typed_data.types, typed_data.message)
        self.state.permit_signature = signature
        self.state.stage = SessionStage.PERMIT_SIGNED
        self._logger.debug("Mensagem do permit assinada")
        return signature

    async def submit_permit(self) -> str:
        """
        Submete o permit assinado e guarda o `part` devolvido.

        Raises:
            PermitSubmissionException: Relay devolveu erro
            NetworkException: Falhas de transporte sobem inalteradas
        """
        self._require(SessionStage.PERMIT_SIGNED, exact=True)
        await self.aguardar(self.timing.step_delay, "Submetendo permit do contrato")

        response = await self.rpc.call(
            "permit", {"owner": self.owner, "signature": self.state.permit_signature}
        )
        if response.has_error:
            raise PermitSubmissionException(
                f"Failed to submit permit: {response.error_message}",
                details={"error": response.error},
            )

        result = response.result if isinstance(response.result, dict) else {}
        part = result.get("hashKey")
        if not part:
            raise PermitSubmissionException("Failed to submit permit: hashKey ausente")

        self.state.part = part
        self.state.stage = SessionStage.PERMIT_SUBMITTED
        self._logger.sucesso("Permit submetido com sucesso")
        return part

    async def acquire_permit(self) -> str:
        """Solicita, assina e submete o permit."""
        typed_data = await self.request_permit_message()
        self.sign_permit(typed_data)
        return await self.submit_permit()

    def invalidate_permit(self) -> None:
        """Descarta part e assinatura após o relay rejeitar o permit."""
        if self.state.stage >= SessionStage.SESSION_CREATED:
            self.state.stage = SessionStage.SESSION_CREATED
        self.state.reset_permit()
        self._logger.aviso("Permit invalidado, será solicitado novamente")

    async def register(self) -> None:
        """
        Registra a chave do usuário (approve ilimitado no contrato do token).

        Usa retry com backoff exponencial limitado.

        Raises:
            RetryExhaustedException: Todas as tentativas falharam
        """
        part, permit = self.capability
        data = encode_approve(self.owner, MAX_UINT256)
        params: Dict[str, Any] = {
            "call": {"dest": self.token_approval_contract, "data": data, "value": "0n"},
            "owner": self.owner,
            "part": part,
            "permit": permit,
        }

        last_error: Optional[Exception] = None
        for attempt in range(1, self.retry.max_attempts + 1):
            try:
                response = await self.rpc.call("call", params)
                if not response.ok:
                    raise InvalidAPIResponseException(
                        "Failed to register user key", details={"status": response.status}
                    )
            except SonixBaseException as e:
                last_error = e
                self._logger.aviso(
                    f"Falha ao registrar chave (tentativa {attempt}/{self.retry.max_attempts}): {e}"
                )
                if attempt < self.retry.max_attempts:
                    await self.aguardar(self.retry.delay_for(attempt), "Aguardando novo registro")
                continue

            self._logger.sucesso("Chave do usuário registrada")
            if self.points_tracker is not None:
                await self.points_tracker.refresh_points()
            return

        raise RetryExhaustedException(self.retry.max_attempts, last_error)
