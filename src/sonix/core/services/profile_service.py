"""
Perfil da conta no dashboard do airdrop.

Leitura de saldo, assinatura da mensagem de conexão, busca/criação do
usuário e atualização do código de indicação.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Dict, Optional
from urllib.parse import quote

from sonix.adapters.chain.chain_client import ChainClient
from sonix.config.constants import CONNECTION_MESSAGE_TEMPLATE
from sonix.config.models import TimingConfig
from sonix.core.exceptions import SonixBaseException, UserLookupException
from sonix.core.interfaces import Signer, Sleeper, Transport
from sonix.core.services.base_service import BaseService


class ArcadeProfileService(BaseService):
    """Etapas de perfil executadas antes da sessão de jogos."""

    def __init__(
        self,
        signer: Signer,
        transport: Transport,
        chain: ChainClient,
        airdrop_url: str,
        referrer_code: str = "",
        timing: Optional[TimingConfig] = None,
        logger: Optional[Any] = None,
        sleep: Optional[Sleeper] = None,
    ):
        super().__init__(logger, sleep)
        self.signer = signer
        self.transport = transport
        self.chain = chain
        self.airdrop_url = airdrop_url.rstrip("/")
        self.referrer_code = referrer_code
        self.timing = timing or TimingConfig()
        self.balance: Optional[Decimal] = None
        self.connection_signature: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    async def fetch_balance(self) -> Decimal:
        """Saldo nativo da carteira, em ether."""
        self._logger.debug(f"Lendo saldo: {self.signer.address}")
        self.balance = await self.chain.get_balance(self.signer.address)
        self._logger.info(f"Saldo atualizado: {self.balance}")
        return self.balance

    def connection_message(self) -> str:
        return CONNECTION_MESSAGE_TEMPLATE.format(referrer=self.referrer_code, address=self.signer.address)

    async def sign_connection_message(self) -> str:
        await self.aguardar(self.timing.step_delay, "Conectando ao Sonic Arcade")
        self.connection_signature = self.signer.sign_message(self.connection_message())
        self._logger.debug(f"Assinatura da conexão: {self.connection_signature}")
        return self.connection_signature

    async def fetch_user(self) -> Dict[str, Any]:
        """
        Busca (ou cria) o registro do usuário.

        Raises:
            UserLookupException: Qualquer falha na consulta ou resposta inesperada
        """
        await self.aguardar(self.timing.step_delay, "Lendo informações do usuário")
        batch_input = json.dumps({"0": {"json": {"address": self.signer.address}}}, separators=(",", ":"))
        url = f"{self.airdrop_url}/user.findOrCreate?batch=1&input={quote(batch_input)}"

        try:
            response = await self.transport.request(url, "GET")
        except SonixBaseException as e:
            raise UserLookupException("Failed to get user information", cause=e) from e

        try:
            self.user = response.body[0]["result"]["data"]["json"]
        except (KeyError, IndexError, TypeError) as e:
            raise UserLookupException("Failed to get user information", details={"body": response.body}, cause=e) from e

        self._logger.info("Informações do usuário obtidas")
        return self.user

    async def try_update_referrer(self) -> bool:
        """
        Define o código de indicação quando o usuário ainda não tem um.

        Melhor esforço: erros são registrados e ignorados.

        Returns:
            True se o código foi atualizado nesta chamada
        """
        await self.aguardar(self.timing.step_delay, "Verificando código de indicação")
        try:
            if self.user is None:
                raise UserLookupException("Usuário não carregado")
            if self.user.get("invitedCode") is not None:
                self._logger.info("Código de indicação já definido")
                return False

            body = {
                "json": {
                    "address": self.signer.address,
                    "invitedCode": self.referrer_code,
                    "signature": self.connection_signature,
                }
            }
            response = await self.transport.request(f"{self.airdrop_url}/user.setInvited?batch=1", "POST", body)
            if not response.ok:
                return False

            self._logger.sucesso("Código de indicação atualizado")
            await self.fetch_user()
            return True
        except SonixBaseException as e:
            self._logger.erro(f"Falha ao atualizar código de indicação: {e}", exc_info=False)
            return False
