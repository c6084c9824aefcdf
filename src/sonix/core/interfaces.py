"""
Interfaces do Núcleo (Core Interfaces).

Define os contratos (Ports) que os Adapters devem implementar.
Segue o princípio de Inversão de Dependência (DIP).
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol, Sequence

from sonix.core.domain.account import Conta, Wallet
from sonix.core.domain.relay import TransportResponse

# Função de espera injetável (asyncio.sleep em produção)
Sleeper = Callable[[float], Awaitable[None]]


class Signer(ABC):
    """Interface do assinador de mensagens da carteira."""

    @abstractmethod
    def derive_wallet(self, secret: str) -> Wallet:
        """Deriva a carteira a partir de chave privada ou mnemônico."""
        ...

    @property
    @abstractmethod
    def address(self) -> str:
        ...

    @abstractmethod
    def sign_message(self, text: str) -> str:
        """Assinatura EIP-191 de uma mensagem de texto."""
        ...

    @abstractmethod
    def sign_typed_data(self, domain: Mapping[str, Any], types: Mapping[str, Any],
                        message: Mapping[str, Any]) -> str:
        """Assinatura EIP-712 de dados tipados."""
        ...


class Transport(ABC):
    """Interface do cliente HTTP."""

    @abstractmethod
    async def request(
        self,
        url: str,
        method: str = "GET",
        body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        """Executa a requisição; status fora de 2xx levanta HttpStatusException."""
        ...

    def close(self) -> None:
        """Libera recursos (sessões HTTP)."""


class AccountRepository(ABC):
    """Interface para origem das contas."""

    @abstractmethod
    def listar(self) -> Sequence[Conta]:
        """Lista todas as contas configuradas."""
        ...


class TransportFactory(Protocol):
    """Cria um transporte dedicado a uma conta (proxy e user agent próprios)."""

    def __call__(self, proxy: Optional[str] = None) -> Transport: ...


class SignerFactory(Protocol):
    def __call__(self) -> Signer: ...
