"""Sistema centralizado de exceções customizadas do Sonix."""

from __future__ import annotations
from typing import Any, Optional


class SonixBaseException(Exception):
    """Exceção base para todas as exceções customizadas do Sonix."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            base = f"{base} ({details_str})"
        if self.cause:
            base = f"{base} | Causa: {self.cause}"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# ==================== Exceções de Rede ====================

class NetworkException(SonixBaseException):
    """Exceção base para erros relacionados à rede."""
    pass


class RequestException(NetworkException):
    """Erro em requisição HTTP (conexão, proxy, DNS)."""
    pass


class RequestTimeoutException(RequestException):
    """Timeout em requisição HTTP."""
    pass


class HttpStatusException(RequestException):
    """Resposta HTTP fora da faixa 2xx."""

    def __init__(self, status_code: int, reason: str = "", url: Optional[str] = None, body: Any = None):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        self.body = body
        details: dict[str, Any] = {"status_code": status_code}
        if url:
            details["url"] = url
        super().__init__(f"{status_code} - {reason}".rstrip(" -"), details=details)


# ==================== Exceções de Autenticação ====================

class AuthenticationException(SonixBaseException):
    """Exceção base para erros de autenticação."""
    pass


class InvalidCredentialException(AuthenticationException):
    """Segredo da conta não é chave privada nem frase mnemônica."""
    pass


# ==================== Exceções de Sessão ====================

class SessionException(SonixBaseException):
    """Exceção base para erros de sessão."""
    pass


class SessionCreationException(SessionException):
    """Relay recusou a criação da sessão."""
    pass


class SessionStageException(SessionException):
    """Operação chamada fora da ordem da máquina de estados da sessão."""
    pass


class PermitException(SessionException):
    """Exceção base para erros de permit."""
    pass


class PermitRequestException(PermitException):
    """Falha ao obter a mensagem tipada do permit."""
    pass


class PermitSubmissionException(PermitException):
    """Relay recusou o permit assinado."""
    pass


class PermitRejectedException(PermitException):
    """Relay rejeitou uma chamada com erro de 'Permit'; o permit precisa ser refeito."""
    pass


class PermitNotSubmittedException(PermitException):
    """Tentativa de usar o 'part' antes de o permit ser submetido."""
    pass


# ==================== Exceções de Jogo ====================

class GameException(SonixBaseException):
    """Exceção base para erros de jogo."""
    pass


class UnknownGameException(GameException):
    """Jogo não existe na tabela de payloads configurada."""
    pass


class GamePlayException(GameException):
    """Erro não classificado retornado pelo relay ao jogar."""
    pass


class RandomnessRecoveryException(GameException):
    """Falha ao recuperar um jogo sem número aleatório."""
    pass


class ReiterationException(RandomnessRecoveryException):
    """Falha na chamada reIterate."""
    pass


class RefundException(RandomnessRecoveryException):
    """Falha na chamada refund."""
    pass


# ==================== Exceções de API ====================

class APIException(SonixBaseException):
    """Exceção base para erros de API."""
    pass


class UserLookupException(APIException):
    """Falha ao obter ou criar o registro do usuário."""
    pass


class InvalidAPIResponseException(APIException):
    """Resposta de API inválida ou inesperada."""
    pass


# ==================== Exceções de Configuração ====================

class ConfigurationException(SonixBaseException):
    """Exceção base para erros de configuração."""
    pass


class InvalidConfigException(ConfigurationException):
    """Configuração inválida."""
    pass


# ==================== Exceções de Execução ====================

class ExecutionException(SonixBaseException):
    """Exceção base para erros de execução."""
    pass


class RetryExhaustedException(ExecutionException):
    """Todas as tentativas de retry foram esgotadas."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Todas as {attempts} tentativas falharam",
            details={"attempts": attempts, "last_error": str(last_error) if last_error else None},
            cause=last_error
        )


__all__ = [
    # Base
    "SonixBaseException",
    # Network
    "NetworkException",
    "RequestException",
    "RequestTimeoutException",
    "HttpStatusException",
    # Authentication
    "AuthenticationException",
    "InvalidCredentialException",
    # Session
    "SessionException",
    "SessionCreationException",
    "SessionStageException",
    "PermitException",
    "PermitRequestException",
    "PermitSubmissionException",
    "PermitRejectedException",
    "PermitNotSubmittedException",
    # Game
    "GameException",
    "UnknownGameException",
    "GamePlayException",
    "RandomnessRecoveryException",
    "ReiterationException",
    "RefundException",
    # API
    "APIException",
    "UserLookupException",
    "InvalidAPIResponseException",
    # Configuration
    "ConfigurationException",
    "InvalidConfigException",
    # Execution
    "ExecutionException",
    "RetryExhaustedException",
]
