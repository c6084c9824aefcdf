"""
Sistema de injeção de dependências do Sonix.

Monta configuração, logger, repositório de contas, fábricas de transporte
e assinador e o agendador usando dependency-injector.
"""

from __future__ import annotations

from dependency_injector import containers, providers

from sonix.adapters.repositories.file_account_repository import FileAccountRepository
from sonix.adapters.signer.eth_signer import EthSigner
from sonix.config import AppConfig, get_config
from sonix.core.services.scheduler_service import SchedulerService
from sonix.infrastructure.http.requests_transport import RequestsTransport
from sonix.infrastructure.logging import DirectoryLogResetter, get_logger


class ApplicationContainer(containers.DeclarativeContainer):
    """Container de injeção de dependências da aplicação."""

    config = providers.Singleton(get_config)

    logger = providers.Singleton(get_logger)

    account_repository = providers.Singleton(
        FileAccountRepository,
        config=config.provided.accounts,
        logger=logger,
    )

    # Um transporte e um assinador novos por conta
    transport_factory = providers.Factory(
        RequestsTransport,
        config=config.provided.transport,
        origin=config.provided.relay.origin,
        referer=config.provided.relay.referer,
        logger=logger,
    )
    signer_factory = providers.Factory(EthSigner)

    log_resetter = providers.Singleton(
        DirectoryLogResetter,
        logs_dir=config.provided.logs_dir,
    )

    scheduler = providers.Singleton(
        SchedulerService,
        config=config,
        transport_factory=transport_factory.provider,
        signer_factory=signer_factory.provider,
        log_resetter=log_resetter,
        logger=logger,
    )


# Container global (singleton)
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """
    Obtém o container global da aplicação.

    Returns:
        ApplicationContainer: Instância singleton do container
    """
    global _container
    if _container is None:
        _container = ApplicationContainer()
    return _container


def override_config(config: AppConfig) -> None:
    """Sobrescreve a configuração do container global."""
    container = get_container()
    container.config.override(providers.Object(config))


def reset_container() -> None:
    """Reseta o container global e suas dependências."""
    global _container
    if _container is not None:
        _container.reset_singletons()
        _container = None


__all__ = [
    "ApplicationContainer",
    "get_container",
    "override_config",
    "reset_container",
]
