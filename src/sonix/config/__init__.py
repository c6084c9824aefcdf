"""
Módulo de Configuração do Sonix.

Este pacote centraliza toda a lógica de configuração do sistema.
Use `get_config()` para obter a instância global da configuração.
"""

from typing import Optional

from sonix.config.models import (
    AppConfig,
    AccountsConfig,
    RelayConfig,
    TimingConfig,
    RetryConfig,
    GamesConfig,
    TransportConfig,
    SchedulerConfig,
    LoggerConfig,
)
from sonix.config.loader import ConfigLoader, ConfigLoaderException
from sonix.config.constants import DEFAULT_GAME_ORDER, LEVEL_VALUES, URLS

# Singleton global
_CONFIG_INSTANCE: Optional[AppConfig] = None


def get_config(reload: bool = False, config_path: str = None) -> AppConfig:
    """
    Obtém a instância global de configuração via Singleton.

    Args:
        reload: Se True, recarrega do disco.
        config_path: Caminho opcional para arquivo de config.

    Returns:
        AppConfig: Instância da configuração atual.
    """
    global _CONFIG_INSTANCE

    if _CONFIG_INSTANCE is None or reload:
        _CONFIG_INSTANCE = ConfigLoader.load(config_path)

    return _CONFIG_INSTANCE


def set_config(config: AppConfig) -> None:
    """Substitui a configuração global (CLI e testes)."""
    global _CONFIG_INSTANCE
    _CONFIG_INSTANCE = config


__all__ = [
    "get_config",
    "set_config",
    "AppConfig",
    "AccountsConfig",
    "RelayConfig",
    "TimingConfig",
    "RetryConfig",
    "GamesConfig",
    "TransportConfig",
    "SchedulerConfig",
    "LoggerConfig",
    "ConfigLoader",
    "ConfigLoaderException",
    "DEFAULT_GAME_ORDER",
    "LEVEL_VALUES",
    "URLS",
]
