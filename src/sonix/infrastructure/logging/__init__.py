"""
Sistema de logging do Sonix.

Este módulo expõe o logger singleton, os handlers e o colaborador
que limpa o diretório de logs na inicialização.
"""

from typing import Optional

from sonix.config.models import LoggerConfig
from .logger import SonixLogger, ScopedLogger
from .formatters import LogFormatter, ConsoleFormatter, FileFormatter
from .handlers import LogHandler, ConsoleHandler, FileHandler, MemoryHandler
from .log_reset import LogResetter, DirectoryLogResetter, NoopLogResetter

# Singleton do logger principal
_logger_instance: Optional[SonixLogger] = None


def get_logger() -> SonixLogger:
    """Retorna a instância singleton do logger."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SonixLogger()
    return _logger_instance


def configure_logger(config: LoggerConfig) -> SonixLogger:
    """Recria o logger singleton a partir da configuração carregada."""
    global _logger_instance
    if _logger_instance is not None:
        _logger_instance.close()
    _logger_instance = SonixLogger(config)
    return _logger_instance


__all__ = [
    "LoggerConfig",
    "SonixLogger",
    "ScopedLogger",
    "LogFormatter",
    "ConsoleFormatter",
    "FileFormatter",
    "LogHandler",
    "ConsoleHandler",
    "FileHandler",
    "MemoryHandler",
    "LogResetter",
    "DirectoryLogResetter",
    "NoopLogResetter",
    "get_logger",
    "configure_logger",
]
