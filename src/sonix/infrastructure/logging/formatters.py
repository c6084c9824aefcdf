"""
Formatadores para mensagens de log.

Define formatadores para os dois destinos suportados: console (markup Rich)
e arquivo (texto puro).
"""

from __future__ import annotations

import traceback
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

from rich.markup import escape

from sonix.config.constants import DEFAULTS, LEVEL_NAMES

# Campos internos que não são exibidos como contexto
_INTERNAL_KEYS = {"exc_info", "exception"}


class LogFormatter(ABC):
    """
    Interface base para formatadores de log.
    """

    @abstractmethod
    def format(
        self,
        level: int,
        message: str,
        timestamp: datetime,
        context: Dict[str, Any],
        exception: Optional[BaseException] = None
    ) -> str:
        """
        Formata uma mensagem de log.

        Args:
            level: Nível do log (numérico)
            message: Mensagem principal
            timestamp: Timestamp do evento
            context: Contexto e metadados
            exception: Exceção capturada (se houver)

        Returns:
            str: Mensagem formatada
        """

    @staticmethod
    def _format_context(context: Dict[str, Any]) -> str:
        """Formata contexto de forma compacta."""
        items = []
        for key, value in context.items():
            if key in _INTERNAL_KEYS or key.startswith("_"):
                continue
            if isinstance(value, str) and len(value) > 50:
                value = value[:47] + "..."
            items.append(f"{key}={value}")
        return ", ".join(items)


class ConsoleFormatter(LogFormatter):
    """
    Formatador para saída no console.

    Produz markup Rich com o estilo do tema por nível.
    """

    STYLES = {
        10: "debug",
        20: "info",
        25: "success",
        30: "warning",
        40: "error",
        50: "critical",
    }

    def __init__(self, show_time: bool = True, show_context: bool = True):
        self.show_time = show_time
        self.show_context = show_context

    def format(
        self,
        level: int,
        message: str,
        timestamp: datetime,
        context: Dict[str, Any],
        exception: Optional[BaseException] = None
    ) -> str:
        """Formata mensagem para console."""
        style = self.STYLES.get(level, "info")
        parts = []

        if self.show_time:
            parts.append(f"[dim]{timestamp.strftime(DEFAULTS['log_format_date'])}[/dim] ")

        level_name = LEVEL_NAMES.get(level, "UNKNOWN").ljust(8)
        parts.append(f"[{style}]{level_name}[/{style}]")

        conta = context.get("conta")
        if conta:
            parts.append(f" [highlight]{escape(str(conta))}[/highlight]")

        parts.append(f" | {escape(message)}")

        if self.show_context:
            extra = self._format_context({k: v for k, v in context.items() if k != "conta"})
            if extra:
                parts.append(f" [dim]| {escape(extra)}[/dim]")

        if exception is not None and level >= 40:
            parts.append(f"\n[error]{escape(type(exception).__name__)}: {escape(str(exception))}[/error]")

        return "".join(parts)


class FileFormatter(LogFormatter):
    """
    Formatador para arquivos de log.

    Texto puro, uma linha por evento, com traceback completo quando houver exceção.
    """

    def __init__(self, include_context: bool = True):
        self.include_context = include_context

    def format(
        self,
        level: int,
        message: str,
        timestamp: datetime,
        context: Dict[str, Any],
        exception: Optional[BaseException] = None
    ) -> str:
        line = (
            f"{timestamp.isoformat(timespec='milliseconds')} "
            f"{LEVEL_NAMES.get(level, 'UNKNOWN'):<8} | {message}"
        )
        if self.include_context:
            extra = self._format_context(context)
            if extra:
                line = f"{line} | {extra}"
        if exception is not None:
            tb = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
            line = f"{line}\n{tb.rstrip()}"
        return line
