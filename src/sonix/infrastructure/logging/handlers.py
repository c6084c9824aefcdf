"""
Handlers para processamento e destino de logs.

Define os handlers de console (Rich) e de arquivo.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from .formatters import LogFormatter, ConsoleFormatter, FileFormatter


class LogHandler(ABC):
    """
    Interface base para handlers de log.

    Define o contrato para processamento e envio
    de mensagens de log para diferentes destinos.
    """

    def __init__(self, formatter: Optional[LogFormatter] = None,
                 level: int = 0, filters: Optional[List] = None):
        """
        Inicializa o handler.

        Args:
            formatter: Formatador a ser usado
            level: Nível mínimo para processar
            filters: Lista de filtros
        """
        self.formatter = formatter or ConsoleFormatter()
        self.level = level
        self.filters = filters or []
        self._lock = threading.RLock()

    def should_handle(self, level: int) -> bool:
        return level >= self.level

    def apply_filters(self, record: Dict[str, Any]) -> bool:
        return all(filter_func(record) for filter_func in self.filters)

    @abstractmethod
    def emit(self, record: Dict[str, Any]) -> None:
        """
        Emite o registro de log.

        Args:
            record: Registro a ser emitido
        """

    def handle(self, record: Dict[str, Any]) -> None:
        """
        Processa o registro de log.

        Args:
            record: Registro a ser processado
        """
        if not self.should_handle(record.get("level", 0)):
            return

        if not self.apply_filters(record):
            return

        with self._lock:
            self.emit(record)

    def _render(self, record: Dict[str, Any]) -> str:
        return self.formatter.format(
            level=record["level"],
            message=record["message"],
            timestamp=record["timestamp"],
            context=record.get("context", {}),
            exception=record.get("exception"),
        )

    def flush(self) -> None:
        """Força escrita de buffers pendentes."""

    def close(self) -> None:
        """Fecha o handler e libera recursos."""
        self.flush()


class ConsoleHandler(LogHandler):
    """
    Handler para saída no console via Rich.
    """

    def __init__(self, console: Optional[Console] = None, formatter: Optional[LogFormatter] = None,
                 level: int = 0, use_colors: bool = True):
        super().__init__(formatter or ConsoleFormatter(), level)
        if console is None:
            from sonix.ui.console import get_console
            console = get_console()
        self.console = console
        self.use_colors = use_colors

    def emit(self, record: Dict[str, Any]) -> None:
        """Emite registro para console."""
        self.console.print(self._render(record), markup=True, highlight=False,
                           no_color=not self.use_colors, soft_wrap=True)


class FileHandler(LogHandler):
    """
    Handler para escrita em arquivo.
    """

    def __init__(self, filename: Path | str, formatter: Optional[LogFormatter] = None,
                 level: int = 0, mode: str = "a", encoding: str = "utf-8"):
        super().__init__(formatter or FileFormatter(), level)
        self.filename = Path(filename)
        self.encoding = encoding
        self._stream = self._open(mode)

    def _open(self, mode: str):
        self.filename.parent.mkdir(parents=True, exist_ok=True)
        return open(self.filename, mode, encoding=self.encoding)

    def emit(self, record: Dict[str, Any]) -> None:
        """Emite registro para arquivo."""
        # Reabre se o diretório de logs foi limpo após a abertura
        if not self.filename.exists():
            self._stream.close()
            self._stream = self._open("a")
        self._stream.write(self._render(record) + "\n")

    def flush(self) -> None:
        with self._lock:
            if not self._stream.closed:
                self._stream.flush()

    def close(self) -> None:
        self.flush()
        with self._lock:
            if not self._stream.closed:
                self._stream.close()


class MemoryHandler(LogHandler):
    """
    Handler que guarda os registros em memória.

    Usado pelos testes para inspecionar mensagens emitidas.
    """

    def __init__(self, level: int = 0):
        super().__init__(FileFormatter(include_context=False), level)
        self.records: List[Dict[str, Any]] = []

    def emit(self, record: Dict[str, Any]) -> None:
        self.records.append(record)

    @property
    def messages(self) -> List[str]:
        return [record["message"] for record in self.records]


def _stderr_fallback(message: str) -> None:
    print(message, file=sys.stderr)
