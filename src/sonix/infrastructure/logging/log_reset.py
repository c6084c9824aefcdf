"""
Limpeza do diretório de logs na inicialização do processo.
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from pathlib import Path


class LogResetter(ABC):
    """Colaborador executado uma única vez quando o supervisor inicia."""

    @abstractmethod
    def reset(self) -> None:
        ...


class DirectoryLogResetter(LogResetter):
    """Remove o diretório de logs de execuções anteriores e o recria vazio."""

    def __init__(self, logs_dir: Path | str):
        self.logs_dir = Path(logs_dir)

    def reset(self) -> None:
        if self.logs_dir.exists():
            shutil.rmtree(self.logs_dir)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


class NoopLogResetter(LogResetter):
    """Não faz nada (testes ou `--keep-logs`)."""

    def reset(self) -> None:
        return None
