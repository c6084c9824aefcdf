"""
Logger principal do Sonix.

Coordena os handlers e formatadores e expõe a API de logging usada pelos
serviços (info/sucesso/aviso/erro, contexto e etapas).
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from sonix.config.constants import LEVEL_VALUES
from sonix.config.models import LoggerConfig
from sonix.core.exceptions import InvalidConfigException
from .formatters import ConsoleFormatter, FileFormatter
from .handlers import LogHandler, ConsoleHandler, FileHandler, _stderr_fallback


class SonixLogger:
    """
    Implementação principal do sistema de logging.
    """

    def __init__(self, config: Optional[LoggerConfig] = None, handlers: Optional[List[LogHandler]] = None):
        """
        Inicializa o logger.

        Args:
            config: Configuração do logger
            handlers: Handlers explícitos (ignora a configuração de destinos)
        """
        self.config = config or LoggerConfig()
        self.config.validate()

        self.handlers: List[LogHandler] = []
        if handlers is None:
            self._setup_handlers()
        else:
            self.handlers.extend(handlers)

    def _setup_handlers(self) -> None:
        """Configura handlers baseado na configuração."""
        level = LEVEL_VALUES.get(self.config.nivel_minimo, 20)

        self.handlers.append(ConsoleHandler(
            formatter=ConsoleFormatter(
                show_time=self.config.mostrar_tempo,
                show_context=self.config.mostrar_contexto,
            ),
            level=level,
            use_colors=self.config.usar_cores,
        ))

        if self.config.arquivo_log:
            self.handlers.append(FileHandler(
                filename=self.config.arquivo_log,
                formatter=FileFormatter(include_context=True),
                level=level,
                mode="w" if self.config.sobrescrever_arquivo else "a",
            ))

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        """
        Método interno para logging.

        Args:
            level: Nível do log
            message: Mensagem principal
            **kwargs: Dados adicionais
        """
        exception = kwargs.pop("exception", None)
        exc_info = kwargs.pop("exc_info", False)
        if exception is None and exc_info:
            exception = sys.exc_info()[1]

        record = {
            "timestamp": datetime.now(),
            "level": LEVEL_VALUES.get(level.upper(), 20),
            "message": message,
            "context": kwargs,
            "exception": exception,
        }

        for handler in self.handlers:
            try:
                handler.handle(record)
            except Exception as e:
                _stderr_fallback(f"Erro no handler de log: {e}")

    def debug(self, mensagem: str, **dados: Any) -> None:
        """Registra mensagem de depuração."""
        self._log("DEBUG", mensagem, **dados)

    def info(self, mensagem: str, **dados: Any) -> None:
        """Registra mensagem informativa."""
        self._log("INFO", mensagem, **dados)

    def sucesso(self, mensagem: str, **dados: Any) -> None:
        """Registra mensagem de sucesso."""
        self._log("SUCCESS", mensagem, **dados)

    def aviso(self, mensagem: str, **dados: Any) -> None:
        """Registra uma advertência."""
        self._log("WARNING", mensagem, **dados)

    def erro(self, mensagem: str, **dados: Any) -> None:
        """Registra um erro."""
        # Captura exceção atual se disponível
        dados.setdefault("exc_info", True)
        self._log("ERROR", mensagem, **dados)

    def critico(self, mensagem: str, **dados: Any) -> None:
        """Registra um erro crítico."""
        dados.setdefault("exc_info", True)
        self._log("CRITICAL", mensagem, **dados)

    def com_contexto(self, **dados: Any) -> ScopedLogger:
        """
        Retorna um logger derivado com contexto adicional.

        Args:
            **dados: Contexto adicional
        """
        return ScopedLogger(self, dados)

    @contextmanager
    def etapa(self, titulo: str, **dados: Any) -> Iterator[None]:
        """
        Cria um contexto de execução para agrupar logs.

        Args:
            titulo: Título da etapa
            **dados: Dados adicionais
        """
        inicio = dados.pop("mensagem_inicial", f"Iniciando: {titulo}")
        sucesso = dados.pop("mensagem_sucesso", f"Concluído: {titulo}")
        falha = dados.pop("mensagem_falha", f"Falha: {titulo}")

        self.info(inicio, operation=titulo, **dados)
        try:
            yield
        except Exception as e:
            self.erro(falha, exception=e, **dados)
            raise
        else:
            self.sucesso(sucesso, **dados)

    def flush(self) -> None:
        """Força escrita de todos os buffers."""
        for handler in self.handlers:
            handler.flush()

    def close(self) -> None:
        """Fecha o logger e libera recursos."""
        for handler in self.handlers:
            handler.close()
        self.handlers.clear()

    def add_handler(self, handler: LogHandler) -> None:
        self.handlers.append(handler)

    def remove_handler(self, handler: LogHandler) -> None:
        if handler in self.handlers:
            handler.close()
            self.handlers.remove(handler)

    def set_level(self, level: str) -> None:
        """
        Define nível mínimo de log.

        Args:
            level: Nível mínimo (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
        """
        level_value = LEVEL_VALUES.get(level.upper())
        if level_value is None:
            raise InvalidConfigException(f"Nível inválido: {level}", details={"level": level})

        self.config.nivel_minimo = level.upper()
        for handler in self.handlers:
            handler.level = level_value


class ScopedLogger:
    """
    Logger com contexto adicional.

    Wrapper que adiciona contexto fixo a todas as mensagens.
    """

    def __init__(self, parent: SonixLogger, context: Dict[str, Any]):
        self.parent = parent
        self.context = context

    def _merge_context(self, **dados: Any) -> Dict[str, Any]:
        return {**self.context, **dados}

    def debug(self, mensagem: str, **dados: Any) -> None:
        self.parent.debug(mensagem, **self._merge_context(**dados))

    def info(self, mensagem: str, **dados: Any) -> None:
        self.parent.info(mensagem, **self._merge_context(**dados))

    def sucesso(self, mensagem: str, **dados: Any) -> None:
        self.parent.sucesso(mensagem, **self._merge_context(**dados))

    def aviso(self, mensagem: str, **dados: Any) -> None:
        self.parent.aviso(mensagem, **self._merge_context(**dados))

    def erro(self, mensagem: str, **dados: Any) -> None:
        self.parent.erro(mensagem, **self._merge_context(**dados))

    def critico(self, mensagem: str, **dados: Any) -> None:
        self.parent.critico(mensagem, **self._merge_context(**dados))

    def com_contexto(self, **dados: Any) -> ScopedLogger:
        """Retorna um logger derivado com contexto adicional."""
        return ScopedLogger(self.parent, self._merge_context(**dados))

    @contextmanager
    def etapa(self, titulo: str, **dados: Any) -> Iterator[None]:
        """Cria um contexto de execução para agrupar logs."""
        with self.parent.etapa(titulo, **self._merge_context(**dados)):
            yield
