"""Entidades de Resultado de Execução."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class EtapaResult:
    """Resultado de uma etapa individual do ciclo."""
    nome: str
    sucesso: bool
    erro: Optional[str] = None


@dataclass
class CicloResult:
    """Resultado detalhado de um ciclo de uma conta."""
    conta: str
    numero: int
    iniciado_em: datetime = field(default_factory=datetime.now)
    sucesso_geral: bool = False
    endereco: Optional[str] = None
    pontos_iniciais: Optional[float] = None
    pontos_finais: Optional[float] = None
    jogos: Dict[str, str] = field(default_factory=dict)
    etapas: List[EtapaResult] = field(default_factory=list)
    erro_fatal: Optional[str] = None

    def adicionar_etapa(self, nome: str, sucesso: bool, erro: Optional[str] = None) -> None:
        """Adiciona resultado de uma etapa."""
        self.etapas.append(EtapaResult(nome=nome, sucesso=sucesso, erro=erro))

    @property
    def pontos_ganhos(self) -> Optional[float]:
        if self.pontos_iniciais is None or self.pontos_finais is None:
            return None
        return self.pontos_finais - self.pontos_iniciais

    def get_resumo(self) -> Dict[str, Any]:
        """Retorna resumo do resultado."""
        etapas_ok = sum(1 for e in self.etapas if e.sucesso)
        return {
            "conta": self.conta,
            "ciclo": self.numero,
            "sucesso": self.sucesso_geral,
            "endereco": self.endereco,
            "pontos_ganhos": self.pontos_ganhos,
            "jogos": dict(self.jogos),
            "etapas_ok": etapas_ok,
            "etapas_falha": len(self.etapas) - etapas_ok,
            "erro_fatal": self.erro_fatal,
        }
