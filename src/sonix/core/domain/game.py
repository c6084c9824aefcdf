"""
Entidades dos jogos do arcade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class PlayOutcome(str, Enum):
    """Classificação da resposta do relay a uma jogada."""

    SUCCESS = "success"
    LIMITED = "limited"
    RANDOMNESS_PENDING = "randomness_pending"
    PERMIT_REJECTED = "permit_rejected"
    SOFT_FAILURE = "soft_failure"
    FAILED = "failed"


@dataclass(frozen=True)
class GameDefinition:
    """Payload estático de um jogo (descrição opaca da chamada ao relay)."""

    name: str
    call: Dict[str, Any]
    claim_call: Optional[Dict[str, Any]] = None


@dataclass
class GameStatus:
    """Status observável de um jogo."""

    message: str = "pending"
    wait_until: Optional[datetime] = None


@dataclass
class GameState:
    """Estado de um jogo dentro do ciclo de uma conta."""

    limited: bool = False
    status: GameStatus = field(default_factory=GameStatus)
    plays: int = 0
    last_outcome: Optional[PlayOutcome] = None

    def mark_limited(self, message: str) -> None:
        # Sticky: uma vez limitado, o jogo é ignorado até o fim do ciclo
        self.limited = True
        self.status.message = message
