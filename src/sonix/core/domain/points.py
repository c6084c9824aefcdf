"""
Entidades de pontuação.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Points:
    """Snapshot dos pontos do jogador (hoje e total)."""

    today: Optional[float] = None
    total: Optional[float] = None
    updated_at: Optional[datetime] = None

    @property
    def is_known(self) -> bool:
        return self.updated_at is not None
