"""
Entidades de Estado da Sessão.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class SessionStage(IntEnum):
    """Etapas do estabelecimento da sessão, em ordem obrigatória."""

    DISCONNECTED = 0
    CONNECTED = 1
    SESSION_CREATED = 2
    PERMIT_REQUESTED = 3
    PERMIT_SIGNED = 4
    PERMIT_SUBMITTED = 5


@dataclass(frozen=True)
class TypedData:
    """Mensagem tipada (EIP-712) devolvida pelo relay."""

    domain: Dict[str, Any]
    types: Dict[str, Any]
    message: Dict[str, Any]


@dataclass
class SessionState:
    """Estado da sessão de uma conta no relay."""

    stage: SessionStage = SessionStage.DISCONNECTED
    owner: Optional[str] = None
    expires_at_ms: Optional[int] = None
    typed_data: Optional[TypedData] = None
    permit_signature: Optional[str] = None
    part: Optional[str] = field(default=None, repr=False)

    @property
    def has_capability(self) -> bool:
        return self.stage is SessionStage.PERMIT_SUBMITTED and bool(self.part)

    def reset_permit(self) -> None:
        self.typed_data = None
        self.permit_signature = None
        self.part = None
