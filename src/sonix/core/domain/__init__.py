"""Domain entities for the Sonix project."""

from sonix.core.domain.account import Conta, Wallet, SecretKind, detect_secret_kind, mask_secret
from sonix.core.domain.game import GameDefinition, GameState, GameStatus, PlayOutcome
from sonix.core.domain.points import Points
from sonix.core.domain.session import SessionStage, SessionState, TypedData
from sonix.core.domain.relay import RelayResponse, TransportResponse
from sonix.core.domain.execution import EtapaResult, CicloResult

__all__ = [
    "Conta",
    "Wallet",
    "SecretKind",
    "detect_secret_kind",
    "mask_secret",
    "GameDefinition",
    "GameState",
    "GameStatus",
    "PlayOutcome",
    "Points",
    "SessionStage",
    "SessionState",
    "TypedData",
    "RelayResponse",
    "TransportResponse",
    "EtapaResult",
    "CicloResult",
]
