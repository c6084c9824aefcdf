"""Serviços do núcleo (casos de uso)."""

from sonix.core.services.base_service import BaseService
from sonix.core.services.rpc_client import RelayRpcClient
from sonix.core.services.session_manager_service import SessionManagerService, parse_typed_message
from sonix.core.services.points_tracker_service import PointsTrackerService
from sonix.core.services.game_orchestrator_service import (
    GameOrchestratorService,
    build_game_definitions,
    classify_play_response,
)
from sonix.core.services.profile_service import ArcadeProfileService
from sonix.core.services.account_runtime import AccountRuntime
from sonix.core.services.scheduler_service import SchedulerService
from sonix.core.services.smart_address_service import SmartAddressResult, SmartAddressService

__all__ = [
    "BaseService",
    "RelayRpcClient",
    "SessionManagerService",
    "parse_typed_message",
    "PointsTrackerService",
    "GameOrchestratorService",
    "build_game_definitions",
    "classify_play_response",
    "ArcadeProfileService",
    "AccountRuntime",
    "SchedulerService",
    "SmartAddressResult",
    "SmartAddressService",
]
