"""Application services for NetWatch.

Services load aggregates through repository protocols, apply domain rules and
save the results.  Use :mod:`netwatch.factory` to wire them onto a database
session, or pass protocol-based fakes in tests.
"""

from netwatch.services.computer_service import ComputerService
from netwatch.services.errors import (
    ConflictError,
    DuplicateRecordError,
    NotFoundError,
    PermissionDeniedError,
    RequirementNotMetError,
    ServiceError,
    StaleRecordError,
)
from netwatch.services.hack_service import DefenseWeightedOutcome, HackService
from netwatch.services.identity_service import IdentityService
from netwatch.services.monitor import HackMonitor
from netwatch.services.player_service import PlayerService
from netwatch.services.progression_service import ProgressionService

__all__ = [
    "ComputerService",
    "ConflictError",
    "DefenseWeightedOutcome",
    "DuplicateRecordError",
    "HackMonitor",
    "HackService",
    "IdentityService",
    "NotFoundError",
    "PermissionDeniedError",
    "PlayerService",
    "ProgressionService",
    "RequirementNotMetError",
    "ServiceError",
    "StaleRecordError",
]
