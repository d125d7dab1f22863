"""Protocol-based interfaces for NetWatch collaborators.

This module exports the repository contracts and the hack outcome policy
contract, enabling dependency injection and protocol-based fakes in tests.
"""

from netwatch.interfaces.hacking import IHackOutcomePolicy
from netwatch.interfaces.repositories import (
    ComputerRepository,
    DefenseRepository,
    HackOperationRepository,
    PlayerRepository,
    ProgressionUnlockRepository,
    UserRepository,
)

__all__ = [
    "ComputerRepository",
    "DefenseRepository",
    "HackOperationRepository",
    "IHackOutcomePolicy",
    "PlayerRepository",
    "ProgressionUnlockRepository",
    "UserRepository",
]
