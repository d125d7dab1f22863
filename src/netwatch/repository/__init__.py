"""SQLAlchemy persistence for the NetWatch aggregates."""

from .sql_store import (
    SqlComputerRepository,
    SqlDefenseRepository,
    SqlHackOperationRepository,
    SqlPlayerRepository,
    SqlProgressionUnlockRepository,
    SqlUserRepository,
)

__all__ = [
    "SqlComputerRepository",
    "SqlDefenseRepository",
    "SqlHackOperationRepository",
    "SqlPlayerRepository",
    "SqlProgressionUnlockRepository",
    "SqlUserRepository",
]
