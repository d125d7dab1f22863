"""Repository protocols consumed by the application services.

Implementations translate between storage and the domain aggregates in
:mod:`netwatch.domain.models`.  Writes must raise
:class:`~netwatch.services.errors.DuplicateRecordError` when a uniqueness
rule (username, email, IP address, defense type per computer, unlock key per
player) is violated.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from netwatch.domain import models as dm
from netwatch.domain.enums import DefenseType, HackStatus


class UserRepository(Protocol):
    """Persistence for user accounts."""

    def get(self, user_id: dm.UserID) -> dm.User | None:
        ...

    def get_by_username(self, username: str) -> dm.User | None:
        ...

    def get_by_email(self, email: str) -> dm.User | None:
        ...

    def add(self, user: dm.User) -> dm.User:
        ...

    def update(self, user: dm.User) -> dm.User:
        ...


class PlayerRepository(Protocol):
    """Persistence for player profiles."""

    def get(self, player_id: dm.PlayerID) -> dm.Player | None:
        ...

    def get_by_user_id(self, user_id: dm.UserID) -> dm.Player | None:
        ...

    def add(self, player: dm.Player) -> dm.Player:
        ...

    def update(self, player: dm.Player) -> dm.Player:
        ...


class ComputerRepository(Protocol):
    """Persistence for computers; also the IP existence oracle."""

    def get(self, computer_id: dm.ComputerID) -> dm.Computer | None:
        ...

    def ip_address_exists(self, ip_address: str) -> bool:
        """Return True when a computer already holds ``ip_address``."""

        ...

    def list_by_owner(self, owner_id: dm.PlayerID) -> Sequence[dm.Computer]:
        ...

    def add(self, computer: dm.Computer) -> dm.Computer:
        ...

    def update(self, computer: dm.Computer) -> dm.Computer:
        ...


class DefenseRepository(Protocol):
    """Persistence for installed defenses."""

    def get(self, defense_id: dm.DefenseID) -> dm.Defense | None:
        ...

    def get_by_computer_and_type(
        self, computer_id: dm.ComputerID, defense_type: DefenseType
    ) -> dm.Defense | None:
        ...

    def list_by_computer(self, computer_id: dm.ComputerID) -> Sequence[dm.Defense]:
        ...

    def add(self, defense: dm.Defense) -> dm.Defense:
        ...

    def update(self, defense: dm.Defense) -> dm.Defense:
        ...


class HackOperationRepository(Protocol):
    """Persistence for hack operations."""

    def get(self, operation_id: dm.HackOperationID) -> dm.HackOperation | None:
        ...

    def list_by_attacker(self, attacker_id: dm.PlayerID) -> Sequence[dm.HackOperation]:
        ...

    def list_by_target(self, computer_id: dm.ComputerID) -> Sequence[dm.HackOperation]:
        ...

    def find_pending_completions(self, now: datetime) -> Sequence[dm.HackOperation]:
        """Return in-progress operations whose completion time is at or before ``now``."""

        ...

    def add(self, operation: dm.HackOperation) -> dm.HackOperation:
        ...

    def update(
        self, operation: dm.HackOperation, *, expected_status: HackStatus
    ) -> dm.HackOperation:
        """Save ``operation`` only if the stored status still equals ``expected_status``.

        Raises:
            StaleRecordError: If another writer moved the operation first
            NotFoundError: If the operation was never stored
        """

        ...


class ProgressionUnlockRepository(Protocol):
    """Persistence for progression unlocks."""

    def get_by_player_and_key(
        self, player_id: dm.PlayerID, unlock_key: str
    ) -> dm.ProgressionUnlock | None:
        ...

    def list_by_player(self, player_id: dm.PlayerID) -> Sequence[dm.ProgressionUnlock]:
        ...

    def add(self, unlock: dm.ProgressionUnlock) -> dm.ProgressionUnlock:
        ...
