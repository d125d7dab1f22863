"""SQLAlchemy-backed repositories for the NetWatch aggregates.

Each write is committed on its own; a uniqueness violation rolls the session
back and surfaces as :class:`DuplicateRecordError` so callers can react (for
example by allocating a fresh IP address).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from netwatch import models as orm
from netwatch.domain import models as dm
from netwatch.domain.enums import DefenseType, HackStatus
from netwatch.repository import mappers
from netwatch.services.errors import DuplicateRecordError, NotFoundError, StaleRecordError

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=orm.Base)


class _SqlRepository:
    """Shared insert/update plumbing."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _commit(self, description: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.debug("integrity error while saving %s: %s", description, exc.orig)
            raise DuplicateRecordError(f"{description} conflicts with an existing record") from exc

    def _insert(self, row_type: type[RowT], values: dict[str, Any], description: str) -> None:
        self.session.add(row_type(**values))
        self._commit(description)

    def _update(self, row_type: type[RowT], values: dict[str, Any], description: str) -> None:
        row = self.session.get(row_type, values["id"])
        if row is None:
            raise NotFoundError(f"{description} not found")
        for column, value in values.items():
            setattr(row, column, value)
        self._commit(description)

    def _one(self, statement: Any, to_domain: Callable[[Any], Any]) -> Any:
        row = self.session.scalars(statement).first()
        return to_domain(row) if row is not None else None

    def _many(self, statement: Any, to_domain: Callable[[Any], Any]) -> list[Any]:
        return [to_domain(row) for row in self.session.scalars(statement)]


class SqlUserRepository(_SqlRepository):
    """User accounts stored in the ``users`` table."""

    def get(self, user_id: dm.UserID) -> dm.User | None:
        row = self.session.get(orm.User, user_id)
        return mappers.user_to_domain(row) if row is not None else None

    def get_by_username(self, username: str) -> dm.User | None:
        stmt = select(orm.User).where(orm.User.username == username)
        return self._one(stmt, mappers.user_to_domain)

    def get_by_email(self, email: str) -> dm.User | None:
        stmt = select(orm.User).where(orm.User.email == email)
        return self._one(stmt, mappers.user_to_domain)

    def add(self, user: dm.User) -> dm.User:
        self._insert(orm.User, mappers.user_to_columns(user), f"user {user.username!r}")
        return user

    def update(self, user: dm.User) -> dm.User:
        self._update(orm.User, mappers.user_to_columns(user), f"user {user.id}")
        return user


class SqlPlayerRepository(_SqlRepository):
    """Player profiles stored in the ``players`` table."""

    def get(self, player_id: dm.PlayerID) -> dm.Player | None:
        row = self.session.get(orm.Player, player_id)
        return mappers.player_to_domain(row) if row is not None else None

    def get_by_user_id(self, user_id: dm.UserID) -> dm.Player | None:
        stmt = select(orm.Player).where(orm.Player.user_id == user_id)
        return self._one(stmt, mappers.player_to_domain)

    def add(self, player: dm.Player) -> dm.Player:
        self._insert(orm.Player, mappers.player_to_columns(player), f"player for user {player.user_id}")
        return player

    def update(self, player: dm.Player) -> dm.Player:
        self._update(orm.Player, mappers.player_to_columns(player), f"player {player.id}")
        return player


class SqlComputerRepository(_SqlRepository):
    """Computers stored in the ``computers`` table."""

    def get(self, computer_id: dm.ComputerID) -> dm.Computer | None:
        row = self.session.get(orm.Computer, computer_id)
        return mappers.computer_to_domain(row) if row is not None else None

    def ip_address_exists(self, ip_address: str) -> bool:
        stmt = select(exists().where(orm.Computer.ip_address == ip_address))
        return bool(self.session.scalar(stmt))

    def list_by_owner(self, owner_id: dm.PlayerID) -> list[dm.Computer]:
        stmt = (
            select(orm.Computer)
            .where(orm.Computer.owner_id == owner_id)
            .order_by(orm.Computer.created_at)
        )
        return self._many(stmt, mappers.computer_to_domain)

    def add(self, computer: dm.Computer) -> dm.Computer:
        self._insert(
            orm.Computer, mappers.computer_to_columns(computer), f"computer at {computer.ip_address}"
        )
        return computer

    def update(self, computer: dm.Computer) -> dm.Computer:
        self._update(orm.Computer, mappers.computer_to_columns(computer), f"computer {computer.id}")
        return computer


class SqlDefenseRepository(_SqlRepository):
    """Defenses stored in the ``defenses`` table."""

    def get(self, defense_id: dm.DefenseID) -> dm.Defense | None:
        row = self.session.get(orm.Defense, defense_id)
        return mappers.defense_to_domain(row) if row is not None else None

    def get_by_computer_and_type(
        self, computer_id: dm.ComputerID, defense_type: DefenseType
    ) -> dm.Defense | None:
        stmt = select(orm.Defense).where(
            orm.Defense.computer_id == computer_id,
            orm.Defense.defense_type == str(defense_type),
        )
        return self._one(stmt, mappers.defense_to_domain)

    def list_by_computer(self, computer_id: dm.ComputerID) -> list[dm.Defense]:
        stmt = (
            select(orm.Defense)
            .where(orm.Defense.computer_id == computer_id)
            .order_by(orm.Defense.installed_at)
        )
        return self._many(stmt, mappers.defense_to_domain)

    def add(self, defense: dm.Defense) -> dm.Defense:
        self._insert(
            orm.Defense,
            mappers.defense_to_columns(defense),
            f"{defense.defense_type} defense on computer {defense.computer_id}",
        )
        return defense

    def update(self, defense: dm.Defense) -> dm.Defense:
        self._update(orm.Defense, mappers.defense_to_columns(defense), f"defense {defense.id}")
        return defense


class SqlHackOperationRepository(_SqlRepository):
    """Hack operations stored in the ``hack_operations`` table."""

    def get(self, operation_id: dm.HackOperationID) -> dm.HackOperation | None:
        row = self.session.get(orm.HackOperation, operation_id)
        return mappers.hack_operation_to_domain(row) if row is not None else None

    def list_by_attacker(self, attacker_id: dm.PlayerID) -> list[dm.HackOperation]:
        stmt = (
            select(orm.HackOperation)
            .where(orm.HackOperation.attacker_id == attacker_id)
            .order_by(orm.HackOperation.started_at.desc())
        )
        return self._many(stmt, mappers.hack_operation_to_domain)

    def list_by_target(self, computer_id: dm.ComputerID) -> list[dm.HackOperation]:
        stmt = (
            select(orm.HackOperation)
            .where(orm.HackOperation.target_computer_id == computer_id)
            .order_by(orm.HackOperation.started_at.desc())
        )
        return self._many(stmt, mappers.hack_operation_to_domain)

    def find_pending_completions(self, now: datetime) -> list[dm.HackOperation]:
        stmt = (
            select(orm.HackOperation)
            .where(orm.HackOperation.status == str(HackStatus.IN_PROGRESS))
            .order_by(orm.HackOperation.completion_at)
        )
        operations = self._many(stmt, mappers.hack_operation_to_domain)
        # filtered in Python: SQLite drops tz info, so compare normalised values
        return [operation for operation in operations if operation.is_ready(now)]

    def add(self, operation: dm.HackOperation) -> dm.HackOperation:
        self._insert(
            orm.HackOperation,
            mappers.hack_operation_to_columns(operation),
            f"hack operation {operation.id}",
        )
        return operation

    def update(
        self, operation: dm.HackOperation, *, expected_status: HackStatus
    ) -> dm.HackOperation:
        """Compare-and-set on the stored status."""
        stmt = (
            update(orm.HackOperation)
            .where(
                orm.HackOperation.id == operation.id,
                orm.HackOperation.status == str(expected_status),
            )
            .values(mappers.hack_operation_to_columns(operation))
        )
        matched = self.session.execute(stmt).rowcount
        if matched == 0:
            self.session.rollback()
            if self.get(operation.id) is None:
                raise NotFoundError(f"hack operation {operation.id} not found")
            raise StaleRecordError(
                f"hack operation {operation.id} is no longer {expected_status}"
            )
        self._commit(f"hack operation {operation.id}")
        return operation


class SqlProgressionUnlockRepository(_SqlRepository):
    """Progression unlocks stored in the ``progression_unlocks`` table."""

    def get_by_player_and_key(
        self, player_id: dm.PlayerID, unlock_key: str
    ) -> dm.ProgressionUnlock | None:
        stmt = select(orm.ProgressionUnlock).where(
            orm.ProgressionUnlock.player_id == player_id,
            orm.ProgressionUnlock.unlock_key == unlock_key,
        )
        return self._one(stmt, mappers.unlock_to_domain)

    def list_by_player(self, player_id: dm.PlayerID) -> list[dm.ProgressionUnlock]:
        stmt = (
            select(orm.ProgressionUnlock)
            .where(orm.ProgressionUnlock.player_id == player_id)
            .order_by(orm.ProgressionUnlock.unlocked_at)
        )
        return self._many(stmt, mappers.unlock_to_domain)

    def add(self, unlock: dm.ProgressionUnlock) -> dm.ProgressionUnlock:
        self._insert(
            orm.ProgressionUnlock,
            mappers.unlock_to_columns(unlock),
            f"unlock {unlock.unlock_key!r} for player {unlock.player_id}",
        )
        return unlock
