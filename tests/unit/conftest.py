"""In-memory repository fakes and fixtures shared by the service tests."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime, timedelta

import pytest

from netwatch.config import Settings
from netwatch.domain import models as dm
from netwatch.services.errors import DuplicateRecordError, NotFoundError, StaleRecordError

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class SequentialIds:
    def __init__(self, prefix: str = "id"):
        self._counter = itertools.count(1)
        self._prefix = prefix

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


class _MemoryStore:
    unique_fields: tuple[str, ...] = ()

    def __init__(self):
        self.items: dict[str, object] = {}

    def _check_unique(self, item) -> None:
        for existing in self.items.values():
            if existing.id == item.id:
                continue
            for field in self.unique_fields:
                value = getattr(item, field)
                if value is not None and getattr(existing, field) == value:
                    raise DuplicateRecordError(f"duplicate {field}")

    def get(self, item_id):
        return self.items.get(item_id)

    def add(self, item):
        if item.id in self.items:
            raise DuplicateRecordError("duplicate id")
        self._check_unique(item)
        self.items[item.id] = item
        return item

    def update(self, item):
        if item.id not in self.items:
            raise NotFoundError(f"{item.id} not found")
        self._check_unique(item)
        self.items[item.id] = item
        return item

    def _where(self, **criteria):
        return [
            item
            for item in self.items.values()
            if all(getattr(item, key) == value for key, value in criteria.items())
        ]


class MemoryUserRepository(_MemoryStore):
    unique_fields = ("username", "email")

    def get_by_username(self, username):
        return next(iter(self._where(username=username)), None)

    def get_by_email(self, email):
        return next(iter(self._where(email=email)), None)


class MemoryPlayerRepository(_MemoryStore):
    unique_fields = ("user_id",)

    def get_by_user_id(self, user_id):
        return next(iter(self._where(user_id=user_id)), None)


class MemoryComputerRepository(_MemoryStore):
    unique_fields = ("ip_address",)

    def __init__(self):
        super().__init__()
        self.exists_calls: list[str] = []

    def ip_address_exists(self, ip_address):
        self.exists_calls.append(ip_address)
        return bool(self._where(ip_address=ip_address))

    def list_by_owner(self, owner_id):
        return self._where(owner_id=owner_id)


class MemoryDefenseRepository(_MemoryStore):
    def add(self, item):
        if self.get_by_computer_and_type(item.computer_id, item.defense_type) is not None:
            raise DuplicateRecordError("duplicate defense type")
        return super().add(item)

    def get_by_computer_and_type(self, computer_id, defense_type):
        return next(iter(self._where(computer_id=computer_id, defense_type=defense_type)), None)

    def list_by_computer(self, computer_id):
        return self._where(computer_id=computer_id)


class MemoryHackOperationRepository(_MemoryStore):
    def update(self, item, *, expected_status):
        stored = self.items.get(item.id)
        if stored is not None and stored.status != expected_status:
            raise StaleRecordError(f"{item.id} is no longer {expected_status}")
        return super().update(item)

    def list_by_attacker(self, attacker_id):
        return self._where(attacker_id=attacker_id)

    def list_by_target(self, computer_id):
        return self._where(target_computer_id=computer_id)

    def find_pending_completions(self, now):
        due = [
            op
            for op in self.items.values()
            if op.status == "in_progress" and op.completion_at <= now
        ]
        return sorted(due, key=lambda op: op.completion_at)


class MemoryUnlockRepository(_MemoryStore):
    def add(self, item):
        if self.get_by_player_and_key(item.player_id, item.unlock_key) is not None:
            raise DuplicateRecordError("duplicate unlock")
        return super().add(item)

    def get_by_player_and_key(self, player_id, unlock_key):
        return next(iter(self._where(player_id=player_id, unlock_key=unlock_key)), None)

    def list_by_player(self, player_id):
        return self._where(player_id=player_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite:///:memory:",
        hack_duration_seconds=300,
        address_write_retries=3,
        hack_poll_interval_seconds=0.05,
    )


@pytest.fixture
def users() -> MemoryUserRepository:
    return MemoryUserRepository()


@pytest.fixture
def players() -> MemoryPlayerRepository:
    return MemoryPlayerRepository()


@pytest.fixture
def computers() -> MemoryComputerRepository:
    return MemoryComputerRepository()


@pytest.fixture
def defenses() -> MemoryDefenseRepository:
    return MemoryDefenseRepository()


@pytest.fixture
def operations() -> MemoryHackOperationRepository:
    return MemoryHackOperationRepository()


@pytest.fixture
def unlocks() -> MemoryUnlockRepository:
    return MemoryUnlockRepository()


def make_player(
    player_id: str = "player-1",
    user_id: str = "user-1",
    *,
    money: int = 0,
    experience: int = 0,
    energy: int = 100,
    energy_capacity: int = 100,
) -> dm.Player:
    return dm.Player.from_storage(
        id=dm.PlayerID(player_id),
        user_id=dm.UserID(user_id),
        display_name=f"Player {player_id}",
        created_at=T0,
        energy=energy,
        energy_capacity=energy_capacity,
        money=money,
        experience=experience,
        skill_points=0,
    )


def make_computer(
    computer_id: str = "computer-1",
    owner_id: str = "player-1",
    *,
    ip_address: str = "10.0.0.1",
    firewall_level: int = 0,
    is_online: bool = True,
) -> dm.Computer:
    computer = dm.Computer.create(
        dm.ComputerID(computer_id), dm.PlayerID(owner_id), "Box", ip_address, now=T0
    )
    computer = computer.upgrade_firewall(firewall_level)
    return computer if is_online else computer.go_offline()


@pytest.fixture(name="make_player")
def make_player_fixture():
    return make_player


@pytest.fixture(name="make_computer")
def make_computer_fixture():
    return make_computer
