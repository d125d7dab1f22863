"""Aggregates describing every NetWatch game entity.

Each aggregate is a frozen dataclass.  Operations never mutate in place: they
return a new instance built with :func:`dataclasses.replace`, which re-runs
``__post_init__`` so every invariant is checked again before the new value
exists.  Two constructors are provided per aggregate:

* ``create`` for brand-new entities (applies defaults, stamps timestamps).
* ``from_storage`` for rehydrating a persisted record from plain values.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import NewType

from netwatch.utils.clock import utc_now

from .enums import DefenseType, HackStatus, HackType, ResourceKind, UnlockType
from .errors import (
    DefenseAtMaxLevel,
    DomainValidationError,
    InsufficientSkillPoints,
    InvalidTransition,
)
from .rules_config import DEFAULT_RULES
from .values import Energy, Money

# --- Strongly typed identifiers -------------------------------------------------

UserID = NewType("UserID", str)
PlayerID = NewType("PlayerID", str)
ComputerID = NewType("ComputerID", str)
DefenseID = NewType("DefenseID", str)
HackOperationID = NewType("HackOperationID", str)
ProgressionUnlockID = NewType("ProgressionUnlockID", str)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
DISPLAY_NAME_MAX_LENGTH = 50


def _non_negative(value: int, message: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainValidationError(f"{message} (expected an integer)")
    if value < 0:
        raise DomainValidationError(message)


# --- User -----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class User:
    """Authentication identity of a human player.

    The password hash is opaque to the domain and is never inspected here.
    """

    id: UserID
    username: str
    password_hash: str
    email: str | None
    created_at: datetime
    last_login_at: datetime | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not USERNAME_MIN_LENGTH <= len(self.username) <= USERNAME_MAX_LENGTH:
            raise DomainValidationError("Username must be 3-20 characters")
        if self.email is not None and not EMAIL_PATTERN.match(self.email):
            raise DomainValidationError("Invalid email format")

    @classmethod
    def create(
        cls,
        id: UserID,
        username: str,
        password_hash: str,
        email: str | None = None,
        *,
        now: datetime | None = None,
    ) -> User:
        return cls(
            id=id,
            username=username,
            password_hash=password_hash,
            email=email or None,
            created_at=now or utc_now(),
        )

    @classmethod
    def from_storage(
        cls,
        id: UserID,
        username: str,
        password_hash: str,
        email: str | None,
        created_at: datetime,
        last_login_at: datetime | None,
        is_active: bool,
    ) -> User:
        return cls(id, username, password_hash, email, created_at, last_login_at, is_active)

    def record_login(self, *, now: datetime | None = None) -> User:
        return replace(self, last_login_at=now or utc_now())

    def suspend(self) -> User:
        return replace(self, is_active=False)

    def activate(self) -> User:
        return replace(self, is_active=True)


# --- Player ---------------------------------------------------------------------


def level_for_experience(experience: int) -> int:
    """``floor(sqrt(experience / 100))`` computed exactly on big integers."""

    unit = DEFAULT_RULES.energy.experience_per_level_unit
    return math.isqrt(experience // unit)


def energy_capacity_for_level(level: int) -> int:
    rules = DEFAULT_RULES.energy
    return rules.base_capacity + level * rules.capacity_per_level


@dataclass(frozen=True, slots=True)
class Player:
    """Game-facing profile of a user; owns the energy pool and the wallet.

    ``level`` is always derived from ``experience``.  Energy capacity is only
    recomputed by :meth:`regenerate_energy` and :meth:`increase_energy_capacity`,
    so a level-up shows up in capacity one step later.
    """

    id: PlayerID
    user_id: UserID
    display_name: str
    energy: Energy
    money: Money
    experience: int
    skill_points: int
    created_at: datetime

    def __post_init__(self) -> None:
        if not 1 <= len(self.display_name) <= DISPLAY_NAME_MAX_LENGTH:
            raise DomainValidationError("Display name must be 1-50 characters")
        _non_negative(self.skill_points, "Skill points cannot be negative")
        _non_negative(self.experience, "Experience cannot be negative")

    @classmethod
    def create(
        cls,
        id: PlayerID,
        user_id: UserID,
        display_name: str,
        *,
        now: datetime | None = None,
    ) -> Player:
        return cls(
            id=id,
            user_id=user_id,
            display_name=display_name,
            energy=Energy.full(DEFAULT_RULES.energy.base_capacity),
            money=Money.zero(),
            experience=0,
            skill_points=0,
            created_at=now or utc_now(),
        )

    @classmethod
    def from_storage(
        cls,
        id: PlayerID,
        user_id: UserID,
        display_name: str,
        created_at: datetime,
        energy: int,
        energy_capacity: int,
        money: int,
        experience: int,
        skill_points: int,
    ) -> Player:
        return cls(
            id=id,
            user_id=user_id,
            display_name=display_name,
            energy=Energy(energy, energy_capacity),
            money=Money(money),
            experience=experience,
            skill_points=skill_points,
            created_at=created_at,
        )

    @property
    def level(self) -> int:
        return level_for_experience(self.experience)

    def can_afford(self, cost: Money) -> bool:
        return self.money.is_greater_than_or_equal(cost)

    def consume_energy(self, amount: int) -> Player:
        return replace(self, energy=self.energy.consume(amount))

    def earn_money(self, amount: Money) -> Player:
        return replace(self, money=self.money.add(amount))

    def spend_money(self, amount: Money) -> Player:
        return replace(self, money=self.money.subtract(amount))

    def gain_experience(self, amount: int) -> Player:
        _non_negative(amount, "Cannot gain negative experience")
        return replace(self, experience=self.experience + amount)

    def regenerate_energy(self, amount: int) -> Player:
        level_before = self.level
        energy = self.energy.regenerate(amount)
        return replace(self, energy=energy.with_capacity(energy_capacity_for_level(level_before)))

    def increase_energy_capacity(self) -> Player:
        capacity = energy_capacity_for_level(self.level + 1)
        return replace(self, energy=self.energy.with_capacity(capacity))

    def add_skill_points(self, amount: int) -> Player:
        _non_negative(amount, "Cannot add negative skill points")
        return replace(self, skill_points=self.skill_points + amount)

    def consume_skill_points(self, amount: int) -> Player:
        if amount < 0 or amount > self.skill_points:
            raise InsufficientSkillPoints(
                f"Insufficient skill points: have {self.skill_points}, need {amount}"
            )
        return replace(self, skill_points=self.skill_points - amount)


# --- Computer -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Computer:
    """Virtual machine owned by a player; the target of hacks."""

    id: ComputerID
    owner_id: PlayerID
    name: str
    ip_address: str
    created_at: datetime
    storage: int
    cpu: int
    memory: int
    is_online: bool = True
    firewall_level: int = 0

    def __post_init__(self) -> None:
        rules = DEFAULT_RULES.computer
        if not 1 <= len(self.name) <= rules.max_name_length:
            raise DomainValidationError("Computer name must be 1-50 characters")
        for label in ("storage", "cpu", "memory"):
            _non_negative(getattr(self, label), "Resources cannot be negative")
        if not 0 <= self.firewall_level <= rules.max_firewall_level:
            raise DomainValidationError("Firewall level must be between 0 and 100")

    @classmethod
    def create(
        cls,
        id: ComputerID,
        owner_id: PlayerID,
        name: str,
        ip_address: str,
        *,
        now: datetime | None = None,
    ) -> Computer:
        rules = DEFAULT_RULES.computer
        return cls(
            id=id,
            owner_id=owner_id,
            name=name,
            ip_address=ip_address,
            created_at=now or utc_now(),
            storage=rules.default_storage,
            cpu=rules.default_cpu,
            memory=rules.default_memory,
        )

    @classmethod
    def from_storage(
        cls,
        id: ComputerID,
        owner_id: PlayerID,
        name: str,
        ip_address: str,
        created_at: datetime,
        storage: int,
        cpu: int,
        memory: int,
        is_online: bool,
        firewall_level: int,
    ) -> Computer:
        return cls(
            id, owner_id, name, ip_address, created_at, storage, cpu, memory,
            is_online, firewall_level,
        )

    def is_vulnerable(self) -> bool:
        return self.is_online and self.firewall_level < DEFAULT_RULES.computer.max_firewall_level

    def go_online(self) -> Computer:
        return replace(self, is_online=True)

    def go_offline(self) -> Computer:
        return replace(self, is_online=False)

    def apply_damage(self, storage: int, cpu: int, memory: int) -> Computer:
        """Subtract damage from each resource; every counter floors at zero."""

        for amount in (storage, cpu, memory):
            _non_negative(amount, "Damage amounts cannot be negative")
        return replace(
            self,
            storage=max(0, self.storage - storage),
            cpu=max(0, self.cpu - cpu),
            memory=max(0, self.memory - memory),
        )

    def upgrade_firewall(self, amount: int) -> Computer:
        _non_negative(amount, "Firewall upgrade amount cannot be negative")
        ceiling = DEFAULT_RULES.computer.max_firewall_level
        return replace(self, firewall_level=min(ceiling, self.firewall_level + amount))

    def upgrade_resource(self, kind: ResourceKind | str, amount: int) -> Computer:
        """Grow one resource counter.

        An unrecognised ``kind`` leaves the computer unchanged rather than
        raising.
        """

        _non_negative(amount, "Upgrade amount cannot be negative")
        if kind not in set(ResourceKind):
            return self
        attribute = str(ResourceKind(kind))
        return replace(self, **{attribute: getattr(self, attribute) + amount})


# --- Defense --------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Defense:
    """Security module attached to a single computer."""

    id: DefenseID
    computer_id: ComputerID
    defense_type: DefenseType
    level: int
    installed_at: datetime

    def __post_init__(self) -> None:
        rules = DEFAULT_RULES.defense
        if not rules.min_level <= self.level <= rules.max_level:
            raise DomainValidationError("Defense level must be between 1 and 5")

    @classmethod
    def create(
        cls,
        id: DefenseID,
        computer_id: ComputerID,
        defense_type: DefenseType,
        *,
        now: datetime | None = None,
    ) -> Defense:
        return cls(id, computer_id, DefenseType(defense_type), 1, now or utc_now())

    @classmethod
    def from_storage(
        cls,
        id: DefenseID,
        computer_id: ComputerID,
        defense_type: DefenseType,
        level: int,
        installed_at: datetime,
    ) -> Defense:
        return cls(id, computer_id, DefenseType(defense_type), level, installed_at)

    @property
    def effectiveness(self) -> int:
        rules = DEFAULT_RULES.defense
        return rules.base_effectiveness + (self.level - 1) * rules.effectiveness_per_level

    def can_upgrade(self) -> bool:
        return self.level < DEFAULT_RULES.defense.max_level

    def upgrade(self) -> Defense:
        if not self.can_upgrade():
            raise DefenseAtMaxLevel("Defense already at maximum level")
        return replace(self, level=self.level + 1)


# --- HackOperation --------------------------------------------------------------

ALLOWED_TRANSITIONS: Mapping[HackStatus, frozenset[HackStatus]] = {
    HackStatus.PENDING: frozenset({HackStatus.IN_PROGRESS, HackStatus.ABORTED}),
    HackStatus.IN_PROGRESS: frozenset(
        {HackStatus.SUCCEEDED, HackStatus.FAILED, HackStatus.ABORTED}
    ),
    HackStatus.SUCCEEDED: frozenset(),
    HackStatus.FAILED: frozenset(),
    HackStatus.ABORTED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


@dataclass(frozen=True, slots=True, eq=False)
class HackOperation:
    """A time-boxed attack of one player against one computer.

    The lifecycle is governed by :data:`ALLOWED_TRANSITIONS`.  The tool list
    keeps its order for auditing, but two operations using the same tools in a
    different order compare equal.
    """

    id: HackOperationID
    attacker_id: PlayerID
    target_computer_id: ComputerID
    status: HackStatus
    hack_type: HackType
    tools_used: tuple[str, ...]
    estimated_duration: int
    started_at: datetime
    completion_at: datetime
    result_data: Mapping[str, object] | None = field(default=None)

    def __post_init__(self) -> None:
        _non_negative(self.estimated_duration, "Estimated duration must be positive")
        if self.estimated_duration == 0:
            raise DomainValidationError("Estimated duration must be positive")
        if self.result_data is not None:
            # each version owns a read-only copy
            object.__setattr__(self, "result_data", MappingProxyType(dict(self.result_data)))
        if self.completion_at <= self.started_at:
            raise DomainValidationError("Completion time must be after start time")
        # Compares a player id with a computer id, so it cannot fire in practice.
        # Ownership-based self-hack refusal lives in HackService.initiate_hack.
        if self.attacker_id == self.target_computer_id:
            raise DomainValidationError("Cannot hack own computer")

    @classmethod
    def create(
        cls,
        id: HackOperationID,
        attacker_id: PlayerID,
        target_computer_id: ComputerID,
        hack_type: HackType,
        tools_used: Iterable[str],
        estimated_duration: int,
        *,
        now: datetime | None = None,
    ) -> HackOperation:
        started_at = now or utc_now()
        return cls(
            id=id,
            attacker_id=attacker_id,
            target_computer_id=target_computer_id,
            status=HackStatus.PENDING,
            hack_type=HackType(hack_type),
            tools_used=tuple(tools_used),
            estimated_duration=estimated_duration,
            started_at=started_at,
            completion_at=started_at + timedelta(seconds=estimated_duration),
        )

    @classmethod
    def from_storage(
        cls,
        id: HackOperationID,
        attacker_id: PlayerID,
        target_computer_id: ComputerID,
        status: HackStatus,
        hack_type: HackType,
        tools_used: Iterable[str],
        estimated_duration: int,
        started_at: datetime,
        completion_at: datetime,
        result_data: Mapping[str, object] | None,
    ) -> HackOperation:
        return cls(
            id=id,
            attacker_id=attacker_id,
            target_computer_id=target_computer_id,
            status=HackStatus(status),
            hack_type=HackType(hack_type),
            tools_used=tuple(tools_used),
            estimated_duration=estimated_duration,
            started_at=started_at,
            completion_at=completion_at,
            result_data=dict(result_data) if result_data is not None else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HackOperation):
            return NotImplemented
        return self._comparison_key() == other._comparison_key()

    __hash__ = None  # type: ignore[assignment]

    def _comparison_key(self) -> tuple[object, ...]:
        return (
            self.id,
            self.attacker_id,
            self.target_computer_id,
            self.status,
            self.hack_type,
            Counter(self.tools_used),
            self.estimated_duration,
            self.started_at,
            self.completion_at,
            self.result_data,
        )

    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def is_ready(self, now: datetime | None = None) -> bool:
        """True once the scheduled completion time has passed."""

        return (now or utc_now()) >= self.completion_at

    def can_transition(self, new_status: HackStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def transition(
        self,
        new_status: HackStatus,
        result_data: Mapping[str, object] | None = None,
    ) -> HackOperation:
        """Move to ``new_status``; prior result data survives when none is given."""

        new_status = HackStatus(new_status)
        if not self.can_transition(new_status):
            raise InvalidTransition(str(self.status), str(new_status))
        data = dict(result_data) if result_data is not None else self.result_data
        return replace(self, status=new_status, result_data=data)


# --- ProgressionUnlock ----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ProgressionUnlock:
    """Record that a player has been granted a capability.

    Eligibility is decided by the application layer; this only stores the grant.
    """

    id: ProgressionUnlockID
    player_id: PlayerID
    unlock_type: UnlockType
    unlock_key: str
    unlocked_at: datetime

    def __post_init__(self) -> None:
        if not self.unlock_key:
            raise DomainValidationError("Unlock key cannot be empty")
        if len(self.unlock_key) > DEFAULT_RULES.progression.max_key_length:
            raise DomainValidationError("Unlock key must be at most 50 characters")

    @classmethod
    def create(
        cls,
        id: ProgressionUnlockID,
        player_id: PlayerID,
        unlock_type: UnlockType,
        unlock_key: str,
        *,
        now: datetime | None = None,
    ) -> ProgressionUnlock:
        return cls(id, player_id, UnlockType(unlock_type), unlock_key, now or utc_now())

    @classmethod
    def from_storage(
        cls,
        id: ProgressionUnlockID,
        player_id: PlayerID,
        unlock_type: UnlockType,
        unlock_key: str,
        unlocked_at: datetime,
    ) -> ProgressionUnlock:
        return cls(id, player_id, UnlockType(unlock_type), unlock_key, unlocked_at)
