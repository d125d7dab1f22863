"""Immutable value objects: in-game currency and the action energy pool."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import DomainValidationError, InsufficientEnergy, InsufficientFunds


def _require_int(value: object, label: str) -> int:
    # bool is an int subclass; floats would lose precision on large balances
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainValidationError(f"{label} must be an integer, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True, order=True)
class Money:
    """Non-negative arbitrary-precision amount of currency."""

    amount: int = 0

    def __post_init__(self) -> None:
        _require_int(self.amount, "Money amount")
        if self.amount < 0:
            raise DomainValidationError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Money:
        return cls(0)

    def add(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def subtract(self, other: Money) -> Money:
        if other.amount > self.amount:
            raise InsufficientFunds(
                f"Insufficient funds: balance {self.amount}, required {other.amount}"
            )
        return Money(self.amount - other.amount)

    def is_greater_than(self, other: Money) -> bool:
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: Money) -> bool:
        return self.amount >= other.amount

    def is_equal(self, other: Money) -> bool:
        return self.amount == other.amount

    def __int__(self) -> int:
        return self.amount


@dataclass(frozen=True, slots=True)
class Energy:
    """Bounded action pool: ``0 <= current <= capacity`` and ``capacity > 0``."""

    current: int
    capacity: int

    def __post_init__(self) -> None:
        _require_int(self.current, "Energy")
        _require_int(self.capacity, "Energy capacity")
        if self.current < 0:
            raise DomainValidationError("Energy cannot be negative")
        if self.capacity <= 0:
            raise DomainValidationError("Max energy must be positive")
        if self.current > self.capacity:
            raise DomainValidationError("Energy cannot exceed maximum")

    @classmethod
    def full(cls, capacity: int) -> Energy:
        return cls(capacity, capacity)

    def is_full(self) -> bool:
        return self.current == self.capacity

    def is_empty(self) -> bool:
        return self.current == 0

    def can_consume(self, amount: int) -> bool:
        return 0 < amount <= self.current

    def consume(self, amount: int) -> Energy:
        _require_int(amount, "Energy amount")
        if amount < 0:
            raise InsufficientEnergy("Cannot consume negative energy")
        if amount > self.current:
            raise InsufficientEnergy(
                f"Insufficient energy: have {self.current}, need {amount}"
            )
        return Energy(self.current - amount, self.capacity)

    def regenerate(self, amount: int) -> Energy:
        """Refill by ``amount``, clamped at capacity."""

        _require_int(amount, "Energy amount")
        if amount < 0:
            raise DomainValidationError("Cannot regenerate negative energy")
        return Energy(min(self.current + amount, self.capacity), self.capacity)

    def with_capacity(self, capacity: int) -> Energy:
        """Move the ceiling; current energy is clipped, never raised."""

        _require_int(capacity, "Energy capacity")
        if capacity <= 0:
            raise DomainValidationError("Max energy must be positive")
        return Energy(min(self.current, capacity), capacity)
