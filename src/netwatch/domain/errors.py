"""Exceptions raised by the NetWatch domain layer.

Every failure is raised synchronously from the operation that detected it.
Validation errors double as ``ValueError`` so callers that only care about
malformed input can catch the builtin.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for all domain rule violations."""


class DomainValidationError(DomainError, ValueError):
    """Malformed input: bad lengths, negative amounts, out-of-range levels."""


class InsufficientFunds(DomainError):
    """A money subtraction would go below zero."""


class InsufficientEnergy(DomainError):
    """An energy consumption exceeds the current pool (or is negative)."""


class InsufficientSkillPoints(DomainError):
    """A skill point spend exceeds the balance (or is negative)."""


class DefenseAtMaxLevel(DomainError):
    """The defense cannot be upgraded any further."""


class InvalidTransition(DomainError):
    """Illegal hack operation lifecycle move."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Invalid transition from {current} to {requested}")
        self.current = current
        self.requested = requested


class AddressSpaceExhausted(DomainError):
    """No free address was found within the allocation attempt budget."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not allocate a unique IP address after {attempts} attempts")
        self.attempts = attempts
