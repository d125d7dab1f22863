"""Hack outcome rules.

The state machine in :mod:`netwatch.domain.models` only decides which moves
are legal and when a hack is due.  This module holds the default rule for
*which* terminal state a due hack lands in: a deterministic percentile roll
against the target's firewall and installed defenses.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from netwatch.utils.rng import check_success, generate_seed

from .enums import HackStatus
from .models import Computer, Defense, HackOperation
from .rules_config import DEFAULT_RULES, RulesConfig


@dataclass(frozen=True, slots=True)
class HackOutcome:
    """Resolved result of a due hack."""

    success: bool
    roll: int
    target: int
    chance: float
    detail: str

    @property
    def status(self) -> HackStatus:
        return HackStatus.SUCCEEDED if self.success else HackStatus.FAILED

    def as_result_data(self) -> dict[str, object]:
        return {
            "success": self.success,
            "roll": self.roll,
            "target": self.target,
            "chance": self.chance,
            "detail": self.detail,
        }


def success_chance(
    target: Computer,
    defenses: Iterable[Defense],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Probability that a hack against ``target`` succeeds.

    An unreachable computer (offline or fully firewalled) can never be breached.
    Otherwise the open share of the firewall is multiplied by the miss rate of
    every installed defense, floored at ``rules.hacking.min_success_chance``.
    """

    if not target.is_vulnerable():
        return 0.0
    ceiling = rules.computer.max_firewall_level
    chance = (ceiling - target.firewall_level) / ceiling
    for defense in defenses:
        chance *= 1 - defense.effectiveness / 100
    return max(rules.hacking.min_success_chance, chance)


def resolve_outcome(
    operation: HackOperation,
    target: Computer,
    defenses: Iterable[Defense],
    *,
    rules: RulesConfig = DEFAULT_RULES,
    seed: str | None = None,
) -> HackOutcome:
    """Roll the outcome of ``operation``; does not transition it."""

    chance = success_chance(target, defenses, rules=rules)
    seed_value = seed or generate_seed("hack", operation.id, operation.hack_type)
    check = check_success(seed_value, chance, rules.hacking.outcome_die)
    detail = f"{operation.hack_type} succeeded" if check.success else f"{operation.hack_type} failed"
    return HackOutcome(
        success=check.success,
        roll=check.roll,
        target=check.target,
        chance=chance,
        detail=detail,
    )
