"""Eligibility rules for progression unlocks.

These are policy checks applied before a grant is recorded; the
:class:`~netwatch.domain.models.ProgressionUnlock` aggregate itself never
decides eligibility.
"""

from __future__ import annotations

from .enums import UnlockType
from .models import Player
from .rules_config import DEFAULT_RULES, RulesConfig
from .values import Money


def unmet_requirement(
    player: Player,
    unlock_type: UnlockType,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> str | None:
    """Return a human-readable reason the player is not eligible, or ``None``."""

    progression = rules.progression
    if unlock_type == UnlockType.TOOL and player.level < progression.tool_min_level:
        return f"Requires level {progression.tool_min_level} or higher"
    if unlock_type == UnlockType.DEFENSE and not player.can_afford(
        Money(progression.defense_min_money)
    ):
        return f"Requires at least {progression.defense_min_money} money"
    return None
