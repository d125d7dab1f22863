"""Utility functions for the NetWatch game system."""

from netwatch.utils.clock import Clock, utc_now
from netwatch.utils.ids import IdFactory, new_id
from netwatch.utils.rng import (
    DiceRoll,
    SuccessCheck,
    check_success,
    generate_seed,
    roll_dice,
    seeded_random,
)

__all__ = [
    "Clock",
    "DiceRoll",
    "IdFactory",
    "SuccessCheck",
    "check_success",
    "generate_seed",
    "new_id",
    "roll_dice",
    "seeded_random",
    "utc_now",
]
