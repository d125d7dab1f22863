"""Seedable randomness for NetWatch.

Two flavours are offered:

* Deterministic rolls derived from a string seed (``generate_seed`` +
  ``roll_dice``/``check_success``), used to resolve hack outcomes so that the
  same operation always resolves the same way and results can be audited.
* ``seeded_random`` which hands out a ``random.Random`` stream for callers
  that need many draws; IP allocation uses it when no generator is injected.

Examples:
    >>> seed = generate_seed("hack", "op-1", "steal_money")
    >>> seed
    'hack:op-1:steal_money'
    >>> roll_dice(seed, "1d100").total == roll_dice(seed, "1d100").total
    True
"""

import hashlib
import random
import re
from dataclasses import dataclass

_DICE_PATTERN = re.compile(r"^(\d+)d(\d+)$")


@dataclass(frozen=True, slots=True)
class DiceRoll:
    """Audit record of a dice roll."""

    notation: str
    rolls: tuple[int, ...]
    total: int
    seed: str


@dataclass(frozen=True, slots=True)
class SuccessCheck:
    """Audit record of a probability check."""

    success: bool
    roll: int
    target: int
    probability: float
    seed: str


def generate_seed(*parts: object) -> str:
    """Join seed components into ``"a:b:c"`` form.

    Raises:
        ValueError: If no components are given
    """
    if not parts:
        raise ValueError("seed requires at least one component")
    return ":".join(str(part) for part in parts)


def _seed_to_int(seed: str) -> int:
    """Convert a seed string to a stable 64-bit integer via SHA-256."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def seeded_random(seed: str | None = None) -> random.Random:
    """Return a ``random.Random``; deterministic when ``seed`` is given."""
    if seed is None:
        return random.Random()
    return random.Random(_seed_to_int(seed))


def parse_dice_notation(notation: str) -> tuple[int, int]:
    """Parse ``"2d6"`` into ``(2, 6)``.

    Raises:
        ValueError: If notation is malformed or values are non-positive
    """
    match = _DICE_PATTERN.match(notation.lower())
    if not match:
        raise ValueError(f"Invalid dice notation: '{notation}'. Expected format: NdM")
    num_dice, num_sides = int(match.group(1)), int(match.group(2))
    if num_dice <= 0 or num_sides <= 0:
        raise ValueError(f"Dice notation must use positive values, got '{notation}'")
    return num_dice, num_sides


def roll_dice(seed: str, notation: str = "1d100") -> DiceRoll:
    """Roll dice deterministically from ``seed``."""
    num_dice, num_sides = parse_dice_notation(notation)
    rng = seeded_random(seed)
    rolls = tuple(rng.randint(1, num_sides) for _ in range(num_dice))
    return DiceRoll(notation=notation, rolls=rolls, total=sum(rolls), seed=seed)


def check_success(seed: str, probability: float, notation: str = "1d100") -> SuccessCheck:
    """Roll ``notation`` and succeed when the total is at most the target.

    The target is ``round(probability * max_roll)`` so that ``1d100`` maps a
    probability directly onto a percentile.

    Raises:
        ValueError: If probability is outside [0.0, 1.0]
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be between 0.0 and 1.0, got {probability}")
    num_dice, num_sides = parse_dice_notation(notation)
    target = round(probability * num_dice * num_sides)
    result = roll_dice(seed, notation)
    return SuccessCheck(
        success=result.total <= target,
        roll=result.total,
        target=target,
        probability=probability,
        seed=seed,
    )
