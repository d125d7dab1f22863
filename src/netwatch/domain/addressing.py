"""IP address allocation for newly provisioned computers.

Addresses are drawn uniformly from ``10.[1-255].[1-255].[1-255]`` and checked
against an existence oracle supplied by the caller.  The check-then-act race
between two concurrent allocations is not handled here: persistence must hold
a uniqueness constraint and the caller retries with a fresh address when the
write is rejected.
"""

from __future__ import annotations

import random
from collections.abc import Callable

from netwatch.utils.rng import seeded_random

from .errors import AddressSpaceExhausted
from .rules_config import DEFAULT_RULES, RulesConfig

AddressExists = Callable[[str], bool]


def random_address(rng: random.Random, *, rules: RulesConfig = DEFAULT_RULES) -> str:
    """Draw one candidate address."""

    addressing = rules.addressing
    octets = [rng.randint(addressing.octet_min, addressing.octet_max) for _ in range(3)]
    return ".".join(str(octet) for octet in (addressing.first_octet, *octets))


def allocate_ip_address(
    address_exists: AddressExists,
    *,
    rng: random.Random | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> str:
    """Return an address the oracle reports as free.

    Raises:
        AddressSpaceExhausted: After ``rules.addressing.max_attempts`` taken draws
    """

    rng = rng or seeded_random()
    attempts = rules.addressing.max_attempts
    for _ in range(attempts):
        candidate = random_address(rng, rules=rules)
        if not address_exists(candidate):
            return candidate
    raise AddressSpaceExhausted(attempts)
