"""Hack Outcome Policy Protocol Interface.

The hack state machine only enforces legal transitions; deciding whether a
due hack succeeds is a pluggable policy supplied to the hack service.
"""

from collections.abc import Sequence
from typing import Protocol

from netwatch.domain import models as dm
from netwatch.domain.hacking import HackOutcome


class IHackOutcomePolicy(Protocol):
    """Protocol for deciding the result of a hack that has become due."""

    def decide(
        self,
        operation: dm.HackOperation,
        target: dm.Computer,
        defenses: Sequence[dm.Defense],
    ) -> HackOutcome:
        """Return the outcome for ``operation``.

        Args:
            operation: The in-progress operation that is ready
            target: The targeted computer as currently stored
            defenses: Defenses installed on the target

        Returns:
            HackOutcome whose ``status`` is the terminal state to move to
        """
        ...
