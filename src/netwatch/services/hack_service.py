"""Hack Service for NetWatch.

This service drives hack operations through their lifecycle:

- Initiating a hack against another player's computer
- Starting and aborting operations
- Resolving operations whose completion time has passed

Whether a due hack succeeds is decided by an :class:`IHackOutcomePolicy`.
The default, :class:`DefenseWeightedOutcome`, rolls a deterministic d100
against the target's firewall and installed defenses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from netwatch.config import Settings, get_settings
from netwatch.domain import models as dm
from netwatch.domain.enums import HackStatus, HackType
from netwatch.domain.hacking import HackOutcome, resolve_outcome
from netwatch.domain.rules_config import DEFAULT_RULES, RulesConfig
from netwatch.interfaces import (
    ComputerRepository,
    DefenseRepository,
    HackOperationRepository,
    IHackOutcomePolicy,
    PlayerRepository,
)
from netwatch.services.errors import NotFoundError, PermissionDeniedError, StaleRecordError
from netwatch.utils.clock import Clock, utc_now
from netwatch.utils.ids import IdFactory, new_id

logger = logging.getLogger(__name__)


class DefenseWeightedOutcome:
    """Default outcome policy: seeded percentile roll against the target's defenses."""

    def __init__(self, rules: RulesConfig = DEFAULT_RULES):
        self.rules = rules

    def decide(
        self,
        operation: dm.HackOperation,
        target: dm.Computer,
        defenses: Sequence[dm.Defense],
    ) -> HackOutcome:
        return resolve_outcome(operation, target, defenses, rules=self.rules)


class HackService:
    """Service for the hack operation lifecycle."""

    def __init__(
        self,
        operations: HackOperationRepository,
        computers: ComputerRepository,
        defenses: DefenseRepository,
        players: PlayerRepository,
        *,
        policy: IHackOutcomePolicy | None = None,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ):
        self.operations = operations
        self.computers = computers
        self.defenses = defenses
        self.players = players
        self.policy = policy or DefenseWeightedOutcome(rules)
        self.settings = settings or get_settings()
        self._clock = clock
        self._new_id = id_factory

    def initiate_hack(
        self,
        attacker_id: dm.PlayerID,
        target_computer_id: dm.ComputerID,
        hack_type: HackType,
        tools: Iterable[str] = (),
    ) -> dm.HackOperation:
        """Queue a pending hack against another player's computer.

        Args:
            attacker_id: Player launching the hack
            target_computer_id: Computer under attack
            hack_type: Goal of the hack
            tools: Tool keys used, in order

        Returns:
            The stored pending operation

        Raises:
            NotFoundError: If the attacker or the target does not exist
            PermissionDeniedError: If the attacker owns the target computer
        """
        if self.players.get(attacker_id) is None:
            raise NotFoundError(f"Player {attacker_id} not found")
        target = self.computers.get(target_computer_id)
        if target is None:
            raise NotFoundError(f"Computer {target_computer_id} not found")
        if target.owner_id == attacker_id:
            logger.warning("player %s tried to hack own computer %s", attacker_id, target.id)
            raise PermissionDeniedError("Cannot hack own computer")

        operation = dm.HackOperation.create(
            dm.HackOperationID(self._new_id()),
            attacker_id,
            target.id,
            HackType(hack_type),
            tools,
            self.settings.hack_duration_seconds,
            now=self._clock(),
        )
        self.operations.add(operation)
        logger.info(
            "player %s initiated %s against computer %s (operation %s)",
            attacker_id,
            operation.hack_type,
            target.id,
            operation.id,
        )
        return operation

    def get_operation(self, operation_id: dm.HackOperationID) -> dm.HackOperation:
        operation = self.operations.get(operation_id)
        if operation is None:
            raise NotFoundError(f"Hack operation {operation_id} not found")
        return operation

    def start_hack(self, operation_id: dm.HackOperationID) -> dm.HackOperation:
        """Move a pending operation to in-progress.

        Raises:
            InvalidTransition: If the operation is not pending
        """
        current = self.get_operation(operation_id)
        operation = current.transition(HackStatus.IN_PROGRESS)
        self.operations.update(operation, expected_status=current.status)
        logger.info("hack operation %s started", operation_id)
        return operation

    def abort_hack(
        self, operation_id: dm.HackOperationID, requesting_player_id: dm.PlayerID
    ) -> dm.HackOperation:
        """Abort a non-terminal operation on behalf of its attacker.

        Raises:
            StaleRecordError: If the operation was resolved concurrently
        """
        operation = self.get_operation(operation_id)
        if operation.attacker_id != requesting_player_id:
            raise PermissionDeniedError("Only the attacker can abort a hack")
        aborted = operation.transition(HackStatus.ABORTED, {"reason": "aborted by attacker"})
        self.operations.update(aborted, expected_status=operation.status)
        logger.info("hack operation %s aborted", operation_id)
        return aborted

    def resolve_due_hacks(self, now: datetime | None = None) -> list[dm.HackOperation]:
        """Finish every in-progress operation whose completion time has passed.

        Args:
            now: Evaluation time; defaults to the service clock

        Returns:
            The operations moved to a terminal state, in completion order
        """
        now = now or self._clock()
        resolved: list[dm.HackOperation] = []
        for operation in self.operations.find_pending_completions(now):
            target = self.computers.get(operation.target_computer_id)
            if target is None:
                logger.warning(
                    "target %s of hack operation %s no longer exists",
                    operation.target_computer_id,
                    operation.id,
                )
                finished = operation.transition(
                    HackStatus.FAILED, {"success": False, "detail": "target no longer exists"}
                )
            else:
                defenses = list(self.defenses.list_by_computer(target.id))
                outcome = self.policy.decide(operation, target, defenses)
                finished = operation.transition(outcome.status, outcome.as_result_data())
            try:
                self.operations.update(finished, expected_status=operation.status)
            except StaleRecordError:
                logger.warning(
                    "hack operation %s changed while resolving; skipped", operation.id
                )
                continue
            logger.info("hack operation %s resolved as %s", finished.id, finished.status)
            resolved.append(finished)
        return resolved

    def list_attacks(self, attacker_id: dm.PlayerID) -> list[dm.HackOperation]:
        return list(self.operations.list_by_attacker(attacker_id))

    def list_incoming(self, computer_id: dm.ComputerID) -> list[dm.HackOperation]:
        return list(self.operations.list_by_target(computer_id))
