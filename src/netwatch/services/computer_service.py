"""Computer Service for NetWatch.

This module provisions computers (including IP address allocation) and
manages the defenses installed on them.
"""

from __future__ import annotations

import logging
import random

from netwatch.config import Settings, get_settings
from netwatch.domain import models as dm
from netwatch.domain.addressing import allocate_ip_address
from netwatch.domain.enums import DefenseType
from netwatch.domain.errors import AddressSpaceExhausted
from netwatch.domain.rules_config import DEFAULT_RULES, RulesConfig
from netwatch.interfaces import ComputerRepository, DefenseRepository, PlayerRepository
from netwatch.services.errors import (
    ConflictError,
    DuplicateRecordError,
    NotFoundError,
    PermissionDeniedError,
)
from netwatch.utils.clock import Clock, utc_now
from netwatch.utils.ids import IdFactory, new_id
from netwatch.utils.rng import seeded_random

logger = logging.getLogger(__name__)


class ComputerService:
    """Service for computers and their defenses."""

    def __init__(
        self,
        computers: ComputerRepository,
        defenses: DefenseRepository,
        players: PlayerRepository,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        rng: random.Random | None = None,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ):
        self.computers = computers
        self.defenses = defenses
        self.players = players
        self.settings = settings or get_settings()
        self.rules = rules
        self._rng = rng or seeded_random()
        self._clock = clock
        self._new_id = id_factory

    def create_computer(self, owner_id: dm.PlayerID, name: str) -> dm.Computer:
        """Provision a computer with default resources and a fresh IP address.

        The existence check and the insert are not atomic, so a concurrent
        allocation can win the same address.  The storage unique constraint
        rejects the loser, which retries with a newly drawn address up to
        ``Settings.address_write_retries`` times.

        Raises:
            NotFoundError: If the owner does not exist
            AddressSpaceExhausted: If no free address could be drawn, or every
                write attempt collided
        """
        if self.players.get(owner_id) is None:
            raise NotFoundError(f"Player {owner_id} not found")

        retries = self.settings.address_write_retries
        for attempt in range(1, retries + 1):
            try:
                ip_address = allocate_ip_address(
                    self.computers.ip_address_exists, rng=self._rng, rules=self.rules
                )
            except AddressSpaceExhausted as exc:
                logger.error("address space exhausted after %d draws", exc.attempts)
                raise

            computer = dm.Computer.create(
                dm.ComputerID(self._new_id()), owner_id, name, ip_address, now=self._clock()
            )
            try:
                self.computers.add(computer)
            except DuplicateRecordError:
                logger.warning(
                    "address %s taken concurrently (write attempt %d of %d)",
                    ip_address,
                    attempt,
                    retries,
                )
                continue
            logger.info("created computer %s at %s for player %s", computer.id, ip_address, owner_id)
            return computer

        logger.error("gave up storing a computer after %d address collisions", retries)
        raise AddressSpaceExhausted(retries)

    def get_computer(self, computer_id: dm.ComputerID) -> dm.Computer:
        computer = self.computers.get(computer_id)
        if computer is None:
            raise NotFoundError(f"Computer {computer_id} not found")
        return computer

    def list_computers(self, owner_id: dm.PlayerID) -> list[dm.Computer]:
        return list(self.computers.list_by_owner(owner_id))

    def _owned_computer(
        self, computer_id: dm.ComputerID, requesting_player_id: dm.PlayerID
    ) -> dm.Computer:
        computer = self.get_computer(computer_id)
        if computer.owner_id != requesting_player_id:
            logger.warning(
                "player %s refused access to computer %s", requesting_player_id, computer_id
            )
            raise PermissionDeniedError("Not authorized to modify this computer")
        return computer

    def install_defense(
        self,
        computer_id: dm.ComputerID,
        defense_type: DefenseType,
        requesting_player_id: dm.PlayerID,
    ) -> dm.Defense:
        """Install a level 1 defense; at most one defense per type per computer.

        Raises:
            NotFoundError: If the computer does not exist
            PermissionDeniedError: If the requester does not own the computer
            ConflictError: If a defense of this type is already installed
        """
        computer = self._owned_computer(computer_id, requesting_player_id)
        defense_type = DefenseType(defense_type)
        if self.defenses.get_by_computer_and_type(computer.id, defense_type) is not None:
            raise ConflictError(f"{defense_type} already installed on this computer")

        defense = dm.Defense.create(
            dm.DefenseID(self._new_id()), computer.id, defense_type, now=self._clock()
        )
        self.defenses.add(defense)
        logger.info("installed %s on computer %s", defense_type, computer.id)
        return defense

    def upgrade_defense(
        self, defense_id: dm.DefenseID, requesting_player_id: dm.PlayerID
    ) -> dm.Defense:
        """Raise a defense by one level.

        Raises:
            NotFoundError: If the defense or its computer does not exist
            PermissionDeniedError: If the requester does not own the computer
            DefenseAtMaxLevel: If the defense is already at the top level
        """
        defense = self.defenses.get(defense_id)
        if defense is None:
            raise NotFoundError(f"Defense {defense_id} not found")
        self._owned_computer(defense.computer_id, requesting_player_id)

        upgraded = self.defenses.update(defense.upgrade())
        logger.info("upgraded defense %s to level %d", defense_id, upgraded.level)
        return upgraded

    def list_defenses(self, computer_id: dm.ComputerID) -> list[dm.Defense]:
        return list(self.defenses.list_by_computer(computer_id))
