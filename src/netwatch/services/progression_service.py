"""Progression Service for NetWatch.

Grants unlocks to players after checking for duplicates and applying the
eligibility rules in :mod:`netwatch.domain.progression`.
"""

from __future__ import annotations

import logging

from netwatch.domain import models as dm
from netwatch.domain.enums import UnlockType
from netwatch.domain.progression import unmet_requirement
from netwatch.domain.rules_config import DEFAULT_RULES, RulesConfig
from netwatch.interfaces import PlayerRepository, ProgressionUnlockRepository
from netwatch.services.errors import ConflictError, NotFoundError, RequirementNotMetError
from netwatch.utils.clock import Clock, utc_now
from netwatch.utils.ids import IdFactory, new_id

logger = logging.getLogger(__name__)


class ProgressionService:
    def __init__(
        self,
        unlocks: ProgressionUnlockRepository,
        players: PlayerRepository,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ):
        self.unlocks = unlocks
        self.players = players
        self.rules = rules
        self._clock = clock
        self._new_id = id_factory

    def unlock(
        self, player_id: dm.PlayerID, unlock_type: UnlockType, unlock_key: str
    ) -> dm.ProgressionUnlock:
        """Grant ``unlock_key`` to a player.

        Raises:
            NotFoundError: If the player does not exist
            ConflictError: If the player already holds this unlock
            RequirementNotMetError: If the player is not eligible yet
        """
        player = self.players.get(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")
        if self.unlocks.get_by_player_and_key(player_id, unlock_key) is not None:
            raise ConflictError(f"Already unlocked: {unlock_key}")

        unlock_type = UnlockType(unlock_type)
        reason = unmet_requirement(player, unlock_type, rules=self.rules)
        if reason is not None:
            logger.warning("unlock %r refused for player %s: %s", unlock_key, player_id, reason)
            raise RequirementNotMetError(reason)

        unlock = dm.ProgressionUnlock.create(
            dm.ProgressionUnlockID(self._new_id()),
            player_id,
            unlock_type,
            unlock_key,
            now=self._clock(),
        )
        self.unlocks.add(unlock)
        logger.info("player %s unlocked %s %r", player_id, unlock_type, unlock_key)
        return unlock

    def list_unlocks(self, player_id: dm.PlayerID) -> list[dm.ProgressionUnlock]:
        return list(self.unlocks.list_by_player(player_id))
