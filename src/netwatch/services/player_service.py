"""Player profile management: creation, energy and experience."""

from __future__ import annotations

import logging

from netwatch.domain import models as dm
from netwatch.interfaces import PlayerRepository, UserRepository
from netwatch.services.errors import ConflictError, NotFoundError, PermissionDeniedError
from netwatch.utils.clock import Clock, utc_now
from netwatch.utils.ids import IdFactory, new_id

logger = logging.getLogger(__name__)


class PlayerService:
    """Service for player profiles owned by user accounts."""

    def __init__(
        self,
        players: PlayerRepository,
        users: UserRepository,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ):
        self.players = players
        self.users = users
        self._clock = clock
        self._new_id = id_factory

    def create_player(self, user_id: dm.UserID, display_name: str) -> dm.Player:
        """Create the single player profile of a user.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the user already has a player
        """
        if self.users.get(user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        if self.players.get_by_user_id(user_id) is not None:
            logger.warning("user %s already has a player", user_id)
            raise ConflictError("User already has a player")

        player = dm.Player.create(
            dm.PlayerID(self._new_id()), user_id, display_name, now=self._clock()
        )
        self.players.add(player)
        logger.info("created player %s for user %s", player.id, user_id)
        return player

    def get_player(self, player_id: dm.PlayerID) -> dm.Player:
        player = self.players.get(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")
        return player

    def get_profile(self, player_id: dm.PlayerID, requesting_user_id: dm.UserID) -> dm.Player:
        """Return a player's full profile; only its owning user may read it."""
        player = self.get_player(player_id)
        if player.user_id != requesting_user_id:
            logger.warning(
                "user %s refused access to player %s", requesting_user_id, player_id
            )
            raise PermissionDeniedError("Not authorized to view this player")
        return player

    def regenerate_energy(self, player_id: dm.PlayerID, amount: int) -> dm.Player:
        player = self.players.update(self.get_player(player_id).regenerate_energy(amount))
        logger.info(
            "player %s regenerated energy to %d/%d",
            player_id,
            player.energy.current,
            player.energy.capacity,
        )
        return player

    def award_experience(self, player_id: dm.PlayerID, amount: int) -> dm.Player:
        """Grant experience; each level gained also grants one skill point."""
        player = self.get_player(player_id)
        level_before = player.level
        player = player.gain_experience(amount)
        levels_gained = player.level - level_before
        if levels_gained:
            player = player.add_skill_points(levels_gained)
            logger.info("player %s reached level %d", player_id, player.level)
        return self.players.update(player)
