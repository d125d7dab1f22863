"""User account lifecycle: registration, logins and suspension."""

from __future__ import annotations

import logging

from netwatch.domain import models as dm
from netwatch.interfaces import UserRepository
from netwatch.services.errors import ConflictError, NotFoundError, PermissionDeniedError
from netwatch.utils.clock import Clock, utc_now
from netwatch.utils.ids import IdFactory, new_id

logger = logging.getLogger(__name__)


class IdentityService:
    """Service for registering and managing user accounts."""

    def __init__(
        self,
        users: UserRepository,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ) -> None:
        self.users = users
        self._clock = clock
        self._new_id = id_factory

    def register(
        self, username: str, password_hash: str, email: str | None = None
    ) -> dm.User:
        """Create a new account.

        Args:
            username: Unique login name (3-20 characters)
            password_hash: Already-hashed password; stored as-is
            email: Optional unique contact address

        Returns:
            The stored user

        Raises:
            ConflictError: If the username or email is already registered
            DomainValidationError: If the username or email is malformed
        """
        if self.users.get_by_username(username) is not None:
            logger.warning("registration refused: username %r already taken", username)
            raise ConflictError(f"Username {username!r} is already taken")
        if email and self.users.get_by_email(email) is not None:
            logger.warning("registration refused: email already registered")
            raise ConflictError("Email is already registered")

        user = dm.User.create(
            dm.UserID(self._new_id()), username, password_hash, email, now=self._clock()
        )
        self.users.add(user)
        logger.info("registered user %s (%s)", user.id, user.username)
        return user

    def get_user(self, user_id: dm.UserID) -> dm.User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def record_login(self, user_id: dm.UserID) -> dm.User:
        """Stamp a successful login; suspended accounts are refused."""
        user = self.get_user(user_id)
        if not user.is_active:
            logger.warning("login refused for suspended user %s", user_id)
            raise PermissionDeniedError("Account is suspended")
        user = self.users.update(user.record_login(now=self._clock()))
        logger.info("user %s logged in", user_id)
        return user

    def suspend(self, user_id: dm.UserID) -> dm.User:
        user = self.users.update(self.get_user(user_id).suspend())
        logger.info("suspended user %s", user_id)
        return user

    def activate(self, user_id: dm.UserID) -> dm.User:
        user = self.users.update(self.get_user(user_id).activate())
        logger.info("activated user %s", user_id)
        return user
