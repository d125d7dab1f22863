"""User account model for the NetWatch game system."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .player import Player


class User(Base):
    """Represents an authentication account.

    Attributes:
        id: Primary key (opaque string id)
        username: Unique username
        email: Unique email address (optional)
        password_hash: Opaque password hash
        is_active: False while the account is suspended
        created_at: Registration time
        last_login_at: Timestamp of last successful login
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    username: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(nullable=True)

    player: Mapped[Optional["Player"]] = relationship("Player", back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', username='{self.username}', is_active={self.is_active})>"
