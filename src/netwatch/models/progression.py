"""Progression unlock model for the NetWatch game system."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .player import Player


class ProgressionUnlock(Base):
    """Represents a capability granted to a player.

    Attributes:
        id: Primary key
        player_id: Foreign key to the player
        unlock_type: tool/defense/upgrade/skill
        unlock_key: Identifier of the unlocked item, unique per player
        unlocked_at: Grant time
    """

    __tablename__ = "progression_unlocks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    player_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    unlock_type: Mapped[str] = mapped_column(String(20), nullable=False)
    unlock_key: Mapped[str] = mapped_column(String(50), nullable=False)
    unlocked_at: Mapped[datetime] = mapped_column(nullable=False)

    player: Mapped["Player"] = relationship("Player", back_populates="unlocks")

    __table_args__ = (
        UniqueConstraint("player_id", "unlock_key", name="uq_progression_player_key"),
        CheckConstraint(
            "unlock_type IN ('tool', 'defense', 'upgrade', 'skill')",
            name="ck_progression_unlock_type",
        ),
    )

    def __repr__(self) -> str:
        return f"<ProgressionUnlock(player_id='{self.player_id}', key='{self.unlock_key}')>"
