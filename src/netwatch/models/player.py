"""Player model for the NetWatch game system.

Money and experience are unbounded integers in the domain, so they are
stored as decimal strings rather than fixed-width columns.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .computer import Computer
    from .progression import ProgressionUnlock
    from .user import User


class Player(Base):
    """Represents the game profile attached to one user.

    Attributes:
        id: Primary key
        user_id: Foreign key to the owning user (one player per user)
        display_name: Public name
        energy: Current energy
        energy_max: Energy capacity
        money: Wallet balance as a decimal string
        experience: Experience as a decimal string
        skill_points: Unspent skill points
        created_at: Creation time
    """

    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    display_name: Mapped[str] = mapped_column(String(50), nullable=False)
    energy: Mapped[int] = mapped_column(Integer, nullable=False)
    energy_max: Mapped[int] = mapped_column(Integer, nullable=False)
    money: Mapped[str] = mapped_column(String, nullable=False, default="0")
    experience: Mapped[str] = mapped_column(String, nullable=False, default="0")
    skill_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="player")
    computers: Mapped[list["Computer"]] = relationship(
        "Computer", back_populates="owner", cascade="all, delete-orphan"
    )
    unlocks: Mapped[list["ProgressionUnlock"]] = relationship(
        "ProgressionUnlock", back_populates="player", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("energy >= 0 AND energy <= energy_max", name="ck_players_energy"),
        CheckConstraint("skill_points >= 0", name="ck_players_skill_points"),
    )

    def __repr__(self) -> str:
        return f"<Player(id='{self.id}', display_name='{self.display_name}')>"
