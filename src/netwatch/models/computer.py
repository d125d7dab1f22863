"""Computer and defense models for the NetWatch game system.

This module contains models for:
- Computers (virtual machines owned by players)
- Defenses (security modules installed on a computer)
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .player import Player


class Computer(Base):
    """Represents a computer in the game world.

    Attributes:
        id: Primary key
        owner_id: Foreign key to the owning player
        name: Friendly name
        ip_address: Globally unique private address
        storage: Storage units remaining
        cpu: CPU units remaining
        memory: Memory units remaining
        is_online: Whether the computer is reachable
        firewall_level: Built-in firewall strength (0-100)
        created_at: Provisioning time
    """

    __tablename__ = "computers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    ip_address: Mapped[str] = mapped_column(String(15), nullable=False, unique=True)
    storage: Mapped[int] = mapped_column(Integer, nullable=False)
    cpu: Mapped[int] = mapped_column(Integer, nullable=False)
    memory: Mapped[int] = mapped_column(Integer, nullable=False)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    firewall_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(nullable=False)

    owner: Mapped["Player"] = relationship("Player", back_populates="computers")
    defenses: Mapped[list["Defense"]] = relationship(
        "Defense", back_populates="computer", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint(
            "storage >= 0 AND cpu >= 0 AND memory >= 0", name="ck_computers_resources"
        ),
        CheckConstraint(
            "firewall_level >= 0 AND firewall_level <= 100", name="ck_computers_firewall"
        ),
        Index("idx_computers_owner", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Computer(id='{self.id}', name='{self.name}', ip='{self.ip_address}')>"


class Defense(Base):
    """Represents a defense module installed on a computer.

    Attributes:
        id: Primary key
        computer_id: Foreign key to the protected computer
        defense_type: firewall/antivirus/honeypot/ids
        level: Upgrade level (1-5)
        installed_at: Installation time
    """

    __tablename__ = "defenses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    computer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("computers.id", ondelete="CASCADE"), nullable=False
    )
    defense_type: Mapped[str] = mapped_column(String(20), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    installed_at: Mapped[datetime] = mapped_column(nullable=False)

    computer: Mapped["Computer"] = relationship("Computer", back_populates="defenses")

    __table_args__ = (
        UniqueConstraint("computer_id", "defense_type", name="uq_defenses_computer_type"),
        CheckConstraint(
            "defense_type IN ('firewall', 'antivirus', 'honeypot', 'ids')",
            name="ck_defenses_type",
        ),
        CheckConstraint("level >= 1 AND level <= 5", name="ck_defenses_level"),
    )

    def __repr__(self) -> str:
        return f"<Defense(id='{self.id}', type='{self.defense_type}', level={self.level})>"
