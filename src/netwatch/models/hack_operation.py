"""Hack operation model for the NetWatch game system."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class HackOperation(Base):
    """Represents a hacking attempt.

    Attributes:
        id: Primary key
        attacker_id: Foreign key to the attacking player
        target_computer_id: Foreign key to the targeted computer
        status: pending/in_progress/succeeded/failed/aborted
        hack_type: steal_money/steal_data/install_virus/ddos
        tools_used: Ordered JSON list of tool identifiers
        estimated_duration: Duration in seconds
        started_at: Creation time
        completion_at: When the hack becomes due
        result_data: JSON outcome, null until resolved
    """

    __tablename__ = "hack_operations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    attacker_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    target_computer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("computers.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    hack_type: Mapped[str] = mapped_column(String(20), nullable=False)
    tools_used: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    estimated_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    started_at: Mapped[datetime] = mapped_column(nullable=False)
    completion_at: Mapped[datetime] = mapped_column(nullable=False)
    result_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'succeeded', 'failed', 'aborted')",
            name="ck_hack_operations_status",
        ),
        CheckConstraint("estimated_duration > 0", name="ck_hack_operations_duration"),
        Index("idx_hack_operations_attacker", "attacker_id"),
        Index("idx_hack_operations_target", "target_computer_id"),
        Index("idx_hack_operations_status", "status", "completion_at"),
    )

    def __repr__(self) -> str:
        return f"<HackOperation(id='{self.id}', type='{self.hack_type}', status='{self.status}')>"
