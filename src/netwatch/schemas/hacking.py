from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from netwatch.domain import models as dm
from netwatch.domain.enums import HackStatus, HackType


class HackOperationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Primary key")
    attacker_id: str = Field(..., description="Attacking player")
    target_computer_id: str = Field(..., description="Targeted computer")
    status: HackStatus = Field(default=HackStatus.PENDING, description="Lifecycle state")
    hack_type: HackType = Field(..., description="Goal of the hack")
    tools_used: list[str] = Field(default_factory=list, description="Tools in the order used")
    estimated_duration: int = Field(..., gt=0, description="Duration in seconds")
    started_at: datetime = Field(..., description="Start time (UTC)")
    completion_at: datetime = Field(..., description="Scheduled completion time (UTC)")
    result_data: dict[str, Any] | None = Field(None, description="Outcome details once resolved")

    @classmethod
    def from_domain(cls, operation: dm.HackOperation) -> HackOperationRecord:
        return cls(
            id=operation.id,
            attacker_id=operation.attacker_id,
            target_computer_id=operation.target_computer_id,
            status=operation.status,
            hack_type=operation.hack_type,
            tools_used=list(operation.tools_used),
            estimated_duration=operation.estimated_duration,
            started_at=operation.started_at,
            completion_at=operation.completion_at,
            result_data=dict(operation.result_data) if operation.result_data is not None else None,
        )

    def to_domain(self) -> dm.HackOperation:
        return dm.HackOperation.from_storage(
            id=dm.HackOperationID(self.id),
            attacker_id=dm.PlayerID(self.attacker_id),
            target_computer_id=dm.ComputerID(self.target_computer_id),
            status=self.status,
            hack_type=self.hack_type,
            tools_used=self.tools_used,
            estimated_duration=self.estimated_duration,
            started_at=self.started_at,
            completion_at=self.completion_at,
            result_data=self.result_data,
        )
