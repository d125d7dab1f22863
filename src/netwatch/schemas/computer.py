from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from netwatch.domain import models as dm
from netwatch.domain.enums import DefenseType


class ComputerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Primary key")
    owner_id: str = Field(..., description="Owning player")
    name: str = Field(..., min_length=1, max_length=50, description="Display name")
    ip_address: str = Field(..., description="Unique address in 10.0.0.0/8")
    storage: int = Field(..., ge=0, description="Storage units")
    cpu: int = Field(..., ge=0, description="CPU units")
    memory: int = Field(..., ge=0, description="Memory units")
    is_online: bool = Field(default=True, description="Reachable by attackers when True")
    firewall_level: int = Field(default=0, ge=0, le=100, description="Firewall strength")
    created_at: datetime = Field(..., description="Provisioning time (UTC)")

    @classmethod
    def from_domain(cls, computer: dm.Computer) -> ComputerRecord:
        return cls(
            id=computer.id,
            owner_id=computer.owner_id,
            name=computer.name,
            ip_address=computer.ip_address,
            storage=computer.storage,
            cpu=computer.cpu,
            memory=computer.memory,
            is_online=computer.is_online,
            firewall_level=computer.firewall_level,
            created_at=computer.created_at,
        )

    def to_domain(self) -> dm.Computer:
        return dm.Computer.from_storage(
            id=dm.ComputerID(self.id),
            owner_id=dm.PlayerID(self.owner_id),
            name=self.name,
            ip_address=self.ip_address,
            created_at=self.created_at,
            storage=self.storage,
            cpu=self.cpu,
            memory=self.memory,
            is_online=self.is_online,
            firewall_level=self.firewall_level,
        )


class DefenseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Primary key")
    computer_id: str = Field(..., description="Computer the defense is installed on")
    defense_type: DefenseType = Field(..., description="Kind of defense module")
    level: int = Field(default=1, ge=1, le=5, description="Upgrade level")
    effectiveness: int = Field(default=20, description="Derived from level; ignored on load")
    installed_at: datetime = Field(..., description="Installation time (UTC)")

    @classmethod
    def from_domain(cls, defense: dm.Defense) -> DefenseRecord:
        return cls(
            id=defense.id,
            computer_id=defense.computer_id,
            defense_type=defense.defense_type,
            level=defense.level,
            effectiveness=defense.effectiveness,
            installed_at=defense.installed_at,
        )

    def to_domain(self) -> dm.Defense:
        return dm.Defense.from_storage(
            id=dm.DefenseID(self.id),
            computer_id=dm.ComputerID(self.computer_id),
            defense_type=self.defense_type,
            level=self.level,
            installed_at=self.installed_at,
        )
