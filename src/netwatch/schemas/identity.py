from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from netwatch.domain import models as dm


class UserRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Primary key")
    username: str = Field(..., min_length=3, max_length=20, description="Unique login name")
    password_hash: str = Field(..., description="Opaque password hash")
    email: str | None = Field(None, description="Unique contact address (optional)")
    created_at: datetime = Field(..., description="Registration time (UTC)")
    last_login_at: datetime | None = Field(None, description="Most recent login (UTC)")
    is_active: bool = Field(default=True, description="False while the account is suspended")

    @classmethod
    def from_domain(cls, user: dm.User) -> UserRecord:
        return cls(
            id=user.id,
            username=user.username,
            password_hash=user.password_hash,
            email=user.email,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
            is_active=user.is_active,
        )

    def to_domain(self) -> dm.User:
        return dm.User.from_storage(
            id=dm.UserID(self.id),
            username=self.username,
            password_hash=self.password_hash,
            email=self.email,
            created_at=self.created_at,
            last_login_at=self.last_login_at,
            is_active=self.is_active,
        )


class PlayerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Primary key")
    user_id: str = Field(..., description="Owning user (one player per user)")
    display_name: str = Field(..., min_length=1, max_length=50, description="Public name")
    energy: int = Field(..., ge=0, description="Current energy")
    energy_capacity: int = Field(..., gt=0, description="Energy ceiling")
    money: int = Field(default=0, ge=0, description="Wallet balance")
    experience: int = Field(default=0, ge=0, description="Total experience earned")
    level: int = Field(default=0, ge=0, description="Derived from experience; ignored on load")
    skill_points: int = Field(default=0, ge=0, description="Unspent skill points")
    created_at: datetime = Field(..., description="Creation time (UTC)")

    @classmethod
    def from_domain(cls, player: dm.Player) -> PlayerRecord:
        return cls(
            id=player.id,
            user_id=player.user_id,
            display_name=player.display_name,
            energy=player.energy.current,
            energy_capacity=player.energy.capacity,
            money=player.money.amount,
            experience=player.experience,
            level=player.level,
            skill_points=player.skill_points,
            created_at=player.created_at,
        )

    def to_domain(self) -> dm.Player:
        return dm.Player.from_storage(
            id=dm.PlayerID(self.id),
            user_id=dm.UserID(self.user_id),
            display_name=self.display_name,
            created_at=self.created_at,
            energy=self.energy,
            energy_capacity=self.energy_capacity,
            money=self.money,
            experience=self.experience,
            skill_points=self.skill_points,
        )
