from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from netwatch.domain import models as dm
from netwatch.domain.enums import UnlockType


class ProgressionUnlockRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Primary key")
    player_id: str = Field(..., description="Player granted the unlock")
    unlock_type: UnlockType = Field(..., description="Category of the unlock")
    unlock_key: str = Field(..., min_length=1, max_length=50, description="Unlocked item key")
    unlocked_at: datetime = Field(..., description="Grant time (UTC)")

    @classmethod
    def from_domain(cls, unlock: dm.ProgressionUnlock) -> ProgressionUnlockRecord:
        return cls(
            id=unlock.id,
            player_id=unlock.player_id,
            unlock_type=unlock.unlock_type,
            unlock_key=unlock.unlock_key,
            unlocked_at=unlock.unlocked_at,
        )

    def to_domain(self) -> dm.ProgressionUnlock:
        return dm.ProgressionUnlock.from_storage(
            id=dm.ProgressionUnlockID(self.id),
            player_id=dm.PlayerID(self.player_id),
            unlock_type=self.unlock_type,
            unlock_key=self.unlock_key,
            unlocked_at=self.unlocked_at,
        )
