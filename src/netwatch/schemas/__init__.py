from .computer import ComputerRecord, DefenseRecord
from .hacking import HackOperationRecord
from .identity import PlayerRecord, UserRecord
from .progression import ProgressionUnlockRecord

__all__ = [
    "ComputerRecord",
    "DefenseRecord",
    "HackOperationRecord",
    "PlayerRecord",
    "ProgressionUnlockRecord",
    "UserRecord",
]
