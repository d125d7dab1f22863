"""SQLAlchemy models for the NetWatch game system.

This module exports all database models and the declarative base.
"""

from .base import Base, as_utc
from .computer import Computer, Defense
from .hack_operation import HackOperation
from .player import Player
from .progression import ProgressionUnlock
from .user import User

__all__ = [
    "Base",
    "Computer",
    "Defense",
    "HackOperation",
    "Player",
    "ProgressionUnlock",
    "User",
    "as_utc",
]
