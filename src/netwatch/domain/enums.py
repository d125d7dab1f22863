"""Enumerations used across the NetWatch domain."""

from __future__ import annotations

from enum import StrEnum


class HackStatus(StrEnum):
    """Hack operation lifecycle states."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABORTED = "aborted"


class HackType(StrEnum):
    """What an attacker is trying to achieve."""

    STEAL_MONEY = "steal_money"
    STEAL_DATA = "steal_data"
    INSTALL_VIRUS = "install_virus"
    DDOS = "ddos"


class DefenseType(StrEnum):
    """Security modules that can be installed on a computer."""

    FIREWALL = "firewall"
    ANTIVIRUS = "antivirus"
    HONEYPOT = "honeypot"
    IDS = "ids"


class UnlockType(StrEnum):
    """Categories of progression unlocks."""

    TOOL = "tool"
    DEFENSE = "defense"
    UPGRADE = "upgrade"
    SKILL = "skill"


class ResourceKind(StrEnum):
    """Upgradeable computer resources."""

    STORAGE = "storage"
    CPU = "cpu"
    MEMORY = "memory"
