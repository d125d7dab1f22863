"""Translate between SQLAlchemy rows and domain aggregates.

Rows are rebuilt into aggregates through ``from_storage`` so every invariant
is re-checked on load.  Outgoing values are plain column dictionaries that can
be passed to a model constructor or applied to an existing row.
"""

from __future__ import annotations

from typing import Any

from netwatch import models as orm
from netwatch.domain import models as dm
from netwatch.models import as_utc


def user_to_domain(row: orm.User) -> dm.User:
    return dm.User.from_storage(
        id=dm.UserID(row.id),
        username=row.username,
        password_hash=row.password_hash,
        email=row.email,
        created_at=as_utc(row.created_at),
        last_login_at=as_utc(row.last_login_at) if row.last_login_at else None,
        is_active=row.is_active,
    )


def user_to_columns(user: dm.User) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "password_hash": user.password_hash,
        "email": user.email,
        "created_at": user.created_at,
        "last_login_at": user.last_login_at,
        "is_active": user.is_active,
    }


def player_to_domain(row: orm.Player) -> dm.Player:
    return dm.Player.from_storage(
        id=dm.PlayerID(row.id),
        user_id=dm.UserID(row.user_id),
        display_name=row.display_name,
        created_at=as_utc(row.created_at),
        energy=row.energy,
        energy_capacity=row.energy_max,
        money=int(row.money),
        experience=int(row.experience),
        skill_points=row.skill_points,
    )


def player_to_columns(player: dm.Player) -> dict[str, Any]:
    return {
        "id": player.id,
        "user_id": player.user_id,
        "display_name": player.display_name,
        "energy": player.energy.current,
        "energy_max": player.energy.capacity,
        "money": str(player.money.amount),
        "experience": str(player.experience),
        "skill_points": player.skill_points,
        "created_at": player.created_at,
    }


def computer_to_domain(row: orm.Computer) -> dm.Computer:
    return dm.Computer.from_storage(
        id=dm.ComputerID(row.id),
        owner_id=dm.PlayerID(row.owner_id),
        name=row.name,
        ip_address=row.ip_address,
        created_at=as_utc(row.created_at),
        storage=row.storage,
        cpu=row.cpu,
        memory=row.memory,
        is_online=row.is_online,
        firewall_level=row.firewall_level,
    )


def computer_to_columns(computer: dm.Computer) -> dict[str, Any]:
    return {
        "id": computer.id,
        "owner_id": computer.owner_id,
        "name": computer.name,
        "ip_address": computer.ip_address,
        "created_at": computer.created_at,
        "storage": computer.storage,
        "cpu": computer.cpu,
        "memory": computer.memory,
        "is_online": computer.is_online,
        "firewall_level": computer.firewall_level,
    }


def defense_to_domain(row: orm.Defense) -> dm.Defense:
    return dm.Defense.from_storage(
        id=dm.DefenseID(row.id),
        computer_id=dm.ComputerID(row.computer_id),
        defense_type=row.defense_type,
        level=row.level,
        installed_at=as_utc(row.installed_at),
    )


def defense_to_columns(defense: dm.Defense) -> dict[str, Any]:
    return {
        "id": defense.id,
        "computer_id": defense.computer_id,
        "defense_type": str(defense.defense_type),
        "level": defense.level,
        "installed_at": defense.installed_at,
    }


def hack_operation_to_domain(row: orm.HackOperation) -> dm.HackOperation:
    return dm.HackOperation.from_storage(
        id=dm.HackOperationID(row.id),
        attacker_id=dm.PlayerID(row.attacker_id),
        target_computer_id=dm.ComputerID(row.target_computer_id),
        status=row.status,
        hack_type=row.hack_type,
        tools_used=row.tools_used or [],
        estimated_duration=row.estimated_duration,
        started_at=as_utc(row.started_at),
        completion_at=as_utc(row.completion_at),
        result_data=row.result_data,
    )


def hack_operation_to_columns(operation: dm.HackOperation) -> dict[str, Any]:
    return {
        "id": operation.id,
        "attacker_id": operation.attacker_id,
        "target_computer_id": operation.target_computer_id,
        "status": str(operation.status),
        "hack_type": str(operation.hack_type),
        "tools_used": list(operation.tools_used),
        "estimated_duration": operation.estimated_duration,
        "started_at": operation.started_at,
        "completion_at": operation.completion_at,
        "result_data": dict(operation.result_data) if operation.result_data is not None else None,
    }


def unlock_to_domain(row: orm.ProgressionUnlock) -> dm.ProgressionUnlock:
    return dm.ProgressionUnlock.from_storage(
        id=dm.ProgressionUnlockID(row.id),
        player_id=dm.PlayerID(row.player_id),
        unlock_type=row.unlock_type,
        unlock_key=row.unlock_key,
        unlocked_at=as_utc(row.unlocked_at),
    )


def unlock_to_columns(unlock: dm.ProgressionUnlock) -> dict[str, Any]:
    return {
        "id": unlock.id,
        "player_id": unlock.player_id,
        "unlock_type": str(unlock.unlock_type),
        "unlock_key": unlock.unlock_key,
        "unlocked_at": unlock.unlocked_at,
    }
