"""Tests for ProgressionService."""

import pytest

from netwatch.domain.enums import UnlockType
from netwatch.services.errors import ConflictError, NotFoundError, RequirementNotMetError
from netwatch.services.progression_service import ProgressionService


@pytest.fixture
def service(unlocks, players, clock, ids):
    return ProgressionService(unlocks, players, clock=clock, id_factory=ids)


def test_unlock_tool_at_level_three(service, players, make_player, unlocks):
    players.add(make_player(experience=900))
    unlock = service.unlock("player-1", UnlockType.TOOL, "port_scanner")
    assert unlock.unlock_type == UnlockType.TOOL
    assert service.list_unlocks("player-1") == [unlock]


def test_tool_refused_below_level_three(service, players, make_player, unlocks):
    players.add(make_player(experience=899))
    with pytest.raises(RequirementNotMetError, match="level 3"):
        service.unlock("player-1", UnlockType.TOOL, "port_scanner")
    assert unlocks.items == {}


def test_defense_requires_money(service, players, make_player):
    players.add(make_player(money=499))
    with pytest.raises(RequirementNotMetError, match="500"):
        service.unlock("player-1", UnlockType.DEFENSE, "honeypot")


def test_defense_with_enough_money(service, players, make_player):
    players.add(make_player(money=500))
    assert service.unlock("player-1", "defense", "honeypot").unlock_key == "honeypot"


def test_duplicate_unlock(service, players, make_player):
    players.add(make_player())
    service.unlock("player-1", UnlockType.SKILL, "stealth")
    with pytest.raises(ConflictError, match="Already unlocked"):
        service.unlock("player-1", UnlockType.SKILL, "stealth")


def test_unknown_player(service):
    with pytest.raises(NotFoundError):
        service.unlock("ghost", UnlockType.SKILL, "stealth")
