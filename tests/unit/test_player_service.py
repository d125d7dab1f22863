"""Tests for PlayerService."""

import pytest

from netwatch.domain import models as dm
from netwatch.domain.errors import DomainValidationError
from netwatch.services.errors import ConflictError, NotFoundError, PermissionDeniedError
from netwatch.services.player_service import PlayerService


@pytest.fixture
def user(users, clock):
    return users.add(dm.User.create(dm.UserID("user-1"), "trinity", "hash", now=clock()))


@pytest.fixture
def service(players, users, clock, ids):
    return PlayerService(players, users, clock=clock, id_factory=ids)


def test_create_player(service, user, players):
    player = service.create_player(user.id, "Trinity")
    assert player.user_id == user.id
    assert player.energy.current == 100
    assert players.get_by_user_id(user.id) == player


def test_one_player_per_user(service, user):
    service.create_player(user.id, "Trinity")
    with pytest.raises(ConflictError):
        service.create_player(user.id, "Again")


def test_create_player_requires_user(service):
    with pytest.raises(NotFoundError):
        service.create_player(dm.UserID("ghost"), "Ghost")


def test_get_profile_owner_only(service, user, users, clock):
    player = service.create_player(user.id, "Trinity")
    assert service.get_profile(player.id, user.id) == player

    other = users.add(dm.User.create(dm.UserID("user-2"), "smith", "hash", now=clock()))
    with pytest.raises(PermissionDeniedError):
        service.get_profile(player.id, other.id)


def test_get_profile_missing(service, user):
    with pytest.raises(NotFoundError):
        service.get_profile(dm.PlayerID("nope"), user.id)


def test_award_experience_grants_skill_points_per_level(service, user):
    player = service.create_player(user.id, "Trinity")
    updated = service.award_experience(player.id, 900)
    assert updated.level == 3
    assert updated.skill_points == 3

    again = service.award_experience(player.id, 50)
    assert again.skill_points == 3


def test_regenerate_energy_applies_level_capacity(service, user, players, make_player):
    players.add(make_player("p-low", "user-9", experience=400, energy=20))
    updated = service.regenerate_energy(dm.PlayerID("p-low"), 10)
    assert (updated.energy.current, updated.energy.capacity) == (30, 120)
    assert players.get("p-low") == updated


def test_regenerate_negative_rejected(service, user):
    player = service.create_player(user.id, "Trinity")
    with pytest.raises(DomainValidationError):
        service.regenerate_energy(player.id, -1)
