"""Tests for the User and Player aggregates."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from netwatch.domain import models as dm
from netwatch.domain.errors import (
    DomainValidationError,
    InsufficientEnergy,
    InsufficientFunds,
    InsufficientSkillPoints,
)
from netwatch.domain.values import Energy, Money

NOW = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)


def _player(**overrides) -> dm.Player:
    player = dm.Player.create(dm.PlayerID("p1"), dm.UserID("u1"), "Neo", now=NOW)
    return player if not overrides else dm.Player(**{**_fields(player), **overrides})


def _fields(player: dm.Player) -> dict:
    return {
        "id": player.id,
        "user_id": player.user_id,
        "display_name": player.display_name,
        "energy": player.energy,
        "money": player.money,
        "experience": player.experience,
        "skill_points": player.skill_points,
        "created_at": player.created_at,
    }


class TestUser:
    def test_create_defaults(self):
        user = dm.User.create(dm.UserID("u1"), "trinity", "hash", "t@example.com", now=NOW)
        assert user.is_active
        assert user.last_login_at is None
        assert user.created_at == NOW

    @pytest.mark.parametrize("username", ["ab", "x" * 21, ""])
    def test_username_length(self, username):
        with pytest.raises(DomainValidationError, match="Username must be 3-20 characters"):
            dm.User.create(dm.UserID("u1"), username, "hash", now=NOW)

    def test_username_bounds_accepted(self):
        dm.User.create(dm.UserID("u1"), "abc", "hash", now=NOW)
        dm.User.create(dm.UserID("u2"), "x" * 20, "hash", now=NOW)

    @pytest.mark.parametrize("email", ["no-at-sign", "a@b", "a b@c.d", "@c.d"])
    def test_invalid_email(self, email):
        with pytest.raises(DomainValidationError, match="Invalid email format"):
            dm.User.create(dm.UserID("u1"), "trinity", "hash", email, now=NOW)

    def test_empty_email_treated_as_missing(self):
        user = dm.User.create(dm.UserID("u1"), "trinity", "hash", "", now=NOW)
        assert user.email is None

    def test_login_and_suspension(self):
        user = dm.User.create(dm.UserID("u1"), "trinity", "hash", now=NOW)
        later = datetime(2024, 3, 2, tzinfo=UTC)
        logged_in = user.record_login(now=later)
        assert logged_in.last_login_at == later
        assert user.last_login_at is None

        suspended = logged_in.suspend()
        assert not suspended.is_active
        assert suspended.activate().is_active


class TestPlayerCreation:
    def test_defaults(self):
        player = _player()
        assert player.energy == Energy(100, 100)
        assert player.money == Money.zero()
        assert player.experience == 0
        assert player.level == 0
        assert player.skill_points == 0

    @pytest.mark.parametrize("name", ["", "x" * 51])
    def test_display_name_length(self, name):
        with pytest.raises(DomainValidationError):
            dm.Player.create(dm.PlayerID("p1"), dm.UserID("u1"), name, now=NOW)

    def test_negative_skill_points_rejected(self):
        with pytest.raises(DomainValidationError):
            _player(skill_points=-1)


class TestPlayerLevel:
    @pytest.mark.parametrize(
        ("experience", "level"),
        [(0, 0), (99, 0), (100, 1), (399, 1), (400, 2), (899, 2), (900, 3), (10_000, 10)],
    )
    def test_level_from_experience(self, experience, level):
        assert _player().gain_experience(experience).level == level

    def test_huge_experience_is_exact(self):
        experience = 100 * (10**40) ** 2
        assert _player().gain_experience(experience).level == 10**40

    @given(st.integers(min_value=0, max_value=10**12))
    def test_level_is_floor_sqrt(self, experience):
        level = dm.level_for_experience(experience)
        assert level * level * 100 <= experience
        assert (level + 1) * (level + 1) * 100 > experience

    def test_negative_experience_rejected(self):
        with pytest.raises(DomainValidationError):
            _player().gain_experience(-1)


class TestPlayerEnergy:
    def test_consume(self):
        assert _player().consume_energy(30).energy.current == 70

    def test_consume_too_much(self):
        with pytest.raises(InsufficientEnergy):
            _player().consume_energy(101)

    def test_regenerate_uses_level_before_regeneration(self):
        player = _player().consume_energy(50).gain_experience(900)
        regenerated = player.regenerate_energy(10)
        assert regenerated.energy == Energy(60, 130)

    def test_level_up_shows_in_capacity_one_regeneration_later(self):
        player = _player().gain_experience(100)
        assert player.energy.capacity == 100
        assert player.regenerate_energy(0).energy.capacity == 110

    def test_regenerate_never_exceeds_capacity(self):
        assert _player().consume_energy(5).regenerate_energy(500).energy == Energy(100, 100)

    def test_increase_energy_capacity_uses_next_level(self):
        player = _player().gain_experience(400)
        assert player.increase_energy_capacity().energy.capacity == 130
        assert player.increase_energy_capacity().energy.current == 100


class TestPlayerWallet:
    def test_earn_and_spend(self):
        player = _player().earn_money(Money(500)).spend_money(Money(200))
        assert player.money == Money(300)
        assert player.can_afford(Money(300))
        assert not player.can_afford(Money(301))

    def test_spend_too_much(self):
        with pytest.raises(InsufficientFunds):
            _player().spend_money(Money(1))

    def test_original_is_unchanged(self):
        player = _player()
        player.earn_money(Money(50))
        assert player.money == Money.zero()


class TestSkillPoints:
    def test_add_and_consume(self):
        player = _player().add_skill_points(3).consume_skill_points(2)
        assert player.skill_points == 1

    def test_consume_too_many(self):
        with pytest.raises(InsufficientSkillPoints):
            _player().add_skill_points(1).consume_skill_points(2)

    def test_add_negative(self):
        with pytest.raises(DomainValidationError):
            _player().add_skill_points(-1)
