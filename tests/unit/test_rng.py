"""Tests for deterministic random number helpers."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from netwatch.utils.rng import (
    check_success,
    generate_seed,
    parse_dice_notation,
    roll_dice,
    seeded_random,
)


class TestGenerateSeed:
    def test_joins_parts(self):
        assert generate_seed("hack", "op-1", "ddos") == "hack:op-1:ddos"

    def test_requires_parts(self):
        with pytest.raises(ValueError):
            generate_seed()


class TestDiceNotation:
    @pytest.mark.parametrize(("notation", "expected"), [("1d100", (1, 100)), ("3D6", (3, 6))])
    def test_parse(self, notation, expected):
        assert parse_dice_notation(notation) == expected

    @pytest.mark.parametrize("notation", ["d6", "2x6", "0d6", "2d0", ""])
    def test_invalid(self, notation):
        with pytest.raises(ValueError):
            parse_dice_notation(notation)


class TestRollDice:
    def test_same_seed_same_roll(self):
        assert roll_dice("s", "2d6") == roll_dice("s", "2d6")

    def test_roll_records_audit_fields(self):
        result = roll_dice("audit", "3d6")
        assert result.seed == "audit"
        assert result.notation == "3d6"
        assert len(result.rolls) == 3
        assert result.total == sum(result.rolls)

    @given(
        num_dice=st.integers(min_value=1, max_value=10),
        num_sides=st.integers(min_value=2, max_value=100),
        seed=st.text(min_size=1, max_size=20),
    )
    def test_dice_roll_properties(self, num_dice, num_sides, seed):
        """Property-based test: dice rolls are always in valid range."""
        result = roll_dice(seed, f"{num_dice}d{num_sides}")
        assert num_dice <= result.total <= num_dice * num_sides


class TestCheckSuccess:
    def test_zero_probability_never_succeeds(self):
        assert not check_success("anything", 0.0).success

    def test_certain_probability_always_succeeds(self):
        assert check_success("anything", 1.0).success

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_probability_out_of_range(self, probability):
        with pytest.raises(ValueError):
            check_success("seed", probability)

    @given(
        probability=st.floats(min_value=0.0, max_value=1.0),
        seed=st.text(min_size=1, max_size=20),
    )
    def test_success_matches_roll(self, probability, seed):
        check = check_success(seed, probability)
        assert check.target == round(probability * 100)
        assert check.success == (check.roll <= check.target)


def test_seeded_random_is_reproducible():
    assert seeded_random("x").random() == seeded_random("x").random()
