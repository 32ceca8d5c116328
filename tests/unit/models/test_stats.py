"""Tests for the Stats value object."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from gamebook_companion.core.exceptions import ValidationError
from gamebook_companion.models.stats import Stats


class TestStatsValidation:
    """Tests for Stats construction bounds."""

    def test_valid_stats(self, sample_stats: Stats) -> None:
        """Test that a freshly rolled stat block is valid."""
        assert sample_stats.dexterity == 7
        assert sample_stats.constitution is None
        assert sample_stats.reputation is None

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("dexterity", 0),
            ("luck", -1),
            ("initial_luck", -1),
            ("max_health", 0),
            ("current_health", -1),
            ("current_health", 33),
            ("constitution", -1),
            ("reputation", 6),
            ("reputation", -6),
        ],
    )
    def test_out_of_bounds_rejected(
        self,
        sample_stats_data: dict[str, int],
        field: str,
        value: int,
    ) -> None:
        """Test that each bound raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            Stats(**{**sample_stats_data, field: value})

        assert exc_info.value.details["field_name"] == field

    def test_frozen(self, sample_stats: Stats) -> None:
        """Test that stats cannot be changed in place."""
        with pytest.raises(PydanticValidationError):
            sample_stats.luck = 10  # type: ignore[misc]

    def test_wrong_type_wrapped_on_hydration(self, sample_stats_data: dict[str, Any]) -> None:
        """Test that pydantic type errors surface as ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            Stats.from_data({**sample_stats_data, "luck": "lots"})

        assert exc_info.value.details["field_name"] == "luck"


class TestStatsOperations:
    """Tests for Stats operations."""

    def test_update_merges_fields(self, sample_stats: Stats) -> None:
        """Test partial update."""
        updated = sample_stats.update(dexterity=9, constitution=3)

        assert updated.dexterity == 9
        assert updated.constitution == 3
        assert updated.luck == sample_stats.luck
        assert sample_stats.dexterity == 7

    def test_update_rejects_invalid_whole(self, sample_stats: Stats) -> None:
        """Test that one invalid field rejects the whole update."""
        with pytest.raises(ValidationError):
            sample_stats.update(dexterity=9, current_health=99)

    def test_update_rejects_unknown_field(self, sample_stats: Stats) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            sample_stats.update(strength=18)

        assert exc_info.value.details["field_name"] == "strength"

    def test_update_can_clear_optional(self, sample_stats: Stats) -> None:
        """Test that None clears an optional stat."""
        stats = sample_stats.update(constitution=4).update(constitution=None)

        assert stats.constitution is None

    def test_decrease_luck_clamps(self, sample_stats: Stats) -> None:
        """Test that luck never goes below zero."""
        stats = sample_stats.update(luck=1).decrease_luck().decrease_luck()

        assert stats.luck == 0

    def test_take_damage_floors_at_zero(self, sample_stats: Stats) -> None:
        """Test that health is floored at zero."""
        stats = sample_stats.take_damage(50)

        assert stats.current_health == 0
        assert stats.is_dead()

    def test_heal_caps_at_max(self, sample_stats: Stats) -> None:
        """Test that healing never exceeds maximum health."""
        stats = sample_stats.take_damage(5).heal(20)

        assert stats.current_health == stats.max_health

    def test_damage_heal_symmetry(self, sample_stats: Stats) -> None:
        """Test that healing what was lost restores health."""
        assert sample_stats.take_damage(10).heal(10) == sample_stats

    @pytest.mark.parametrize("method", ["take_damage", "heal"])
    def test_negative_amount_rejected(self, sample_stats: Stats, method: str) -> None:
        """Test that negative damage or healing is rejected."""
        with pytest.raises(ValidationError):
            getattr(sample_stats, method)(-1)

    @pytest.mark.parametrize(
        ("current", "expected"),
        [(0, False), (1, True), (8, True), (9, False), (32, False)],
    )
    def test_critical_health(self, sample_stats: Stats, current: int, expected: bool) -> None:
        """Test critical health at a quarter of maximum (32 -> 8)."""
        assert sample_stats.update(current_health=current).is_critical_health() is expected

    def test_critical_health_floors_quarter(self, sample_stats: Stats) -> None:
        """Test that the quarter threshold is floored (10 // 4 == 2)."""
        stats = sample_stats.update(max_health=10, current_health=3)

        assert stats.is_critical_health() is False
        assert stats.update(current_health=2).is_critical_health() is True

    def test_update_reputation(self, sample_stats: Stats) -> None:
        """Test reputation shorthand and bounds."""
        assert sample_stats.update_reputation(-5).reputation == -5
        with pytest.raises(ValidationError):
            sample_stats.update_reputation(7)


class TestStatsSerialization:
    """Tests for record serialization."""

    def test_camel_case_record(self, sample_stats: Stats) -> None:
        """Test persisted field names."""
        assert sample_stats.to_data() == {
            "dexterity": 7,
            "constitution": None,
            "luck": 4,
            "initialLuck": 4,
            "maxHealth": 32,
            "currentHealth": 32,
            "reputation": None,
        }

    def test_round_trip(self, sample_stats: Stats) -> None:
        """Test from_data(to_data()) equality."""
        assert Stats.from_data(sample_stats.to_data()) == sample_stats
