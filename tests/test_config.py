"""Tests for scoring-weight validation in config."""

from __future__ import annotations

import pytest

import config


class TestValidateWeights:
    def test_defaults_are_valid(self) -> None:
        config.validate_weights()

    def test_current_weights_names_every_component(self) -> None:
        assert set(config.current_weights()) == {
            "genre", "genre_step", "rating", "popularity", "recency", "language", "tone", "age_rating",
        }

    def test_soft_weight_equal_to_genre_rejected(self) -> None:
        with pytest.raises(ValueError, match="rating"):
            config.validate_weights({"genre": 30.0, "rating": 30.0})

    def test_negative_weight_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            config.validate_weights({"genre": 50.0, "tone": -1.0})

    def test_zero_soft_weight_allowed(self) -> None:
        config.validate_weights({"genre": 50.0, "recency": 0.0})

    def test_missing_genre_weight(self) -> None:
        with pytest.raises(KeyError):
            config.validate_weights({"rating": 1.0})

    def test_genre_step_must_exceed_genre_derived_weights(self) -> None:
        with pytest.raises(ValueError, match="genre_step"):
            config.validate_weights(
                {"genre": 50.0, "genre_step": 16.0, "tone": 10.0, "age_rating": 6.0}
            )

    def test_genre_step_above_genre_derived_weights(self) -> None:
        config.validate_weights(
            {"genre": 50.0, "genre_step": 16.5, "tone": 10.0, "age_rating": 6.0}
        )

    def test_genre_step_may_exceed_genre_weight(self) -> None:
        config.validate_weights({"genre": 10.0, "genre_step": 40.0, "tone": 5.0})

    def test_default_step_covers_default_derived_weights(self) -> None:
        derived = sum(config.current_weights()[name] for name in config.GENRE_DERIVED_SIGNALS)
        assert config.GENRE_STEP_WEIGHT > derived
