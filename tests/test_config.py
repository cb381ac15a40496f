"""Tests for configuration."""

import pytest

from nutrition_normalizer.config import DEFAULT_RULES, ServingRules, Settings


def test_default_rules() -> None:
    assert DEFAULT_RULES.max_serving_calories == 800
    assert DEFAULT_RULES.max_serving_grams == 500
    assert DEFAULT_RULES.max_calorie_ratio == 3.0
    assert DEFAULT_RULES.target_serving_calories == 150
    assert (DEFAULT_RULES.min_estimated_grams, DEFAULT_RULES.max_estimated_grams) == (
        10,
        200,
    )
    assert "k-cup" in DEFAULT_RULES.multi_pack_keywords


def test_settings_build_default_rules() -> None:
    assert Settings().serving_rules() == ServingRules()


def test_settings_read_thresholds_from_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MAX_SERVING_GRAMS", "450")
    monkeypatch.setenv("MAX_CALORIE_RATIO", "2.5")

    rules = Settings().serving_rules()

    assert rules.max_serving_grams == 450
    assert rules.max_calorie_ratio == 2.5
    assert rules.max_serving_calories == 800
