"""Tests for nutrient arithmetic and energy estimates."""

import math

import pytest

from nutrition_ledger.domain.models import ActivityLevel, Sex, User
from nutrition_ledger.domain.nutrition import (
    MacroProfile,
    grams_to_servings,
    is_valid_quantity,
    round_calories,
    scale_grams,
    scale_servings,
    sum_profiles,
)


def test_scale_servings_clamps_negative() -> None:
    per_serving = MacroProfile(100.0, 10.0, 5.0, 2.0)

    assert scale_servings(per_serving, 2.5) == MacroProfile(250.0, 25.0, 12.5, 5.0)
    assert scale_servings(per_serving, -3) == MacroProfile.zero()


def test_scale_grams_uses_serving_size() -> None:
    per_serving = MacroProfile(200.0, 10.0, 20.0, 5.0)

    totals = scale_grams(per_serving, 150.0, 100.0)

    assert totals.calories == pytest.approx(300.0)
    assert totals.protein_g == pytest.approx(15.0)


def test_scale_grams_without_serving_size_is_zero() -> None:
    per_serving = MacroProfile(200.0, 10.0, 20.0, 5.0)

    assert grams_to_servings(50.0, 0.0) == 0.0
    assert scale_grams(per_serving, 50.0, 0.0) == MacroProfile.zero()
    assert scale_grams(per_serving, 50.0, -1.0) == MacroProfile.zero()


def test_sum_profiles_and_rounding() -> None:
    total = sum_profiles(
        [MacroProfile(100.25, 1.0, 2.0, 3.0), MacroProfile(50.25, 1.0, 1.0, 1.0)]
    )

    assert total.calories == pytest.approx(150.5)
    assert round_calories(total.calories) == 151
    assert round_calories(150.49) == 150
    assert sum_profiles([]) == MacroProfile.zero()


def test_bmr_and_tdee_follow_mifflin_st_jeor() -> None:
    user = User(
        id="a@example.com",
        age=30,
        sex=Sex.MALE,
        height_in=70.0,
        weight_lb=180.0,
        activity_level=ActivityLevel.MODERATE,
    )

    expected_bmr = 10 * 180 * 0.45359237 + 6.25 * 70 * 2.54 - 5 * 30 + 5

    assert user.calculate_bmr() == pytest.approx(expected_bmr)
    assert user.calculate_tdee() == pytest.approx(expected_bmr * 1.55)


def test_tdee_defaults_to_sedentary_and_sex_offsets() -> None:
    female = User(id="f", age=40, sex=Sex.FEMALE, height_in=64, weight_lb=140)
    other = User(id="o", age=40, sex=Sex.OTHER, height_in=64, weight_lb=140)
    female.activity_level = None

    assert other.calculate_bmr() - female.calculate_bmr() == pytest.approx(161.0)
    assert female.calculate_tdee() == pytest.approx(female.calculate_bmr() * 1.2)


def test_user_identity_and_display_name() -> None:
    first = User(id="a@example.com", name="  ")
    second = User(id="a@example.com", name="Alex")

    assert first == second
    assert len({first, second}) == 1
    assert first.display_name() == "User"
    assert second.display_name() == "Alex"


def test_is_valid_quantity_requires_finite_positive() -> None:
    assert is_valid_quantity(0.5)
    assert not is_valid_quantity(0)
    assert not is_valid_quantity(-1)
    assert not is_valid_quantity(None)
    assert not is_valid_quantity(math.nan)
    assert not is_valid_quantity(math.inf)


def test_profile_is_finite() -> None:
    assert MacroProfile(1.0, 2.0, 3.0, 4.0).is_finite()
    assert not MacroProfile(math.nan, 0.0, 0.0, 0.0).is_finite()
    assert not MacroProfile(0.0, 0.0, 0.0, -math.inf).is_finite()
