"""Nutrient scaling and energy expenditure math.

Foods carry their nutrient profile per serving. Everything else (gram based
ingredients, composite foods, logged entries) is derived by scaling that
profile, so every conversion in the package goes through these functions.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

KG_PER_LB = 0.45359237
CM_PER_IN = 2.54


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrients for some quantity of food."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @classmethod
    def zero(cls) -> "MacroProfile":
        """Return an all-zero profile."""
        return cls(0.0, 0.0, 0.0, 0.0)

    def scaled(self, factor: float) -> "MacroProfile":
        """Return the profile multiplied by a factor."""
        return MacroProfile(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fat_g=self.fat_g * factor,
        )

    def is_finite(self) -> bool:
        """False when any value is NaN or infinite."""
        return all(
            math.isfinite(value)
            for value in (self.calories, self.protein_g, self.carbs_g, self.fat_g)
        )

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )


def is_valid_quantity(value: float | None) -> bool:
    """True for a finite amount greater than zero."""
    return value is not None and math.isfinite(value) and value > 0


def clamp_servings(servings: float) -> float:
    """Negative serving counts count as zero."""
    return max(0.0, float(servings))


def scale_servings(per_serving: MacroProfile, servings: float) -> MacroProfile:
    """Scale a per-serving profile by a number of servings."""
    return per_serving.scaled(clamp_servings(servings))


def grams_to_servings(grams: float | None, serving_size: float) -> float:
    """Convert grams to servings; zero when the serving size is unusable."""
    if serving_size <= 0.0:
        return 0.0
    return (grams or 0.0) / serving_size


def scale_grams(
    per_serving: MacroProfile, grams: float | None, serving_size: float
) -> MacroProfile:
    """Scale a per-serving profile by a gram weight."""
    if serving_size <= 0.0:
        return MacroProfile.zero()
    return scale_servings(per_serving, grams_to_servings(grams, serving_size))


def sum_profiles(profiles: Iterable[MacroProfile]) -> MacroProfile:
    """Add up a sequence of profiles."""
    total = MacroProfile.zero()
    for profile in profiles:
        total = total + profile
    return total


def round_calories(calories: float) -> int:
    """Round a calorie total to an integer, halves rounding up."""
    return math.floor(calories + 0.5)


def mifflin_st_jeor(
    weight_kg: float, height_cm: float, age: int, sex_offset: float
) -> float:
    """Basal metabolic rate in kcal/day."""
    return 10.0 * weight_kg + 6.25 * height_cm - 5.0 * age + sex_offset


def basal_metabolic_rate(
    weight_lb: float, height_in: float, age: int, sex_offset: float
) -> float:
    """Basal metabolic rate from imperial measurements."""
    return mifflin_st_jeor(
        weight_lb * KG_PER_LB, height_in * CM_PER_IN, age, sex_offset
    )
