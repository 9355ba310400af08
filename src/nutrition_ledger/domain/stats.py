"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from nutrition_ledger.domain.logs import MealType
from nutrition_ledger.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros."""

    day: date
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class MealTotals:
    """Totals for one meal slot of a day."""

    meal_type: MealType
    entry_count: int
    totals: MacroProfile


@dataclass(frozen=True)
class WeeklySummary:
    """Seven consecutive days with their averages."""

    daily: list[DailyTotals]
    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float


@dataclass(frozen=True)
class NutrientProgress:
    """Consumed amount of one nutrient against its target."""

    consumed: float
    target: float

    @property
    def ratio(self) -> float:
        """Progress clamped to ``[0, 1]``."""
        if self.target <= 0:
            return 0.0
        return min(1.0, max(0.0, self.consumed / self.target))

    @property
    def remaining(self) -> float:
        return max(0.0, self.target - self.consumed)


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a day's totals against the active (or default) goal."""

    calories: NutrientProgress
    protein_g: NutrientProgress
    carbs_g: NutrientProgress
    fat_g: NutrientProgress
