"""Statistics over a user's day logs."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from nutrition_ledger.domain.goals import Goal
from nutrition_ledger.domain.logs import DayLog, FoodLog, MealType
from nutrition_ledger.domain.nutrition import MacroProfile, sum_profiles
from nutrition_ledger.domain.stats import (
    DailyTotals,
    GoalProgress,
    MealTotals,
    NutrientProgress,
    WeeklySummary,
)
from nutrition_ledger.services.goals import (
    DEFAULT_CALORIES,
    DEFAULT_CARBS_G,
    DEFAULT_FAT_G,
    DEFAULT_PROTEIN_G,
)

WEEK_DAYS = 7
UNKNOWN_ITEM = "Item"


class DayLogSource(Protocol):
    """Read access to the active user's day logs."""

    def find_day_log(self, day: date) -> DayLog | None:
        """Return the day log for a date without creating it."""

    def resolve_food_name(self, food_id: str | None) -> str:
        """Return the display name of a food or custom food id."""


@dataclass
class StatsService:
    """Service for dashboard and history figures."""

    source: DayLogSource

    def get_day(self, day: date) -> DailyTotals:
        """Totals for one date; zero when nothing was logged."""
        return _daily_totals(day, self.source.find_day_log(day))

    def get_week(self, end: date | None = None) -> WeeklySummary:
        """The seven days ending at ``end`` with per-day averages."""
        last = end or date.today()
        start = last - timedelta(days=WEEK_DAYS - 1)
        daily = [
            self.get_day(start + timedelta(days=offset)) for offset in range(WEEK_DAYS)
        ]
        return WeeklySummary(
            daily=daily,
            avg_calories=sum(d.calories for d in daily) / WEEK_DAYS,
            avg_protein_g=sum(d.protein_g for d in daily) / WEEK_DAYS,
            avg_carbs_g=sum(d.carbs_g for d in daily) / WEEK_DAYS,
            avg_fat_g=sum(d.fat_g for d in daily) / WEEK_DAYS,
        )

    def describe_entry(self, log: FoodLog) -> str:
        """One-line description such as ``Oats - 150 kcal (8:05 AM)``."""
        name = self.source.resolve_food_name(log.food_id).strip() or UNKNOWN_ITEM
        return f"{name} - {log.calories:.0f} kcal ({log.formatted_time()})"


def meal_breakdown(day_log: DayLog | None) -> list[MealTotals]:
    """Per-meal totals for a day, one row for every meal type."""
    grouped: dict[MealType, list[FoodLog]] = {meal: [] for meal in MealType}
    if day_log is not None:
        for log in day_log.food_logs:
            grouped[log.meal_type or MealType.SNACK].append(log)
    return [
        MealTotals(
            meal_type=meal,
            entry_count=len(logs),
            totals=sum_profiles(log.nutrients for log in logs),
        )
        for meal, logs in grouped.items()
    ]


def goal_progress(day_log: DayLog | None, goal: Goal | None) -> GoalProgress:
    """Compare a day's totals with a goal, or the default targets."""
    consumed = day_log.totals if day_log is not None else MacroProfile.zero()
    if goal is None:
        target = MacroProfile(
            float(DEFAULT_CALORIES), DEFAULT_PROTEIN_G, DEFAULT_CARBS_G, DEFAULT_FAT_G
        )
    else:
        target = MacroProfile(
            float(goal.target_calories),
            goal.target_protein_g,
            goal.target_carbs_g,
            goal.target_fat_g,
        )
    return GoalProgress(
        calories=NutrientProgress(consumed.calories, target.calories),
        protein_g=NutrientProgress(consumed.protein_g, target.protein_g),
        carbs_g=NutrientProgress(consumed.carbs_g, target.carbs_g),
        fat_g=NutrientProgress(consumed.fat_g, target.fat_g),
    )


def _daily_totals(day: date, day_log: DayLog | None) -> DailyTotals:
    if day_log is None:
        return DailyTotals(day=day, calories=0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)
    day_log.compute_totals()
    return DailyTotals(
        day=day,
        calories=day_log.total_calories,
        protein_g=day_log.total_protein_g,
        carbs_g=day_log.total_carbs_g,
        fat_g=day_log.total_fat_g,
    )
