"""Domain models for consumption logs."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import uuid4

from nutrition_ledger.domain.foods import CustomFood, Food
from nutrition_ledger.domain.nutrition import (
    MacroProfile,
    clamp_servings,
    round_calories,
    sum_profiles,
)


class MealType(str, Enum):
    """Meal slot an entry was eaten in."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class FoodLog:
    """One consumption event with totals frozen at creation time."""

    id: str
    food_id: str
    meal_type: MealType
    servings: float
    timestamp: datetime | None
    notes: str
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    @property
    def nutrients(self) -> MacroProfile:
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )

    def formatted_time(self) -> str:
        """Clock time such as ``7:05 PM``; empty without a timestamp."""
        if self.timestamp is None:
            return ""
        hour = self.timestamp.hour % 12 or 12
        suffix = "AM" if self.timestamp.hour < 12 else "PM"
        return f"{hour}:{self.timestamp.minute:02d} {suffix}"


def food_log_from_food(  # noqa: PLR0913
    food: Food | None,
    meal_type: MealType,
    servings: float,
    timestamp: datetime | None,
    notes: str = "",
    log_id: str | None = None,
) -> FoodLog:
    """Build a log entry for servings of a catalog food."""
    totals = food.for_servings(servings) if food else MacroProfile.zero()
    return _build_log(
        food.id if food else "",
        totals,
        meal_type,
        servings,
        timestamp,
        notes,
        log_id,
    )


def food_log_from_custom_food(  # noqa: PLR0913
    custom_food: CustomFood | None,
    meal_type: MealType,
    servings: float,
    timestamp: datetime | None,
    notes: str = "",
    log_id: str | None = None,
) -> FoodLog:
    """Build a log entry for servings of a whole custom food."""
    totals = (
        custom_food.compute_nutrients().scaled(clamp_servings(servings))
        if custom_food
        else MacroProfile.zero()
    )
    return _build_log(
        custom_food.id if custom_food else "",
        totals,
        meal_type,
        servings,
        timestamp,
        notes,
        log_id,
    )


def _build_log(  # noqa: PLR0913
    food_id: str,
    totals: MacroProfile,
    meal_type: MealType,
    servings: float,
    timestamp: datetime | None,
    notes: str,
    log_id: str | None,
) -> FoodLog:
    return FoodLog(
        id=log_id or str(uuid4()),
        food_id=food_id,
        meal_type=meal_type,
        servings=servings,
        timestamp=timestamp,
        notes=notes or "",
        calories=totals.calories,
        protein_g=totals.protein_g,
        carbs_g=totals.carbs_g,
        fat_g=totals.fat_g,
    )


@dataclass
class DayLog:
    """A user's entries for one calendar date with cached daily totals."""

    id: str
    user_id: str
    date: date
    food_logs: list[FoodLog] = field(default_factory=list)
    total_calories: int = field(default=0, init=False)
    total_protein_g: float = field(default=0.0, init=False)
    total_carbs_g: float = field(default=0.0, init=False)
    total_fat_g: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.compute_totals()

    def add_food_log(self, log: FoodLog | None) -> None:
        """Append an entry and refresh totals."""
        if log is None:
            return
        self.food_logs.append(log)
        self.compute_totals()

    def remove_food_log(self, log_id: str) -> bool:
        """Drop the entry with the given id; return whether one was removed."""
        return self.remove_where(lambda log: log.id == log_id) > 0

    def remove_where(self, predicate: Callable[[FoodLog], bool]) -> int:
        """Drop entries matching a predicate; return how many were removed."""
        kept = [log for log in self.food_logs if not predicate(log)]
        removed = len(self.food_logs) - len(kept)
        if removed:
            self.food_logs = kept
            self.compute_totals()
        return removed

    def compute_totals(self) -> None:
        """Recompute cached totals from the current entries."""
        totals = sum_profiles(log.nutrients for log in self.food_logs)
        self.total_calories = round_calories(totals.calories)
        self.total_protein_g = totals.protein_g
        self.total_carbs_g = totals.carbs_g
        self.total_fat_g = totals.fat_g

    @property
    def totals(self) -> MacroProfile:
        return MacroProfile(
            calories=float(self.total_calories),
            protein_g=self.total_protein_g,
            carbs_g=self.total_carbs_g,
            fat_g=self.total_fat_g,
        )
