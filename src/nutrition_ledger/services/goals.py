"""Goal construction from user input."""

import math
from datetime import date, timedelta
from uuid import uuid4

from nutrition_ledger.domain.goals import Goal

GOAL_DURATION_DAYS = 30
DEFAULT_CALORIES = 2000
DEFAULT_PROTEIN_G = 150.0
DEFAULT_CARBS_G = 200.0
DEFAULT_FAT_G = 65.0


def build_goal(  # noqa: PLR0913
    calories: int,
    protein_g: float,
    carbs_g: float,
    fat_g: float,
    start: date | None = None,
    duration_days: int = GOAL_DURATION_DAYS,
) -> Goal:
    """Create a goal running from ``start`` for ``duration_days`` days."""
    start_date = start or date.today()
    return Goal(
        id=str(uuid4()),
        target_calories=calories,
        target_protein_g=protein_g,
        target_carbs_g=carbs_g,
        target_fat_g=fat_g,
        start_date=start_date,
        end_date=start_date + timedelta(days=duration_days),
    )


def default_goal(start: date | None = None) -> Goal:
    """The starter 2000 kcal goal."""
    return build_goal(
        DEFAULT_CALORIES, DEFAULT_PROTEIN_G, DEFAULT_CARBS_G, DEFAULT_FAT_G, start
    )


def parse_goal_targets(
    calories: object, protein_g: object, carbs_g: object, fat_g: object
) -> tuple[int, float, float, float] | None:
    """Parse raw goal fields; ``None`` when any is non-numeric or negative."""
    try:
        parsed_calories = int(str(calories).strip())
        macros = tuple(
            float(str(value).strip()) for value in (protein_g, carbs_g, fat_g)
        )
    except ValueError:
        return None
    if parsed_calories < 0 or any(
        not math.isfinite(value) or value < 0 for value in macros
    ):
        return None
    return parsed_calories, macros[0], macros[1], macros[2]


def find_active_goal(goals: list[Goal], day: date | None = None) -> Goal | None:
    """First goal whose range includes the day (today by default)."""
    target = day or date.today()
    for goal in goals:
        if goal is not None and goal.is_active(target):
            return goal
    return None
