"""Domain model for nutrition goals."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, eq=False)
class Goal:
    """Daily calorie and macro targets over an inclusive date range."""

    id: str
    target_calories: int
    target_protein_g: float
    target_carbs_g: float
    target_fat_g: float
    start_date: date | None
    end_date: date | None

    def is_active(self, day: date | None) -> bool:
        """Return True when ``start_date <= day <= end_date``."""
        if day is None or self.start_date is None or self.end_date is None:
            return False
        return self.start_date <= day <= self.end_date

    def progress_calories(self, consumed: float) -> float:
        """Fraction of the calorie target consumed."""
        if self.target_calories <= 0:
            return 0.0
        return consumed / float(self.target_calories)

    def summary(self) -> str:
        return (
            f"Goal {self.id}: {self.target_calories} kcal, "
            f"P={self.target_protein_g:.0f}g C={self.target_carbs_g:.0f}g "
            f"F={self.target_fat_g:.0f}g ({self.start_date} to {self.end_date})"
        )

    def __str__(self) -> str:
        return self.summary()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Goal):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
