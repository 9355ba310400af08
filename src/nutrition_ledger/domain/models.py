"""Domain models for user accounts."""

from dataclasses import dataclass
from enum import Enum

from nutrition_ledger.domain.nutrition import basal_metabolic_rate


class Sex(str, Enum):
    """Biological sex used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @property
    def bmr_offset(self) -> float:
        """Mifflin-St Jeor constant for this sex."""
        return _BMR_OFFSETS[self]


_BMR_OFFSETS = {Sex.MALE: 5.0, Sex.FEMALE: -161.0, Sex.OTHER: 0.0}


class ActivityLevel(str, Enum):
    """Activity tiers with their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"

    @property
    def multiplier(self) -> float:
        """Factor applied to BMR for total daily energy expenditure."""
        return _ACTIVITY_MULTIPLIERS[self]


_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}


@dataclass(eq=False)
class User:
    """A registered account. ``id`` is the normalized email address."""

    id: str
    name: str = ""
    goal: str = ""
    age: int = 0
    sex: Sex = Sex.OTHER
    height_in: float = 0.0
    weight_lb: float = 0.0
    activity_level: ActivityLevel | None = ActivityLevel.SEDENTARY

    def calculate_bmr(self) -> float:
        """Basal metabolic rate in kcal/day."""
        return basal_metabolic_rate(
            self.weight_lb, self.height_in, self.age, self.sex.bmr_offset
        )

    def calculate_tdee(self) -> float:
        """Total daily energy expenditure in kcal/day."""
        level = self.activity_level or ActivityLevel.SEDENTARY
        return self.calculate_bmr() * level.multiplier

    def display_name(self) -> str:
        """Name for greetings, falling back to a generic label."""
        return self.name.strip() or "User"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
