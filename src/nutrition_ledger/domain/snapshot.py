"""Whole-ledger state exchanged with the snapshot repository."""

from dataclasses import dataclass, field

from nutrition_ledger.domain.foods import CustomFood, Food
from nutrition_ledger.domain.goals import Goal
from nutrition_ledger.domain.logs import DayLog
from nutrition_ledger.domain.models import User


@dataclass
class LedgerState:
    """Everything that is persisted, in snapshot order."""

    active_user_id: str | None = None
    goals: list[Goal] = field(default_factory=list)
    foods: list[Food] = field(default_factory=list)
    custom_foods: list[CustomFood] = field(default_factory=list)
    day_logs: list[DayLog] = field(default_factory=list)
    users: dict[str, User] = field(default_factory=dict)
    password_salts: dict[str, str] = field(default_factory=dict)
    password_hashes: dict[str, str] = field(default_factory=dict)
