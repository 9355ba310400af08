"""Data manager: the single entry point used by the presentation layer.

The manager owns every top-level collection (users, credentials, catalog,
custom foods, day logs, goals) and the active session. State is loaded and
saved as one snapshot through a ``SnapshotRepository``; load problems reset
to a freshly seeded ledger and save problems are reported, never raised.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol
from uuid import uuid4

from nutrition_ledger.domain.foods import CustomFood, Food, mirror_food_id
from nutrition_ledger.domain.goals import Goal
from nutrition_ledger.domain.logs import (
    DayLog,
    FoodLog,
    MealType,
    food_log_from_custom_food,
    food_log_from_food,
)
from nutrition_ledger.domain.models import ActivityLevel, Sex, User
from nutrition_ledger.domain.nutrition import is_valid_quantity
from nutrition_ledger.domain.snapshot import LedgerState
from nutrition_ledger.services.credentials import (
    DEFAULT_SALT_BYTES,
    CredentialStore,
    normalize_email,
)
from nutrition_ledger.services.day_logs import DayLogIndex
from nutrition_ledger.services.goals import (
    build_goal,
    default_goal,
    find_active_goal,
    parse_goal_targets,
)
from nutrition_ledger.services.library import LibraryService

_logger = logging.getLogger(__name__)


class SnapshotError(RuntimeError):
    """Raised by a repository when a stored snapshot cannot be read."""


class SnapshotRepository(Protocol):
    """Persistence interface for whole-ledger snapshots."""

    def load(self) -> LedgerState | None:
        """Return the stored state, or None when nothing has been saved yet."""

    def save(self, state: LedgerState) -> None:
        """Replace the stored state."""


@dataclass
class DataManager:
    """Application service composing catalog, credentials, logs and goals."""

    repository: SnapshotRepository
    autosave: bool = True
    salt_bytes: int = DEFAULT_SALT_BYTES
    active_user: User | None = field(default=None, init=False)
    goals: list[Goal] = field(default_factory=list, init=False)
    users: dict[str, User] = field(default_factory=dict, init=False)
    library: LibraryService = field(init=False)
    credentials: CredentialStore = field(init=False)
    day_log_index: DayLogIndex = field(init=False)
    last_save_error: Exception | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self._apply(LedgerState())

    # Collections

    @property
    def foods(self) -> list[Food]:
        return self.library.foods

    @property
    def custom_foods(self) -> list[CustomFood]:
        return self.library.custom_foods

    @property
    def day_logs(self) -> list[DayLog]:
        return self.day_log_index.day_logs

    # Persistence

    def load_all(self) -> bool:
        """Load the snapshot; return True when stored data was restored."""
        try:
            state = self.repository.load()
        except SnapshotError as exc:
            _logger.warning("Snapshot unreadable, starting fresh: %s", exc)
            state = None
            restored = False
        else:
            restored = state is not None
        self._apply(state or LedgerState())
        if self.library.seed_defaults():
            _logger.info("Seeded default food catalog")
        return restored

    def save_all(self) -> bool:
        """Write the snapshot; failures are logged and kept in ``last_save_error``."""
        try:
            self.repository.save(self.snapshot_state())
        except (OSError, ValueError, TypeError, SnapshotError) as exc:
            _logger.warning("Snapshot save failed: %s", exc)
            self.last_save_error = exc
            return False
        self.last_save_error = None
        return True

    def snapshot_state(self) -> LedgerState:
        """Current state in the shape the repository persists."""
        return LedgerState(
            active_user_id=self.active_user.id if self.active_user else None,
            goals=list(self.goals),
            foods=list(self.library.foods),
            custom_foods=list(self.library.custom_foods),
            day_logs=list(self.day_log_index.day_logs),
            users=dict(self.users),
            password_salts=dict(self.credentials.salts),
            password_hashes=dict(self.credentials.hashes),
        )

    # Accounts

    def register(self, name: str | None, email: str | None, password: str | None) -> bool:
        """Create an account and sign it in; False on invalid or taken email."""
        key = normalize_email(email)
        if not key or not password or not password.strip():
            return False
        if key in self.users:
            return False
        user = User(id=key, name=(name or "").strip())
        self.users[key] = user
        self.credentials.set_password(key, password)
        self.active_user = user
        _logger.info("Registered account %s", key)
        self._persist()
        return True

    def authenticate(self, email: str | None, password: str | None) -> User | None:
        """Return the signed-in user, or None for any credential mismatch."""
        key = normalize_email(email)
        user = self.users.get(key)
        if user is None or not self.credentials.verify(key, password):
            return None
        self.active_user = user
        return user

    def sign_out(self) -> None:
        self.active_user = None

    def update_account_email(self, old_email: str | None, new_email: str | None) -> bool:
        """Rename an account's identity across every table keyed by it."""
        old_key = normalize_email(old_email)
        new_key = normalize_email(new_email)
        if not old_key or not new_key:
            return False
        if old_key not in self.users or new_key in self.users:
            return False

        was_active = self.active_user is not None and (
            self.active_user.id.lower() == old_key
        )
        user = self.users.pop(old_key)
        self.credentials.rename(old_key, new_key)
        user.id = new_key
        self.users[new_key] = user
        if was_active:
            self.active_user = user

        self.library.rename_owner(old_key, new_key)
        for day_log in self.day_log_index.day_logs:
            if day_log.user_id.lower() == old_key:
                day_log.user_id = new_key
        self.day_log_index.rebuild()

        _logger.info("Renamed account %s to %s", old_key, new_key)
        self._persist()
        return True

    def update_profile(  # noqa: PLR0913
        self,
        *,
        name: str | None = None,
        goal: str | None = None,
        age: int | None = None,
        sex: Sex | None = None,
        height_in: float | None = None,
        weight_lb: float | None = None,
        activity_level: ActivityLevel | None = None,
    ) -> bool:
        """Edit the active user's profile; blank names are ignored."""
        user = self.active_user
        if user is None:
            return False
        if any(
            value is not None and not _is_non_negative(value)
            for value in (age, height_in, weight_lb)
        ):
            return False
        if name is not None and name.strip():
            user.name = name.strip()
        if goal is not None:
            user.goal = goal
        if age is not None:
            user.age = age
        if sex is not None:
            user.sex = sex
        if height_in is not None:
            user.height_in = height_in
        if weight_lb is not None:
            user.weight_lb = weight_lb
        if activity_level is not None:
            user.activity_level = activity_level
        return True

    # Catalog and custom foods

    def foods_for_active_user(self) -> list[Food]:
        return self.library.visible_foods(self._active_user_id())

    def search_foods(self, query: str | None) -> list[Food]:
        return self.library.search(self._active_user_id(), query)

    def custom_foods_for_active_user(self) -> list[CustomFood]:
        return self.library.custom_foods_for(self._active_user_id())

    def create_custom_food(
        self,
        name: str | None,
        ingredients: Iterable[tuple[Food, float]],
        description: str = "",
    ) -> CustomFood | None:
        """Build a composite from (food, grams) pairs and mirror it in the catalog."""
        user_id = self._active_user_id()
        title = (name or "").strip()
        if not user_id or not title:
            return None
        custom = CustomFood(
            id=str(uuid4()), user_id=user_id, name=title, description=description
        )
        for food, grams in ingredients:
            custom.add_ingredient(food, grams)
        if not custom.compute_nutrients().is_finite():
            return None
        self.library.add_custom_food(custom)
        self._persist()
        return custom

    def create_simple_custom_food(  # noqa: PLR0913
        self,
        name: str | None,
        calories: float,
        protein_g: float = 0.0,
        carbs_g: float = 0.0,
        fat_g: float = 0.0,
    ) -> CustomFood | None:
        """Create a custom food from per-serving values entered by hand."""
        user_id = self._active_user_id()
        title = (name or "").strip()
        if not user_id or not title:
            return None
        if not all(
            _is_non_negative(value) for value in (calories, protein_g, carbs_g, fat_g)
        ):
            return None
        custom_id = str(uuid4())
        per_serving = Food(
            id=mirror_food_id(custom_id),
            name=title,
            brand="Custom",
            category="Custom",
            serving_size=1.0,
            calories=calories,
            protein_g=protein_g,
            carbs_g=carbs_g,
            fat_g=fat_g,
        )
        custom = CustomFood(id=custom_id, user_id=user_id, name=title)
        custom.add_ingredient(per_serving, 1.0)
        self.library.add_custom_food(custom, mirror=per_serving)
        self._persist()
        return custom

    def delete_custom_food(self, custom_food_id: str | None) -> bool:
        """Remove a custom food, its mirror and every log entry using either."""
        if not custom_food_id or not custom_food_id.strip():
            return False
        mirror_id = mirror_food_id(custom_food_id)
        removed = self.library.remove_custom_food(custom_food_id)
        stripped = sum(
            day_log.remove_where(lambda log: log.food_id in (custom_food_id, mirror_id))
            for day_log in self.day_log_index.day_logs
        )
        if removed:
            _logger.info(
                "Deleted custom food %s and %s log entries", custom_food_id, stripped
            )
        if removed or stripped:
            self._persist()
        return removed

    def resolve_food_name(self, food_id: str | None) -> str:
        return self.library.resolve_name(food_id)

    # Day logs

    def get_or_create_day_log(self, day: date | None = None) -> DayLog | None:
        """Active user's log for the date, created lazily; None when signed out."""
        user_id = self._active_user_id()
        if user_id is None:
            return None
        return self.day_log_index.get_or_create(user_id, day or date.today())

    def find_day_log(self, day: date) -> DayLog | None:
        """Active user's log for the date without creating one."""
        user_id = self._active_user_id()
        if user_id is None:
            return None
        return self.day_log_index.get(user_id, day)

    def create_food_log_from_food(  # noqa: PLR0913
        self,
        food: Food | None,
        meal_type: MealType,
        servings: float,
        timestamp: datetime | None = None,
        notes: str = "",
        log_id: str | None = None,
    ) -> FoodLog:
        return food_log_from_food(food, meal_type, servings, timestamp, notes, log_id)

    def create_food_log_from_custom_food(  # noqa: PLR0913
        self,
        custom_food: CustomFood | None,
        meal_type: MealType,
        servings: float,
        timestamp: datetime | None = None,
        notes: str = "",
        log_id: str | None = None,
    ) -> FoodLog:
        return food_log_from_custom_food(
            custom_food, meal_type, servings, timestamp, notes, log_id
        )

    def add_food_log(self, day: date | None, log: FoodLog | None) -> DayLog | None:
        """Append an entry to the day and return the refreshed day log."""
        if log is None or not _is_loggable(log):
            return None
        day_log = self.get_or_create_day_log(day)
        if day_log is None:
            return None
        day_log.add_food_log(log)
        return day_log

    def log_food(  # noqa: PLR0913
        self,
        day: date,
        food: Food | None,
        meal_type: MealType,
        servings: float,
        notes: str = "",
        timestamp: datetime | None = None,
    ) -> FoodLog | None:
        """Validate and record servings of a catalog food on a date."""
        if (
            food is None
            or not is_valid_quantity(servings)
            or self.active_user is None
        ):
            return None
        log = food_log_from_food(
            food, meal_type, servings, timestamp or _at_current_time(day), notes
        )
        if self.add_food_log(day, log) is None:
            return None
        return log

    def log_custom_food(  # noqa: PLR0913
        self,
        day: date,
        custom_food: CustomFood | None,
        meal_type: MealType,
        servings: float,
        notes: str = "",
        timestamp: datetime | None = None,
    ) -> FoodLog | None:
        """Validate and record servings of a custom food on a date."""
        if (
            custom_food is None
            or not is_valid_quantity(servings)
            or self.active_user is None
        ):
            return None
        log = food_log_from_custom_food(
            custom_food, meal_type, servings, timestamp or _at_current_time(day), notes
        )
        if self.add_food_log(day, log) is None:
            return None
        return log

    def remove_food_log(self, day: date, log_id: str) -> bool:
        """Remove one entry from the active user's day."""
        day_log = self.find_day_log(day)
        if day_log is None:
            return False
        return day_log.remove_food_log(log_id)

    # Goals

    def replace_goals(self, goals: Iterable[Goal]) -> None:
        self.goals[:] = [goal for goal in goals if goal is not None]

    def active_goal(self, today: date | None = None) -> Goal | None:
        return find_active_goal(self.goals, today)

    def save_goal_targets(  # noqa: PLR0913
        self,
        calories: object,
        protein_g: object,
        carbs_g: object,
        fat_g: object,
        start: date | None = None,
    ) -> Goal | None:
        """Parse goal fields and make them the only goal; None when invalid."""
        parsed = parse_goal_targets(calories, protein_g, carbs_g, fat_g)
        if parsed is None:
            return None
        goal = build_goal(*parsed, start=start)
        self.replace_goals([goal])
        return goal

    def reset_goals(self, start: date | None = None) -> Goal:
        goal = default_goal(start)
        self.replace_goals([goal])
        return goal

    # Internals

    def _active_user_id(self) -> str | None:
        if self.active_user is None or not self.active_user.id:
            return None
        return self.active_user.id

    def _persist(self) -> None:
        if self.autosave:
            self.save_all()

    def _apply(self, state: LedgerState) -> None:
        self.goals = list(state.goals)
        self.users = dict(state.users)
        self.library = LibraryService(
            foods=list(state.foods), custom_foods=list(state.custom_foods)
        )
        self.credentials = CredentialStore(
            salts=dict(state.password_salts),
            hashes=dict(state.password_hashes),
            salt_bytes=self.salt_bytes,
        )
        self.day_log_index = DayLogIndex(list(state.day_logs))
        for day_log in self.day_log_index.day_logs:
            day_log.compute_totals()
        self.active_user = (
            self.users.get(state.active_user_id) if state.active_user_id else None
        )


def _at_current_time(day: date) -> datetime:
    return datetime.combine(day, datetime.now().time())


def _is_non_negative(value: float) -> bool:
    return math.isfinite(value) and value >= 0


def _is_loggable(log: FoodLog) -> bool:
    return math.isfinite(log.servings) and log.nutrients.is_finite()
