"""Versioned JSON schema for ledger snapshots."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from nutrition_ledger.domain.foods import CustomFood, Food, Ingredient
from nutrition_ledger.domain.goals import Goal
from nutrition_ledger.domain.logs import DayLog, FoodLog, MealType
from nutrition_ledger.domain.models import ActivityLevel, Sex, User
from nutrition_ledger.domain.snapshot import LedgerState

SNAPSHOT_VERSION = 1


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UserRecord(_Record):
    """Stored user profile."""

    kind: Literal["user"] = "user"
    id: str
    name: str = ""
    goal: str = ""
    age: int = 0
    sex: Sex = Sex.OTHER
    height_in: float = 0.0
    weight_lb: float = 0.0
    activity_level: ActivityLevel | None = ActivityLevel.SEDENTARY

    @classmethod
    def from_domain(cls, user: User) -> "UserRecord":
        return cls(
            id=user.id,
            name=user.name,
            goal=user.goal,
            age=user.age,
            sex=user.sex,
            height_in=user.height_in,
            weight_lb=user.weight_lb,
            activity_level=user.activity_level,
        )

    def to_domain(self) -> User:
        return User(
            id=self.id,
            name=self.name,
            goal=self.goal,
            age=self.age,
            sex=self.sex,
            height_in=self.height_in,
            weight_lb=self.weight_lb,
            activity_level=self.activity_level,
        )


class FoodRecord(_Record):
    """Stored catalog food."""

    kind: Literal["food"] = "food"
    id: str
    name: str = ""
    brand: str = ""
    category: str = ""
    serving_size: float = 0.0
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    @classmethod
    def from_domain(cls, food: Food) -> "FoodRecord":
        return cls(
            id=food.id,
            name=food.name,
            brand=food.brand,
            category=food.category,
            serving_size=food.serving_size,
            calories=food.calories,
            protein_g=food.protein_g,
            carbs_g=food.carbs_g,
            fat_g=food.fat_g,
        )

    def to_domain(self) -> Food:
        return Food(
            id=self.id,
            name=self.name,
            brand=self.brand,
            category=self.category,
            serving_size=self.serving_size,
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


class IngredientRecord(_Record):
    """Food copy and grams inside a custom food."""

    food: FoodRecord
    grams: float = 0.0


class CustomFoodRecord(_Record):
    """Stored custom food."""

    kind: Literal["custom_food"] = "custom_food"
    id: str
    user_id: str
    name: str = ""
    description: str = ""
    ingredients: list[IngredientRecord] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, custom: CustomFood) -> "CustomFoodRecord":
        return cls(
            id=custom.id,
            user_id=custom.user_id,
            name=custom.name,
            description=custom.description,
            ingredients=[
                IngredientRecord(
                    food=FoodRecord.from_domain(ingredient.food),
                    grams=ingredient.grams,
                )
                for ingredient in custom.ingredients
            ],
        )

    def to_domain(self) -> CustomFood:
        return CustomFood(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            description=self.description,
            ingredients=[
                Ingredient(food=item.food.to_domain(), grams=item.grams)
                for item in self.ingredients
            ],
        )


class FoodLogRecord(_Record):
    """Stored consumption entry with its frozen totals."""

    kind: Literal["food_log"] = "food_log"
    id: str
    food_id: str = ""
    meal_type: MealType = MealType.SNACK
    servings: float = 0.0
    timestamp: dt.datetime | None = None
    notes: str = ""
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    @classmethod
    def from_domain(cls, log: FoodLog) -> "FoodLogRecord":
        return cls(
            id=log.id,
            food_id=log.food_id,
            meal_type=log.meal_type,
            servings=log.servings,
            timestamp=log.timestamp,
            notes=log.notes,
            calories=log.calories,
            protein_g=log.protein_g,
            carbs_g=log.carbs_g,
            fat_g=log.fat_g,
        )

    def to_domain(self) -> FoodLog:
        return FoodLog(
            id=self.id,
            food_id=self.food_id,
            meal_type=self.meal_type,
            servings=self.servings,
            timestamp=self.timestamp,
            notes=self.notes,
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


class DayLogRecord(_Record):
    """Stored day log; totals are informational and recomputed on load."""

    kind: Literal["day_log"] = "day_log"
    id: str
    user_id: str = ""
    date: dt.date
    food_logs: list[FoodLogRecord] = Field(default_factory=list)
    total_calories: int = 0
    total_protein_g: float = 0.0
    total_carbs_g: float = 0.0
    total_fat_g: float = 0.0

    @classmethod
    def from_domain(cls, day_log: DayLog) -> "DayLogRecord":
        return cls(
            id=day_log.id,
            user_id=day_log.user_id,
            date=day_log.date,
            food_logs=[FoodLogRecord.from_domain(log) for log in day_log.food_logs],
            total_calories=day_log.total_calories,
            total_protein_g=day_log.total_protein_g,
            total_carbs_g=day_log.total_carbs_g,
            total_fat_g=day_log.total_fat_g,
        )

    def to_domain(self) -> DayLog:
        return DayLog(
            id=self.id,
            user_id=self.user_id,
            date=self.date,
            food_logs=[log.to_domain() for log in self.food_logs],
        )


class GoalRecord(_Record):
    """Stored goal."""

    kind: Literal["goal"] = "goal"
    id: str
    target_calories: int = 0
    target_protein_g: float = 0.0
    target_carbs_g: float = 0.0
    target_fat_g: float = 0.0
    start_date: dt.date | None = None
    end_date: dt.date | None = None

    @classmethod
    def from_domain(cls, goal: Goal) -> "GoalRecord":
        return cls(
            id=goal.id,
            target_calories=goal.target_calories,
            target_protein_g=goal.target_protein_g,
            target_carbs_g=goal.target_carbs_g,
            target_fat_g=goal.target_fat_g,
            start_date=goal.start_date,
            end_date=goal.end_date,
        )

    def to_domain(self) -> Goal:
        return Goal(
            id=self.id,
            target_calories=self.target_calories,
            target_protein_g=self.target_protein_g,
            target_carbs_g=self.target_carbs_g,
            target_fat_g=self.target_fat_g,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class LedgerSnapshot(_Record):
    """Top-level snapshot document."""

    version: int
    active_user_id: str | None = None
    goals: list[GoalRecord] = Field(default_factory=list)
    foods: list[FoodRecord] = Field(default_factory=list)
    custom_foods: list[CustomFoodRecord] = Field(default_factory=list)
    day_logs: list[DayLogRecord] = Field(default_factory=list)
    users: dict[str, UserRecord] = Field(default_factory=dict)
    password_salts: dict[str, str] = Field(default_factory=dict)
    password_hashes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_state(cls, state: LedgerState) -> "LedgerSnapshot":
        return cls(
            version=SNAPSHOT_VERSION,
            active_user_id=state.active_user_id,
            goals=[GoalRecord.from_domain(goal) for goal in state.goals],
            foods=[FoodRecord.from_domain(food) for food in state.foods],
            custom_foods=[
                CustomFoodRecord.from_domain(custom) for custom in state.custom_foods
            ],
            day_logs=[DayLogRecord.from_domain(log) for log in state.day_logs],
            users={
                email: UserRecord.from_domain(user)
                for email, user in state.users.items()
            },
            password_salts=dict(state.password_salts),
            password_hashes=dict(state.password_hashes),
        )

    def to_state(self) -> LedgerState:
        return LedgerState(
            active_user_id=self.active_user_id,
            goals=[goal.to_domain() for goal in self.goals],
            foods=[food.to_domain() for food in self.foods],
            custom_foods=[custom.to_domain() for custom in self.custom_foods],
            day_logs=[log.to_domain() for log in self.day_logs],
            users={email: user.to_domain() for email, user in self.users.items()},
            password_salts=dict(self.password_salts),
            password_hashes=dict(self.password_hashes),
        )
