"""Domain models for the food catalog and user composite foods."""

from dataclasses import dataclass, field

from nutrition_ledger.domain.nutrition import (
    MacroProfile,
    is_valid_quantity,
    round_calories,
    scale_grams,
    scale_servings,
    sum_profiles,
)

CUSTOM_FOOD_PREFIX = "cf_item_"
CUSTOM_BRAND = "Custom"
CUSTOM_CATEGORY = "Custom"


def mirror_food_id(custom_food_id: str) -> str:
    """Catalog id of the synthetic food mirroring a custom food."""
    return f"{CUSTOM_FOOD_PREFIX}{custom_food_id}"


def is_mirror_food_id(food_id: str | None) -> bool:
    """Return True when the id belongs to a custom food mirror."""
    return bool(food_id) and food_id.startswith(CUSTOM_FOOD_PREFIX)


@dataclass(frozen=True)
class Food:
    """Catalog entry with a per-serving nutrient profile."""

    id: str
    name: str
    brand: str
    category: str
    serving_size: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @property
    def per_serving(self) -> MacroProfile:
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )

    def for_servings(self, servings: float) -> MacroProfile:
        """Nutrients for a number of servings (negative counts as zero)."""
        return scale_servings(self.per_serving, servings)

    def for_grams(self, grams: float | None) -> MacroProfile:
        """Nutrients for a gram weight; zero without a usable serving size."""
        return scale_grams(self.per_serving, grams, self.serving_size)

    def calories_for_servings(self, servings: float) -> float:
        return self.for_servings(servings).calories

    def calories_for_grams(self, grams: float | None) -> float:
        return self.for_grams(grams).calories

    def __str__(self) -> str:
        name = self.name.strip() if self.name and self.name.strip() else "Food"
        return f"{name} ({round_calories(self.calories)} kcal/serving)"


@dataclass(frozen=True)
class Ingredient:
    """A food and the grams of it used in a composite."""

    food: Food
    grams: float

    @property
    def nutrients(self) -> MacroProfile:
        return self.food.for_grams(self.grams)


@dataclass
class CustomFood:
    """User-owned composite of catalog foods weighed in grams."""

    id: str
    user_id: str
    name: str
    description: str = ""
    ingredients: list[Ingredient] = field(default_factory=list)

    @property
    def mirror_id(self) -> str:
        return mirror_food_id(self.id)

    def add_ingredient(self, food: Food | None, grams: float) -> None:
        """Add grams of a food, merging into an existing entry for the same id."""
        if food is None or not is_valid_quantity(grams):
            return
        for index, ingredient in enumerate(self.ingredients):
            if ingredient.food.id == food.id:
                self.ingredients[index] = Ingredient(food, ingredient.grams + grams)
                return
        self.ingredients.append(Ingredient(food, grams))

    def remove_ingredient(self, food: Food | None) -> None:
        """Remove every ingredient entry for the food's id."""
        if food is None:
            return
        self.ingredients = [
            ingredient
            for ingredient in self.ingredients
            if ingredient.food.id != food.id
        ]

    def compute_nutrients(self) -> MacroProfile:
        """Total nutrients of the whole composite."""
        return sum_profiles(ingredient.nutrients for ingredient in self.ingredients)

    def compute_calories(self) -> float:
        return self.compute_nutrients().calories

    def to_mirror_food(self) -> Food:
        """Single-serving catalog food carrying the composite's totals."""
        totals = self.compute_nutrients()
        return Food(
            id=self.mirror_id,
            name=self.name,
            brand=CUSTOM_BRAND,
            category=CUSTOM_CATEGORY,
            serving_size=1.0,
            calories=totals.calories,
            protein_g=totals.protein_g,
            carbs_g=totals.carbs_g,
            fat_g=totals.fat_g,
        )
