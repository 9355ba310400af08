"""Services for the shared food catalog and user custom foods."""

from dataclasses import dataclass, field

from nutrition_ledger.domain.foods import (
    CustomFood,
    Food,
    is_mirror_food_id,
    mirror_food_id,
)

DEFAULT_FOODS = (
    Food("f1", "Chicken Breast", "Generic", "Protein", 1.0, 165, 31, 0, 3.6),
    Food("f2", "Brown Rice", "Generic", "Carb", 1.0, 218, 4.5, 45.8, 1.6),
    Food("f3", "Broccoli", "Generic", "Veg", 1.0, 55, 3.7, 11.2, 0.6),
)


@dataclass
class LibraryService:
    """Catalog visibility, search and custom-food mirroring."""

    foods: list[Food] = field(default_factory=list)
    custom_foods: list[CustomFood] = field(default_factory=list)

    def seed_defaults(self) -> bool:
        """Insert the starter catalog when it is empty."""
        if self.foods:
            return False
        self.foods.extend(DEFAULT_FOODS)
        return True

    def visible_foods(self, user_id: str | None) -> list[Food]:
        """Catalog as seen by a user: global foods plus their own mirrors."""
        if not user_id:
            return list(self.foods)
        allowed = {
            custom.mirror_id
            for custom in self.custom_foods
            if custom.user_id.lower() == user_id.lower()
        }
        return [
            food
            for food in self.foods
            if not is_mirror_food_id(food.id) or food.id in allowed
        ]

    def search(self, user_id: str | None, query: str | None) -> list[Food]:
        """Visible foods whose name, brand or category contains the query."""
        needle = (query or "").strip().lower()
        foods = self.visible_foods(user_id)
        if not needle:
            return foods
        return [
            food
            for food in foods
            if needle in (food.name or "").lower()
            or needle in (food.brand or "").lower()
            or needle in (food.category or "").lower()
        ]

    def custom_foods_for(self, user_id: str | None) -> list[CustomFood]:
        """Custom foods owned by a user."""
        if not user_id:
            return []
        return [
            custom
            for custom in self.custom_foods
            if custom.user_id.lower() == user_id.lower()
        ]

    def get_custom_food(self, custom_food_id: str) -> CustomFood | None:
        for custom in self.custom_foods:
            if custom.id == custom_food_id:
                return custom
        return None

    def get_food(self, food_id: str) -> Food | None:
        for food in self.foods:
            if food.id == food_id:
                return food
        return None

    def add_custom_food(
        self, custom_food: CustomFood, mirror: Food | None = None
    ) -> Food:
        """Store a custom food together with its catalog mirror."""
        mirror = mirror or custom_food.to_mirror_food()
        self.foods.append(mirror)
        self.custom_foods.append(custom_food)
        return mirror

    def remove_custom_food(self, custom_food_id: str) -> bool:
        """Remove a custom food and its mirror; return whether either existed."""
        mirror_id = mirror_food_id(custom_food_id)
        before_custom = len(self.custom_foods)
        before_foods = len(self.foods)
        self.custom_foods[:] = [c for c in self.custom_foods if c.id != custom_food_id]
        self.foods[:] = [f for f in self.foods if f.id != mirror_id]
        return (
            len(self.custom_foods) != before_custom or len(self.foods) != before_foods
        )

    def rename_owner(self, old_user_id: str, new_user_id: str) -> int:
        """Reassign custom foods to a renamed account."""
        moved = 0
        for custom in self.custom_foods:
            if custom.user_id.lower() == old_user_id.lower():
                custom.user_id = new_user_id
                moved += 1
        return moved

    def resolve_name(self, food_id: str | None) -> str:
        """Name of a catalog food or custom food by id, else empty."""
        if not food_id:
            return ""
        food = self.get_food(food_id)
        if food is not None:
            return food.name
        custom = self.get_custom_food(food_id)
        if custom is not None:
            return custom.name
        return ""
