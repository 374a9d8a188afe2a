"""Domain models for dinner recommendations and the cookbook."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DISH_NAME = "Mystery Dish"
DEFAULT_CUISINE = "Fusion"
DEFAULT_COOKING_TIME = "30 minutes"
DEFAULT_DIFFICULTY = "Medium"
DEFAULT_REASON = "A delicious meal using your available ingredients"


class IngredientUsage(BaseModel):
    """One ingredient of a recommended dish."""

    model_config = ConfigDict(populate_by_name=True)

    food_item: str = Field(alias="foodItem")
    quantity: str
    is_expiring_soon: bool = Field(default=False, alias="isExpiringSoon")
    from_inventory: bool = Field(default=False, alias="fromInventory")


class DinnerRecommendation(BaseModel):
    """Structured dinner recommendation parsed from the model output."""

    model_config = ConfigDict(populate_by_name=True)

    dish_name: str = Field(default=DEFAULT_DISH_NAME, alias="dishName")
    cuisine: str = DEFAULT_CUISINE
    ingredients: list[IngredientUsage] = Field(default_factory=list)
    recipe: list[str] = Field(default_factory=list)
    cooking_time: str = Field(default=DEFAULT_COOKING_TIME, alias="cookingTime")
    difficulty: str = DEFAULT_DIFFICULTY
    video_search_chinese: str | None = Field(default=None, alias="videoSearchChinese")
    video_search_english: str | None = Field(default=None, alias="videoSearchEnglish")
    video_link: str | None = Field(default=None, alias="videoLink")
    reason: str = DEFAULT_REASON
    shopping_list: list[str] = Field(default_factory=list, alias="shoppingList")

    def inventory_ingredients(self) -> list[IngredientUsage]:
        """Ingredients the user already has."""
        return [item for item in self.ingredients if item.from_inventory]

    def ingredients_to_buy(self) -> list[IngredientUsage]:
        """Ingredients that must be purchased."""
        return [item for item in self.ingredients if not item.from_inventory]


@dataclass(frozen=True)
class Recipe:
    """A recommendation saved in the cookbook."""

    id: UUID
    dish_name: str
    cuisine: str
    date_created: datetime
    cooking_time: str = DEFAULT_COOKING_TIME
    difficulty: str = DEFAULT_DIFFICULTY
    reason: str = DEFAULT_REASON
    ingredients: list[IngredientUsage] = field(default_factory=list)
    recipe: list[str] = field(default_factory=list)
    video_search_chinese: str | None = None
    video_search_english: str | None = None
    video_link: str | None = None
    is_favorite: bool = False

    def to_recommendation(self) -> DinnerRecommendation:
        """Rebuild the displayable recommendation from the stored recipe."""
        return DinnerRecommendation(
            dish_name=self.dish_name,
            cuisine=self.cuisine,
            ingredients=list(self.ingredients),
            recipe=list(self.recipe),
            cooking_time=self.cooking_time,
            difficulty=self.difficulty,
            video_search_chinese=self.video_search_chinese,
            video_search_english=self.video_search_english,
            video_link=self.video_link,
            reason=self.reason,
        )


@dataclass(frozen=True)
class TodaysRecommendation:
    """The most recent same-day recommendation and its favorite state."""

    recipe: Recipe
    is_favorite: bool
