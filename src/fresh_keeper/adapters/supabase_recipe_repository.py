"""Supabase repository for saved recipes."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fresh_keeper.domain.recipes import IngredientUsage, Recipe
from fresh_keeper.services.cookbook import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for the cookbook."""

    client: Client

    def list_recipes(self) -> list[Recipe]:
        """Return every saved recipe, newest first."""
        response = (
            self.client.table("recipes")
            .select("*")
            .order("date_created", desc=True)
            .execute()
        )
        return [_to_recipe(row) for row in response.data or []]

    def save_recipe(self, recipe: Recipe) -> None:
        """Upsert a recipe row; ingredients and steps are stored as JSON."""
        self.client.table("recipes").upsert(
            {
                "id": str(recipe.id),
                "dish_name": recipe.dish_name,
                "cuisine": recipe.cuisine,
                "ingredients": [
                    ingredient.model_dump(by_alias=True)
                    for ingredient in recipe.ingredients
                ],
                "recipe": list(recipe.recipe),
                "cooking_time": recipe.cooking_time,
                "difficulty": recipe.difficulty,
                "video_search_chinese": recipe.video_search_chinese,
                "video_search_english": recipe.video_search_english,
                "video_link": recipe.video_link,
                "reason": recipe.reason,
                "date_created": recipe.date_created.isoformat(),
                "is_favorite": recipe.is_favorite,
            }
        ).execute()

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe row."""
        self.client.table("recipes").delete().eq("id", str(recipe_id)).execute()


def _to_recipe(row: dict[str, object]) -> Recipe:
    return Recipe(
        id=UUID(str(row["id"])),
        dish_name=str(row["dish_name"]),
        cuisine=str(row["cuisine"]),
        date_created=datetime.fromisoformat(str(row["date_created"])),
        cooking_time=str(row["cooking_time"]),
        difficulty=str(row["difficulty"]),
        reason=str(row["reason"]),
        ingredients=[
            IngredientUsage.model_validate(entry)
            for entry in row.get("ingredients") or []
        ],
        recipe=[str(step) for step in row.get("recipe") or []],
        video_search_chinese=row.get("video_search_chinese"),
        video_search_english=row.get("video_search_english"),
        video_link=row.get("video_link"),
        is_favorite=bool(row.get("is_favorite")),
    )
