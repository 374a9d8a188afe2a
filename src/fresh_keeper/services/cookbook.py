"""Cookbook of saved recommendations with bounded recent history."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from fresh_keeper.domain.recipes import (
    DinnerRecommendation,
    Recipe,
    TodaysRecommendation,
)

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for saved recipes."""

    def list_recipes(self) -> list[Recipe]:
        """Return every saved recipe."""

    def save_recipe(self, recipe: Recipe) -> None:
        """Insert or replace a recipe."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe."""


@dataclass
class CookbookService:
    """Keeps favorites forever and only the newest non-favorites.

    A dish name appears at most once among favorites and at most once among
    non-favorites.
    """

    repository: RecipeRepository
    recent_limit: int = 5
    timezone: str = "UTC"

    def save_recommendation(
        self,
        recommendation: DinnerRecommendation,
        now: datetime,
        *,
        favorite: bool = False,
    ) -> Recipe:
        """Save a recommendation unless the same dish is already saved."""
        existing = self._find(recommendation.dish_name, favorite=favorite)
        if existing is not None:
            return existing
        if not favorite:
            self._evict(keep=self.recent_limit - 1)
        recipe = _recipe_from(recommendation, now, favorite=favorite)
        self.repository.save_recipe(recipe)
        return recipe

    def toggle_favorite(
        self, recommendation: DinnerRecommendation, now: datetime
    ) -> bool:
        """Promote or demote a dish by name; returns the new favorite state."""
        dish_name = recommendation.dish_name
        favorite = self._find(dish_name, favorite=True)
        if favorite is not None:
            self._demote(favorite)
            return False

        recent = self._find(dish_name, favorite=False)
        if recent is not None:
            self.repository.save_recipe(replace(recent, is_favorite=True))
        else:
            self.save_recommendation(recommendation, now, favorite=True)
        return True

    def is_favorite(self, dish_name: str) -> bool:
        return self._find(dish_name, favorite=True) is not None

    def list_favorites(self) -> list[Recipe]:
        """Return favorite recipes, newest first."""
        return _newest_first(
            r for r in self.repository.list_recipes() if r.is_favorite
        )

    def list_recent(self) -> list[Recipe]:
        """Return non-favorite recipes, newest first."""
        return _newest_first(
            r for r in self.repository.list_recipes() if not r.is_favorite
        )

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.repository.delete_recipe(recipe_id)

    def todays_recommendation(self, now: datetime) -> TodaysRecommendation | None:
        """Return the newest non-favorite if it was created today."""
        recent = self.list_recent()
        if not recent:
            return None
        latest = recent[0]
        zone = ZoneInfo(self.timezone)
        if latest.date_created.astimezone(zone).date() != now.astimezone(zone).date():
            return None
        return TodaysRecommendation(
            recipe=latest, is_favorite=self.is_favorite(latest.dish_name)
        )

    def _demote(self, favorite: Recipe) -> None:
        if self._find(favorite.dish_name, favorite=False) is not None:
            self.repository.delete_recipe(favorite.id)
            return
        self._evict(keep=self.recent_limit - 1)
        self.repository.save_recipe(replace(favorite, is_favorite=False))

    def _evict(self, keep: int) -> None:
        """Drop non-favorites beyond the ``keep`` newest."""
        for recipe in self.list_recent()[max(keep, 0) :]:
            _logger.info("Evicting recent recipe %s", recipe.dish_name)
            self.repository.delete_recipe(recipe.id)

    def _find(self, dish_name: str, *, favorite: bool) -> Recipe | None:
        for recipe in self.repository.list_recipes():
            if recipe.is_favorite == favorite and recipe.dish_name == dish_name:
                return recipe
        return None


def _recipe_from(
    recommendation: DinnerRecommendation, now: datetime, *, favorite: bool
) -> Recipe:
    return Recipe(
        id=uuid4(),
        dish_name=recommendation.dish_name,
        cuisine=recommendation.cuisine,
        date_created=now,
        cooking_time=recommendation.cooking_time,
        difficulty=recommendation.difficulty,
        reason=recommendation.reason,
        ingredients=list(recommendation.ingredients),
        recipe=list(recommendation.recipe),
        video_search_chinese=recommendation.video_search_chinese,
        video_search_english=recommendation.video_search_english,
        video_link=recommendation.video_link,
        is_favorite=favorite,
    )


def _newest_first(recipes: Iterable[Recipe]) -> list[Recipe]:
    return sorted(recipes, key=lambda recipe: recipe.date_created, reverse=True)
