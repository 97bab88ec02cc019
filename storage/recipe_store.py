import logging
from collections import Counter
from typing import List, Optional

from pydantic import ValidationError

from models.recipe import RecipeAnalysis, SavedRecipe
from services.errors import AlreadySaved
from .local_storage import LocalStorage, SAVED_RECIPES_KEY

logger = logging.getLogger(__name__)


class RecipeStore:
    """Saved recipes, newest first, persisted as one list under savedRecipes"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _load(self) -> List[SavedRecipe]:
        data = self.storage.get_item(SAVED_RECIPES_KEY, [])
        if not isinstance(data, list):
            logger.warning("Saved recipes are not a list, starting from an empty collection")
            return []
        try:
            return [SavedRecipe.model_validate(recipe) for recipe in data]
        except ValidationError as e:
            logger.warning(f"Saved recipes failed validation, starting from an empty collection: {e}")
            return []

    def _save(self, recipes: List[SavedRecipe]) -> None:
        self.storage.set_item(SAVED_RECIPES_KEY, [recipe.model_dump(by_alias=True) for recipe in recipes])

    def list(self) -> List[SavedRecipe]:
        return self._load()

    def get(self, recipe_id: str) -> Optional[SavedRecipe]:
        for recipe in self._load():
            if recipe.id == recipe_id:
                return recipe
        return None

    def find_duplicate(self, recipe: RecipeAnalysis) -> Optional[SavedRecipe]:
        for saved in self._load():
            if saved.same_dish(recipe):
                return saved
        return None

    def is_saved(self, recipe: RecipeAnalysis) -> bool:
        return self.find_duplicate(recipe) is not None

    def save(self, recipe: RecipeAnalysis) -> SavedRecipe:
        """
        Store a copy of recipe with a fresh id and timestamp at the front.

        Raises:
            AlreadySaved: a recipe with the same name and ingredient list
                is stored already; nothing is written.
        """
        recipes = self._load()
        for saved in recipes:
            if saved.same_dish(recipe):
                raise AlreadySaved(saved)

        saved = SavedRecipe.from_analysis(recipe)
        recipes.insert(0, saved)
        self._save(recipes)
        logger.debug(f"Saved recipe {saved.id} ({saved.dish_name})")
        return saved

    def delete(self, recipe_id: str) -> bool:
        """Remove a recipe; unknown ids are ignored. Returns whether one was removed."""
        recipes = self._load()
        remaining = [recipe for recipe in recipes if recipe.id != recipe_id]
        self._save(remaining)
        return len(remaining) < len(recipes)

    def search(self, query: str) -> List[SavedRecipe]:
        """
        Case-insensitive substring search over dish names and tags.

        A leading "#" is ignored for tag matching. An empty query returns
        every recipe in stored order.
        """
        recipes = self._load()
        query = (query or "").strip().lower()
        if not query:
            return recipes

        tag_query = query[1:] if query.startswith("#") else query
        results = []
        for recipe in recipes:
            name_match = query in recipe.dish_name.lower()
            tag_match = any(tag_query in tag.lower() for tag in recipe.tags)
            if name_match or tag_match:
                results.append(recipe)
        return results

    def popular_tags(self, limit: int = 10) -> List[str]:
        """Most frequent tags, ties kept in first-seen order"""
        counts = Counter()
        for recipe in self._load():
            counts.update(recipe.tags)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [tag for tag, _ in ranked[:max(limit, 0)]]
