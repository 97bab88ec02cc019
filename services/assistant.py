"""
RecipeAssistant - the Mini App's user actions without a DOM.

Each public method is one user-triggered action: it runs the request or
store operation, records the outcome in the session, and reports to the
user through the host bridge (alerts, haptics). Hard errors propagate to
the caller; soft notices become an alert plus an "unchanged" result.
"""

import logging
from typing import Any, Iterable, List, Optional

from models.recipe import RecipeAnalysis, SaveRecipeResponse, SavedRecipe
from models.shopping_cart import CartAddResponse, CartBulkAddResponse, CartItem, CartView
from storage.cart_store import CartStore
from storage.local_storage import LocalStorage
from storage.preferences_store import PreferencesStore
from storage.recipe_store import RecipeStore
from .errors import AlreadyInCart, AlreadySaved, RecipeNotFound
from .host_bridge import SafeHost
from .llm_service import LLMService
from .recipe_analyzer import analyze_recipe
from .recipe_generator import generate_recipes
from .session import AppSession

logger = logging.getLogger(__name__)

RECIPE_SAVED = "Рецепт сохранен!"
RECIPE_DELETED = "Рецепт удален"
TEXT_LOADED = 'Текст рецепта загружен! Нажмите "Анализировать" для обработки.'
ITEM_ADDED = "Продукт добавлен в корзину!"
ITEM_REMOVED = "Продукт удален из корзины"
CART_CLEARED = "Корзина очищена"
ALL_IN_CART = "Все продукты уже в корзине"
NOTHING_TO_SAVE = "Нет рецепта для сохранения"
NO_INGREDIENTS = "Нет ингредиентов для добавления"
INGREDIENT_NOT_FOUND = "Ингредиент не найден"


def items_added_message(count: int) -> str:
    return f"Добавлено {count} продуктов в корзину!"


class RecipeAssistant:
    """Controller tying the requesters, the stores, the session and the host together"""

    def __init__(
        self,
        storage: LocalStorage,
        llm: LLMService,
        host: Any = None,
        session: Optional[AppSession] = None,
    ):
        self.llm = llm
        self.recipes = RecipeStore(storage)
        self.cart = CartStore(storage)
        self.preferences = PreferencesStore(storage)
        self.host = SafeHost(host)
        self.session = session or AppSession()

    def set_host(self, host: Any) -> None:
        self.host = SafeHost(host)

    # Forwarded messages
    def load_forwarded_message(self) -> Optional[str]:
        """Put forwarded recipe text into the input once per session"""
        if self.session.forwarded_message_processed:
            return None

        text = self.host.get_forwarded_message_text()
        if not text or not text.strip():
            return None

        self.session.forwarded_message_processed = True
        self.session.current_text = text
        self.session.touch()
        self.host.show_alert(TEXT_LOADED)
        logger.info(f"Loaded forwarded recipe text ({len(text)} chars)")
        return text

    # Model requests
    async def analyze_text(self, text: Optional[str] = None) -> RecipeAnalysis:
        """Analyze text (or the text already in the session) and make it the current result"""
        if text is None:
            text = self.session.current_text
        self.session.current_text = text or ""
        self.session.busy = True
        try:
            self.host.vibrate()
            result = await analyze_recipe(text, self.llm)
            self.session.current_result = result
            return result
        finally:
            self.session.busy = False
            self.session.touch()

    async def ask_vita(self, query: str) -> List[RecipeAnalysis]:
        """Generate recipes for query and keep them for later save/cart actions"""
        self.session.busy = True
        try:
            self.host.vibrate()
            recipes = await generate_recipes(query, self.llm)
            self.session.generated_recipes = recipes
            return recipes
        finally:
            self.session.busy = False
            self.session.touch()

    def reset(self) -> None:
        self.session.reset()

    # Saved recipes
    def is_current_saved(self) -> bool:
        current = self.session.current_result
        return current is not None and self.recipes.is_saved(current)

    def _save(self, recipe: RecipeAnalysis) -> SaveRecipeResponse:
        try:
            saved = self.recipes.save(recipe)
        except AlreadySaved as notice:
            self.host.show_alert(notice.message)
            return SaveRecipeResponse(recipe=notice.existing, created=False, notice=notice.message)

        self.host.show_alert(RECIPE_SAVED)
        self.host.vibrate()
        return SaveRecipeResponse(recipe=saved, created=True)

    def save_current_recipe(self) -> SaveRecipeResponse:
        if self.session.current_result is None:
            raise RecipeNotFound(NOTHING_TO_SAVE)
        return self._save(self.session.current_result)

    def save_generated_recipe(self, index: int) -> SaveRecipeResponse:
        recipe = self.session.generated(index)
        if recipe is None:
            raise RecipeNotFound()
        return self._save(recipe)

    def delete_saved_recipe(self, recipe_id: str) -> bool:
        removed = self.recipes.delete(recipe_id)
        if removed:
            self.host.show_alert(RECIPE_DELETED)
        return removed

    def get_saved_recipe(self, recipe_id: str) -> SavedRecipe:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            raise RecipeNotFound()
        return recipe

    # Shopping cart
    def add_to_cart(self, ingredient: str) -> CartAddResponse:
        try:
            item = self.cart.add(ingredient)
        except AlreadyInCart as notice:
            self.host.show_alert(notice.message)
            self.host.vibrate()
            return CartAddResponse(item=notice.existing, added=False, notice=notice.message)

        if item is None:
            return CartAddResponse(added=False)

        self.host.show_alert(ITEM_ADDED)
        self.host.vibrate()
        return CartAddResponse(item=item, added=True)

    def add_all_to_cart(self, ingredients: Iterable[str]) -> CartBulkAddResponse:
        added = self.cart.add_all(ingredients)
        if added:
            message = items_added_message(added)
            self.host.vibrate()
        else:
            message = ALL_IN_CART
        self.host.show_alert(message)
        return CartBulkAddResponse(added_count=added, notice=message)

    def add_current_ingredients_to_cart(self) -> CartBulkAddResponse:
        current = self.session.current_result
        if current is None or not current.ingredients:
            raise RecipeNotFound(NO_INGREDIENTS)
        return self.add_all_to_cart(current.ingredients)

    def add_generated_ingredients_to_cart(self, index: int) -> CartBulkAddResponse:
        recipe = self.session.generated(index)
        if recipe is None:
            raise RecipeNotFound()
        return self.add_all_to_cart(recipe.ingredients)

    def add_saved_ingredient_to_cart(self, recipe_id: str, ingredient_index: int) -> CartAddResponse:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or not 0 <= ingredient_index < len(recipe.ingredients):
            raise RecipeNotFound(INGREDIENT_NOT_FOUND)
        return self.add_to_cart(recipe.ingredients[ingredient_index])

    def add_saved_ingredients_to_cart(self, recipe_id: str) -> CartBulkAddResponse:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or not recipe.ingredients:
            raise RecipeNotFound("Ингредиенты не найдены")
        return self.add_all_to_cart(recipe.ingredients)

    def toggle_cart_item(self, item_id: str) -> Optional[CartItem]:
        item = self.cart.toggle(item_id)
        if item is not None:
            self.host.vibrate()
        return item

    def remove_cart_item(self, item_id: str) -> bool:
        removed = self.cart.remove(item_id)
        if removed:
            self.host.vibrate()
            self.host.show_alert(ITEM_REMOVED)
        return removed

    def clear_cart(self) -> None:
        """Empty the cart; the front-end asks for confirmation first"""
        self.cart.clear()
        self.host.vibrate()
        self.host.show_alert(CART_CLEARED)

    def cart_view(self) -> CartView:
        return self.cart.list()
