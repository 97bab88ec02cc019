import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from models.shopping_cart import CartItem, CartSummary, CartView, cart_key
from services.errors import AlreadyInCart
from .local_storage import LocalStorage, SHOPPING_CART_KEY

logger = logging.getLogger(__name__)


class CartStore:
    """Shopping list persisted as one ordered list under shoppingCart"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _load(self) -> List[CartItem]:
        data = self.storage.get_item(SHOPPING_CART_KEY, [])
        if not isinstance(data, list):
            logger.warning("Shopping cart is not a list, starting from an empty cart")
            return []
        try:
            return [CartItem.model_validate(item) for item in data]
        except ValidationError as e:
            logger.warning(f"Shopping cart failed validation, starting from an empty cart: {e}")
            return []

    def _save(self, items: List[CartItem]) -> None:
        self.storage.set_item(SHOPPING_CART_KEY, [item.model_dump(by_alias=True) for item in items])

    def items(self) -> List[CartItem]:
        """All items in insertion order"""
        return self._load()

    def add(self, ingredient_text: str) -> Optional[CartItem]:
        """
        Append one ingredient to the cart.

        Returns None for blank input.

        Raises:
            AlreadyInCart: an item with the same trimmed, case-insensitive
                name exists; the cart is left unchanged.
        """
        name = (ingredient_text or "").strip()
        if not name:
            return None

        items = self._load()
        key = cart_key(name)
        for item in items:
            if cart_key(item.name) == key:
                raise AlreadyInCart(item)

        item = CartItem(name=name)
        items.append(item)
        self._save(items)
        logger.debug(f"Added {name!r} to cart")
        return item

    def add_all(self, ingredient_texts: Iterable[str]) -> int:
        """Add every new ingredient, skipping blanks and duplicates. Returns how many were added."""
        items = self._load()
        seen = {cart_key(item.name) for item in items}
        added = 0
        for text in ingredient_texts:
            name = (text or "").strip()
            if not name or cart_key(name) in seen:
                continue
            items.append(CartItem(name=name))
            seen.add(cart_key(name))
            added += 1

        if added:
            self._save(items)
        return added

    def toggle(self, item_id: str) -> Optional[CartItem]:
        """Flip the purchased flag; returns the item or None if unknown"""
        items = self._load()
        for item in items:
            if item.id == item_id:
                item.purchased = not item.purchased
                self._save(items)
                return item
        return None

    def remove(self, item_id: str) -> bool:
        items = self._load()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        self._save(remaining)
        return True

    def clear(self) -> None:
        """Empty the cart unconditionally"""
        self._save([])

    def list(self) -> CartView:
        items = self._load()
        return CartView(
            unpurchased=[item for item in items if not item.purchased],
            purchased=[item for item in items if item.purchased],
        )

    def summary(self) -> CartSummary:
        items = self._load()
        total = len(items)
        purchased = len([item for item in items if item.purchased])
        return CartSummary(
            total_items=total,
            purchased_items=purchased,
            pending_items=total - purchased,
            completion_percentage=(purchased / total * 100) if total > 0 else 0.0,
        )
