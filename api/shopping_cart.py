from fastapi import APIRouter, Depends, HTTPException, status
from typing import Optional

from models.shopping_cart import (
    CartAddResponse,
    CartBulkAddResponse,
    CartItem,
    CartItemCreate,
    CartItemsCreate,
    CartSummary,
    CartView,
)
from services.assistant import RecipeAssistant
from services.errors import RecipeAssistantError
from .dependencies import get_assistant, http_error, storage_error

router = APIRouter()


@router.get("/", response_model=CartView)
async def get_shopping_cart(assistant: RecipeAssistant = Depends(get_assistant)):
    """Get the cart, unpurchased items first"""
    return assistant.cart_view()


@router.post("/items", response_model=CartAddResponse)
async def add_item_to_cart(item_data: CartItemCreate, assistant: RecipeAssistant = Depends(get_assistant)):
    """Add one ingredient; a duplicate comes back with a notice and added=false"""
    try:
        return assistant.add_to_cart(item_data.name)
    except OSError as e:
        raise storage_error("add item to cart", e)


@router.post("/items/bulk", response_model=CartBulkAddResponse)
async def add_items_to_cart(items_data: CartItemsCreate, assistant: RecipeAssistant = Depends(get_assistant)):
    try:
        return assistant.add_all_to_cart(items_data.names)
    except OSError as e:
        raise storage_error("add items to cart", e)


@router.post("/from-current", response_model=CartBulkAddResponse)
async def add_current_ingredients(assistant: RecipeAssistant = Depends(get_assistant)):
    """Add every ingredient of the current analysis"""
    try:
        return assistant.add_current_ingredients_to_cart()
    except RecipeAssistantError as e:
        raise http_error(e)
    except OSError as e:
        raise storage_error("add items to cart", e)


@router.post("/from-generated/{index}", response_model=CartBulkAddResponse)
async def add_generated_ingredients(index: int, assistant: RecipeAssistant = Depends(get_assistant)):
    try:
        return assistant.add_generated_ingredients_to_cart(index)
    except RecipeAssistantError as e:
        raise http_error(e)
    except OSError as e:
        raise storage_error("add items to cart", e)


@router.post("/from-saved/{recipe_id}")
async def add_saved_ingredients(
    recipe_id: str,
    ingredient_index: Optional[int] = None,
    assistant: RecipeAssistant = Depends(get_assistant),
):
    """Add all ingredients of a saved recipe, or only the one at ingredient_index"""
    try:
        if ingredient_index is None:
            return assistant.add_saved_ingredients_to_cart(recipe_id)
        return assistant.add_saved_ingredient_to_cart(recipe_id, ingredient_index)
    except RecipeAssistantError as e:
        raise http_error(e)
    except OSError as e:
        raise storage_error("add items to cart", e)


@router.put("/items/{item_id}/toggle-purchased", response_model=CartItem)
async def toggle_item_purchased(item_id: str, assistant: RecipeAssistant = Depends(get_assistant)):
    """Toggle the purchased status of a cart item"""
    try:
        item = assistant.toggle_cart_item(item_id)
    except OSError as e:
        raise storage_error("toggle item", e)

    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cart item with ID {item_id} not found"
        )
    return item


@router.delete("/items/{item_id}")
async def remove_item_from_cart(item_id: str, assistant: RecipeAssistant = Depends(get_assistant)):
    """Remove an item; unknown ids are not an error"""
    try:
        removed = assistant.remove_cart_item(item_id)
        return {"message": "Продукт удален из корзины", "removed": removed}
    except OSError as e:
        raise storage_error("remove item from cart", e)


@router.delete("/clear")
async def clear_shopping_cart(assistant: RecipeAssistant = Depends(get_assistant)):
    """Clear all items from the shopping cart"""
    try:
        assistant.clear_cart()
        return {"message": "Корзина очищена"}
    except OSError as e:
        raise storage_error("clear shopping cart", e)


@router.get("/summary", response_model=CartSummary)
async def get_cart_summary(assistant: RecipeAssistant = Depends(get_assistant)):
    """Get counts of purchased and pending items"""
    return assistant.cart.summary()
