from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from .base import BaseEntity


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def cart_key(name: str) -> str:
    """Case-insensitive, trimmed form used for duplicate detection"""
    return name.strip().lower()


class CartItem(BaseEntity):
    """Individual shopping list line"""
    name: str = Field(..., description="Ingredient text, trimmed")
    purchased: bool = Field(False, description="Whether item has been bought")
    added_at: datetime = Field(default_factory=_utc_now, description="When item was added to cart", alias="addedAt")

    @field_validator("name")
    @classmethod
    def strip_name(cls, name: str) -> str:
        return name.strip()

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "3f0c6d2e9b1a4c7d8e5f6a7b8c9d0e1f",
                "name": "Молоко - 50 г",
                "purchased": False,
                "addedAt": "2025-01-15T09:30:00+00:00"
            }
        }
    }


class CartView(BaseModel):
    """Cart split into the two display groups, unpurchased first"""
    unpurchased: List[CartItem] = Field(default_factory=list)
    purchased: List[CartItem] = Field(default_factory=list)


class CartSummary(BaseModel):
    total_items: int = 0
    purchased_items: int = 0
    pending_items: int = 0
    completion_percentage: float = 0.0


class CartItemCreate(BaseModel):
    """Model for adding an item to cart"""
    name: str = Field(..., alias="ingredient")

    model_config = {
        "populate_by_name": True
    }


class CartItemsCreate(BaseModel):
    """Model for adding several items at once"""
    names: List[str] = Field(default_factory=list, alias="ingredients")

    model_config = {
        "populate_by_name": True
    }


class CartAddResponse(BaseModel):
    item: Optional[CartItem] = None
    added: bool = False
    notice: Optional[str] = None


class CartBulkAddResponse(BaseModel):
    added_count: int = Field(0, alias="addedCount")
    notice: Optional[str] = None

    model_config = {
        "populate_by_name": True
    }
