from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ThemeName(str, Enum):
    """Themes offered by the Mini App"""
    light = "light"
    dark = "dark"


class ThemePreference(BaseModel):
    theme: ThemeName = ThemeName.light

    model_config = {
        "use_enum_values": True
    }


class LaunchContext(BaseModel):
    """What the Mini App front-end knows about how it was opened"""
    url: str = Field("", description="Full launch URL, including query and hash")
    init_data: Dict[str, Any] = Field(default_factory=dict, alias="initData", description="Telegram initDataUnsafe")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "url": "https://example.app/?start=%D0%9E%D0%BC%D0%BB%D0%B5%D1%82",
                "initData": {"user": {"id": 42, "first_name": "Ivan"}}
            }
        }
    }


class LaunchResponse(BaseModel):
    text: Optional[str] = None
    loaded: bool = False
    user: Optional[Dict[str, Any]] = None
