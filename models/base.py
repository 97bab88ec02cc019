from pydantic import BaseModel, Field
from uuid import uuid4


def new_id() -> str:
    return uuid4().hex


class BaseEntity(BaseModel):
    """Base entity class with a unique string id"""
    id: str = Field(default_factory=new_id)

    model_config = {
        "validate_assignment": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "3f0c6d2e9b1a4c7d8e5f6a7b8c9d0e1f"
            }
        }
    }
