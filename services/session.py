from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.recipe import RecipeAnalysis


class AppSession(BaseModel):
    """
    State of one Mini App session.

    Holds what the user is currently looking at so that display and save
    actions receive it explicitly instead of reading module globals.
    """
    current_text: str = Field("", description="Recipe text in the input field")
    current_result: Optional[RecipeAnalysis] = Field(None, description="Last successful analysis")
    generated_recipes: List[RecipeAnalysis] = Field(default_factory=list, description="Last recipes from Vita")
    busy: bool = Field(False, description="A model request is in flight")
    forwarded_message_processed: bool = Field(False, description="Forwarded text was already loaded once")
    created_at: datetime = Field(default_factory=datetime.now)
    last_activity: datetime = Field(default_factory=datetime.now)

    def touch(self) -> None:
        self.last_activity = datetime.now()

    def generated(self, index: int) -> Optional[RecipeAnalysis]:
        if 0 <= index < len(self.generated_recipes):
            return self.generated_recipes[index]
        return None

    def reset(self) -> None:
        self.current_text = ""
        self.current_result = None
        self.touch()
