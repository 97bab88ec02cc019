from typing import List, Optional
from pydantic import BaseModel, Field


class CompletionMessage(BaseModel):
    """Single chat message sent to or received from the completion endpoint"""
    role: str = Field(..., description="Message author role")
    content: str = Field(..., description="Message text")


class CompletionRequest(BaseModel):
    """Body of a chat-completions request"""
    model: str = Field(..., description="Model identifier")
    messages: List[CompletionMessage] = Field(..., description="Single-turn conversation")
    temperature: float = Field(0.7, description="Sampling temperature")
    max_tokens: int = Field(3000, description="Output token budget")

    model_config = {
        "json_schema_extra": {
            "example": {
                "model": "tngtech/tng-r1t-chimera:free",
                "messages": [{"role": "user", "content": "Проанализируй рецепт..."}],
                "temperature": 0.7,
                "max_tokens": 3000
            }
        }
    }


class ReceivedMessage(BaseModel):
    """Assistant message in a completion; providers may omit the role"""
    role: Optional[str] = None
    content: str


class CompletionChoice(BaseModel):
    message: ReceivedMessage


class CompletionResponse(BaseModel):
    """Success envelope: {choices: [{message: {content}}]}"""
    choices: List[CompletionChoice] = Field(..., min_length=1)
    model: Optional[str] = None

    @property
    def content(self) -> str:
        return self.choices[0].message.content
