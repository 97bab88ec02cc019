from typing import Optional
from pydantic_settings import BaseSettings

API_KEY_PLACEHOLDER = "YOUR_OPENROUTER_API_KEY"


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # OpenRouter
    openrouter_api_key: Optional[str] = None
    openrouter_url: str = "https://openrouter.ai/api/v1/chat/completions"
    model: str = "tngtech/tng-r1t-chimera:free"
    app_origin: str = "http://localhost:3000"
    analysis_title: str = "Recipe Analyzer"
    generation_title: str = "Vita Recipe Generator"

    # Sampling
    analysis_temperature: float = 0.7
    analysis_max_tokens: int = 3000
    generation_temperature: float = 0.8
    generation_max_tokens: int = 4000
    request_timeout: float = 120.0

    # Local key-value store
    data_directory: str = "storage/data"

    # Server Configuration
    port: int = 3000
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False  # Allow OPENROUTER_API_KEY or openrouter_api_key

    @property
    def api_key_configured(self) -> bool:
        """False when the key is missing or still the example placeholder"""
        key = (self.openrouter_api_key or "").strip()
        return bool(key) and key != API_KEY_PLACEHOLDER


# Create singleton instance
settings = Settings()
