"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Anthropic Configuration (Optional)
    anthropic_api_key: str = ""

    # Data backend
    backend_url: str = "http://localhost:8000"
    backend_timeout: float = 10.0

    # Session store (empty = in-process memory store)
    redis_url: str = ""
    session_timeout: int = 3600

    # AI retry policy
    ai_max_attempts: int = 2
    retry_base_delay: float = 3.0
    retry_max_jitter: float = 1.0

    # Workout entry
    calorie_debounce_seconds: float = 0.4

    # Application Configuration
    app_name: str = "FitGenius"
    app_version: str = "1.0.0"
    debug: bool = True
    log_level: str = "INFO"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Configuration
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
