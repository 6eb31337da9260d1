from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ENVIRONMENT: str = "local"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # Completion provider (any OpenAI-compatible chat completions endpoint)
    LLM_API_KEY: str | None = None
    GROQ_API_KEY: str | None = Field(
        default=None,
        description="Fallback key when LLM_API_KEY is not set",
    )
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    MODEL_DEFAULT: str = "llama-3.3-70b-versatile"
    LLM_TIMEOUT_SECONDS: float | None = Field(
        default=None,
        description="Per-request timeout for provider calls. None keeps the client library default.",
    )

    FRONTEND_URL: str = "http://localhost:3000"


settings = Settings()
