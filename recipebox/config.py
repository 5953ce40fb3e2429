"""Application configuration using pydantic-settings."""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


# Main / fast model per provider, used when LLM_MODEL / LLM_FAST_MODEL are blank
DEFAULT_MODELS = {
    "gemini": ("gemini-2.0-flash", "gemini-2.0-flash"),
    "anthropic": ("claude-sonnet-4-5", "claude-haiku-4-5"),
    "groq": ("llama-3.3-70b-versatile", "llama-3.1-8b-instant"),
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Text generation provider: gemini, anthropic or groq
    llm_provider: str = "gemini"

    # API Keys
    gemini_api_key: str = ""
    anthropic_api_key: str = ""
    groq_api_key: str = ""

    # Model selection (blank -> provider default)
    llm_model: str = ""
    llm_fast_model: str = ""
    llm_temperature: float = 0.7

    # Supabase (data store + identity)
    supabase_url: str = ""
    supabase_key: str = ""

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # HTTP Settings
    http_timeout: int = 60  # seconds

    # Rate Limiting
    rate_limit_per_hour: int = 100

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of CORS origins."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def main_model(self) -> str:
        """Model used for recipe and meal plan generation."""
        default_main, _ = DEFAULT_MODELS.get(self.llm_provider.lower(), ("", ""))
        return self.llm_model or default_main

    @property
    def fast_model(self) -> str:
        """Cheaper model used for nutrition and substitution answers."""
        _, default_fast = DEFAULT_MODELS.get(self.llm_provider.lower(), ("", ""))
        return self.llm_fast_model or default_fast


# Global settings instance
settings = Settings()
