"""Configuration and environment loading for Nexus AI."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Anthropic
    anthropic_api_key: str

    # Supabase
    supabase_url: str
    supabase_key: str

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False
    allowed_origins: str = "http://localhost:3000"

    # Completion defaults
    claude_model: str = "claude-sonnet-4-20250514"
    llm_temperature: float = 0.9
    llm_top_k: int = 40
    llm_top_p: float = 0.95
    llm_max_output_tokens: int = 2048

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
