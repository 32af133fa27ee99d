"""Configuration management for fitcoach."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .agents.orchestrator import GenerationPolicy

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from FITCOACH_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FITCOACH_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = Field(default=DATA_DIR, description="Directory holding the SQLite database")
    trainer_id: str = Field(default="local", description="Owner identity used by the CLI")

    # Generation provider
    anthropic_api_key: str | None = Field(default=None, description="Anthropic API key")
    model: str = Field(default="claude-sonnet-4-5", description="Model used for generation")
    max_tokens: int = Field(default=16000, description="Max output tokens per generation call")

    # Bounded retry policy
    generation_timeout: float = Field(default=120.0, description="Per-attempt timeout in seconds")
    max_attempts: int = Field(default=3, ge=1, description="Provider calls per request")
    backoff_seconds: list[float] = Field(
        default=[2.0, 5.0, 10.0],
        description="Wait after failed attempt n (last value reused)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")
    log_file: str | None = Field(default=None, description="Optional rotating log file")

    def generation_policy(self) -> GenerationPolicy:
        """Build the orchestrator policy from these settings."""
        return GenerationPolicy(
            timeout_seconds=self.generation_timeout,
            max_attempts=self.max_attempts,
            backoff_seconds=tuple(self.backoff_seconds),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
