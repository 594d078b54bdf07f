"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_scanner.domain.value_objects import ScanPolicy


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: SecretStr
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str | None = None
    llm_temperature: float = 0.7
    llm_max_tokens: int = 4096
    github_token: SecretStr | None = None
    max_files: int = 100
    max_file_size_kb: int = 100
    max_content_fetches: int = 50
    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def scan_policy(self) -> ScanPolicy:
        """Caps for the scanners; the classification tables keep their defaults."""
        return ScanPolicy(
            max_files=self.max_files,
            max_file_size=self.max_file_size_kb * 1024,
            max_content_fetches=self.max_content_fetches,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
