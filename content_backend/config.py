"""
Configuration for the content backend.

`Settings` is read from the environment (and `.env`). `GitHubConfig` is the
collaborator `DataManager` consults at startup to decide whether GitHub
storage can be used.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the content backend."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # GitHub contents API
    github_enabled: bool = Field(default=True)
    github_username: str = Field(default="")
    github_repo_name: str = Field(default="")
    github_token: Optional[str] = Field(default=None)
    github_branch: str = Field(default="main")
    github_api_base_url: str = Field(default="https://api.github.com")

    # Local fallback storage. None keeps everything in memory; a redis://
    # URL selects Redis; anything else is treated as a SQLAlchemy URL.
    local_storage_url: Optional[str] = Field(default=None)
    local_storage_prefix: str = Field(default="noarz:")

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


@dataclass
class SessionTokenStore:
    """Holds the GitHub token for the lifetime of the process only."""

    token: Optional[str] = None

    def get(self) -> Optional[str]:
        return self.token

    def set(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None


@dataclass
class GitHubConfig:
    username: str = ""
    repo_name: str = ""
    enabled: bool = True
    token_store: SessionTokenStore = field(default_factory=SessionTokenStore)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubConfig":
        return cls(
            username=settings.github_username,
            repo_name=settings.github_repo_name,
            enabled=settings.github_enabled,
            token_store=SessionTokenStore(settings.github_token or None),
        )

    def get_token(self) -> Optional[str]:
        return self.token_store.get()

    def set_token(self, token: Optional[str]) -> bool:
        """Store the token; empty values are rejected."""
        if token:
            self.token_store.set(token)
            return True
        return False

    def clear_token(self) -> None:
        self.token_store.clear()

    def is_complete(self) -> bool:
        return bool(self.username and self.repo_name and self.get_token())
