from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

USER_SCOPE = "user"
APP_SETTINGS_SCOPE = "app_settings"


class Settings(BaseSettings):
    """Runtime configuration for preference storage.

    Values are loaded from ``TYPED_PREFS_*`` environment variables by default
    and may be overridden via CLI flags.
    """

    # Storage
    backend: Literal["file", "memory"] = "file"
    prefs_dir: Path = Field(default_factory=lambda: Path.home() / ".typed_prefs")

    # Scope names
    user_scope: str = Field(default=USER_SCOPE, min_length=1)
    app_settings_scope: str = Field(default=APP_SETTINGS_SCOPE, min_length=1)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="TYPED_PREFS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def check_distinct_scopes(self) -> Settings:
        # Two scopes on one name would share a file and overwrite each other.
        if self.user_scope == self.app_settings_scope:
            raise ValueError(
                f"user_scope and app_settings_scope must differ, both are {self.user_scope!r}"
            )
        return self
