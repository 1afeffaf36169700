from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class ThemeSettings(BaseSettings):
    DOMAIN: str
    PASSWORD: str = ""
    THEME_ID: str = ""
    PROXY: str = ""
    TIMEOUT: float = Field(default=30.0, gt=0)
    DIRECTORY: str = "."
    IGNORED_FILES: Annotated[list[str], NoDecode] = Field(default_factory=list)
    IGNORES: Annotated[list[str], NoDecode] = Field(default_factory=list)

    @field_validator("DOMAIN")
    @classmethod
    def normalize_domain(cls, value: str) -> str:
        cleaned = value.strip().lower()
        for prefix in ("https://", "http://"):
            if cleaned.startswith(prefix):
                cleaned = cleaned[len(prefix):]
        cleaned = cleaned.rstrip("/")
        if not cleaned:
            raise ValueError("DOMAIN must be a non-empty store domain")
        return cleaned

    @field_validator("THEME_ID", "PROXY", "PASSWORD")
    @classmethod
    def strip_value(cls, value: str) -> str:
        return value.strip()

    @field_validator("IGNORED_FILES", "IGNORES", mode="before")
    @classmethod
    def split_csv(cls, value: object) -> object:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def base_url(self) -> str:
        return f"https://{self.DOMAIN}"

    model_config = SettingsConfigDict(env_prefix="THEMEKIT_", env_file=".env", extra="ignore")
