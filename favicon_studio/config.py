"""Configuration from environment variables. The API key is read from env only."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from favicon_studio.models.naming import FAVICON_SIZES
from favicon_studio.services.color_service import AUTO_COLOR
from favicon_studio.services.ico_service import MAX_ICON_SIZE

_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class Settings(BaseSettings):
    """Generation client + packaging defaults. Env prefix `FAVICON_`, key in `API_KEY`."""

    model_config = SettingsConfigDict(env_prefix="FAVICON_", extra="ignore", populate_by_name=True)

    api_key: str = Field(default="", alias="API_KEY")
    base_url: Optional[str] = None
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    request_timeout: float = 120.0

    app_name: str = "My App"
    theme_color: str = "#ffffff"
    background_color: Optional[str] = None
    sizes: list[int] = Field(default_factory=lambda: list(FAVICON_SIZES))
    parallel_resize: bool = True

    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("sizes", mode="before")
    @classmethod
    def _reject_bool_sizes(cls, value):
        # lax int parsing would turn True into 1
        if isinstance(value, (list, tuple)) and any(isinstance(size, bool) for size in value):
            raise ValueError(f"icon sizes must be integers, not booleans: {value!r}")
        return value

    @field_validator("sizes")
    @classmethod
    def _check_sizes(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("at least one icon size is required")
        for size in value:
            if size <= 0 or size > MAX_ICON_SIZE:
                raise ValueError(f"icon size out of range 1..{MAX_ICON_SIZE}: {size}")
        return sorted(set(value))

    @field_validator("theme_color", "background_color")
    @classmethod
    def _check_color(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == AUTO_COLOR:
            return value
        if not _COLOR_RE.match(value):
            raise ValueError(f"colour must be #rrggbb or 'auto': {value!r}")
        return value.lower()

    @property
    def resize_workers(self) -> Optional[int]:
        return len(self.sizes) if self.parallel_resize else None


def get_settings(**overrides) -> Settings:
    return Settings(**overrides)
