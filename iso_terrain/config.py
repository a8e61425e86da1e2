"""Configuration management."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.heightfield import is_valid_size


class Settings(BaseSettings):
    """Application settings pulled from ISO_TERRAIN_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ISO_TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Terrain
    map_size: int = Field(default=513, description="Grid size, must be 2^k + 1")
    roughness: float = Field(default=0.3, description="Terrain roughness in (0, 1]")
    seed: Optional[str] = Field(default=None, description="Seed string, random when unset")

    # Display
    screen_width: int = Field(default=1400, gt=0, description="Window width in pixels")
    screen_height: int = Field(default=800, gt=0, description="Window height in pixels")
    frame_interval: float = Field(
        default=0.5, gt=0, description="Seconds between regenerated frames"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    @field_validator("map_size")
    @classmethod
    def check_map_size(cls, value: int) -> int:
        if not is_valid_size(value):
            raise ValueError("map_size must be 2^k + 1 with k >= 1")
        return value

    @field_validator("roughness")
    @classmethod
    def check_roughness(cls, value: float) -> float:
        if not 0 < value <= 1:
            raise ValueError("roughness must be in (0, 1]")
        return value

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        if value not in ("plain", "json"):
            raise ValueError("log_format must be 'plain' or 'json'")
        return value


settings = Settings()
