"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

import tempfile
from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

# Default private cache: <tmp>/ezmap_bridge/cache
DEFAULT_CACHE_DIR = Path(tempfile.gettempdir()) / "ezmap_bridge" / "cache"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Shared files ===
    cache_dir: Path = Field(
        default=DEFAULT_CACHE_DIR,
        description="Private cache directory for copies of content locators"
    )
    content_root: Optional[Path] = Field(
        default=None,
        description="Root directory backing content:// locators"
    )
    relay_launch_to_stream: bool = Field(
        default=True,
        description="Also push the launch event to the event stream"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.upper()

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EZMAP_",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
