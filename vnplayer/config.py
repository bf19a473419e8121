"""
Configuration management for the visual novel player
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Story data
    scenes_source: str = Field(
        default="scenes.json",
        description="Path or http(s) URL of the scene data JSON document",
    )
    start_scene_id: str = Field(default="introduction")
    narrator_name: str = Field(
        default="Narrator",
        description="Speaker name that means no sprite is actively talking",
    )
    fetch_timeout: float = Field(default=30.0, gt=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_file: Optional[str] = Field(default=None)
    debug: bool = Field(default=False)

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
