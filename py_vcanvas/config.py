"""Configuration management."""

from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings

RGBA = Tuple[int, int, int, int]


class Settings(BaseSettings):
    """Application settings, overridable through VCANVAS_* environment variables."""

    # Image
    width: int = Field(default=800, gt=0, description="Image width in pixels")
    height: int = Field(default=600, gt=0, description="Image height in pixels")

    # Diagram
    number_of_points: int = Field(default=3000, gt=0, description="Number of Voronoi sites")
    lloyd_relaxation_iterations: int = Field(
        default=15, ge=0, description="Lloyd relaxation passes applied to the sites"
    )
    seed: Optional[int] = Field(default=None, description="Random seed, None for a fresh one")

    # Window / interaction
    window_title: str = Field(default="TEST", description="Viewer window title")
    base_color: RGBA = Field(default=(20, 80, 240, 255), description="Initial color of every cell")
    highlight_color: RGBA = Field(
        default=(20, 240, 80, 255), description="Color a clicked cell toggles to"
    )
    click_debounce_ms: int = Field(
        default=300, ge=0, description="Minimum time between two accepted clicks"
    )
    output_path: str = Field(
        default="result/CURRENT.png", description="Where the Enter key saves the image"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    class Config:
        env_prefix = "VCANVAS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
