"""
Application configuration settings.
"""

from typing import List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    debug: bool = False

    # ============================================================
    # NUMERIC TOLERANCE
    # ============================================================

    # Two numbers closer than this are treated as equal by every geometric
    # predicate. Trigonometric and determinant round-off sits far below it.
    epsilon: float = Field(default=1e-7, gt=0)

    # ============================================================
    # RASTERIZATION SETTINGS
    # ============================================================

    # Panel size in pixels; a non-simplified transformation gets two panels
    canvas_width_px: int = 500
    canvas_height_px: int = 500

    # World units -> pixels; the world origin sits at the panel center
    pixels_per_unit: float = 25.0

    # Colors are BGR, matching OpenCV
    background_color: Tuple[int, int, int] = (255, 255, 255)
    axis_color: Tuple[int, int, int] = (220, 220, 220)
    line_color: Tuple[int, int, int] = (0, 0, 0)
    sample_color: Tuple[int, int, int] = (0, 0, 255)      # Red
    image_color: Tuple[int, int, int] = (255, 128, 0)     # Blue
    marker_color: Tuple[int, int, int] = (0, 160, 0)      # Green
    line_thickness: int = 2

    # Asymmetric "F"-like polyline, so reflections are visible as mirroring
    sample_points: List[Tuple[float, float]] = [
        (1.0, 1.0),
        (1.0, 5.0),
        (3.5, 5.0),
        (1.0, 5.0),
        (1.0, 3.0),
        (2.5, 3.0),
    ]

    model_config = SettingsConfigDict(
        env_prefix="VIZTRANSFORM_",
        env_file=".env",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
