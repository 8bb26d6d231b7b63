"""
Isometry kinds and the parameters that define each kind.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class IsometryKind(str, Enum):
    """Kind of a planar isometry, read off its simplified form."""
    IDENTITY = "identity"                  # 0 lines
    REFLECTION = "reflection"              # 1 line
    TRANSLATION = "translation"            # 2 parallel lines
    ROTATION = "rotation"                  # 2 meeting lines
    GLIDE_REFLECTION = "glide_reflection"  # 3 lines


class PointParams(BaseModel):
    """A 2D point."""
    x: float
    y: float


class VectorParams(BaseModel):
    """A 2D displacement."""
    i: float
    j: float


class LineParams(BaseModel):
    """A line through two different points."""
    a: PointParams
    b: PointParams


class IsometryParams(BaseModel):
    """Kind of an isometry together with its defining parameters."""
    kind: IsometryKind
    line: Optional[LineParams] = Field(
        default=None,
        description="Reflection line. Present for reflections and glide reflections.",
    )
    vector: Optional[VectorParams] = Field(
        default=None,
        description="Translation vector. Present for translations and glide reflections.",
    )
    center: Optional[PointParams] = Field(
        default=None,
        description="Rotation center. Present for rotations.",
    )
    angle_rad: Optional[float] = Field(
        default=None,
        description="Counter-clockwise rotation angle in [0, 2*pi). Present for rotations.",
    )
    angle_deg: Optional[float] = None
    line_count: int = Field(description="Number of reflections in the simplified form")
