"""
Pydantic models for results and their serialization.
"""

from viztransform.models.isometry import (
    IsometryKind,
    PointParams,
    VectorParams,
    LineParams,
    IsometryParams,
)

__all__ = [
    "IsometryKind",
    "PointParams",
    "VectorParams",
    "LineParams",
    "IsometryParams",
]
