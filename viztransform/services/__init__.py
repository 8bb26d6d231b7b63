"""
Geometry, transformation, and rendering services.
"""

from viztransform.services.geometry import (
    GeometryError,
    DegenerateLineError,
    DegenerateVectorError,
    NoIntersectionError,
    Point,
    Vector,
    Line,
    new_line,
    scale_vector,
    are_same_point,
    are_parallel,
    are_perpendicular,
    are_same_line,
)
from viztransform.services.transform import (
    Transformation,
    identity,
    reflection,
    translation,
    rotation,
    glide_reflection,
    compose,
    apply,
)
from viztransform.services.simplify import SimplifyService
from viztransform.services.classify import ClassifyService, type_of, describe
from viztransform.services.parse import ParseError, parse_transformation
from viztransform.services.rasterize import RasterizeService

__all__ = [
    "GeometryError",
    "DegenerateLineError",
    "DegenerateVectorError",
    "NoIntersectionError",
    "Point",
    "Vector",
    "Line",
    "new_line",
    "scale_vector",
    "are_same_point",
    "are_parallel",
    "are_perpendicular",
    "are_same_line",
    "Transformation",
    "identity",
    "reflection",
    "translation",
    "rotation",
    "glide_reflection",
    "compose",
    "apply",
    "SimplifyService",
    "ClassifyService",
    "type_of",
    "describe",
    "ParseError",
    "parse_transformation",
    "RasterizeService",
]
