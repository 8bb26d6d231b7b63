"""
viztransform: planar isometries as compositions of line reflections.

Compose reflections, translations, rotations and glide reflections, reduce
any composition to at most 3 reflections, classify it, and draw it.
"""

__version__ = "0.1.0"

from viztransform.models import IsometryKind, IsometryParams
from viztransform.services import (
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
    Transformation,
    identity,
    reflection,
    translation,
    rotation,
    glide_reflection,
    compose,
    apply,
    type_of,
    describe,
    ParseError,
    parse_transformation,
)
from viztransform.services.simplify import is_simplified, simplify
from viztransform.services.unparse import unparse

__all__ = [
    "__version__",
    "IsometryKind",
    "IsometryParams",
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
    "simplify",
    "is_simplified",
    "type_of",
    "describe",
    "ParseError",
    "parse_transformation",
    "unparse",
]
