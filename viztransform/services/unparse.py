"""
Rendering of Transformations back into the textual grammar.

The output is what parse_transformation() accepts, so parsing printed text and
printing it again gives the same text up to float32 rounding.
"""

from typing import Optional

import numpy as np

from viztransform.models.isometry import IsometryKind, IsometryParams
from viztransform.services.classify import ClassifyService, classify_service
from viztransform.services.tolerance import EPSILON, is_zero
from viztransform.services.transform import Transformation


def format_number(n: float, eps: float = EPSILON) -> str:
    """
    Shortest float32 representation of n, with -0 and |n| < eps printed as 0.
    """
    if is_zero(n, eps):
        n = 0.0
    return np.format_float_positional(np.float32(n), trim="-")


def format_point(p, eps: float = EPSILON) -> str:
    """'(x y)' for anything with x and y."""
    return f"({format_number(p.x, eps)} {format_number(p.y, eps)})"


def format_vector(v, eps: float = EPSILON) -> str:
    """'<i j>' for anything with i and j."""
    return f"<{format_number(v.i, eps)} {format_number(v.j, eps)}>"


def format_line(l, eps: float = EPSILON) -> str:
    """'{(ax ay) (bx by)}' for anything with defining points a and b."""
    return f"{{{format_point(l.a, eps)} {format_point(l.b, eps)}}}"


def unparse_params(params: IsometryParams, eps: float = EPSILON) -> str:
    """Render described parameters as a constructor call."""
    if params.kind == IsometryKind.REFLECTION:
        return f"LineReflection({format_line(params.line, eps)})"
    if params.kind == IsometryKind.TRANSLATION:
        return f"Translation({format_vector(params.vector, eps)})"
    if params.kind == IsometryKind.ROTATION:
        center = format_point(params.center, eps)
        return f"Rotation({center}, {format_number(params.angle_rad, eps)})"
    if params.kind == IsometryKind.GLIDE_REFLECTION:
        return f"GlideReflection({format_line(params.line, eps)}, {format_vector(params.vector, eps)})"
    return "NoTransformation()"


def unparse(t: Transformation, classifier: Optional[ClassifyService] = None) -> str:
    """Simplify t and render it as a single constructor call, using the classifier's epsilon."""
    classifier = classifier or classify_service
    return unparse_params(classifier.describe(t), classifier.epsilon)
