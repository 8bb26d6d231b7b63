"""
Classification of Transformations by isometry kind.

The kind is read off the simplified form: its length, and for 2 lines,
whether they are parallel. describe() additionally recovers each kind's
defining parameters.
"""

import logging
import math
from typing import Optional

from viztransform.models.isometry import (
    IsometryKind,
    IsometryParams,
    LineParams,
    PointParams,
    VectorParams,
)
from viztransform.services.geometry import (
    Line,
    Point,
    Vector,
    angle,
    are_parallel,
    intersection,
    must,
    shortest_vector,
)
from viztransform.services.simplify import SimplifyService, simplify_service
from viztransform.services.transform import Transformation

logger = logging.getLogger(__name__)


def point_params(p: Point) -> PointParams:
    return PointParams(x=p.x, y=p.y)


def vector_params(v: Vector) -> VectorParams:
    return VectorParams(i=v.i, j=v.j)


def line_params(l: Line) -> LineParams:
    return LineParams(a=point_params(l.a), b=point_params(l.b))


class ClassifyService:
    """Service determining the kind and parameters of Transformations."""

    def __init__(self, simplifier: Optional[SimplifyService] = None):
        self.simplifier = simplifier or simplify_service

    @property
    def epsilon(self) -> float:
        return self.simplifier.epsilon

    def type_of(self, t: Transformation) -> IsometryKind:
        """Kind of isometry a Transformation represents."""
        s = self.simplifier.simplify(t)
        return self._kind_of_simplified(s)

    def describe(self, t: Transformation) -> IsometryParams:
        """
        Kind and defining parameters of a Transformation.

        Parameters come from the simplified form:
        - reflection: the mirror line
        - translation: twice the shortest vector between the parallel lines
        - rotation: the lines' intersection, and twice the angle from the
          first line to the second
        - glide reflection: the line perpendicular to the parallel pair, and
          twice the shortest vector between the parallel pair

        Returns:
            IsometryParams for the simplified form
        """
        s = self.simplifier.simplify(t)
        kind = self._kind_of_simplified(s)
        eps = self.epsilon

        params = IsometryParams(kind=kind, line_count=len(s))
        if kind == IsometryKind.REFLECTION:
            params.line = line_params(s[0])
        elif kind == IsometryKind.TRANSLATION:
            params.vector = vector_params(shortest_vector(s[0], s[1], eps).scaled(2))
        elif kind == IsometryKind.ROTATION:
            rads = 2 * angle(s[0], s[1], eps)
            params.center = point_params(must(intersection, s[0], s[1], eps))
            params.angle_rad = rads
            params.angle_deg = math.degrees(rads)
        elif kind == IsometryKind.GLIDE_REFLECTION:
            if are_parallel(s[0], s[1], eps):
                first, second, mirror = s[0], s[1], s[2]
            else:
                mirror, first, second = s[0], s[1], s[2]
            params.line = line_params(mirror)
            params.vector = vector_params(shortest_vector(first, second, eps).scaled(2))

        logger.debug(f"Described {len(t)}-line transformation as {kind.value}")
        return params

    def _kind_of_simplified(self, s: Transformation) -> IsometryKind:
        if len(s) == 0:
            return IsometryKind.IDENTITY
        if len(s) == 1:
            return IsometryKind.REFLECTION
        if len(s) == 2:
            if are_parallel(s[0], s[1], self.epsilon):
                return IsometryKind.TRANSLATION
            return IsometryKind.ROTATION
        return IsometryKind.GLIDE_REFLECTION


# Global service instance
classify_service = ClassifyService()


def type_of(t: Transformation) -> IsometryKind:
    return classify_service.type_of(t)


def describe(t: Transformation) -> IsometryParams:
    return classify_service.describe(t)
