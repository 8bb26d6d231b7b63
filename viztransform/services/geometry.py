"""
Geometric primitives, predicates, and operations.

Provides the Point, Vector, and Line value types used by every transformation,
the typed errors raised for degenerate input, and the tolerance-aware
predicates (parallel, perpendicular, same line, same point) the simplifier
relies on.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, TypeVar, Union

import numpy as np

from viztransform.services.tolerance import EPSILON, are_equal, is_zero

T = TypeVar("T")


class GeometryError(Exception):
    """Error raised for configurations that don't determine a geometric object."""
    code = "GEOMETRY_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DegenerateLineError(GeometryError):
    """Two coincident points don't determine a Line."""
    code = "DEGENERATE_LINE"


class DegenerateVectorError(GeometryError):
    """A zero-length Vector has no direction."""
    code = "DEGENERATE_VECTOR"


class NoIntersectionError(GeometryError):
    """Parallel Lines don't meet in a single Point."""
    code = "NO_INTERSECTION"


@dataclass(frozen=True)
class Point:
    """A location in the xy-plane."""
    x: float
    y: float

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Point":
        return cls(x=float(arr[0]), y=float(arr[1]))

    @classmethod
    def from_dict(cls, d: dict) -> "Point":
        return cls(x=float(d["x"]), y=float(d["y"]))


@dataclass(frozen=True)
class Vector:
    """
    A displacement: direction plus magnitude.

    Only ever used to displace a Point or Line, never treated as a location.
    """
    i: float
    j: float

    def scaled(self, factor: float) -> "Vector":
        return Vector(i=self.i * factor, j=self.j * factor)


@dataclass(frozen=True)
class Line:
    """
    A straight line through two different points.

    Two Lines describe the same geometric line whenever are_same_line() holds,
    regardless of which defining points were used to build them.
    """
    a: Point
    b: Point

    def __post_init__(self):
        if are_same_point(self.a, self.b):
            raise DegenerateLineError(
                f"Points {self.a} and {self.b} don't determine a line",
                details={"a": (self.a.x, self.a.y), "b": (self.b.x, self.b.y)},
            )

    @property
    def direction(self) -> Vector:
        """Vector from the first defining point to the second."""
        return Vector(i=self.b.x - self.a.x, j=self.b.y - self.a.y)

    @property
    def unit_direction(self) -> Vector:
        d = self.direction
        n = length(d)
        return Vector(i=d.i / n, j=d.j / n)

    @property
    def unit_normal(self) -> Vector:
        """Unit direction rotated a quarter turn counter-clockwise."""
        u = self.unit_direction
        return Vector(i=-u.j, j=u.i)

    def standard_form(self) -> Tuple[float, float, float]:
        """
        Coefficients (m, n, c) of the line equation m*x + n*y = c.

        (m, n) is the unit normal, so m*x + n*y - c is the signed distance
        of (x, y) from the line.
        """
        n = self.unit_normal
        return n.i, n.j, n.i * self.a.x + n.j * self.a.y


# ============================================================
# CONSTRUCTION
# ============================================================


def new_line(a: Point, b: Point, eps: float = EPSILON) -> Line:
    """
    Create a Line through two Points.

    Line itself always rejects points closer than EPSILON; a larger eps
    widens the rejection.

    Raises:
        DegenerateLineError: If a and b are the same point within eps
    """
    if are_same_point(a, b, eps):
        raise DegenerateLineError(
            f"Points {a} and {b} don't determine a line",
            details={"a": (a.x, a.y), "b": (b.x, b.y), "eps": eps},
        )
    return Line(a=a, b=b)


def line_from_point_and_slope(p: Point, rise: float, run: float) -> Line:
    """
    Create a Line through p with the given slope.

    Raises:
        DegenerateLineError: If rise and run are both 0
    """
    return new_line(p, Point(x=p.x + run, y=p.y + rise))


def must(operation: Callable[..., T], *args, **kwargs) -> T:
    """
    Call a geometric operation whose failure conditions are already excluded.

    The simplifier intersects lines it has just proven, or constructed, to be
    non-parallel. If such a call fails anyway the simplifier itself is wrong,
    so the failure is raised as an AssertionError rather than as a
    recoverable GeometryError that callers would try to handle.
    """
    try:
        return operation(*args, **kwargs)
    except GeometryError as e:
        raise AssertionError(
            f"Precondition of {operation.__name__} violated: {e.message}"
        ) from e


# ============================================================
# MEASUREMENT
# ============================================================


def length(v: Vector) -> float:
    """Euclidean length of a Vector."""
    return math.hypot(v.i, v.j)


def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two Points."""
    return length(Vector(i=q.x - p.x, j=q.y - p.y))


def scale_vector(v: Vector, new_length: float, eps: float = EPSILON) -> Vector:
    """
    Vector with v's direction and the given signed length.

    Raises:
        DegenerateVectorError: If v has length 0 and so no direction
    """
    current = length(v)
    if is_zero(current, eps):
        raise DegenerateVectorError(
            f"Vector {v} has no direction to scale",
            details={"i": v.i, "j": v.j},
        )
    return Vector(i=new_length * v.i / current, j=new_length * v.j / current)


# ============================================================
# PREDICATES
# ============================================================


def are_same_point(a: Point, b: Point, eps: float = EPSILON) -> bool:
    return are_equal(a.x, b.x, eps) and are_equal(a.y, b.y, eps)


def are_parallel(a: Line, b: Line, eps: float = EPSILON) -> bool:
    """True if the cross product of the Lines' unit directions is ~0."""
    u, v = a.unit_direction, b.unit_direction
    return is_zero(u.i * v.j - u.j * v.i, eps)


def are_perpendicular(a: Line, b: Line, eps: float = EPSILON) -> bool:
    """True if the dot product of the Lines' unit directions is ~0."""
    u, v = a.unit_direction, b.unit_direction
    return is_zero(u.i * v.i + u.j * v.j, eps)


def are_same_line(a: Line, b: Line, eps: float = EPSILON) -> bool:
    """True if a and b are parallel and b's first point lies on a."""
    if not are_parallel(a, b, eps):
        return False
    m, n, c = a.standard_form()
    return are_equal(m * b.a.x + n * b.a.y, c, eps)


# ============================================================
# OPERATIONS
# ============================================================


def intersection(a: Line, b: Line, eps: float = EPSILON) -> Point:
    """
    Point where two Lines meet.

    Raises:
        NoIntersectionError: If the Lines are parallel, since they either never
            meet or meet everywhere
    """
    if are_parallel(a, b, eps):
        raise NoIntersectionError(
            "Parallel lines don't intersect in a single point",
            details={"a": str(a), "b": str(b)},
        )
    da, db = a.direction, b.direction
    denom = da.i * db.j - da.j * db.i
    wx, wy = b.a.x - a.a.x, b.a.y - a.a.y
    s = (wx * db.j - wy * db.i) / denom
    return Point(x=a.a.x + s * da.i, y=a.a.y + s * da.j)


def perpendicular_through(l: Line, p: Point) -> Line:
    """Line through p perpendicular to l."""
    d = l.direction
    return new_line(p, Point(x=p.x - d.j, y=p.y + d.i))


def perpendicular(l: Line) -> Line:
    """Line perpendicular to l through l's first defining point."""
    return perpendicular_through(l, l.a)


def rotation_matrix(radians: float) -> np.ndarray:
    """2x2 counter-clockwise rotation matrix."""
    cos_t = math.cos(radians)
    sin_t = math.sin(radians)
    return np.array([
        [cos_t, -sin_t],
        [sin_t,  cos_t],
    ], dtype=np.float64)


def _rotate_point(p: Point, center: Point, m: np.ndarray) -> Point:
    c = center.to_array()
    return Point.from_array(m @ (p.to_array() - c) + c)


def rotate(obj: Union[Line, Point], center: Point, radians: float) -> Union[Line, Point]:
    """Rotate a Line or Point counter-clockwise around center by radians."""
    m = rotation_matrix(radians)
    if isinstance(obj, Point):
        return _rotate_point(obj, center, m)
    return new_line(_rotate_point(obj.a, center, m), _rotate_point(obj.b, center, m))


def shift(l: Line, v: Vector) -> Line:
    """Translate both of l's defining points by v."""
    return new_line(
        Point(x=l.a.x + v.i, y=l.a.y + v.j),
        Point(x=l.b.x + v.i, y=l.b.y + v.j),
    )


def shortest_vector(a: Line, b: Line, eps: float = EPSILON) -> Vector:
    """
    Shortest Vector carrying Line a onto Line b.

    For parallel Lines this runs along their common perpendicular and has
    length 0 when they coincide. Intersecting Lines get the zero Vector.
    """
    if not are_parallel(a, b, eps):
        return Vector(i=0.0, j=0.0)
    m, n, c = a.standard_form()
    offset = m * b.a.x + n * b.a.y - c
    return Vector(i=offset * m, j=offset * n)


def turn_angle(a: Line, b: Line) -> float:
    """
    Counter-clockwise rotation in [0, pi) that makes a parallel to b, with no
    tolerance applied.

    Use this when a line is about to be replaced by another: the rest of the
    pair has to turn by the exact amount even if it is tiny.
    """
    da, db = a.direction, b.direction
    return (math.atan2(db.j, db.i) - math.atan2(da.j, da.i)) % math.pi


def angle(a: Line, b: Line, eps: float = EPSILON) -> float:
    """
    Counter-clockwise rotation in [0, pi) that makes a parallel to b.

    Lines already parallel within eps give 0. Otherwise a Line's direction is
    only defined up to sign, so the difference of the atan2 angles is a
    candidate, not an answer: it is checked by rotating a and testing
    parallelism. With rotate() turning counter-clockwise the candidate passes;
    the complementary angle is taken only when rotate() turns the other way.
    If neither passes, eps is below rounding error and the candidate is kept.
    """
    if are_parallel(a, b, eps):
        return 0.0
    rads = turn_angle(a, b)
    if are_parallel(rotate(a, a.a, rads), b, eps):
        return rads
    complement = math.pi - rads
    if are_parallel(rotate(a, a.a, complement), b, eps):
        return complement
    return rads


def foot(l: Line, p: Point) -> Point:
    """Point on l closest to p."""
    return must(intersection, l, perpendicular_through(l, p))


def reflect(l: Line, p: Point) -> Point:
    """Mirror image of p across l."""
    f = foot(l, p)
    return Point(x=p.x + 2 * (f.x - p.x), y=p.y + 2 * (f.y - p.y))
