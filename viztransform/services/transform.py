"""
Transformations as ordered compositions of line reflections.

A Transformation is the sequence of Lines a point is reflected across, first
Line first. The empty sequence is the identity. Every planar isometry is a
composition of at most 3 reflections, so the elementary constructors below
build each kind from reflections:

    reflection across l               -> [l]
    translation by v                  -> 2 lines perpendicular to v, |v|/2 apart
    rotation by theta around p        -> 2 lines through p, theta/2 apart
    glide reflection along l by v     -> [l] + translation along l
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

from viztransform.services.geometry import (
    Line,
    Point,
    Vector,
    length,
    new_line,
    reflect,
    rotate,
)
from viztransform.services.tolerance import EPSILON, is_zero


@dataclass(frozen=True)
class Transformation:
    """Immutable, ordered sequence of reflection Lines."""
    lines: Tuple[Line, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> Line:
        return self.lines[index]


def identity() -> Transformation:
    """Transformation that leaves every point where it is."""
    return Transformation()


def reflection(l: Line) -> Transformation:
    """Transformation that mirrors points across l."""
    return Transformation(lines=(l,))


def translation(v: Vector, eps: float = EPSILON) -> Transformation:
    """
    Transformation that moves points by v.

    Built from two Lines perpendicular to v: one through the origin and one
    through the tip of v/2. Reflecting across parallel Lines d apart moves
    points by 2d. A zero-length v gives the identity.
    """
    if is_zero(length(v), eps):
        return identity()
    hx, hy = v.i / 2, v.j / 2
    first = new_line(Point(x=0.0, y=0.0), Point(x=-v.j, y=v.i))
    second = new_line(Point(x=hx, y=hy), Point(x=hx - v.j, y=hy + v.i))
    return Transformation(lines=(first, second))


def rotation(center: Point, radians: float, eps: float = EPSILON) -> Transformation:
    """
    Transformation that turns points counter-clockwise around center.

    Built from two Lines through center meeting at radians/2. Reflecting
    across Lines that meet at angle theta rotates by 2*theta around their
    intersection. A whole number of turns gives the identity.
    """
    if is_zero(math.remainder(radians, 2 * math.pi), eps):
        return identity()
    first = new_line(center, Point(x=center.x + 1, y=center.y))
    second = rotate(first, center, radians / 2)
    return Transformation(lines=(first, second))


def glide_reflection(ref: Line, v: Vector, eps: float = EPSILON) -> Transformation:
    """
    Reflection across ref followed by a translation along ref.

    Only the component of v along ref is used; a v perpendicular to ref gives
    a plain reflection.
    """
    u = ref.unit_direction
    along = v.i * u.i + v.j * u.j
    return compose(reflection(ref), translation(u.scaled(along), eps))


def compose(*transformations: Transformation) -> Transformation:
    """
    Transformation applying each argument in turn.

    compose(a, b) applies a's reflections and then b's.
    """
    lines: Tuple[Line, ...] = ()
    for t in transformations:
        lines += t.lines
    return Transformation(lines=lines)


def apply(t: Transformation, p: Point) -> Point:
    """Image of p: p reflected across each of t's Lines in order."""
    for l in t:
        p = reflect(l, p)
    return p
