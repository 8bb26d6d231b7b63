"""
Canonical simplification of reflection sequences.

Any composition of line reflections equals a composition of at most 3. This
module reduces a Transformation to such a minimal form:

    0 lines  identity
    1 line   reflection
    2 lines  rotation (lines meet) or translation (lines parallel)
    3 lines  glide reflection: one line perpendicular to a parallel pair,
             the perpendicular line first or last

Two facts drive every reduction:
- Reflecting twice across the same line does nothing, so equal neighbours cancel.
- A pair of meeting lines can be turned rigidly about its intersection, and a
  pair of parallel lines shifted rigidly, without changing the rotation or
  translation the pair represents. Turning pairs until neighbours coincide
  makes them cancel.

Reflections across perpendicular lines commute, which lets a glide
reflection triple be read in either of its two canonical orders.
"""

import logging
import math
from typing import List, Optional, Tuple

from viztransform.config import settings
from viztransform.services.geometry import (
    Line,
    are_parallel,
    are_perpendicular,
    are_same_line,
    are_same_point,
    intersection,
    must,
    new_line,
    rotate,
    shift,
    shortest_vector,
    turn_angle,
)
from viztransform.services.tolerance import EPSILON
from viztransform.services.transform import Transformation

logger = logging.getLogger(__name__)


class SimplifyService:
    """Service reducing Transformations to their canonical form."""

    def __init__(self, epsilon: Optional[float] = None):
        self.epsilon = epsilon if epsilon is not None else settings.epsilon
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")

    def is_simplified(self, t: Transformation) -> bool:
        """
        Check whether a Transformation is already in canonical form.

        Returns:
            True for fewer than 2 lines, for 2 different lines, and for
            3 lines that are perpendicular-then-parallel or
            parallel-then-perpendicular. False otherwise.
        """
        lines = list(t)
        if len(lines) < 2:
            return True
        if len(lines) == 2:
            return not are_same_line(lines[0], lines[1], self.epsilon)
        if len(lines) == 3:
            return self._is_canonical_triple(*lines)
        return False

    def simplify(self, t: Transformation) -> Transformation:
        """
        Reduce a Transformation to an equivalent one with at most 3 lines.

        Long sequences are consumed from the tail 4 lines at a time; each
        pass replaces 4 lines with at most 3, so the loop ends after at most
        len(t) - 3 passes.

        Args:
            t: Transformation of any length

        Returns:
            Equivalent Transformation satisfying is_simplified()
        """
        lines = list(t)
        passes = 0
        while len(lines) >= 4:
            lines = lines[:-4] + self._simplify4(*lines[-4:])
            passes += 1

        result = self._simplify_short(lines)
        logger.debug(
            f"Simplified {len(t)} lines to {len(result)} in {passes} passes"
        )
        return Transformation(lines=tuple(result))

    # ------------------------------------------------------------
    # Fixed-length cases
    # ------------------------------------------------------------

    def _simplify_short(self, lines: List[Line]) -> List[Line]:
        """Simplify at most 3 lines."""
        if len(lines) == 2:
            return self._simplify2(*lines)
        if len(lines) == 3:
            return self._simplify3(*lines)
        return list(lines)

    def _simplify2(self, a: Line, b: Line) -> List[Line]:
        if are_same_line(a, b, self.epsilon):
            return []
        return [a, b]

    def _simplify3(self, a: Line, b: Line, c: Line) -> List[Line]:
        if not self._simplify2(a, b):
            return [c]
        if not self._simplify2(b, c):
            return [a]
        if self._is_canonical_triple(a, b, c):
            return [a, b, c]
        if self._parallel(a, b) and self._parallel(b, c):
            # Odd number of parallel reflections: one reflection, offset by
            # the same net shift
            return [shift(a, shortest_vector(b, c, self.epsilon))]
        return self._align_mixed(a, b, c)

    def _simplify4(self, a: Line, b: Line, c: Line, d: Line) -> List[Line]:
        head = self._simplify3(a, b, c)
        if len(head) < 3:
            return self._simplify_short(head + [d])

        tail = self._simplify3(b, c, d)
        if len(tail) < 3:
            return self._simplify_short([a] + tail)

        p, q, s = self._parallel_first(*head)
        if self._parallel(q, d):
            # s is perpendicular to q and so to d: the two reflections
            # commute, leaving p, q, d parallel to collapse into one line
            return self._simplify2(shift(p, shortest_vector(q, d, self.epsilon)), s)

        # s commutes with the parallel pair, so s, p, q, d is equivalent and
        # both (s, p) and (q, d) are meeting pairs
        return self._rotate_middle_to_cancel(s, p, q, d)

    # ------------------------------------------------------------
    # Rigid pair moves
    # ------------------------------------------------------------

    def _align_mixed(self, a: Line, b: Line, c: Line) -> List[Line]:
        """
        Rewrite 3 lines, not all parallel, as a canonical triple.

        The meeting pair is turned until its inner line is perpendicular to
        the third line; that perpendicular pair is then turned until the
        shared middle line is parallel to the first line moved.
        """
        if not self._parallel(a, b):
            a, b = self._turn_pair(a, b, turn_angle(b, c) + math.pi / 2)
            b, c = self._turn_pair(b, c, turn_angle(b, a))
            return self._simplify2(a, b) + [c]

        b, c = self._turn_pair(b, c, turn_angle(b, a) + math.pi / 2)
        a, b = self._turn_pair(a, b, turn_angle(b, c))
        return [a] + self._simplify2(b, c)

    def _rotate_middle_to_cancel(self, a: Line, b: Line, c: Line, d: Line) -> List[Line]:
        """
        Turn meeting pairs (a, b) and (c, d) until b and c coincide, then drop them.

        Both b and c are brought onto the line joining the two intersection
        points. The turns use turn_angle(), not angle(): when c and d are
        nearly parallel their intersection is far away, and a misalignment
        below epsilon there still moves points near the origin.

        The intersections can only coincide when b and c are less than
        epsilon apart; c is then turned onto b's direction instead, since the
        joining line is undefined.
        """
        p = must(intersection, a, b, self.epsilon)
        q = must(intersection, c, d, self.epsilon)
        if are_same_point(p, q, max(self.epsilon, EPSILON)):
            d = rotate(d, q, turn_angle(c, b))
            return self._simplify2(a, d)

        joint = new_line(p, q)
        a = rotate(a, p, turn_angle(b, joint))
        d = rotate(d, q, turn_angle(c, joint))
        return self._simplify2(a, d)

    def _turn_pair(self, a: Line, b: Line, radians: float) -> Tuple[Line, Line]:
        """Rotate two meeting lines together about their intersection."""
        center = must(intersection, a, b, self.epsilon)
        return rotate(a, center, radians), rotate(b, center, radians)

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _parallel(self, a: Line, b: Line) -> bool:
        return are_parallel(a, b, self.epsilon)

    def _is_canonical_triple(self, a: Line, b: Line, c: Line) -> bool:
        eps = self.epsilon
        return (
            (are_perpendicular(a, b, eps) and are_parallel(b, c, eps))
            or (are_parallel(a, b, eps) and are_perpendicular(b, c, eps))
        )

    def _parallel_first(self, a: Line, b: Line, c: Line) -> Tuple[Line, Line, Line]:
        """Put a canonical triple in parallel-then-perpendicular order."""
        if self._parallel(a, b):
            return a, b, c
        # a is perpendicular to both b and c and commutes past them
        return b, c, a


# Global service instance
simplify_service = SimplifyService()


def simplify(t: Transformation) -> Transformation:
    return simplify_service.simplify(t)


def is_simplified(t: Transformation) -> bool:
    return simplify_service.is_simplified(t)
