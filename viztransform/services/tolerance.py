"""
Epsilon-tolerant comparison of real numbers.

Every geometric predicate in this package is built on these two functions.
"""

from typing import Final

# Differences below this magnitude are floating-point noise from the
# trigonometric and determinant computations, not geometry.
EPSILON: Final[float] = 1e-7


def are_equal(a: float, b: float, eps: float = EPSILON) -> bool:
    """True if a and b differ by less than eps."""
    return abs(a - b) < eps


def is_zero(value: float, eps: float = EPSILON) -> bool:
    """True if value is less than eps away from 0."""
    return are_equal(value, 0.0, eps)
