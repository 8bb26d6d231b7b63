"""
Parsing of the textual transformation grammar.

One transformation per line, composed in order:

    NoTransformation()
    LineReflection({(ax ay) (bx by)})
    Translation(<i j>)
    Rotation((x y), rads)
    GlideReflection({(ax ay) (bx by)}, <i j>)

Arguments are separated by ", " and coordinates by a single space.
Transformations are only ever built through the constructors and compose().
"""

import logging
import math
from typing import Callable, Dict, Iterable, List, Tuple, Union

from viztransform.services.geometry import DegenerateLineError, Line, Point, Vector, new_line
from viztransform.services.tolerance import EPSILON
from viztransform.services.transform import (
    Transformation,
    compose,
    glide_reflection,
    identity,
    reflection,
    rotation,
    translation,
)

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Error parsing a textual transformation."""
    def __init__(self, code: str, message: str, details: dict = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


def parse_number(text: str) -> float:
    """Parse a finite real number."""
    try:
        value = float(text)
    except ValueError:
        raise ParseError("BAD_NUMBER", f"Not a number: {text!r}")
    if not math.isfinite(value):
        raise ParseError("BAD_NUMBER", f"Number must be finite: {text!r}")
    return value


def _parse_pair(text: str, opening: str, closing: str, code: str) -> Tuple[float, float]:
    if len(text) < 2 or text[0] != opening or text[-1] != closing:
        raise ParseError(code, f"Expected {opening}... ...{closing}, got {text!r}")
    fields = text[1:-1].split(" ")
    if len(fields) != 2:
        raise ParseError(code, f"Expected 2 space-separated numbers in {text!r}")
    try:
        return parse_number(fields[0]), parse_number(fields[1])
    except ParseError as e:
        raise ParseError(code, f"Bad coordinate in {text!r}: {e.message}") from e


def parse_point(text: str) -> Point:
    """Parse '(x y)'."""
    x, y = _parse_pair(text, "(", ")", "BAD_POINT")
    return Point(x=x, y=y)


def parse_vector(text: str) -> Vector:
    """Parse '<i j>'."""
    i, j = _parse_pair(text, "<", ">", "BAD_VECTOR")
    return Vector(i=i, j=j)


def parse_line(text: str, eps: float = EPSILON) -> Line:
    """
    Parse '{(ax ay) (bx by)}'.

    Raises:
        ParseError: BAD_LINE if malformed or if both points are the same
            within eps
    """
    if len(text) < 2 or text[0] != "{" or text[-1] != "}":
        raise ParseError("BAD_LINE", f"Expected {{(ax ay) (bx by)}}, got {text!r}")
    inner = text[1:-1]
    split_at = inner.find(")")
    if split_at == -1 or inner[split_at + 1:split_at + 2] != " ":
        raise ParseError("BAD_LINE", f"Expected two points separated by a space in {text!r}")
    try:
        a = parse_point(inner[:split_at + 1])
        b = parse_point(inner[split_at + 2:])
    except ParseError as e:
        raise ParseError("BAD_LINE", f"Bad point in {text!r}: {e.message}") from e
    try:
        return new_line(a, b, eps)
    except DegenerateLineError as e:
        raise ParseError("BAD_LINE", f"Line {text!r} needs two different points") from e


def _split_call(text: str) -> Tuple[str, List[str]]:
    """Split 'Name(arg, arg)' into the name and its arguments."""
    opening = text.find("(")
    if opening == -1 or not text.endswith(")"):
        raise ParseError("BAD_TRANSFORMATION", f"Expected Name(arguments), got {text!r}")
    inner = text[opening + 1:-1]
    args = inner.split(", ") if inner else []
    return text[:opening], args


def _expect_args(name: str, args: List[str], count: int) -> None:
    if len(args) != count:
        raise ParseError(
            "BAD_TRANSFORMATION",
            f"{name} takes {count} argument(s), got {len(args)}",
            details={"name": name, "args": args},
        )


def _no_transformation(args: List[str], eps: float) -> Transformation:
    _expect_args("NoTransformation", args, 0)
    return identity()


def _line_reflection(args: List[str], eps: float) -> Transformation:
    _expect_args("LineReflection", args, 1)
    return reflection(parse_line(args[0], eps))


def _translation(args: List[str], eps: float) -> Transformation:
    _expect_args("Translation", args, 1)
    return translation(parse_vector(args[0]), eps)


def _rotation(args: List[str], eps: float) -> Transformation:
    _expect_args("Rotation", args, 2)
    return rotation(parse_point(args[0]), parse_number(args[1]), eps)


def _glide_reflection(args: List[str], eps: float) -> Transformation:
    _expect_args("GlideReflection", args, 2)
    return glide_reflection(parse_line(args[0], eps), parse_vector(args[1]), eps)


CONSTRUCTORS: Dict[str, Callable[[List[str], float], Transformation]] = {
    "NoTransformation": _no_transformation,
    "LineReflection": _line_reflection,
    "Translation": _translation,
    "Rotation": _rotation,
    "GlideReflection": _glide_reflection,
}


def parse_statement(text: str, eps: float = EPSILON) -> Transformation:
    """
    Parse a single constructor call such as 'Translation(<1 0>)'.

    eps decides when a line's points coincide and when a translation or
    rotation is small enough to be the identity.
    """
    name, args = _split_call(text.strip())
    constructor = CONSTRUCTORS.get(name)
    if constructor is None:
        raise ParseError(
            "BAD_TRANSFORMATION",
            f"Unknown transformation {name!r}",
            details={"known": sorted(CONSTRUCTORS)},
        )
    return constructor(args, eps)


def parse_transformation(
    source: Union[str, Iterable[str]],
    eps: float = EPSILON,
) -> Transformation:
    """
    Parse newline-separated transformations and compose them in order.

    Blank lines are skipped.

    Args:
        source: Text, or an iterable of lines such as an open file
        eps: Tolerance passed to every constructor

    Returns:
        The composed Transformation

    Raises:
        ParseError: With the offending line number in details["line_number"]
    """
    lines = source.splitlines() if isinstance(source, str) else source

    parts = []
    for number, raw in enumerate(lines, start=1):
        text = raw.strip()
        if not text:
            continue
        try:
            parts.append(parse_statement(text, eps))
        except ParseError as e:
            e.details.setdefault("line_number", number)
            raise

    t = compose(*parts)
    logger.debug(f"Parsed {len(parts)} transformation(s) into {len(t)} reflections")
    return t
