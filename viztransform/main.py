"""
Command line interface for composing, simplifying and drawing isometries.

The transformation is read from STDIN as a newline-separated, EOF-terminated
list of transformations that are composed in order.

Usage:
    viztransform apply '(x y)'      Print the image of the point
    viztransform simplify [--json]  Print the equivalent simplified transformation
    viztransform viz OUTPUT         Write a PNG visualization to OUTPUT(.png)

Transformations:
    NoTransformation()                             Does nothing.
    LineReflection({(ax ay) (bx by)})              Reflects points across the line.
    Translation(<i j>)                             Translates points by the vector.
    Rotation((x y), rads)                          Rotates points counter-clockwise
                                                   by radians around the point.
    GlideReflection({(ax ay) (bx by)}, <i j>)      Reflects points across the line
                                                   and translates along it.

Examples:
    # Two rotations about different centers
    printf 'Rotation((0 0), 1)\\nRotation((2 0), 2)\\n' | viztransform simplify

    # Reflect a point across the y-axis
    echo 'LineReflection({(0 0) (0 1)})' | viztransform apply '(2 3)'
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from viztransform import __version__
from viztransform.config import settings
from viztransform.services.classify import ClassifyService
from viztransform.services.geometry import GeometryError
from viztransform.services.parse import ParseError, parse_point, parse_transformation
from viztransform.services.rasterize import RasterizeService
from viztransform.services.simplify import SimplifyService
from viztransform.services.transform import apply
from viztransform.services.unparse import format_point, unparse

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Log to stderr so stdout only carries results."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def apply_command(args: argparse.Namespace, classifier: ClassifyService) -> None:
    """Print the image of the given point."""
    point = parse_point(args.point)
    t = parse_transformation(sys.stdin, classifier.epsilon)
    print(format_point(apply(t, point), classifier.epsilon))


def simplify_command(args: argparse.Namespace, classifier: ClassifyService) -> None:
    """Print the simplified transformation."""
    t = parse_transformation(sys.stdin, classifier.epsilon)
    if args.json:
        print(classifier.describe(t).model_dump_json(indent=2, exclude_none=True))
    else:
        print(unparse(t, classifier))


def viz_command(args: argparse.Namespace, classifier: ClassifyService) -> None:
    """Write a PNG visualization."""
    output_path = args.output
    if output_path.suffix.lower() != ".png":
        output_path = output_path.with_name(output_path.name + ".png")
    t = parse_transformation(sys.stdin, classifier.epsilon)
    RasterizeService(classifier=classifier).save(t, output_path)
    print(output_path)


def positive_float(text: str) -> float:
    """argparse type accepting only numbers greater than 0."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="viztransform",
        description="Compose, simplify and visualize planar isometries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--epsilon",
        type=positive_float,
        default=None,
        help=(
            "Tolerance used when parsing, simplifying and printing "
            f"(default: {settings.epsilon})"
        ),
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    apply_parser = subparsers.add_parser(
        "apply",
        help="Apply the transformation read from STDIN to a point",
    )
    apply_parser.add_argument("point", type=str, help="Point as '(x y)'")
    apply_parser.set_defaults(handler=apply_command)

    simplify_parser = subparsers.add_parser(
        "simplify",
        help="Simplify the transformation read from STDIN",
    )
    simplify_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the kind and parameters as JSON instead of a constructor call",
    )
    simplify_parser.set_defaults(handler=simplify_command)

    viz_parser = subparsers.add_parser(
        "viz",
        help="Visualize the transformation read from STDIN as a PNG",
    )
    viz_parser.add_argument(
        "output",
        type=Path,
        help="Output file ('.png' is appended if missing)",
    )
    viz_parser.set_defaults(handler=viz_command)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(debug=args.debug or settings.debug)

    classifier = ClassifyService(SimplifyService(epsilon=args.epsilon))
    logger.debug(f"Running {args.command} with epsilon {classifier.epsilon}")

    try:
        args.handler(args, classifier)
    except ParseError as e:
        line_number = e.details.get("line_number")
        where = f" (line {line_number})" if line_number else ""
        print(f"Error: {e.message}{where}", file=sys.stderr)
        sys.exit(1)
    except GeometryError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
