"""
Rasterization of Transformations into images using OpenCV.

Each panel shows, on a white canvas with the world origin at its center:
- the reflection lines of the transformation (black)
- an asymmetric sample shape (red) and its image under the transformation (blue)
- a marker for the kind: rotation center dot, translation/glide arrow
- the kind as a text label

A transformation that is not yet simplified gets a second panel showing its
simplified form next to it.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from viztransform.config import settings
from viztransform.models.isometry import IsometryKind
from viztransform.services.classify import ClassifyService, classify_service
from viztransform.services.geometry import Line, Point, distance, foot
from viztransform.services.transform import Transformation, apply

logger = logging.getLogger(__name__)


class RasterizeService:
    """Service for drawing Transformations."""

    def __init__(
        self,
        width_px: int = None,
        height_px: int = None,
        pixels_per_unit: float = None,
        classifier: Optional[ClassifyService] = None,
    ):
        self.width_px = width_px or settings.canvas_width_px
        self.height_px = height_px or settings.canvas_height_px
        self.pixels_per_unit = pixels_per_unit or settings.pixels_per_unit
        self.classifier = classifier or classify_service
        self.sample_points = [Point(x=x, y=y) for x, y in settings.sample_points]

    @property
    def simplifier(self):
        return self.classifier.simplifier

    def render(self, t: Transformation) -> np.ndarray:
        """
        Draw a Transformation.

        Args:
            t: Transformation to draw

        Returns:
            BGR uint8 image; one panel wide if t is already simplified,
            two panels (input, simplified) otherwise
        """
        start_time = time.time()

        if self.simplifier.is_simplified(t):
            image = self.render_panel(t)
        else:
            image = np.hstack([
                self.render_panel(t, title="input"),
                self.render_panel(self.simplifier.simplify(t), title="simplified"),
            ])

        render_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Rendered {len(t)}-line transformation to "
            f"{image.shape[1]}x{image.shape[0]} px in {render_time_ms}ms"
        )
        return image

    def render_panel(self, t: Transformation, title: Optional[str] = None) -> np.ndarray:
        """Draw one panel: lines, sample shape, its image, and kind marker."""
        image = np.full(
            (self.height_px, self.width_px, 3),
            settings.background_color,
            dtype=np.uint8,
        )
        self._draw_axes(image)

        for l in t:
            self._draw_line(image, l, settings.line_color)

        self._draw_polyline(image, self.sample_points, settings.sample_color)
        self._draw_polyline(
            image, [apply(t, p) for p in self.sample_points], settings.image_color
        )

        params = self.classifier.describe(t)
        if params.kind == IsometryKind.ROTATION:
            center = Point(x=params.center.x, y=params.center.y)
            cv2.circle(image, self._to_pixel(center), 5, settings.marker_color, -1)
        elif params.kind in (IsometryKind.TRANSLATION, IsometryKind.GLIDE_REFLECTION):
            if params.kind == IsometryKind.GLIDE_REFLECTION:
                mirror = Line(
                    a=Point(x=params.line.a.x, y=params.line.a.y),
                    b=Point(x=params.line.b.x, y=params.line.b.y),
                )
                tail = foot(mirror, Point(x=0.0, y=0.0))
            else:
                tail = Point(x=0.0, y=0.0)
            tip = Point(x=tail.x + params.vector.i, y=tail.y + params.vector.j)
            cv2.arrowedLine(
                image,
                self._to_pixel(tail),
                self._to_pixel(tip),
                settings.marker_color,
                settings.line_thickness,
                line_type=cv2.LINE_AA,
                tipLength=0.1,
            )

        label = params.kind.value if title is None else f"{title}: {params.kind.value}"
        cv2.putText(
            image,
            label,
            (10, 25),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.6,
            settings.line_color,
            1,
            cv2.LINE_AA,
        )
        return image

    def encode_png(self, image: np.ndarray) -> bytes:
        """Encode a BGR image as PNG bytes."""
        success, buffer = cv2.imencode(".png", image)
        if not success:
            raise ValueError("Failed to encode image as PNG")
        return buffer.tobytes()

    def save(self, t: Transformation, output_path: Path) -> Path:
        """Render t and write it to output_path as PNG."""
        output_path = Path(output_path)
        output_path.write_bytes(self.encode_png(self.render(t)))
        logger.info(f"Saved visualization to {output_path}")
        return output_path

    # ------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------

    @property
    def _reach(self) -> float:
        """World distance beyond which nothing is visible."""
        return (self.width_px + self.height_px) / self.pixels_per_unit

    def _to_pixel(self, p: Point) -> Tuple[int, int]:
        # y grows upward in the world and downward in the image
        limit = 10 * (self.width_px + self.height_px)
        px = self.width_px / 2 + p.x * self.pixels_per_unit
        py = self.height_px / 2 - p.y * self.pixels_per_unit
        return (
            int(round(np.clip(px, -limit, limit))),
            int(round(np.clip(py, -limit, limit))),
        )

    def _draw_axes(self, image: np.ndarray) -> None:
        cx, cy = self.width_px // 2, self.height_px // 2
        cv2.line(image, (0, cy), (self.width_px - 1, cy), settings.axis_color, 1)
        cv2.line(image, (cx, 0), (cx, self.height_px - 1), settings.axis_color, 1)

    def _draw_line(self, image: np.ndarray, l: Line, color: Tuple[int, int, int]) -> None:
        """Draw l across the whole panel, skipping it if it's off-canvas."""
        origin = Point(x=0.0, y=0.0)
        closest = foot(l, origin)
        reach = self._reach
        if distance(closest, origin) > reach:
            return
        u = l.unit_direction
        start = Point(x=closest.x - reach * u.i, y=closest.y - reach * u.j)
        end = Point(x=closest.x + reach * u.i, y=closest.y + reach * u.j)
        cv2.line(
            image,
            self._to_pixel(start),
            self._to_pixel(end),
            color,
            settings.line_thickness,
            cv2.LINE_AA,
        )

    def _draw_polyline(
        self,
        image: np.ndarray,
        points: Sequence[Point],
        color: Tuple[int, int, int],
    ) -> None:
        pixels: List[Tuple[int, int]] = [self._to_pixel(p) for p in points]
        pts = np.array(pixels, dtype=np.int32).reshape((-1, 1, 2))
        cv2.polylines(image, [pts], False, color, settings.line_thickness, cv2.LINE_AA)
        # Mark the first point so orientation survives rotations
        cv2.circle(image, pixels[0], 4, color, -1)


# Global service instance
rasterize_service = RasterizeService()
