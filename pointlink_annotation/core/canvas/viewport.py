"""
Viewport: zoom and pan state mapping image space to screen space.
"""

import logging
from gettext import gettext as _
from typing import Optional, Tuple

import numpy as np

from .utils import clamp

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = (800, 600)
DEFAULT_MAX_ZOOM = 3.0


class Viewport:
    """
    Zoom factor and pan offset of the canvas.

    Screen coordinates relate to image coordinates by
    ``screen = image * zoom + pan``. Zoom is anchored at the image origin.
    The lower zoom bound is only known once an image has been fitted.
    """

    def __init__(
        self,
        canvas_width: int = DEFAULT_CANVAS_SIZE[0],
        canvas_height: int = DEFAULT_CANVAS_SIZE[1],
        max_zoom: float = DEFAULT_MAX_ZOOM,
    ):
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError(
                _("Canvas size must be positive, got {w}x{h}").format(
                    w=canvas_width, h=canvas_height
                )
            )
        if max_zoom <= 0:
            raise ValueError(_("Maximum zoom must be positive"))

        self.canvas_width = int(canvas_width)
        self.canvas_height = int(canvas_height)
        self.max_zoom = float(max_zoom)
        self.min_zoom: Optional[float] = None

        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.canvas_width, self.canvas_height

    @property
    def pan_offset(self) -> Tuple[float, float]:
        return self.pan_x, self.pan_y

    def fit_image(self, image_width: int, image_height: int):
        """Recompute the minimum zoom so the image never shrinks below the canvas fit."""
        if image_width <= 0 or image_height <= 0:
            raise ValueError(
                _("Image size must be positive, got {w}x{h}").format(
                    w=image_width, h=image_height
                )
            )
        self.min_zoom = min(
            self.canvas_width / image_width, self.canvas_height / image_height
        )
        logger.debug(
            "Minimum zoom for %dx%d image: %.4f", image_width, image_height, self.min_zoom
        )

    def screen_to_image(self, sx: float, sy: float) -> Tuple[float, float]:
        return (sx - self.pan_x) / self.zoom, (sy - self.pan_y) / self.zoom

    def image_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.zoom + self.pan_x, y * self.zoom + self.pan_y

    def image_to_screen_array(self, coords: np.ndarray) -> np.ndarray:
        """Vectorized image_to_screen for an (N, 2) array."""
        coords = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        return coords * self.zoom + np.array([self.pan_x, self.pan_y])

    def zoom_bounds(self) -> Tuple[Optional[float], float]:
        """
        Current (lower, upper) zoom bounds.

        The lower bound is None before an image is fitted. An image so small
        that fitting it needs more than the maximum zoom is capped at the
        maximum.
        """
        if self.min_zoom is None:
            return None, self.max_zoom
        return min(self.min_zoom, self.max_zoom), self.max_zoom

    def zoom_by(self, delta: float) -> bool:
        """
        Change the zoom by ``delta``, clamped to the zoom bounds.

        Zooming out is a no-op until an image has been fitted.

        Returns:
            True if the zoom changed
        """
        lower, upper = self.zoom_bounds()
        if lower is None:
            if delta < 0:
                logger.debug("Zoom out ignored, no image fitted")
                return False
            new_zoom = min(self.zoom + delta, upper)
        else:
            new_zoom = clamp(self.zoom + delta, lower, upper)

        if new_zoom == self.zoom:
            return False
        self.zoom = new_zoom
        logger.debug("Zoom set to %.4f", self.zoom)
        return True

    def reset(self):
        """Back to zoom 1.0 with no pan."""
        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0

    def pan_by(self, dx: float, dy: float):
        """Pan by a screen-space pointer motion."""
        self.pan_x += dx / self.zoom
        self.pan_y += dy / self.zoom
        logger.debug("Pan offset now (%.2f, %.2f)", self.pan_x, self.pan_y)
