"""
Raster adapter for the annotation canvas.

Paints draw lists into RGB numpy frames with OpenCV, so any GUI toolkit
that can show an image array can host the canvas.
"""

from typing import Callable, Optional, Sequence, Tuple

import cv2
import numpy as np
from matplotlib.colors import to_rgb

from ..core.canvas import (
    CanvasEvent,
    CirclePrimitive,
    EventType,
    ImagePrimitive,
    InteractionController,
    LinePrimitive,
)

RGB = Tuple[int, int, int]

REDRAW_EVENTS = (
    EventType.IMAGE_LOADED,
    EventType.POINT_ADDED,
    EventType.POINT_DELETED,
    EventType.VIEW_CHANGED,
    EventType.MODE_CHANGED,
)


def resolve_color(color) -> RGB:
    """Turn a color name, hex string or RGB tuple into 0-255 RGB."""
    if isinstance(color, str):
        return tuple(int(round(c * 255)) for c in to_rgb(color))
    r, g, b = color
    return int(r), int(g), int(b)


def _to_pixel(pt: Sequence[float]) -> Tuple[int, int]:
    return int(round(pt[0])), int(round(pt[1]))


def _blit_image(frame: np.ndarray, prim: ImagePrimitive):
    x0, y0, x1, y1 = prim.clip
    width, height = x1 - x0, y1 - y0
    matrix = np.float32(
        [[prim.scale, 0, prim.x - x0], [0, prim.scale, prim.y - y0]]
    )
    pixels = prim.image.pixels
    warped = cv2.warpAffine(
        pixels,
        matrix,
        (width, height),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )
    # Coverage mask tells image pixels apart from the border fill
    coverage = cv2.warpAffine(
        np.full(pixels.shape[:2], 255, dtype=np.uint8),
        matrix,
        (width, height),
        flags=cv2.INTER_NEAREST,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )
    region = frame[y0:y1, x0:x1]
    covered = coverage > 0
    region[covered] = warped[covered]


def rasterize(
    draw_list,
    canvas_size: Tuple[int, int],
    background: RGB = (255, 255, 255),
) -> np.ndarray:
    """
    Paint a draw list.

    Args:
        draw_list: Primitives from render(), in painting order
        canvas_size: (width, height) of the canvas
        background: Fill color where nothing is drawn

    Returns:
        RGB frame of shape (height, width, 3)
    """
    width, height = canvas_size
    frame = np.empty((height, width, 3), dtype=np.uint8)
    frame[:] = background

    for prim in draw_list:
        if isinstance(prim, ImagePrimitive):
            _blit_image(frame, prim)
        elif isinstance(prim, LinePrimitive):
            cv2.line(
                frame,
                _to_pixel(prim.start),
                _to_pixel(prim.end),
                resolve_color(prim.color),
                thickness=max(1, int(round(prim.width))),
                lineType=cv2.LINE_AA,
            )
        elif isinstance(prim, CirclePrimitive):
            cv2.circle(
                frame,
                _to_pixel(prim.center),
                max(1, int(round(prim.radius))),
                resolve_color(prim.color),
                thickness=-1,
                lineType=cv2.LINE_AA,
            )
        else:
            raise TypeError(f"Unknown draw primitive: {type(prim).__name__}")

    return frame


class RasterCanvasAdapter:
    """
    Adapter connecting an InteractionController to a raster display.

    - Forwards host input to the controller
    - Re-renders whenever the canvas reports a change
    - Hands the painted frame to the host callback
    """

    def __init__(
        self,
        controller: InteractionController,
        update_image_callback: Optional[Callable[[np.ndarray], None]] = None,
        background: RGB = (255, 255, 255),
    ):
        """
        Initialize adapter.

        Args:
            controller: Core interaction controller
            update_image_callback: Receives every freshly painted frame
            background: Canvas fill color
        """
        self.controller = controller
        self.update_image_callback = update_image_callback
        self.background = background

        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for canvas events."""
        for event_type in REDRAW_EVENTS:
            self.controller.events.on(event_type, self._on_canvas_changed)

    def _on_canvas_changed(self, event: CanvasEvent):
        """Repaint after any visible change."""
        if self.update_image_callback:
            self.update_image_callback(self.get_frame())

    def get_frame(self) -> np.ndarray:
        """Paint the current state of the canvas."""
        return rasterize(
            self.controller.render(),
            self.controller.session.viewport.canvas_size,
            background=self.background,
        )

    # Host input forwarding

    def on_mouse_down(self, x: float, y: float):
        self.controller.pointer_down(x, y)

    def on_mouse_move(self, x: float, y: float):
        self.controller.pointer_move(x, y)

    def on_mouse_up(self, x: float, y: float):
        self.controller.pointer_up(x, y)

    def on_click(self, x: float, y: float):
        return self.controller.click(x, y)

    def on_file_selected(self, data: bytes):
        return self.controller.load_image(data)

    @property
    def cursor(self) -> str:
        return self.controller.cursor_hint()
