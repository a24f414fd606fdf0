"""
Render planning: turns a session into an ordered list of draw primitives.

The planner never draws anything itself. A host paints the returned list
in order: the image, then edges, then point markers.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .image import LoadedImage
from .state import CanvasSession, Mode
from .style import Color


@dataclass(frozen=True)
class ImagePrimitive:
    """The loaded image, scaled by ``scale`` and placed at (x, y), clipped to ``clip``."""

    image: LoadedImage = field(compare=False, repr=False)
    x: float
    y: float
    scale: float
    clip: Tuple[int, int, int, int]

    @property
    def width(self) -> float:
        return self.image.width * self.scale

    @property
    def height(self) -> float:
        return self.image.height * self.scale


@dataclass(frozen=True)
class LinePrimitive:
    start: Tuple[float, float]
    end: Tuple[float, float]
    color: Color
    width: float


@dataclass(frozen=True)
class CirclePrimitive:
    center: Tuple[float, float]
    radius: float
    color: Color


DrawPrimitive = Union[ImagePrimitive, LinePrimitive, CirclePrimitive]
DrawList = List[DrawPrimitive]


def render(session: CanvasSession) -> DrawList:
    """
    Plan the frame for the current session state.

    Nothing is drawn until an image has loaded. Point markers are left out
    while the session is in pan mode.

    Args:
        session: Canvas session to plan

    Returns:
        Draw primitives in screen space, in painting order
    """
    if session.image is None:
        return []

    viewport = session.viewport
    style = session.style
    width, height = viewport.canvas_size

    draw_list: DrawList = [
        ImagePrimitive(
            image=session.image,
            x=viewport.pan_x,
            y=viewport.pan_y,
            scale=viewport.zoom,
            clip=(0, 0, width, height),
        )
    ]

    for start, end in session.graph.edge_segments():
        draw_list.append(
            LinePrimitive(
                start=viewport.image_to_screen(start.x, start.y),
                end=viewport.image_to_screen(end.x, end.y),
                color=style.edge_color,
                width=style.edge_width,
            )
        )

    if session.mode is not Mode.PAN:
        screen = viewport.image_to_screen_array(session.graph.coordinates())
        for sx, sy in screen:
            draw_list.append(
                CirclePrimitive(
                    center=(float(sx), float(sy)),
                    radius=style.point_radius,
                    color=style.point_color,
                )
            )

    return draw_list
