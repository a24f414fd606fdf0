"""
Session state for the annotation canvas.

All mutable canvas state lives in one CanvasSession that is passed to the
controller and to the render planner.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .events import EventEmitter
from .graph import AnnotationGraph
from .image import LoadedImage
from .style import RenderStyle
from .viewport import Viewport


class Mode(Enum):
    """What a pointer click does."""

    ANNOTATE = "annotate"
    PAN = "pan"


class PointerState(Enum):
    """Whether a pan drag is in progress."""

    IDLE = "idle"
    PANNING = "panning"


@dataclass
class CanvasSession:
    """Complete state of one annotation canvas."""

    viewport: Viewport = field(default_factory=Viewport)
    graph: AnnotationGraph = field(default_factory=AnnotationGraph)
    style: RenderStyle = field(default_factory=RenderStyle)
    events: EventEmitter = field(default_factory=EventEmitter)
    image: Optional[LoadedImage] = None
    mode: Mode = Mode.ANNOTATE
    pointer: PointerState = PointerState.IDLE

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def set_image(self, image: LoadedImage):
        """Replace the image. Points and edges are kept."""
        self.viewport.fit_image(image.width, image.height)
        self.image = image

    def to_dict(self):
        """Summary of the session, without pixel data."""
        return {
            "image_shape": self.image.shape if self.image is not None else None,
            "mode": self.mode.value,
            "pointer": self.pointer.value,
            "zoom": self.viewport.zoom,
            "pan_offset": self.viewport.pan_offset,
            "num_points": len(self.graph),
            "num_edges": len(self.graph.all_edges()),
        }
