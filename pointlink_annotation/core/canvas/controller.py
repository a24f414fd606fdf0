"""
Interaction controller for the annotation canvas.

Translates raw host input (pointer events, button actions, file bytes)
into viewport and graph mutations, enforcing the annotate/pan mode rules.
UI-agnostic - a host forwards events in and renders what render() returns.
"""

import logging
from concurrent.futures import Executor, Future
from gettext import gettext as _
from typing import List, Optional, Tuple

from ...config import load_config
from .events import CanvasEvent, EventEmitter, EventType
from .graph import Point, PointId
from .image import ImageLoader
from .render import DrawList, render
from .state import CanvasSession, Mode, PointerState
from .style import RenderStyle
from .utils import round_coordinate
from .viewport import Viewport

logger = logging.getLogger(__name__)

DEFAULT_ZOOM_STEP = 0.2


class InteractionController:
    """
    Drives a CanvasSession from user input.

    This class handles:
    - Point placement on clicks in annotate mode
    - Pan drags in pan mode
    - Zoom, reset and mode toggle actions
    - Point deletion by list position
    - Image loading, latest load wins

    Every mutation emits an event on ``session.events`` so the host knows
    when to call render() again.
    """

    def __init__(
        self,
        session: Optional[CanvasSession] = None,
        loader: Optional[ImageLoader] = None,
        zoom_step: float = DEFAULT_ZOOM_STEP,
        decimals: int = 1,
    ):
        """
        Initialize controller.

        Args:
            session: Session to drive, a fresh one if omitted
            loader: Image loader, an inline (synchronous) one if omitted
            zoom_step: Zoom change per zoom-in/zoom-out action
            decimals: Rounding used by point_list()
        """
        self.session = session if session is not None else CanvasSession()
        self.loader = loader if loader is not None else ImageLoader()
        self.zoom_step = zoom_step
        self.decimals = decimals

        # Last pointer position of the current pan drag
        self._anchor: Optional[Tuple[float, float]] = None
        # Set once a drag actually moved, so the trailing click is ignored
        self._dragged = False

    @classmethod
    def from_config(cls, cfg=None, executor: Optional[Executor] = None):
        """
        Build a controller from configuration.

        Args:
            cfg: Configuration tree, load_config() if omitted
            executor: Optional executor to decode images off the input thread
        """
        if cfg is None:
            cfg = load_config()
        session = CanvasSession(
            viewport=Viewport(
                canvas_width=cfg.canvas.width,
                canvas_height=cfg.canvas.height,
                max_zoom=cfg.zoom.max,
            ),
            style=RenderStyle.from_config(cfg.style),
        )
        return cls(
            session,
            loader=ImageLoader(executor),
            zoom_step=cfg.zoom.step,
            decimals=cfg.display.decimals,
        )

    @property
    def events(self) -> EventEmitter:
        return self.session.events

    @property
    def mode(self) -> Mode:
        return self.session.mode

    @property
    def pointer_state(self) -> PointerState:
        return self.session.pointer

    # Image

    def load_image(self, data: bytes) -> Future:
        """
        Start loading an image from raw file bytes.

        The session image is replaced once decoding completes, unless a
        newer load was started meanwhile. With a threaded loader the
        completion runs on the worker thread, so hosts should marshal it
        back to their input thread.

        Returns:
            Future resolving to the LoadedImage, or failing with
            ImageDecodeError
        """
        token, future = self.loader.submit(data)
        future.add_done_callback(lambda f: self._on_image_decoded(token, f))
        return future

    def _on_image_decoded(self, token: int, future: Future):
        if future.cancelled():
            return
        if not self.loader.is_latest(token):
            logger.debug("Discarding stale image load #%d", token)
            return

        error = future.exception()
        if error is not None:
            logger.warning(_("Image could not be loaded: {error}").format(error=error))
            self._emit(EventType.IMAGE_LOAD_FAILED, error=str(error))
            return

        image = future.result()
        self.session.set_image(image)
        logger.info(
            _("Loaded {w}x{h} image").format(w=image.width, h=image.height)
        )
        self._emit(
            EventType.IMAGE_LOADED,
            width=image.width,
            height=image.height,
            min_zoom=self.session.viewport.min_zoom,
        )

    # Pointer input (screen coordinates)

    def pointer_down(self, x: float, y: float):
        self._dragged = False
        if self.session.mode is Mode.PAN:
            self.session.pointer = PointerState.PANNING
            self._anchor = (x, y)

    def pointer_move(self, x: float, y: float):
        if self.session.pointer is not PointerState.PANNING:
            return

        lx, ly = self._anchor
        dx, dy = x - lx, y - ly
        if dx == 0 and dy == 0:
            return

        self._anchor = (x, y)
        self._dragged = True
        self.session.viewport.pan_by(dx, dy)
        self._emit_view_changed()

    def pointer_up(self, x: float, y: float):
        if self.session.pointer is not PointerState.PANNING:
            return
        self.pointer_move(x, y)
        self.session.pointer = PointerState.IDLE
        self._anchor = None

    def click(self, x: float, y: float) -> Optional[PointId]:
        """
        Handle a click at screen coordinates.

        In annotate mode this places a point. In pan mode a plain click
        returns to annotate mode without placing anything. A click that
        closes a drag does nothing.

        Returns:
            Id of the placed point, if any
        """
        if self._dragged:
            self._dragged = False
            return None

        if self.session.mode is Mode.PAN:
            self.set_mode(Mode.ANNOTATE)
            return None

        x_img, y_img = self.session.viewport.screen_to_image(x, y)
        return self.add_point(x_img, y_img)

    # Graph actions

    def add_point(self, x: float, y: float) -> Optional[PointId]:
        """
        Add a point at image coordinates and link it to its nearest neighbor.

        Points are only placed in annotate mode with an image loaded.

        Returns:
            Id of the new point, or None if placement is not allowed
        """
        if self.session.mode is not Mode.ANNOTATE:
            logger.debug("Point ignored, not in annotate mode")
            return None
        if not self.session.has_image:
            logger.debug("Point ignored, no image loaded")
            return None

        graph = self.session.graph
        point_id = graph.add_point(x, y)
        point = graph.get(point_id)
        self._emit(
            EventType.POINT_ADDED,
            point=point.to_dict(),
            index=len(graph) - 1,
            num_points=len(graph),
        )
        for edge in graph.incident_edges(point_id):
            self._emit(EventType.EDGE_ADDED, edge=edge.to_dict())
        return point_id

    def delete_at(self, index: int) -> Optional[Point]:
        """
        Delete the point at a position of the point list.

        Out-of-range positions are a no-op.

        Returns:
            The deleted point, or None
        """
        graph = self.session.graph
        point = graph.point_at(index)
        if point is None:
            logger.warning(_("No point at position {index}").format(index=index))
            return None
        return self._delete(point, index)

    def delete_point(self, point_id: PointId) -> bool:
        """Delete a point by id. Unknown ids are a no-op."""
        graph = self.session.graph
        index = graph.index_of(point_id)
        if index is None:
            return False
        self._delete(graph.point_at(index), index)
        return True

    def _delete(self, point: Point, index: int) -> Point:
        graph = self.session.graph
        removed = graph.incident_edges(point.id)
        graph.delete_point(point.id)
        self._emit(
            EventType.POINT_DELETED,
            point=point.to_dict(),
            index=index,
            removed_edges=[e.to_dict() for e in removed],
        )
        return point

    # View actions

    def zoom_in(self) -> bool:
        return self._zoom(self.zoom_step)

    def zoom_out(self) -> bool:
        return self._zoom(-self.zoom_step)

    def _zoom(self, delta: float) -> bool:
        changed = self.session.viewport.zoom_by(delta)
        if changed:
            self._emit_view_changed()
        return changed

    def reset_view(self):
        self.session.viewport.reset()
        self._emit_view_changed()

    def toggle_pan(self):
        """Flip between annotate and pan mode."""
        if self.session.mode is Mode.PAN:
            self.set_mode(Mode.ANNOTATE)
        else:
            self.set_mode(Mode.PAN)

    def set_mode(self, mode: Mode):
        if mode is self.session.mode:
            return
        self.session.mode = mode
        # Leaving pan mode ends any drag in progress
        self.session.pointer = PointerState.IDLE
        self._anchor = None
        self._dragged = False
        logger.debug("Mode set to %s", mode.value)
        self._emit(EventType.MODE_CHANGED, mode=mode.value)

    # Read models

    def render(self) -> DrawList:
        return render(self.session)

    def point_list(self) -> List[dict]:
        """
        Points for the host's point list, in sequence order.

        Empty while in pan mode.
        """
        if self.session.mode is Mode.PAN:
            return []
        return [
            {
                "index": i,
                "id": p.id,
                "x": round_coordinate(p.x, self.decimals),
                "y": round_coordinate(p.y, self.decimals),
            }
            for i, p in enumerate(self.session.graph.all_points())
        ]

    def cursor_hint(self) -> str:
        if self.session.pointer is PointerState.PANNING:
            return "grabbing"
        if self.session.mode is Mode.PAN:
            return "grab"
        return "default"

    def _emit_view_changed(self):
        viewport = self.session.viewport
        self._emit(
            EventType.VIEW_CHANGED, zoom=viewport.zoom, pan_offset=viewport.pan_offset
        )

    def _emit(self, event_type: EventType, **data):
        self.session.events.emit(CanvasEvent(event_type, data))
