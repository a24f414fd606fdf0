"""
Event system for the annotation canvas.

Lets the canvas core notify a host about state changes so the host can
re-render, without the core owning any drawing surface.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, DefaultDict, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur on the canvas."""

    # Image events
    IMAGE_LOADED = "image_loaded"
    IMAGE_LOAD_FAILED = "image_load_failed"

    # Graph events
    POINT_ADDED = "point_added"
    POINT_DELETED = "point_deleted"
    EDGE_ADDED = "edge_added"

    # View events
    VIEW_CHANGED = "view_changed"
    MODE_CHANGED = "mode_changed"


@dataclass
class CanvasEvent:
    """Event that occurs on the canvas."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


Listener = Callable[[CanvasEvent], None]


class EventEmitter:
    """
    Per-event-type listener registry.

    Listeners run in subscription order, synchronously, on the thread that
    emits. The canvas core emits after every mutation; the host subscribes
    to whatever it needs to repaint.
    """

    def __init__(self):
        self._listeners: DefaultDict[EventType, List[Listener]] = defaultdict(list)

    def on(self, event_type: EventType, callback: Listener):
        """Register ``callback`` for ``event_type``."""
        self._listeners[event_type].append(callback)

    def off(self, event_type: EventType, callback: Listener) -> bool:
        """
        Drop one registration of ``callback`` for ``event_type``.

        Returns:
            False if the callback was not registered
        """
        callbacks = self._listeners.get(event_type)
        if not callbacks or callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    def emit(self, event: CanvasEvent):
        """Deliver ``event`` to the listeners of its type."""
        # Copy so listeners may unsubscribe while being called
        for callback in list(self._listeners.get(event.event_type, ())):
            try:
                callback(event)
            except Exception:
                # A broken listener must not abort the operation that emitted
                logger.exception(
                    "Error in listener for %s", event.event_type.value
                )

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, ()))

    def clear(self):
        """Forget every listener."""
        self._listeners.clear()
