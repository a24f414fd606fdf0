"""
Core canvas module - UI-agnostic annotation canvas logic.

This module provides the viewport transform, the nearest-neighbor
annotation graph, render planning and input handling, usable from any UI
framework (Qt, Tkinter, Web, etc).
"""

from .controller import InteractionController
from .events import CanvasEvent, EventEmitter, EventType
from .graph import AnnotationGraph, Edge, Point, PointId
from .image import ImageDecodeError, ImageLoader, LoadedImage, decode_image
from .render import (
    CirclePrimitive,
    DrawList,
    ImagePrimitive,
    LinePrimitive,
    render,
)
from .state import CanvasSession, Mode, PointerState
from .style import RenderStyle
from .viewport import Viewport

__all__ = [
    "InteractionController",
    "CanvasEvent",
    "EventEmitter",
    "EventType",
    "AnnotationGraph",
    "Edge",
    "Point",
    "PointId",
    "ImageDecodeError",
    "ImageLoader",
    "LoadedImage",
    "decode_image",
    "CirclePrimitive",
    "DrawList",
    "ImagePrimitive",
    "LinePrimitive",
    "render",
    "CanvasSession",
    "Mode",
    "PointerState",
    "RenderStyle",
    "Viewport",
]
