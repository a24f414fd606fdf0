"""
Interfaces module - host adapters for the canvas core.

Provides adapters that connect the core canvas logic with a concrete
rendering surface.
"""

from .raster_adapter import RasterCanvasAdapter, rasterize

__all__ = ['RasterCanvasAdapter', 'rasterize']
