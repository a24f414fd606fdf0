"""
Interactive point-annotation canvas.

A UI-agnostic core that maps pointer input on a zoomable, pannable canvas
into a greedily linked graph of image-space points.
"""

from pathlib import Path

from .utils import i18n  # noqa: F401

__version__ = (Path(__file__).parent / "VERSION").read_text().strip()
