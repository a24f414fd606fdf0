"""
Example host driving the annotation canvas without a GUI.

This demonstrates how the UI-agnostic core can be scripted: load an
image, place a few points, pan and zoom, and write the painted frames.

Usage:
    python examples/headless_example.py path/to/image.png out_dir/
"""

import logging
import sys
from pathlib import Path

import cv2

from pointlink_annotation.core.canvas import InteractionController
from pointlink_annotation.core.canvas.utils import compute_graph_statistics
from pointlink_annotation.interfaces import RasterCanvasAdapter

logger = logging.getLogger(__name__)


def main(image_path: Path, out_dir: Path):
    logging.basicConfig(level=logging.INFO)
    out_dir.mkdir(parents=True, exist_ok=True)

    controller = InteractionController.from_config()
    frames = []
    adapter = RasterCanvasAdapter(controller, update_image_callback=frames.append)

    adapter.on_file_selected(image_path.read_bytes()).result()

    for x, y in [(100, 100), (220, 140), (400, 120), (380, 300), (150, 320)]:
        adapter.on_click(x, y)

    controller.zoom_in()
    controller.toggle_pan()
    adapter.on_mouse_down(300, 300)
    adapter.on_mouse_move(260, 280)
    adapter.on_mouse_up(260, 280)
    controller.toggle_pan()

    for i, frame in enumerate(frames):
        cv2.imwrite(str(out_dir / f"frame_{i:03d}.png"), cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))

    logger.info("Points: %s", controller.point_list())
    logger.info("Statistics: %s", compute_graph_statistics(controller.session.graph))


if __name__ == "__main__":
    main(Path(sys.argv[1]), Path(sys.argv[2]))
