"""
Test fixtures and utilities for canvas tests.

Provides reusable fixtures for images, sessions and controllers.
"""

import cv2
import numpy as np
import pytest


def encode_png(image: np.ndarray) -> bytes:
    """Encode an RGB image as PNG bytes, like a file picked by the user."""
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(image, cv2.COLOR_RGB2BGR))
    assert ok, "PNG encoding failed"
    return buffer.tobytes()


@pytest.fixture
def test_image():
    """Create a test RGB image the size of the default canvas."""
    return np.random.randint(0, 255, (600, 800, 3), dtype=np.uint8)


@pytest.fixture
def test_image_bytes(test_image):
    """PNG bytes of test_image."""
    return encode_png(test_image)


@pytest.fixture
def large_image_bytes():
    """PNG bytes of an image larger than the default canvas."""
    image = np.zeros((1200, 1600, 3), dtype=np.uint8)
    image[:, :, 1] = 128
    return encode_png(image)


@pytest.fixture
def session():
    """Empty canvas session."""
    from pointlink_annotation.core.canvas import CanvasSession

    return CanvasSession()


@pytest.fixture
def controller(session):
    """Controller driving the session fixture."""
    from pointlink_annotation.core.canvas import InteractionController

    return InteractionController(session)


@pytest.fixture
def loaded_controller(controller, test_image_bytes):
    """Controller with test_image already loaded."""
    controller.load_image(test_image_bytes).result()
    return controller


@pytest.fixture
def event_log(session):
    """Records (event_type, data) for every event the session emits."""
    from pointlink_annotation.core.canvas import EventType

    log = []
    for event_type in EventType:
        session.events.on(
            event_type, lambda event: log.append((event.event_type, event.data))
        )
    return log
