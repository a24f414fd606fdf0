"""
Image decoding for the canvas.

Decoding is the one asynchronous boundary of the canvas: raw bytes go in,
a future holding a dimensioned RGB image comes out.
"""

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from gettext import gettext as _
from typing import Optional, Tuple

import cv2
import numpy as np

from ...utils.misc import incrf

logger = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    """Raised when bytes cannot be decoded into an image."""


@dataclass(frozen=True, eq=False)
class LoadedImage:
    """A decoded RGB image (H, W, 3) in its natural size."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self.pixels.shape)


def decode_image(data: bytes) -> LoadedImage:
    """
    Decode encoded image bytes (PNG, JPEG, ...).

    Args:
        data: Raw file contents

    Returns:
        LoadedImage with RGB pixels

    Raises:
        ImageDecodeError: If the bytes are empty or not a supported image
    """
    if not data:
        raise ImageDecodeError(_("No image data to decode"))

    buffer = np.frombuffer(data, dtype=np.uint8)
    try:
        bgr = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise ImageDecodeError(_("Could not decode image: {error}").format(error=e)) from e
    if bgr is None:
        raise ImageDecodeError(_("Could not decode image data"))

    rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    return LoadedImage(pixels=rgb)


class ImageLoader:
    """
    Starts image decodes and tracks which one is the latest.

    Every load gets a token from an increasing counter; only the newest
    token counts, so a slower, older decode never replaces a newer image.
    Without an executor decoding happens inline and the returned future is
    already completed.
    """

    def __init__(self, executor: Optional[Executor] = None):
        self.executor = executor
        self._tokens = incrf()
        self.latest_token = 0

    def submit(self, data: bytes) -> Tuple[int, Future]:
        """
        Start decoding.

        Returns:
            (token, future) where the future resolves to a LoadedImage or
            fails with ImageDecodeError
        """
        token = next(self._tokens)
        self.latest_token = token
        logger.debug("Decoding image #%d (%d bytes)", token, len(data or b""))

        if self.executor is not None:
            return token, self.executor.submit(decode_image, data)

        future: Future = Future()
        try:
            future.set_result(decode_image(data))
        except Exception as e:
            future.set_exception(e)
        return token, future

    def is_latest(self, token: int) -> bool:
        return token == self.latest_token
