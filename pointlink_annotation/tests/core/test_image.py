"""
Tests for image decoding and the latest-load-wins loader.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from pointlink_annotation.core.canvas import (
    ImageDecodeError,
    ImageLoader,
    LoadedImage,
    decode_image,
)


class TestDecode:
    """Tests for image decoding."""

    def test_decode_png(self, test_image, test_image_bytes):
        """Test decoding PNG bytes into RGB."""
        image = decode_image(test_image_bytes)
        assert isinstance(image, LoadedImage)
        assert (image.width, image.height) == (800, 600)
        # PNG is lossless and channels come back as RGB
        np.testing.assert_array_equal(image.pixels, test_image)

    @pytest.mark.parametrize("data", [b"", b"not an image at all", b"\x89PNG\r\n"])
    def test_decode_garbage(self, data):
        """Test decoding invalid bytes."""
        with pytest.raises(ImageDecodeError):
            decode_image(data)

    def test_decode_error_is_value_error(self):
        """Test the decode error hierarchy."""
        assert issubclass(ImageDecodeError, ValueError)


class TestImageLoader:
    """Tests for the image loader."""

    def test_inline_load_completes_immediately(self, test_image_bytes):
        """Test loading without an executor."""
        loader = ImageLoader()
        token, future = loader.submit(test_image_bytes)
        assert future.done()
        assert future.result().shape == (600, 800, 3)
        assert loader.is_latest(token)

    def test_inline_failure_goes_into_future(self):
        """Test failure delivery through the future."""
        _token, future = ImageLoader().submit(b"garbage")
        assert future.done()
        assert isinstance(future.exception(), ImageDecodeError)

    def test_tokens_increase_and_latest_wins(self, test_image_bytes):
        """Test load tokens."""
        loader = ImageLoader()
        first, _ = loader.submit(test_image_bytes)
        second, _ = loader.submit(test_image_bytes)
        assert second > first
        assert not loader.is_latest(first)
        assert loader.is_latest(second)

    def test_executor_load(self, test_image_bytes):
        """Test loading in a thread pool."""
        with ThreadPoolExecutor(max_workers=1) as executor:
            loader = ImageLoader(executor)
            _token, future = loader.submit(test_image_bytes)
            assert future.result(timeout=10).width == 800
