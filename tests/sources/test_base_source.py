"""
Unit tests for the ImageSource abstract base class and CaptureError.
"""

import pytest

from leaflens.core.image_buffer import ImageBuffer
from leaflens.sources.base_source import (
    CAMERA_ACCESS_MESSAGE,
    CaptureError,
    ImageSource,
)


class IncompleteSource(ImageSource):
    """Source that doesn't implement required methods - should fail."""
    pass


class MinimalCompleteSource(ImageSource):
    """Minimal source that implements only the required abstract members."""

    @property
    def source_name(self) -> str:
        return "test_source"

    def acquire(self) -> ImageBuffer:
        return ImageBuffer(width=1, height=1, pixels=bytes(4))


class TestImageSourceContract:
    """Verify the ABC enforces its contract correctly."""

    def test_incomplete_source_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError, match="abstract method"):
            IncompleteSource()  # type: ignore[abstract]

    def test_minimal_source_can_instantiate(self) -> None:
        source = MinimalCompleteSource()
        assert source.source_name == "test_source"
        assert source.acquire().total_pixels == 1

    def test_repr_includes_source_name(self) -> None:
        repr_str = repr(MinimalCompleteSource())
        assert "MinimalCompleteSource" in repr_str
        assert "source=test_source" in repr_str


class TestCaptureError:
    """CaptureError keeps technical and user-facing text apart."""

    def test_default_user_message_is_camera_prompt(self) -> None:
        error = CaptureError("VIDIOC_STREAMON: Permission denied")
        assert str(error) == "VIDIOC_STREAMON: Permission denied"
        assert error.user_message == CAMERA_ACCESS_MESSAGE

    def test_custom_user_message(self) -> None:
        error = CaptureError("truncated PNG", user_message="Try another photo.")
        assert error.user_message == "Try another photo."

    def test_is_runtime_error(self) -> None:
        assert issubclass(CaptureError, RuntimeError)
