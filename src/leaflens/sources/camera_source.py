"""
Image source backed by a local camera through OpenCV.

The device is opened and released inside every acquire() call, so an
idle source never holds the camera.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from leaflens.config import AnalyzerSettings
from leaflens.core.image_buffer import ImageBuffer
from leaflens.sources.base_source import CAMERA_ACCESS_MESSAGE, CaptureError, ImageSource


logger = logging.getLogger(__name__)


class CameraImageSource(ImageSource):
    """
    Grab a single frame from a camera device.

    Parameters
    ----------
    device_index : int, default=0
        OpenCV device index (0 is usually /dev/video0 or the built-in webcam).
    resolution : tuple[int, int], optional
        Requested (width, height). Drivers may ignore it.
    warmup_frames : int, default=0
        Frames to read and discard before the one that is returned, giving
        auto-exposure and white balance time to settle.
    """

    def __init__(
        self,
        device_index: int = 0,
        resolution: tuple[int, int] | None = None,
        warmup_frames: int = 0,
    ) -> None:
        if warmup_frames < 0:
            raise ValueError(f"warmup_frames must be >= 0, got {warmup_frames}.")
        self._device_index = device_index
        self._resolution = resolution
        self._warmup_frames = warmup_frames

    @classmethod
    def from_settings(
        cls,
        settings: AnalyzerSettings,
        resolution: tuple[int, int] | None = None,
    ) -> CameraImageSource:
        """Build a source from the camera fields of AnalyzerSettings."""
        return cls(
            device_index=settings.camera_index,
            resolution=resolution,
            warmup_frames=settings.camera_warmup_frames,
        )

    @property
    def source_name(self) -> str:
        return "camera"

    @property
    def device_index(self) -> int:
        return self._device_index

    def acquire(self) -> ImageBuffer:
        capture = cv2.VideoCapture(self._device_index)
        try:
            if not capture.isOpened():
                raise CaptureError(
                    f"Camera {self._device_index} is not accessible. "
                    "Check that the device exists and that this process may use it.",
                    user_message=CAMERA_ACCESS_MESSAGE,
                )

            if self._resolution is not None:
                capture.set(cv2.CAP_PROP_FRAME_WIDTH, self._resolution[0])
                capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self._resolution[1])

            for _ in range(self._warmup_frames):
                capture.read()

            frame_read_ok, frame_bgr = capture.read()
            if not frame_read_ok or frame_bgr is None:
                raise CaptureError(
                    f"Camera {self._device_index} opened but returned no frame.",
                    user_message=CAMERA_ACCESS_MESSAGE,
                )
        finally:
            capture.release()

        frame_rgba = self._bgr_to_rgba(frame_bgr)
        logger.debug(
            "Captured %dx%d frame from camera %d",
            frame_rgba.shape[1],
            frame_rgba.shape[0],
            self._device_index,
        )
        return ImageBuffer.from_array(frame_rgba)

    def _bgr_to_rgba(self, frame: np.ndarray) -> np.ndarray:
        """Convert OpenCV's BGR (or grayscale) frame to RGBA."""
        if frame.ndim == 2:
            return cv2.cvtColor(frame, cv2.COLOR_GRAY2RGBA)
        if frame.shape[2] == 4:
            return cv2.cvtColor(frame, cv2.COLOR_BGRA2RGBA)
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)

    def __repr__(self) -> str:
        return f"<CameraImageSource device={self._device_index} warmup={self._warmup_frames}>"
