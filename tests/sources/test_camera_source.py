"""
Unit tests for CameraImageSource.

OpenCV's VideoCapture is replaced with a scripted fake so the tests run
without a camera; color conversion still goes through real OpenCV.
"""

import numpy as np
import pytest

# Skip all tests if OpenCV is not installed
cv2 = pytest.importorskip("cv2")

from leaflens.config import AnalyzerSettings
from leaflens.sources import camera_source
from leaflens.sources.base_source import CAMERA_ACCESS_MESSAGE, CaptureError
from leaflens.sources.camera_source import CameraImageSource


class ScriptedVideoCapture:
    """Stand-in for cv2.VideoCapture that replays a list of frames."""

    instances: list["ScriptedVideoCapture"] = []

    def __init__(self, device_index, frames=None, opened=True) -> None:
        self.device_index = device_index
        self._frames = list(frames or [])
        self._opened = opened
        self.read_calls = 0
        self.released = False
        self.properties: dict[int, float] = {}
        ScriptedVideoCapture.instances.append(self)

    def isOpened(self) -> bool:
        return self._opened

    def set(self, property_id: int, value: float) -> bool:
        self.properties[property_id] = value
        return True

    def read(self):
        self.read_calls += 1
        if not self._frames:
            return False, None
        return True, self._frames.pop(0)

    def release(self) -> None:
        self.released = True


def install_capture(monkeypatch: pytest.MonkeyPatch, frames=None, opened=True) -> None:
    ScriptedVideoCapture.instances = []
    monkeypatch.setattr(
        camera_source.cv2,
        "VideoCapture",
        lambda device_index: ScriptedVideoCapture(device_index, frames=frames, opened=opened),
    )


def bgr_frame(blue: int, green: int, red: int) -> np.ndarray:
    frame = np.zeros((2, 3, 3), dtype=np.uint8)
    frame[:, :] = [blue, green, red]
    return frame


class TestCameraImageSourceCapture:
    """Successful captures."""

    def test_bgr_frame_becomes_rgba(self, monkeypatch: pytest.MonkeyPatch) -> None:
        install_capture(monkeypatch, frames=[bgr_frame(0, 0, 255)])
        image_buffer = CameraImageSource().acquire()
        assert (image_buffer.width, image_buffer.height) == (3, 2)
        assert image_buffer.pixels[:4] == bytes([255, 0, 0, 255])
        assert ScriptedVideoCapture.instances[0].released

    def test_warmup_frames_are_discarded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        install_capture(
            monkeypatch,
            frames=[bgr_frame(0, 0, 0), bgr_frame(0, 0, 0), bgr_frame(0, 200, 0)],
        )
        image_buffer = CameraImageSource(warmup_frames=2).acquire()
        assert image_buffer.pixels[:4] == bytes([0, 200, 0, 255])
        assert ScriptedVideoCapture.instances[0].read_calls == 3

    def test_resolution_is_requested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        install_capture(monkeypatch, frames=[bgr_frame(0, 0, 0)])
        CameraImageSource(resolution=(640, 480)).acquire()
        properties = ScriptedVideoCapture.instances[0].properties
        assert properties[cv2.CAP_PROP_FRAME_WIDTH] == 640
        assert properties[cv2.CAP_PROP_FRAME_HEIGHT] == 480

    def test_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        install_capture(monkeypatch, frames=[bgr_frame(0, 0, 0)])
        settings = AnalyzerSettings(camera_index=2, camera_warmup_frames=0)
        source = CameraImageSource.from_settings(settings)
        source.acquire()
        assert source.device_index == 2
        assert ScriptedVideoCapture.instances[0].device_index == 2
        assert source.source_name == "camera"


class TestCameraImageSourceErrors:
    """Device failures become CaptureError and always release the device."""

    def test_unopened_device(self, monkeypatch: pytest.MonkeyPatch) -> None:
        install_capture(monkeypatch, opened=False)
        with pytest.raises(CaptureError, match="not accessible") as error_info:
            CameraImageSource(device_index=1).acquire()
        assert error_info.value.user_message == CAMERA_ACCESS_MESSAGE
        assert ScriptedVideoCapture.instances[0].released

    def test_no_frame(self, monkeypatch: pytest.MonkeyPatch) -> None:
        install_capture(monkeypatch, frames=[])
        with pytest.raises(CaptureError, match="returned no frame"):
            CameraImageSource().acquire()
        assert ScriptedVideoCapture.instances[0].released

    def test_negative_warmup_rejected(self) -> None:
        with pytest.raises(ValueError, match="warmup_frames"):
            CameraImageSource(warmup_frames=-1)
