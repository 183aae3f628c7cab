"""
Abstract base class for image acquisition.

Each source knows how to produce an ImageBuffer from one kind of device
or file. The analyzer only ever talks to this interface, so the
classification core can be exercised with in-memory buffers while real
deployments plug in a camera or an upload handler.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from leaflens.core.image_buffer import ImageBuffer


CAMERA_ACCESS_MESSAGE = "Camera access denied. Please allow camera access to use this feature."
FILE_ACCESS_MESSAGE = "Could not read the photo. Please choose a different image file."


class CaptureError(RuntimeError):
    """
    Raised when a source cannot produce an image.

    Examples: camera permission denied, device busy, missing file or
    undecodable image data. ``user_message`` is safe to show to an end
    user; the exception text carries the technical detail.
    """

    def __init__(self, message: str, user_message: str = CAMERA_ACCESS_MESSAGE) -> None:
        super().__init__(message)
        self.user_message = user_message


class ImageSource(ABC):
    """
    Abstract base class for anything that yields an ImageBuffer.

    Subclasses must implement:
    - `source_name`: short identifier used in logs and error messages
    - `acquire()`: capture or decode one image
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """
        Return a short identifier for this source.

        Examples: 'file', 'camera'
        """
        ...

    @abstractmethod
    def acquire(self) -> ImageBuffer:
        """
        Produce one decoded RGBA image.

        Returns
        -------
        ImageBuffer
            The captured or decoded image.

        Raises
        ------
        CaptureError
            If the device or file cannot deliver an image.
        """
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} (source={self.source_name})>"
