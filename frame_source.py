from __future__ import annotations

"""
Webcam capture.

Thin wrapper around cv2.VideoCapture that reports a failed open as an
exception and a failed grab as None.
"""

import logging
from typing import Optional

import cv2
import numpy as np

logger = logging.getLogger("rubikscube.camera")


class CameraError(RuntimeError):
    """Raised when the capture device cannot be used."""


class FrameSource:
    """Camera device opened through OpenCV."""

    def __init__(
        self,
        device: int = 0,
        api: int = cv2.CAP_ANY,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        self.device = device
        self.api = api
        self.width = width
        self.height = height
        self._capture: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> "FrameSource":
        """Open the device, raising CameraError if OpenCV cannot."""
        if self._capture is not None:
            return self

        capture = cv2.VideoCapture(self.device, self.api)
        if not capture.isOpened():
            capture.release()
            raise CameraError(f"Unable to open camera {self.device}")

        if self.width is not None:
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        if self.height is not None:
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        self._capture = capture
        logger.info(
            "Opened camera %s (%dx%d)",
            self.device,
            int(capture.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )
        return self

    def read(self) -> Optional[np.ndarray]:
        """Grab the next frame; None when the device returned nothing."""
        if self._capture is None:
            raise CameraError("Camera is not open")

        ok, frame = self._capture.read()
        if not ok or frame is None or frame.size == 0:
            return None
        return frame

    def release(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info("Released camera %s", self.device)

    def __enter__(self) -> "FrameSource":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
