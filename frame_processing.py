from __future__ import annotations

"""
Per-frame image processing applied before the texture upload.

Modes:
- none:   frame passed through
- edges:  |frame - GaussianBlur(frame)|, bright where the image has detail
- motion: |blur(frame) - blur(previous frame)|, bright where something moved
"""

import logging
from typing import Optional

import cv2
import numpy as np

from cube_config import BlurKernel, ProcessingModes, validate_kernel

logger = logging.getLogger("rubikscube.processing")


class FrameProcessor:
    """Blur + absdiff highlight with an optional horizontal mirror."""

    def __init__(self, mode: str = "none", kernel: tuple[int, int] = BlurKernel, mirror: bool = False) -> None:
        self.kernel = validate_kernel(kernel)
        self.mirror = mirror
        self._mode = "none"
        self._previous: Optional[np.ndarray] = None
        self.mode = mode

    @property
    def mode(self) -> str:
        return self._mode

    @mode.setter
    def mode(self, value: str) -> None:
        if value not in ProcessingModes:
            raise ValueError(f"unknown processing mode {value!r}, expected one of {ProcessingModes}")
        self._mode = value
        self.reset()

    def cycle_mode(self) -> str:
        """Advance none -> edges -> motion -> none and return the new mode."""
        index = ProcessingModes.index(self._mode)
        self.mode = ProcessingModes[(index + 1) % len(ProcessingModes)]
        logger.info("Processing mode: %s", self._mode)
        return self._mode

    def reset(self) -> None:
        self._previous = None

    def process(self, frame: Optional[np.ndarray]) -> Optional[np.ndarray]:
        if frame is None or frame.size == 0:
            return frame

        if self.mirror:
            frame = cv2.flip(frame, 1)

        if self._mode == "edges":
            blurred = cv2.GaussianBlur(frame, self.kernel, 0)
            return cv2.absdiff(frame, blurred)

        if self._mode == "motion":
            blurred = cv2.GaussianBlur(frame, self.kernel, 0)
            previous = self._previous
            self._previous = blurred
            # nothing to compare against yet, or the camera changed format
            if previous is None or previous.shape != blurred.shape:
                return np.zeros_like(frame)
            return cv2.absdiff(blurred, previous)

        return frame
