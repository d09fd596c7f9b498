from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np
from OpenGL import GL as gl

logger = logging.getLogger("rubikscube.texture")


def pixel_formats(channels: int) -> tuple[int, int]:
    """(internal format, upload format) for a BGR or BGRA frame."""
    if channels == 3:
        return gl.GL_RGB8, gl.GL_BGR
    if channels == 4:
        return gl.GL_RGBA8, gl.GL_BGRA
    raise ValueError(f"unsupported channel count {channels}")


class FrameTexture:
    """2D texture that receives one camera frame per loop iteration."""

    def __init__(self) -> None:
        self.texture: Optional[int] = None
        # (width, height, channels) of the current allocation
        self._allocation: Optional[tuple[int, int, int]] = None

    @property
    def size(self) -> Optional[tuple[int, int]]:
        if self._allocation is None:
            return None
        return self._allocation[0], self._allocation[1]

    def create(self) -> None:
        self.texture = gl.glGenTextures(1)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)

    def upload(self, frame: np.ndarray) -> None:
        """Copy a uint8 frame into the texture, reallocating only when its format changes."""
        if self.texture is None:
            raise RuntimeError("Texture has not been created")
        if frame is None or frame.size == 0 or frame.dtype != np.uint8:
            raise ValueError("frame must be a non-empty uint8 array")
        if frame.ndim == 2:
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
        if frame.ndim != 3:
            raise ValueError(f"unsupported frame shape {frame.shape}")

        height, width, channels = frame.shape
        internal_format, upload_format = pixel_formats(channels)
        frame = np.ascontiguousarray(frame)

        gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture)
        #camera rows are tightly packed, widths are not always multiples of 4
        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)

        allocation = (width, height, channels)
        if allocation != self._allocation:
            gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, internal_format, width, height, 0,
                            upload_format, gl.GL_UNSIGNED_BYTE, frame)
            self._allocation = allocation
            logger.info("Allocated %dx%d texture (%d channels)", width, height, channels)
        else:
            gl.glTexSubImage2D(gl.GL_TEXTURE_2D, 0, 0, 0, width, height,
                               upload_format, gl.GL_UNSIGNED_BYTE, frame)

    def bind(self, unit: int = 0) -> None:
        gl.glActiveTexture(gl.GL_TEXTURE0 + unit)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture)

    def destroy(self) -> None:
        if self.texture is not None:
            gl.glDeleteTextures([self.texture])
            self.texture = None
            self._allocation = None
