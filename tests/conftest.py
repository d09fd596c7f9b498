"""
Pytest Configuration and Fixtures
==================================
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import cv2
import numpy as np
import pytest


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def bgr_frame() -> np.ndarray:
    """Noisy 64x48 BGR frame, like a camera grab."""
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)


@pytest.fixture
def step_frame() -> np.ndarray:
    """Black left half, white right half: a single vertical edge at column 32."""
    frame = np.zeros((48, 64, 3), dtype=np.uint8)
    frame[:, 32:] = 255
    return frame


@pytest.fixture
def mock_gl() -> MagicMock:
    """Stand-in for the OpenGL.GL module; patch it over a module's `gl`."""
    gl = MagicMock(name="OpenGL.GL")
    gl.glGenTextures.return_value = 7
    gl.glGenBuffers.side_effect = [11, 12, 13, 14]
    gl.glGenVertexArrays.return_value = 21
    gl.GL_TEXTURE0 = 0x84C0
    return gl


@pytest.fixture
def fake_camera(monkeypatch):
    """Replace cv2.VideoCapture with a scripted fake.

    Returns an installer: call it with the frames `read` should hand out
    (None entries simulate a failed grab). The returned list collects
    every capture object constructed.
    """
    created = []

    def install(frames=(), opened=True, size=(640, 480)):
        class FakeCapture:
            def __init__(self, device, api=cv2.CAP_ANY):
                self.device = device
                self.api = api
                self.frames = list(frames)
                self.props = {}
                self.released = False
                created.append(self)

            def isOpened(self):
                return opened

            def read(self):
                if not self.frames:
                    return False, None
                frame = self.frames.pop(0)
                return frame is not None, frame

            def set(self, prop, value):
                self.props[prop] = value
                return True

            def get(self, prop):
                return {
                    cv2.CAP_PROP_FRAME_WIDTH: float(size[0]),
                    cv2.CAP_PROP_FRAME_HEIGHT: float(size[1]),
                }.get(prop, 0.0)

            def release(self):
                self.released = True

        monkeypatch.setattr(cv2, "VideoCapture", FakeCapture)
        return created

    return install
