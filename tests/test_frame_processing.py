"""
Tests for FrameProcessor
========================
"""

import numpy as np
import pytest

from frame_processing import FrameProcessor


class TestPassThrough:
    """Tests for the unprocessed path and the early return."""

    def test_none_mode_returns_frame(self, bgr_frame):
        processor = FrameProcessor()
        assert processor.process(bgr_frame) is bgr_frame

    def test_missing_frame(self):
        processor = FrameProcessor(mode="edges")
        assert processor.process(None) is None

    def test_empty_frame(self):
        processor = FrameProcessor(mode="edges")
        empty = np.zeros((0, 0, 3), dtype=np.uint8)
        assert processor.process(empty) is empty

    def test_mirror(self, bgr_frame):
        processor = FrameProcessor(mirror=True)
        result = processor.process(bgr_frame)
        np.testing.assert_array_equal(result, bgr_frame[:, ::-1])


class TestEdges:
    """Tests for |frame - blur(frame)|."""

    def test_uniform_frame_has_no_edges(self):
        processor = FrameProcessor(mode="edges")
        frame = np.full((48, 64, 3), 128, dtype=np.uint8)

        result = processor.process(frame)

        assert result.shape == frame.shape
        assert result.dtype == np.uint8
        assert not result.any()

    def test_step_edge_is_highlighted(self, step_frame):
        processor = FrameProcessor(mode="edges")

        result = processor.process(step_frame)

        # bright around the step, dark where the 5x5 kernel only sees one side
        assert result[:, 30:34].max() > 0
        assert not result[:, :28].any()
        assert not result[:, 36:].any()

    def test_kernel_size_widens_band(self, step_frame):
        narrow = FrameProcessor(mode="edges", kernel=(3, 3)).process(step_frame)
        wide = FrameProcessor(mode="edges", kernel=(9, 9)).process(step_frame)

        assert np.count_nonzero(wide) > np.count_nonzero(narrow)


class TestMotion:
    """Tests for the frame-to-frame difference."""

    def test_first_frame_is_black(self, bgr_frame):
        processor = FrameProcessor(mode="motion")

        result = processor.process(bgr_frame)

        assert result.shape == bgr_frame.shape
        assert not result.any()

    def test_static_scene_is_black(self, bgr_frame):
        processor = FrameProcessor(mode="motion")
        processor.process(bgr_frame)

        assert not processor.process(bgr_frame.copy()).any()

    def test_change_is_highlighted(self, step_frame):
        processor = FrameProcessor(mode="motion")
        processor.process(np.zeros_like(step_frame))

        result = processor.process(step_frame)

        assert result[:, 40:].min() == 255
        assert not result[:, :28].any()

    def test_size_change_restarts(self, bgr_frame):
        processor = FrameProcessor(mode="motion")
        processor.process(bgr_frame)

        smaller = bgr_frame[:24, :32].copy()
        result = processor.process(smaller)

        assert result.shape == smaller.shape
        assert not result.any()

    def test_mode_change_clears_history(self, step_frame):
        processor = FrameProcessor(mode="motion")
        processor.process(np.zeros_like(step_frame))

        processor.mode = "motion"

        assert not processor.process(step_frame).any()


class TestModes:
    """Tests for mode selection."""

    def test_cycle(self):
        processor = FrameProcessor()

        assert processor.cycle_mode() == "edges"
        assert processor.cycle_mode() == "motion"
        assert processor.cycle_mode() == "none"

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            FrameProcessor(mode="canny")

        processor = FrameProcessor()
        with pytest.raises(ValueError):
            processor.mode = "threshold"
        assert processor.mode == "none"

    def test_even_kernel(self):
        with pytest.raises(ValueError):
            FrameProcessor(kernel=(4, 4))
