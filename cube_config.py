from __future__ import annotations

"""
Configuration for the rubikscube webcam viewer.

Module-level defaults plus the ViewerConfig dataclass that the engine
consumes. parse_args builds a ViewerConfig from the command line.
"""

import argparse
import os
import sysconfig
from dataclasses import dataclass, field
from typing import Optional, Sequence

import cv2

ScreenWidth = 800
ScreenHeight = 600
WindowTitle = "rubikscube"


def find_shader_directory(module_dir: Optional[str] = None, data_dir: Optional[str] = None) -> str:
    """Locate glsl/ next to this module (checkout, editable install) or under the install prefix."""
    if module_dir is None:
        module_dir = os.path.dirname(os.path.abspath(__file__))
    if data_dir is None:
        data_dir = sysconfig.get_path("data")
    candidates = [
        os.path.join(module_dir, "glsl"),
        #pyproject data-files put the shaders in <prefix>/share/rubikscube/glsl
        os.path.join(data_dir, "share", "rubikscube", "glsl"),
    ]
    for candidate in candidates:
        if os.path.isdir(candidate):
            return candidate
    return candidates[0]


ShaderDirectory = find_shader_directory()

#0 opens the default camera, CAP_ANY lets OpenCV pick the backend
DefaultDevice = 0
DefaultApi = cv2.CAP_ANY

ProcessingModes = ("none", "edges", "motion")
MeshKinds = ("quad", "triangle")
BlurKernel = (5, 5)

#Definitions:
#Frame
#one BGR image grabbed from the camera, rows stored top to bottom

#Texture
#GPU storage the frame is copied into every iteration of the loop

#Full-screen mesh
#either a quad (two indexed triangles) or one oversized triangle,
#both cover the whole viewport so the texture fills the window


@dataclass
class ViewerConfig:
    """Settings for one run of the viewer."""

    width: int = ScreenWidth
    height: int = ScreenHeight
    title: str = WindowTitle

    # Camera
    device: int = DefaultDevice
    api: int = DefaultApi

    # Per-frame processing
    processing: str = "none"
    blur_kernel: tuple[int, int] = BlurKernel
    mirror: bool = False

    # Rendering
    mesh: str = "quad"
    vsync: bool = True
    vertex_shader: str = field(default_factory=lambda: os.path.join(ShaderDirectory, "background.vert"))
    fragment_shader: str = field(default_factory=lambda: os.path.join(ShaderDirectory, "background.frag"))

    log_level: str = "INFO"

    def validate(self) -> "ViewerConfig":
        """Raise ValueError for settings the engine cannot use."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"window size must be positive, got {self.width}x{self.height}")
        if self.processing not in ProcessingModes:
            raise ValueError(f"unknown processing mode {self.processing!r}, expected one of {ProcessingModes}")
        if self.mesh not in MeshKinds:
            raise ValueError(f"unknown mesh {self.mesh!r}, expected one of {MeshKinds}")
        validate_kernel(self.blur_kernel)
        return self


def validate_kernel(kernel: Sequence[int]) -> tuple[int, int]:
    """GaussianBlur needs two positive odd sides."""
    kx, ky = kernel
    for side in (kx, ky):
        if int(side) != side or side <= 0 or side % 2 == 0:
            raise ValueError(f"blur kernel sides must be positive odd integers, got {tuple(kernel)}")
    return (int(kx), int(ky))


def _odd_int(text: str) -> int:
    value = int(text)
    if value <= 0 or value % 2 == 0:
        raise argparse.ArgumentTypeError(f"{text} is not a positive odd integer")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{text} is not a positive integer")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rubikscube",
        description="Show the webcam feed full-screen through an OpenGL shader.",
    )
    parser.add_argument("--device", type=int, default=DefaultDevice,
                        help="camera index passed to cv2.VideoCapture (default: %(default)s)")
    parser.add_argument("--width", type=_positive_int, default=ScreenWidth, help="window width in pixels")
    parser.add_argument("--height", type=_positive_int, default=ScreenHeight, help="window height in pixels")
    parser.add_argument("--process", choices=ProcessingModes, default="none",
                        help="per-frame processing: blur+absdiff edges or frame-to-frame motion")
    parser.add_argument("--blur", type=_odd_int, default=BlurKernel[0],
                        help="Gaussian kernel side, positive and odd (default: %(default)s)")
    parser.add_argument("--mesh", choices=MeshKinds, default="quad", help="full-screen geometry")
    parser.add_argument("--mirror", action="store_true", help="flip the camera image horizontally")
    parser.add_argument("--no-vsync", dest="vsync", action="store_false", help="disable buffer swap sync")
    parser.add_argument("--shader-dir", default=ShaderDirectory,
                        help="directory holding background.vert and background.frag")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> ViewerConfig:
    args = build_parser().parse_args(argv)
    config = ViewerConfig(
        width=args.width,
        height=args.height,
        device=args.device,
        processing=args.process,
        blur_kernel=(args.blur, args.blur),
        mirror=args.mirror,
        mesh=args.mesh,
        vsync=args.vsync,
        vertex_shader=os.path.join(args.shader_dir, "background.vert"),
        fragment_shader=os.path.join(args.shader_dir, "background.frag"),
        log_level=args.log_level,
    )
    return config.validate()
