from __future__ import annotations

"""
rubikscube webcam viewer entry point.

Opens a GLFW window, grabs frames from the camera with OpenCV and draws
each one full-screen through the background shader pair.

Controls:
  ESC  close the window
  P    cycle processing mode (none -> edges -> motion)
  M    toggle horizontal mirroring
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

import glfw
import numpy as np
from OpenGL import GL as gl

from cube_config import ViewerConfig, parse_args
from frame_processing import FrameProcessor
from frame_source import FrameSource
from frame_texture import FrameTexture
from mesh_factory import Mesh, build_mesh
from utilities import ShaderUtils, SystemUtils

logger = logging.getLogger("rubikscube.engine")


@dataclass
class Engine:
    """GLFW window plus the GL objects needed to show one camera frame."""

    config: ViewerConfig = field(default_factory=ViewerConfig)

    window: Optional[object] = None
    mesh: Optional[Mesh] = None
    texture: Optional[FrameTexture] = None
    shader: Optional[int] = None
    processor: FrameProcessor = field(init=False)

    # Seconds between FPS log lines
    fps_interval: float = 5.0

    # True while consecutive camera reads keep failing
    read_failing: bool = False

    def __post_init__(self) -> None:
        self.processor = FrameProcessor(
            mode=self.config.processing,
            kernel=self.config.blur_kernel,
            mirror=self.config.mirror,
        )

    def init_glfw(self) -> None:
        """Initialize GLFW, create the window and make its context current."""
        if not glfw.init():
            raise RuntimeError("GLFW initialization failed")

        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        #this is for forward compatibility especially for mac
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)

        self.window = glfw.create_window(
            self.config.width, self.config.height, self.config.title, None, None
        )
        if not self.window:
            self.window = None
            glfw.terminate()
            raise RuntimeError("GLFW window creation failed")

        glfw.make_context_current(self.window)
        if self.config.vsync:
            glfw.swap_interval(1)

        glfw.set_framebuffer_size_callback(self.window, self.on_framebuffer_size)
        glfw.set_key_callback(self.window, self.on_key)

        #framebuffer can be larger than the window on high-dpi displays
        width, height = glfw.get_framebuffer_size(self.window)
        gl.glViewport(0, 0, width, height)

        logger.info("Created window %dx%d px (framebuffer %dx%d)",
                    self.config.width, self.config.height, width, height)

    def init_gl(self) -> None:
        """Create the mesh, the frame texture and the shader program."""
        gl.glClearColor(0.0, 0.0, 0.0, 1.0)

        #PyOpenGL validates the program on link, which needs a bound vertex array
        self.mesh = build_mesh(self.config.mesh)

        self.texture = FrameTexture()
        self.texture.create()

        self.shader = ShaderUtils.create_shader_program(
            self.config.vertex_shader, self.config.fragment_shader
        )
        ShaderUtils.bind_sampler(self.shader, "textureSampler", 0)
        gl.glBindVertexArray(0)

    def on_framebuffer_size(self, _window, width: int, height: int) -> None:
        """Keep the viewport matching the framebuffer after a resize."""
        gl.glViewport(0, 0, width, height)

    def on_key(self, window, key: int, scancode: int, action: int, mods: int) -> None:  # GLFW signature
        if action != glfw.PRESS:
            return
        if key == glfw.KEY_ESCAPE:
            glfw.set_window_should_close(window, True)
        elif key == glfw.KEY_P:
            self.processor.cycle_mode()
        elif key == glfw.KEY_M:
            self.processor.mirror = not self.processor.mirror
            self.processor.reset()
            logger.info("Mirror %s", "on" if self.processor.mirror else "off")

    def update_texture(self, frame: np.ndarray) -> None:
        """Run the processing step and copy the result into the texture."""
        self.texture.upload(self.processor.process(frame))

    def poll_camera(self, source: FrameSource) -> bool:
        """Read one frame into the texture; on failure the previous frame stays on screen."""
        frame = source.read()
        if frame is None:
            if not self.read_failing:
                logger.warning("Camera %s returned no frame, keeping the last image", source.device)
                self.read_failing = True
            return False

        if self.read_failing:
            logger.info("Camera %s delivering frames again", source.device)
            self.read_failing = False
        self.update_texture(frame)
        return True

    def render_frame(self) -> None:
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)
        gl.glUseProgram(self.shader)
        self.texture.bind(0)
        self.mesh.draw()

    def run(self, source: FrameSource) -> None:
        """Main loop: input, camera, texture upload, draw, present."""
        assert self.window is not None
        logger.info("Starting main loop (processing: %s, mesh: %s)",
                    self.processor.mode, self.config.mesh)

        frame_count = 0
        start_time = time.time()
        while not glfw.window_should_close(self.window):
            glfw.poll_events()

            self.poll_camera(source)
            #nothing to show until the first frame arrives
            if self.texture.size is not None:
                self.render_frame()
            else:
                gl.glClear(gl.GL_COLOR_BUFFER_BIT)

            glfw.swap_buffers(self.window)

            frame_count += 1
            elapsed_time = time.time() - start_time
            if elapsed_time >= self.fps_interval:
                logger.debug("FPS: %.2f", frame_count / elapsed_time)
                frame_count = 0
                start_time = time.time()
        logger.info("Window closed")

    def shutdown(self) -> None:
        """Release GL objects and GLFW resources; safe after a partial start."""
        if self.window is not None:
            if self.mesh is not None:
                self.mesh.destroy()
                self.mesh = None
            if self.texture is not None:
                self.texture.destroy()
                self.texture = None
            if self.shader is not None:
                gl.glDeleteProgram(self.shader)
                self.shader = None
            glfw.destroy_window(self.window)
            self.window = None
        glfw.terminate()


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = parse_args(argv)
    SystemUtils.configure_logging(config.log_level)
    logger.info("Dependency versions: %s", SystemUtils.get_dependency_versions())

    engine = Engine(config)
    source = FrameSource(config.device, config.api)
    try:
        engine.init_glfw()
        source.open()
        engine.init_gl()
        engine.run(source)
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        source.release()
        engine.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
