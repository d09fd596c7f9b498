import logging
from typing import Dict, Union

import cv2
import glfw
import numpy as np
import OpenGL
import OpenGL.GL as gl
from OpenGL.GL.shaders import compileProgram, compileShader

"""
Utility functions for the webcam viewer.
Organized into logical sections for different functionality areas.
"""

logger = logging.getLogger("rubikscube.shaders")

# =============================================================================
# OPENGL UTILITIES
# =============================================================================

class ShaderUtils:
    """Utilities for OpenGL shader management."""

    @staticmethod
    def create_shader_program(vertex_filepath: str, fragment_filepath: str) -> int:
        """Create shader program from vertex and fragment shader files."""
        vertex_module = ShaderUtils.create_shader_module(vertex_filepath, gl.GL_VERTEX_SHADER)
        fragment_module = ShaderUtils.create_shader_module(fragment_filepath, gl.GL_FRAGMENT_SHADER)

        shader = compileProgram(vertex_module, fragment_module)
        gl.glDeleteShader(vertex_module)
        gl.glDeleteShader(fragment_module)

        logger.info("Linked shader program %s (%s, %s)", int(shader), vertex_filepath, fragment_filepath)
        return shader

    @staticmethod
    def create_shader_module(filepath: str, module_type: int) -> int:
        """Create individual shader module from file."""
        try:
            with open(filepath, "r") as f:
                source_code = f.readlines()
        except FileNotFoundError:
            raise RuntimeError(f"Shader file not found: {filepath}")

        module = compileShader(source_code, module_type)
        logger.debug("Compiled shader %s", filepath)
        return module

    @staticmethod
    def create_shader_program_from_source(vertex_source: str, fragment_source: str) -> int:
        """Create shader program from source strings."""
        vertex_shader = compileShader(vertex_source, gl.GL_VERTEX_SHADER)
        fragment_shader = compileShader(fragment_source, gl.GL_FRAGMENT_SHADER)

        program = compileProgram(vertex_shader, fragment_shader)
        gl.glDeleteShader(vertex_shader)
        gl.glDeleteShader(fragment_shader)

        return program

    @staticmethod
    def bind_sampler(program: int, name: str, unit: int = 0) -> None:
        """Point a sampler uniform at a texture unit."""
        #uniforms are set on the program currently in use
        gl.glUseProgram(program)
        location = gl.glGetUniformLocation(program, name)
        if location == -1:
            logger.warning("Sampler uniform %r not found in program %s", name, int(program))
        else:
            gl.glUniform1i(location, unit)
        gl.glUseProgram(0)

class BufferUtils:
    """Utilities for OpenGL buffer management."""

    @staticmethod
    def create_vertex_data_type():
        """Create numpy dtype for vertex data (position + texture coordinate)."""
        return np.dtype({
            "names": ["x", "y", "z", "u", "v"],
            "formats": [np.float32, np.float32, np.float32, np.float32, np.float32],
            "offsets": [0, 4, 8, 12, 16],
            "itemsize": 20
        })

# =============================================================================
# SYSTEM UTILITIES
# =============================================================================

class SystemUtils:
    """System and environment utilities."""

    @staticmethod
    def get_dependency_versions() -> Dict[str, str]:
        """Return versions of key runtime dependencies."""
        return {
            "numpy": np.__version__,
            "OpenGL": getattr(OpenGL, "__version__", "unknown"),
            "glfw": getattr(glfw, "__version__", "unknown"),
            "cv2": cv2.__version__,
        }

    @staticmethod
    def configure_logging(level: Union[int, str] = logging.INFO) -> None:
        """Configure root logger for the application."""
        logging.basicConfig(
            level=level,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
