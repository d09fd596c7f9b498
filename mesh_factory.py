from __future__ import annotations

import ctypes
from dataclasses import dataclass
from typing import Optional

import numpy as np
from OpenGL import GL as gl

from utilities import BufferUtils

# Use centralized vertex data type
data_type_vertex = BufferUtils.create_vertex_data_type()

#texture coordinates put v = 0 at the top of the screen:
#OpenCV keeps row 0 at the top of the image and glTexImage2D
#stores the first row it receives at t = 0


def quad_vertices() -> tuple[np.ndarray, np.ndarray]:
    """Four corners of clip space and the indices joining them into two triangles."""
    vertex_data = np.zeros(4, dtype=data_type_vertex)
    vertex_data[0] = (-1.0, -1.0, 0.0, 0.0, 1.0)
    vertex_data[1] = ( 1.0, -1.0, 0.0, 1.0, 1.0)
    vertex_data[2] = ( 1.0,  1.0, 0.0, 1.0, 0.0)
    vertex_data[3] = (-1.0,  1.0, 0.0, 0.0, 0.0)

    index_data = np.array((0, 1, 2, 2, 3, 0), dtype=np.ubyte)
    return vertex_data, index_data


def triangle_vertices() -> np.ndarray:
    """One triangle twice the size of the viewport; the clipped part is the full screen."""
    vertex_data = np.zeros(3, dtype=data_type_vertex)
    vertex_data[0] = (-1.0, -1.0, 0.0, 0.0,  1.0)
    vertex_data[1] = ( 3.0, -1.0, 0.0, 2.0,  1.0)
    vertex_data[2] = (-1.0,  3.0, 0.0, 0.0, -1.0)
    return vertex_data


@dataclass
class Mesh:
    """Vertex array plus the buffers it references."""

    vao: int
    vbo: int
    ebo: Optional[int]
    count: int

    def draw(self) -> None:
        gl.glBindVertexArray(self.vao)
        if self.ebo is not None:
            gl.glDrawElements(gl.GL_TRIANGLES, self.count, gl.GL_UNSIGNED_BYTE, ctypes.c_void_p(0))
        else:
            gl.glDrawArrays(gl.GL_TRIANGLES, 0, self.count)
        gl.glBindVertexArray(0)

    def destroy(self) -> None:
        buffers = [self.vbo] if self.ebo is None else [self.vbo, self.ebo]
        gl.glDeleteBuffers(len(buffers), buffers)
        gl.glDeleteVertexArrays(1, [self.vao])


def _upload_vertices(vertex_data: np.ndarray) -> tuple[int, int]:
    vao = gl.glGenVertexArrays(1)
    gl.glBindVertexArray(vao)

    vbo = gl.glGenBuffers(1)
    gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo)
    #upload the data to the GPU
    gl.glBufferData(gl.GL_ARRAY_BUFFER, vertex_data.nbytes, vertex_data, gl.GL_STATIC_DRAW)

    stride = data_type_vertex.itemsize
    #position: 3 floats at the start of each vertex
    attribute_index = 0
    size = 3
    offset = 0
    gl.glVertexAttribPointer(attribute_index, size, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(offset))
    gl.glEnableVertexAttribArray(attribute_index)
    offset += 12

    #texture coordinate: 2 floats after the position
    attribute_index = 1
    size = 2
    gl.glVertexAttribPointer(attribute_index, size, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(offset))
    gl.glEnableVertexAttribArray(attribute_index)

    return vao, vbo


def build_quad_mesh() -> Mesh:
    vertex_data, index_data = quad_vertices()
    vao, vbo = _upload_vertices(vertex_data)

    ebo = gl.glGenBuffers(1)
    gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo)
    #the element buffer binding is stored in the vertex array, so upload while it is bound
    gl.glBufferData(gl.GL_ELEMENT_ARRAY_BUFFER, index_data.nbytes, index_data, gl.GL_STATIC_DRAW)

    return Mesh(vao=vao, vbo=vbo, ebo=ebo, count=len(index_data))


def build_triangle_mesh() -> Mesh:
    vertex_data = triangle_vertices()
    vao, vbo = _upload_vertices(vertex_data)
    return Mesh(vao=vao, vbo=vbo, ebo=None, count=len(vertex_data))


def build_mesh(kind: str) -> Mesh:
    if kind == "quad":
        return build_quad_mesh()
    if kind == "triangle":
        return build_triangle_mesh()
    raise ValueError(f"unknown mesh kind {kind!r}")
