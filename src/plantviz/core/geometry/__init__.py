"""Triangle meshes, bounding boxes and primitive builders."""

from .mesh import Mesh, GLMesh, add_property, colors
from .primitives import AABB, triangle, rectangle, bbox

__all__ = [
    "Mesh",
    "GLMesh",
    "add_property",
    "colors",
    "AABB",
    "triangle",
    "rectangle",
    "bbox",
]
