"""Render triangle meshes, light sources and grid cloners with matplotlib."""

from .core.geometry import Mesh, GLMesh, AABB, add_property, colors
from .core.config import RenderConfig
from .core.io import SceneLoader
from .visualization import render, render_into, export_scene

__version__ = "0.1.0"

__all__ = [
    "Mesh",
    "GLMesh",
    "AABB",
    "add_property",
    "colors",
    "RenderConfig",
    "SceneLoader",
    "render",
    "render_into",
    "export_scene",
]
