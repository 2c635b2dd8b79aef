"""IO utilities: geometry reader and scene loader."""

from .geometry_io import GeometryReader
from .scene_loader import SceneLoader, LoadedScene

__all__ = [
    "GeometryReader",
    "SceneLoader",
    "LoadedScene",
]
