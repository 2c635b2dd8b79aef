"""Configuration schemas for rendering and scene files."""

from .schemas import (
    CameraConfig,
    MeshStyleConfig,
    SourceStyleConfig,
    GridStyleConfig,
    RenderConfig,
    MeshConfig,
    SourceConfig,
    GridConfig,
    OutputConfig,
    SceneConfig,
)

__all__ = [
    "CameraConfig",
    "MeshStyleConfig",
    "SourceStyleConfig",
    "GridStyleConfig",
    "RenderConfig",
    "MeshConfig",
    "SourceConfig",
    "GridConfig",
    "OutputConfig",
    "SceneConfig",
]
