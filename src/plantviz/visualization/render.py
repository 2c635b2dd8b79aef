"""
Entry points: render a new scene or add to an existing one.

Supported objects: Mesh (drawn with its per-face colors), GLMesh, Source or
list of Sources, and GridCloner.

Usage:
    fig = render(mesh, normals=True)
    render_into(sources)          # adds to the active figure
    render_into(grid, scene=fig)
    export_scene(fig, 'scene.png')
"""

from typing import Any, Dict, Optional, Union
import logging
import numpy as np
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D

from ..core.geometry import GLMesh, Mesh, colors
from ..core.raytracer import GridCloner, Source
from ..core.config import (
    CameraConfig,
    GridStyleConfig,
    MeshStyleConfig,
    RenderConfig,
    SourceStyleConfig,
)
from .mesh_plot import MeshPlotter
from .sources import render_sources
from .grid import render_grid

logger = logging.getLogger(__name__)

_CAMERA_KEYS = set(CameraConfig.model_fields)
_MESH_KEYS = set(MeshStyleConfig.model_fields)
_SOURCE_KEYS = set(SourceStyleConfig.model_fields)
_GRID_KEYS = set(GridStyleConfig.model_fields)


def _override(model, options: Dict[str, Any], keys):
    """Validated copy of a config section with the matching options applied."""
    update = {key: options.pop(key) for key in list(options) if key in keys}
    if not update:
        return model
    return type(model)(**{**model.model_dump(), **update})


def _is_source_batch(obj) -> bool:
    # Element types are checked by render_sources
    return isinstance(obj, (list, tuple))


def render(obj: Union[Mesh, GLMesh, Source, list, GridCloner],
           config: Optional[RenderConfig] = None,
           **kwargs) -> Figure:
    """
    Render an object in a new scene.

    Args:
        obj: Mesh, GLMesh, Source(s) or GridCloner
        config: Render settings (defaults: green, 1920x1080, axes shown)
        **kwargs: Overrides for config fields (color, normals, wireframe, axes,
            size, dpi, elev, azim, ...); anything else is passed to
            Poly3DCollection, e.g. shade=True

    Returns:
        The new figure, which becomes the active scene
    """
    config = config or RenderConfig()
    camera = _override(config.camera, kwargs, _CAMERA_KEYS)
    axes = kwargs.pop("axes", config.mesh.axes)

    plotter = MeshPlotter.new_figure(camera, axes=axes)
    _draw(plotter, obj, config, kwargs)
    return plotter.fig


def render_into(obj: Union[Mesh, GLMesh, Source, list, GridCloner],
                scene: Union[Figure, Axes3D, None] = None,
                config: Optional[RenderConfig] = None,
                **kwargs) -> Axes3D:
    """
    Add an object to an existing scene.

    Args:
        obj: Mesh, GLMesh, Source(s) or GridCloner
        scene: Figure or 3D axes; None draws into the active figure
        config: Render settings
        **kwargs: Overrides for config fields; anything else is passed to
            Poly3DCollection when drawing meshes

    Returns:
        The axes drawn into
    """
    config = config or RenderConfig()
    kwargs.pop("axes", None)

    plotter = MeshPlotter.wrap(scene)
    _draw(plotter, obj, config, kwargs)
    return plotter.ax


def _draw(plotter: MeshPlotter, obj, config: RenderConfig, options: Dict[str, Any]):
    """Dispatch on the object type."""
    if isinstance(obj, Mesh):
        style = _override(config.mesh, options, _MESH_KEYS)
        # Per-face colors win over style.color; one copy per triangle vertex
        vertex_colors = np.repeat(colors(obj), 3, axis=0)
        plotter.plot_gl_mesh(
            GLMesh.from_mesh(obj),
            color=vertex_colors,
            normals=style.normals,
            wireframe=style.wireframe,
            normal_length=style.normal_length,
            **options
        )
    elif isinstance(obj, GLMesh):
        style = _override(config.mesh, options, _MESH_KEYS)
        plotter.plot_gl_mesh(
            obj,
            color=style.color,
            normals=style.normals,
            wireframe=style.wireframe,
            normal_length=style.normal_length,
            **options
        )
    elif isinstance(obj, Source) or _is_source_batch(obj):
        style = _override(config.sources, options, _SOURCE_KEYS)
        _reject_unknown(options, "light sources")
        render_sources(plotter, obj, style)
    elif isinstance(obj, GridCloner):
        style = _override(config.grid, options, _GRID_KEYS)
        _reject_unknown(options, "grid cloners")
        render_grid(plotter, obj, style)
    else:
        raise TypeError(f"Cannot render object of type {type(obj).__name__}")


def _reject_unknown(options: Dict[str, Any], what: str):
    if options:
        raise TypeError(f"Unknown options for {what}: {sorted(options)}")
