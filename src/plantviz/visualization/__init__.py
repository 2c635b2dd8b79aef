"""3D visualization of meshes, light sources and grid cloners with matplotlib."""

from .render import render, render_into
from .export import export_scene
from .mesh_plot import MeshPlotter, face_colors, figure_size
from .sources import compute_dir_p, render_sources
from .grid import leaf_boxes_mesh, render_grid

__all__ = [
    'render',
    'render_into',
    'export_scene',
    'MeshPlotter',
    'face_colors',
    'figure_size',
    'compute_dir_p',
    'render_sources',
    'leaf_boxes_mesh',
    'render_grid',
]
