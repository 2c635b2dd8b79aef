"""
Bounding boxes of grid cloner leaves.
"""

from typing import Optional
import logging

from ..core.geometry import GLMesh, Mesh, bbox
from ..core.raytracer import GridCloner
from ..core.config import GridStyleConfig
from .mesh_plot import MeshPlotter

logger = logging.getLogger(__name__)


def leaf_boxes_mesh(grid: GridCloner) -> Optional[Mesh]:
    """One closed box mesh per leaf node, merged (None if there are no leaves)."""
    leaf_nodes = [node for node in grid.nodes if node.leaf]
    if not leaf_nodes:
        return None
    return Mesh.merge([bbox(node.box.min, node.box.max) for node in leaf_nodes])


def render_grid(plotter: MeshPlotter, grid: GridCloner, style: GridStyleConfig = None):
    """
    Add the leaf boxes of a grid cloner to a scene as translucent black boxes.

    Args:
        plotter: Target scene
        grid: Grid cloner
        style: Box transparency

    Returns:
        The box collection, or None when the grid has no leaves
    """
    style = style or GridStyleConfig()

    mesh = leaf_boxes_mesh(grid)
    if mesh is None:
        logger.warning("Grid cloner has no leaf nodes, nothing to draw")
        return None

    logger.debug("Drawing %d leaf boxes", grid.num_leaves)
    return plotter.plot_gl_mesh(GLMesh.from_mesh(mesh), color=(0.0, 0.0, 0.0, style.alpha))
