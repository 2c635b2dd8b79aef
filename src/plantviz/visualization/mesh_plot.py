"""
Matplotlib-based drawing of renderer-native meshes in 3D axes.
"""

from typing import Any, Optional, Tuple, Union
import logging
import numpy as np
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D
from mpl_toolkits.mplot3d.art3d import Poly3DCollection, Line3DCollection
from numpy.typing import NDArray

from ..core.geometry import GLMesh
from ..core.config import CameraConfig

logger = logging.getLogger(__name__)


def face_colors(color: Any, num_faces: int) -> NDArray[np.float64]:
    """
    Resolve a color specification to one RGBA color per face.

    Accepts a single color, one color per face, or one color per vertex
    (three per face, averaged over each triangle).

    Args:
        color: Color name, RGB(A) tuple or array of colors
        num_faces: Number of triangles

    Returns:
        (num_faces, 4) RGBA array
    """
    rgba = mcolors.to_rgba_array(color)
    if len(rgba) == 1:
        return np.repeat(rgba, num_faces, axis=0)
    if len(rgba) == num_faces:
        return rgba
    if len(rgba) == 3 * num_faces:
        return rgba.reshape(num_faces, 3, 4).mean(axis=1)
    raise ValueError(
        f"Got {len(rgba)} colors for {num_faces} faces "
        f"(expected 1, {num_faces} or {3 * num_faces})"
    )


class MeshPlotter:
    """
    Draws meshes and glyphs into one 3D axes.
    """

    def __init__(self, ax: Axes3D):
        """
        Args:
            ax: 3D axes to draw into
        """
        if getattr(ax, "name", None) != "3d":
            raise TypeError(f"Expected 3D axes, got {type(ax).__name__}")
        self.ax = ax
        self.fig = ax.figure
        self.equal_aspect = True

    @classmethod
    def new_figure(cls, camera: Optional[CameraConfig] = None, axes: bool = True) -> "MeshPlotter":
        """
        Create a figure with a single 3D axes.

        Args:
            camera: Canvas size and view angles
            axes: Show axis lines, ticks and panes

        Returns:
            MeshPlotter bound to the new axes
        """
        camera = camera or CameraConfig()
        fig = plt.figure(figsize=camera.figsize, dpi=camera.dpi)
        ax = fig.add_subplot(projection="3d")
        ax.view_init(elev=camera.elev, azim=camera.azim)
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_zlabel('Z')
        if not axes:
            ax.set_axis_off()

        plotter = cls(ax)
        plotter.equal_aspect = camera.equal_aspect
        logger.debug("Created %dx%d px figure", *camera.size)
        return plotter

    @classmethod
    def wrap(cls, scene: Union[Figure, Axes3D, None] = None) -> "MeshPlotter":
        """
        Bind to an existing scene.

        Args:
            scene: Figure or 3D axes; None uses the active figure

        Returns:
            MeshPlotter bound to the first 3D axes of the scene (created if missing)
        """
        if scene is None:
            scene = plt.gcf()

        if isinstance(scene, Figure):
            axes3d = [ax for ax in scene.axes if getattr(ax, "name", None) == "3d"]
            ax = axes3d[0] if axes3d else scene.add_subplot(projection="3d")
            return cls(ax)

        return cls(scene)

    def plot_gl_mesh(self,
                     mesh: GLMesh,
                     color: Any = "green",
                     normals: bool = False,
                     wireframe: bool = False,
                     normal_length: Optional[float] = None,
                     **kwargs) -> Poly3DCollection:
        """
        Draw a renderer-native mesh.

        Args:
            mesh: Mesh to draw
            color: Single color, per-face colors or per-vertex colors
            normals: Draw face normal arrows
            wireframe: Draw triangle edges in black
            normal_length: Arrow length (None = 10% of the mesh diagonal)
            **kwargs: Passed to Poly3DCollection (e.g. shade=True, alpha=0.5)

        Returns:
            The triangle collection
        """
        had_data = self.ax.has_data()
        kwargs.setdefault("edgecolors", "none")

        collection = Poly3DCollection(
            mesh.triangles,
            facecolors=face_colors(color, mesh.num_faces),
            **kwargs
        )
        self.ax.add_collection3d(collection)
        self._include(mesh.positions, had_data)

        if normals:
            self.plot_normals(mesh, normal_length)
        if wireframe:
            self.plot_wireframe(mesh)

        logger.debug("Drew %r (normals=%s, wireframe=%s)", mesh, normals, wireframe)
        return collection

    def plot_normals(self, mesh: GLMesh, length: Optional[float] = None):
        """Draw one red arrow per face, from its center along its normal."""
        if length is None:
            length = 0.1 * _diagonal(mesh.positions)
        centers = mesh.face_centers
        normals = mesh.face_normals
        return self.ax.quiver(
            centers[:, 0], centers[:, 1], centers[:, 2],
            normals[:, 0], normals[:, 1], normals[:, 2],
            length=length, color='red', alpha=0.7
        )

    def plot_wireframe(self, mesh: GLMesh) -> Line3DCollection:
        """Draw the edges of every triangle in black."""
        tri = mesh.triangles
        edges = np.stack([
            tri[:, [0, 1]],
            tri[:, [1, 2]],
            tri[:, [2, 0]],
        ], axis=1).reshape(-1, 2, 3)
        lines = Line3DCollection(edges, colors='black', linewidths=0.5)
        self.ax.add_collection3d(lines)
        return lines

    def plot_points(self, points: NDArray[np.float64], **kwargs):
        """Scatter (N, 3) points in a single call."""
        return self.ax.scatter(points[:, 0], points[:, 1], points[:, 2], **kwargs)

    def plot_segments(self, segments: NDArray[np.float64], **kwargs) -> Line3DCollection:
        """Draw (N, 2, 3) line segments as a single collection."""
        had_data = self.ax.has_data()
        lines = Line3DCollection(segments, **kwargs)
        self.ax.add_collection3d(lines)
        self._include(segments.reshape(-1, 3), had_data)
        return lines

    def _include(self, points: NDArray[np.float64], had_data: bool):
        """Grow the axis limits to contain the points."""
        if len(points) == 0:
            return
        self.ax.auto_scale_xyz(points[:, 0], points[:, 1], points[:, 2], had_data=had_data)
        if self.equal_aspect:
            self._equalize()

    def _equalize(self):
        """Scale the box aspect to the data extents."""
        limits = np.array([self.ax.get_xlim3d(), self.ax.get_ylim3d(), self.ax.get_zlim3d()])
        extents = limits[:, 1] - limits[:, 0]
        # Flat scenes keep a thin but visible box
        extents = np.maximum(extents, 0.05 * max(extents.max(), 1e-10))
        self.ax.set_box_aspect(tuple(extents))

    def show(self):
        """Display the figure."""
        plt.show()

    def close(self):
        """Close the figure."""
        plt.close(self.fig)

    def __repr__(self) -> str:
        return f"MeshPlotter(collections={len(self.ax.collections)})"


def _diagonal(points: NDArray[np.float64]) -> float:
    """Length of the bounding box diagonal (1.0 for degenerate input)."""
    if len(points) == 0:
        return 1.0
    diag = float(np.linalg.norm(points.max(axis=0) - points.min(axis=0)))
    return diag if diag > 1e-14 else 1.0


def figure_size(fig: Figure) -> Tuple[int, int]:
    """Canvas size of a figure in pixels."""
    width, height = fig.get_size_inches() * fig.dpi
    return int(round(width)), int(round(height))
