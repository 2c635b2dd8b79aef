"""
Triangle mesh data structures.

Mesh is the indexed, domain-level representation carrying per-face colors and
properties. GLMesh is the flattened, vertex-duplicated form handed to the
plotting layer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import numpy as np
from numpy.typing import NDArray
import matplotlib.colors as mcolors


@dataclass
class Mesh:
    """
    Triangle mesh with per-face data.

    Attributes:
        vertices: Vertex coordinates (N, 3)
        faces: Triangle connectivity (F, 3)
        colors: Per-face RGBA colors (F, 4), or None if never set
        properties: Other per-face properties, e.g. {'absorbed_power': array}
        normals: Face unit normals (F, 3) - computed
        centers: Face centroids (F, 3) - computed
        areas: Face areas (F,) - computed
    """

    vertices: NDArray[np.float64]                 # (N, 3)
    faces: NDArray[np.int32]                      # (F, 3)
    colors: Optional[NDArray[np.float64]] = None  # (F, 4)
    properties: Dict[str, NDArray] = field(default_factory=dict)

    # Computed geometry (set by compute_geometry())
    normals: Optional[NDArray[np.float64]] = field(default=None, repr=False)
    centers: Optional[NDArray[np.float64]] = field(default=None, repr=False)
    areas: Optional[NDArray[np.float64]] = field(default=None, repr=False)

    def __post_init__(self):
        self.vertices = np.asarray(self.vertices, dtype=np.float64)
        self.faces = np.asarray(self.faces, dtype=np.int32)
        self._validate()
        if self.colors is not None:
            self.colors = _per_face(_to_rgba(self.colors), self.num_faces, "colors")
        self.compute_geometry()

    def _validate(self):
        """Check data consistency."""
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            raise ValueError(f"vertices must have shape (N, 3), got {self.vertices.shape}")

        if self.faces.ndim != 2 or self.faces.shape[1] != 3:
            raise ValueError(f"faces must have shape (F, 3), got {self.faces.shape}")

        bad = self.faces[(self.faces < 0) | (self.faces >= self.num_vertices)]
        if bad.size:
            raise ValueError(
                f"Face references vertex index {bad[0]} but only "
                f"{self.num_vertices} vertices exist"
            )

        for name, values in self.properties.items():
            if len(values) != self.num_faces:
                raise ValueError(
                    f"Property '{name}' has {len(values)} values for {self.num_faces} faces"
                )

    @property
    def num_vertices(self) -> int:
        return self.vertices.shape[0]

    @property
    def num_faces(self) -> int:
        return self.faces.shape[0]

    @property
    def triangles(self) -> NDArray[np.float64]:
        """Corner coordinates of every face (F, 3, 3)."""
        return self.vertices[self.faces]

    def compute_geometry(self):
        """Compute face normals, centers and areas."""
        tri = self.triangles
        cross = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        mag = np.linalg.norm(cross, axis=1)

        self.centers = tri.mean(axis=1)
        self.areas = 0.5 * mag
        # Degenerate faces keep a zero normal
        self.normals = np.divide(cross, mag[:, None], out=np.zeros_like(cross),
                                 where=mag[:, None] > 1e-14)

    @classmethod
    def merge(cls, meshes: List[Mesh]) -> Mesh:
        """
        Concatenate several meshes into one.

        Colors are kept only if every mesh has them; a property is kept only if
        every mesh carries it.

        Args:
            meshes: Meshes to concatenate

        Returns:
            Combined mesh
        """
        if len(meshes) == 0:
            raise ValueError("Cannot merge an empty list of meshes")

        all_vertices = []
        all_faces = []
        offset = 0
        for mesh in meshes:
            all_vertices.append(mesh.vertices)
            all_faces.append(mesh.faces + offset)
            offset += mesh.num_vertices

        colors = None
        if all(mesh.colors is not None for mesh in meshes):
            colors = np.vstack([mesh.colors for mesh in meshes])

        shared = set(meshes[0].properties)
        for mesh in meshes[1:]:
            shared &= set(mesh.properties)
        properties = {
            name: np.concatenate([np.asarray(mesh.properties[name]) for mesh in meshes])
            for name in sorted(shared)
        }

        return cls(
            vertices=np.vstack(all_vertices),
            faces=np.vstack(all_faces),
            colors=colors,
            properties=properties,
        )

    def __repr__(self) -> str:
        return (
            f"Mesh(vertices={self.num_vertices}, "
            f"faces={self.num_faces}, "
            f"colors={'yes' if self.colors is not None else 'no'}, "
            f"properties={sorted(self.properties)})"
        )


@dataclass
class GLMesh:
    """
    Renderer-native mesh: every face owns its three vertices.

    Attributes:
        positions: Vertex coordinates (3F, 3), face i uses rows 3i..3i+2
        normals: Per-vertex normals (3F, 3), copied from the face normal
    """

    positions: NDArray[np.float64]
    normals: NDArray[np.float64]

    def __post_init__(self):
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.normals = np.asarray(self.normals, dtype=np.float64)
        if self.positions.ndim != 2 or self.positions.shape[1] != 3 or len(self.positions) % 3:
            raise ValueError(
                f"positions must have shape (3F, 3), got {self.positions.shape}"
            )
        if self.normals.shape != self.positions.shape:
            raise ValueError(
                f"normals shape {self.normals.shape} does not match positions "
                f"{self.positions.shape}"
            )

    @classmethod
    def from_mesh(cls, mesh: Mesh) -> GLMesh:
        """Flatten an indexed mesh, duplicating shared vertices."""
        return cls(
            positions=mesh.triangles.reshape(-1, 3),
            normals=np.repeat(mesh.normals, 3, axis=0),
        )

    @property
    def num_faces(self) -> int:
        return self.positions.shape[0] // 3

    @property
    def faces(self) -> NDArray[np.int32]:
        return np.arange(3 * self.num_faces, dtype=np.int32).reshape(-1, 3)

    @property
    def triangles(self) -> NDArray[np.float64]:
        """Corner coordinates of every face (F, 3, 3)."""
        return self.positions.reshape(-1, 3, 3)

    @property
    def face_normals(self) -> NDArray[np.float64]:
        return self.normals[::3]

    @property
    def face_centers(self) -> NDArray[np.float64]:
        return self.triangles.mean(axis=1)

    def __repr__(self) -> str:
        return f"GLMesh(faces={self.num_faces})"


def _to_rgba(value: Any) -> NDArray[np.float64]:
    """Convert a color or a sequence of colors to an (K, 4) RGBA array."""
    return mcolors.to_rgba_array(value)


def _per_face(values: NDArray, num_faces: int, name: str) -> NDArray:
    """Repeat a single value once per face, or check the length matches."""
    if len(values) == 1 and num_faces != 1:
        return np.repeat(values, num_faces, axis=0)
    if len(values) != num_faces:
        raise ValueError(f"'{name}' has {len(values)} values for {num_faces} faces")
    return values


def add_property(mesh: Mesh, name: str, value: Any) -> Mesh:
    """
    Attach a per-face property to a mesh (in place).

    A single value is repeated for every face. The "colors" property accepts
    anything matplotlib understands as a color (names, RGB(A) tuples, arrays)
    and is stored as RGBA in the typed ``Mesh.colors`` field.

    Args:
        mesh: Mesh to modify
        name: Property name
        value: One value, or one value per face

    Returns:
        The same mesh
    """
    if name == "colors":
        mesh.colors = _per_face(_to_rgba(value), mesh.num_faces, name)
        return mesh

    values = np.asarray(value)
    if values.ndim == 0:
        values = values.reshape(1)
    mesh.properties[name] = _per_face(values, mesh.num_faces, name)
    return mesh


def colors(mesh: Mesh) -> NDArray[np.float64]:
    """
    Per-face colors of a mesh.

    Raises:
        KeyError: If the mesh has no colors
    """
    if mesh.colors is None:
        raise KeyError(f"Mesh has no 'colors' property: {mesh!r}")
    return mesh.colors
