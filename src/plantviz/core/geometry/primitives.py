"""
Axis-aligned boxes and triangle-mesh primitive builders.

All builders return a Mesh of triangles with outward (counter-clockwise) winding.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from numpy.typing import NDArray

from .mesh import Mesh


@dataclass
class AABB:
    """Axis-aligned bounding box given by its min and max corners."""
    min: NDArray[np.float64]
    max: NDArray[np.float64]

    def __post_init__(self):
        self.min = np.asarray(self.min, dtype=np.float64)
        self.max = np.asarray(self.max, dtype=np.float64)
        if self.min.shape != (3,) or self.max.shape != (3,):
            raise ValueError(
                f"AABB corners must have shape (3,), got {self.min.shape} and {self.max.shape}"
            )
        if np.any(self.min > self.max):
            raise ValueError(f"AABB min {self.min} exceeds max {self.max}")

    @property
    def xmin(self) -> float:
        return float(self.min[0])

    @property
    def ymin(self) -> float:
        return float(self.min[1])

    @property
    def zmin(self) -> float:
        return float(self.min[2])

    @property
    def xmax(self) -> float:
        return float(self.max[0])

    @property
    def ymax(self) -> float:
        return float(self.max[1])

    @property
    def zmax(self) -> float:
        return float(self.max[2])

    @property
    def extent(self) -> NDArray[np.float64]:
        """Edge lengths (dx, dy, dz)."""
        return self.max - self.min

    @property
    def center(self) -> NDArray[np.float64]:
        return 0.5 * (self.min + self.max)

    @classmethod
    def from_points(cls, points: NDArray[np.float64]) -> AABB:
        """Smallest box enclosing a (N, 3) point cloud."""
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 3 or points.shape[0] == 0:
            raise ValueError(f"points must have shape (N, 3) with N > 0, got {points.shape}")
        return cls(min=points.min(axis=0), max=points.max(axis=0))

    def __repr__(self) -> str:
        return f"AABB(min={self.min.tolist()}, max={self.max.tolist()})"


def triangle(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> Mesh:
    """Single triangle from three corner points."""
    vertices = np.array([p1, p2, p3], dtype=np.float64)
    faces = np.array([[0, 1, 2]], dtype=np.int32)
    return Mesh(vertices=vertices, faces=faces)


def rectangle(length: float = 1.0, width: float = 1.0,
              center: Sequence[float] = (0.0, 0.0, 0.0)) -> Mesh:
    """
    Horizontal rectangle (normal +z) made of two triangles.

    Args:
        length: Size along x
        width: Size along y
        center: Center point (x, y, z)

    Returns:
        Mesh with 4 vertices and 2 faces
    """
    if length <= 0 or width <= 0:
        raise ValueError(f"rectangle sides must be positive, got {length} x {width}")

    cx, cy, cz = center
    hx, hy = 0.5 * length, 0.5 * width
    vertices = np.array([
        [cx - hx, cy - hy, cz],
        [cx + hx, cy - hy, cz],
        [cx + hx, cy + hy, cz],
        [cx - hx, cy + hy, cz],
    ], dtype=np.float64)
    faces = np.array([[0, 1, 2], [0, 2, 3]], dtype=np.int32)
    return Mesh(vertices=vertices, faces=faces)


# Corner indices follow the bit pattern (x, y, z) -> x + 2y + 4z
_BOX_FACES = np.array([
    [0, 2, 3], [0, 3, 1],  # -z
    [4, 5, 7], [4, 7, 6],  # +z
    [0, 1, 5], [0, 5, 4],  # -y
    [2, 6, 7], [2, 7, 3],  # +y
    [0, 4, 6], [0, 6, 2],  # -x
    [1, 3, 7], [1, 7, 5],  # +x
], dtype=np.int32)


def bbox(pmin: Sequence[float], pmax: Sequence[float]) -> Mesh:
    """
    Closed box mesh (12 triangles) spanning two opposite corners.

    Args:
        pmin: Minimum corner (x, y, z)
        pmax: Maximum corner (x, y, z)

    Returns:
        Mesh with 8 vertices and 12 faces
    """
    box = AABB(min=pmin, max=pmax)
    corners = np.array([
        [box.max[0] if i & 1 else box.min[0],
         box.max[1] if i & 2 else box.min[1],
         box.max[2] if i & 4 else box.min[2]]
        for i in range(8)
    ], dtype=np.float64)
    return Mesh(vertices=corners, faces=_BOX_FACES.copy())
