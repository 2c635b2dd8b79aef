"""
Grid cloner: a spatial partition whose leaves carry bounding boxes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np

from ..geometry.primitives import AABB


@dataclass
class Node:
    """Partition node; leaves carry the box they cover."""
    leaf: bool
    box: Optional[AABB] = None
    children: List[int] = field(default_factory=list)

    def __post_init__(self):
        if self.leaf and self.box is None:
            raise ValueError("Leaf nodes must carry a bounding box")


@dataclass
class GridCloner:
    """
    Flat storage of the nodes of a spatial partition.

    Attributes:
        nodes: All nodes, the root first
    """

    nodes: List[Node]

    @property
    def leaves(self) -> List[Node]:
        return [node for node in self.nodes if node.leaf]

    @property
    def num_leaves(self) -> int:
        return len(self.leaves)

    @classmethod
    def uniform(cls, box: AABB, nx: int = 1, ny: int = 1, nz: int = 1) -> GridCloner:
        """
        Split a box into nx * ny * nz equal leaf cells under one root node.

        Args:
            box: Box to partition
            nx, ny, nz: Number of cells along each axis

        Returns:
            GridCloner with the root at index 0
        """
        if min(nx, ny, nz) < 1:
            raise ValueError(f"cell counts must be at least 1, got ({nx}, {ny}, {nz})")

        step = box.extent / np.array([nx, ny, nz], dtype=np.float64)
        leaves = []
        for i in range(nx):
            for j in range(ny):
                for k in range(nz):
                    lo = box.min + step * np.array([i, j, k])
                    leaves.append(Node(leaf=True, box=AABB(min=lo, max=lo + step)))

        root = Node(leaf=False, children=list(range(1, len(leaves) + 1)))
        return cls(nodes=[root] + leaves)

    def __repr__(self) -> str:
        return f"GridCloner(nodes={len(self.nodes)}, leaves={self.num_leaves})"
