"""
Triangle mesh reader for JSON files.
"""

from pathlib import Path
import json
import logging
import numpy as np

from ..geometry.mesh import Mesh

logger = logging.getLogger(__name__)


class GeometryReader:
    """Read triangle meshes from disk."""

    @staticmethod
    def read_json(filepath: str | Path) -> Mesh:
        """
        Read a triangle mesh from a JSON file.

        Expected format:
        {
          "vertices": [[x, y, z], ...],
          "faces": [[i1, i2, i3], ...],
          "colors": [[r, g, b], ...] or "green" (optional)
        }

        Args:
            filepath: Path to JSON file

        Returns:
            Mesh object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Geometry file not found: {filepath}")

        with open(filepath, 'r') as f:
            data = json.load(f)

        vertices = data.get("vertices")
        if vertices is None:
            raise ValueError(f"Missing 'vertices' field in {filepath}")

        faces = data.get("faces")
        if faces is None:
            raise ValueError(f"Missing 'faces' field in {filepath}")

        vertices = np.array(vertices, dtype=np.float64)
        # Allow 2D vertices, placed in the z=0 plane
        if vertices.ndim == 2 and vertices.shape[1] == 2:
            vertices = np.column_stack([vertices, np.zeros(len(vertices))])

        mesh = Mesh(
            vertices=vertices,
            faces=np.array(faces, dtype=np.int32),
            colors=data.get("colors"),
        )
        logger.debug("Read %s from %s", mesh, filepath)
        return mesh
