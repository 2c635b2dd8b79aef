"""
YAML scene description loader with validation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import logging
import numpy as np
import yaml

from ..config.schemas import SceneConfig, MeshConfig
from ..geometry import AABB, Mesh, add_property, bbox, rectangle, triangle
from ..raytracer import GridCloner, Source, directional_source
from .geometry_io import GeometryReader

logger = logging.getLogger(__name__)


@dataclass
class LoadedScene:
    """
    Everything described by a scene file.

    Usage:
        scene = SceneLoader.load('scenes/canopy.yaml')
        fig = render(scene.mesh, config=scene.render_config)
    """

    config: SceneConfig
    meshes: Dict[str, Mesh]
    sources: List[Source] = field(default_factory=list)
    grid: Optional[GridCloner] = None
    base_dir: Path = Path(".")

    _mesh: Optional[Mesh] = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def render_config(self):
        return self.config.render

    @property
    def mesh(self) -> Mesh:
        """All meshes merged into one (cached)."""
        if self._mesh is None:
            self._mesh = Mesh.merge(list(self.meshes.values()))
        return self._mesh

    @property
    def output_path(self) -> Path:
        """Export path, relative paths resolved against the scene file."""
        directory = Path(self.config.output.directory)
        if not directory.is_absolute():
            directory = self.base_dir / directory
        return directory / self.config.output.filename

    def __repr__(self) -> str:
        return (
            f"LoadedScene(name='{self.name}', meshes={len(self.meshes)}, "
            f"sources={len(self.sources)}, grid={self.grid is not None})"
        )


class SceneLoader:
    """Load and validate scene descriptions from YAML files."""

    @staticmethod
    def load(filepath: str | Path) -> LoadedScene:
        """
        Load a scene file and build meshes, sources and grid.

        Args:
            filepath: Path to YAML scene file

        Returns:
            LoadedScene
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Scene file not found: {filepath}")

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        # Validate with Pydantic
        config = SceneConfig(**raw_config)

        base_dir = filepath.parent
        meshes = {
            mesh_config.name: SceneLoader._build_mesh(mesh_config, base_dir)
            for mesh_config in config.meshes
        }

        scene_box = AABB.from_points(np.vstack([m.vertices for m in meshes.values()]))

        sources = []
        for source_config in config.sources:
            box = scene_box if source_config.box is None else AABB(*source_config.box)
            sources.append(directional_source(
                box,
                theta=np.deg2rad(source_config.theta_deg),
                phi=np.deg2rad(source_config.phi_deg),
                radiosity=source_config.radiosity,
                nrays=source_config.nrays,
            ))

        grid = None
        if config.grid is not None:
            box = scene_box if config.grid.box is None else AABB(*config.grid.box)
            grid = GridCloner.uniform(box, *config.grid.divisions)

        scene = LoadedScene(
            config=config,
            meshes=meshes,
            sources=sources,
            grid=grid,
            base_dir=base_dir,
        )
        logger.info("Loaded %r from %s", scene, filepath)
        return scene

    @staticmethod
    def _build_mesh(mesh_config: MeshConfig, base_dir: Path) -> Mesh:
        """Create the mesh described by one entry of the scene file."""
        if mesh_config.type == "rectangle":
            mesh = rectangle(mesh_config.length, mesh_config.width, mesh_config.center)
        elif mesh_config.type == "bbox":
            mesh = bbox(mesh_config.min, mesh_config.max)
        elif mesh_config.type == "triangle":
            mesh = triangle(*mesh_config.vertices)
        else:
            mesh = GeometryReader.read_json(base_dir / mesh_config.geometry_file)

        if mesh_config.color is not None:
            add_property(mesh, "colors", mesh_config.color)

        return mesh

    @staticmethod
    def validate(filepath: str | Path) -> bool:
        """
        Validate a scene file without building geometry.

        Returns:
            True if valid, raises ValidationError otherwise
        """
        with open(Path(filepath), 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        SceneConfig(**raw_config)
        return True
