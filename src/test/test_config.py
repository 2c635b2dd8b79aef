"""
Test render configuration, scene files and geometry IO.
"""

import json
import pytest
import numpy as np
from pathlib import Path
from pydantic import ValidationError

from plantviz.core.config import MeshConfig, RenderConfig, SceneConfig
from plantviz.core.geometry import colors
from plantviz.core.io import GeometryReader, SceneLoader

DEMO_SCENE = Path(__file__).parent.parent.parent / "demos/scenes/canopy.yaml"


class TestRenderConfig:
    """Test render settings."""

    def test_defaults(self):
        config = RenderConfig()

        assert config.mesh.color == "green"
        assert not config.mesh.normals
        assert not config.mesh.wireframe
        assert config.mesh.axes
        assert config.camera.size == (1920, 1080)
        assert config.camera.figsize == (19.2, 10.8)
        assert config.sources.point
        assert config.grid.alpha == 0.2

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            RenderConfig(colour="red")

    @pytest.mark.parametrize("section, options", [
        ("camera", {"sise": (100, 100)}),
        ("mesh", {"wirefram": True}),
        ("sources", {"points": False}),
        ("grid", {"apha": 0.5}),
    ])
    def test_unknown_nested_field(self, section, options):
        with pytest.raises(ValidationError):
            RenderConfig(**{section: options})

    def test_invalid_color(self):
        with pytest.raises(ValidationError):
            RenderConfig(mesh={"color": "not-a-color"})

    def test_invalid_size(self):
        with pytest.raises(ValidationError):
            RenderConfig(camera={"size": (0, 100)})

    def test_alpha_range(self):
        with pytest.raises(ValidationError):
            RenderConfig(grid={"alpha": 1.5})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "render.yaml"
        path.write_text("mesh:\n  color: [1.0, 0.0, 0.0]\n  wireframe: true\n")

        config = RenderConfig.from_yaml(path)

        assert config.mesh.color == (1.0, 0.0, 0.0)
        assert config.mesh.wireframe

    def test_from_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RenderConfig.from_yaml(tmp_path / "missing.yaml")


class TestSceneConfig:
    """Test scene description validation."""

    def test_bbox_needs_corners(self):
        with pytest.raises(ValidationError):
            MeshConfig(name="box", type="bbox", min=(0, 0, 0))

    def test_triangle_needs_three_vertices(self):
        with pytest.raises(ValidationError):
            MeshConfig(name="tri", type="triangle", vertices=[(0, 0, 0), (1, 0, 0)])

    def test_duplicate_names(self):
        with pytest.raises(ValidationError):
            SceneConfig(name="s", meshes=[
                {"name": "a", "type": "rectangle"},
                {"name": "a", "type": "rectangle"},
            ])

    def test_needs_a_mesh(self):
        with pytest.raises(ValidationError):
            SceneConfig(name="s", meshes=[])


class TestSceneLoader:
    """Test loading scene files."""

    def test_load(self, tmp_path):
        (tmp_path / "leaf.json").write_text(json.dumps({
            "vertices": [[0, 0], [1, 0], [0, 1]],
            "faces": [[0, 1, 2]],
            "colors": "yellow",
        }))
        (tmp_path / "scene.yaml").write_text(
            "name: Test\n"
            "meshes:\n"
            "  - {name: floor, type: rectangle, length: 4.0, width: 2.0, color: gray}\n"
            "  - {name: leaf, type: file, geometry_file: leaf.json}\n"
            "sources:\n"
            "  - {theta_deg: 0.0, radiosity: 2.0}\n"
            "grid:\n"
            "  divisions: [2, 1, 1]\n"
            "output:\n"
            "  directory: images\n"
        )

        scene = SceneLoader.load(tmp_path / "scene.yaml")

        assert scene.name == "Test"
        assert set(scene.meshes) == {"floor", "leaf"}
        assert scene.mesh.num_faces == 3
        assert colors(scene.mesh).shape == (3, 4)

        assert len(scene.sources) == 1
        np.testing.assert_array_almost_equal(scene.sources[0].angle.dir, [0, 0, -1])
        # floor is 4 x 2
        assert abs(scene.sources[0].power - 16.0) < 1e-12

        assert scene.grid.num_leaves == 2
        assert scene.output_path == tmp_path / "images" / "scene.png"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SceneLoader.load(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("")

        with pytest.raises(ValidationError):
            SceneLoader.load(path)
        with pytest.raises(ValidationError):
            SceneLoader.validate(path)

    @pytest.mark.parametrize("block", [
        "render:\n  mesh:\n    normalz: true\n",
        "output:\n  file_name: x.png\n",
        "sources:\n  - {theta: 10.0}\n",
        "grid:\n  division: [2, 2, 1]\n",
    ])
    def test_misspelled_nested_key(self, tmp_path, block):
        path = tmp_path / "scene.yaml"
        path.write_text(
            "name: Typo\n"
            "meshes:\n"
            "  - {name: floor, type: rectangle, color: gray}\n" + block
        )

        with pytest.raises(ValidationError):
            SceneLoader.load(path)

    def test_misspelled_mesh_key(self):
        with pytest.raises(ValidationError):
            MeshConfig(name="floor", type="rectangle", colour="gray")

    def test_demo_scene(self):
        assert SceneLoader.validate(DEMO_SCENE)

        scene = SceneLoader.load(DEMO_SCENE)

        assert len(scene.meshes) == 4
        assert len(scene.sources) == 2
        assert scene.grid.num_leaves == 4
        assert scene.render_config.camera.size == (1280, 720)


class TestGeometryReader:
    """Test JSON mesh files."""

    def test_read_json(self, tmp_path):
        path = tmp_path / "mesh.json"
        path.write_text(json.dumps({
            "vertices": [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]],
            "faces": [[0, 1, 2], [0, 2, 3]],
        }))

        mesh = GeometryReader.read_json(path)

        assert mesh.num_faces == 2
        assert mesh.colors is None

    def test_missing_faces(self, tmp_path):
        path = tmp_path / "mesh.json"
        path.write_text(json.dumps({"vertices": [[0, 0, 0]]}))

        with pytest.raises(ValueError):
            GeometryReader.read_json(path)
