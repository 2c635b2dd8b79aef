"""
Test rendering entry points and scene export.
"""

import pytest
import numpy as np
import matplotlib.colors as mcolors
import matplotlib.image as mimage
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from plantviz.core.geometry import AABB, GLMesh, add_property, rectangle
from plantviz.core.raytracer import GridCloner
from plantviz.core.config import RenderConfig
from plantviz.visualization import (
    MeshPlotter, export_scene, face_colors, figure_size, render, render_into,
)
import plantviz.visualization.mesh_plot as mesh_plot


def fig_axis_on(fig) -> bool:
    return fig.axes[0].axison


class TestFaceColors:
    """Test color resolution for triangles."""

    def test_single_color(self):
        rgba = face_colors("green", 4)
        assert rgba.shape == (4, 4)
        np.testing.assert_array_almost_equal(rgba[2], mcolors.to_rgba("green"))

    def test_per_vertex_colors_reduce_to_faces(self):
        per_face = np.array([[1.0, 0.0, 0.0, 1.0], [0.0, 0.0, 1.0, 1.0]])
        rgba = face_colors(np.repeat(per_face, 3, axis=0), 2)
        np.testing.assert_array_almost_equal(rgba, per_face)

    def test_wrong_count(self):
        with pytest.raises(ValueError):
            face_colors(["red", "blue"], 3)


class TestRender:
    """Test new-scene rendering."""

    def test_returns_figure_with_3d_axes(self, colored_rectangle):
        fig = render(colored_rectangle)

        assert isinstance(fig, Figure)
        assert fig.axes[0].name == "3d"
        assert figure_size(fig) == (1920, 1080)
        assert len(fig.axes[0].collections) == 1

    def test_custom_size(self, colored_rectangle):
        fig = render(colored_rectangle, size=(640, 480))
        assert figure_size(fig) == (640, 480)

    def test_size_from_config(self, colored_rectangle):
        config = RenderConfig(camera={"size": (800, 600), "dpi": 50})
        assert figure_size(render(colored_rectangle, config=config)) == (800, 600)

    def test_mesh_without_colors(self):
        with pytest.raises(KeyError):
            render(rectangle())

    def test_gl_mesh_default_green(self):
        fig = render(GLMesh.from_mesh(rectangle()))

        facecolors = fig.axes[0].collections[0].get_facecolor()
        green = mcolors.to_rgba("green")
        assert np.allclose(facecolors, green)

    def test_normals_and_wireframe_overlays(self, colored_rectangle):
        fig = render(colored_rectangle, normals=True, wireframe=True)
        # mesh + normal arrows + edges
        assert len(fig.axes[0].collections) == 3

    def test_hidden_axes(self, colored_rectangle):
        assert fig_axis_on(render(colored_rectangle))
        assert not fig_axis_on(render(colored_rectangle, axes=False))

    def test_normal_arrows_follow_faces(self, unit_box, monkeypatch):
        gl = GLMesh.from_mesh(unit_box)
        plotter = MeshPlotter.new_figure()
        calls = []
        monkeypatch.setattr(plotter.ax, "quiver", lambda *args, **kwargs: calls.append((args, kwargs)))

        plotter.plot_gl_mesh(gl, normals=True, normal_length=0.25)

        assert len(calls) == 1
        args, kwargs = calls[0]
        np.testing.assert_array_almost_equal(np.column_stack(args[:3]), unit_box.centers)
        np.testing.assert_array_almost_equal(np.column_stack(args[3:6]), unit_box.normals)
        assert kwargs["length"] == 0.25

    def test_wireframe_has_three_edges_per_face(self, unit_box, monkeypatch):
        recorded = []

        class RecordingLines(mesh_plot.Line3DCollection):
            def __init__(self, segments, *args, **kwargs):
                recorded.append(np.asarray(segments))
                super().__init__(segments, *args, **kwargs)

        monkeypatch.setattr(mesh_plot, "Line3DCollection", RecordingLines)

        add_property(unit_box, "colors", "green")
        render(unit_box, wireframe=True)

        assert len(recorded) == 1
        assert recorded[0].shape == (3 * unit_box.num_faces, 2, 3)
        # first face: edges 0-1, 1-2, 2-0
        tri = unit_box.triangles[0]
        np.testing.assert_array_almost_equal(recorded[0][0], tri[[0, 1]])
        np.testing.assert_array_almost_equal(recorded[0][2], tri[[2, 0]])

    def test_shade_passed_to_collection(self, monkeypatch):
        recorded = {}

        class RecordingPolys(mesh_plot.Poly3DCollection):
            def __init__(self, verts, *args, **kwargs):
                recorded.update(kwargs)
                super().__init__(verts, *args, **kwargs)

        monkeypatch.setattr(mesh_plot, "Poly3DCollection", RecordingPolys)

        render(GLMesh.from_mesh(rectangle()), shade=True)

        assert recorded["shade"] is True
        assert recorded["facecolors"].shape == (2, 4)

    def test_passthrough_options(self):
        fig = render(GLMesh.from_mesh(rectangle()), alpha=0.5)
        assert fig.axes[0].collections[0].get_alpha() == 0.5

    def test_render_sources_in_new_scene(self, example_source):
        fig = render([example_source, example_source])
        assert len(fig.axes[0].collections) == 2

    def test_unsupported_object(self):
        with pytest.raises(TypeError):
            render("not a mesh")


class TestRenderInto:
    """Test drawing into existing scenes."""

    def test_mutates_active_scene(self, colored_rectangle, example_source):
        fig = render(colored_rectangle)

        ax = render_into(example_source)

        assert ax is fig.axes[0]
        assert len(ax.collections) == 3

    def test_explicit_scene(self, colored_rectangle):
        fig = render(colored_rectangle)
        plt.figure()  # another figure becomes active

        grid = GridCloner.uniform(AABB(min=[-1, -0.5, 0], max=[1, 0.5, 1]), 2, 1, 1)
        ax = render_into(grid, scene=fig, alpha=0.1)

        assert ax is fig.axes[0]
        assert len(ax.collections) == 2

    def test_accepts_axes(self, colored_rectangle):
        fig = render(colored_rectangle)
        ax = render_into(GLMesh.from_mesh(rectangle(center=(3, 0, 0))), scene=fig.axes[0])
        assert len(ax.collections) == 2

    def test_creates_axes_when_missing(self, colored_rectangle):
        plt.close("all")
        ax = render_into(colored_rectangle)
        assert ax.name == "3d"

    def test_limits_cover_all_objects(self):
        fig = render(GLMesh.from_mesh(rectangle()))
        render_into(GLMesh.from_mesh(rectangle(center=(10.0, 0.0, 0.0))), scene=fig)

        xmin, xmax = fig.axes[0].get_xlim3d()
        assert xmin <= -0.5
        assert xmax >= 10.5

    def test_unknown_source_option(self, example_source):
        with pytest.raises(TypeError):
            render_into(example_source, scene=render([example_source]), shade=True)


class TestExport:
    """Test saving scenes."""

    def test_png(self, colored_rectangle, tmp_path):
        fig = render(colored_rectangle, size=(320, 240))
        path = tmp_path / "scene.png"

        export_scene(fig, path)

        assert path.exists()
        assert mimage.imread(path).shape[:2] == (240, 320)

    def test_options_forwarded(self, colored_rectangle, tmp_path):
        fig = render(colored_rectangle, size=(320, 240))
        path = tmp_path / "scene.png"

        export_scene(fig, path, dpi=200)

        assert mimage.imread(path).shape[:2] == (480, 640)

    def test_unknown_format(self, colored_rectangle, tmp_path):
        fig = render(colored_rectangle, size=(320, 240))
        with pytest.raises(ValueError):
            export_scene(fig, tmp_path / "scene.notaformat")
