"""
Shared fixtures: headless matplotlib and small meshes.
"""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
import matplotlib.pyplot as plt

from plantviz.core.geometry import AABB, add_property, bbox, rectangle
from plantviz.core.raytracer import Directional, FixedSource, Source


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def colored_rectangle():
    mesh = rectangle(length=2.0, width=1.0)
    add_property(mesh, "colors", [(1.0, 0.0, 0.0, 1.0), (0.0, 0.0, 1.0, 1.0)])
    return mesh


@pytest.fixture
def example_source():
    box = AABB(min=[0.0, 0.0, 0.0], max=[2.0, 4.0, 6.0])
    return Source(geom=Directional.from_box(box), angle=FixedSource(dir=[0.0, 0.0, -1.0]))


@pytest.fixture
def unit_box():
    return bbox([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
