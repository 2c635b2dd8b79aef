"""
Light sources: geometry (where rays start) and angle (where they go).

Only directional geometry with a fixed emission direction is modelled.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from ..geometry.primitives import AABB


@dataclass
class Directional:
    """
    Geometry of a directional source: a horizontal rectangle at the top of a scene box.

    Attributes:
        xmin, xmax, ymin, ymax: Horizontal extent of the emitting rectangle
        zmax: Height of the emitting rectangle
    """

    xmin: float
    xmax: float
    ymin: float
    ymax: float
    zmax: float

    def __post_init__(self):
        if self.xmin > self.xmax or self.ymin > self.ymax:
            raise ValueError(
                f"Directional extent is inverted: x=[{self.xmin}, {self.xmax}], "
                f"y=[{self.ymin}, {self.ymax}]"
            )

    @classmethod
    def from_box(cls, box: AABB) -> Directional:
        """Use the top face of a scene bounding box as emitting area."""
        return cls(xmin=box.xmin, xmax=box.xmax, ymin=box.ymin, ymax=box.ymax, zmax=box.zmax)

    @property
    def area(self) -> float:
        return (self.xmax - self.xmin) * (self.ymax - self.ymin)


@dataclass
class FixedSource:
    """
    Emission pattern where every ray follows the same direction.

    Attributes:
        dir: Unit direction vector (3,)
    """

    dir: NDArray[np.float64]

    def __post_init__(self):
        self.dir = np.asarray(self.dir, dtype=np.float64)
        if self.dir.shape != (3,):
            raise ValueError(f"dir must have shape (3,), got {self.dir.shape}")
        mag = np.linalg.norm(self.dir)
        if mag < 1e-14:
            raise ValueError("Direction vector cannot be zero")
        self.dir = self.dir / mag

    @classmethod
    def from_angles(cls, theta: float, phi: float) -> FixedSource:
        """
        Direction from zenith and azimuth angles (radians).

        theta = 0 points straight down (-z); phi is measured from +x towards +y.
        """
        return cls(dir=np.array([
            np.sin(theta) * np.cos(phi),
            np.sin(theta) * np.sin(phi),
            -np.cos(theta),
        ]))


@dataclass
class Source:
    """
    A light source.

    Attributes:
        geom: Source geometry (e.g. Directional)
        angle: Emission pattern (e.g. FixedSource)
        power: Radiant power emitted by the source
        nrays: Number of rays the source generates
    """

    geom: Any
    angle: Any
    power: float = 1.0
    nrays: int = 1

    def __post_init__(self):
        if self.power < 0:
            raise ValueError(f"power must be non-negative, got {self.power}")
        if self.nrays < 1:
            raise ValueError(f"nrays must be at least 1, got {self.nrays}")

    @property
    def is_directional(self) -> bool:
        """Directional geometry with a fixed direction."""
        return isinstance(self.geom, Directional) and isinstance(self.angle, FixedSource)

    def __repr__(self) -> str:
        return (
            f"Source(geom={type(self.geom).__name__}, "
            f"angle={type(self.angle).__name__}, "
            f"power={self.power}, nrays={self.nrays})"
        )


def directional_source(box: AABB, theta: float, phi: float,
                       radiosity: float = 1.0, nrays: int = 1) -> Source:
    """
    Directional source covering the top of a scene box.

    Args:
        box: Scene bounding box
        theta, phi: Zenith and azimuth angles (radians)
        radiosity: Power per unit horizontal area
        nrays: Number of rays

    Returns:
        Source with Directional geometry and FixedSource angle
    """
    geom = Directional.from_box(box)
    return Source(
        geom=geom,
        angle=FixedSource.from_angles(theta, phi),
        power=radiosity * geom.area,
        nrays=nrays,
    )
