"""
Pydantic schemas for render settings and scene description files.
"""

from pathlib import Path
from typing import List, Tuple, Optional, Literal, Union
from pydantic import BaseModel, Field, field_validator, model_validator
import matplotlib.colors as mcolors
import yaml


def _check_color(v):
    """Accept anything matplotlib can turn into a color."""
    if not mcolors.is_color_like(v):
        raise ValueError(f"'{v}' is not a valid color")
    return v


class CameraConfig(BaseModel):
    """Figure size and 3D view."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    size: Tuple[int, int] = Field(
        default=(1920, 1080),
        description="Canvas size in pixels (width, height)"
    )
    dpi: int = Field(
        default=100,
        gt=0,
        description="Pixels per inch used to convert size to figure inches"
    )
    elev: float = Field(default=30.0, description="Camera elevation angle in degrees")
    azim: float = Field(default=-60.0, description="Camera azimuth angle in degrees")
    equal_aspect: bool = Field(
        default=True,
        description="Scale the box aspect to the data extents"
    )

    @field_validator('size')
    @classmethod
    def check_size(cls, v):
        """Canvas must have positive width and height."""
        if v[0] <= 0 or v[1] <= 0:
            raise ValueError(f"size must be positive, got {v}")
        return v

    @property
    def figsize(self) -> Tuple[float, float]:
        """Figure size in inches."""
        return (self.size[0] / self.dpi, self.size[1] / self.dpi)


class MeshStyleConfig(BaseModel):
    """How meshes are drawn."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    color: Union[str, Tuple[float, float, float], Tuple[float, float, float, float]] = Field(
        default="green",
        description="Color for meshes without per-face colors"
    )
    normals: bool = Field(default=False, description="Draw face normal arrows")
    wireframe: bool = Field(default=False, description="Draw triangle edges in black")
    axes: bool = Field(default=True, description="Show axes (new scenes only)")
    normal_length: Optional[float] = Field(
        default=None,
        gt=0,
        description="Arrow length for normals (None = 10% of the mesh diagonal)"
    )

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        return _check_color(v)


class SourceStyleConfig(BaseModel):
    """How light sources are drawn."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    n: int = Field(
        default=20,
        gt=0,
        description="Triangles per source glyph when point=False"
    )
    alpha: float = Field(default=0.2, ge=0.0, le=1.0, description="Glyph transparency")
    point: bool = Field(
        default=True,
        description="Draw a point and direction arrow per source"
    )
    color: str = Field(default="black", description="Point and arrow color")

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        return _check_color(v)


class GridStyleConfig(BaseModel):
    """How grid cloner boxes are drawn."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    alpha: float = Field(default=0.2, ge=0.0, le=1.0, description="Box transparency")


class RenderConfig(BaseModel):
    """All render settings, with documented defaults."""
    camera: CameraConfig = Field(default_factory=CameraConfig)
    mesh: MeshStyleConfig = Field(default_factory=MeshStyleConfig)
    sources: SourceStyleConfig = Field(default_factory=SourceStyleConfig)
    grid: GridStyleConfig = Field(default_factory=GridStyleConfig)

    class Config:
        """Pydantic config."""
        extra = "forbid"  # Catch typos in YAML
        validate_assignment = True

    @classmethod
    def from_yaml(cls, filepath: Union[str, Path]) -> "RenderConfig":
        """
        Load render settings from a YAML file.

        Args:
            filepath: Path to YAML file

        Returns:
            Validated RenderConfig
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Render config not found: {filepath}")

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        return cls(**raw_config)


class MeshConfig(BaseModel):
    """A mesh in a scene file: a primitive or a JSON geometry file."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    name: str = Field(..., description="Unique mesh identifier")
    type: Literal["rectangle", "bbox", "triangle", "file"] = Field(
        ..., description="Primitive type, or 'file' for a JSON mesh"
    )
    length: float = Field(default=1.0, gt=0, description="Rectangle size along x")
    width: float = Field(default=1.0, gt=0, description="Rectangle size along y")
    center: Tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="Rectangle center"
    )
    min: Optional[Tuple[float, float, float]] = Field(default=None, description="Box min corner")
    max: Optional[Tuple[float, float, float]] = Field(default=None, description="Box max corner")
    vertices: Optional[List[Tuple[float, float, float]]] = Field(
        default=None,
        description="Triangle corners"
    )
    geometry_file: Optional[str] = Field(default=None, description="Path to JSON mesh")
    color: Optional[Union[str, Tuple[float, float, float], Tuple[float, float, float, float]]] = Field(
        default=None,
        description="Color applied to every face"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Check name is not blank."""
        if not v or not v.strip():
            raise ValueError("Mesh name cannot be empty")
        return v.strip()

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        return v if v is None else _check_color(v)

    @model_validator(mode='after')
    def check_required_fields(self):
        """Each primitive type needs its own parameters."""
        if self.type == "bbox" and (self.min is None or self.max is None):
            raise ValueError(f"Mesh '{self.name}': bbox requires 'min' and 'max'")
        if self.type == "triangle" and (self.vertices is None or len(self.vertices) != 3):
            raise ValueError(f"Mesh '{self.name}': triangle requires 3 'vertices'")
        if self.type == "file" and not self.geometry_file:
            raise ValueError(f"Mesh '{self.name}': file requires 'geometry_file'")
        return self


class SourceConfig(BaseModel):
    """A directional light source."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    theta_deg: float = Field(default=0.0, ge=0.0, le=90.0, description="Zenith angle")
    phi_deg: float = Field(default=0.0, description="Azimuth angle")
    radiosity: float = Field(default=1.0, ge=0.0, description="Power per unit area")
    nrays: int = Field(default=1000, ge=1, description="Number of rays")
    box: Optional[Tuple[Tuple[float, float, float], Tuple[float, float, float]]] = Field(
        default=None,
        description="Scene box (min, max); None = bounding box of all meshes"
    )


class GridConfig(BaseModel):
    """Uniform grid cloner over the scene."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    divisions: Tuple[int, int, int] = Field(default=(1, 1, 1), description="Cells per axis")
    box: Optional[Tuple[Tuple[float, float, float], Tuple[float, float, float]]] = Field(
        default=None,
        description="Box to partition (min, max); None = bounding box of all meshes"
    )

    @field_validator('divisions')
    @classmethod
    def check_divisions(cls, v):
        if min(v) < 1:
            raise ValueError(f"divisions must be at least 1, got {v}")
        return v


class OutputConfig(BaseModel):
    """Output configuration."""

    class Config:
        """Pydantic config."""
        extra = "forbid"

    directory: str = Field(default="./out", description="Output directory path")
    filename: str = Field(default="scene.png", description="Exported image name")
    dpi: Optional[int] = Field(default=None, gt=0, description="Override export dpi")


class SceneConfig(BaseModel):
    """Top-level scene description file."""
    name: str = Field(..., description="Scene name")
    description: str = Field(default="", description="Scene description")
    meshes: List[MeshConfig] = Field(..., min_length=1, description="Meshes to draw")
    sources: List[SourceConfig] = Field(default_factory=list, description="Light sources")
    grid: Optional[GridConfig] = Field(default=None, description="Grid cloner to draw")
    render: RenderConfig = Field(default_factory=RenderConfig, description="Render settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    class Config:
        """Pydantic config."""
        extra = "forbid"
        validate_assignment = True

    @field_validator('meshes')
    @classmethod
    def check_unique_names(cls, v):
        """Ensure mesh names are unique."""
        names = [mesh.name for mesh in v]
        if len(names) != len(set(names)):
            duplicates = [name for name in names if names.count(name) > 1]
            raise ValueError(f"Duplicate mesh names: {set(duplicates)}")
        return v
