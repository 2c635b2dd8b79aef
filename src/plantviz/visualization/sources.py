"""
Glyphs for light sources: a point per source plus an arrow along its direction.
"""

from typing import List, Sequence, Tuple, Union
import logging
import numpy as np
from numpy.typing import NDArray

from ..core.raytracer import Source
from ..core.config import SourceStyleConfig
from .mesh_plot import MeshPlotter

logger = logging.getLogger(__name__)


def compute_dir_p(source: Source) -> Tuple[NDArray[np.float64], Tuple[NDArray[np.float64], NDArray[np.float64]]]:
    """
    Representative point and arrow of a directional source.

    The point sits above the top-center of the emitting rectangle, pulled back
    along the direction by the larger horizontal extent s; the arrow starts
    there and has length s/5.

    Args:
        source: Directional source with a fixed direction

    Returns:
        (point, (tail, head))
    """
    geom = source.geom
    top = np.array([
        (geom.xmin + geom.xmax) / 2,
        (geom.ymin + geom.ymax) / 2,
        geom.zmax,
    ], dtype=np.float64)
    direction = source.angle.dir
    scale = max(geom.xmax - geom.xmin, geom.ymax - geom.ymin)

    point = top - direction * scale
    head = point + direction * scale / 5
    return point, (point, head)


def _as_directional_list(sources: Union[Source, Sequence[Source]]) -> List[Source]:
    """Wrap a single source and check the batch only holds directional sources."""
    if isinstance(sources, Source):
        sources = [sources]
    sources = list(sources)

    if len(sources) == 0:
        raise ValueError("Cannot render an empty list of sources")

    for i, source in enumerate(sources):
        if not isinstance(source, Source) or not source.is_directional:
            raise TypeError(
                f"Source {i} is {source!r}; only directional sources with a "
                f"fixed direction can be rendered"
            )
    return sources


def render_sources(plotter: MeshPlotter,
                   sources: Union[Source, Sequence[Source]],
                   style: SourceStyleConfig = None):
    """
    Add light-source glyphs to a scene.

    All points are drawn with one scatter call and all arrows with one line
    collection, whatever the number of sources.

    Args:
        plotter: Target scene
        sources: One source or a list of directional sources
        style: Glyph settings (point mode, transparency, color)

    Returns:
        (points collection, arrows collection)
    """
    style = style or SourceStyleConfig()
    sources = _as_directional_list(sources)

    if not style.point:
        # Mesh glyphs for sources are not defined; style.n is reserved for them
        raise NotImplementedError("Only point=True rendering is available for light sources")

    temp = [compute_dir_p(source) for source in sources]
    origins = np.array([point for point, _ in temp])
    arrows = np.array([[tail, head] for _, (tail, head) in temp])

    points = plotter.plot_points(origins, color=style.color, depthshade=False)
    lines = plotter.plot_segments(arrows, colors=style.color)

    logger.debug("Drew %d light sources", len(sources))
    return points, lines
