"""Light sources and grid cloner partitions."""

from .sources import Directional, FixedSource, Source, directional_source
from .grid import Node, GridCloner

__all__ = [
    "Directional",
    "FixedSource",
    "Source",
    "directional_source",
    "Node",
    "GridCloner",
]
