"""
Saving scenes to image files.
"""

from pathlib import Path
from typing import Union
import logging
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)


def export_scene(scene: Figure, filename: Union[str, Path], **kwargs):
    """
    Save a scene (as returned by render) to a file.

    The format follows the file extension, e.g. '.png'. Keyword arguments are
    passed to Figure.savefig (dpi, transparent, bbox_inches, ...).

    Args:
        scene: Figure to save
        filename: Output path, including extension
    """
    scene.savefig(filename, **kwargs)
    logger.info("Saved scene to %s", filename)
