"""
World files and basemap image placement.

A world file is six lines of numbers describing a raster's georeference:
    0: pixel width in world units (x resolution)
    1, 2: rotation terms (ignored)
    3: pixel height in world units, negative for north-up images
    4: easting of the top-left pixel
    5: northing of the top-left pixel
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union
import logging

from .transform import PointTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WorldFile:
    """Georeference of a raster image."""
    x_resolution: float
    y_resolution: float
    min_easting: float
    max_northing: float

    def max_easting(self, image_width: float) -> float:
        return self.min_easting + image_width * self.x_resolution

    def min_northing(self, image_height: float) -> float:
        return self.max_northing + image_height * self.y_resolution


@dataclass(frozen=True, slots=True)
class ImagePlacement:
    """Pixel rectangle for drawing a basemap image (top-left origin)."""
    x: float
    y: float
    width: float
    height: float


def parse_world_file(text: str) -> WorldFile:
    """
    Parse world file text.

    Raises:
        ValueError: Fewer than six lines, or a non-numeric value
    """
    lines = [line.strip() for line in text.strip().splitlines()]
    if len(lines) < 6:
        raise ValueError(f"World file needs 6 lines, got {len(lines)}")
    try:
        values = [float(line) for line in lines[:6]]
    except ValueError as e:
        raise ValueError(f"Invalid world file value: {e}") from e
    return WorldFile(
        x_resolution=values[0],
        y_resolution=values[3],
        min_easting=values[4],
        max_northing=values[5],
    )


def load_world_file(filepath: Union[str, Path]) -> WorldFile:
    """
    Read and parse a world file from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the contents are invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"World file not found: {filepath}")
    world = parse_world_file(path.read_text())
    logger.info(f"Loaded world file {path.name}: origin ({world.min_easting}, {world.max_northing})")
    return world


def image_placement(
    world: WorldFile,
    image_width: float,
    image_height: float,
    point_fn: PointTransform
) -> ImagePlacement:
    """
    Where to draw a georeferenced image under a point transform.

    The top-left, top-right and bottom-left world corners are
    transformed; the image is stretched between them.

    Args:
        world: The image's world file
        image_width, image_height: Image size in pixels
        point_fn: World -> output pixel function

    Returns:
        The output rectangle
    """
    max_easting = world.max_easting(image_width)
    min_northing = world.min_northing(image_height)

    top_left = point_fn([world.min_easting, world.max_northing])
    top_right = point_fn([max_easting, world.max_northing])
    bottom_left = point_fn([world.min_easting, min_northing])

    return ImagePlacement(
        x=top_left[0],
        y=top_left[1],
        width=top_right[0] - top_left[0],
        height=bottom_left[1] - top_left[1],
    )
