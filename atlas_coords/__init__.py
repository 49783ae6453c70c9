"""
Atlas Coords

Coordinate transformation and map-projection core for rendering
biological-record distribution maps of the British Isles.

Provides:
- A projection engine (forward/inverse for ~28 projection algorithms)
  driven by compact "+proj=..." strings or WKT definitions
- Datum transformations (Helmert 3/7-parameter and NTv2 grid shift)
- British, Irish and Channel Islands grid references, and MGRS
- Image-space transforms with displaced insets and tweening between
  named map layouts

Can be used as:
- Library: from atlas_coords import transform, centroid_of, ...
- CLI tool: python -m atlas_coords.main
"""

__version__ = "0.3.0"
__author__ = "Atlas Coords Team"

from .errors import (
    AtlasCoordsError,
    DefinitionError,
    WktParseError,
    GridShiftError,
    NTv2FormatError,
    GridReferenceError,
    MGRSError,
)
from .context import ProjectionContext, default_context
from .transform import transform
from .grids import (
    check_grid_reference,
    parse_grid_reference,
    centroid_of,
    grid_reference_to_polygon,
    mgrs_encode,
    mgrs_decode,
)
from .image import (
    TransOpts,
    width_from_height,
    compute_inset_layout,
    make_point_transform,
    tween_trans_opts,
    pixel_radius,
    create_image_transform,
    NAMED_TRANS_OPTS,
)

__all__ = [
    '__version__',
    # Errors
    'AtlasCoordsError',
    'DefinitionError',
    'WktParseError',
    'GridShiftError',
    'NTv2FormatError',
    'GridReferenceError',
    'MGRSError',
    # Context and transform
    'ProjectionContext',
    'default_context',
    'transform',
    # Grid references
    'check_grid_reference',
    'parse_grid_reference',
    'centroid_of',
    'grid_reference_to_polygon',
    'mgrs_encode',
    'mgrs_decode',
    # Image space
    'TransOpts',
    'width_from_height',
    'compute_inset_layout',
    'make_point_transform',
    'tween_trans_opts',
    'pixel_radius',
    'create_image_transform',
    'NAMED_TRANS_OPTS',
]
