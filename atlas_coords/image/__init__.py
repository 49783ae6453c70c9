"""
Image-space transforms: world coordinates to pixels, insets, tweening
between layouts and basemap image placement.
"""

from .options import Inset, TransOpts
from .presets import NAMED_TRANS_OPTS, BI1, BI2, BI3, BI4
from .transform import (
    ImageTransform,
    InsetDims,
    resolve_trans_opts,
    width_from_height,
    compute_inset_layout,
    make_point_transform,
    create_image_transform,
    pixel_radius,
    normalize_trans_opts,
    tween_trans_opts,
    tween_frames,
)
from .world_file import (
    WorldFile,
    ImagePlacement,
    parse_world_file,
    load_world_file,
    image_placement,
)

__all__ = [
    'Inset',
    'TransOpts',
    'NAMED_TRANS_OPTS',
    'BI1',
    'BI2',
    'BI3',
    'BI4',
    'ImageTransform',
    'InsetDims',
    'resolve_trans_opts',
    'width_from_height',
    'compute_inset_layout',
    'make_point_transform',
    'create_image_transform',
    'pixel_radius',
    'normalize_trans_opts',
    'tween_trans_opts',
    'tween_frames',
    'WorldFile',
    'ImagePlacement',
    'parse_world_file',
    'load_world_file',
    'image_placement',
]
