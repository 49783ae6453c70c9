"""
Named image-transform layouts for British Isles maps.

World coordinates are British National Grid meters. The Channel
Islands and Northern Isles rectangles are the two regions that the
layouts displace into insets; their "home" bounds are also used when
tweening between layouts.
"""

from typing import Dict

from ..models.geometry import Bounds
from .options import Inset, TransOpts


# =============================================================================
# INSET REGIONS
# =============================================================================

CHANNEL_ISLANDS_BOUNDS = Bounds(337500, -92500, 427500, -12700)
NORTHERN_ISLES_BOUNDS = Bounds(272800, 1019000, 434200, 1225000)

# Order matters: tweening pairs insets by position
HOME_INSET_BOUNDS = (CHANNEL_ISLANDS_BOUNDS, NORTHERN_ISLES_BOUNDS)

# Main map extents
BRITISH_ISLES_BOUNDS = Bounds(-213000, -9000, 671000, 1209000)
BRITISH_ISLES_SOUTH_BOUNDS = Bounds(-213000, -9000, 671000, 1000000)

# Pixel offsets (negative = from the right / top edge)
CHANNEL_ISLANDS_INSET = Inset(CHANNEL_ISLANDS_BOUNDS, image_x=-8, image_y=8)
NORTHERN_ISLES_INSET = Inset(NORTHERN_ISLES_BOUNDS, image_x=7, image_y=-5)


# =============================================================================
# PRESETS
# =============================================================================

BI1 = TransOpts(
    id='BI1',
    caption='No insets',
    bounds=BRITISH_ISLES_BOUNDS,
)

BI2 = TransOpts(
    id='BI2',
    caption='Inset Channel Islands',
    bounds=BRITISH_ISLES_BOUNDS,
    insets=(CHANNEL_ISLANDS_INSET,),
)

BI3 = TransOpts(
    id='BI3',
    caption='Inset Northern Isles',
    bounds=BRITISH_ISLES_SOUTH_BOUNDS,
    insets=(NORTHERN_ISLES_INSET,),
)

BI4 = TransOpts(
    id='BI4',
    caption='Inset both',
    bounds=BRITISH_ISLES_SOUTH_BOUNDS,
    insets=(CHANNEL_ISLANDS_INSET, NORTHERN_ISLES_INSET),
)

NAMED_TRANS_OPTS: Dict[str, TransOpts] = {
    'BI1': BI1,
    'BI2': BI2,
    'BI3': BI3,
    'BI4': BI4,
}
