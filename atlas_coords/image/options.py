"""
Image transform options.

A TransOpts describes how a rectangle of world coordinates is drawn
into an image of a given height, plus any insets: world rectangles
that are drawn displaced to another position in the image.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from ..models.geometry import Bounds


@dataclass(frozen=True, slots=True)
class Inset:
    """
    A displaced world rectangle.

    Attributes:
        bounds: World rectangle drawn in the inset
        image_x: Pixel offset of the inset's left edge from the left of
            the image; negative means from the right edge instead
        image_y: Pixel offset of the inset's bottom edge from the
            bottom of the image; negative means from the top edge
    """
    bounds: Bounds
    image_x: float
    image_y: float

    def lerp(self, other: 'Inset', t: float) -> 'Inset':
        return Inset(
            self.bounds.lerp(other.bounds, t),
            self.image_x + (other.image_x - self.image_x) * t,
            self.image_y + (other.image_y - self.image_y) * t,
        )

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> 'Inset':
        """Create an inset from {bounds, imageX, imageY}."""
        return Inset(
            Bounds.from_dict(d['bounds']),
            float(d.get('imageX', d.get('image_x', 0))),
            float(d.get('imageY', d.get('image_y', 0))),
        )


@dataclass(frozen=True, slots=True)
class TransOpts:
    """
    World-to-image layout.

    Attributes:
        bounds: World rectangle mapped onto the whole image
        insets: Displaced rectangles, checked in order
        id: Short key (e.g. "BI1")
        caption: Human readable description
        is_tween: True for interpolated layouts, whose inset offsets
            are absolute (bottom-left origin) even when negative
    """
    bounds: Bounds
    insets: Tuple[Inset, ...] = ()
    id: str = ""
    caption: str = ""
    is_tween: bool = False

    def validate(self) -> None:
        """Raise ValueError if the main bounds or any inset bounds are empty."""
        self.bounds.validate()
        for inset in self.insets:
            inset.bounds.validate()

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> 'TransOpts':
        """Create options from the {bounds, insets, id, caption} layout."""
        return TransOpts(
            bounds=Bounds.from_dict(d['bounds']),
            insets=tuple(Inset.from_dict(i) for i in d.get('insets') or ()),
            id=str(d.get('id', '')),
            caption=str(d.get('caption', '')),
            is_tween=bool(d.get('isTween', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            'id': self.id,
            'caption': self.caption,
            'bounds': dict(zip(('xmin', 'ymin', 'xmax', 'ymax'), self.bounds.to_list())),
            'insets': [
                {
                    'bounds': dict(zip(('xmin', 'ymin', 'xmax', 'ymax'), i.bounds.to_list())),
                    'imageX': i.image_x,
                    'imageY': i.image_y,
                }
                for i in self.insets
            ],
        }
        if self.is_tween:
            out['isTween'] = True
        return out
