"""
World-to-image transforms with displaced insets.

Image coordinates have their origin at the top left (y down). Inset
offsets in TransOpts are measured from the bottom left, with negative
values meaning "from the right / top edge"; the returned inset
geometry is top-down like every other image coordinate.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Mapping, Sequence, Tuple, Union
import logging
import math

from ..models.geometry import Bounds
from .options import Inset, TransOpts
from .presets import HOME_INSET_BOUNDS, NAMED_TRANS_OPTS

logger = logging.getLogger(__name__)

TransOptsLike = Union[str, TransOpts, Mapping[str, Any]]
PointTransform = Callable[..., Tuple[float, float]]


@dataclass(frozen=True, slots=True)
class InsetDims:
    """Pixel rectangle of an inset (top-left origin)."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class _PlacedInset:
    bounds: Bounds
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ImageTransform:
    """
    Everything a renderer needs for one layout at one image height.

    Attributes:
        params: The layout
        point: World (x, y) -> pixel (x, y) function
        inset_dims: Pixel rectangles of the insets
        width, height: Image size in pixels
    """
    params: TransOpts
    point: PointTransform
    inset_dims: Tuple[InsetDims, ...]
    width: float
    height: float


# =============================================================================
# OPTIONS
# =============================================================================

def resolve_trans_opts(opts: TransOptsLike) -> TransOpts:
    """
    Accept a preset key, a TransOpts or a {bounds, insets} mapping.

    Raises:
        ValueError: Unknown preset key, or empty bounds
    """
    if isinstance(opts, TransOpts):
        resolved = opts
    elif isinstance(opts, str):
        resolved = NAMED_TRANS_OPTS.get(opts)
        if resolved is None:
            raise ValueError(
                f"Unknown transform options {opts!r}; expected one of {sorted(NAMED_TRANS_OPTS)}"
            )
    elif isinstance(opts, Mapping):
        resolved = TransOpts.from_dict(opts)
    else:
        raise ValueError(f"Unsupported transform options: {type(opts).__name__}")
    resolved.validate()
    return resolved


def width_from_height(trans_opts: TransOptsLike, output_height: float) -> float:
    """Image width that keeps the aspect ratio of the main bounds."""
    opts = resolve_trans_opts(trans_opts)
    return opts.bounds.width * output_height / opts.bounds.height


def _place_insets(opts: TransOpts, output_height: float) -> List[_PlacedInset]:
    output_width = opts.bounds.width * output_height / opts.bounds.height
    scale = output_height / opts.bounds.height
    placed = []
    for inset in opts.insets:
        width = inset.bounds.width * scale
        height = inset.bounds.height * scale
        if inset.image_x < 0 and not opts.is_tween:
            x = output_width - width + inset.image_x
        else:
            x = inset.image_x
        if inset.image_y < 0 and not opts.is_tween:
            y = output_height - height + inset.image_y
        else:
            y = inset.image_y
        placed.append(_PlacedInset(inset.bounds, x, y, width, height))
    return placed


# =============================================================================
# LAYOUT AND POINT TRANSFORM
# =============================================================================

def compute_inset_layout(trans_opts: TransOptsLike, output_height: float) -> List[InsetDims]:
    """
    Pixel rectangles for each inset.

    Args:
        trans_opts: Layout (or preset key)
        output_height: Image height in pixels

    Returns:
        One InsetDims per inset, in order, with top-left origin
    """
    opts = resolve_trans_opts(trans_opts)
    return [
        InsetDims(p.x, output_height - p.y - p.height, p.width, p.height)
        for p in _place_insets(opts, output_height)
    ]


def make_point_transform(trans_opts: TransOptsLike, output_height: float) -> PointTransform:
    """
    Build the world -> pixel function for a layout.

    The returned function takes a world point (x, y) and an optional
    ignore_inset flag. Points inside an inset's world bounds are moved
    with the inset; when insets overlap, the last one wins.

    Raises:
        ValueError: Empty main or inset bounds
    """
    opts = resolve_trans_opts(trans_opts)
    bounds = opts.bounds
    output_width = bounds.width * output_height / bounds.height
    placed = _place_insets(opts, output_height)
    logger.debug(
        f"Point transform {opts.id or 'custom'}: {output_width:.1f}x{output_height} px, "
        f"{len(placed)} inset(s)"
    )

    def point(p: Sequence[float], ignore_inset: bool = False) -> Tuple[float, float]:
        x = p[0]
        y = p[1]
        tx = output_width * (x - bounds.xmin) / bounds.width
        ty = output_height - output_height * (y - bounds.ymin) / bounds.height
        if not ignore_inset:
            for inset in placed:
                if inset.bounds.contains(x, y):
                    tx = inset.x + inset.width * (x - inset.bounds.xmin) / inset.bounds.width
                    ty = output_height - (
                        inset.y + inset.height * (y - inset.bounds.ymin) / inset.bounds.height
                    )
        return tx, ty

    return point


def create_image_transform(trans_opts: TransOptsLike, output_height: float) -> ImageTransform:
    """Bundle the point function, inset geometry and image size for a layout."""
    opts = resolve_trans_opts(trans_opts)
    return ImageTransform(
        params=opts,
        point=make_point_transform(opts, output_height),
        inset_dims=tuple(compute_inset_layout(opts, output_height)),
        width=width_from_height(opts, output_height),
        height=output_height,
    )


def pixel_radius(
    point_fn: PointTransform,
    world_precision: float,
    origin: Tuple[float, float] = (300500.0, 300500.0)
) -> float:
    """
    Pixel size of half a grid square at the current transform.

    Measured by transforming origin and a point world_precision / 2 to
    its east, so it follows whatever scale applies around origin.
    """
    x0, y0 = point_fn([origin[0], origin[1]])
    x1, y1 = point_fn([origin[0] + world_precision / 2, origin[1]])
    return math.hypot(x1 - x0, y1 - y0)


# =============================================================================
# TWEENING
# =============================================================================

def normalize_trans_opts(trans_opts: TransOptsLike, output_height: float) -> TransOpts:
    """
    Rewrite a layout for interpolation.

    Every home inset region is present (a missing one is added at its
    undisplaced position), home regions come first in a fixed order,
    and all inset offsets are absolute from the bottom left.
    """
    opts = resolve_trans_opts(trans_opts)
    bounds = opts.bounds
    scale = output_height / bounds.height
    placed = {id(i): p for i, p in zip(opts.insets, _place_insets(opts, output_height))}

    insets: List[Inset] = []
    for home in HOME_INSET_BOUNDS:
        match = next((i for i in opts.insets if i.bounds == home), None)
        if match is None:
            insets.append(Inset(
                home,
                (home.xmin - bounds.xmin) * scale,
                (home.ymin - bounds.ymin) * scale,
            ))
        else:
            p = placed[id(match)]
            insets.append(Inset(home, p.x, p.y))

    for inset in opts.insets:
        if inset.bounds not in HOME_INSET_BOUNDS:
            p = placed[id(inset)]
            insets.append(Inset(inset.bounds, p.x, p.y))

    return TransOpts(
        bounds=bounds,
        insets=tuple(insets),
        id=opts.id,
        caption=opts.caption,
        is_tween=True,
    )


def tween_trans_opts(
    from_opts: TransOptsLike,
    to_opts: TransOptsLike,
    output_height: float,
    t: float
) -> TransOpts:
    """
    Layout part way between two others.

    Args:
        from_opts: Start layout (or preset key)
        to_opts: End layout (or preset key)
        output_height: Image height in pixels
        t: 0 gives the start layout, 1 the end

    Returns:
        Interpolated TransOpts with is_tween set

    Raises:
        ValueError: The layouts carry different numbers of extra insets
    """
    start = normalize_trans_opts(from_opts, output_height)
    end = normalize_trans_opts(to_opts, output_height)
    if len(start.insets) != len(end.insets):
        raise ValueError(
            f"Cannot tween layouts with {len(start.insets)} and {len(end.insets)} insets"
        )

    return TransOpts(
        bounds=start.bounds.lerp(end.bounds, t),
        insets=tuple(a.lerp(b, t) for a, b in zip(start.insets, end.insets)),
        id=f"{start.id}-{end.id}",
        caption=f"{start.caption} -> {end.caption}",
        is_tween=True,
    )


def tween_frames(
    from_opts: TransOptsLike,
    to_opts: TransOptsLike,
    output_height: float,
    steps: int
) -> Iterator[TransOpts]:
    """Yield the layouts for t = 1/steps, 2/steps, ... 1."""
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")
    for i in range(1, steps + 1):
        yield tween_trans_opts(from_opts, to_opts, output_height, i / steps)
