"""
NTv2 grid shift files.

Loads the binary .gsb layout into immutable NTv2Grid values, keeps a
registry of loaded grids, and applies forward and inverse shifts by
bilinear interpolation.

Binary layout (all offsets in bytes):
    0..175      overview header: 11 records of 16 bytes
                (int32 field count at 8, subgrid count at 40,
                shift type at 56, ellipsoid axes at 120..175)
    per subgrid 176-byte header (name at +8, parent at +24,
                float64 S_LAT +72, N_LAT +88, E_LONG +104,
                W_LONG +120, LAT_INC +136, LONG_INC +152,
                int32 node count +168), then count x 16-byte nodes
                (float32 lat shift, lon shift, lat acc, lon acc)

Angles are arc-seconds in the file, longitudes positive WEST. Grids
are stored here in radians, still positive west.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import logging
import math
import struct
import threading

from ..config import (
    NTV2_COVERAGE_EPSILON_DIVISOR,
    NTV2_INVERSE_MAX_ITER,
    NTV2_INVERSE_TOLERANCE,
    R2D,
    SEC_TO_RAD,
)
from ..errors import GridShiftError, NTv2FormatError
from ..models.datum import GridRef
from ..projection.common import adjust_lon

logger = logging.getLogger(__name__)

HEADER_SIZE = 176
NODE_SIZE = 16
FIELD_COUNT = 11


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class NTv2Header:
    """Overview header of an NTv2 file."""
    n_fields: int
    n_subgrid_fields: int
    n_subgrids: int
    shift_type: str
    from_semi_major_axis: float
    from_semi_minor_axis: float
    to_semi_major_axis: float
    to_semi_minor_axis: float


@dataclass(frozen=True, slots=True)
class NTv2Subgrid:
    """
    One rectangular subgrid.

    Attributes:
        name, parent: Subgrid identifiers from the file
        ll: Lower-left corner (lon positive west, lat) in radians
        delta: Node spacing (lon, lat) in radians
        lim: Node counts (columns, rows)
        count: Total node count
        cvs: Per-node (lon shift, lat shift) in radians, row-major
             from the south-east corner
    """
    name: str
    parent: str
    ll: Tuple[float, float]
    delta: Tuple[float, float]
    lim: Tuple[int, int]
    count: int
    cvs: Tuple[Tuple[float, float], ...]

    def covers(self, x: float, y: float) -> bool:
        """True if (x positive west, y) lies inside, with a small buffer."""
        epsilon = (abs(self.delta[1]) + abs(self.delta[0])) / NTV2_COVERAGE_EPSILON_DIVISOR
        min_x = self.ll[0] - epsilon
        min_y = self.ll[1] - epsilon
        max_x = self.ll[0] + (self.lim[0] - 1) * self.delta[0] + epsilon
        max_y = self.ll[1] + (self.lim[1] - 1) * self.delta[1] + epsilon
        return min_x <= x <= max_x and min_y <= y <= max_y


@dataclass(frozen=True, slots=True)
class NTv2Grid:
    """A loaded NTv2 file."""
    name: str
    header: NTv2Header
    subgrids: Tuple[NTv2Subgrid, ...]


# =============================================================================
# LOADING
# =============================================================================

def _is_little_endian(buffer: bytes) -> bool:
    if len(buffer) < 12:
        raise NTv2FormatError(f"NTv2 buffer too short for a header ({len(buffer)} bytes)")
    if struct.unpack_from('>i', buffer, 8)[0] == FIELD_COUNT:
        return False
    if struct.unpack_from('<i', buffer, 8)[0] != FIELD_COUNT:
        logger.warning("NTv2 field count is not 11 in either byte order; assuming little-endian")
    return True


def _text(buffer: bytes, start: int, end: int) -> str:
    return buffer[start:end].decode('ascii', errors='replace').strip().rstrip('\x00').strip()


def _read_header(buffer: bytes, e: str) -> NTv2Header:
    return NTv2Header(
        n_fields=struct.unpack_from(e + 'i', buffer, 8)[0],
        n_subgrid_fields=struct.unpack_from(e + 'i', buffer, 24)[0],
        n_subgrids=struct.unpack_from(e + 'i', buffer, 40)[0],
        shift_type=_text(buffer, 56, 64),
        from_semi_major_axis=struct.unpack_from(e + 'd', buffer, 120)[0],
        from_semi_minor_axis=struct.unpack_from(e + 'd', buffer, 136)[0],
        to_semi_major_axis=struct.unpack_from(e + 'd', buffer, 152)[0],
        to_semi_minor_axis=struct.unpack_from(e + 'd', buffer, 168)[0],
    )


def _read_subgrid(buffer: bytes, offset: int, e: str) -> Tuple[NTv2Subgrid, int]:
    lower_lat, = struct.unpack_from(e + 'd', buffer, offset + 72)
    upper_lat, = struct.unpack_from(e + 'd', buffer, offset + 88)
    lower_lon, = struct.unpack_from(e + 'd', buffer, offset + 104)
    upper_lon, = struct.unpack_from(e + 'd', buffer, offset + 120)
    lat_inc, = struct.unpack_from(e + 'd', buffer, offset + 136)
    lon_inc, = struct.unpack_from(e + 'd', buffer, offset + 152)
    count, = struct.unpack_from(e + 'i', buffer, offset + 168)

    if lat_inc <= 0 or lon_inc <= 0 or count < 0:
        raise NTv2FormatError(f"Invalid subgrid header at byte {offset}")

    lim = (
        int(round(1 + (upper_lon - lower_lon) / lon_inc)),
        int(round(1 + (upper_lat - lower_lat) / lat_inc)),
    )
    if lim[0] * lim[1] != count:
        logger.warning(
            f"NTv2 subgrid at byte {offset}: {lim[0]}x{lim[1]} nodes expected, header says {count}"
        )

    nodes_offset = offset + HEADER_SIZE
    cvs: List[Tuple[float, float]] = []
    for lat_shift, lon_shift, _lat_acc, _lon_acc in struct.iter_unpack(
        e + '4f', buffer[nodes_offset:nodes_offset + count * NODE_SIZE]
    ):
        cvs.append((lon_shift * SEC_TO_RAD, lat_shift * SEC_TO_RAD))
    if len(cvs) != count:
        raise NTv2FormatError(f"NTv2 subgrid at byte {offset} is truncated")

    subgrid = NTv2Subgrid(
        name=_text(buffer, offset + 8, offset + 16),
        parent=_text(buffer, offset + 24, offset + 32),
        ll=(lower_lon * SEC_TO_RAD, lower_lat * SEC_TO_RAD),
        delta=(lon_inc * SEC_TO_RAD, lat_inc * SEC_TO_RAD),
        lim=lim,
        count=count,
        cvs=tuple(cvs),
    )
    return subgrid, offset + HEADER_SIZE + count * NODE_SIZE


def load_ntv2(buffer: bytes, name: str = "") -> NTv2Grid:
    """
    Parse an NTv2 binary buffer.

    Args:
        buffer: Complete file contents
        name: Name to record on the grid

    Returns:
        The loaded grid

    Raises:
        NTv2FormatError: If the buffer is truncated or malformed
    """
    buffer = bytes(buffer)
    e = '<' if _is_little_endian(buffer) else '>'
    try:
        header = _read_header(buffer, e)
        if header.n_subgrids < 1:
            raise NTv2FormatError(f"NTv2 buffer declares {header.n_subgrids} subgrids")

        subgrids = []
        offset = HEADER_SIZE
        for _ in range(header.n_subgrids):
            subgrid, offset = _read_subgrid(buffer, offset, e)
            subgrids.append(subgrid)
    except struct.error as exc:
        raise NTv2FormatError(f"NTv2 buffer is truncated: {exc}") from exc

    if header.shift_type.upper() not in ('SECONDS', ''):
        logger.warning(f"NTv2 shift type {header.shift_type!r}; values read as seconds")

    return NTv2Grid(name=name, header=header, subgrids=tuple(subgrids))


# =============================================================================
# REGISTRY
# =============================================================================

class GridRegistry:
    """
    Loaded grids by name.

    Registration replaces any grid of the same name; reads need no
    lock since grids are immutable.
    """

    def __init__(self):
        self._grids: Dict[str, NTv2Grid] = {}
        self._lock = threading.Lock()

    def register(self, name: str, grid: NTv2Grid) -> NTv2Grid:
        with self._lock:
            self._grids[name] = grid
        logger.info(f"Registered NTv2 grid {name!r} with {len(grid.subgrids)} subgrid(s)")
        return grid

    def load(self, name: str, buffer: bytes) -> NTv2Grid:
        """Parse a buffer and register the result under name."""
        return self.register(name, load_ntv2(buffer, name))

    def get(self, name: str) -> Optional[NTv2Grid]:
        return self._grids.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._grids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._grids))

    def __len__(self) -> int:
        return len(self._grids)


def parse_nadgrids(value: Optional[str]) -> Tuple[GridRef, ...]:
    """
    Parse a "+nadgrids" list.

    "@name" marks an optional grid, a bare name a mandatory one, and
    "@null" the identity grid.
    """
    if not value:
        return ()
    refs = []
    for item in str(value).split(','):
        item = item.strip()
        if not item:
            continue
        optional = item.startswith('@')
        name = item[1:] if optional else item
        refs.append(GridRef(name=name, mandatory=not optional, is_null=(name == 'null')))
    return tuple(refs)


# =============================================================================
# INTERPOLATION
# =============================================================================

def interpolate(x: float, y: float, subgrid: NTv2Subgrid) -> Optional[Tuple[float, float]]:
    """
    Bilinear interpolation of the shift at an offset from the subgrid origin.

    Args:
        x, y: Offset from subgrid.ll in radians (x positive west)
        subgrid: Grid to sample

    Returns:
        (lon shift, lat shift) in radians, or None outside the grid
    """
    tx = x / subgrid.delta[0]
    ty = y / subgrid.delta[1]
    ix = int(math.floor(tx))
    iy = int(math.floor(ty))
    lim0, lim1 = subgrid.lim

    if ix < 0 or ix >= lim0 or iy < 0 or iy >= lim1:
        return None
    # Points on the last row or column interpolate from the cell below
    if ix == lim0 - 1 and lim0 > 1:
        ix -= 1
    if iy == lim1 - 1 and lim1 > 1:
        iy -= 1
    fx = tx - ix
    fy = ty - iy

    cvs = subgrid.cvs
    inx = iy * lim0 + ix
    f00 = cvs[inx]
    f10 = cvs[inx + 1] if lim0 > 1 else f00
    f01 = cvs[inx + lim0] if lim1 > 1 else f00
    f11 = cvs[inx + lim0 + 1] if lim0 > 1 and lim1 > 1 else f00

    m00 = (1.0 - fx) * (1.0 - fy)
    m10 = fx * (1.0 - fy)
    m01 = (1.0 - fx) * fy
    m11 = fx * fy
    return (
        m00 * f00[0] + m10 * f10[0] + m01 * f01[0] + m11 * f11[0],
        m00 * f00[1] + m10 * f10[1] + m01 * f01[1] + m11 * f11[1],
    )


def apply_subgrid_shift(
    x: float,
    y: float,
    inverse: bool,
    subgrid: NTv2Subgrid,
    max_iter: int = NTV2_INVERSE_MAX_ITER,
    tolerance: float = NTV2_INVERSE_TOLERANCE,
    strict: bool = False
) -> Optional[Tuple[float, float]]:
    """
    Shift one point (x positive west, y latitude; radians) by a subgrid.

    The inverse refines iteratively; if it has not converged within
    max_iter steps the first approximation is returned, unless strict
    is set, in which case GridShiftError is raised.

    Returns:
        Shifted (x, y), or None if the subgrid does not cover the point
    """
    if math.isnan(x):
        return None

    tbx = x - subgrid.ll[0]
    tby = y - subgrid.ll[1]
    tbx = adjust_lon(tbx - math.pi) + math.pi

    shift = interpolate(tbx, tby, subgrid)
    if shift is None:
        return None

    if not inverse:
        return x + shift[0], y + shift[1]

    tx = tbx - shift[0]
    ty = tby - shift[1]
    first = (tx, ty)
    converged = False
    for _ in range(max_iter):
        delta = interpolate(tx, ty, subgrid)
        if delta is None:
            logger.warning(
                "Inverse grid shift iteration left the grid; using first approximation"
            )
            tx, ty = first
            converged = True
            break
        dif_x = tbx - (delta[0] + tx)
        dif_y = tby - (delta[1] + ty)
        tx += dif_x
        ty += dif_y
        if abs(dif_x) <= tolerance and abs(dif_y) <= tolerance:
            converged = True
            break

    if not converged:
        if strict:
            raise GridShiftError(
                f"Inverse grid shift did not converge in {max_iter} iterations",
                attempted=[subgrid.name],
                point=(-x * R2D, y * R2D),
            )
        logger.warning(
            f"Inverse grid shift did not converge in {max_iter} iterations; "
            f"using first approximation"
        )
        tx, ty = first

    return adjust_lon(tx + subgrid.ll[0]), ty + subgrid.ll[1]


def apply_grid_shift(
    grids: Sequence[GridRef],
    registry: GridRegistry,
    inverse: bool,
    lon: float,
    lat: float,
    max_iter: int = NTV2_INVERSE_MAX_ITER,
    tolerance: float = NTV2_INVERSE_TOLERANCE,
    strict: bool = False
) -> Tuple[float, float]:
    """
    Apply the first grid in the list that covers the point.

    Args:
        grids: Grid references in priority order
        registry: Loaded grids
        inverse: Shift from the target datum back to the source
        lon, lat: Point in radians (longitude positive east)

    Returns:
        Shifted (lon, lat) in radians

    Raises:
        GridShiftError: A mandatory grid is not loaded, or no grid
            covers the point
    """
    if not grids:
        raise GridShiftError("Grid shift datum has no grids")

    x = -lon
    y = lat
    attempted: List[str] = []

    for ref in grids:
        attempted.append(ref.name)
        if ref.is_null:
            return lon, lat

        grid = registry.get(ref.name)
        if grid is None:
            if ref.mandatory:
                raise GridShiftError(
                    f"Unable to find mandatory grid {ref.name!r}",
                    grid_name=ref.name,
                    attempted=attempted,
                )
            logger.debug(f"Optional grid {ref.name!r} not loaded; skipping")
            continue

        for subgrid in grid.subgrids:
            if not subgrid.covers(x, y):
                continue
            out = apply_subgrid_shift(x, y, inverse, subgrid, max_iter, tolerance, strict)
            if out is not None:
                return -out[0], out[1]

    raise GridShiftError(
        f"Point {lon * R2D:.8f} {lat * R2D:.8f} is not covered by any grid "
        f"(tried: {', '.join(attempted)})",
        attempted=attempted,
        point=(lon * R2D, lat * R2D),
    )
