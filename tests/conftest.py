"""
Shared fixtures for the Atlas Coords test suite.
"""

from typing import Callable, Sequence, Tuple
import struct

import pytest

from atlas_coords.context import ProjectionContext


# =============================================================================
# NTv2 BUFFER BUILDER
# =============================================================================

def build_ntv2_buffer(
    s_lat: float = 180000.0,
    n_lat: float = 183600.0,
    e_long: float = 3600.0,
    w_long: float = 7200.0,
    lat_inc: float = 1800.0,
    long_inc: float = 1800.0,
    shifts: Sequence[Tuple[float, float]] = (),
    endian: str = '<',
    name: str = 'SUBGRID',
) -> bytes:
    """
    Build a one-subgrid NTv2 buffer.

    Extents are arc-seconds with longitudes positive west. shifts is a
    list of (lat shift, lon shift) per node in file order; when empty,
    node k gets (1 + 0.5k, 2 + 0.25k).
    """
    cols = int(round(1 + (w_long - e_long) / long_inc))
    rows = int(round(1 + (n_lat - s_lat) / lat_inc))
    count = cols * rows
    if not shifts:
        shifts = [(1 + 0.5 * k, 2 + 0.25 * k) for k in range(count)]

    buffer = bytearray(176 + 176 + count * 16)
    struct.pack_into(endian + 'i', buffer, 8, 11)
    struct.pack_into(endian + 'i', buffer, 24, 11)
    struct.pack_into(endian + 'i', buffer, 40, 1)
    buffer[56:64] = b'SECONDS '
    struct.pack_into(endian + 'd', buffer, 120, 6378206.4)
    struct.pack_into(endian + 'd', buffer, 136, 6356583.8)
    struct.pack_into(endian + 'd', buffer, 152, 6378137.0)
    struct.pack_into(endian + 'd', buffer, 168, 6356752.314)

    offset = 176
    buffer[offset + 8:offset + 16] = name.ljust(8)[:8].encode('ascii')
    buffer[offset + 24:offset + 32] = b'NONE    '
    for rel, value in ((72, s_lat), (88, n_lat), (104, e_long),
                       (120, w_long), (136, lat_inc), (152, long_inc)):
        struct.pack_into(endian + 'd', buffer, offset + rel, value)
    struct.pack_into(endian + 'i', buffer, offset + 168, count)

    offset += 176
    for lat_shift, lon_shift in shifts:
        struct.pack_into(endian + '4f', buffer, offset, lat_shift, lon_shift, 0.0, 0.0)
        offset += 16
    return bytes(buffer)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def context() -> ProjectionContext:
    """A fresh context, so registrations never leak between tests."""
    return ProjectionContext()


@pytest.fixture
def ntv2_buffer() -> Callable[..., bytes]:
    """The NTv2 buffer builder."""
    return build_ntv2_buffer


@pytest.fixture
def test_grid_context(context: ProjectionContext, ntv2_buffer) -> ProjectionContext:
    """Context with the default 3x3 test grid registered as "test"."""
    context.load_ntv2('test', ntv2_buffer())
    return context
