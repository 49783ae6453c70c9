"""
Tests for NTv2 loading and grid shifts.

The synthetic grid covers 50N..51N, 1W..2W at 0.5 degree spacing. Node
k (row-major from the south-east corner) shifts latitude by 1 + 0.5k
and longitude (positive west) by 2 + 0.25k arc-seconds, so the shift
field is linear and bilinear interpolation reproduces it exactly.
"""

import math

import pytest

from atlas_coords.config import CoordsConfig, D2R, SEC_TO_RAD
from atlas_coords.context import ProjectionContext
from atlas_coords.datum import GridRegistry, load_ntv2, parse_nadgrids
from atlas_coords.datum.ntv2 import apply_subgrid_shift, interpolate
from atlas_coords.errors import GridShiftError, NTv2FormatError

GRID_DEF = '+proj=longlat +ellps=clrk66 +nadgrids=test'


def expected_shift(lon, lat):
    """Shift in arc-seconds (lon positive west, lat) at a point inside the grid."""
    ix = (-lon - 1.0) / 0.5
    iy = (lat - 50.0) / 0.5
    k = iy * 3 + ix
    return 2 + 0.25 * k, 1 + 0.5 * k


# =============================================================================
# LOADING
# =============================================================================

class TestLoad:

    def test_header_and_subgrid(self, ntv2_buffer):
        grid = load_ntv2(ntv2_buffer(), 'test')
        assert grid.name == 'test'
        assert grid.header.n_fields == 11
        assert grid.header.n_subgrids == 1
        assert grid.header.shift_type == 'SECONDS'
        assert grid.header.to_semi_major_axis == 6378137.0

        subgrid = grid.subgrids[0]
        assert subgrid.name == 'SUBGRID'
        assert subgrid.lim == (3, 3)
        assert subgrid.count == 9
        assert subgrid.ll[0] == pytest.approx(3600 * SEC_TO_RAD)
        assert subgrid.ll[1] == pytest.approx(180000 * SEC_TO_RAD)
        assert subgrid.delta == pytest.approx((1800 * SEC_TO_RAD, 1800 * SEC_TO_RAD))

    def test_node_values_in_radians(self, ntv2_buffer):
        subgrid = load_ntv2(ntv2_buffer()).subgrids[0]
        assert subgrid.cvs[0] == pytest.approx((2 * SEC_TO_RAD, 1 * SEC_TO_RAD))
        assert subgrid.cvs[8] == pytest.approx((4 * SEC_TO_RAD, 5 * SEC_TO_RAD))

    def test_big_endian(self, ntv2_buffer):
        little = load_ntv2(ntv2_buffer(endian='<'))
        big = load_ntv2(ntv2_buffer(endian='>'))
        assert big.subgrids[0].cvs == little.subgrids[0].cvs
        assert big.subgrids[0].lim == little.subgrids[0].lim

    def test_truncated_buffer(self, ntv2_buffer):
        with pytest.raises(NTv2FormatError):
            load_ntv2(ntv2_buffer()[:200])

    def test_truncated_nodes(self, ntv2_buffer):
        with pytest.raises(NTv2FormatError):
            load_ntv2(ntv2_buffer()[:-20])

    def test_too_short(self):
        with pytest.raises(NTv2FormatError):
            load_ntv2(b'\x00' * 8)

    def test_registry(self, ntv2_buffer):
        registry = GridRegistry()
        grid = registry.load('test', ntv2_buffer())
        assert 'test' in registry
        assert registry.get('test') is grid
        assert list(registry) == ['test']
        assert len(registry) == 1
        assert registry.get('other') is None


class TestParseNadgrids:

    def test_optional_and_mandatory(self):
        refs = parse_nadgrids('@conus,alaska,@null')
        assert [r.name for r in refs] == ['conus', 'alaska', 'null']
        assert [r.mandatory for r in refs] == [False, True, False]
        assert refs[2].is_null

    def test_empty(self):
        assert parse_nadgrids(None) == ()
        assert parse_nadgrids('') == ()


# =============================================================================
# INTERPOLATION
# =============================================================================

class TestInterpolate:

    @pytest.fixture
    def subgrid(self, ntv2_buffer):
        return load_ntv2(ntv2_buffer()).subgrids[0]

    def test_south_east_corner(self, subgrid):
        shift = interpolate(0.0, 0.0, subgrid)
        assert shift == pytest.approx((2 * SEC_TO_RAD, 1 * SEC_TO_RAD))

    def test_north_west_corner(self, subgrid):
        shift = interpolate(2 * subgrid.delta[0], 2 * subgrid.delta[1], subgrid)
        assert shift == pytest.approx((4 * SEC_TO_RAD, 5 * SEC_TO_RAD))

    def test_cell_middle(self, subgrid):
        shift = interpolate(0.5 * subgrid.delta[0], 0.5 * subgrid.delta[1], subgrid)
        # Mean of nodes 0, 1, 3 and 4
        assert shift == pytest.approx((2.5 * SEC_TO_RAD, 2.0 * SEC_TO_RAD))

    def test_outside(self, subgrid):
        assert interpolate(-subgrid.delta[0], 0.0, subgrid) is None
        assert interpolate(0.0, 3 * subgrid.delta[1], subgrid) is None

    def test_covers(self, subgrid):
        assert subgrid.covers(1.5 * D2R, 50.5 * D2R)
        assert not subgrid.covers(3.0 * D2R, 50.5 * D2R)


# =============================================================================
# SHIFTS THROUGH THE TRANSFORM PIPELINE
# =============================================================================

class TestGridShift:

    def test_forward_at_node(self, test_grid_context):
        lon, lat = test_grid_context.transform(GRID_DEF, 'WGS84', [-1.5, 50.5])
        assert lon == pytest.approx(-1.5 - 3.0 / 3600, abs=1e-9)
        assert lat == pytest.approx(50.5 + 3.0 / 3600, abs=1e-9)

    def test_forward_between_nodes(self, test_grid_context):
        lon, lat = test_grid_context.transform(GRID_DEF, 'WGS84', [-1.2, 50.3])
        dlon, dlat = expected_shift(-1.2, 50.3)
        assert lon == pytest.approx(-1.2 - dlon / 3600, abs=1e-9)
        assert lat == pytest.approx(50.3 + dlat / 3600, abs=1e-9)

    def test_inverse_recovers_input(self, test_grid_context):
        shifted = test_grid_context.transform(GRID_DEF, 'WGS84', [-1.7, 50.8])
        lon, lat = test_grid_context.transform('WGS84', GRID_DEF, shifted)
        assert lon == pytest.approx(-1.7, abs=1e-8)
        assert lat == pytest.approx(50.8, abs=1e-8)

    def test_outside_coverage(self, test_grid_context):
        with pytest.raises(GridShiftError) as exc_info:
            test_grid_context.transform(GRID_DEF, 'WGS84', [10.0, 10.0])
        assert exc_info.value.attempted == ['test']
        assert exc_info.value.point == pytest.approx((10.0, 10.0))

    def test_missing_mandatory_grid(self, context):
        with pytest.raises(GridShiftError) as exc_info:
            context.transform('+proj=longlat +ellps=clrk66 +nadgrids=missing', 'WGS84', [-1.5, 50.5])
        assert exc_info.value.grid_name == 'missing'

    def test_optional_then_null_is_identity(self, context):
        lon, lat = context.transform(
            '+proj=longlat +ellps=clrk66 +nadgrids=@nope,@null', 'WGS84', [-1.5, 50.5])
        assert lon == pytest.approx(-1.5, abs=1e-9)
        assert lat == pytest.approx(50.5, abs=1e-9)

    def test_optional_grid_falls_through(self, test_grid_context):
        lon, lat = test_grid_context.transform(
            '+proj=longlat +ellps=clrk66 +nadgrids=@nope,@test', 'WGS84', [-1.5, 50.5])
        assert lon == pytest.approx(-1.5 - 3.0 / 3600, abs=1e-9)

    def test_grid_registered_after_projection_is_used(self, context, ntv2_buffer):
        context.projection(GRID_DEF)
        context.load_ntv2('test', ntv2_buffer())
        lon, _ = context.transform(GRID_DEF, 'WGS84', [-1.5, 50.5])
        assert lon == pytest.approx(-1.5 - 3.0 / 3600, abs=1e-9)


class TestInverseConvergence:

    @pytest.fixture
    def subgrid(self, ntv2_buffer):
        return load_ntv2(ntv2_buffer()).subgrids[0]

    def test_non_converging_falls_back(self, subgrid):
        x, y = 1.5 * D2R, 50.5 * D2R
        out = apply_subgrid_shift(x, y, True, subgrid, max_iter=1, tolerance=1e-30)
        assert out is not None
        # First approximation: subtract the shift sampled at the input
        assert out[0] == pytest.approx(x - 3 * SEC_TO_RAD, abs=1e-12)
        assert out[1] == pytest.approx(y - 3 * SEC_TO_RAD, abs=1e-12)

    def test_strict_raises(self, subgrid):
        with pytest.raises(GridShiftError):
            apply_subgrid_shift(1.5 * D2R, 50.5 * D2R, True, subgrid,
                                max_iter=1, tolerance=1e-30, strict=True)

    def test_strict_config_reaches_pipeline(self, ntv2_buffer):
        config = CoordsConfig(ntv2_inverse_max_iter=1, ntv2_inverse_tolerance=1e-30,
                              strict_ntv2_inverse=True)
        ctx = ProjectionContext(config)
        ctx.load_ntv2('test', ntv2_buffer())
        with pytest.raises(GridShiftError):
            ctx.transform('WGS84', GRID_DEF, [-1.5, 50.5])

    def test_nan_input(self, subgrid):
        assert apply_subgrid_shift(math.nan, 0.9, False, subgrid) is None
