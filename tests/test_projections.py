"""
Tests for the projection algorithms and the transform pipeline.
"""

import math

import pytest

from atlas_coords.config import D2R, HALF_PI
from atlas_coords.models import Point
from atlas_coords.projection import ProjectionKind, find_kind
from atlas_coords.projection.common import (
    adjust_lon,
    imlfn,
    iqsfnz,
    phi2z,
    pj_enfn,
    pj_inv_mlfn,
    pj_mlfn,
    vincenty_direct,
    vincenty_inverse,
)
from atlas_coords.transform import transform


# (definition, lon, lat) with the point near the projection's area of use
ROUND_TRIP_CASES = [
    ('+proj=merc +lon_0=0 +ellps=WGS84', 10.0, 45.0),
    ('+proj=merc +lon_0=0 +lat_ts=30 +ellps=WGS84', -40.0, -20.0),
    ('+proj=mill +R=6371000', -60.0, 30.0),
    ('+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996012717 +x_0=400000 +y_0=-100000 +ellps=airy',
     -3.2, 55.9),
    ('+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996012717 +x_0=400000 +y_0=-100000 +ellps=airy +approx',
     -3.2, 55.9),
    ('+proj=tmerc +lat_0=0 +lon_0=0 +R=6371000', 3.0, 40.0),
    ('+proj=utm +zone=30 +ellps=WGS84', -2.5, 53.0),
    ('+proj=utm +zone=56 +south +ellps=WGS84', 151.2, -33.9),
    ('+proj=lcc +lat_1=33 +lat_2=45 +lat_0=39 +lon_0=-96 +ellps=GRS80', -90.0, 40.0),
    ('+proj=lcc +lat_1=49.5 +lat_0=49.5 +lon_0=4.36666666 +k=1 +ellps=intl', 4.0, 50.8),
    ('+proj=aea +lat_1=29.5 +lat_2=45.5 +lat_0=37.5 +lon_0=-96 +ellps=GRS80', -100.0, 35.0),
    ('+proj=eqdc +lat_1=20 +lat_2=60 +lat_0=40 +lon_0=10 +ellps=WGS84', 15.0, 45.0),
    ('+proj=stere +lat_0=90 +lat_ts=70 +lon_0=-45 +k=1 +ellps=WGS84', -30.0, 75.0),
    ('+proj=stere +lat_0=-90 +lat_ts=-71 +lon_0=0 +k=1 +ellps=WGS84', 60.0, -75.0),
    ('+proj=sterea +lat_0=52.15616055555555 +lon_0=5.38763888888889 +k=0.9999079 '
     '+x_0=155000 +y_0=463000 +ellps=bessel', 4.9, 52.37),
    ('+proj=omerc +lat_0=57 +lonc=-133.6666666666667 +alpha=323.1301023611111 +k=0.9999 '
     '+x_0=5000000 +y_0=-5000000 +no_uoff +gamma=323.1301023611111 +ellps=GRS80', -133.0, 57.5),
    ('+proj=somerc +lat_0=46.95240555555556 +lon_0=7.439583333333333 +k_0=1 '
     '+x_0=600000 +y_0=200000 +ellps=bessel', 8.5, 47.4),
    ('+proj=krovak +ellps=bessel', 15.0, 50.0),
    ('+proj=cass +lat_0=10.44166666666667 +lon_0=-61.33333333333334 '
     '+x_0=86501.46392051999 +y_0=65379.0134283 +ellps=clrk66', -61.2, 10.6),
    ('+proj=laea +lat_0=52 +lon_0=10 +x_0=4321000 +y_0=3210000 +ellps=GRS80', 5.0, 50.0),
    ('+proj=aeqd +lat_0=40 +lon_0=-100 +R=6371000', -95.0, 42.0),
    ('+proj=gnom +lat_0=90 +lon_0=0 +R=6371000', 30.0, 70.0),
    ('+proj=ortho +lat_0=40 +lon_0=-100 +R=6371000', -90.0, 45.0),
    ('+proj=cea +lat_ts=30 +lon_0=0 +ellps=WGS84', 20.0, 10.0),
    ('+proj=eqc +lat_ts=0 +lon_0=0 +ellps=WGS84', 20.0, 10.0),
    ('+proj=sinu +lon_0=0 +R=6371000', 25.0, -15.0),
    ('+proj=moll +lon_0=0 +R=6371000', -70.0, 35.0),
    ('+proj=robin +lon_0=0 +R=6371000', 100.0, -25.0),
    ('+proj=eqearth +lon_0=0 +ellps=WGS84', 50.0, 40.0),
    ('+proj=vandg +lon_0=0 +R=6371000', 40.0, 30.0),
    ('+proj=poly +lat_0=0 +lon_0=-54 +ellps=intl', -50.0, -10.0),
    ('+proj=nzmg +lat_0=-41 +lon_0=173 +x_0=2510000 +y_0=6023150 +ellps=intl', 174.8, -41.3),
]


# =============================================================================
# REGISTRY
# =============================================================================

class TestProjectionRegistry:

    @pytest.mark.parametrize('name, kind', [
        ('tmerc', ProjectionKind.ETMERC),
        ('Transverse_Mercator', ProjectionKind.ETMERC),
        ('TMERC', ProjectionKind.ETMERC),
        ('utm', ProjectionKind.UTM),
        ('Lambert_Conformal_Conic_2SP', ProjectionKind.LCC),
        ('longlat', ProjectionKind.LONGLAT),
        ('Mercator_Auxiliary_Sphere', ProjectionKind.MERC),
    ])
    def test_find_kind(self, name, kind):
        assert find_kind(name) is kind

    def test_unknown_name(self):
        assert find_kind('nonesuch') is None
        assert find_kind('') is None

    def test_every_kind_has_names(self):
        for kind in ProjectionKind:
            assert kind.projection_class.names

    def test_bad_utm_zone(self, context):
        from atlas_coords.errors import DefinitionError
        with pytest.raises(DefinitionError):
            context.projection('+proj=utm +zone=61 +ellps=WGS84')


# =============================================================================
# KNOWN VALUES
# =============================================================================

class TestKnownValues:

    def test_ordnance_survey_worked_example(self, context):
        # Transverse Mercator worked example from the OS guide to coordinate systems
        out = context.transform(
            '+proj=longlat +ellps=airy',
            '+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996012717 +x_0=400000 '
            '+y_0=-100000 +ellps=airy +units=m',
            [1.71792158333, 52.65757030555],
        )
        assert out[0] == pytest.approx(651409.903, abs=0.01)
        assert out[1] == pytest.approx(313177.270, abs=0.01)

    def test_utm_central_meridian_on_equator(self, context):
        out = context.transform('WGS84', 'EPSG:32630', [-3.0, 0.0])
        assert out[0] == pytest.approx(500000.0, abs=1e-6)
        assert out[1] == pytest.approx(0.0, abs=1e-6)

    def test_web_mercator(self, context):
        out = context.transform('WGS84', 'EPSG:3857', [10.0, 45.0])
        assert out[0] == pytest.approx(1113194.9079327357, abs=1e-3)
        assert out[1] == pytest.approx(5621521.486192066, abs=1e-3)

    def test_web_mercator_aliases_agree(self, context):
        a = context.transform('WGS84', 'GOOGLE', [-1.0, 51.0])
        b = context.transform('WGS84', 'EPSG:900913', [-1.0, 51.0])
        assert a == b

    def test_gb_to_wgs84_near_greenwich(self, context):
        # OSGB36 is offset roughly 100 m west of WGS84 around Greenwich
        lon, lat = context.transform('EPSG:27700', 'WGS84', [538890.0, 177320.0])
        assert lon == pytest.approx(0.0, abs=0.01)
        assert lat == pytest.approx(51.4778, abs=0.01)

    def test_module_level_transform(self):
        out = transform('WGS84', 'EPSG:32630', [-3.0, 0.0])
        assert out[0] == pytest.approx(500000.0, abs=1e-6)


# =============================================================================
# ROUND TRIPS
# =============================================================================

class TestRoundTrip:

    @pytest.mark.parametrize('definition, lon, lat', ROUND_TRIP_CASES)
    def test_forward_then_inverse(self, context, definition, lon, lat):
        projected = context.transform('WGS84', definition, [lon, lat])
        assert math.isfinite(projected[0]) and math.isfinite(projected[1])
        back = context.transform(definition, 'WGS84', projected)
        assert back[0] == pytest.approx(lon, abs=1e-5)
        assert back[1] == pytest.approx(lat, abs=1e-5)

    def test_region_round_trip(self, context):
        wg = context.transform('gb', 'wg', [430000.0, 290000.0])
        gb = context.transform('wg', 'gb', wg)
        assert gb[0] == pytest.approx(430000.0, abs=0.01)
        assert gb[1] == pytest.approx(290000.0, abs=0.01)

    def test_irish_grid_round_trip(self, context):
        wg = context.transform('ir', 'wg', [315000.0, 234000.0])
        ir = context.transform('wg', 'ir', wg)
        assert ir[0] == pytest.approx(315000.0, abs=0.01)
        assert ir[1] == pytest.approx(234000.0, abs=0.01)


# =============================================================================
# COORDINATE SHAPES AND FAILURES
# =============================================================================

class TestCoordinateShapes:

    def test_point_stays_point(self, context):
        out = context.transform('WGS84', 'EPSG:3857', Point(0.0, 0.0, 12.5))
        assert isinstance(out, Point)
        assert out.z == 12.5

    def test_mapping_keeps_keys(self, context):
        out = context.transform('WGS84', 'EPSG:3857', {'x': 0.0, 'y': 0.0, 'label': 'origin'})
        assert out['label'] == 'origin'
        assert 'z' not in out
        assert out['x'] == pytest.approx(0.0, abs=1e-9)

    def test_tuple_keeps_extras(self, context):
        out = context.transform('WGS84', 'EPSG:3857', (0.0, 0.0, 5.0, 'm-value'))
        assert isinstance(out, tuple)
        assert out[2] == 5.0
        assert out[3] == 'm-value'

    def test_unprojectable_point_is_nan(self, context):
        out = context.transform('WGS84', 'EPSG:3857', [0.0, 90.0])
        assert math.isnan(out[0]) and math.isnan(out[1])

    def test_non_finite_input_is_nan(self, context):
        out = context.transform('WGS84', 'EPSG:27700', {'x': math.nan, 'y': 51.0})
        assert math.isnan(out['x']) and math.isnan(out['y'])

    def test_out_of_range_utm_inverse_is_nan(self, context):
        out = context.transform('EPSG:32630', 'WGS84', [1.0e9, 0.0])
        assert math.isnan(out[0]) and math.isnan(out[1])

    def test_unsupported_shape(self, context):
        with pytest.raises(ValueError):
            context.transform('WGS84', 'EPSG:3857', 'not a point')

    def test_short_sequence(self, context):
        with pytest.raises(ValueError):
            context.transform('WGS84', 'EPSG:3857', [1.0])

    def test_axis_order_enforced(self):
        from atlas_coords.config import CoordsConfig
        from atlas_coords.context import ProjectionContext
        ctx = ProjectionContext(CoordsConfig(enforce_axis=True))
        out = ctx.transform('+proj=longlat +ellps=WGS84 +axis=neu', 'WGS84', [51.0, -1.0])
        assert out[0] == pytest.approx(-1.0)
        assert out[1] == pytest.approx(51.0)

    def test_projection_cached(self, context):
        assert context.projection('EPSG:27700') is context.projection('EPSG:27700')


# =============================================================================
# ITERATION CAPS
# =============================================================================

class TestIterationCaps:

    def test_phi2z_nan(self):
        assert phi2z(0.08, math.nan) is None

    def test_pj_inv_mlfn_nan(self):
        es = 0.00669438
        assert pj_inv_mlfn(math.nan, es, pj_enfn(es)) is None

    def test_imlfn_nan(self):
        assert imlfn(math.nan, 0.99, 0.0025, 2.6e-6, 3.4e-9) is None

    def test_iqsfnz_nan(self):
        assert iqsfnz(0.08, math.nan) is None

    def test_lcc_inverse_nan(self, context):
        proj = context.projection('+proj=lcc +lat_1=33 +lat_2=45 +lat_0=39 +lon_0=-96 +ellps=GRS80')
        assert proj.inverse(Point(math.nan, math.nan)) is None

    def test_etmerc_inverse_out_of_range(self, context):
        proj = context.projection('+proj=tmerc +lat_0=0 +lon_0=0 +ellps=WGS84')
        assert proj.inverse(Point(1.0e9, 0.0)) is None

    def test_adjust_lon_wraps(self):
        assert adjust_lon(190 * D2R) == pytest.approx(-170 * D2R)
        assert adjust_lon(-190 * D2R) == pytest.approx(170 * D2R)
        assert adjust_lon(45 * D2R) == 45 * D2R

    def test_phi2z_stops_at_cap(self):
        # With unit eccentricity each step only halves the remaining change
        assert phi2z(1.0, 2.0) is None

    def test_pj_inv_mlfn_stops_at_cap(self):
        es = 0.00669438
        en = pj_enfn(es)
        assert pj_inv_mlfn(1.0, es, en, max_iter=1) is None
        arg = pj_mlfn(1.0, math.sin(1.0), math.cos(1.0), en)
        assert pj_inv_mlfn(arg, es, en) == pytest.approx(1.0, abs=1e-10)

    def test_adjust_lon_near_pi(self):
        assert adjust_lon(3.14159265359) < 0
        assert adjust_lon(3.14159265359) == pytest.approx(-math.pi, abs=1e-10)
        assert adjust_lon(math.pi) == math.pi
        assert adjust_lon(-math.pi) == pytest.approx(math.pi)


# =============================================================================
# AZIMUTHAL EQUIDISTANT
# =============================================================================

AEQD_SPHERE = '+proj=aeqd +lat_0=40 +lon_0=-100 +R=6371000'
AEQD_WGS84 = '+proj=aeqd +lat_0=40 +lon_0=-100 +ellps=WGS84'


class TestAzimuthalEquidistant:

    def test_sphere_antipode(self, context):
        proj = context.projection(AEQD_SPHERE)
        assert proj.forward(Point(80 * D2R, -40 * D2R)) is None
        out = context.transform('+proj=longlat +R=6371000', AEQD_SPHERE, [80.0, -40.0])
        assert math.isnan(out[0])
        assert math.isnan(out[1])

    def test_sphere_near_antipode_is_finite(self, context):
        proj = context.projection(AEQD_SPHERE)
        out = proj.forward(Point(79 * D2R, -40 * D2R))
        assert out is not None
        assert math.hypot(out.x, out.y) < math.pi * 6371000

    @pytest.mark.parametrize('lon, lat', [
        (-60.0, 10.0),
        (-100.0, -5.0),
        (-40.0, 60.0),
        (150.0, 20.0),
    ])
    def test_ellipsoid_round_trip_far_from_centre(self, context, lon, lat):
        xy = context.transform('WGS84', AEQD_WGS84, [lon, lat])
        assert math.hypot(*xy) > 4.0e6
        back = context.transform(AEQD_WGS84, 'WGS84', xy)
        assert back[0] == pytest.approx(lon, abs=1e-8)
        assert back[1] == pytest.approx(lat, abs=1e-8)

    def test_ellipsoid_distance_is_geodesic(self, context):
        # Due south along the central meridian the distance is the meridian arc
        proj = context.projection(AEQD_WGS84)
        out = proj.forward(Point(-100 * D2R, -HALF_PI))
        assert out.x == pytest.approx(0.0, abs=1e-3)
        assert out.y == pytest.approx(-14.43e6, rel=2e-3)

    def test_ellipsoid_antipode(self, context):
        proj = context.projection(AEQD_WGS84)
        assert proj.forward(Point(80 * D2R, -40 * D2R)) is None

    def test_ellipsoid_inverse_beyond_pole_to_pole(self, context):
        proj = context.projection(AEQD_WGS84)
        assert proj.inverse(Point(-1.0e7, 3.0e7)) is None
        out = context.transform(AEQD_WGS84, 'WGS84', [-1.0e7, 3.0e7])
        assert math.isnan(out[0])


class TestVincenty:

    def test_inverse_then_direct(self):
        a = 6378137.0
        f = 1 / 298.257223563
        lat1, lon1 = 40 * D2R, -100 * D2R
        azi, s = vincenty_inverse(lat1, lon1, 10 * D2R, -60 * D2R, a, f)
        assert 4.0e6 < s < 6.0e6
        lat2, lon2 = vincenty_direct(lat1, lon1, azi, s, a, f)
        assert lat2 == pytest.approx(10 * D2R, abs=1e-10)
        assert lon2 == pytest.approx(-60 * D2R, abs=1e-10)

    def test_inverse_same_point(self):
        assert vincenty_inverse(0.5, 0.5, 0.5, 0.5, 6378137.0, 1 / 298.257223563) == (0.0, 0.0)

    def test_inverse_antipodal_does_not_converge(self):
        assert vincenty_inverse(0.0, 0.0, 0.0, math.pi * 0.9999, 6378137.0, 1 / 298.257223563) is None


# =============================================================================
# INVERSE LATITUDE RANGE
# =============================================================================

class TestInverseLatitudeRange:

    @pytest.mark.parametrize('definition', [
        '+proj=cass +lat_0=50 +lon_0=0 +ellps=WGS84',
        '+proj=eqdc +lat_1=30 +lat_2=60 +ellps=WGS84',
        '+proj=eqdc +lat_1=30 +lat_2=60 +R=6371000',
    ])
    def test_far_outside_returns_none(self, context, definition):
        proj = context.projection(definition)
        assert proj.inverse(Point(1.0e12, 1.0e12)) is None

    @pytest.mark.parametrize('definition', [
        '+proj=cass +lat_0=50 +lon_0=0 +ellps=WGS84',
        '+proj=eqdc +lat_1=30 +lat_2=60 +ellps=WGS84',
        AEQD_WGS84,
    ])
    def test_transform_gives_nan(self, context, definition):
        out = context.transform(definition, 'WGS84', [1.0e12, 1.0e12])
        assert math.isnan(out[0])
        assert math.isnan(out[1])

    def test_inside_still_inverts(self, context):
        out = context.transform('+proj=cass +lat_0=50 +lon_0=0 +ellps=WGS84', 'WGS84', [10000.0, 20000.0])
        assert -90 <= out[1] <= 90
        assert out[1] == pytest.approx(50.18, abs=0.01)
