"""
Tests for national grid references.
"""

import pytest

from atlas_coords.errors import GridReferenceError
from atlas_coords.grids import (
    SHAPES,
    centroid_of,
    check_grid_reference,
    grid_reference_to_polygon,
    parse_grid_reference,
)


# =============================================================================
# PRECISION LADDER
# =============================================================================

class TestCheckGridReference:

    @pytest.mark.parametrize('text, precision', [
        ('SO', 100000),
        ('SO12', 10000),
        ('SO12NE', 5000),
        ('SO12A', 2000),
        ('SO1234', 1000),
        ('SO123456', 100),
        ('SO12345678', 10),
        ('SO1234567890', 1),
    ])
    def test_precision(self, text, precision):
        info = check_grid_reference(text)
        assert info.precision == precision
        assert info.region == 'gb'
        assert info.prefix == 'SO'

    @pytest.mark.parametrize('text, region, prefix', [
        ('HU4011', 'gb', 'HU'),
        ('TV59', 'gb', 'TV'),
        ('J3474', 'ir', 'J'),
        ('O13', 'ir', 'O'),
        ('WV55', 'ci', 'WV'),
        ('WA5707', 'ci', 'WA'),
    ])
    def test_region(self, text, region, prefix):
        info = check_grid_reference(text)
        assert info.region == region
        assert info.prefix == prefix

    def test_case_and_spaces_ignored(self):
        assert check_grid_reference('so 12 34') == check_grid_reference('SO1234')

    @pytest.mark.parametrize('text', [
        'ZZ99',        # unknown prefix
        'I12',         # no I square on the Irish Grid
        'SO12O',       # tetrads skip O
        'SO123',       # odd digit count
        'SO12NX',
        '12SO',
        '',
    ])
    def test_invalid(self, text):
        with pytest.raises(GridReferenceError):
            check_grid_reference(text)

    def test_not_a_string(self):
        with pytest.raises(GridReferenceError):
            check_grid_reference(None)


# =============================================================================
# SQUARES
# =============================================================================

class TestParseGridReference:

    @pytest.mark.parametrize('text, x, y', [
        ('SO', 300000, 200000),
        ('SO12', 310000, 220000),
        ('SO12NE', 315000, 225000),
        ('SO12SW', 310000, 220000),
        ('SO12A', 310000, 220000),
        ('SO12B', 310000, 222000),
        ('SO12F', 312000, 220000),
        ('SO12Z', 318000, 228000),
        ('SO1234', 313000, 224000),
        ('SO123456', 312300, 245600),
        ('TV', 500000, 0),
        ('HU', 400000, 1100000),
        ('NG', 100000, 800000),
        ('J', 300000, 300000),
        ('O', 300000, 200000),
        ('WV', 500000, 5400000),
    ])
    def test_south_west_corner(self, text, x, y):
        gr = parse_grid_reference(text)
        assert (gr.x, gr.y) == (x, y)

    def test_centroid_own_region(self):
        c = centroid_of('SO12')
        assert c.proj == 'gb'
        assert c.centroid == (315000.0, 225000.0)

    def test_centroid_same_region_is_untouched(self):
        c = centroid_of('SO12NE', 'gb')
        assert c.centroid == (317500.0, 227500.0)

    def test_centroid_in_lon_lat(self, context):
        c = centroid_of('SO12', 'wg', context=context)
        assert c.proj == 'wg'
        lon, lat = c.centroid
        assert -3.5 < lon < -3.0
        assert 51.7 < lat < 52.1
        back = context.transform('wg', 'gb', [lon, lat])
        assert back[0] == pytest.approx(315000.0, abs=0.01)
        assert back[1] == pytest.approx(225000.0, abs=0.01)

    def test_irish_centroid_to_gb(self, context):
        c = centroid_of('J37', 'gb', context=context)
        # Belfast lies near E 147000 N 528000 on the British grid
        assert 100000 < c.centroid[0] < 200000
        assert 500000 < c.centroid[1] < 600000

    def test_unknown_region(self):
        with pytest.raises(ValueError):
            centroid_of('SO12', 'xx')


# =============================================================================
# POLYGONS
# =============================================================================

class TestPolygon:

    def test_square_ring(self):
        poly = grid_reference_to_polygon('SO12')
        assert poly['type'] == 'Polygon'
        ring = poly['coordinates'][0]
        assert len(ring) == 5
        assert ring[0] == ring[-1]
        assert ring[0] == [310000.0, 220000.0]
        assert ring[2] == [320000.0, 230000.0]

    def test_scale(self):
        ring = grid_reference_to_polygon('SO12', scale=0.5)['coordinates'][0]
        assert ring[0] == [312500.0, 222500.0]

    @pytest.mark.parametrize('shape, vertices', [
        ('square', 4),
        ('circle', 24),
        ('triangle-up', 3),
        ('triangle-down', 3),
        ('diamond', 4),
        ('cross', 12),
    ])
    def test_shapes_are_closed(self, shape, vertices):
        ring = grid_reference_to_polygon('SO12', shape=shape)['coordinates'][0]
        assert len(ring) == vertices + 1
        assert ring[0] == ring[-1]

    def test_all_shapes_listed(self):
        assert set(SHAPES) == {'square', 'circle', 'triangle-up', 'triangle-down',
                               'diamond', 'cross'}

    def test_unknown_shape(self):
        with pytest.raises(ValueError):
            grid_reference_to_polygon('SO12', shape='hexagon')

    def test_reprojected_vertices(self, context):
        ring = grid_reference_to_polygon('SO12', 'wg', context=context)['coordinates'][0]
        assert len(ring) == 5
        for lon, lat in ring:
            assert -3.5 < lon < -2.9
            assert 51.7 < lat < 52.1
