"""
Tests for definition parsing: compact strings, WKT and named lookups.
"""

import math

import pytest

from atlas_coords.config import D2R
from atlas_coords.context import ProjectionContext
from atlas_coords.defs import NAMED_DEFINITIONS
from atlas_coords.errors import DefinitionError, WktParseError
from atlas_coords.models import DatumDefinition, DatumType, Ellipsoid
from atlas_coords.parsing import (
    parse_definition,
    parse_proj_string,
    parse_to_mapping,
    scan_wkt,
    tokenize,
)


OSGB_WKT = (
    'PROJCS["OSGB 1936 / British National Grid",'
    'GEOGCS["OSGB 1936",DATUM["OSGB_1936",'
    'SPHEROID["Airy 1830",6377563.396,299.3249646,AUTHORITY["EPSG","7001"]],'
    'TOWGS84[446.448,-125.157,542.06,0.15,0.247,0.842,-20.489],'
    'AUTHORITY["EPSG","6277"]],'
    'PRIMEM["Greenwich",0,AUTHORITY["EPSG","8901"]],'
    'UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],'
    'AUTHORITY["EPSG","4277"]],'
    'PROJECTION["Transverse_Mercator"],'
    'PARAMETER["latitude_of_origin",49],'
    'PARAMETER["central_meridian",-2],'
    'PARAMETER["scale_factor",0.9996012717],'
    'PARAMETER["false_easting",400000],'
    'PARAMETER["false_northing",-100000],'
    'UNIT["metre",1,AUTHORITY["EPSG","9001"]],'
    'AXIS["Easting",EAST],AXIS["Northing",NORTH],'
    'AUTHORITY["EPSG","27700"]]'
)


# =============================================================================
# COMPACT STRINGS
# =============================================================================

class TestProjString:

    def test_tokenize_flags_and_values(self):
        tokens = tokenize('+proj=utm +zone=30 +south +no_defs')
        assert tokens == {'proj': 'utm', 'zone': '30', 'south': True, 'no_defs': True}

    def test_token_order_does_not_matter(self):
        a = parse_proj_string('+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996 +ellps=airy')
        b = parse_proj_string('+ellps=airy +k=0.9996 +lon_0=-2 +lat_0=49 +proj=tmerc')
        assert a == b

    def test_angles_are_radians(self):
        out = parse_proj_string('+proj=lcc +lat_1=33 +lat_2=45 +lat_0=39 +lon_0=-96')
        assert out['projName'] == 'lcc'
        assert out['lat1'] == pytest.approx(33 * D2R)
        assert out['lat2'] == pytest.approx(45 * D2R)
        assert out['long0'] == pytest.approx(-96 * D2R)

    def test_towgs84_list(self):
        out = parse_proj_string('+proj=longlat +towgs84=446.448,-125.157,542.06')
        assert out['datum_params'] == [446.448, -125.157, 542.06]

    def test_units_sets_to_meter(self):
        out = parse_proj_string('+proj=tmerc +units=us-ft')
        assert out['units'] == 'us-ft'
        assert out['to_meter'] == pytest.approx(1200.0 / 3937.0)

    def test_null_grid_means_no_datum(self):
        out = parse_proj_string('+proj=merc +nadgrids=@null')
        assert out['datumCode'] == 'none'

    def test_nadgrids_kept(self):
        out = parse_proj_string('+proj=longlat +nadgrids=@conus,@alaska')
        assert out['nadgrids'] == '@conus,@alaska'

    def test_axis_validated(self):
        assert parse_proj_string('+proj=longlat +axis=neu')['axis'] == 'neu'
        assert 'axis' not in parse_proj_string('+proj=longlat +axis=eeu')

    def test_radius_sets_both_axes(self):
        out = parse_proj_string('+proj=sinu +R=6371000')
        assert out['a'] == out['b'] == 6371000.0

    def test_datum_code_lowercased_except_wgs84(self):
        assert parse_proj_string('+proj=longlat +datum=NAD27')['datumCode'] == 'nad27'
        assert parse_proj_string('+proj=longlat +datum=WGS84')['datumCode'] == 'WGS84'

    def test_named_prime_meridian(self):
        out = parse_proj_string('+proj=longlat +pm=paris')
        assert out['from_greenwich'] == pytest.approx(2.337229166666667 * D2R)

    def test_missing_proj_rejected(self):
        with pytest.raises(DefinitionError):
            parse_proj_string('+ellps=airy +k=1')

    def test_bad_number_rejected(self):
        with pytest.raises(DefinitionError):
            parse_proj_string('+proj=tmerc +lat_0=north')


# =============================================================================
# WKT
# =============================================================================

class TestWkt:

    def test_scan_nested_lists(self):
        tree = scan_wkt('GEOGCS["WGS 84",DATUM["WGS_1984",SPHEROID["WGS 84",6378137,298.257223563]]]')
        assert tree[0] == 'GEOGCS'
        assert tree[1] == 'WGS 84'
        assert tree[2][0] == 'DATUM'
        assert tree[2][2] == ['SPHEROID', 'WGS 84', 6378137.0, 298.257223563]

    def test_osgb_wkt_normalized(self):
        out = parse_to_mapping(OSGB_WKT)
        assert out['projName'] == 'Transverse_Mercator'
        assert out['datumCode'] == 'osgb36'
        assert out['a'] == pytest.approx(6377563.396)
        assert out['rf'] == pytest.approx(299.3249646)
        assert out['lat0'] == pytest.approx(49 * D2R)
        assert out['long0'] == pytest.approx(-2 * D2R)
        assert out['k0'] == pytest.approx(0.9996012717)
        assert out['x0'] == pytest.approx(400000)
        assert out['y0'] == pytest.approx(-100000)
        assert out['units'] == 'meter'
        assert out['axis'] == 'enu'
        assert out['datum_params'][:3] == [446.448, -125.157, 542.06]

    def test_wkt_matches_compact_definition(self, context):
        from_wkt = context.projection(OSGB_WKT)
        from_string = context.projection('EPSG:27700')
        p1 = context.transform('WGS84', from_wkt, [-1.5, 52.5])
        p2 = context.transform('WGS84', from_string, [-1.5, 52.5])
        assert p1[0] == pytest.approx(p2[0], abs=1e-3)
        assert p1[1] == pytest.approx(p2[1], abs=1e-3)

    def test_escaped_quote(self):
        tree = scan_wkt('LOCAL_CS["say ""hi""",UNIT["metre",1]]')
        assert tree[1] == 'say "hi"'

    def test_unexpected_character(self):
        with pytest.raises(WktParseError) as exc_info:
            scan_wkt('GEOGCS["x"]]')
        assert exc_info.value.char == ']'

    def test_text_after_close_rejected(self):
        with pytest.raises(WktParseError):
            scan_wkt('GEOGCS["x",UNIT["degree",1]] extra')


# =============================================================================
# DISPATCH
# =============================================================================

class TestDispatch:

    def test_named_lookup_case_insensitive(self):
        a = parse_to_mapping('epsg:27700', NAMED_DEFINITIONS)
        b = parse_to_mapping('EPSG:27700', NAMED_DEFINITIONS)
        assert a == b

    def test_case_insensitive_cycle(self):
        named = {'A:1': 'a:2', 'A:2': 'a:1'}
        with pytest.raises(DefinitionError, match='refers to itself'):
            parse_to_mapping('A:1', named)

    def test_define_rejects_cycle(self, context):
        context.define('LOOP:A', '+proj=merc +lon_0=0 +ellps=WGS84')
        context.define('LOOP:B', 'loop:a')
        with pytest.raises(DefinitionError):
            context.define('LOOP:A', 'loop:b')
        assert context.get_definition('LOOP:A') == '+proj=merc +lon_0=0 +ellps=WGS84'

    def test_laea_europe(self, context):
        assert parse_to_mapping('EPSG:3035', NAMED_DEFINITIONS)['projName'] == 'laea'
        out = context.transform('EPSG:4326', 'EPSG:3035', [10.0, 52.0])
        assert out[0] == pytest.approx(4321000.0, abs=1e-2)
        assert out[1] == pytest.approx(3210000.0, abs=1e-2)

    def test_parse_definition_fields(self):
        params = parse_definition('+proj=utm +zone=33 +south +ellps=intl')
        assert params.proj_name == 'utm'
        assert params.zone == 33
        assert params.utm_south is True
        assert params.ellps == 'intl'

    @pytest.mark.parametrize('text', ['', '   ', 'not a definition', 'EPSG:99999'])
    def test_invalid_definitions(self, text):
        with pytest.raises(DefinitionError):
            parse_to_mapping(text, NAMED_DEFINITIONS)

    def test_unknown_projection_name(self, context):
        with pytest.raises(DefinitionError, match='Unknown projection'):
            context.projection('+proj=nonesuch +ellps=WGS84')

    def test_define_and_use(self, context):
        context.define('MY:1', '+proj=merc +lon_0=0 +ellps=WGS84')
        assert context.get_definition('MY:1') == '+proj=merc +lon_0=0 +ellps=WGS84'
        out = context.transform('WGS84', 'MY:1', [0.0, 0.0])
        assert out[0] == pytest.approx(0.0, abs=1e-9)
        assert out[1] == pytest.approx(0.0, abs=1e-9)

    def test_define_rejects_bad_text(self, context):
        with pytest.raises(DefinitionError):
            context.define('BAD', 'nonsense')
        assert context.get_definition('BAD') is None

    def test_resolved_defaults(self, context):
        params = context.params('+proj=lcc +lat_0=45 +lon_0=0 +ellps=GRS80')
        assert params.k0 == 1.0
        assert params.axis == 'enu'
        assert params.lat1 == pytest.approx(45 * D2R)
        assert params.es == pytest.approx(0.00669438002290, rel=1e-9)
        assert math.isclose(params.a, 6378137.0)


class TestContextRegistries:

    def test_added_ellipsoid_is_used(self, context):
        context.add_ellipsoid(Ellipsoid('round', 1000000.0, rf=100.0))
        params = context.params('+proj=longlat +ellps=round')
        assert params.a == 1000000.0
        assert params.b == pytest.approx(990000.0)

    def test_added_datum_is_used(self, context):
        context.add_datum(DatumDefinition('local', 'airy', (1.0, 2.0, 3.0)))
        params = context.params('+proj=longlat +datum=local')
        assert params.datum.datum_type is DatumType.PARAM_3
        assert params.a == pytest.approx(6377563.396)

    def test_contexts_are_isolated(self, context):
        context.define('MY:2', '+proj=merc +lon_0=0 +ellps=WGS84')
        context.add_ellipsoid(Ellipsoid('round', 1000000.0, rf=100.0))
        other = ProjectionContext()
        assert other.get_definition('MY:2') is None
        assert other.params('+proj=longlat +ellps=round').a == 6378137.0
