"""
Tests for UTM zones and MGRS encoding/decoding.
"""

import pytest

from atlas_coords.errors import MGRSError
from atlas_coords.grids import (
    decode_utm,
    lat_lon_to_utm,
    latitude_band,
    mgrs_decode,
    mgrs_encode,
    mgrs_to_point,
    utm_to_lat_lon,
    utm_zone,
)


class TestZones:

    @pytest.mark.parametrize('lat, lon, zone', [
        (51.5, -0.1, 30),
        (38.9, -77.0, 18),
        (60.0, 4.0, 32),     # southern Norway
        (60.0, 2.0, 31),
        (75.0, 10.0, 33),    # Svalbard
        (75.0, 8.0, 31),
        (0.0, 180.0, 60),
        (0.0, -180.0, 1),
    ])
    def test_utm_zone(self, lat, lon, zone):
        assert utm_zone(lat, lon) == zone

    @pytest.mark.parametrize('lat, band', [
        (-80.0, 'C'), (-0.5, 'M'), (0.0, 'N'), (51.5, 'U'), (72.0, 'X'), (84.0, 'X'),
    ])
    def test_latitude_band(self, lat, band):
        assert latitude_band(lat) == band

    def test_band_out_of_range(self):
        with pytest.raises(MGRSError):
            latitude_band(84.5)
        with pytest.raises(MGRSError):
            latitude_band(-80.5)


class TestUtm:

    def test_central_meridian(self):
        utm = lat_lon_to_utm(0.0, -3.0)
        assert utm.easting == 500000.0
        assert utm.northing == 0.0
        assert utm.zone_number == 30
        assert utm.zone_letter == 'N'

    def test_southern_hemisphere_false_northing(self):
        utm = lat_lon_to_utm(-33.9, 151.2)
        assert utm.zone_number == 56
        assert utm.zone_letter == 'H'
        assert 6200000 < utm.northing < 6300000

    def test_round_trip(self):
        utm = lat_lon_to_utm(52.2, 0.12)
        lat, lon = utm_to_lat_lon(utm)
        assert lat == pytest.approx(52.2, abs=1e-4)
        assert lon == pytest.approx(0.12, abs=1e-4)

    def test_invalid_position(self):
        with pytest.raises(MGRSError):
            lat_lon_to_utm(float('nan'), 0.0)
        with pytest.raises(MGRSError):
            lat_lon_to_utm(0.0, 181.0)


class TestMgrs:

    def test_washington(self):
        assert mgrs_encode(38.897676, -77.036548).startswith('18SUJ')

    def test_norway_exception(self):
        assert mgrs_encode(61.0, 5.0).startswith('32V')

    def test_svalbard_exception(self):
        assert mgrs_encode(78.0, 15.0).startswith('33X')

    @pytest.mark.parametrize('accuracy', [0, 1, 2, 3, 4, 5])
    def test_accuracy_digits(self, accuracy):
        code = mgrs_encode(38.897676, -77.036548, accuracy)
        assert len(code) == 5 + 2 * accuracy

    def test_bad_accuracy(self):
        with pytest.raises(MGRSError):
            mgrs_encode(0.0, 0.0, 6)

    def test_polar_rejected(self):
        with pytest.raises(MGRSError):
            mgrs_encode(85.0, 0.0)

    @pytest.mark.parametrize('lat, lon', [
        (38.897676, -77.036548),
        (51.4778, -0.0015),
        (-33.8568, 151.2153),
        (61.0, 5.0),
    ])
    def test_encode_then_point(self, lat, lon):
        out_lon, out_lat = mgrs_to_point(mgrs_encode(lat, lon, 5))
        assert out_lon == pytest.approx(lon, abs=1e-4)
        assert out_lat == pytest.approx(lat, abs=1e-4)

    def test_bbox_of_one_km_square(self):
        left, bottom, right, top = mgrs_decode(mgrs_encode(38.897676, -77.036548, 2))
        assert left < -77.036548 < right
        assert bottom < 38.897676 < top
        assert (top - bottom) == pytest.approx(0.009, abs=0.001)

    def test_bare_square_is_degenerate(self):
        left, bottom, right, top = mgrs_decode('18SUJ')
        assert left == right
        assert bottom == top

    def test_decode_utm(self):
        utm = decode_utm('18SUJ2338308450')
        assert utm.zone_number == 18
        assert utm.zone_letter == 'S'
        assert utm.accuracy == 1.0
        assert utm.easting % 100000 == 23383
        assert utm.northing % 100000 == 8450

    def test_spaces_and_case(self):
        assert decode_utm('18s uj 23383 08450') == decode_utm('18SUJ2338308450')

    @pytest.mark.parametrize('text', [
        '',
        '   ',
        '99SUJ',            # zone out of range
        '18IUJ',            # no band I
        '18SUJ123',         # odd digit count
        '18SUJ12AB',
        '18SUW',            # row letters stop at V
        'SUJ12',
        '123SUJ',
    ])
    def test_bad_strings(self, text):
        with pytest.raises(MGRSError):
            decode_utm(text)
