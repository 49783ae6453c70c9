"""
MGRS (Military Grid Reference System) and UTM on WGS84.

MGRS strings look like "32VLP2345678901": zone number, latitude band
letter, two-letter 100 km square, then an even number of digits split
between easting and northing. The letters I and O are never used.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import logging
import math

from ..config import D2R, R2D
from ..errors import MGRSError

logger = logging.getLogger(__name__)

# 100 km square lettering repeats every six zones
NUM_100K_SETS = 6
SET_ORIGIN_COLUMN_LETTERS = 'AJSAJS'
SET_ORIGIN_ROW_LETTERS = 'AFAFAF'

_A = ord('A')
_I = ord('I')
_O = ord('O')
_V = ord('V')
_Z = ord('Z')

# UTM on WGS84
_A_AXIS = 6378137.0
_ECC_SQUARED = 0.00669438
_K0 = 0.9996

# Latitude bands, southern edge first: (letter, lowest latitude)
_BANDS = (
    ('C', -80), ('D', -72), ('E', -64), ('F', -56), ('G', -48), ('H', -40),
    ('J', -32), ('K', -24), ('L', -16), ('M', -8), ('N', 0), ('P', 8),
    ('Q', 16), ('R', 24), ('S', 32), ('T', 40), ('U', 48), ('V', 56),
    ('W', 64), ('X', 72),
)

# Smallest northing (meters) found in each latitude band
_MIN_NORTHING = {
    'C': 1100000.0, 'D': 2000000.0, 'E': 2800000.0, 'F': 3700000.0,
    'G': 4600000.0, 'H': 5500000.0, 'J': 6400000.0, 'K': 7300000.0,
    'L': 8200000.0, 'M': 9100000.0, 'N': 0.0, 'P': 800000.0,
    'Q': 1700000.0, 'R': 2600000.0, 'S': 3500000.0, 'T': 4400000.0,
    'U': 5300000.0, 'V': 6200000.0, 'W': 7000000.0, 'X': 7900000.0,
}


@dataclass(frozen=True, slots=True)
class UTMCoordinate:
    """
    A UTM position.

    accuracy is the size in meters of the square the position stands
    for (None for an exact point).
    """
    easting: float
    northing: float
    zone_number: int
    zone_letter: str
    accuracy: Optional[float] = None


# =============================================================================
# ZONES AND BANDS
# =============================================================================

def utm_zone(lat: float, lon: float) -> int:
    """
    UTM zone number for a position in degrees.

    Southern Norway uses zone 32 between 3 and 12 degrees east, and
    Svalbard uses only the odd zones 31, 33, 35 and 37.
    """
    zone = int(math.floor((lon + 180) / 6)) + 1
    if lon == 180:
        zone = 60

    if 56.0 <= lat < 64.0 and 3.0 <= lon < 12.0:
        zone = 32

    if 72.0 <= lat < 84.0:
        if 0.0 <= lon < 9.0:
            zone = 31
        elif 9.0 <= lon < 21.0:
            zone = 33
        elif 21.0 <= lon < 33.0:
            zone = 35
        elif 33.0 <= lon < 42.0:
            zone = 37

    return zone


def latitude_band(lat: float) -> str:
    """
    Latitude band letter (C..X) for a latitude in degrees.

    Raises:
        MGRSError: Outside 80S..84N
    """
    if lat < -80 or lat > 84:
        raise MGRSError(f"Latitude {lat} is outside the UTM range (80S to 84N)")
    letter = 'C'
    for band, lowest in _BANDS:
        if lat >= lowest:
            letter = band
    return letter


# =============================================================================
# UTM
# =============================================================================

def lat_lon_to_utm(lat: float, lon: float) -> UTMCoordinate:
    """
    Convert WGS84 latitude/longitude (degrees) to UTM.

    Eastings and northings are truncated to whole meters.

    Raises:
        MGRSError: Latitude outside the UTM range
    """
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise MGRSError(f"Invalid position: {lat}, {lon}")
    if lon < -180 or lon > 180:
        raise MGRSError(f"Longitude {lon} is out of range")

    zone_letter = latitude_band(lat)
    zone_number = utm_zone(lat, lon)

    lat_rad = lat * D2R
    long_rad = lon * D2R
    long_origin_rad = ((zone_number - 1) * 6 - 180 + 3) * D2R

    ecc = _ECC_SQUARED
    ecc_prime = ecc / (1 - ecc)

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    tan_lat = math.tan(lat_rad)

    n = _A_AXIS / math.sqrt(1 - ecc * sin_lat * sin_lat)
    t = tan_lat * tan_lat
    c = ecc_prime * cos_lat * cos_lat
    a = cos_lat * (long_rad - long_origin_rad)

    m = _A_AXIS * (
        (1 - ecc / 4 - 3 * ecc ** 2 / 64 - 5 * ecc ** 3 / 256) * lat_rad
        - (3 * ecc / 8 + 3 * ecc ** 2 / 32 + 45 * ecc ** 3 / 1024) * math.sin(2 * lat_rad)
        + (15 * ecc ** 2 / 256 + 45 * ecc ** 3 / 1024) * math.sin(4 * lat_rad)
        - (35 * ecc ** 3 / 3072) * math.sin(6 * lat_rad)
    )

    easting = _K0 * n * (
        a + (1 - t + c) * a ** 3 / 6
        + (5 - 18 * t + t * t + 72 * c - 58 * ecc_prime) * a ** 5 / 120
    ) + 500000.0

    northing = _K0 * (m + n * tan_lat * (
        a * a / 2
        + (5 - t + 9 * c + 4 * c * c) * a ** 4 / 24
        + (61 - 58 * t + t * t + 600 * c - 330 * ecc_prime) * a ** 6 / 720
    ))
    if lat < 0.0:
        northing += 10000000.0

    return UTMCoordinate(
        easting=float(math.trunc(easting)),
        northing=float(math.trunc(northing)),
        zone_number=zone_number,
        zone_letter=zone_letter,
    )


def utm_to_lat_lon(utm: UTMCoordinate) -> Tuple[float, float]:
    """
    Convert a UTM position to WGS84 (lat, lon) in degrees.

    Raises:
        MGRSError: Zone number outside 1..60
    """
    if utm.zone_number < 1 or utm.zone_number > 60:
        raise MGRSError(f"Invalid UTM zone number: {utm.zone_number}")

    ecc = _ECC_SQUARED
    e1 = (1 - math.sqrt(1 - ecc)) / (1 + math.sqrt(1 - ecc))

    x = utm.easting - 500000.0
    y = utm.northing
    if utm.zone_letter < 'N':
        y -= 10000000.0

    long_origin = (utm.zone_number - 1) * 6 - 180 + 3
    ecc_prime = ecc / (1 - ecc)

    m = y / _K0
    mu = m / (_A_AXIS * (1 - ecc / 4 - 3 * ecc ** 2 / 64 - 5 * ecc ** 3 / 256))

    phi1 = (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
    )

    sin_phi1 = math.sin(phi1)
    cos_phi1 = math.cos(phi1)
    tan_phi1 = math.tan(phi1)

    n1 = _A_AXIS / math.sqrt(1 - ecc * sin_phi1 * sin_phi1)
    t1 = tan_phi1 * tan_phi1
    c1 = ecc_prime * cos_phi1 * cos_phi1
    r1 = _A_AXIS * (1 - ecc) / math.pow(1 - ecc * sin_phi1 * sin_phi1, 1.5)
    d = x / (n1 * _K0)

    lat = phi1 - (n1 * tan_phi1 / r1) * (
        d * d / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 * c1 - 9 * ecc_prime) * d ** 4 / 24
        + (61 + 90 * t1 + 298 * c1 + 45 * t1 * t1 - 252 * ecc_prime - 3 * c1 * c1) * d ** 6 / 720
    )
    lon = (
        d
        - (1 + 2 * t1 + c1) * d ** 3 / 6
        + (5 - 2 * c1 + 28 * t1 - 3 * c1 * c1 + 8 * ecc_prime + 24 * t1 * t1) * d ** 5 / 120
    ) / cos_phi1

    return lat * R2D, long_origin + lon * R2D


# =============================================================================
# 100 KM SQUARE LETTERS
# =============================================================================

def _set_for_zone(zone_number: int) -> int:
    set_parm = zone_number % NUM_100K_SETS
    return NUM_100K_SETS if set_parm == 0 else set_parm


def _letter_100k_id(column: int, row: int, set_parm: int) -> str:
    """
    Two-letter 100 km square code.

    Column letters run A..Z and row letters A..V, both skipping I and
    O and wrapping around at the end of the alphabet.
    """
    index = set_parm - 1
    col_origin = ord(SET_ORIGIN_COLUMN_LETTERS[index])
    row_origin = ord(SET_ORIGIN_ROW_LETTERS[index])

    col_int = col_origin + column - 1
    row_int = row_origin + row
    rollover = False

    if col_int > _Z:
        col_int = col_int - _Z + _A - 1
        rollover = True

    if (col_int == _I or (col_origin < _I and col_int > _I)
            or ((col_int > _I or col_origin < _I) and rollover)):
        col_int += 1

    if (col_int == _O or (col_origin < _O and col_int > _O)
            or ((col_int > _O or col_origin < _O) and rollover)):
        col_int += 1
        if col_int == _I:
            col_int += 1

    if col_int > _Z:
        col_int = col_int - _Z + _A - 1

    if row_int > _V:
        row_int = row_int - _V + _A - 1
        rollover = True
    else:
        rollover = False

    if (row_int == _I or (row_origin < _I and row_int > _I)
            or ((row_int > _I or row_origin < _I) and rollover)):
        row_int += 1

    if (row_int == _O or (row_origin < _O and row_int > _O)
            or ((row_int > _O or row_origin < _O) and rollover)):
        row_int += 1
        if row_int == _I:
            row_int += 1

    if row_int > _V:
        row_int = row_int - _V + _A - 1

    return chr(col_int) + chr(row_int)


def _get_100k_id(easting: float, northing: float, zone_number: int) -> str:
    set_parm = _set_for_zone(zone_number)
    column = int(math.floor(easting / 100000))
    row = int(math.floor(northing / 100000)) % 20
    return _letter_100k_id(column, row, set_parm)


def _easting_from_char(letter: str, set_parm: int) -> float:
    cur = ord(SET_ORIGIN_COLUMN_LETTERS[set_parm - 1])
    target = ord(letter)
    value = 100000.0
    rewound = False
    while cur != target:
        cur += 1
        if cur == _I:
            cur += 1
        if cur == _O:
            cur += 1
        if cur > _Z:
            if rewound:
                raise MGRSError(f"Bad MGRS column letter: {letter}")
            cur = _A
            rewound = True
        value += 100000.0
    return value


def _northing_from_char(letter: str, set_parm: int) -> float:
    if letter > 'V':
        raise MGRSError(f"Invalid MGRS row letter: {letter}")
    cur = ord(SET_ORIGIN_ROW_LETTERS[set_parm - 1])
    target = ord(letter)
    value = 0.0
    rewound = False
    while cur != target:
        cur += 1
        if cur == _I:
            cur += 1
        if cur == _O:
            cur += 1
        if cur > _V:
            if rewound:
                raise MGRSError(f"Bad MGRS row letter: {letter}")
            cur = _A
            rewound = True
        value += 100000.0
    return value


def _min_northing(zone_letter: str) -> float:
    value = _MIN_NORTHING.get(zone_letter)
    if value is None:
        raise MGRSError(f"Invalid zone letter: {zone_letter}")
    return value


# =============================================================================
# ENCODE / DECODE
# =============================================================================

def mgrs_encode(lat: float, lon: float, accuracy: int = 5) -> str:
    """
    Encode a WGS84 position as MGRS.

    Args:
        lat, lon: Position in degrees
        accuracy: Digits per axis, 0 (100 km) to 5 (1 m)

    Returns:
        MGRS string such as "32VLP2345678901"

    Raises:
        MGRSError: Position outside the UTM range or bad accuracy
    """
    if accuracy < 0 or accuracy > 5:
        raise MGRSError(f"MGRS accuracy must be 0..5 digits, got {accuracy}")
    utm = lat_lon_to_utm(lat, lon)
    easting = f"{int(utm.easting):05d}"[-5:]
    northing = f"{int(utm.northing):05d}"[-5:]
    return (
        f"{utm.zone_number}{utm.zone_letter}"
        f"{_get_100k_id(utm.easting, utm.northing, utm.zone_number)}"
        f"{easting[:accuracy]}{northing[:accuracy]}"
    )


def decode_utm(text: str) -> UTMCoordinate:
    """
    Decode an MGRS string to the UTM position of its south-west corner.

    Raises:
        MGRSError: Malformed string, zone or letters
    """
    if not text or not text.strip():
        raise MGRSError("Cannot decode an empty MGRS string")
    s = text.replace(' ', '').upper()
    length = len(s)

    i = 0
    digits = ''
    while i < length and not s[i].isalpha():
        if i >= 2:
            raise MGRSError(f"Bad MGRS zone number in {text!r}")
        digits += s[i]
        i += 1

    if i == 0 or i + 3 > length or not digits.isdigit():
        raise MGRSError(f"Bad MGRS string: {text!r}")
    zone_number = int(digits)
    if zone_number < 1 or zone_number > 60:
        raise MGRSError(f"Invalid UTM zone number {zone_number} in {text!r}")

    zone_letter = s[i]
    i += 1
    if zone_letter <= 'A' or zone_letter in 'BIOY' or zone_letter >= 'Z':
        raise MGRSError(f"MGRS zone letter {zone_letter} not handled: {text!r}")

    hun_k = s[i:i + 2]
    i += 2
    set_parm = _set_for_zone(zone_number)
    east_100k = _easting_from_char(hun_k[0], set_parm)
    north_100k = _northing_from_char(hun_k[1], set_parm)

    # Row letters repeat every 2,000 km
    min_northing = _min_northing(zone_letter)
    while north_100k < min_northing:
        north_100k += 2000000.0

    remainder = s[i:]
    if len(remainder) % 2 != 0:
        raise MGRSError(
            f"MGRS string needs an even number of digits after the 100 km letters: {text!r}"
        )
    if remainder and not remainder.isdigit():
        raise MGRSError(f"MGRS easting/northing must be digits: {text!r}")

    sep = len(remainder) // 2
    accuracy: Optional[float] = None
    sep_easting = 0.0
    sep_northing = 0.0
    if sep > 0:
        accuracy = 100000.0 / math.pow(10, sep)
        sep_easting = float(remainder[:sep]) * accuracy
        sep_northing = float(remainder[sep:]) * accuracy

    return UTMCoordinate(
        easting=sep_easting + east_100k,
        northing=sep_northing + north_100k,
        zone_number=zone_number,
        zone_letter=zone_letter,
        accuracy=accuracy,
    )


def mgrs_decode(text: str) -> Tuple[float, float, float, float]:
    """
    Bounding box of an MGRS square as (left, bottom, right, top) degrees.

    A bare 100 km square with no digits decodes to its south-west
    corner, so left == right and bottom == top.

    Raises:
        MGRSError: Malformed string
    """
    utm = decode_utm(text)
    lat, lon = utm_to_lat_lon(utm)
    if utm.accuracy is None:
        return (lon, lat, lon, lat)
    top, right = utm_to_lat_lon(UTMCoordinate(
        easting=utm.easting + utm.accuracy,
        northing=utm.northing + utm.accuracy,
        zone_number=utm.zone_number,
        zone_letter=utm.zone_letter,
    ))
    return (lon, lat, right, top)


def mgrs_to_point(text: str) -> Tuple[float, float]:
    """Centre of an MGRS square as (lon, lat) degrees."""
    left, bottom, right, top = mgrs_decode(text)
    if left == right:
        return (right, top)
    return ((left + right) / 2, (top + bottom) / 2)
