"""
Geodetic <-> geocentric conversion and Helmert shifts.

Geocentric coordinates are Earth-centred Cartesian meters. Helmert
parameters are expected pre-scaled (see Datum): rotations in radians,
scale as a multiplier.
"""

from typing import Sequence
import math

from ..config import (
    GEOCENTRIC_MAX_ITER,
    GEOCENTRIC_TOLERANCE,
    HALF_PI,
    PI,
)
from ..models.datum import DatumType
from ..models.geometry import Point


def geodetic_to_geocentric(p: Point, es: float, a: float) -> Point:
    """
    Convert geodetic (lon, lat radians, height meters) to geocentric X, Y, Z.

    Latitudes up to 0.1% beyond a pole are clamped onto it; anything
    further out produces infinite coordinates.
    """
    longitude = p.x
    latitude = p.y
    height = p.z or 0.0

    if -1.001 * HALF_PI < latitude < -HALF_PI:
        latitude = -HALF_PI
    elif HALF_PI < latitude < 1.001 * HALF_PI:
        latitude = HALF_PI
    elif latitude < -HALF_PI:
        return Point(-math.inf, -math.inf, p.z, p.m)
    elif latitude > HALF_PI:
        return Point(math.inf, math.inf, p.z, p.m)

    if longitude > PI:
        longitude -= 2 * PI

    sin_lat = math.sin(latitude)
    cos_lat = math.cos(latitude)
    rn = a / math.sqrt(1.0 - es * sin_lat * sin_lat)

    return Point(
        (rn + height) * cos_lat * math.cos(longitude),
        (rn + height) * cos_lat * math.sin(longitude),
        ((rn * (1 - es)) + height) * sin_lat,
        p.m,
    )


def geocentric_to_geodetic(
    p: Point,
    es: float,
    a: float,
    b: float,
    max_iter: int = GEOCENTRIC_MAX_ITER
) -> Point:
    """
    Convert geocentric X, Y, Z to geodetic (lon, lat radians, height).

    Iterative (Bowring-style) on the geocentric latitude, stopping when
    the change in latitude drops below GEOCENTRIC_TOLERANCE or after
    max_iter iterations. Past the cap the latest estimate is returned.
    """
    genau2 = GEOCENTRIC_TOLERANCE * GEOCENTRIC_TOLERANCE
    x = p.x
    y = p.y
    z = p.z or 0.0

    dist_p = math.sqrt(x * x + y * y)
    rr = math.sqrt(x * x + y * y + z * z)

    if dist_p / a < GEOCENTRIC_TOLERANCE:
        longitude = 0.0
        if rr / a < GEOCENTRIC_TOLERANCE:
            # Centre of the earth
            return Point(0.0, HALF_PI, -b, p.m)
    else:
        longitude = math.atan2(y, x)

    ct = z / rr
    st = dist_p / rr
    rx = 1.0 / math.sqrt(1.0 - es * (2.0 - es) * st * st)
    cphi0 = st * (1.0 - es) * rx
    sphi0 = ct * rx

    height = 0.0
    cphi = cphi0
    sphi = sphi0
    for _ in range(max_iter):
        rn = a / math.sqrt(1.0 - es * sphi0 * sphi0)
        height = dist_p * cphi0 + z * sphi0 - rn * (1.0 - es * sphi0 * sphi0)

        rk = es * rn / (rn + height)
        rx = 1.0 / math.sqrt(1.0 - rk * (2.0 - rk) * st * st)
        cphi = st * (1.0 - rk) * rx
        sphi = ct * rx
        sdphi = sphi * cphi0 - cphi * sphi0
        cphi0 = cphi
        sphi0 = sphi
        if sdphi * sdphi <= genau2:
            break

    latitude = math.atan(sphi / abs(cphi))
    return Point(longitude, latitude, height, p.m)


def geocentric_to_wgs84(p: Point, datum_type: DatumType, params: Sequence[float]) -> Point:
    """Apply a datum's Helmert shift, moving from the datum to WGS84."""
    if datum_type is DatumType.PARAM_3:
        return Point(p.x + params[0], p.y + params[1], p.z + params[2], p.m)

    if datum_type is DatumType.PARAM_7:
        dx, dy, dz, rx, ry, rz, m = params[:7]
        return Point(
            m * (p.x - rz * p.y + ry * p.z) + dx,
            m * (rz * p.x + p.y - rx * p.z) + dy,
            m * (-ry * p.x + rx * p.y + p.z) + dz,
            p.m,
        )

    return p


def geocentric_from_wgs84(p: Point, datum_type: DatumType, params: Sequence[float]) -> Point:
    """Reverse a datum's Helmert shift, moving from WGS84 to the datum."""
    if datum_type is DatumType.PARAM_3:
        return Point(p.x - params[0], p.y - params[1], p.z - params[2], p.m)

    if datum_type is DatumType.PARAM_7:
        dx, dy, dz, rx, ry, rz, m = params[:7]
        x_tmp = (p.x - dx) / m
        y_tmp = (p.y - dy) / m
        z_tmp = (p.z - dz) / m
        return Point(
            x_tmp + rz * y_tmp - ry * z_tmp,
            -rz * x_tmp + y_tmp + rx * z_tmp,
            ry * x_tmp - rx * y_tmp + z_tmp,
            p.m,
        )

    return p
