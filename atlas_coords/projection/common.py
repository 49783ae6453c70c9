"""
Numeric helpers shared by the projection algorithms.

Angles are radians throughout. Iterative helpers return None when they
fail to converge within their cap, never loop forever and never raise
on domain errors.
"""

from typing import List, Optional, Sequence, Tuple
import math

from ..config import (
    EPSLN,
    HALF_PI,
    PI,
    PROJ_MAX_ITER,
    TWO_PI,
    VINCENTY_MAX_ITER,
    VINCENTY_TOLERANCE,
)


# =============================================================================
# ANGLE NORMALIZATION
# =============================================================================

def sign(x: float) -> int:
    """-1 for negative values, 1 otherwise."""
    return -1 if x < 0 else 1


def adjust_lon(x: float) -> float:
    """Wrap a longitude (difference) into (-pi, pi]."""
    if -PI < x <= PI:
        return x
    wrapped = math.fmod(x + PI, TWO_PI)
    if wrapped <= 0:
        wrapped += TWO_PI
    return wrapped - PI


def adjust_lat(x: float) -> float:
    """Fold a latitude beyond the pole back into range."""
    return x if abs(x) < HALF_PI else x - sign(x) * PI


def asinz(x: float) -> float:
    """asin that clamps its argument to [-1, 1]."""
    if abs(x) > 1:
        x = 1.0 if x > 1 else -1.0
    return math.asin(x)


# =============================================================================
# CONFORMAL LATITUDE HELPERS
# =============================================================================

def msfnz(eccent: float, sinphi: float, cosphi: float) -> float:
    """Radius of the parallel divided by the semi-major axis."""
    con = eccent * sinphi
    return cosphi / math.sqrt(1.0 - con * con)


def tsfnz(eccent: float, phi: float, sinphi: float) -> float:
    """Isometric-latitude helper t (Snyder 15-9)."""
    con = eccent * sinphi
    com = 0.5 * eccent
    con = math.pow((1.0 - con) / (1.0 + con), com)
    return math.tan(0.5 * (HALF_PI - phi)) / con


def phi2z(eccent: float, ts: float) -> Optional[float]:
    """Latitude from t, by iteration (Snyder 7-9). None if no convergence."""
    eccnth = 0.5 * eccent
    phi = HALF_PI - 2 * math.atan(ts)
    for _ in range(16):
        con = eccent * math.sin(phi)
        dphi = HALF_PI - 2 * math.atan(ts * math.pow((1 - con) / (1 + con), eccnth)) - phi
        phi += dphi
        if abs(dphi) <= 1.0e-10:
            return phi
    return None


def srat(esinp: float, exp: float) -> float:
    return math.pow((1.0 - esinp) / (1.0 + esinp), exp)


# =============================================================================
# AUTHALIC LATITUDE HELPERS
# =============================================================================

def qsfnz(eccent: float, sinphi: float) -> float:
    """Authalic q function (Snyder 3-12)."""
    if eccent > 1.0e-7:
        con = eccent * sinphi
        return (1 - eccent * eccent) * (
            sinphi / (1 - con * con) - (0.5 / eccent) * math.log((1 - con) / (1 + con))
        )
    return 2 * sinphi


def iqsfnz(eccent: float, q: float) -> Optional[float]:
    """Latitude from authalic q, by iteration. None if no convergence."""
    temp = 1 - (1 - eccent * eccent) / (2 * eccent) * math.log((1 - eccent) / (1 + eccent))
    if abs(abs(q) - temp) < 1.0e-6:
        return -HALF_PI if q < 0 else HALF_PI

    phi = math.asin(max(-1.0, min(1.0, 0.5 * q)))
    for _ in range(30):
        sinphi = math.sin(phi)
        cosphi = math.cos(phi)
        con = eccent * sinphi
        dphi = (math.pow(1 - con * con, 2) / (2 * cosphi)) * (
            q / (1 - eccent * eccent)
            - sinphi / (1 - con * con)
            + 0.5 / eccent * math.log((1 - con) / (1 + con))
        )
        phi += dphi
        if abs(dphi) <= 1.0e-10:
            return phi
    return None


# =============================================================================
# MERIDIAN DISTANCE (SNYDER SERIES)
# =============================================================================

def e0fn(x: float) -> float:
    return 1 - 0.25 * x * (1 + x / 16 * (3 + 1.25 * x))


def e1fn(x: float) -> float:
    return 0.375 * x * (1 + 0.25 * x * (1 + 0.46875 * x))


def e2fn(x: float) -> float:
    return 0.05859375 * x * x * (1 + 0.75 * x)


def e3fn(x: float) -> float:
    return x * x * x * (35 / 3072)


def mlfn(e0: float, e1: float, e2: float, e3: float, phi: float) -> float:
    """Meridian distance for latitude phi, in units of a."""
    return (e0 * phi - e1 * math.sin(2 * phi)
            + e2 * math.sin(4 * phi) - e3 * math.sin(6 * phi))


def imlfn(ml: float, e0: float, e1: float, e2: float, e3: float) -> Optional[float]:
    """Inverse of mlfn, by Newton iteration. None if no convergence."""
    phi = ml / e0
    for _ in range(15):
        dphi = (ml - (e0 * phi - e1 * math.sin(2 * phi) + e2 * math.sin(4 * phi)
                      - e3 * math.sin(6 * phi))) / (
            e0 - 2 * e1 * math.cos(2 * phi) + 4 * e2 * math.cos(4 * phi)
            - 6 * e3 * math.cos(6 * phi))
        phi += dphi
        if abs(dphi) <= 1.0e-10:
            return phi
    return None


def gN(a: float, es: float, sinphi: float) -> float:
    """Radius of curvature in the prime vertical."""
    return a / math.sqrt(1 - es * sinphi * sinphi)


# =============================================================================
# MERIDIAN DISTANCE (PROJ.4 en SERIES)
# =============================================================================

_C00 = 1.0
_C02 = 0.25
_C04 = 0.046875
_C06 = 0.01953125
_C08 = 0.01068115234375
_C22 = 0.75
_C44 = 0.46875
_C46 = 0.01302083333333333333
_C48 = 0.00712076822916666666
_C66 = 0.36458333333333333333
_C68 = 0.00569661458333333333
_C88 = 0.3076171875


def pj_enfn(es: float) -> Tuple[float, float, float, float, float]:
    """Coefficients for pj_mlfn."""
    en0 = _C00 - es * (_C02 + es * (_C04 + es * (_C06 + es * _C08)))
    en1 = es * (_C22 - es * (_C04 + es * (_C06 + es * _C08)))
    t = es * es
    en2 = t * (_C44 - es * (_C46 + es * _C48))
    t *= es
    en3 = t * (_C66 - es * _C68)
    en4 = t * es * _C88
    return (en0, en1, en2, en3, en4)


def pj_mlfn(phi: float, sphi: float, cphi: float, en: Sequence[float]) -> float:
    """Meridian distance using pj_enfn coefficients."""
    cphi *= sphi
    sphi *= sphi
    return en[0] * phi - cphi * (en[1] + sphi * (en[2] + sphi * (en[3] + sphi * en[4])))


def pj_inv_mlfn(
    arg: float,
    es: float,
    en: Sequence[float],
    max_iter: int = PROJ_MAX_ITER
) -> Optional[float]:
    """Inverse of pj_mlfn. None if no convergence within max_iter steps."""
    k = 1 / (1 - es)
    phi = arg
    for _ in range(max_iter):
        s = math.sin(phi)
        t = 1 - es * s * s
        t = (pj_mlfn(phi, s, math.cos(phi), en) - arg) * (t * math.sqrt(t)) * k
        phi -= t
        if not math.isfinite(phi):
            return None
        if abs(t) < EPSLN:
            return phi
    return None


# =============================================================================
# SERIES FOR THE EXTENDED TRANSVERSE MERCATOR
# =============================================================================

def log1py(x: float) -> float:
    y = 1 + x
    z = y - 1
    return x if z == 0 else x * math.log(y) / z


def asinhy(x: float) -> float:
    y = abs(x)
    y = log1py(y * (1 + y / (math.hypot(1, y) + 1)))
    return -y if x < 0 else y


def gatg(pp: Sequence[float], B: float) -> float:
    """Gaussian <-> geodetic latitude via Clenshaw summation."""
    cos_2B = 2 * math.cos(2 * B)
    i = len(pp) - 1
    h1 = pp[i]
    h2 = 0.0
    h = h1
    i -= 1
    while i >= 0:
        h = -h2 + cos_2B * h1 + pp[i]
        h2 = h1
        h1 = h
        i -= 1
    return B + h * math.sin(2 * B)


def clens(pp: Sequence[float], arg_r: float) -> float:
    """Real Clenshaw summation of a sine series."""
    r = 2 * math.cos(arg_r)
    i = len(pp) - 1
    hr1 = pp[i]
    hr2 = 0.0
    hr = hr1
    i -= 1
    while i >= 0:
        hr = -hr2 + r * hr1 + pp[i]
        hr2 = hr1
        hr1 = hr
        i -= 1
    return math.sin(arg_r) * hr


def clens_cmplx(pp: Sequence[float], arg_r: float, arg_i: float) -> List[float]:
    """Complex Clenshaw summation; returns [real, imaginary]."""
    sin_arg_r = math.sin(arg_r)
    cos_arg_r = math.cos(arg_r)
    sinh_arg_i = math.sinh(arg_i)
    cosh_arg_i = math.cosh(arg_i)
    r = 2 * cos_arg_r * cosh_arg_i
    i = -2 * sin_arg_r * sinh_arg_i
    j = len(pp) - 1
    hr = pp[j]
    hi1 = 0.0
    hr1 = 0.0
    hi = 0.0
    j -= 1
    while j >= 0:
        hr2 = hr1
        hi2 = hi1
        hr1 = hr
        hi1 = hi
        hr = -hr2 + r * hr1 - i * hi1 + pp[j]
        hi = -hi2 + i * hr1 + r * hi1
        j -= 1
    r = sin_arg_r * cosh_arg_i
    i = cos_arg_r * sinh_arg_i
    return [r * hr - i * hi, r * hi + i * hr]


# =============================================================================
# GEODESICS (VINCENTY)
# =============================================================================

def _vincenty_series(cos_sq_alpha: float, a: float, b: float) -> Tuple[float, float]:
    u_sq = cos_sq_alpha * (a * a - b * b) / (b * b)
    A = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    B = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    return A, B


def _delta_sigma(B: float, sin_sigma: float, cos_sigma: float, cos_2sm: float) -> float:
    return B * sin_sigma * (cos_2sm + B / 4 * (
        cos_sigma * (-1 + 2 * cos_2sm * cos_2sm)
        - B / 6 * cos_2sm * (-3 + 4 * sin_sigma * sin_sigma) * (-3 + 4 * cos_2sm * cos_2sm)))


def vincenty_inverse(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    a: float,
    f: float
) -> Optional[Tuple[float, float]]:
    """
    Azimuth and distance between two points on an ellipsoid.

    Args:
        lat1, lon1: Start point (radians)
        lat2, lon2: End point (radians)
        a: Semi-major axis
        f: Flattening

    Returns:
        (azimuth at the start point in radians, distance in the units
        of a), or None when the iteration does not converge, which
        happens for nearly antipodal points
    """
    b = a * (1 - f)
    L = adjust_lon(lon2 - lon1)
    u1 = math.atan((1 - f) * math.tan(lat1))
    u2 = math.atan((1 - f) * math.tan(lat2))
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
    sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

    lam = L
    for _ in range(VINCENTY_MAX_ITER):
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)
        sin_sigma = math.hypot(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        if sin_sigma == 0:
            return 0.0, 0.0
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1 - sin_alpha * sin_alpha
        # cos_sq_alpha is 0 on equatorial lines
        cos_2sm = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha if cos_sq_alpha != 0 else 0.0
        C = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        lam_prev = lam
        lam = L + (1 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (cos_2sm + C * cos_sigma * (-1 + 2 * cos_2sm * cos_2sm)))
        if abs(lam - lam_prev) <= VINCENTY_TOLERANCE:
            break
    else:
        return None

    A, B = _vincenty_series(cos_sq_alpha, a, b)
    s12 = b * A * (sigma - _delta_sigma(B, sin_sigma, cos_sigma, cos_2sm))
    azi1 = math.atan2(cos_u2 * math.sin(lam), cos_u1 * sin_u2 - sin_u1 * cos_u2 * math.cos(lam))
    return azi1, s12


def vincenty_direct(
    lat1: float,
    lon1: float,
    azi1: float,
    s12: float,
    a: float,
    f: float
) -> Optional[Tuple[float, float]]:
    """
    End point of a geodesic of length s12 leaving (lat1, lon1) at azi1.

    Returns:
        (lat2, lon2) in radians, or None if the iteration does not
        converge. lon2 is not wrapped.
    """
    b = a * (1 - f)
    sin_alpha1 = math.sin(azi1)
    cos_alpha1 = math.cos(azi1)
    tan_u1 = (1 - f) * math.tan(lat1)
    cos_u1 = 1 / math.sqrt(1 + tan_u1 * tan_u1)
    sin_u1 = tan_u1 * cos_u1
    sigma1 = math.atan2(tan_u1, cos_alpha1)
    sin_alpha = cos_u1 * sin_alpha1
    cos_sq_alpha = 1 - sin_alpha * sin_alpha
    A, B = _vincenty_series(cos_sq_alpha, a, b)

    sigma = s12 / (b * A)
    for _ in range(VINCENTY_MAX_ITER):
        cos_2sm = math.cos(2 * sigma1 + sigma)
        sin_sigma = math.sin(sigma)
        cos_sigma = math.cos(sigma)
        sigma_prev = sigma
        sigma = s12 / (b * A) + _delta_sigma(B, sin_sigma, cos_sigma, cos_2sm)
        if abs(sigma - sigma_prev) <= VINCENTY_TOLERANCE:
            break
    else:
        return None

    cos_2sm = math.cos(2 * sigma1 + sigma)
    sin_sigma = math.sin(sigma)
    cos_sigma = math.cos(sigma)
    tmp = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1
    lat2 = math.atan2(sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
                      (1 - f) * math.hypot(sin_alpha, tmp))
    lam = math.atan2(sin_sigma * sin_alpha1, cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1)
    C = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
    L = lam - (1 - C) * f * sin_alpha * (
        sigma + C * sin_sigma * (cos_2sm + C * cos_sigma * (-1 + 2 * cos_2sm * cos_2sm)))
    return lat2, lon1 + L
