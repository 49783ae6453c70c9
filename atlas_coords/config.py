"""
Configuration constants for Atlas Coords.

Contains the numeric constants, tolerances and iteration caps shared by
the projection, datum and grid shift code, plus the per-context runtime
configuration.
"""

from dataclasses import dataclass
import math


# =============================================================================
# ANGLES
# =============================================================================

PI = math.pi
HALF_PI = math.pi / 2
TWO_PI = math.pi * 2
FORTPI = math.pi / 4

D2R = math.pi / 180.0
R2D = 180.0 / math.pi

# Arc-seconds to radians (NTv2 shifts and Helmert rotations)
SEC_TO_RAD = 4.84813681109535993589914102357e-6

# =============================================================================
# NUMERIC TOLERANCES
# =============================================================================

# General purpose epsilon used by most projections
EPSLN = 1.0e-10

# Latitude within this of +/-90 degrees is nudged off the pole
POLE_NUDGE = 1.0e-10

# Two datums are equal if their e^2 differ by less than this
DATUM_ES_TOLERANCE = 0.000000000050

# =============================================================================
# WGS84
# =============================================================================

SRS_WGS84_SEMIMAJOR = 6378137.0
SRS_WGS84_SEMIMINOR = 6356752.314
SRS_WGS84_ESQUARED = 0.0066943799901413165

# Authalic-radius series (R_A option)
SIXTH = 0.1666666666666666667
RA4 = 0.04722222222222222222
RA6 = 0.02215608465608465608

# =============================================================================
# ITERATION CAPS
# =============================================================================

# Geocentric -> geodetic
GEOCENTRIC_MAX_ITER = 30
GEOCENTRIC_TOLERANCE = 1.0e-12

# NTv2 inverse grid shift
NTV2_INVERSE_MAX_ITER = 9
NTV2_INVERSE_TOLERANCE = 1.0e-12

# Coverage buffer is (|dlon| + |dlat|) / this
NTV2_COVERAGE_EPSILON_DIVISOR = 10000.0

# Generic projection inverse iteration cap (phi2z, inverse meridian arc)
PROJ_MAX_ITER = 20

# Lambert Conformal Conic / Albers / polyconic style inverses
CONIC_MAX_ITER = 15

# Vincenty geodesics (ellipsoidal azimuthal equidistant)
VINCENTY_MAX_ITER = 100
VINCENTY_TOLERANCE = 1.0e-12

# =============================================================================
# GRID REFERENCES
# =============================================================================

# Fixed precision ladder (meters)
GRID_PRECISIONS = (100000, 10000, 5000, 2000, 1000, 100, 10, 1)

# Vertices used for circle outlines
CIRCLE_SEGMENTS = 24


# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

@dataclass
class CoordsConfig:
    """
    Runtime configuration for a projection context.

    This class holds the options that can be adjusted per context,
    either programmatically or from the CLI.
    """

    # Ellipsoid used when a definition names none
    default_ellipsoid: str = "WGS84"

    # Honour the definition's axis order (e.g. "neu") in transform()
    enforce_axis: bool = False

    # NTv2 inverse iteration
    ntv2_inverse_max_iter: int = NTV2_INVERSE_MAX_ITER
    ntv2_inverse_tolerance: float = NTV2_INVERSE_TOLERANCE

    # If True, a non-converging NTv2 inverse raises instead of falling
    # back to the first approximation
    strict_ntv2_inverse: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        if self.ntv2_inverse_max_iter < 1:
            raise ValueError("ntv2_inverse_max_iter must be at least 1")

        if self.ntv2_inverse_tolerance <= 0:
            raise ValueError("ntv2_inverse_tolerance must be positive")

        if not self.default_ellipsoid:
            raise ValueError("default_ellipsoid must not be empty")


# Default configuration instance
DEFAULT_CONFIG = CoordsConfig()
