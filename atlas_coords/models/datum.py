"""
Ellipsoid and datum value types.

A Datum is fully resolved: it always carries the semi-axes and
eccentricities of its ellipsoid, and Helmert parameters are stored
ready for use (rotations in radians, scale as a multiplier).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class DatumType(Enum):
    """
    How a datum relates to WGS84.

    PARAM_3 / PARAM_7: Helmert shift in geocentric space.
    GRIDSHIFT: NTv2 grid(s) applied to geodetic coordinates.
    WGS84: coincident with WGS84 (no shift).
    NODATUM: unknown relation; datum shifts are skipped entirely.
    """
    PARAM_3 = 1
    PARAM_7 = 2
    GRIDSHIFT = 3
    WGS84 = 4
    NODATUM = 5


@dataclass(frozen=True, slots=True)
class Ellipsoid:
    """
    Registry entry for a reference ellipsoid.

    Either rf (reciprocal flattening) or b (semi-minor axis) is given.
    """
    code: str
    a: float
    rf: Optional[float] = None
    b: Optional[float] = None
    name: str = ""


@dataclass(frozen=True, slots=True)
class DatumDefinition:
    """
    Registry entry for a named datum.

    towgs84 holds the raw 3 or 7 Helmert values (rotations in
    arc-seconds, scale in ppm); nadgrids names NTv2 grids.
    """
    code: str
    ellipse: str
    towgs84: Optional[Tuple[float, ...]] = None
    nadgrids: Optional[str] = None
    name: str = ""


@dataclass(frozen=True, slots=True)
class GridRef:
    """
    Reference from a datum to a named NTv2 grid.

    mandatory: fail hard if the grid is not loaded.
    is_null: the "@null" pseudo grid (identity shift).
    """
    name: str
    mandatory: bool
    is_null: bool = False


@dataclass(frozen=True, slots=True)
class Datum:
    """
    Fully resolved datum, as consumed by the datum transformation.

    Attributes:
        datum_type: Kind of shift to WGS84
        a, b: Semi-major / semi-minor axes (meters)
        es: Eccentricity squared
        ep2: Second eccentricity squared
        params: Helmert parameters, pre-scaled (rotations in radians,
                scale as 1 + ppm/1e6)
        grids: NTv2 grid references for GRIDSHIFT datums
    """
    datum_type: DatumType
    a: float
    b: float
    es: float
    ep2: float
    params: Tuple[float, ...] = ()
    grids: Tuple[GridRef, ...] = ()

    @property
    def has_helmert(self) -> bool:
        """True for 3- and 7-parameter datums."""
        return self.datum_type in (DatumType.PARAM_3, DatumType.PARAM_7)
