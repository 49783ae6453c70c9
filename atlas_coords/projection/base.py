"""
Projection base class.

A Projection is built once from fully resolved ProjParams and is then
read-only: forward and inverse never modify the instance, so one
projection can serve any number of callers at once.

forward: geodetic radians (x = longitude, y = latitude) -> meters
inverse: meters -> geodetic radians

Both return None when the point cannot be projected (pole of a
Mercator, antipode of an azimuthal projection, an inverse that failed
to converge). They never raise for data-dependent failures.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple
import logging

from ..errors import DefinitionError
from ..models.geometry import Point
from ..models.params import ProjParams
from ..config import EPSLN

logger = logging.getLogger(__name__)


class Projection(ABC):
    """
    Abstract base for all projection algorithms.

    Subclasses list their recognized names in `names` and compute
    their derived constants in init().

    Attributes:
        params: The resolved parameters this projection was built from
        a, b: Semi-major / semi-minor axes (meters)
        es, e, ep2: Eccentricity squared, eccentricity, second e^2
        sphere: True when the ellipsoid is (numerically) a sphere
        x0, y0: False easting / northing
        k0: Scale factor
        lat0, long0, lat1, lat2, lat_ts: Origin and standard parallels
    """

    names: Tuple[str, ...] = ()

    def __init__(self, params: ProjParams):
        if not params.is_resolved():
            raise DefinitionError(
                f"Projection {params.proj_name!r} built from unresolved parameters"
            )
        self.params = params
        self.datum = params.datum

        self.a = params.a
        self.b = params.b
        self.rf = params.rf
        self.es = params.es
        self.e = params.e
        self.ep2 = params.ep2
        self.sphere = params.sphere

        self.x0 = params.x0 if params.x0 is not None else 0.0
        self.y0 = params.y0 if params.y0 is not None else 0.0
        self.k0 = params.k0 if params.k0 is not None else 1.0
        self.lat0 = params.lat0 if params.lat0 is not None else 0.0
        self.long0 = params.long0 if params.long0 is not None else 0.0
        self.lat1 = params.lat1
        self.lat2 = params.lat2
        self.lat_ts = params.lat_ts

        self.init()
        logger.debug(
            f"Built {type(self).__name__} ({params.proj_name}) "
            f"a={self.a} es={self.es:.12f} datum={self.datum.datum_type.name}"
        )

    def init(self) -> None:
        """Compute algorithm-specific constants. Called once."""
        pass

    @abstractmethod
    def forward(self, p: Point) -> Optional[Point]:
        """
        Project geodetic coordinates.

        Args:
            p: Longitude in x, latitude in y (radians)

        Returns:
            Projected point in meters, or None if not projectable
        """
        pass

    @abstractmethod
    def inverse(self, p: Point) -> Optional[Point]:
        """
        Unproject to geodetic coordinates.

        Args:
            p: Easting in x, northing in y (meters)

        Returns:
            Longitude in x, latitude in y (radians), or None
        """
        pass

    # -------------------------------------------------------------------------
    # Convenience accessors used by transform()
    # -------------------------------------------------------------------------

    @property
    def proj_name(self) -> str:
        return self.params.proj_name

    @property
    def is_latlong(self) -> bool:
        return False

    @property
    def is_geocentric(self) -> bool:
        return False

    @property
    def datum_code(self) -> Optional[str]:
        return self.params.datum_code

    @property
    def to_meter(self) -> Optional[float]:
        return self.params.to_meter

    @property
    def from_greenwich(self) -> float:
        return self.params.from_greenwich or 0.0

    @property
    def axis(self) -> str:
        return self.params.axis or 'enu'

    @property
    def is_spherical(self) -> bool:
        """True when the spherical code path is used."""
        return self.sphere or self.es < EPSLN

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params.proj_name!r})"
