"""
Projection registry.

Every algorithm is listed once in ProjectionKind. Names are matched
case-insensitively against each class's `names`, so "tmerc",
"Transverse_Mercator" and "TMERC" all select the same algorithm.
"""

from enum import Enum
from typing import Dict, Optional, Type
import logging

from ..errors import DefinitionError
from ..models.params import ProjParams
from .azimuthal import AzimuthalEquidistant, Gnomonic, LambertAzimuthalEqualArea, Orthographic
from .base import Projection
from .cassini import Cassini
from .conic import AlbersEqualArea, EquidistantConic, LambertConformalConic
from .cylindrical import CylindricalEqualArea, EquidistantCylindrical
from .krovak import Krovak
from .longlat import Geocentric, LongLat
from .mercator import Mercator, MillerCylindrical
from .oblique import HotineObliqueMercator, SwissObliqueMercator
from .polyconic import NewZealandMapGrid, Polyconic
from .stereographic import ObliqueStereographic, Stereographic
from .transverse_mercator import (
    ExtendedTransverseMercator,
    FastTransverseMercator,
    UniversalTransverseMercator,
)
from .world import EqualEarth, Mollweide, Robinson, Sinusoidal, VanDerGrinten

logger = logging.getLogger(__name__)


class ProjectionKind(Enum):
    """Supported projection algorithms."""
    LONGLAT = LongLat
    GEOCENT = Geocentric
    MERC = Mercator
    MILL = MillerCylindrical
    TMERC_FAST = FastTransverseMercator
    ETMERC = ExtendedTransverseMercator
    UTM = UniversalTransverseMercator
    LCC = LambertConformalConic
    AEA = AlbersEqualArea
    EQDC = EquidistantConic
    STERE = Stereographic
    STEREA = ObliqueStereographic
    OMERC = HotineObliqueMercator
    SOMERC = SwissObliqueMercator
    KROVAK = Krovak
    CASS = Cassini
    LAEA = LambertAzimuthalEqualArea
    AEQD = AzimuthalEquidistant
    GNOM = Gnomonic
    ORTHO = Orthographic
    CEA = CylindricalEqualArea
    EQC = EquidistantCylindrical
    SINU = Sinusoidal
    MOLL = Mollweide
    ROBIN = Robinson
    EQEARTH = EqualEarth
    VANDG = VanDerGrinten
    POLY = Polyconic
    NZMG = NewZealandMapGrid

    @property
    def projection_class(self) -> Type[Projection]:
        return self.value


def _build_alias_table() -> Dict[str, ProjectionKind]:
    table: Dict[str, ProjectionKind] = {}
    for kind in ProjectionKind:
        for name in kind.projection_class.names:
            key = name.lower()
            if key in table and table[key] is not kind:
                raise DefinitionError(
                    f"Projection name {name!r} claimed by {table[key].name} and {kind.name}"
                )
            table[key] = kind
    return table


_ALIASES = _build_alias_table()


def find_kind(name: Optional[str]) -> Optional[ProjectionKind]:
    """Look up a projection algorithm by any of its names."""
    if not name:
        return None
    return _ALIASES.get(name.strip().lower())


def create_projection(params: ProjParams) -> Projection:
    """
    Build a projection from resolved parameters.

    Args:
        params: Resolved ProjParams (see datum.resolve_params)

    Returns:
        The initialized Projection

    Raises:
        DefinitionError: Unknown projection name, or parameters the
            algorithm cannot work with
    """
    kind = find_kind(params.proj_name)
    if kind is None:
        raise DefinitionError(f"Unknown projection: {params.proj_name!r}")
    logger.debug(f"Projection {params.proj_name!r} -> {kind.name}")
    return kind.projection_class(params)
