"""
Resolution of ellipsoid and datum for parsed parameters.

resolve_params is the last stage of the definition pipeline: it takes
parsed ProjParams and returns a new record with the ellipsoid axes,
eccentricities and a fully built Datum filled in, falling back to
WGS84 for anything left unset.
"""

from typing import Mapping, Optional, Sequence, Tuple
import logging
import math

from ..config import DEFAULT_CONFIG, EPSLN, RA4, RA6, SEC_TO_RAD, SIXTH, CoordsConfig
from ..defs import WGS84_ELLIPSOID, lookup
from ..models.datum import Datum, DatumDefinition, DatumType, Ellipsoid, GridRef
from ..models.params import ProjParams
from .ntv2 import parse_nadgrids

logger = logging.getLogger(__name__)


def build_datum(
    datum_code: Optional[str],
    datum_params: Optional[Sequence[float]],
    a: float,
    b: float,
    es: float,
    ep2: float,
    grids: Tuple[GridRef, ...] = ()
) -> Datum:
    """
    Build a Datum, classifying it by its shift parameters.

    No datum code (or "none") gives NODATUM unless shift parameters or
    grids say otherwise. Non-zero translations make it 3-parameter;
    any non-zero rotation or scale makes it 7-parameter, with rotations
    converted from arc-seconds to radians and scale from ppm to a
    multiplier. Grids override everything.
    """
    if datum_code is None or datum_code == 'none':
        datum_type = DatumType.NODATUM
    else:
        datum_type = DatumType.WGS84

    params: Tuple[float, ...] = ()
    if datum_params:
        values = [float(v) for v in datum_params]
        if values[0] != 0 or values[1] != 0 or values[2] != 0:
            datum_type = DatumType.PARAM_3
        if len(values) > 3 and any(v != 0 for v in values[3:7]):
            datum_type = DatumType.PARAM_7
            values[3] *= SEC_TO_RAD
            values[4] *= SEC_TO_RAD
            values[5] *= SEC_TO_RAD
            values[6] = (values[6] / 1000000.0) + 1.0
        params = tuple(values)

    if grids:
        datum_type = DatumType.GRIDSHIFT

    return Datum(datum_type=datum_type, a=a, b=b, es=es, ep2=ep2, params=params, grids=grids)


def _sphere(
    params: ProjParams,
    ellipsoids: Mapping[str, Ellipsoid],
    default_ellipsoid: str
) -> Tuple[float, float, Optional[float], bool]:
    a, b, rf, sphere = params.a, params.b, params.rf, params.sphere
    if not a:
        ellipse = lookup(ellipsoids, params.ellps or default_ellipsoid)
        if ellipse is None:
            logger.debug(f"Unknown ellipsoid {params.ellps!r}; using WGS84")
            ellipse = WGS84_ELLIPSOID
        a, b, rf = ellipse.a, ellipse.b, ellipse.rf
    if rf and not b:
        b = (1.0 - 1.0 / rf) * a
    if b is None:
        b = a
    if rf == 0 or abs(a - b) < EPSLN:
        sphere = True
        b = a
    return a, b, rf, sphere


def _eccentricity(a: float, b: float, r_a: bool) -> Tuple[float, float, float, float]:
    a2 = a * a
    b2 = b * b
    es = (a2 - b2) / a2
    e = 0.0
    if r_a:
        a *= 1 - es * (SIXTH + es * (RA4 + es * RA6))
        a2 = a * a
        es = 0.0
    else:
        e = math.sqrt(es)
    ep2 = (a2 - b2) / b2
    return a, es, e, ep2


def resolve_params(
    params: ProjParams,
    ellipsoids: Mapping[str, Ellipsoid],
    datums: Mapping[str, DatumDefinition],
    config: CoordsConfig = DEFAULT_CONFIG
) -> ProjParams:
    """
    Fill in ellipsoid, eccentricities and datum.

    Args:
        params: Parsed parameters
        ellipsoids: Ellipsoid table
        datums: Datum table

    Returns:
        A new, resolved ProjParams
    """
    if params.is_resolved():
        return params

    datum_params = params.datum_params
    ellps = params.ellps
    nadgrids = params.nadgrids
    datum_name = params.datum_name

    definition = None
    if params.datum_code and params.datum_code != 'none':
        definition = lookup(datums, params.datum_code)
    if definition is not None:
        datum_params = datum_params or definition.towgs84
        ellps = definition.ellipse
        nadgrids = nadgrids or definition.nadgrids
        datum_name = definition.name or params.datum_code

    staged = params.with_values(
        datum_params=tuple(datum_params) if datum_params else None,
        ellps=ellps or config.default_ellipsoid,
        nadgrids=nadgrids,
        datum_name=datum_name,
        k0=params.k0 if params.k0 else 1.0,
        axis=params.axis or 'enu',
        lat1=params.lat1 if params.lat1 is not None else params.lat0,
    )

    a, b, rf, sphere = _sphere(staged, ellipsoids, config.default_ellipsoid)
    a, es, e, ep2 = _eccentricity(a, b, staged.r_a)
    if staged.r_a:
        b = a
        sphere = True

    datum = build_datum(
        staged.datum_code, staged.datum_params, a, b, es, ep2, parse_nadgrids(nadgrids)
    )

    return staged.with_values(
        a=a, b=b, rf=rf, sphere=sphere, es=es, e=e, ep2=ep2, datum=datum
    )
