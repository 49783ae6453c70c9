"""
Normalized projection parameters.

ProjParams is the single record passed from the definition parsers to
projection construction. Parsers produce it from a flat mapping of
compact-format names (projName, datumCode, lat0, ...); resolution then
returns a new record with the ellipsoid, eccentricities and datum
filled in. Records are never mutated.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from .datum import Datum


# Mapping from the flat names used by both parsers to field names
_FIELD_NAMES = {
    'projName': 'proj_name',
    'datumCode': 'datum_code',
    'datumName': 'datum_name',
    'datum_params': 'datum_params',
    'nadgrids': 'nadgrids',
    'ellps': 'ellps',
    'a': 'a',
    'b': 'b',
    'rf': 'rf',
    'R_A': 'r_a',
    'sphere': 'sphere',
    'lat0': 'lat0',
    'lat1': 'lat1',
    'lat2': 'lat2',
    'lat_ts': 'lat_ts',
    'long0': 'long0',
    'long1': 'long1',
    'long2': 'long2',
    'longc': 'longc',
    'alpha': 'alpha',
    'gamma': 'gamma',
    'x0': 'x0',
    'y0': 'y0',
    'k0': 'k0',
    'zone': 'zone',
    'utmSouth': 'utm_south',
    'to_meter': 'to_meter',
    'units': 'units',
    'from_greenwich': 'from_greenwich',
    'axis': 'axis',
    'approx': 'approx',
    'no_uoff': 'no_uoff',
    'no_rot': 'no_rot',
    'srsCode': 'srs_code',
    'title': 'title',
}


@dataclass(frozen=True)
class ProjParams:
    """
    Normalized, immutable projection parameters.

    Angles are radians, distances meters. Fields left as None fall back
    to defaults during resolution (WGS84, k0 = 1, axis "enu").
    """
    proj_name: str = ""
    datum_code: Optional[str] = None
    datum_name: Optional[str] = None
    datum_params: Optional[Tuple[float, ...]] = None
    nadgrids: Optional[str] = None
    ellps: Optional[str] = None
    a: Optional[float] = None
    b: Optional[float] = None
    rf: Optional[float] = None
    r_a: bool = False
    sphere: bool = False

    lat0: Optional[float] = None
    lat1: Optional[float] = None
    lat2: Optional[float] = None
    lat_ts: Optional[float] = None
    long0: Optional[float] = None
    long1: Optional[float] = None
    long2: Optional[float] = None
    longc: Optional[float] = None
    alpha: Optional[float] = None
    gamma: Optional[float] = None

    x0: Optional[float] = None
    y0: Optional[float] = None
    k0: Optional[float] = None
    zone: Optional[int] = None
    utm_south: bool = False

    to_meter: Optional[float] = None
    units: Optional[str] = None
    from_greenwich: Optional[float] = None
    axis: Optional[str] = None
    approx: bool = False
    no_uoff: bool = False
    no_rot: bool = False

    srs_code: Optional[str] = None
    title: Optional[str] = None

    # Derived during resolution
    es: Optional[float] = None
    e: Optional[float] = None
    ep2: Optional[float] = None
    datum: Optional[Datum] = None

    # Anything the parsers found that has no field of its own
    extras: Dict[str, Any] = field(default_factory=dict, compare=False)

    @staticmethod
    def from_mapping(values: Mapping[str, Any]) -> 'ProjParams':
        """Build parameters from a flat mapping of compact-format names."""
        kwargs: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        for key, value in values.items():
            name = _FIELD_NAMES.get(key)
            if name is None:
                extras[key] = value
            elif name == 'datum_params' and value is not None:
                kwargs[name] = tuple(float(v) for v in value)
            else:
                kwargs[name] = value
        return ProjParams(extras=extras, **kwargs)

    def with_values(self, **changes: Any) -> 'ProjParams':
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    def is_resolved(self) -> bool:
        """True once the ellipsoid and datum have been filled in."""
        return self.datum is not None and self.es is not None
