"""
Parser for compact "+key=value" projection definitions.

Tokens are order-insensitive. A bare "+flag" is recorded as True.
Angles are converted to radians and numbers to floats; the result is a
flat mapping using the same names as the WKT normalizer produces.
"""

from typing import Any, Callable, Dict, Mapping

from ..config import D2R
from ..defs.units import PRIME_MERIDIANS, UNITS
from ..errors import DefinitionError

LEGAL_AXIS = 'ewnsud'


def _float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise DefinitionError(f"Parameter +{name} needs a number, got {value!r}")


def _angle(name: str) -> Callable[[Any], Dict[str, Any]]:
    def convert(value: Any) -> float:
        return _float(name, value) * D2R
    return convert


def _units(value: Any) -> Dict[str, Any]:
    out = {'units': value}
    to_meter = UNITS.get(str(value).lower())
    if to_meter is not None:
        out['to_meter'] = to_meter
    return out


def _prime_meridian(value: Any) -> Dict[str, Any]:
    offset = PRIME_MERIDIANS.get(str(value).lower())
    if offset is None:
        offset = _float('pm', value)
    return {'from_greenwich': offset * D2R}


def _nadgrids(value: Any) -> Dict[str, Any]:
    if value == '@null':
        return {'datumCode': 'none'}
    return {'nadgrids': value}


def _axis(value: Any) -> Dict[str, Any]:
    text = str(value)
    if (len(text) == 3 and all(c in LEGAL_AXIS for c in text)
            and len({c for c in text if c in 'ew'}) <= 1
            and len({c for c in text if c in 'ns'}) <= 1):
        return {'axis': text}
    return {}


def _towgs84(value: Any) -> Dict[str, Any]:
    try:
        return {'datum_params': [float(v) for v in str(value).split(',')]}
    except ValueError:
        raise DefinitionError(f"Invalid +towgs84 value: {value!r}")


def _radius(value: Any) -> Dict[str, Any]:
    r = _float('R', value)
    return {'a': r, 'b': r}


# Each handler returns a dict of output names to values
_HANDLERS: Mapping[str, Callable[[Any], Dict[str, Any]]] = {
    'proj': lambda v: {'projName': v},
    'datum': lambda v: {'datumCode': v},
    'ellps': lambda v: {'ellps': v},
    'title': lambda v: {'title': v},
    'rf': lambda v: {'rf': _float('rf', v)},
    'lat_0': lambda v: {'lat0': _angle('lat_0')(v)},
    'lat_1': lambda v: {'lat1': _angle('lat_1')(v)},
    'lat_2': lambda v: {'lat2': _angle('lat_2')(v)},
    'lat_ts': lambda v: {'lat_ts': _angle('lat_ts')(v)},
    'lon_0': lambda v: {'long0': _angle('lon_0')(v)},
    'lon_1': lambda v: {'long1': _angle('lon_1')(v)},
    'lon_2': lambda v: {'long2': _angle('lon_2')(v)},
    'lonc': lambda v: {'longc': _angle('lonc')(v)},
    'alpha': lambda v: {'alpha': _angle('alpha')(v)},
    'gamma': lambda v: {'gamma': _angle('gamma')(v)},
    'x_0': lambda v: {'x0': _float('x_0', v)},
    'y_0': lambda v: {'y0': _float('y_0', v)},
    'k_0': lambda v: {'k0': _float('k_0', v)},
    'k': lambda v: {'k0': _float('k', v)},
    'a': lambda v: {'a': _float('a', v)},
    'b': lambda v: {'b': _float('b', v)},
    'r': _radius,
    'r_a': lambda v: {'R_A': True},
    'zone': lambda v: {'zone': int(_float('zone', v))},
    'south': lambda v: {'utmSouth': True},
    'towgs84': _towgs84,
    'to_meter': lambda v: {'to_meter': _float('to_meter', v)},
    'units': _units,
    'from_greenwich': lambda v: {'from_greenwich': _angle('from_greenwich')(v)},
    'pm': _prime_meridian,
    'nadgrids': _nadgrids,
    'axis': _axis,
    'approx': lambda v: {'approx': True},
    'no_uoff': lambda v: {'no_uoff': True},
    'no_rot': lambda v: {'no_rot': True},
}


def tokenize(text: str) -> Dict[str, Any]:
    """
    Split a compact definition into a {key: value} mapping.

    Keys are lowercased; bare flags map to True.

    Args:
        text: Definition such as "+proj=utm +zone=30 +south"

    Returns:
        Mapping of raw keys to raw string values
    """
    tokens: Dict[str, Any] = {}
    for part in text.split('+'):
        part = part.strip()
        if not part:
            continue
        if '=' in part:
            key, value = part.split('=', 1)
            tokens[key.strip().lower()] = value.strip()
        else:
            tokens[part.lower()] = True
    return tokens


def parse_proj_string(text: str) -> Dict[str, Any]:
    """
    Parse a compact "+key=value" definition.

    Args:
        text: The definition string

    Returns:
        Flat mapping in normalized names (projName, datumCode, lat0, ...)

    Raises:
        DefinitionError: If the string has no +proj or a value is malformed
    """
    tokens = tokenize(text)
    if 'proj' not in tokens:
        raise DefinitionError(f"Definition has no +proj parameter: {text!r}")

    out: Dict[str, Any] = {}
    for key, value in tokens.items():
        handler = _HANDLERS.get(key)
        if handler is None:
            out[key] = value
        else:
            out.update(handler(value))

    datum_code = out.get('datumCode')
    if isinstance(datum_code, str) and datum_code != 'WGS84':
        out['datumCode'] = datum_code.lower()

    return out
