"""
WKT reduction and normalization.

Two pure stages sit on top of the scanner:

1. reduce_tree: nested lists -> nested dicts keyed by WKT keyword
   (PROJCS, GEOGCS, DATUM, SPHEROID, PARAMETER values, ...). Unknown
   keywords are kept as nested dicts.
2. normalize_wkt: nested dicts -> flat mapping with the names the
   compact parser uses (projName, datumCode, ellps, a, rf, units,
   axis, datum_params, lat0, x0, ...).
"""

from typing import Any, Callable, Dict, List, Tuple
import logging

from ..config import D2R
from .wkt_scanner import scan_wkt

logger = logging.getLogger(__name__)

# Groups whose first value is the group's name
_NAMED_GROUPS = frozenset([
    'PROJECTEDCRS', 'PROJCRS', 'GEOGCS', 'GEOCCS', 'PROJCS', 'LOCAL_CS',
    'GEODCRS', 'GEODETICCRS', 'GEODETICDATUM', 'EDATUM', 'ENGINEERINGDATUM',
    'VERT_CS', 'VERTCRS', 'VERTICALCRS', 'COMPD_CS', 'COMPOUNDCRS',
    'ENGINEERINGCRS', 'ENGCRS', 'FITTED_CS', 'LOCAL_DATUM', 'DATUM',
])


# =============================================================================
# TREE REDUCTION
# =============================================================================

def reduce_tree(tree: List[Any]) -> Dict[str, Any]:
    """
    Reduce a scanned WKT tree to nested dicts.

    Args:
        tree: Output of scan_wkt, e.g. ['PROJCS', 'name', [...], ...]

    Returns:
        Dict with 'type' and 'name' plus one entry per child keyword
    """
    obj: Dict[str, Any] = {'type': tree[0]}
    rest = tree[1:]
    if rest and not isinstance(rest[0], list):
        obj['name'] = rest[0]
        rest = rest[1:]
    for child in rest:
        _reduce_item(child, obj)
    return obj


def _reduce_group(items: List[Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for item in items:
        _reduce_item(item, out)
    return out


def _reduce_item(item: Any, obj: Dict[str, Any]) -> None:
    if not isinstance(item, list):
        obj[item] = True
        return

    values = list(item)
    key = values.pop(0)
    if key == 'PARAMETER' and values:
        key = values.pop(0)

    if not values:
        obj[key] = True
        return

    if len(values) == 1:
        if isinstance(values[0], list):
            obj[key] = _reduce_group(values)
        else:
            obj[key] = values[0]
        return

    if key == 'TOWGS84':
        obj[key] = [float(v) for v in values]
        return

    if key == 'AXIS':
        obj.setdefault(key, []).append(values)
        return

    if key in ('UNIT', 'PRIMEM', 'VERT_DATUM'):
        group = {'name': str(values[0]).lower(), 'convert': values[1]}
        for extra in values[2:]:
            _reduce_item(extra, group)
        obj[key] = group
        return

    if key in ('SPHEROID', 'ELLIPSOID'):
        group = {'name': values[0], 'a': values[1], 'rf': values[2]}
        for extra in values[3:]:
            _reduce_item(extra, group)
        obj[key] = group
        return

    if key in _NAMED_GROUPS:
        group = {'name': values[0]}
        for extra in values[1:]:
            _reduce_item(extra, group)
        obj[key] = group
        return

    if all(isinstance(v, list) for v in values):
        obj[key] = _reduce_group(values)
        return

    # Leaf list such as AUTHORITY["EPSG","27700"] -> {'EPSG': '27700'}
    group: Dict[str, Any] = {}
    _reduce_item(values, group)
    obj[key] = group


# =============================================================================
# NORMALIZATION
# =============================================================================

def _axis_order(axes: List[List[Any]]) -> str:
    order = ''
    for axis in axes:
        name = str(axis[0]).lower()
        direction = str(axis[1]).lower() if len(axis) > 1 else ''
        if 'north' in name or (name in ('y', 'lat') and direction == 'north'):
            order += 'n'
        elif 'south' in name or (name in ('y', 'lat') and direction == 'south'):
            order += 's'
        elif 'east' in name or (name in ('x', 'lon') and direction == 'east'):
            order += 'e'
        elif 'west' in name or (name in ('x', 'lon') and direction == 'west'):
            order += 'w'
        elif direction in ('north', 'south', 'east', 'west'):
            order += direction[0]
    if len(order) == 2:
        order += 'u'
    return order


def canonical_datum_code(name: str, projection: Any = None) -> Tuple[str, bool]:
    """
    Map a WKT datum name to a datum table code.

    Returns:
        (code, sphere) where sphere is True for the Web Mercator
        auxiliary sphere convention
    """
    code = name.lower()
    sphere = False
    if code.startswith('d_'):
        code = code[2:]
    if code in ('new_zealand_geodetic_datum_1949', 'new_zealand_1949'):
        code = 'nzgd49'
    if code in ('wgs_1984', 'world_geodetic_system_1984'):
        if projection == 'Mercator_Auxiliary_Sphere':
            sphere = True
        code = 'wgs84'
    if code.endswith('_ferro'):
        code = code[:-6]
    if code.endswith('_jakarta'):
        code = code[:-8]
    if 'belge' in code:
        code = 'rnb72'
    if 'osgb_1936' in code:
        code = 'osgb36'
    if 'osni_1952' in code:
        code = 'osni52'
    if 'tm65' in code or 'geodetic_datum_of_1965' in code:
        code = 'ire65'
    if code == 'ch1903+':
        code = 'ch1903'
    if 'israel' in code:
        code = 'isr93'
    return code, sphere


def _ellipsoid_code(name: str) -> str:
    code = name.replace('_19', '', 1)
    if code.lower().startswith('clarke_18'):
        code = 'clrk' + code[len('clarke_18'):]
    if code.lower().startswith('international'):
        code = 'intl'
    return code


def _d2r(value: Any, wkt: Dict[str, Any]) -> float:
    return float(value) * D2R


def _to_meter(value: Any, wkt: Dict[str, Any]) -> float:
    return float(value) * wkt.get('to_meter', 1.0)


def _same(value: Any, wkt: Dict[str, Any]) -> Any:
    return value


# (output name, input name, converter taking (value, wkt))
_RENAMES: List[Tuple[str, str, Callable[[Any, Dict[str, Any]], Any]]] = [
    ('standard_parallel_1', 'Standard_Parallel_1', _same),
    ('standard_parallel_1', 'Latitude of 1st standard parallel', _same),
    ('standard_parallel_2', 'Standard_Parallel_2', _same),
    ('standard_parallel_2', 'Latitude of 2nd standard parallel', _same),
    ('false_easting', 'False_Easting', _same),
    ('false_easting', 'False easting', _same),
    ('false_easting', 'Easting at false origin', _same),
    ('false_northing', 'False_Northing', _same),
    ('false_northing', 'False northing', _same),
    ('false_northing', 'Northing at false origin', _same),
    ('central_meridian', 'Central_Meridian', _same),
    ('central_meridian', 'Longitude of natural origin', _same),
    ('central_meridian', 'Longitude of false origin', _same),
    ('latitude_of_origin', 'Latitude_Of_Origin', _same),
    ('latitude_of_origin', 'Central_Parallel', _same),
    ('latitude_of_origin', 'Latitude of natural origin', _same),
    ('latitude_of_origin', 'Latitude of false origin', _same),
    ('scale_factor', 'Scale_Factor', _same),
    ('k0', 'scale_factor', lambda v, w: float(v)),
    ('latitude_of_center', 'Latitude_Of_Center', _same),
    ('latitude_of_center', 'Latitude_of_center', _same),
    ('lat0', 'latitude_of_center', _d2r),
    ('longitude_of_center', 'Longitude_Of_Center', _same),
    ('longitude_of_center', 'Longitude_of_center', _same),
    ('longc', 'longitude_of_center', _d2r),
    ('x0', 'false_easting', _to_meter),
    ('y0', 'false_northing', _to_meter),
    ('long0', 'central_meridian', _d2r),
    ('lat0', 'latitude_of_origin', _d2r),
    ('lat0', 'standard_parallel_1', _d2r),
    ('lat1', 'standard_parallel_1', _d2r),
    ('lat2', 'standard_parallel_2', _d2r),
    ('azimuth', 'Azimuth', _same),
    ('alpha', 'azimuth', _d2r),
    ('gamma', 'rectified_grid_angle', _d2r),
    ('srsCode', 'name', _same),
]


def normalize_wkt(obj: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten a reduced WKT tree into compact-format parameter names.

    Args:
        obj: Output of reduce_tree

    Returns:
        A new dict; the input is not modified
    """
    wkt = dict(obj)
    wkt_type = wkt.get('type')

    if wkt_type == 'GEOGCS':
        wkt['projName'] = 'longlat'
    elif wkt_type == 'LOCAL_CS':
        wkt['projName'] = 'identity'
        wkt['local'] = True
    else:
        projection = wkt.get('PROJECTION')
        if isinstance(projection, dict):
            wkt['projName'] = next(iter(projection), '')
        else:
            wkt['projName'] = projection

    if wkt.get('AXIS'):
        order = _axis_order(wkt['AXIS'])
        if len(order) == 3:
            wkt['axis'] = order

    unit = wkt.get('UNIT')
    if isinstance(unit, dict):
        units = unit['name'].lower()
        wkt['units'] = 'meter' if units == 'metre' else units
        convert = unit.get('convert')
        if convert:
            if wkt_type == 'GEOGCS':
                spheroid = (wkt.get('DATUM') or {}).get('SPHEROID')
                if spheroid:
                    wkt['to_meter'] = float(convert) * float(spheroid['a'])
            else:
                wkt['to_meter'] = float(convert)

    geogcs = wkt if wkt_type == 'GEOGCS' else wkt.get('GEOGCS')
    if isinstance(geogcs, dict):
        datum = geogcs.get('DATUM')
        datum_name = datum['name'] if isinstance(datum, dict) else geogcs.get('name', '')
        code, sphere = canonical_datum_code(str(datum_name), wkt.get('PROJECTION'))
        wkt['datumCode'] = code
        if sphere:
            wkt['sphere'] = True
        if isinstance(datum, dict):
            spheroid = datum.get('SPHEROID')
            if isinstance(spheroid, dict):
                wkt['ellps'] = _ellipsoid_code(str(spheroid['name']))
                wkt['a'] = float(spheroid['a'])
                wkt['rf'] = float(spheroid['rf'])
            if datum.get('TOWGS84'):
                wkt['datum_params'] = list(datum['TOWGS84'])

    for out_name, in_name, convert in _RENAMES:
        if out_name not in wkt and in_name in wkt:
            wkt[out_name] = convert(wkt[in_name], wkt)

    if ('long0' not in wkt and 'longc' in wkt
            and wkt['projName'] in ('Albers_Conic_Equal_Area', 'Lambert_Azimuthal_Equal_Area')):
        wkt['long0'] = wkt['longc']

    if ('lat_ts' not in wkt and wkt.get('lat1')
            and wkt['projName'] in ('Stereographic_South_Pole', 'Polar Stereographic (variant B)')):
        wkt['lat0'] = (90.0 if wkt['lat1'] > 0 else -90.0) * D2R
        wkt['lat_ts'] = wkt['lat1']

    logger.debug(f"Normalized WKT {wkt.get('name')!r} as {wkt.get('projName')}")
    return wkt


def parse_wkt(text: str) -> Dict[str, Any]:
    """Scan, reduce and normalize a WKT definition."""
    return normalize_wkt(reduce_tree(scan_wkt(text)))
