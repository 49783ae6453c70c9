"""
Named projection definitions seeded into every projection context.

The British Isles systems used by the grid reference utilities are
here, keyed both by EPSG code and by the short region codes used by the
map renderers (gb, ir, ci, wg).
"""

from typing import Dict


WGS84_DEF = '+title=WGS 84 (long/lat) +proj=longlat +ellps=WGS84 +datum=WGS84 +units=degrees'

NAD83_DEF = '+title=NAD83 (long/lat) +proj=longlat +a=6378137.0 +b=6356752.31414036 +ellps=GRS80 +datum=NAD83 +units=degrees'

WEB_MERCATOR_DEF = (
    '+title=WGS 84 / Pseudo-Mercator +proj=merc +a=6378137 +b=6378137 +lat_ts=0.0 +lon_0=0.0 '
    '+x_0=0.0 +y_0=0 +k=1.0 +units=m +nadgrids=@null +wktext +no_defs'
)

# British National Grid
OSGB_DEF = (
    '+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996012717 +x_0=400000 +y_0=-100000 '
    '+ellps=airy +towgs84=446.448,-125.157,542.06,0.15,0.247,0.842,-20.489 +units=m +no_defs'
)

# Irish Grid (TM75)
IRISH_GRID_DEF = (
    '+proj=tmerc +lat_0=53.5 +lon_0=-8 +k=1.000035 +x_0=200000 +y_0=250000 '
    '+ellps=mod_airy +towgs84=482.5,-130.6,564.6,-1.042,-0.214,-0.631,8.15 +units=m +no_defs'
)

# Irish Transverse Mercator
ITM_DEF = (
    '+proj=tmerc +lat_0=53.5 +lon_0=-8 +k=0.99982 +x_0=600000 +y_0=750000 '
    '+ellps=GRS80 +towgs84=0,0,0,0,0,0,0 +units=m +no_defs'
)

# UTM zone 30N, used for the Channel Islands
UTM30N_DEF = '+proj=utm +zone=30 +ellps=WGS84 +datum=WGS84 +units=m +no_defs'

# ETRS89 / LAEA Europe
LAEA_EUROPE_DEF = (
    '+proj=laea +lat_0=52 +lon_0=10 +x_0=4321000 +y_0=3210000 '
    '+ellps=GRS80 +towgs84=0,0,0,0,0,0,0 +units=m +no_defs'
)

NAMED_DEFINITIONS: Dict[str, str] = {
    'WGS84': WGS84_DEF,
    'EPSG:4326': WGS84_DEF,
    'EPSG:4269': NAD83_DEF,
    'EPSG:3857': WEB_MERCATOR_DEF,
    'EPSG:3785': WEB_MERCATOR_DEF,
    'GOOGLE': WEB_MERCATOR_DEF,
    'EPSG:900913': WEB_MERCATOR_DEF,
    'EPSG:102113': WEB_MERCATOR_DEF,
    'EPSG:27700': OSGB_DEF,
    'EPSG:29903': IRISH_GRID_DEF,
    'EPSG:2157': ITM_DEF,
    'EPSG:32630': UTM30N_DEF,
    'EPSG:3035': LAEA_EUROPE_DEF,
}

# Region codes used by grid references and the renderers
REGION_DEFINITIONS: Dict[str, str] = {
    'gb': 'EPSG:27700',
    'ir': 'EPSG:29903',
    'ci': 'EPSG:32630',
    'wg': 'EPSG:4326',
}
