"""
Datum table.

towgs84 values are raw: translations in meters, rotations in
arc-seconds, scale in parts per million. They are scaled when a Datum
is resolved, not here.
"""

from typing import Dict

from ..models.datum import DatumDefinition


def _d(code: str, ellipse: str, towgs84=None, nadgrids=None, name: str = "") -> DatumDefinition:
    return DatumDefinition(
        code=code,
        ellipse=ellipse,
        towgs84=tuple(towgs84) if towgs84 is not None else None,
        nadgrids=nadgrids,
        name=name,
    )


DATUMS: Dict[str, DatumDefinition] = {d.code: d for d in [
    _d('wgs84', 'WGS84', (0, 0, 0), name='WGS84'),
    _d('ch1903', 'bessel', (674.374, 15.056, 405.346), name='swiss'),
    _d('ggrs87', 'GRS80', (-199.87, 74.79, 246.62), name='Greek_Geodetic_Reference_System_1987'),
    _d('nad83', 'GRS80', (0, 0, 0), name='North_American_Datum_1983'),
    _d('nad27', 'clrk66', nadgrids='@conus,@alaska,@ntv2_0.gsb,@ntv1_can.dat',
       name='North_American_Datum_1927'),
    _d('potsdam', 'bessel', (598.1, 73.7, 418.2, 0.202, 0.045, -2.455, 6.7), name='Potsdam Rauenberg 1950 DHDN'),
    _d('carthage', 'clrk80ign', (-263.0, 6.0, 431.0), name='Carthage 1934 Tunisia'),
    _d('hermannskogel', 'bessel', (577.326, 90.129, 463.919, 5.137, 1.474, 5.297, 2.4232),
       name='Hermannskogel'),
    _d('militargeographische_institut', 'bessel', (577.326, 90.129, 463.919, 5.137, 1.474, 5.297, 2.4232),
       name='Militar-Geographische Institut'),
    _d('osni52', 'airy', (482.530, -130.596, 564.557, -1.042, -0.214, -0.631, 8.15),
       name='Irish National'),
    _d('ire65', 'mod_airy', (482.530, -130.596, 564.557, -1.042, -0.214, -0.631, 8.15),
       name='Ireland 1965'),
    _d('rassadiran', 'intl', (-133.63, -157.5, -158.62), name='Rassadiran'),
    _d('nzgd49', 'intl', (59.47, -5.04, 187.44, 0.47, -0.1, 1.024, -4.5993),
       name='New Zealand Geodetic Datum 1949'),
    _d('osgb36', 'airy', (446.448, -125.157, 542.060, 0.1502, 0.2470, 0.8421, -20.4894),
       name='Ordnance Survey of Great Britain 1936'),
    _d('s_jtsk', 'bessel', (589, 76, 480), name='S-JTSK (Ferro)'),
    _d('beduaram', 'clrk80', (-106, -87, 188), name='Beduaram'),
    _d('gunung_segara', 'bessel', (-403, 684, 41), name='Gunung Segara Jakarta'),
    _d('rnb72', 'intl', (106.869, -52.2978, 103.724, -0.33657, 0.456955, -1.84218, 1),
       name='Reseau National Belge 1972'),
    _d('isr93', 'GRS80', (-48, 55, 52), name='Israel 1993'),
]}
