"""
Reference ellipsoid table.

Keys are the short codes used by "+ellps=" (matched case-insensitively
with underscores ignored). Values give the semi-major axis and either
the reciprocal flattening or the semi-minor axis.
"""

from typing import Dict

from ..models.datum import Ellipsoid


def _e(code: str, a: float, rf: float = None, b: float = None, name: str = "") -> Ellipsoid:
    return Ellipsoid(code=code, a=a, rf=rf, b=b, name=name)


ELLIPSOIDS: Dict[str, Ellipsoid] = {e.code: e for e in [
    _e('MERIT', 6378137.0, rf=298.257, name='MERIT 1983'),
    _e('SGS85', 6378136.0, rf=298.257, name='Soviet Geodetic System 85'),
    _e('GRS80', 6378137.0, rf=298.257222101, name='GRS 1980(IUGG, 1980)'),
    _e('IAU76', 6378140.0, rf=298.257, name='IAU 1976'),
    _e('airy', 6377563.396, b=6356256.910, name='Airy 1830'),
    _e('APL4', 6378137.0, rf=298.25, name='Appl. Physics. 1965'),
    _e('NWL9D', 6378145.0, rf=298.25, name='Naval Weapons Lab., 1965'),
    _e('mod_airy', 6377340.189, b=6356034.446, name='Modified Airy'),
    _e('andrae', 6377104.43, rf=300.0, name='Andrae 1876 (Den., Iclnd.)'),
    _e('aust_SA', 6378160.0, rf=298.25, name='Australian Natl & S. Amer. 1969'),
    _e('GRS67', 6378160.0, rf=298.2471674270, name='GRS 67(IUGG 1967)'),
    _e('bessel', 6377397.155, rf=299.1528128, name='Bessel 1841'),
    _e('bess_nam', 6377483.865, rf=299.1528128, name='Bessel 1841 (Namibia)'),
    _e('clrk66', 6378206.4, b=6356583.8, name='Clarke 1866'),
    _e('clrk80', 6378249.145, rf=293.4663, name='Clarke 1880 mod.'),
    _e('clrk80ign', 6378249.2, b=6356515, rf=293.4660213, name='Clarke 1880 (IGN)'),
    _e('clrk58', 6378293.645208759, rf=294.2606763692654, name='Clarke 1858'),
    _e('CPM', 6375738.7, rf=334.29, name='Comm. des Poids et Mesures 1799'),
    _e('delmbr', 6376428.0, rf=311.5, name='Delambre 1810 (Belgium)'),
    _e('engelis', 6378136.05, rf=298.2566, name='Engelis 1985'),
    _e('evrst30', 6377276.345, rf=300.8017, name='Everest 1830'),
    _e('evrst48', 6377304.063, rf=300.8017, name='Everest 1948'),
    _e('evrst56', 6377301.243, rf=300.8017, name='Everest 1956'),
    _e('evrst69', 6377295.664, rf=300.8017, name='Everest 1969'),
    _e('evrstSS', 6377298.556, rf=300.8017, name='Everest (Sabah & Sarawak)'),
    _e('fschr60', 6378166.0, rf=298.3, name='Fischer (Mercury Datum) 1960'),
    _e('fschr60m', 6378155.0, rf=298.3, name='Fischer 1960'),
    _e('fschr68', 6378150.0, rf=298.3, name='Fischer 1968'),
    _e('helmert', 6378200.0, rf=298.3, name='Helmert 1906'),
    _e('hough', 6378270.0, rf=297.0, name='Hough'),
    _e('intl', 6378388.0, rf=297.0, name='International 1909 (Hayford)'),
    _e('kaula', 6378163.0, rf=298.24, name='Kaula 1961'),
    _e('lerch', 6378139.0, rf=298.257, name='Lerch 1979'),
    _e('mprts', 6397300.0, rf=191.0, name='Maupertius 1738'),
    _e('new_intl', 6378157.5, b=6356772.2, name='New International 1967'),
    _e('plessis', 6376523.0, b=6355863.0, name='Plessis 1817 (France)'),
    _e('krass', 6378245.0, rf=298.3, name='Krassovsky, 1942'),
    _e('SEasia', 6378155.0, b=6356773.3205, name='Southeast Asia'),
    _e('walbeck', 6376896.0, b=6355834.8467, name='Walbeck'),
    _e('WGS60', 6378165.0, rf=298.3, name='WGS 60'),
    _e('WGS66', 6378145.0, rf=298.25, name='WGS 66'),
    _e('WGS7', 6378135.0, rf=298.26, name='WGS 72'),
    _e('WGS84', 6378137.0, rf=298.257223563, name='WGS 84'),
    _e('sphere', 6370997.0, b=6370997.0, name='Normal Sphere (r=6370997)'),
]}

WGS84_ELLIPSOID = ELLIPSOIDS['WGS84']
