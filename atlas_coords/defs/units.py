"""
Prime meridians and linear units.
"""

from typing import Dict


# Prime meridian offsets from Greenwich, in degrees
PRIME_MERIDIANS: Dict[str, float] = {
    'greenwich': 0.0,
    'lisbon': -9.131906111111,
    'paris': 2.337229166667,
    'bogota': -74.080916666667,
    'madrid': -3.687938888889,
    'rome': 12.452333333333,
    'bern': 7.439583333333,
    'jakarta': 106.807719444444,
    'ferro': -17.666666666667,
    'brussels': 4.367975,
    'stockholm': 18.058277777778,
    'athens': 23.7163375,
    'oslo': 10.722916666667,
}

# Linear units, meters per unit
UNITS: Dict[str, float] = {
    'm': 1.0,
    'meter': 1.0,
    'metre': 1.0,
    'km': 1000.0,
    'ft': 0.3048,
    'us-ft': 1200.0 / 3937.0,
    'us_ft': 1200.0 / 3937.0,
    'yd': 0.9144,
    'mi': 1609.344,
}
