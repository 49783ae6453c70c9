"""
Projection definition parsing.

parse_definition decides which of the three accepted forms a string is
(registered name, compact "+key=value" flags, hierarchical WKT) and
returns normalized ProjParams.
"""

from typing import Any, Dict, Mapping, Optional
import re

from ..errors import DefinitionError
from ..models.params import ProjParams
from .proj_string import parse_proj_string, tokenize
from .wkt import parse_wkt, reduce_tree, normalize_wkt, canonical_datum_code
from .wkt_scanner import scan_wkt, ScanState

_WKT_START = re.compile(r'^\s*[A-Za-z_][A-Za-z0-9_]*\s*[\[(]')


def parse_to_mapping(
    text: str,
    named: Optional[Mapping[str, str]] = None,
    _depth: int = 0
) -> Dict[str, Any]:
    """
    Parse a definition string into a flat parameter mapping.

    Args:
        text: Registered name, "+proj=..." string or WKT
        named: Registered definitions, looked up before anything else

    Returns:
        Flat mapping using compact-format names

    Raises:
        DefinitionError: Empty input, unknown name or malformed text
    """
    if not isinstance(text, str) or not text.strip():
        raise DefinitionError(f"{text!r} is not a valid specification")

    stripped = text.strip()
    if _depth > 4:
        raise DefinitionError(f"Definition {stripped!r} refers to itself")

    if named and stripped in named:
        return parse_to_mapping(named[stripped], named, _depth + 1)

    if named:
        upper = stripped.upper()
        for key in named:
            if key.upper() == upper:
                return parse_to_mapping(named[key], named, _depth + 1)

    if stripped.startswith('+'):
        return parse_proj_string(stripped)

    if _WKT_START.match(stripped):
        return parse_wkt(stripped)

    raise DefinitionError(f"Unknown projection definition: {stripped!r}")


def parse_definition(text: str, named: Optional[Mapping[str, str]] = None) -> ProjParams:
    """Parse a definition string into (unresolved) ProjParams."""
    return ProjParams.from_mapping(parse_to_mapping(text, named))


__all__ = [
    'parse_definition',
    'parse_to_mapping',
    'parse_proj_string',
    'tokenize',
    'parse_wkt',
    'scan_wkt',
    'ScanState',
    'reduce_tree',
    'normalize_wkt',
    'canonical_datum_code',
]
