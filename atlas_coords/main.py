"""
Atlas Coords - Main CLI

Reprojects coordinates, resolves grid references and encodes MGRS.

Usage:
    python -m atlas_coords.main transform --from DEF --to DEF X Y [Z]
    python -m atlas_coords.main gridref GR [--to gb|ir|ci|wg]
    python -m atlas_coords.main mgrs LAT LON [--digits N]

Example:
    python -m atlas_coords.main transform --from EPSG:4326 --to EPSG:27700 1.716 52.658
"""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import CoordsConfig
from .context import ProjectionContext
from .errors import AtlasCoordsError
from .grids import centroid_of, check_grid_reference, mgrs_encode, mgrs_to_point

logger = logging.getLogger(__name__)


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    loading_grids: bool = False
) -> None:
    """
    Send log records to stderr and, optionally, to a file.

    stdout carries only results, so the console shows warnings unless
    NTv2 grids are being loaded (INFO, to report what was registered)
    or verbose is set (DEBUG). The log file, when given, is appended to
    at DEBUG with timestamps.

    Args:
        verbose: Show DEBUG records on the console
        log_file: Optional path of a log file
        loading_grids: The command loads NTv2 grids
    """
    if verbose:
        level = logging.DEBUG
    elif loading_grids:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file else level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)-8s %(name)s: %(message)s',
            datefmt='%Y-%m-%dT%H:%M:%S'
        ))
        root_logger.addHandler(file_handler)


def _format(value: float) -> str:
    return 'nan' if math.isnan(value) else f"{value:.6f}"


# =============================================================================
# SUBCOMMANDS
# =============================================================================

def run_transform(args: argparse.Namespace) -> int:
    config = CoordsConfig(
        enforce_axis=args.enforce_axis,
        strict_ntv2_inverse=args.strict_ntv2,
    )
    context = ProjectionContext(config)

    for entry in args.grid or []:
        name, sep, path = entry.partition('=')
        if not sep:
            name, path = Path(entry).stem, entry
        context.load_ntv2(name, Path(path).read_bytes())

    coords: List[float] = [args.x, args.y]
    if args.z is not None:
        coords.append(args.z)

    out = context.transform(args.source, args.dest, coords)
    print(' '.join(_format(v) for v in out))
    return 0 if not math.isnan(out[0]) else 1


def run_gridref(args: argparse.Namespace) -> int:
    info = check_grid_reference(args.gridref)
    result = centroid_of(args.gridref, args.to)
    print(f"precision: {info.precision}")
    print(f"region: {info.region}")
    print(f"prefix: {info.prefix}")
    print(f"centroid ({result.proj}): {_format(result.centroid[0])} {_format(result.centroid[1])}")
    return 0


def run_mgrs(args: argparse.Namespace) -> int:
    if args.decode:
        lon, lat = mgrs_to_point(args.decode)
        print(f"{_format(lat)} {_format(lon)}")
        return 0
    if args.lat is None or args.lon is None:
        raise AtlasCoordsError("mgrs needs LAT LON or --decode")
    print(mgrs_encode(args.lat, args.lon, args.digits))
    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='atlas-coords',
        description='Atlas Coords - coordinate transforms and grid references'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help='Also write DEBUG logs to this file'
    )

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('transform', help='Reproject one coordinate')
    p.add_argument('--from', dest='source', required=True,
                   help='Source definition (name, +proj string or WKT)')
    p.add_argument('--to', dest='dest', required=True,
                   help='Destination definition')
    p.add_argument('--grid', action='append',
                   help='Load an NTv2 grid, as NAME=PATH or PATH (repeatable)')
    p.add_argument('--enforce-axis', action='store_true',
                   help="Honour the definitions' axis order")
    p.add_argument('--strict-ntv2', action='store_true',
                   help='Fail instead of falling back when the NTv2 inverse does not converge')
    p.add_argument('x', type=float)
    p.add_argument('y', type=float)
    p.add_argument('z', type=float, nargs='?', default=None)
    p.set_defaults(func=run_transform)

    p = sub.add_parser('gridref', help='Check a grid reference and print its centroid')
    p.add_argument('gridref')
    p.add_argument('--to', choices=('gb', 'ir', 'ci', 'wg'), default=None,
                   help='Region for the centroid (default: the reference\'s own)')
    p.set_defaults(func=run_gridref)

    p = sub.add_parser('mgrs', help='Encode a position as MGRS, or decode one')
    p.add_argument('lat', type=float, nargs='?')
    p.add_argument('lon', type=float, nargs='?')
    p.add_argument('--digits', type=int, default=5,
                   help='Digits per axis, 0-5 (default: 5)')
    p.add_argument('--decode', default=None, help='MGRS string to decode to lat lon')
    p.set_defaults(func=run_mgrs)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        args.verbose,
        args.log_file,
        loading_grids=bool(getattr(args, 'grid', None)),
    )

    try:
        return args.func(args)
    except (AtlasCoordsError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
