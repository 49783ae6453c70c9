"""
Projection context.

A ProjectionContext owns everything that the rest of the engine looks
up by name: ellipsoids, datums, named definitions and loaded NTv2
grids. Each context starts from its own copy of the built-in tables,
so definitions or grids added to one never leak into another.
"""

from typing import Any, Dict, Optional, Union
import logging
import threading

from .config import DEFAULT_CONFIG, CoordsConfig
from .datum.ntv2 import GridRegistry, NTv2Grid
from .datum.resolve import resolve_params
from .defs import DATUMS, ELLIPSOIDS, NAMED_DEFINITIONS, REGION_DEFINITIONS, lookup
from .errors import DefinitionError
from .models.datum import DatumDefinition, Ellipsoid
from .models.params import ProjParams
from .parsing import parse_to_mapping
from .projection.base import Projection
from .projection.kinds import create_projection
from .reproject import reproject

logger = logging.getLogger(__name__)

ProjectionLike = Union[Projection, str]


class ProjectionContext:
    """
    Registry owner and entry point for building projections.

    Projections are cached per definition string; they are immutable
    once built, so a context can be shared between threads.

    Attributes:
        config: Runtime options
        ellipsoids: Ellipsoid table (code -> Ellipsoid)
        datums: Datum table (code -> DatumDefinition)
        grids: Loaded NTv2 grids
    """

    def __init__(self, config: CoordsConfig = DEFAULT_CONFIG):
        self.config = config
        self.ellipsoids: Dict[str, Ellipsoid] = dict(ELLIPSOIDS)
        self.datums: Dict[str, DatumDefinition] = dict(DATUMS)
        self.grids = GridRegistry()

        self._definitions: Dict[str, str] = dict(NAMED_DEFINITIONS)
        self._definitions.update(REGION_DEFINITIONS)
        self._cache: Dict[str, Projection] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Registries
    # -------------------------------------------------------------------------

    def define(self, name: str, definition: str) -> None:
        """
        Register a named definition.

        The definition may be a compact string, WKT, or the name of
        another registered definition. Re-registering a name replaces
        it.

        Raises:
            DefinitionError: The definition does not parse, or would
                make a chain of names that loops back on itself
        """
        if not name:
            raise DefinitionError("Definition name must not be empty")
        candidate = dict(self._definitions)
        candidate[name] = definition
        parse_to_mapping(definition, candidate)
        with self._lock:
            self._definitions[name] = definition
            self._cache.clear()
        logger.debug(f"Defined {name!r}")

    def get_definition(self, name: str) -> Optional[str]:
        """Registered definition text for name, or None."""
        return lookup(self._definitions, name)

    def add_ellipsoid(self, ellipsoid: Ellipsoid) -> None:
        with self._lock:
            self.ellipsoids[ellipsoid.code] = ellipsoid
            self._cache.clear()

    def add_datum(self, datum: DatumDefinition) -> None:
        with self._lock:
            self.datums[datum.code] = datum
            self._cache.clear()

    def load_ntv2(self, name: str, buffer: bytes) -> NTv2Grid:
        """
        Parse an NTv2 buffer and register it under name.

        Raises:
            NTv2FormatError: The buffer is truncated or malformed
        """
        return self.grids.load(name, buffer)

    # -------------------------------------------------------------------------
    # Projections
    # -------------------------------------------------------------------------

    def params(self, definition: str) -> ProjParams:
        """Parse and resolve a definition without building a projection."""
        parsed = ProjParams.from_mapping(parse_to_mapping(definition, self._definitions))
        return resolve_params(parsed, self.ellipsoids, self.datums, self.config)

    def projection(self, definition: ProjectionLike) -> Projection:
        """
        Build (or fetch from cache) the projection for a definition.

        Args:
            definition: A Projection (returned as is), a registered
                name, a compact "+proj=..." string or WKT

        Returns:
            The projection

        Raises:
            DefinitionError: Empty, unknown or malformed definition
        """
        if isinstance(definition, Projection):
            return definition
        if not isinstance(definition, str):
            raise DefinitionError(f"{definition!r} is not a valid specification")

        cached = self._cache.get(definition)
        if cached is not None:
            return cached

        built = create_projection(self.params(definition))
        with self._lock:
            self._cache.setdefault(definition, built)
        return built

    def transform(self, source: ProjectionLike, dest: ProjectionLike, point: Any) -> Any:
        """
        Reproject a coordinate from source to dest.

        Geographic definitions take and return degrees. The point may
        be a Point, a mapping with x/y[/z] or a sequence [x, y, ...];
        the result has the same shape. Points that cannot be projected
        come back with NaN coordinates.

        Raises:
            DefinitionError: Either definition is invalid
            GridShiftError: A needed NTv2 grid is missing or does not
                cover the point
        """
        return reproject(
            self.projection(source),
            self.projection(dest),
            point,
            registry=self.grids,
            config=self.config,
            wgs84=self.projection('WGS84'),
        )


_default_context: Optional[ProjectionContext] = None
_default_lock = threading.Lock()


def default_context() -> ProjectionContext:
    """The process-wide context used by module-level helpers."""
    global _default_context
    if _default_context is None:
        with _default_lock:
            if _default_context is None:
                _default_context = ProjectionContext()
    return _default_context
