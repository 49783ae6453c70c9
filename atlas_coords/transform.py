"""
Module-level coordinate transform.
"""

from typing import Any, Optional

from .context import ProjectionContext, ProjectionLike, default_context


def transform(
    source: ProjectionLike,
    dest: ProjectionLike,
    point: Any,
    context: Optional[ProjectionContext] = None
) -> Any:
    """
    Reproject one coordinate between two definitions.

    Args:
        source: Definition (name, "+proj=..." string, WKT) or Projection
        dest: Same, for the output
        point: Point, {"x", "y"[, "z"]} mapping, or [x, y, ...] list
        context: Context to resolve names in (default: process-wide)

    Returns:
        The reprojected coordinate, in the same shape as point

    Example:
        >>> transform('EPSG:4326', 'EPSG:27700', [1.5, 52.5])
    """
    return (context or default_context()).transform(source, dest, point)
