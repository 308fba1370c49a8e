"""
Path extraction and stitching.

Turns an ordered sequence of drawing entities into an ordered list of
dispense paths. Consecutive paths are joined when the end of one coincides
with the start of the next, so a chain of separate LINE entities becomes a
single continuous bead.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from fisnar.config import CIRCLE_SUBDIVISIONS, STITCH_TOLERANCE_MM
from fisnar.paths.entities import Circle, DrawingEntity, Line, Polyline, UnsupportedEntity
from fisnar.utils.geometry import Point3, points_coincide, rotate_about_axis, scale_then_offset

logger = logging.getLogger(__name__)

Path = tuple[Point3, ...]


def circle_points(circle: Circle, subdivisions: int = CIRCLE_SUBDIVISIONS) -> list[Point3]:
    """
    Tessellate a circle into ``subdivisions + 1`` points.

    The start vector (radius, 0, 0) is rotated about the extrusion axis in
    ``subdivisions`` equal steps and moved to the center. The last point
    repeats the first, closing the ring.
    """
    center = circle.center.as_array()
    radial = [float(circle.radius), 0.0, 0.0]
    axis = circle.extrusion.as_array()
    step = 2.0 * math.pi / subdivisions

    return [
        Point3.from_vec(rotate_about_axis(radial, step * n, axis) + center)
        for n in range(subdivisions + 1)
    ]


def entity_points(entity: DrawingEntity, subdivisions: int = CIRCLE_SUBDIVISIONS) -> list[Point3]:
    """Point sequence for one entity; empty when it yields no path."""
    if isinstance(entity, Polyline):
        # A lone vertex is a degenerate polyline, not a dot
        if len(entity.vertices) < 2:
            return []
        return list(entity.vertices)
    if isinstance(entity, Line):
        return [entity.start, entity.end]
    if isinstance(entity, Circle):
        return circle_points(entity, subdivisions)
    if isinstance(entity, UnsupportedEntity):
        logger.warning(f"Skipping unsupported entity {entity.kind} (handle {entity.handle})")
    else:
        logger.warning(f"Skipping unknown entity {entity!r}")
    return []


def stitch_paths(
    point_lists: Iterable[Sequence[Point3]],
    tolerance: float = STITCH_TOLERANCE_MM,
    stitch_first: bool = False,
) -> list[Path]:
    """
    Join consecutive point sequences whose boundary points coincide.

    The shared boundary point is kept once. Empty sequences are dropped.

    Merging is only tried once two output paths exist, so by default the
    second sequence is never joined onto the first. This matches the
    behaviour of existing jobs; pass ``stitch_first=True`` to also merge
    onto the first path.
    """
    paths: list[list[Point3]] = []
    min_existing = 1 if stitch_first else 2

    for points in point_lists:
        if len(points) == 0:
            logger.debug("Skipping entity with no points")
            continue

        if len(paths) >= min_existing and points_coincide(paths[-1][-1], points[0], tolerance):
            logger.debug(f"Stitching {len(points)} points onto path {len(paths) - 1}")
            paths[-1].extend(points[1:])
        else:
            paths.append(list(points))

    return [tuple(p) for p in paths]


def extract_paths(
    entities: Iterable[DrawingEntity],
    tolerance: float = STITCH_TOLERANCE_MM,
    stitch_first: bool = False,
    subdivisions: int = CIRCLE_SUBDIVISIONS,
) -> list[Path]:
    """Convert entities to points and stitch them, preserving document order."""
    return stitch_paths(
        (entity_points(e, subdivisions) for e in entities),
        tolerance=tolerance,
        stitch_first=stitch_first,
    )


def transform_paths(paths: Iterable[Path], scale: float = 1.0, offset: Point3 | None = None) -> list[Path]:
    """Scale every point, then translate it by ``offset``."""
    offset = offset or Point3(0.0, 0.0, 0.0)
    return [tuple(scale_then_offset(p, scale, offset) for p in path) for path in paths]
