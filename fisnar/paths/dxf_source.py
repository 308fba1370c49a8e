"""
DXF entity source.

Reads a drawing with ezdxf and converts modelspace entities, in document
order, into the extractor's entity types. Coordinates are taken as stored
(no OCS to WCS conversion), matching how the jobs were drawn.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import ezdxf
from ezdxf.document import Drawing

from fisnar.paths.entities import Circle, DrawingEntity, Line, Polyline, UnsupportedEntity
from fisnar.utils.errors import DrawingError
from fisnar.utils.geometry import Point3

logger = logging.getLogger(__name__)


def load_document(filename: str) -> Drawing:
    """
    Open a DXF file.

    Raises:
        DrawingError: the file is missing, unreadable or not a valid DXF
    """
    try:
        doc = ezdxf.readfile(filename)
    except ezdxf.DXFStructureError as e:
        raise DrawingError(filename, f"invalid or corrupt DXF ({e})") from e
    except OSError as e:
        raise DrawingError(filename, str(e)) from e

    logger.info(f"Loaded {filename} (DXF {doc.dxfversion})")
    return doc


def convert_entity(entity) -> DrawingEntity:
    """Map one ezdxf entity onto a drawing entity."""
    kind = entity.dxftype()

    if kind == "LINE":
        return Line(Point3.from_vec(entity.dxf.start), Point3.from_vec(entity.dxf.end))

    if kind == "CIRCLE":
        return Circle(
            center=Point3.from_vec(entity.dxf.center),
            radius=float(entity.dxf.radius),
            extrusion=Point3.from_vec(entity.dxf.extrusion),
        )

    if kind == "POLYLINE":
        return Polyline(tuple(Point3.from_vec(v) for v in entity.points()))

    if kind == "LWPOLYLINE":
        # Bulges are ignored; vertices only
        z = float(entity.dxf.elevation)
        return Polyline(tuple(Point3(float(x), float(y), z) for x, y in entity.get_points("xy")))

    return UnsupportedEntity(kind=kind, handle=entity.dxf.get("handle"))


def iter_entities(doc: Drawing) -> Iterator[DrawingEntity]:
    for entity in doc.modelspace():
        yield convert_entity(entity)


def read_entities(filename: str) -> list[DrawingEntity]:
    """Load ``filename`` and return its modelspace entities in document order."""
    entities = list(iter_entities(load_document(filename)))
    logger.debug(f"{filename}: {len(entities)} entities")
    return entities
