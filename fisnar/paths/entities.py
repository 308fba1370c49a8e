"""
Drawing entities consumed by the path extractor.

Any entity source (the ezdxf adapter, a test fixture) yields these; the
extractor never sees a DXF library type.
"""

from dataclasses import dataclass
from typing import Union

from fisnar.utils.geometry import Point3

Z_AXIS = Point3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Polyline:
    vertices: tuple[Point3, ...]


@dataclass(frozen=True)
class Line:
    start: Point3
    end: Point3


@dataclass(frozen=True)
class Circle:
    center: Point3
    radius: float
    # Extrusion direction; the circle lies in the plane normal to it
    extrusion: Point3 = Z_AXIS


@dataclass(frozen=True)
class UnsupportedEntity:
    """Any drawing entity the extractor does not turn into a path."""

    kind: str
    handle: str | None = None


DrawingEntity = Union[Polyline, Line, Circle, UnsupportedEntity]
