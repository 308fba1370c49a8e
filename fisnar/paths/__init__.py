"""
Drawing to dispense-path conversion.
"""

from .entities import Circle, DrawingEntity, Line, Polyline, UnsupportedEntity
from .extractor import Path, circle_points, entity_points, extract_paths, stitch_paths, transform_paths

__all__ = [
    "Path",
    "Polyline",
    "Line",
    "Circle",
    "UnsupportedEntity",
    "DrawingEntity",
    "circle_points",
    "entity_points",
    "extract_paths",
    "stitch_paths",
    "transform_paths",
]
