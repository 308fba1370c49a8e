"""
Fisnar Python Package

Converts DXF drawings into dispense paths and drives a Fisnar F4200N
dispensing robot over its serial command protocol.

Key components:
- F4200N: request/acknowledge command driver (serial or simulated)
- extract_paths / transform_paths: drawing entities to stitched, placed paths
- read_entities: DXF loader built on ezdxf
- MotionSequencer: runs paths on a device session
"""

from ._version import __version__
from .driver import F4200N
from .paths import extract_paths, transform_paths
from .paths.dxf_source import read_entities
from .sequencer import MotionSequencer, SequencerConfig
from .utils.errors import DrawingError, ProtocolError, ReplyTimeoutError
from .utils.geometry import Point3, points_coincide

__all__ = [
    "__version__",
    "F4200N",
    "extract_paths",
    "transform_paths",
    "read_entities",
    "MotionSequencer",
    "SequencerConfig",
    "Point3",
    "points_coincide",
    "ProtocolError",
    "ReplyTimeoutError",
    "DrawingError",
]
