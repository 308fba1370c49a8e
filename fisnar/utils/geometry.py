"""
Vector helpers shared by path extraction and motion sequencing.

Points are plain millimetre triples. Tolerance comparison is an explicit
function so stitching decisions never depend on exact float equality.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from spatialmath.base import angvec2r

from fisnar.config import STITCH_TOLERANCE_MM


@dataclass(frozen=True)
class Point3:
    """Cartesian point in millimetres."""

    x: float
    y: float
    z: float

    @classmethod
    def from_vec(cls, vec: Iterable[float]) -> Point3:
        x, y, z = (float(v) for v in vec)
        return cls(x, y, z)

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


def points_coincide(a: Point3, b: Point3, tolerance: float = STITCH_TOLERANCE_MM) -> bool:
    """True when every axis differs by strictly less than ``tolerance``."""
    return bool(np.all(np.abs(a.as_array() - b.as_array()) < tolerance))


def rotate_about_axis(
    vector: Sequence[float] | NDArray, angle_rad: float, axis: Sequence[float] | NDArray
) -> NDArray[np.float64]:
    """
    Rotate ``vector`` by ``angle_rad`` about ``axis`` (through the origin).

    Right-handed: a positive angle about +Z turns +X towards +Y. A zero-length
    axis gives the identity rotation.
    """
    R = angvec2r(float(angle_rad), np.asarray(axis, dtype=np.float64))
    return R @ np.asarray(vector, dtype=np.float64)


def scale_then_offset(point: Point3, scale: float, offset: Point3) -> Point3:
    """Return ``scale * point + offset``."""
    return Point3.from_vec(point.as_array() * scale + offset.as_array())
