"""Euler angle, quaternion and rotation matrix conversions.

Angles are (roll, pitch, yaw) in radians, composed in ZYX order
(yaw about Z, then pitch about Y, then roll about X). Quaternions are stored
as (x, y, z, w).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

log = logging.getLogger(__name__)

# A quaternion whose norm is this close to 1 is left untouched by normalized().
QUATERNION_NORM_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Quaternion:
    x: float
    y: float
    z: float
    w: float

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(0.0, 0.0, 0.0, 1.0)

    @property
    def norm(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)

    def as_xyzw(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    def normalized(self, tolerance: float = QUATERNION_NORM_TOLERANCE) -> Quaternion:
        """Return a unit quaternion.

        Quaternions already within ``tolerance`` of unit norm are returned as
        is so that normalizing is a no-op for well-formed input. A zero or
        non-finite norm cannot be rescaled and falls back to the identity.
        """
        n = self.norm
        if not math.isfinite(n) or n == 0.0:
            log.warning("Cannot normalize quaternion %s (norm=%s), using identity", self.as_xyzw(), n)
            return Quaternion.identity()
        if abs(n - 1.0) <= tolerance:
            return self
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def as_rotation_matrix(self) -> np.ndarray:
        return rotation_matrix_from_quaternion(self)


def quaternion_from_rpy(rpy: Sequence[float]) -> Quaternion:
    """Convert (roll, pitch, yaw) radians to a quaternion.

    The result is not renormalized; bad input (e.g. degrees passed as radians)
    still produces a quaternion and is not reported.
    """
    roll, pitch, yaw = rpy
    sr, sp, sy = math.sin(roll / 2), math.sin(pitch / 2), math.sin(yaw / 2)
    cr, cp, cy = math.cos(roll / 2), math.cos(pitch / 2), math.cos(yaw / 2)
    return Quaternion(
        x=sr * cp * cy - cr * sp * sy,
        y=cr * sp * cy + sr * cp * sy,
        z=cr * cp * sy - sr * sp * cy,
        w=cr * cp * cy + sr * sp * sy,
    )


def rotation_matrix_from_quaternion(q: Quaternion) -> np.ndarray:
    """Convert an (x, y, z, w) quaternion to a 3×3 rotation matrix."""
    x, y, z, w = q.as_xyzw()
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ],
        dtype=np.float64,
    )


def rotation_matrix_from_rpy(rpy: Sequence[float], *, normalize: bool = False) -> np.ndarray:
    q = quaternion_from_rpy(rpy)
    if normalize:
        q = q.normalized()
    return q.as_rotation_matrix()
