"""Oriented 3D boxes and their corners."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from spatial_wireframe.orientation import rotation_matrix_from_rpy

log = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]

# ──────────────────────────────────────────────────────────────────────────────
# Data model
# ──────────────────────────────────────────────────────────────────────────────


def _as_vec3(value: Sequence[float]) -> Vec3:
    x, y, z = value
    return (float(x), float(y), float(z))


@dataclass(frozen=True)
class OrientedBox3D:
    """A cuboid given by its center, full extents and roll-pitch-yaw (radians)."""

    center: Vec3 = (0.0, 0.0, 0.0)
    size: Vec3 = (1.0, 1.0, 1.0)
    rpy: Vec3 = (0.0, 0.0, 0.0)
    label: str = field(default="")

    def __post_init__(self):
        # Accept lists and numpy arrays but keep the box hashable.
        object.__setattr__(self, "center", _as_vec3(self.center))
        object.__setattr__(self, "size", _as_vec3(self.size))
        object.__setattr__(self, "rpy", _as_vec3(self.rpy))
        object.__setattr__(self, "label", str(self.label))

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> OrientedBox3D:
        return cls(
            center=d["center"],
            size=d["size"],
            rpy=d.get("rpy", (0.0, 0.0, 0.0)),
            label=d.get("label", ""),
        )


# ──────────────────────────────────────────────────────────────────────────────
# Corners
# ──────────────────────────────────────────────────────────────────────────────

# Sign triples in generation order: x outer, y middle, z inner.
_CORNER_SIGNS = np.array(
    [[sx, sy, sz] for sx in (-1.0, 1.0) for sy in (-1.0, 1.0) for sz in (-1.0, 1.0)],
    dtype=np.float64,
)

# Winding applied to the generated corners. Entries 0-3 walk the +z face and
# 4-7 the -z face in the same rotational sense, so corner i sits directly
# above corner i + 4 and (i, (i + 1) % 4) are neighbours within a face.
CORNER_ORDER = (1, 3, 7, 5, 0, 2, 6, 4)

TOP_FACE = (0, 1, 2, 3)
BOTTOM_FACE = (4, 5, 6, 7)


def local_corners(size: Sequence[float]) -> np.ndarray:
    """Box-local corner offsets (8, 3) in ``CORNER_ORDER`` winding."""
    half = np.asarray(size, dtype=np.float64) / 2
    assert np.all(half >= 0), f"box size must be non-negative, got {tuple(size)}"
    corners = _CORNER_SIGNS * half
    return corners[list(CORNER_ORDER)]


def world_corners(box: OrientedBox3D, *, normalize: bool = False) -> np.ndarray:
    """Rotate the local corners by the box orientation and move them to its center."""
    R = rotation_matrix_from_rpy(box.rpy, normalize=normalize)
    corners = local_corners(box.size)
    return corners @ R.T + np.asarray(box.center, dtype=np.float64)
