"""Pinhole camera model and the fixed world-to-view transform."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

log = logging.getLogger(__name__)

# Boxes are given in a Z-up world frame; the screen camera looks along +Y of
# that frame, which is a fixed 90 degree tilt about X.
TILT_ANGLE_DEG = 90.0


@dataclass(frozen=True)
class ViewportSize:
    """Drawable area in pixels."""

    width: float
    height: float

    def __post_init__(self):
        for name in ("width", "height"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"Viewport {name} must be a positive number, got {value}")
            object.__setattr__(self, name, value)

    @property
    def aspect(self) -> float:
        return self.width / self.height


def view_rotation(tilt_deg: float = TILT_ANGLE_DEG) -> np.ndarray:
    """Rotation about X by ``tilt_deg`` degrees."""
    t = tilt_deg * math.pi / 180
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, math.cos(t), -math.sin(t)],
            [0.0, math.sin(t), math.cos(t)],
        ],
        dtype=np.float64,
    )


_VIEW_ROTATION = view_rotation()


def to_view(points: np.ndarray) -> np.ndarray:
    """Map world points (N, 3) into the camera frame.

    The camera sits at the view-space origin, so there is no translation.
    """
    return np.asarray(points, dtype=np.float64) @ _VIEW_ROTATION.T


@dataclass(frozen=True)
class CameraModel:
    fov_deg: float
    width: float
    height: float

    def __post_init__(self):
        if not 0 < self.fov_deg < 180:
            raise ValueError(f"Horizontal field of view must be in (0, 180) degrees, got {self.fov_deg}")

    @classmethod
    def from_viewport(cls, viewport: ViewportSize, fov_deg: float) -> CameraModel:
        return cls(fov_deg=float(fov_deg), width=viewport.width, height=viewport.height)

    @property
    def focal_length(self) -> float:
        return self.width / (2 * math.tan((self.fov_deg / 2) * math.pi / 180))

    @property
    def principal_point(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)

    @property
    def intrinsics(self) -> np.ndarray:
        f = self.focal_length
        cx, cy = self.principal_point
        return np.array(
            [
                [f, 0.0, cx],
                [0.0, f, cy],
                [0.0, 0.0, 1.0],
            ],
            dtype=np.float64,
        )

    def depths(self, view_points: np.ndarray) -> np.ndarray:
        return np.asarray(view_points, dtype=np.float64).reshape(-1, 3) @ self.intrinsics[2]

    def project(self, view_points: np.ndarray) -> np.ndarray:
        """Perspective-project view-space points (N, 3) to pixels (N, 2).

        Points are neither clipped nor rejected: zero depth gives inf/nan and
        points behind the camera land at mirrored coordinates.
        """
        p = np.asarray(view_points, dtype=np.float64).reshape(-1, 3) @ self.intrinsics.T
        with np.errstate(divide="ignore", invalid="ignore"):
            return p[:, :2] / p[:, 2:3]
