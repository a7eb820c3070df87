"""Project oriented boxes to screen-space wireframes and label anchors.

For every box the eight world corners are tilted into the camera frame,
pinhole-projected and joined into twelve edges: the four edges of the top
face, the four of the bottom face, then the four vertical edges. Each box
also gets one label anchor, projected from a point just above its centroid.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

import numpy as np

from spatial_wireframe.boxes import BOTTOM_FACE, TOP_FACE, OrientedBox3D, world_corners
from spatial_wireframe.camera import CameraModel, ViewportSize, to_view

log = logging.getLogger(__name__)

# Offset added to the label point along world Z before projection.
LABEL_Z_OFFSET = 0.1

EDGES_PER_BOX = 12

Vec2 = tuple[float, float]


# ──────────────────────────────────────────────────────────────────────────────
# Output types
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WireEdge2D:
    start: Vec2
    end: Vec2
    length: float
    angle: float

    @classmethod
    def between(cls, start: Sequence[float], end: Sequence[float]) -> WireEdge2D:
        x0, y0 = float(start[0]), float(start[1])
        x1, y1 = float(end[0]), float(end[1])
        dx = x1 - x0
        dy = y1 - y0
        return cls(start=(x0, y0), end=(x1, y1), length=math.hypot(dx, dy), angle=math.atan2(dy, dx))

    def stick(self) -> tuple[float, float, float, float]:
        """(x, y, length, angle): translate to start, rotate by angle, stretch to length."""
        return (self.start[0], self.start[1], self.length, self.angle)

    def to_dict(self) -> dict:
        return {
            "start": list(self.start),
            "end": list(self.end),
            "length": self.length,
            "angle": self.angle,
        }


@dataclass(frozen=True)
class LabelAnchor2D:
    text: str
    pos: Vec2

    def to_dict(self) -> dict:
        return {"text": self.text, "pos": list(self.pos)}


@dataclass(frozen=True)
class ProjectionOptions:
    """Behaviour switches; the defaults reproduce the legacy renderer.

    clip_behind_camera: skip boxes with any vertex or label point at depth <= 0
        instead of drawing them mirrored.
    normalize_orientation: renormalize the Euler-derived quaternion before
        building the rotation matrix.
    """

    clip_behind_camera: bool = False
    normalize_orientation: bool = False


@dataclass(frozen=True)
class BoxWireframe:
    edges: tuple[WireEdge2D, ...]
    label: LabelAnchor2D
    vertices: tuple[Vec2, ...]
    min_depth: float


@dataclass(frozen=True)
class ProjectionResult:
    edges: tuple[WireEdge2D, ...] = ()
    labels: tuple[LabelAnchor2D, ...] = ()
    skipped: tuple[int, ...] = field(default=())

    def edges_for_box(self, index: int) -> tuple[WireEdge2D, ...]:
        """Edges of the index-th drawn box (skipped boxes are not counted)."""
        if not 0 <= index < len(self.labels):
            raise IndexError(f"box index {index} out of range for {len(self.labels)} drawn boxes")
        start = index * EDGES_PER_BOX
        return self.edges[start : start + EDGES_PER_BOX]

    def to_dict(self) -> dict[str, Any]:
        return {
            "edges": [edge.to_dict() for edge in self.edges],
            "labels": [label.to_dict() for label in self.labels],
            "skipped": list(self.skipped),
        }


# ──────────────────────────────────────────────────────────────────────────────
# Assembly
# ──────────────────────────────────────────────────────────────────────────────


def assemble_edges(vertices: Sequence[Sequence[float]]) -> list[WireEdge2D]:
    """Join eight projected corners (``CORNER_ORDER`` winding) into twelve edges.

    Order: top face i -> i+1, bottom face i -> i+1, then vertical top i -> bottom i.
    """
    if len(vertices) != 8:
        raise ValueError(f"Expected 8 box vertices, got {len(vertices)}")
    top = [vertices[i] for i in TOP_FACE]
    bottom = [vertices[i] for i in BOTTOM_FACE]

    edges = [WireEdge2D.between(top[i], top[(i + 1) % 4]) for i in range(4)]
    edges += [WireEdge2D.between(bottom[i], bottom[(i + 1) % 4]) for i in range(4)]
    edges += [WireEdge2D.between(top[i], bottom[i]) for i in range(4)]
    return edges


def label_point(world_vertices: np.ndarray) -> np.ndarray:
    """World-space point the label is anchored to: the centroid, nudged up."""
    point = np.asarray(world_vertices, dtype=np.float64).mean(axis=0)
    point[2] += LABEL_Z_OFFSET
    return point


def label_anchor(box: OrientedBox3D, world_vertices: np.ndarray, camera: CameraModel) -> LabelAnchor2D:
    u, v = camera.project(to_view(label_point(world_vertices)[None, :]))[0]
    return LabelAnchor2D(text=box.label, pos=(float(u), float(v)))


def project_box(
    box: OrientedBox3D,
    camera: CameraModel,
    options: ProjectionOptions = ProjectionOptions(),
) -> BoxWireframe:
    world = world_corners(box, normalize=options.normalize_orientation)
    view = to_view(world)
    vertices = camera.project(view)
    label = label_anchor(box, world, camera)

    depths = camera.depths(np.vstack([view, to_view(label_point(world)[None, :])]))
    return BoxWireframe(
        edges=tuple(assemble_edges(vertices)),
        label=label,
        vertices=tuple((float(u), float(v)) for u, v in vertices),
        min_depth=float(depths.min()),
    )


def project_boxes(
    boxes: Iterable[OrientedBox3D],
    viewport: ViewportSize,
    fov_deg: float,
    options: ProjectionOptions | None = None,
) -> ProjectionResult:
    """Wireframe edges and label anchors for every box, in input order.

    Edges are box-major with twelve edges per drawn box.
    """
    options = options or ProjectionOptions()
    camera = CameraModel.from_viewport(viewport, fov_deg)

    edges: list[WireEdge2D] = []
    labels: list[LabelAnchor2D] = []
    skipped: list[int] = []
    for i, box in enumerate(boxes):
        wireframe = project_box(box, camera, options)
        if options.clip_behind_camera and not wireframe.min_depth > 0:
            log.warning("Skipping box %d (%r): behind the camera (min depth %.3g)", i, box.label, wireframe.min_depth)
            skipped.append(i)
            continue
        if not all(math.isfinite(c) for uv in wireframe.vertices for c in uv):
            log.warning("Box %d (%r) projects to non-finite coordinates", i, box.label)
        edges.extend(wireframe.edges)
        labels.append(wireframe.label)

    log.debug(
        "Projected %d boxes (%d skipped) into %.1fx%.1f viewport at fov %.1f",
        len(labels),
        len(skipped),
        viewport.width,
        viewport.height,
        fov_deg,
    )
    return ProjectionResult(edges=tuple(edges), labels=tuple(labels), skipped=tuple(skipped))
