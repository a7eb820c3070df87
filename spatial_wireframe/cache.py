from __future__ import annotations

import logging
import threading
from typing import Hashable, Iterable

from spatial_wireframe.boxes import OrientedBox3D
from spatial_wireframe.camera import ViewportSize
from spatial_wireframe.wireframe import ProjectionOptions, ProjectionResult, project_boxes

log = logging.getLogger(__name__)


class ProjectionCache:
    """Remembers the last projection and reuses it while the inputs stay equal.

    Any change to boxes, viewport, field of view or options recomputes every
    box from scratch.
    """

    def __init__(self, options: ProjectionOptions | None = None):
        self.options = options or ProjectionOptions()
        self._lock = threading.Lock()
        self._key: Hashable | None = None
        self._result: ProjectionResult | None = None
        self.hits = 0
        self.misses = 0

    def get(
        self,
        boxes: Iterable[OrientedBox3D],
        viewport: ViewportSize,
        fov_deg: float,
    ) -> ProjectionResult:
        boxes = tuple(boxes)
        key = (boxes, viewport, float(fov_deg), self.options)
        with self._lock:
            if self._result is not None and key == self._key:
                self.hits += 1
                log.debug("Projection cache hit (%d boxes)", len(boxes))
                return self._result

            self.misses += 1
            log.debug("Projection cache miss, projecting %d boxes", len(boxes))
            self._result = project_boxes(boxes, viewport, fov_deg, self.options)
            self._key = key
            return self._result

    def invalidate(self):
        with self._lock:
            self._key = None
            self._result = None
