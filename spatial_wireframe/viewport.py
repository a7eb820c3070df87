"""Fit the media's aspect ratio inside its container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from spatial_wireframe.camera import ViewportSize

log = logging.getLogger(__name__)


def fit_viewport(
    media: tuple[float, float],
    container: tuple[float, float],
) -> ViewportSize | None:
    """Largest rectangle with the media's aspect ratio that fits the container.

    Height-bound (pillarboxed) when the media is narrower than the container,
    width-bound (letterboxed) otherwise. Returns None when either size has a
    zero dimension, since no aspect ratio can be formed.
    """
    media_w, media_h = media
    container_w, container_h = container
    if media_w <= 0 or media_h <= 0 or container_w <= 0 or container_h <= 0:
        log.debug("Cannot fit media %s into container %s", media, container)
        return None

    aspect = media_w / media_h
    container_aspect = container_w / container_h
    if aspect < container_aspect:
        return ViewportSize(width=container_h * aspect, height=container_h)
    return ViewportSize(width=container_w, height=container_w / aspect)


@dataclass
class ViewportTracker:
    """Keeps the fitted viewport in sync with container and media size changes."""

    container: tuple[float, float] = (0.0, 0.0)
    media: tuple[float, float] = (1.0, 1.0)

    def on_resize(self, width: float, height: float) -> bool:
        """Record a new container size; zero-sized reports are ignored.

        Returns True when the stored size changed.
        """
        if not width or not height:
            return False
        new = (float(width), float(height))
        if new == self.container:
            return False
        self.container = new
        return True

    def on_media_loaded(self, width: float, height: float) -> bool:
        new = (float(width), float(height))
        if new == self.media:
            return False
        self.media = new
        return True

    @property
    def viewport(self) -> ViewportSize | None:
        return fit_viewport(self.media, self.container)
