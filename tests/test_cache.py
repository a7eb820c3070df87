import threading

from spatial_wireframe.boxes import OrientedBox3D
from spatial_wireframe.cache import ProjectionCache
from spatial_wireframe.camera import ViewportSize
from spatial_wireframe.wireframe import ProjectionOptions, project_boxes

BOXES = [
    OrientedBox3D(center=(0.0, 5.0, 0.0), size=(1.0, 1.0, 1.0), label="cube"),
    OrientedBox3D(center=(1.0, 4.0, -0.5), size=(0.5, 0.3, 0.2), rpy=(0.0, 0.0, 0.6), label="phone"),
]
VIEWPORT = ViewportSize(640, 360)


def test_same_inputs_hit_the_cache():
    cache = ProjectionCache()
    first = cache.get(BOXES, VIEWPORT, 60.0)
    # Equal but distinct inputs count as the same key.
    second = cache.get(list(BOXES), ViewportSize(640, 360), 60)
    assert second is first
    assert (cache.hits, cache.misses) == (1, 1)


def test_cached_result_matches_direct_projection():
    cache = ProjectionCache()
    assert cache.get(BOXES, VIEWPORT, 60.0) == project_boxes(BOXES, VIEWPORT, 60.0)


def test_any_input_change_recomputes():
    cache = ProjectionCache()
    base = cache.get(BOXES, VIEWPORT, 60.0)

    assert cache.get(BOXES, VIEWPORT, 75.0) != base
    assert cache.get(BOXES, ViewportSize(800, 450), 75.0) is not base
    moved = [BOXES[0], OrientedBox3D(center=(1.0, 4.5, -0.5), size=BOXES[1].size, rpy=BOXES[1].rpy, label="phone")]
    assert cache.get(moved, ViewportSize(800, 450), 75.0).labels[1] != base.labels[1]
    assert (cache.hits, cache.misses) == (0, 4)


def test_only_latest_inputs_are_kept():
    cache = ProjectionCache()
    cache.get(BOXES, VIEWPORT, 60.0)
    cache.get(BOXES, VIEWPORT, 75.0)
    cache.get(BOXES, VIEWPORT, 60.0)
    assert cache.misses == 3


def test_invalidate_forces_recompute():
    cache = ProjectionCache()
    first = cache.get(BOXES, VIEWPORT, 60.0)
    cache.invalidate()
    second = cache.get(BOXES, VIEWPORT, 60.0)
    assert second is not first
    assert second == first
    assert cache.misses == 2


def test_options_take_part_in_the_result():
    behind = [OrientedBox3D(center=(0.0, -3.0, 0.0), size=(1.0, 1.0, 1.0), label="behind")]
    assert len(ProjectionCache().get(behind, VIEWPORT, 60.0).labels) == 1
    clipped = ProjectionCache(ProjectionOptions(clip_behind_camera=True)).get(behind, VIEWPORT, 60.0)
    assert clipped.labels == ()
    assert clipped.skipped == (0,)


def test_concurrent_callers_share_one_result():
    cache = ProjectionCache()
    results = []

    def worker():
        results.append(cache.get(BOXES, VIEWPORT, 60.0))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.misses == 1
    assert cache.hits == 7
    assert all(r is results[0] for r in results)
