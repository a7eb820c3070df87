import math
import warnings

import numpy as np
import pytest

from spatial_wireframe.camera import CameraModel, ViewportSize, to_view, view_rotation


@pytest.mark.parametrize(
    "width, height",
    [(200.0, 0.0), (0.0, 200.0), (-1.0, 10.0), (10.0, math.nan), (math.inf, 10.0)],
)
def test_degenerate_viewport_is_rejected(width, height):
    with pytest.raises(ValueError):
        ViewportSize(width, height)


def test_viewport_aspect():
    assert ViewportSize(1600, 900).aspect == pytest.approx(16 / 9)
    assert ViewportSize(1600, 900).width == 1600.0


def test_intrinsics_from_fov():
    camera = CameraModel.from_viewport(ViewportSize(200, 200), 90.0)
    assert camera.focal_length == pytest.approx(100.0)
    assert camera.principal_point == (100.0, 100.0)
    np.testing.assert_allclose(camera.intrinsics, [[100.0, 0.0, 100.0], [0.0, 100.0, 100.0], [0.0, 0.0, 1.0]])


def test_focal_length_uses_width_only():
    camera = CameraModel.from_viewport(ViewportSize(400, 100), 60.0)
    assert camera.focal_length == pytest.approx(400 / (2 * math.tan(math.radians(30))))
    assert camera.principal_point == (200.0, 50.0)


@pytest.mark.parametrize("fov", [0.0, 180.0, -10.0, math.nan])
def test_degenerate_fov_is_rejected(fov):
    with pytest.raises(ValueError):
        CameraModel(fov_deg=fov, width=100.0, height=100.0)


def test_view_rotation_is_quarter_turn_about_x():
    Rv = view_rotation()
    np.testing.assert_allclose(Rv, [[1, 0, 0], [0, 0, -1], [0, 1, 0]], atol=1e-15)
    # Zero tilt leaves the frame unchanged.
    np.testing.assert_array_equal(view_rotation(0.0), np.eye(3))


def test_to_view_maps_world_forward_to_depth():
    # World +Y is the viewing direction, world +Z is screen up (negative v).
    np.testing.assert_allclose(to_view(np.array([[0.0, 5.0, 0.0]])), [[0.0, 0.0, 5.0]], atol=1e-15)
    np.testing.assert_allclose(to_view(np.array([[0.0, 0.0, 1.0]])), [[0.0, -1.0, 0.0]], atol=1e-15)


def test_point_on_optical_axis_hits_principal_point():
    camera = CameraModel.from_viewport(ViewportSize(320, 240), 70.0)
    np.testing.assert_allclose(camera.project(np.array([[0.0, 0.0, 3.0]])), [[160.0, 120.0]])


def test_project_scales_with_inverse_depth():
    camera = CameraModel.from_viewport(ViewportSize(200, 200), 90.0)
    uv = camera.project(np.array([[1.0, -1.0, 5.0], [1.0, -1.0, 10.0]]))
    np.testing.assert_allclose(uv, [[120.0, 80.0], [110.0, 90.0]])


def test_point_behind_camera_is_mirrored_not_clipped():
    camera = CameraModel.from_viewport(ViewportSize(200, 200), 90.0)
    uv = camera.project(np.array([[1.0, 0.0, -5.0]]))
    np.testing.assert_allclose(uv, [[80.0, 100.0]])
    assert camera.depths(np.array([[1.0, 0.0, -5.0]]))[0] == -5.0


def test_zero_depth_projects_to_non_finite_without_warnings():
    camera = CameraModel.from_viewport(ViewportSize(200, 200), 90.0)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        uv = camera.project(np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 0.0]]))
    assert np.isinf(uv[0, 0])
    assert np.isnan(uv[1, 0])
