from spatial_wireframe.boxes import CORNER_ORDER, OrientedBox3D, local_corners, world_corners
from spatial_wireframe.cache import ProjectionCache
from spatial_wireframe.camera import CameraModel, ViewportSize, to_view, view_rotation
from spatial_wireframe.orientation import (
    Quaternion,
    quaternion_from_rpy,
    rotation_matrix_from_quaternion,
    rotation_matrix_from_rpy,
)
from spatial_wireframe.viewport import ViewportTracker, fit_viewport
from spatial_wireframe.wireframe import (
    LabelAnchor2D,
    ProjectionOptions,
    ProjectionResult,
    WireEdge2D,
    assemble_edges,
    project_box,
    project_boxes,
)
