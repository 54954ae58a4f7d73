import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from marker_slam.frame_conversion import (
    DEFAULT_SENSOR_POSE,
    convert_detection_pose,
    sensor_pose_from_transform,
)
from marker_slam.types.variables import StampedTransform
from marker_slam.utils.transformations import get_transformation_matrix


def quat_from_rpy(roll, pitch, yaw):
    return tuple(Rotation.from_euler("xyz", [roll, pitch, yaw]).as_quat())


def test_default_frame_passes_x_y_yaw_through():
    pose = convert_detection_pose((1.0, 2.0, 0.0), quat_from_rpy(0.0, 0.0, 0.3), alt_frame=False)
    assert pose.x == pytest.approx(1.0)
    assert pose.y == pytest.approx(2.0)
    assert pose.theta == pytest.approx(0.3)


def test_default_frame_ignores_z():
    pose = convert_detection_pose((1.0, 2.0, 7.0), quat_from_rpy(0.0, 0.0, -1.2))
    assert (pose.x, pose.y) == pytest.approx((1.0, 2.0))
    assert pose.theta == pytest.approx(-1.2)


def test_alt_frame_uses_z_forward_and_minus_x_left():
    pose = convert_detection_pose((1.0, 5.0, 2.0), quat_from_rpy(0.0, 0.0, 0.0), alt_frame=True)
    assert pose.x == pytest.approx(2.0)
    assert pose.y == pytest.approx(-1.0)
    assert pose.theta == pytest.approx(np.pi)


def test_alt_frame_heading_from_pitch():
    pose = convert_detection_pose((0.0, 0.0, 3.0), quat_from_rpy(0.0, 0.5, 0.0), alt_frame=True)
    assert pose.theta == pytest.approx(np.pi - 0.5)


def test_conversion_is_deterministic():
    args = ((0.4, -0.2, 1.3), quat_from_rpy(0.1, 0.2, 0.3))
    for alt_frame in (False, True):
        first = convert_detection_pose(*args, alt_frame=alt_frame)
        second = convert_detection_pose(*args, alt_frame=alt_frame)
        assert first == second


def test_sensor_pose_from_transform():
    T = get_transformation_matrix((0.3, -0.1, 0.5), quat_from_rpy(0.0, 0.0, 0.25))
    transform = StampedTransform(matrix=T, stamp=1.0, frame_id="base_link", child_frame_id="camera")

    pose = sensor_pose_from_transform(transform)
    assert (pose.x, pose.y, pose.theta) == pytest.approx((0.3, -0.1, 0.25))

    rotated = sensor_pose_from_transform(transform, alt_frame=True)
    assert rotated.theta == pytest.approx(0.25 + np.pi / 2)


def test_default_sensor_pose():
    assert (DEFAULT_SENSOR_POSE.x, DEFAULT_SENSOR_POSE.y, DEFAULT_SENSOR_POSE.theta) == (0.225, 0.0, 0.0)
