"""
Conversion of detector-reported 3D marker poses into planar robot-frame poses.

Two detector mounting conventions are supported:

- default (``alt_frame=False``): the detector reports in a forward-facing frame
  co-planar with the robot, so x/y/yaw map straight through.
- alternate (``alt_frame=True``): the detector reports in an optical frame whose
  z axis looks forward and whose x axis points right (as in gazebo camera
  plugins), so forward is z, left is -x and the marker heading is read off the
  pitch.
"""
from typing import Sequence
import numpy as np

from .types.variables import Pose2D, StampedTransform
from .utils.transformations import angle_difference, get_rpy_from_quat, get_theta_from_rotation_matrix

# Mount used when the detector frame cannot be resolved against the base frame.
DEFAULT_SENSOR_POSE = Pose2D(0.225, 0.0, 0.0)


def convert_detection_pose(
    position: Sequence[float],
    orientation: Sequence[float],
    alt_frame: bool = False,
) -> Pose2D:
    """Converts a detector-frame 3D pose into a planar pose.

    Args:
        position: the marker position (vx, vy, vz)
        orientation: the marker orientation as a scalar-last quaternion (x, y, z, w)
        alt_frame: True for the rotated optical-frame convention

    Returns:
        the planar pose (x, y, theta)
    """
    vx, vy, vz = (float(v) for v in position)
    _, pitch, yaw = get_rpy_from_quat(np.asarray(orientation, dtype=float))

    if alt_frame:
        return Pose2D(x=vz, y=-vx, theta=angle_difference(np.pi, pitch))
    return Pose2D(x=vx, y=vy, theta=yaw)


def sensor_pose_from_transform(transform: StampedTransform, alt_frame: bool = False) -> Pose2D:
    """Returns the planar mounting pose of the detector in the base frame.

    Args:
        transform: the detector-to-base transform
        alt_frame: True for the rotated optical-frame convention, which adds a
            quarter turn to the mounting yaw

    Returns:
        the planar sensor pose
    """
    translation = transform.translation
    yaw = get_theta_from_rotation_matrix(transform.matrix[:3, :3])
    if alt_frame:
        yaw += np.pi / 2.0
    return Pose2D(x=translation[0], y=translation[1], theta=yaw)
