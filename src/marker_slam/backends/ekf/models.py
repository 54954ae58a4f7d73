"""
Motion and measurement models of the EKF-SLAM backend with their Jacobians.

State layout: [x, y, theta, m1_x, m1_y, m1_theta, ..., mN_x, mN_y, mN_theta].
"""
from typing import Tuple
import numpy as np
from numpy import ndarray

from ...utils.transformations import wrap_angle

# below this angular rate the straight-line branch of the motion model is used
MIN_ANGULAR_VELOCITY = 1e-6


def predict_pose(
    pose: ndarray, v: float, w: float, dt: float
) -> Tuple[ndarray, ndarray, ndarray]:
    """Velocity motion model.

    Args:
        pose: the robot pose (x, y, theta)
        v: linear velocity
        w: angular velocity
        dt: time step in seconds

    Returns:
        (predicted pose, Jacobian G wrt the pose, Jacobian V wrt the control (v, w))
    """
    x, y, theta = pose
    s, c = np.sin(theta), np.cos(theta)
    G = np.eye(3)
    V = np.zeros((3, 2))

    if abs(w) < MIN_ANGULAR_VELOCITY:
        new_pose = np.array([x + v * dt * c, y + v * dt * s, theta])
        G[0, 2] = -v * dt * s
        G[1, 2] = v * dt * c
        V[0, 0] = dt * c
        V[1, 0] = dt * s
        V[0, 1] = -0.5 * v * dt**2 * s
        V[1, 1] = 0.5 * v * dt**2 * c
        V[2, 1] = dt
        return new_pose, G, V

    r = v / w
    theta_new = theta + w * dt
    s_new, c_new = np.sin(theta_new), np.cos(theta_new)
    new_pose = np.array(
        [
            x - r * s + r * s_new,
            y + r * c - r * c_new,
            wrap_angle(theta_new),
        ]
    )
    G[0, 2] = -r * c + r * c_new
    G[1, 2] = -r * s + r * s_new
    V[0, 0] = (-s + s_new) / w
    V[1, 0] = (c - c_new) / w
    V[0, 1] = v * (s - s_new) / w**2 + v * c_new * dt / w
    V[1, 1] = -v * (c - c_new) / w**2 + v * s_new * dt / w
    V[2, 1] = dt
    return new_pose, G, V


def motion_noise(v: float, w: float, alphas: Tuple[float, float, float, float]) -> ndarray:
    """Control-space noise covariance M of the velocity motion model."""
    a1, a2, a3, a4 = alphas
    return np.diag([a1 * v**2 + a2 * w**2, a3 * v**2 + a4 * w**2])


def expected_relative_pose(robot: ndarray, landmark: ndarray) -> Tuple[ndarray, ndarray, ndarray]:
    """Expected landmark pose relative to the robot.

    Args:
        robot: the robot pose (x, y, theta)
        landmark: the landmark pose (x, y, theta)

    Returns:
        (expected measurement, Jacobian wrt the robot pose, Jacobian wrt the landmark pose)
    """
    x, y, theta = robot
    s, c = np.sin(theta), np.cos(theta)
    dx, dy = landmark[0] - x, landmark[1] - y
    qx = c * dx + s * dy
    qy = -s * dx + c * dy
    z_hat = np.array([qx, qy, wrap_angle(landmark[2] - theta)])

    H_robot = np.array(
        [
            [-c, -s, qy],
            [s, -c, -qx],
            [0.0, 0.0, -1.0],
        ]
    )
    H_landmark = np.array(
        [
            [c, s, 0.0],
            [-s, c, 0.0],
            [0.0, 0.0, 1.0],
        ]
    )
    return z_hat, H_robot, H_landmark


def landmark_from_measurement(robot: ndarray, z: ndarray) -> Tuple[ndarray, ndarray, ndarray]:
    """Inverse measurement model used to initialise a landmark.

    Args:
        robot: the robot pose (x, y, theta)
        z: the measured relative pose (x, y, theta)

    Returns:
        (landmark pose, Jacobian wrt the robot pose, Jacobian wrt the measurement)
    """
    x, y, theta = robot
    s, c = np.sin(theta), np.cos(theta)
    landmark = np.array(
        [
            x + c * z[0] - s * z[1],
            y + s * z[0] + c * z[1],
            wrap_angle(theta + z[2]),
        ]
    )
    G_robot = np.array(
        [
            [1.0, 0.0, -s * z[0] - c * z[1]],
            [0.0, 1.0, c * z[0] - s * z[1]],
            [0.0, 0.0, 1.0],
        ]
    )
    G_z = np.array(
        [
            [c, -s, 0.0],
            [s, c, 0.0],
            [0.0, 0.0, 1.0],
        ]
    )
    return landmark, G_robot, G_z
