"""
Transformation matrix utilities for pose, angle and rotation conversions.
"""
from typing import Tuple
import numpy as np
import scipy.spatial.transform
from .validation import _check_square, _check_rotation_matrix, _check_transformation_matrix


def wrap_angle(angle: float) -> float:
    """Maps an angle into (-pi, pi].

    Args:
        angle: the angle in radians

    Returns:
        the equivalent angle in (-pi, pi]
    """
    wrapped = float(np.arctan2(np.sin(angle), np.cos(angle)))
    if wrapped <= -np.pi:
        wrapped = float(np.pi)
    return wrapped


def angle_difference(a: float, b: float) -> float:
    """Returns the signed minimal difference a - b mapped into (-pi, pi].

    Args:
        a: the first angle in radians
        b: the second angle in radians

    Returns:
        the difference in radians
    """
    return wrap_angle(a - b)


def get_rotation_matrix_from_theta(theta: float) -> np.ndarray:
    """Returns the 2D rotation matrix from theta.

    Args:
        theta: the angle of rotation in radians

    Returns:
        2x2 rotation matrix
    """
    return np.array([[np.cos(theta), -np.sin(theta)], [np.sin(theta), np.cos(theta)]])


def get_theta_from_rotation_matrix(mat: np.ndarray) -> float:
    """Returns theta from a 2D rotation matrix (or the yaw of a 3D one).

    Args:
        mat: the 2x2 or 3x3 rotation matrix

    Returns:
        theta in radians
    """
    _check_square(mat)
    assert mat.shape in [(2, 2), (3, 3)]
    return float(np.arctan2(mat[1, 0], mat[0, 0]))


def get_rotation_matrix_from_quat(quat: np.ndarray) -> np.ndarray:
    """Returns the rotation matrix from a quaternion in scalar-last (x, y, z, w) format.

    Args:
        quat: the quaternion as (x, y, z, w)

    Returns:
        3x3 rotation matrix
    """
    quat = np.asarray(quat, dtype=float)
    assert quat.shape == (4,)
    rot = scipy.spatial.transform.Rotation.from_quat(quat)
    rot_mat = rot.as_matrix()
    assert rot_mat.shape == (3, 3)

    _check_rotation_matrix(rot_mat, assert_test=True)
    return rot_mat


def get_quat_from_rotation_matrix(mat: np.ndarray) -> np.ndarray:
    """Returns the quaternion from a rotation matrix in scalar-last (x, y, z, w) format.
    Ensures w is positive by convention, given R(-q) = R(q).

    Args:
        mat: the rotation matrix (2x2 or 3x3)

    Returns:
        quaternion as (x, y, z, w)
    """
    _check_rotation_matrix(mat)
    mat_dim = mat.shape[0]

    if mat_dim == 2:
        rot_matrix = np.eye(3)
        rot_matrix[:2, :2] = mat
    else:
        rot_matrix = mat

    rot = scipy.spatial.transform.Rotation.from_matrix(rot_matrix)
    quat = rot.as_quat()

    # Ensure positive w by convention
    if quat[-1] < 0:
        quat = np.negative(quat)

    return quat


def get_quat_from_theta(theta: float) -> np.ndarray:
    """Returns the quaternion of a pure yaw rotation in scalar-last (x, y, z, w) format.

    Args:
        theta: the angle of rotation in radians

    Returns:
        quaternion as (x, y, z, w)
    """
    R = np.eye(3)
    R[:2, :2] = get_rotation_matrix_from_theta(theta)
    return get_quat_from_rotation_matrix(R)


def get_rpy_from_quat(quat: np.ndarray) -> Tuple[float, float, float]:
    """Returns (roll, pitch, yaw) of a scalar-last quaternion.

    Uses the fixed-axis xyz convention, i.e. R = Rz(yaw) Ry(pitch) Rx(roll).

    Args:
        quat: the quaternion as (x, y, z, w)

    Returns:
        (roll, pitch, yaw) in radians
    """
    rot = scipy.spatial.transform.Rotation.from_quat(np.asarray(quat, dtype=float))
    roll, pitch, yaw = rot.as_euler("xyz")
    return float(roll), float(pitch), float(yaw)


def get_yaw_from_quat(quat: np.ndarray) -> float:
    return get_rpy_from_quat(quat)[2]


def get_transformation_matrix(translation: np.ndarray, quat: np.ndarray) -> np.ndarray:
    """Returns the 4x4 homogeneous transformation matrix for a translation and rotation.

    Args:
        translation: the translation (x, y, z)
        quat: the rotation as a scalar-last quaternion (x, y, z, w)

    Returns:
        4x4 transformation matrix
    """
    T = np.eye(4)
    T[:3, :3] = get_rotation_matrix_from_quat(np.asarray(quat, dtype=float))
    T[:3, 3] = np.asarray(translation, dtype=float)
    return T


def get_translation_from_transformation_matrix(T: np.ndarray) -> np.ndarray:
    """Returns the translation from a transformation matrix.

    Args:
        T: the transformation matrix

    Returns:
        the translation vector
    """
    _check_square(T)
    dim = T.shape[0] - 1
    return T[:dim, dim]


def get_rotation_matrix_from_transformation_matrix(T: np.ndarray) -> np.ndarray:
    """Returns the rotation matrix from the transformation matrix.

    Args:
        T: the transformation matrix

    Returns:
        the rotation matrix
    """
    _check_square(T)
    dim = T.shape[0] - 1
    return T[:dim, :dim]


def invert_transformation_matrix(T: np.ndarray) -> np.ndarray:
    """Returns the inverse of a rigid homogeneous transformation.

    Uses R^T rather than a general matrix inverse so the result stays rigid.

    Args:
        T: the 3x3 or 4x4 transformation matrix

    Returns:
        the inverse transformation matrix
    """
    _check_transformation_matrix(T)
    R = get_rotation_matrix_from_transformation_matrix(T)
    t = get_translation_from_transformation_matrix(T)
    dim = R.shape[0]
    T_inv = np.eye(dim + 1)
    T_inv[:dim, :dim] = R.T
    T_inv[:dim, dim] = -R.T @ t
    return T_inv
