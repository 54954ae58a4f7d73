"""
Pose and transform types shared by the adapter, the publisher and the estimators.
"""
from attrs import define, field, validators
from typing import Optional, Tuple
import numpy as np
from numpy import ndarray

from ..utils.validation import _check_transformation_matrix
from ..utils.transformations import (
    get_rotation_matrix_from_theta,
    get_theta_from_rotation_matrix,
    get_quat_from_rotation_matrix,
    get_translation_from_transformation_matrix,
    get_rotation_matrix_from_transformation_matrix,
    invert_transformation_matrix,
)


@define(frozen=True)
class Pose2D:
    """
    Planar pose (x, y, theta). Theta is in radians and is not wrapped here.
    """

    x: float = field(converter=float, metadata={"description": "The x position"})
    y: float = field(converter=float, metadata={"description": "The y position"})
    theta: float = field(
        converter=float,
        metadata={"description": "The orientation in radians"},
    )

    @classmethod
    def from_matrix(cls, T: ndarray) -> "Pose2D":
        """Builds a pose from a 3x3 or 4x4 homogeneous transformation (projected onto the plane)."""
        _check_transformation_matrix(T, assert_test=False)
        R = get_rotation_matrix_from_transformation_matrix(T)
        t = get_translation_from_transformation_matrix(T)
        return cls(x=t[0], y=t[1], theta=get_theta_from_rotation_matrix(R))

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def transformation_matrix(self) -> ndarray:
        """Returns the 3x3 homogeneous transformation matrix."""
        T = np.eye(3)
        T[:2, :2] = get_rotation_matrix_from_theta(self.theta)
        T[:2, 2] = np.array(self.position)
        return T

    @property
    def matrix3d(self) -> ndarray:
        """Returns the 4x4 homogeneous transformation matrix of the pose at z = 0."""
        T = np.eye(4)
        T[:2, :2] = get_rotation_matrix_from_theta(self.theta)
        T[:2, 3] = np.array(self.position)
        return T

    @property
    def quaternion(self) -> ndarray:
        """Returns the yaw rotation as a scalar-last quaternion (x, y, z, w)."""
        R = np.eye(3)
        R[:2, :2] = get_rotation_matrix_from_theta(self.theta)
        return get_quat_from_rotation_matrix(R)

    def compose(self, other: "Pose2D") -> "Pose2D":
        """Returns self (+) other, i.e. ``other`` expressed in the frame this pose points to."""
        c, s = np.cos(self.theta), np.sin(self.theta)
        return Pose2D(
            x=self.x + c * other.x - s * other.y,
            y=self.y + s * other.x + c * other.y,
            theta=self.theta + other.theta,
        )

    def inverse(self) -> "Pose2D":
        c, s = np.cos(self.theta), np.sin(self.theta)
        return Pose2D(
            x=-c * self.x - s * self.y,
            y=s * self.x - c * self.y,
            theta=-self.theta,
        )


def _matrix_validator(instance, attribute, value):
    if not isinstance(value, ndarray) or value.shape != (4, 4):
        raise ValueError(f"{attribute.name} must be a 4x4 numpy array")
    _check_transformation_matrix(value)


@define(eq=False)
class StampedTransform:
    """
    A rigid 3D transform (or pose) with a timestamp and its reference frame.

    When used as a stamped pose, ``frame_id`` is the frame the pose is expressed in
    and ``child_frame_id`` is unset. When used as a transform, it maps points from
    ``child_frame_id`` into ``frame_id``.
    """

    matrix: ndarray = field(
        validator=_matrix_validator,
        metadata={"description": "The 4x4 homogeneous transformation matrix"},
    )
    stamp: float = field(
        converter=float,
        metadata={"description": "Time stamp in seconds"},
    )
    frame_id: str = field(
        validator=validators.instance_of(str),
        metadata={"description": "The reference (parent) frame"},
    )
    child_frame_id: Optional[str] = field(
        default=None,
        validator=validators.optional(validators.instance_of(str)),
        metadata={"description": "The child frame, if this is a transform"},
    )

    @property
    def translation(self) -> ndarray:
        return get_translation_from_transformation_matrix(self.matrix).copy()

    @property
    def rotation(self) -> ndarray:
        """Returns the rotation as a scalar-last quaternion (x, y, z, w)."""
        return get_quat_from_rotation_matrix(
            get_rotation_matrix_from_transformation_matrix(self.matrix)
        )

    def inverse(
        self, frame_id: Optional[str] = None, child_frame_id: Optional[str] = None
    ) -> "StampedTransform":
        """Returns the inverse transform with the same stamp.

        The frame ids are swapped unless given explicitly. A stamped pose (no child frame)
        keeps its frame id.
        """
        if frame_id is None:
            frame_id = self.child_frame_id if self.child_frame_id is not None else self.frame_id
        if child_frame_id is None and self.child_frame_id is not None:
            child_frame_id = self.frame_id
        return StampedTransform(
            matrix=invert_transformation_matrix(self.matrix),
            stamp=self.stamp,
            frame_id=frame_id,
            child_frame_id=child_frame_id,
        )
