"""
Measurement types: raw detector output, gated measurements and control commands.
"""
from attrs import define, field, validators
from typing import List, Optional, Tuple
import numpy as np

from .variables import Pose2D
from ..utils.validation import tuple_length_validator

IDENTITY_QUATERNION: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)


def _to_float_tuple(value) -> tuple:
    return tuple(float(v) for v in value)


@define(frozen=True)
class ControlCommand:
    """
    Velocity command (v, w) for a planar robot.
    """

    v: float = field(
        default=0.0,
        converter=float,
        metadata={"description": "Linear velocity in m/s"},
    )
    w: float = field(
        default=0.0,
        converter=float,
        metadata={"description": "Angular velocity in rad/s"},
    )


@define
class RawDetection:
    """
    A single landmark sighting as reported by the marker detector.
    """

    position: Tuple[float, float, float] = field(
        converter=_to_float_tuple,
        validator=tuple_length_validator(3),
        metadata={"description": "The position (x, y, z) in the detector frame"},
    )
    orientation: Tuple[float, float, float, float] = field(
        converter=_to_float_tuple,
        validator=tuple_length_validator(4),
        metadata={"description": "The orientation quaternion (x, y, z, w), normalised on conversion"},
    )
    ids: List[int] = field(
        factory=list,
        converter=list,
        metadata={"description": "Identifier candidates"},
    )
    ids_confidence: List[float] = field(
        factory=list,
        converter=list,
        metadata={"description": "Confidence of each identifier candidate, copied as reported"},
    )


@define
class DetectionBatch:
    """
    One detector message: zero or more detections plus the shared field-of-view metadata.
    """

    detections: List[RawDetection] = field(factory=list)
    view_direction: Tuple[float, float, float, float] = field(
        default=IDENTITY_QUATERNION,
        converter=_to_float_tuple,
        validator=tuple_length_validator(4),
        metadata={"description": "Aggregate viewing direction of the detector (x, y, z, w)"},
    )
    fov_horizontal: float = field(
        default=0.0,
        converter=float,
        metadata={"description": "Horizontal field of view in radians"},
    )
    distance_min: float = field(default=0.0, converter=float)
    distance_max: float = field(default=np.inf, converter=float)
    distance_max_id: float = field(
        default=np.inf,
        converter=float,
        metadata={"description": "Distance beyond which identifiers are unreliable"},
    )
    stamp: float = field(default=0.0, converter=float)
    frame_id: str = field(default="", validator=validators.instance_of(str))

    @property
    def is_forward_looking(self) -> bool:
        """True if the view direction is exactly the identity rotation."""
        return self.view_direction == IDENTITY_QUATERNION


@define(frozen=True)
class GatedMeasurement:
    """
    A detection that passed gating, expressed in the robot-centred frame.
    """

    ids: Tuple[int, ...] = field(converter=tuple)
    confidences: Tuple[float, ...] = field(converter=tuple)
    length: float = field(converter=float)
    angle: float = field(converter=float)
    orientation: float = field(converter=float)
    pose: Pose2D = field(validator=validators.instance_of(Pose2D))

    @property
    def best_id(self) -> Optional[int]:
        """The identifier with the highest confidence, or None if there are no candidates."""
        if not self.ids:
            return None
        if len(self.confidences) != len(self.ids):
            return self.ids[0]
        return self.ids[int(np.argmax(self.confidences))]


@define
class MeasurementSet:
    """
    The gated measurements of one detection batch, ready for the estimator.
    """

    measurements: List[GatedMeasurement] = field(factory=list)
    range_min: float = field(default=0.0, converter=float)
    range_max: float = field(default=np.inf, converter=float)
    range_max_id: float = field(default=np.inf, converter=float)
    angle_min: float = field(default=-np.pi, converter=float)
    angle_max: float = field(default=np.pi, converter=float)
    stamp: float = field(default=0.0, converter=float)
    sensor_pose: Pose2D = field(
        factory=lambda: Pose2D(0.0, 0.0, 0.0),
        validator=validators.instance_of(Pose2D),
        metadata={"description": "Pose of the detector in the robot base frame"},
    )

    def __len__(self) -> int:
        return len(self.measurements)

    def __iter__(self):
        return iter(self.measurements)
