"""
Output records handed to the publishing boundary once per cycle.
"""
from attrs import define, field, validators
from typing import List
from numpy import ndarray

from .variables import Pose2D


def _covariance_6x6_validator(instance, attribute, value):
    if not isinstance(value, ndarray) or value.shape != (6, 6):
        raise ValueError(f"{attribute.name} must be a 6x6 numpy array")


@define
class PublishedPoseRecord:
    """
    Estimated robot pose with its covariance in the 6-DOF (x, y, z, roll, pitch, yaw) layout.
    """

    pose: Pose2D = field(validator=validators.instance_of(Pose2D))
    covariance: ndarray = field(validator=_covariance_6x6_validator)
    frame_id: str = field(validator=validators.instance_of(str))
    stamp: float = field(converter=float)
    seq: int = field(validator=validators.instance_of(int))


@define
class PublishedLandmark:
    """
    A single landmark estimate with its identifier and covariance.
    """

    id: int = field(validator=validators.instance_of(int))
    confidence: float = field(converter=float)
    pose: Pose2D = field(validator=validators.instance_of(Pose2D))
    covariance: ndarray = field(validator=_covariance_6x6_validator)


@define
class PublishedLandmarkArray:
    """
    All landmark estimates of one cycle.
    """

    landmarks: List[PublishedLandmark] = field(factory=list)
    frame_id: str = field(default="map", validator=validators.instance_of(str))
    stamp: float = field(default=0.0, converter=float)
    seq: int = field(default=0, validator=validators.instance_of(int))

    def __len__(self) -> int:
        return len(self.landmarks)
