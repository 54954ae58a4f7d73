"""
Range and bearing gating of converted detections.
"""
from typing import Optional, Tuple
import numpy as np
from attrs import define, field

from .types.variables import Pose2D


def polar_coordinates(pose: Pose2D) -> Tuple[float, float]:
    """Returns (length, angle) of the pose position."""
    return float(np.hypot(pose.x, pose.y)), float(np.arctan2(pose.y, pose.x))


def passes_gate(
    length: float,
    angle: float,
    range_min: float,
    range_max: float,
    angle_min: float,
    angle_max: float,
) -> bool:
    """True iff both the range and the bearing lie inside their closed bounds."""
    return range_min <= length <= range_max and angle_min <= angle <= angle_max


@define
class MeasurementGate:
    """
    Closed range/bearing window a converted detection has to fall into.
    """

    range_min: float = field(converter=float)
    range_max: float = field(converter=float)
    angle_min: float = field(converter=float)
    angle_max: float = field(converter=float)

    def accepts(self, pose: Pose2D) -> bool:
        length, angle = polar_coordinates(pose)
        return passes_gate(length, angle, self.range_min, self.range_max, self.angle_min, self.angle_max)

    def evaluate(self, pose: Pose2D) -> Optional[Tuple[float, float]]:
        """Returns (length, angle) if the pose is accepted, otherwise None."""
        length, angle = polar_coordinates(pose)
        if not passes_gate(length, angle, self.range_min, self.range_max, self.angle_min, self.angle_max):
            return None
        return length, angle
