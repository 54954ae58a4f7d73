"""
Types package for marker_slam data structures.
"""
from .enums import SlamTechnique, PublisherState
from .variables import Pose2D, StampedTransform
from .measurements import (
    ControlCommand,
    RawDetection,
    DetectionBatch,
    GatedMeasurement,
    MeasurementSet,
)
from .records import PublishedPoseRecord, PublishedLandmark, PublishedLandmarkArray

__all__ = [
    "SlamTechnique",
    "PublisherState",
    "Pose2D",
    "StampedTransform",
    "ControlCommand",
    "RawDetection",
    "DetectionBatch",
    "GatedMeasurement",
    "MeasurementSet",
    "PublishedPoseRecord",
    "PublishedLandmark",
    "PublishedLandmarkArray",
]
