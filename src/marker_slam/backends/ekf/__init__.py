"""
EKF backend for the SLAM node.

This module provides an extended Kalman filter over robot and landmark poses.
"""

from .estimator import EKFSlamEstimator
from .config import EKFSLAMConfig
from .models import (
    predict_pose,
    motion_noise,
    expected_relative_pose,
    landmark_from_measurement,
)

__all__ = [
    "EKFSlamEstimator",
    "EKFSLAMConfig",
    "predict_pose",
    "motion_noise",
    "expected_relative_pose",
    "landmark_from_measurement",
]
