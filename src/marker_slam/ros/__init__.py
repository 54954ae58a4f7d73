"""
ROS integration layer for the marker_slam package.

This module provides ROS-specific functionality including:
- Message conversion between ROS messages and internal types
- tf-backed frame resolution and transform broadcasting
- Publishers for the pose and landmark estimates
- ROS node wrapper and parameter loading

This layer isolates ROS dependencies from the adaptation and publishing logic,
keeping the core testable without ROS.
"""

# ROS node - main entry point for ROS integration
from .node import ROSSlamNode

# Parameter loading
from .params import get_namespace_param, load_node_config, load_ekf_config

# Frame tree access
from .frames import TfFrameResolver, TfTransformBroadcaster

# Publisher utilities
from .publishers import RosStateSink

# Message conversion utilities
from .message_converters import (
    twist_to_command,
    marker_detection_to_batch,
    pose_record_to_msg,
    landmark_array_to_msg,
)

__all__ = [
    "ROSSlamNode",
    "get_namespace_param",
    "load_node_config",
    "load_ekf_config",
    "TfFrameResolver",
    "TfTransformBroadcaster",
    "RosStateSink",
    "twist_to_command",
    "marker_detection_to_batch",
    "pose_record_to_msg",
    "landmark_array_to_msg",
]
