"""
Enumerations for SLAM techniques and publisher states.
"""
from enum import Enum


class SlamTechnique(Enum):
    """Estimation engines the node can drive. Values match the ``mode`` parameter."""
    EKF = 0


class PublisherState(Enum):
    """Per-tick state of the StatePublisher."""
    IDLE = 0
    UPDATED = 1
    PUBLISHED = 2
