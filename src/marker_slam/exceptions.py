"""
Exceptions raised across the marker_slam layer.
"""


class ConfigurationError(ValueError):
    """The node configuration cannot be used, e.g. an unsupported estimator mode."""


class FrameLookupError(RuntimeError):
    """A frame could not be resolved (unknown frame, extrapolation, disconnected tree, timeout)."""


class StateDesynchronizationError(RuntimeError):
    """The estimator state and its joint covariance disagree in size."""
