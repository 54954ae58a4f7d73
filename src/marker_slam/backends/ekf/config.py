"""
Noise configuration of the EKF-SLAM backend.
"""
from typing import Any, Mapping
from attrs import define, field, fields, validators


@define
class EKFSLAMConfig:
    """
    Motion noise follows the velocity motion model: the control noise is
    diag(alpha_1 v^2 + alpha_2 w^2, alpha_3 v^2 + alpha_4 w^2).
    Measurement noise is diagonal in (x, y, theta) of the robot-frame marker pose;
    the positional sigmas grow by ``sigma_scale`` per metre of range.
    """

    alpha_1: float = field(default=0.1, converter=float, validator=validators.ge(0.0))
    alpha_2: float = field(default=0.01, converter=float, validator=validators.ge(0.0))
    alpha_3: float = field(default=0.01, converter=float, validator=validators.ge(0.0))
    alpha_4: float = field(default=0.1, converter=float, validator=validators.ge(0.0))
    sigma_x: float = field(default=0.05, converter=float, validator=validators.gt(0.0))
    sigma_y: float = field(default=0.05, converter=float, validator=validators.gt(0.0))
    sigma_theta: float = field(default=0.1, converter=float, validator=validators.gt(0.0))
    sigma_scale: float = field(default=0.02, converter=float, validator=validators.ge(0.0))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "EKFSLAMConfig":
        """Builds a config from any mapping, ignoring keys that are not config fields."""
        names = [a.name for a in fields(cls)]
        return cls(**{name: values[name] for name in names if name in values})
