"""
Node configuration types.
"""
from attrs import define, field, validators


@define
class FrameIds:
    """
    Names of the three frames the node works with.
    """

    map: str = field(default="map", validator=validators.instance_of(str))
    odom: str = field(default="odom", validator=validators.instance_of(str))
    base: str = field(default="base_link", validator=validators.instance_of(str))


@define
class SlamNodeConfig:
    """
    Start-up configuration of the SLAM node.
    """

    mode: int = field(
        default=0,
        converter=int,
        metadata={"description": "Estimation technique, see SlamTechnique"},
    )
    xzplane: bool = field(
        default=False,
        converter=bool,
        metadata={"description": "Detector reports in the rotated optical-frame convention"},
    )
    frame_ids: FrameIds = field(factory=FrameIds, validator=validators.instance_of(FrameIds))
    rate: float = field(
        default=10.0,
        converter=float,
        validator=validators.gt(0.0),
        metadata={"description": "Tick rate in Hz"},
    )
    transform_timeout: float = field(
        default=0.1,
        converter=float,
        validator=validators.ge(0.0),
        metadata={"description": "Maximum wait for a frame lookup in seconds"},
    )

    @property
    def alt_frame(self) -> bool:
        return self.xzplane


@define
class SlamConfig:
    """
    Live (reconfigurable) node configuration.
    """

    reset: bool = field(
        default=False,
        converter=bool,
        metadata={"description": "Reset the estimator on every tick while set"},
    )
