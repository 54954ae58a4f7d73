"""
ROS wrapper for SlamManager.

Provides ROS integration by handling subscriber, publisher, tf and
dynamic_reconfigure setup and routing messages to the ROS-agnostic core.
"""

import rospy
from dynamic_reconfigure.server import Server as DynamicReconfigureServer
from geometry_msgs.msg import Twist
from marker_msgs.msg import MarkerDetection

from marker_slam.cfg import EKFSLAMConfig as EKFSLAMReconfigure
from marker_slam.cfg import SLAMConfig as SLAMReconfigure

from ..backends.ekf import EKFSLAMConfig
from ..config import SlamConfig, SlamNodeConfig
from ..exceptions import FrameLookupError, StateDesynchronizationError
from ..frame_conversion import DEFAULT_SENSOR_POSE, sensor_pose_from_transform
from ..slam_manager import SlamManager
from ..types.enums import SlamTechnique
from ..types.variables import Pose2D
from .frames import TfFrameResolver, TfTransformBroadcaster
from .message_converters import marker_detection_to_batch, twist_to_command
from .publishers import RosStateSink


class ROSSlamNode:
    """
    ROS-aware wrapper around SlamManager.

    Subscribes to ``cmd`` and ``marker``, publishes ``~xt``/``~mt`` and the map -> odom
    transform, and exposes the live configuration through dynamic_reconfigure.
    """

    def __init__(self, config: SlamNodeConfig, ekf_config: EKFSLAMConfig = None):
        """
        Initialize the ROS SLAM node.

        Args:
            config: start-up configuration
            ekf_config: initial EKF noise configuration

        Raises:
            ConfigurationError: the configured mode is not supported
        """
        self.config = config
        self.resolver = TfFrameResolver(timeout=config.transform_timeout)
        self.manager = SlamManager(
            config,
            resolver=self.resolver,
            broadcaster=TfTransformBroadcaster(),
            sink=RosStateSink(),
            ekf_config=ekf_config,
        )
        estimator = self.manager.estimator
        rospy.loginfo(
            f"[{rospy.get_name()}] mode: {estimator.get_type_name()} ({estimator.get_type().value})"
        )

        self.cmd_subscriber = rospy.Subscriber("cmd", Twist, self._handle_cmd_callback, queue_size=1)

        self.slam_reconfigure = DynamicReconfigureServer(SLAMReconfigure, self._handle_slam_config)

        if estimator.get_type() == SlamTechnique.EKF:
            self.marker_subscriber = rospy.Subscriber(
                "marker", MarkerDetection, self._handle_marker_callback, queue_size=1
            )
            self.technique_reconfigure = DynamicReconfigureServer(
                EKFSLAMReconfigure,
                self._handle_technique_config,
                namespace="~" + estimator.get_type_name(),
            )

    def _handle_cmd_callback(self, msg: Twist) -> None:
        self.manager.on_command(twist_to_command(msg))

    def _lookup_sensor_pose(self, frame_id: str) -> Pose2D:
        """
        Mounting pose of the detector in the base frame, or the default mount if unresolvable.
        """
        try:
            transform = self.resolver.lookup_transform(self.config.frame_ids.base, frame_id, 0.0)
        except FrameLookupError as e:
            rospy.logerr(f"[{rospy.get_name()} callbackMarker] {e}")
            return DEFAULT_SENSOR_POSE
        return sensor_pose_from_transform(transform, self.config.alt_frame)

    def _handle_marker_callback(self, msg: MarkerDetection) -> None:
        batch = marker_detection_to_batch(msg)
        sensor_pose = self._lookup_sensor_pose(batch.frame_id)
        self.manager.on_detections(batch, sensor_pose)

    def _handle_slam_config(self, config, level):
        rospy.loginfo("callbackConfigSLAM!")
        self.manager.on_slam_config(SlamConfig(reset=config["reset"]))
        return config

    def _handle_technique_config(self, config, level):
        rospy.loginfo(f"callbackConfig{self.manager.technique_name}SLAM!")
        self.manager.on_estimator_config(EKFSLAMConfig.from_mapping(config))
        return config

    def tick(self, event=None) -> None:
        """Timer callback: one estimator cycle followed by publication."""
        try:
            self.manager.tick(rospy.Time.now().to_sec())
        except StateDesynchronizationError as e:
            rospy.logfatal(f"[{rospy.get_name()} publish] state and covariance out of sync, nothing published: {e}")

    def start(self) -> rospy.Timer:
        return rospy.Timer(rospy.Duration(1.0 / self.config.rate), self.tick)
