"""
Computes and broadcasts the map -> odom correction transform.

The estimator tracks the robot in the map frame while odometry drifts. Subtracting
base->odom from map->base (as amcl does) gives the transform that makes the
map -> odom -> base chain agree with the estimate.
"""
import logging
from typing import Optional

from .config import FrameIds
from .exceptions import FrameLookupError
from .interfaces import FrameResolver, TransformBroadcaster
from .types.variables import Pose2D, StampedTransform

logger = logging.getLogger("rosout")


class CorrectionTransformComposer:
    """
    Derives map -> odom from the robot pose estimate and the frame tree.
    """

    def __init__(
        self,
        resolver: FrameResolver,
        broadcaster: TransformBroadcaster,
        frame_ids: FrameIds,
    ):
        self.resolver = resolver
        self.broadcaster = broadcaster
        self.frame_ids = frame_ids

    def compose(self, robot_pose: Pose2D, stamp: float) -> StampedTransform:
        """
        Computes map -> odom for the robot pose at ``stamp``.

        Args:
            robot_pose: the estimated robot pose in the map frame
            stamp: the time of the estimate in seconds

        Returns:
            the map -> odom transform, stamped like the resolved odom pose

        Raises:
            FrameLookupError: the base pose could not be expressed in the odom frame
        """
        # robot_pose is base_to_map; its inverse is the map origin seen from base
        map_to_base = StampedTransform(
            matrix=robot_pose.inverse().matrix3d,
            stamp=stamp,
            frame_id=self.frame_ids.base,
        )
        odom_to_map = self.resolver.transform_pose(self.frame_ids.odom, map_to_base)
        return odom_to_map.inverse(
            frame_id=self.frame_ids.map,
            child_frame_id=self.frame_ids.odom,
        )

    def publish(self, robot_pose: Pose2D, stamp: Optional[float]) -> Optional[StampedTransform]:
        """
        Computes and broadcasts map -> odom. Lookup failures skip this cycle's broadcast.

        Args:
            robot_pose: the estimated robot pose in the map frame
            stamp: the estimator's last update time, None if it never updated

        Returns:
            the broadcast transform, or None if nothing was broadcast
        """
        if stamp is None:
            return None
        try:
            map_to_odom = self.compose(robot_pose, stamp)
        except FrameLookupError as e:
            logger.error(f"[publish] subtracting base-to-odom from map-to-base failed: {e}")
            return None

        self.broadcaster.send_transform(map_to_odom)
        return map_to_odom
