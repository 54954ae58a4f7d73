"""
tf-backed frame resolution and transform broadcasting.
"""

import rospy
import tf

from ..exceptions import FrameLookupError
from ..interfaces import FrameResolver, TransformBroadcaster
from ..types.variables import StampedTransform
from ..utils.transformations import get_transformation_matrix
from .message_converters import (
    pose_stamped_to_stamped_transform,
    stamped_transform_to_pose_stamped,
)

TF_ERRORS = (
    tf.Exception,
    tf.LookupException,
    tf.ConnectivityException,
    tf.ExtrapolationException,
)


class TfFrameResolver(FrameResolver):
    """
    Resolves frames through a tf.TransformListener.

    Each lookup waits at most ``timeout`` seconds for the transform to become
    available; running out of time is reported as a FrameLookupError.
    """

    def __init__(self, timeout: float = 0.1, listener: tf.TransformListener = None):
        self.timeout = rospy.Duration(timeout)
        self.listener = listener if listener is not None else tf.TransformListener()

    def transform_pose(self, target_frame: str, stamped_pose: StampedTransform) -> StampedTransform:
        pose_msg = stamped_transform_to_pose_stamped(stamped_pose)
        try:
            self.listener.waitForTransform(
                target_frame, pose_msg.header.frame_id, pose_msg.header.stamp, self.timeout
            )
            result = self.listener.transformPose(target_frame, pose_msg)
        except TF_ERRORS as e:
            raise FrameLookupError(
                f"cannot express pose from '{stamped_pose.frame_id}' in '{target_frame}' "
                f"at t={stamped_pose.stamp:.3f}: {e}"
            ) from e
        return pose_stamped_to_stamped_transform(result)

    def lookup_transform(self, target_frame: str, source_frame: str, stamp: float) -> StampedTransform:
        time = rospy.Time.from_sec(stamp) if stamp > 0.0 else rospy.Time(0)
        try:
            self.listener.waitForTransform(target_frame, source_frame, time, self.timeout)
            translation, rotation = self.listener.lookupTransform(target_frame, source_frame, time)
            latest = self.listener.getLatestCommonTime(target_frame, source_frame)
        except TF_ERRORS as e:
            raise FrameLookupError(
                f"cannot look up '{source_frame}' in '{target_frame}': {e}"
            ) from e
        return StampedTransform(
            matrix=get_transformation_matrix(translation, rotation),
            stamp=(time if stamp > 0.0 else latest).to_sec(),
            frame_id=target_frame,
            child_frame_id=source_frame,
        )


class TfTransformBroadcaster(TransformBroadcaster):
    """Sends transforms with a tf.TransformBroadcaster."""

    def __init__(self, broadcaster: tf.TransformBroadcaster = None):
        self.broadcaster = broadcaster if broadcaster is not None else tf.TransformBroadcaster()

    def send_transform(self, transform: StampedTransform) -> None:
        self.broadcaster.sendTransform(
            tuple(float(v) for v in transform.translation),
            tuple(float(v) for v in transform.rotation),
            rospy.Time.from_sec(transform.stamp),
            transform.child_frame_id,
            transform.frame_id,
        )
