"""
ROS publisher utilities for the SLAM node.

Handles publishing the robot pose and landmark estimates as ROS messages.
"""

import rospy
from geometry_msgs.msg import PoseWithCovarianceStamped
from marker_msgs.msg import MarkerWithCovarianceArray

from ..interfaces import StateSink
from ..types.records import PublishedLandmarkArray, PublishedPoseRecord
from .message_converters import landmark_array_to_msg, pose_record_to_msg


class RosStateSink(StateSink):
    """
    Publishes the robot pose on ``~xt`` and the landmarks on ``~mt``.
    """

    def __init__(self, pose_topic: str = "~xt", landmarks_topic: str = "~mt"):
        self.pose_pub = rospy.Publisher(pose_topic, PoseWithCovarianceStamped, queue_size=1)
        self.landmarks_pub = rospy.Publisher(landmarks_topic, MarkerWithCovarianceArray, queue_size=1)

    def publish_pose(self, record: PublishedPoseRecord) -> None:
        self.pose_pub.publish(pose_record_to_msg(record))

    def publish_landmarks(self, landmarks: PublishedLandmarkArray) -> None:
        rospy.logdebug(f"[publish_landmarks] {len(landmarks)} landmarks, seq {landmarks.seq}")
        self.landmarks_pub.publish(landmark_array_to_msg(landmarks))
