"""
ROS message conversion utilities.

Converts between ROS messages and internal marker_slam types.
"""

from typing import List

import numpy as np
import rospy
from geometry_msgs.msg import PoseStamped, PoseWithCovarianceStamped, Twist
from marker_msgs.msg import Marker, MarkerDetection, MarkerWithCovariance, MarkerWithCovarianceArray

from ..types.measurements import ControlCommand, DetectionBatch, RawDetection
from ..types.records import PublishedLandmarkArray, PublishedPoseRecord
from ..types.variables import Pose2D, StampedTransform
from ..utils.transformations import get_transformation_matrix


def twist_to_command(msg: Twist) -> ControlCommand:
    """Planar command from a Twist: forward speed and yaw rate."""
    return ControlCommand(v=msg.linear.x, w=msg.angular.z)


def marker_detection_to_batch(msg: MarkerDetection) -> DetectionBatch:
    """
    Convert a MarkerDetection message to a DetectionBatch.

    MarkerDetection:
        Header header
        float32 distance_min
        float32 distance_max
        float32 distance_max_id
        geometry_msgs/Quaternion view_direction
        float32 fov_horizontal
        float32 fov_vertical
        string type
        Marker[] markers
    """
    detections: List[RawDetection] = []
    for marker in msg.markers:
        position = marker.pose.position
        orientation = marker.pose.orientation
        detections.append(
            RawDetection(
                position=(position.x, position.y, position.z),
                orientation=(orientation.x, orientation.y, orientation.z, orientation.w),
                ids=list(marker.ids),
                ids_confidence=list(marker.ids_confidence),
            )
        )

    view = msg.view_direction
    return DetectionBatch(
        detections=detections,
        view_direction=(view.x, view.y, view.z, view.w),
        fov_horizontal=msg.fov_horizontal,
        distance_min=msg.distance_min,
        distance_max=msg.distance_max,
        distance_max_id=msg.distance_max_id,
        stamp=msg.header.stamp.to_sec(),
        frame_id=msg.header.frame_id,
    )


def stamped_transform_to_pose_stamped(stamped: StampedTransform) -> PoseStamped:
    msg = PoseStamped()
    msg.header.frame_id = stamped.frame_id
    msg.header.stamp = rospy.Time.from_sec(stamped.stamp)
    translation = stamped.translation
    quat = stamped.rotation
    msg.pose.position.x = float(translation[0])
    msg.pose.position.y = float(translation[1])
    msg.pose.position.z = float(translation[2])
    msg.pose.orientation.x = float(quat[0])
    msg.pose.orientation.y = float(quat[1])
    msg.pose.orientation.z = float(quat[2])
    msg.pose.orientation.w = float(quat[3])
    return msg


def pose_stamped_to_stamped_transform(msg: PoseStamped) -> StampedTransform:
    position = msg.pose.position
    orientation = msg.pose.orientation
    matrix = get_transformation_matrix(
        (position.x, position.y, position.z),
        (orientation.x, orientation.y, orientation.z, orientation.w),
    )
    return StampedTransform(matrix=matrix, stamp=msg.header.stamp.to_sec(), frame_id=msg.header.frame_id)


def _fill_planar_pose(pose_msg, pose: Pose2D) -> None:
    quat = pose.quaternion
    pose_msg.position.x = pose.x
    pose_msg.position.y = pose.y
    pose_msg.position.z = 0.0
    pose_msg.orientation.x = float(quat[0])
    pose_msg.orientation.y = float(quat[1])
    pose_msg.orientation.z = float(quat[2])
    pose_msg.orientation.w = float(quat[3])


def _flatten_covariance(covariance: np.ndarray) -> List[float]:
    # ROS stores the 6x6 covariance in row-major order
    return [float(v) for v in covariance.reshape(36)]


def pose_record_to_msg(record: PublishedPoseRecord) -> PoseWithCovarianceStamped:
    msg = PoseWithCovarianceStamped()
    msg.header.frame_id = record.frame_id
    msg.header.stamp = rospy.Time.from_sec(record.stamp)
    msg.header.seq = record.seq
    _fill_planar_pose(msg.pose.pose, record.pose)
    msg.pose.covariance = _flatten_covariance(record.covariance)
    return msg


def landmark_array_to_msg(landmarks: PublishedLandmarkArray) -> MarkerWithCovarianceArray:
    msg = MarkerWithCovarianceArray()
    msg.header.frame_id = landmarks.frame_id
    msg.header.stamp = rospy.Time.from_sec(landmarks.stamp)
    msg.header.seq = landmarks.seq
    for landmark in landmarks.landmarks:
        entry = MarkerWithCovariance()
        entry.marker = Marker()
        entry.marker.ids = [landmark.id]
        entry.marker.ids_confidence = [landmark.confidence]
        _fill_planar_pose(entry.marker.pose, landmark.pose)
        entry.covariance = _flatten_covariance(landmark.covariance)
        msg.markers.append(entry)
    return msg
