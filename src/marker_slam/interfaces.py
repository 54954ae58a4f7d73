"""
Interfaces of the collaborators the publishing pipeline talks to.

The ROS implementations live in ``marker_slam.ros``; tests provide in-memory fakes.
"""
from abc import ABC, abstractmethod

from .types.records import PublishedPoseRecord, PublishedLandmarkArray
from .types.variables import StampedTransform


class FrameResolver(ABC):
    """Resolves poses and transforms between named coordinate frames."""

    @abstractmethod
    def transform_pose(self, target_frame: str, stamped_pose: StampedTransform) -> StampedTransform:
        """
        Re-express a stamped pose in ``target_frame``.

        Raises:
            FrameLookupError: the frames cannot be connected at the pose stamp
        """
        raise NotImplementedError

    @abstractmethod
    def lookup_transform(self, target_frame: str, source_frame: str, stamp: float) -> StampedTransform:
        """
        Get the transform mapping ``source_frame`` into ``target_frame``.
        A stamp of 0 requests the latest available transform.

        Raises:
            FrameLookupError: the frames cannot be connected at ``stamp``
        """
        raise NotImplementedError


class TransformBroadcaster(ABC):
    """Broadcasts transforms into the frame tree."""

    @abstractmethod
    def send_transform(self, transform: StampedTransform) -> None:
        raise NotImplementedError


class StateSink(ABC):
    """Receives the pose and landmark records of each cycle."""

    @abstractmethod
    def publish_pose(self, record: PublishedPoseRecord) -> None:
        raise NotImplementedError

    @abstractmethod
    def publish_landmarks(self, landmarks: PublishedLandmarkArray) -> None:
        raise NotImplementedError
