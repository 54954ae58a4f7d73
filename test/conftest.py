import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'src'))

from marker_slam.config import FrameIds
from marker_slam.exceptions import FrameLookupError
from marker_slam.interfaces import FrameResolver, StateSink, TransformBroadcaster
from marker_slam.types.variables import Pose2D, StampedTransform


class FakeFrameResolver(FrameResolver):
    """Frame tree with a single odom -> base transform, or a forced failure."""

    def __init__(self, odom_to_base: Pose2D = Pose2D(0.0, 0.0, 0.0), fail: bool = False):
        self.odom_to_base = odom_to_base
        self.fail = fail
        self.calls = []

    def transform_pose(self, target_frame, stamped_pose):
        self.calls.append((target_frame, stamped_pose.frame_id))
        if self.fail:
            raise FrameLookupError("Lookup would require extrapolation into the future")
        assert target_frame == "odom" and stamped_pose.frame_id == "base_link"
        return StampedTransform(
            matrix=self.odom_to_base.matrix3d @ stamped_pose.matrix,
            stamp=stamped_pose.stamp,
            frame_id=target_frame,
        )

    def lookup_transform(self, target_frame, source_frame, stamp):
        if self.fail:
            raise FrameLookupError(f"frame {source_frame} does not exist")
        return StampedTransform(
            matrix=np.eye(4), stamp=stamp, frame_id=target_frame, child_frame_id=source_frame
        )


class RecordingBroadcaster(TransformBroadcaster):
    def __init__(self):
        self.sent = []

    def send_transform(self, transform):
        self.sent.append(transform)


class RecordingSink(StateSink):
    def __init__(self):
        self.poses = []
        self.landmarks = []

    def publish_pose(self, record):
        self.poses.append(record)

    def publish_landmarks(self, landmarks):
        self.landmarks.append(landmarks)


@pytest.fixture
def frame_ids():
    return FrameIds()


@pytest.fixture
def resolver():
    return FakeFrameResolver()


@pytest.fixture
def failing_resolver():
    return FakeFrameResolver(fail=True)


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def sink():
    return RecordingSink()
