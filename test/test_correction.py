import logging

import numpy as np
import pytest

from conftest import FakeFrameResolver
from marker_slam.correction import CorrectionTransformComposer
from marker_slam.types.variables import Pose2D


def test_map_to_odom_closes_the_chain(broadcaster, frame_ids):
    odom_to_base = Pose2D(1.0, 0.5, 0.3)
    robot_in_map = Pose2D(2.0, 1.0, np.pi / 2)
    composer = CorrectionTransformComposer(FakeFrameResolver(odom_to_base), broadcaster, frame_ids)

    map_to_odom = composer.publish(robot_in_map, stamp=4.0)

    np.testing.assert_allclose(map_to_odom.matrix @ odom_to_base.matrix3d, robot_in_map.matrix3d, atol=1e-9)
    assert map_to_odom.frame_id == "map"
    assert map_to_odom.child_frame_id == "odom"
    assert map_to_odom.stamp == pytest.approx(4.0)
    assert len(broadcaster.sent) == 1 and broadcaster.sent[0] is map_to_odom


def test_identity_odometry_gives_robot_pose(broadcaster, frame_ids, resolver):
    composer = CorrectionTransformComposer(resolver, broadcaster, frame_ids)
    robot = Pose2D(-1.0, 3.0, 0.7)

    map_to_odom = composer.publish(robot, stamp=1.0)

    assert Pose2D.from_matrix(map_to_odom.matrix).x == pytest.approx(-1.0)
    assert Pose2D.from_matrix(map_to_odom.matrix).y == pytest.approx(3.0)
    assert Pose2D.from_matrix(map_to_odom.matrix).theta == pytest.approx(0.7)
    assert resolver.calls == [("odom", "base_link")]


def test_lookup_failure_skips_broadcast(failing_resolver, broadcaster, frame_ids, caplog):
    composer = CorrectionTransformComposer(failing_resolver, broadcaster, frame_ids)

    with caplog.at_level(logging.ERROR, logger="rosout"):
        first = composer.publish(Pose2D(1.0, 0.0, 0.0), stamp=2.0)
        second = composer.publish(Pose2D(1.0, 0.0, 0.0), stamp=3.0)

    assert first is None and second is None
    assert broadcaster.sent == []
    assert "subtracting base-to-odom from map-to-base failed" in caplog.text


def test_no_update_time_skips_everything(resolver, broadcaster, frame_ids):
    composer = CorrectionTransformComposer(resolver, broadcaster, frame_ids)
    assert composer.publish(Pose2D(0.0, 0.0, 0.0), stamp=None) is None
    assert resolver.calls == []
    assert broadcaster.sent == []
