import numpy as np
import pytest

from marker_slam.covariance import (
    check_state_consistency,
    embed_planar_covariance,
    extract_marginal_block,
    marginal_covariance_6x6,
)
from marker_slam.exceptions import StateDesynchronizationError
from marker_slam.types.variables import Pose2D


def test_robot_block_lands_on_x_y_yaw():
    C_yt = np.zeros((6, 6))
    C_yt[:3, :3] = np.diag([0.1, 0.2, 0.3])
    C_yt[3:, 3:] = np.diag([9.0, 9.0, 9.0])

    covariance = marginal_covariance_6x6(C_yt, 0)

    expected = np.zeros((6, 6))
    expected[0, 0] = 0.1
    expected[1, 1] = 0.2
    expected[5, 5] = 0.3
    np.testing.assert_array_equal(covariance, expected)


def test_off_diagonal_terms_follow_the_mapping():
    block = np.array(
        [
            [1.0, 2.0, 3.0],
            [2.0, 4.0, 5.0],
            [3.0, 5.0, 6.0],
        ]
    )
    covariance = embed_planar_covariance(block)
    assert covariance[0, 1] == 2.0 and covariance[1, 0] == 2.0
    assert covariance[0, 5] == 3.0 and covariance[5, 0] == 3.0
    assert covariance[1, 5] == 5.0 and covariance[5, 1] == 5.0
    assert np.count_nonzero(covariance) == 9
    assert not covariance[2:5, :].any()
    assert not covariance[:, 2:5].any()


def test_landmark_block_extraction():
    C_yt = np.arange(81, dtype=float).reshape(9, 9)
    block = extract_marginal_block(C_yt, 2)
    np.testing.assert_array_equal(block, C_yt[6:9, 6:9])

    block[0, 0] = -1.0
    assert C_yt[6, 6] == 60.0


def test_consistent_state_passes():
    yt = [Pose2D(0, 0, 0), Pose2D(1, 1, 0)]
    check_state_consistency(yt, np.eye(6))


@pytest.mark.parametrize(
    "yt, C_yt",
    [
        ([], np.zeros((0, 0))),
        ([Pose2D(0, 0, 0)], np.eye(6)),
        ([Pose2D(0, 0, 0), Pose2D(1, 0, 0)], np.eye(3)),
        ([Pose2D(0, 0, 0)], np.zeros((3, 6))),
    ],
)
def test_inconsistent_state_is_rejected(yt, C_yt):
    with pytest.raises(StateDesynchronizationError):
        check_state_consistency(yt, C_yt)


@pytest.mark.parametrize("index", [-1, 2, 5])
def test_out_of_range_block_is_rejected(index):
    with pytest.raises(StateDesynchronizationError):
        extract_marginal_block(np.eye(6), index)
