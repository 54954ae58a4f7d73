import logging

import numpy as np
import pytest

from marker_slam.backends.ekf import EKFSlamEstimator, EKFSLAMConfig
from marker_slam.backends.ekf.models import expected_relative_pose, landmark_from_measurement, predict_pose
from marker_slam.types.enums import SlamTechnique
from marker_slam.types.measurements import ControlCommand, GatedMeasurement, MeasurementSet
from marker_slam.types.variables import Pose2D


def sighting(x, y, theta=0.0, ids=(1,), confidences=(1.0,)):
    return GatedMeasurement(
        ids=ids,
        confidences=confidences,
        length=np.hypot(x, y),
        angle=np.arctan2(y, x),
        orientation=theta,
        pose=Pose2D(x, y, theta),
    )


def measurement_set(*measurements, **kwargs):
    return MeasurementSet(measurements=list(measurements), **kwargs)


@pytest.fixture
def ekf():
    return EKFSlamEstimator()


def test_initial_state(ekf):
    assert ekf.get_type() == SlamTechnique.EKF
    assert ekf.get_type_name() == "EKF"
    assert ekf.time_last_update() is None
    assert ekf.yt == [Pose2D(0.0, 0.0, 0.0)]
    assert ekf.C_yt.shape == (3, 3)


def test_straight_line_prediction(ekf):
    ekf.cycle(ControlCommand(1.0, 0.0), None, now=0.0)
    ekf.cycle(None, None, now=1.0)
    ekf.cycle(None, None, now=2.5)

    robot = ekf.yt[0]
    assert robot.x == pytest.approx(2.5)
    assert robot.y == pytest.approx(0.0)
    assert robot.theta == pytest.approx(0.0)
    assert ekf.C_yt[0, 0] > 0.0
    assert ekf.time_last_update() == pytest.approx(2.5)


def test_arc_prediction_matches_closed_form():
    pose, _, _ = predict_pose(np.zeros(3), 1.0, np.pi / 2, 1.0)
    r = 1.0 / (np.pi / 2)
    np.testing.assert_allclose(pose, [r, r, np.pi / 2], atol=1e-9)


def test_negative_dt_skips_prediction(ekf, caplog):
    ekf.cycle(ControlCommand(1.0, 0.0), None, now=5.0)
    with caplog.at_level(logging.WARNING, logger="rosout"):
        ekf.cycle(None, None, now=4.0)
    assert ekf.yt[0].x == pytest.approx(0.0)
    assert "time moved backwards" in caplog.text


def test_new_marker_becomes_landmark(ekf):
    ekf.cycle(None, measurement_set(sighting(2.0, 1.0, 0.3, ids=(17,))), now=1.0)

    assert len(ekf.yt) == 2
    landmark = ekf.yt[1]
    assert landmark.x == pytest.approx(2.0)
    assert landmark.y == pytest.approx(1.0)
    assert landmark.theta == pytest.approx(0.3)
    assert ekf.C_yt.shape == (6, 6)
    assert ekf.landmark_ids() == [17]


def test_sensor_pose_is_applied(ekf):
    mount = Pose2D(0.225, 0.0, 0.0)
    ekf.cycle(None, measurement_set(sighting(1.0, 0.0), sensor_pose=mount), now=1.0)
    assert ekf.yt[1].x == pytest.approx(1.225)


def test_repeated_sighting_shrinks_landmark_covariance(ekf):
    ekf.cycle(None, measurement_set(sighting(2.0, 0.0)), now=1.0)
    first = np.trace(ekf.C_yt[3:6, 3:6])

    ekf.cycle(None, measurement_set(sighting(2.0, 0.0)), now=1.0)
    second = np.trace(ekf.C_yt[3:6, 3:6])

    assert len(ekf.yt) == 2
    assert second < first
    assert ekf.yt[1].x == pytest.approx(2.0)


def test_covariance_stays_symmetric(ekf):
    ekf.cycle(ControlCommand(0.5, 0.1), measurement_set(sighting(2.0, 0.5, ids=(1,))), now=0.0)
    ekf.cycle(None, measurement_set(sighting(1.5, 0.5, ids=(1,)), sighting(3.0, -1.0, ids=(2,))), now=1.0)
    ekf.cycle(None, measurement_set(sighting(1.0, 0.4, ids=(2,))), now=2.0)

    C_yt = ekf.C_yt
    assert C_yt.shape == (3 * len(ekf.yt), 3 * len(ekf.yt))
    np.testing.assert_allclose(C_yt, C_yt.T, atol=1e-12)


def test_unreliable_ids_are_skipped(ekf):
    far = sighting(5.0, 0.0, ids=(3,))
    anonymous = sighting(1.0, 0.0, ids=(), confidences=())
    ekf.cycle(None, measurement_set(far, anonymous, range_max_id=3.0), now=1.0)
    assert len(ekf.yt) == 1


def test_most_confident_id_is_used(ekf):
    ekf.cycle(None, measurement_set(sighting(1.0, 0.0, ids=(4, 9), confidences=(0.2, 0.8))), now=1.0)
    assert ekf.landmark_ids() == [9]


def test_command_is_held_between_cycles(ekf):
    ekf.cycle(ControlCommand(2.0, 0.0), None, now=0.0)
    ekf.cycle(None, None, now=1.0)
    ekf.cycle(None, None, now=2.0)
    assert ekf.yt[0].x == pytest.approx(4.0)
    assert ekf.command == ControlCommand(2.0, 0.0)


def test_reset_clears_everything(ekf):
    ekf.cycle(ControlCommand(1.0, 0.0), measurement_set(sighting(1.0, 0.0)), now=0.0)
    ekf.cycle(None, None, now=1.0)

    ekf.reset()

    assert ekf.yt == [Pose2D(0.0, 0.0, 0.0)]
    assert not ekf.C_yt.any()
    assert ekf.time_last_update() is None
    assert ekf.num_landmarks == 0
    assert ekf.command == ControlCommand()


def test_set_config_from_mapping(ekf):
    ekf.set_config({"alpha_1": 0.5, "sigma_x": 0.2, "groups": {}})
    assert ekf.config.alpha_1 == pytest.approx(0.5)
    assert ekf.config.sigma_x == pytest.approx(0.2)
    assert ekf.config.alpha_2 == pytest.approx(EKFSLAMConfig().alpha_2)


def test_set_config_rejects_invalid_values(ekf):
    with pytest.raises(ValueError):
        ekf.set_config({"sigma_theta": 0.0})


def test_state_is_read_only(ekf):
    with pytest.raises(ValueError):
        ekf.C_yt[0, 0] = 1.0
    ekf.yt.append(Pose2D(1.0, 1.0, 0.0))
    assert len(ekf.yt) == 1


def test_inverse_measurement_model_round_trip():
    robot = np.array([1.0, -2.0, 0.8])
    z = np.array([2.0, 0.5, -0.3])
    landmark, _, _ = landmark_from_measurement(robot, z)
    z_hat, _, _ = expected_relative_pose(robot, landmark)
    np.testing.assert_allclose(z_hat, z, atol=1e-12)
