"""
EKF-SLAM estimator implementation.

This module provides the EKFSlamEstimator class, which implements the SlamEstimator
interface with an extended Kalman filter over the robot pose and the poses of all
landmarks seen so far. Landmarks are identified by the detector-reported id.
"""
import logging
from typing import Any, Dict, List, Optional

import numpy as np
from numpy import ndarray

from ...estimator import SlamEstimator
from ...types.enums import SlamTechnique
from ...types.measurements import ControlCommand, GatedMeasurement, MeasurementSet
from ...types.variables import Pose2D
from ...utils.transformations import wrap_angle
from .config import EKFSLAMConfig
from .models import (
    expected_relative_pose,
    landmark_from_measurement,
    motion_noise,
    predict_pose,
)

logger = logging.getLogger("rosout")


class EKFSlamEstimator(SlamEstimator):
    """
    A concrete implementation of the SlamEstimator interface using an EKF.

    The command consumed last is held until a newer one arrives, so an empty command
    slot does not stop the prediction.
    """

    def __init__(self, config: Optional[EKFSLAMConfig] = None):
        super().__init__(SlamTechnique.EKF)
        self.config: EKFSLAMConfig = config if config is not None else EKFSLAMConfig()
        self.command = ControlCommand()
        self._mu: ndarray = np.zeros(3)
        self._sigma: ndarray = np.zeros((3, 3))
        self.landmark_index: Dict[int, int] = {}
        self._sync_state()

    @property
    def num_landmarks(self) -> int:
        return len(self.landmark_index)

    def _sync_state(self) -> None:
        poses = self._mu.reshape(-1, 3)
        self._yt = [Pose2D(x=p[0], y=p[1], theta=p[2]) for p in poses]
        self._C_yt = self._sigma.copy()

    def reset(self) -> None:
        self._mu = np.zeros(3)
        self._sigma = np.zeros((3, 3))
        self.landmark_index = {}
        self.command = ControlCommand()
        self._time_last_update = None
        self._sync_state()
        logger.info("[reset] EKF state cleared")

    def set_config(self, config: Any) -> None:
        if isinstance(config, EKFSLAMConfig):
            self.config = config
        else:
            self.config = EKFSLAMConfig.from_mapping(config)
        logger.debug(f"[set_config] {self.config}")

    def cycle(
        self,
        command: Optional[ControlCommand],
        measurement: Optional[MeasurementSet],
        now: float,
    ) -> None:
        if command is not None:
            self.command = command

        if self._time_last_update is not None:
            dt = now - self._time_last_update
            if dt < 0.0:
                logger.warning(f"[cycle] time moved backwards by {-dt:.3f}s, skipping prediction")
            elif dt > 0.0:
                self.predict(self.command, dt)

        if measurement is not None:
            self.correct(measurement)

        self._time_last_update = now
        self._sync_state()

    def predict(self, command: ControlCommand, dt: float) -> None:
        """
        Propagates the robot pose; landmark rows only pick up the robot correlation.
        """
        new_pose, G, V = predict_pose(self._mu[:3], command.v, command.w, dt)
        alphas = (
            self.config.alpha_1,
            self.config.alpha_2,
            self.config.alpha_3,
            self.config.alpha_4,
        )
        M = motion_noise(command.v, command.w, alphas)

        self._mu[:3] = new_pose
        sigma = self._sigma
        sigma[:3, :3] = G @ sigma[:3, :3] @ G.T + V @ M @ V.T
        sigma[:3, 3:] = G @ sigma[:3, 3:]
        sigma[3:, :3] = sigma[:3, 3:].T

    def measurement_noise(self, length: float) -> ndarray:
        scale = self.config.sigma_scale * length
        return np.diag(
            [
                (self.config.sigma_x + scale) ** 2,
                (self.config.sigma_y + scale) ** 2,
                self.config.sigma_theta**2,
            ]
        )

    def correct(self, measurement: MeasurementSet) -> None:
        """
        Fuses every measurement with a reliable id; new ids are added to the state.
        """
        for z_i in measurement:
            if z_i.length > measurement.range_max_id:
                continue
            marker_id = z_i.best_id
            if marker_id is None:
                continue
            z = self._to_base_frame(z_i, measurement.sensor_pose)
            Q = self.measurement_noise(z_i.length)
            if marker_id in self.landmark_index:
                self._update_landmark(self.landmark_index[marker_id], z, Q)
            else:
                self._add_landmark(marker_id, z, Q)

    @staticmethod
    def _to_base_frame(z_i: GatedMeasurement, sensor_pose: Pose2D) -> ndarray:
        z_base = sensor_pose.compose(z_i.pose)
        return np.array([z_base.x, z_base.y, wrap_angle(z_base.theta)])

    def _update_landmark(self, index: int, z: ndarray, Q: ndarray) -> None:
        n = self._mu.shape[0]
        lm = slice(3 * index, 3 * index + 3)
        z_hat, H_robot, H_landmark = expected_relative_pose(self._mu[:3], self._mu[lm])

        H = np.zeros((3, n))
        H[:, :3] = H_robot
        H[:, lm] = H_landmark

        innovation = z - z_hat
        innovation[2] = wrap_angle(innovation[2])

        S = H @ self._sigma @ H.T + Q
        K = self._sigma @ H.T @ np.linalg.inv(S)
        self._mu = self._mu + K @ innovation
        self._mu[2::3] = [wrap_angle(a) for a in self._mu[2::3]]
        sigma = (np.eye(n) - K @ H) @ self._sigma
        self._sigma = 0.5 * (sigma + sigma.T)

    def _add_landmark(self, marker_id: int, z: ndarray, Q: ndarray) -> None:
        n = self._mu.shape[0]
        landmark, G_robot, G_z = landmark_from_measurement(self._mu[:3], z)

        sigma = np.zeros((n + 3, n + 3))
        sigma[:n, :n] = self._sigma
        cross = G_robot @ self._sigma[:3, :]
        sigma[n:, :n] = cross
        sigma[:n, n:] = cross.T
        sigma[n:, n:] = G_robot @ self._sigma[:3, :3] @ G_robot.T + G_z @ Q @ G_z.T

        self._mu = np.concatenate([self._mu, landmark])
        self._sigma = sigma
        self.landmark_index[marker_id] = n // 3
        logger.info(f"[add_landmark] marker {marker_id} added as landmark {n // 3}")

    def landmark_ids(self) -> List[int]:
        """Detector ids of the landmarks in state order."""
        return [marker_id for marker_id, _ in sorted(self.landmark_index.items(), key=lambda kv: kv[1])]
