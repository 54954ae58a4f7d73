#!/usr/bin/env python3
"""
ROS-agnostic SLAM node core.

Owns the estimator, the single-slot input buffers, the measurement adapter and the
state publisher, and runs one tick at a time. ROS integration is handled by
ros/node.py.
"""

import logging
import threading
from typing import Optional

from .backends.ekf import EKFSlamEstimator, EKFSLAMConfig
from .buffers import LatestValueSlot
from .config import SlamConfig, SlamNodeConfig
from .estimator import SlamEstimator
from .exceptions import ConfigurationError
from .interfaces import FrameResolver, StateSink, TransformBroadcaster
from .measurement_adapter import MeasurementAdapter
from .state_publisher import StatePublisher
from .types.enums import PublisherState, SlamTechnique
from .types.measurements import ControlCommand, DetectionBatch, MeasurementSet
from .types.variables import Pose2D

logger = logging.getLogger("rosout")


def create_estimator(mode: int, ekf_config: Optional[EKFSLAMConfig] = None) -> SlamEstimator:
    """
    Constructs the estimator for a ``mode`` parameter value.

    Raises:
        ConfigurationError: the mode is not supported
    """
    try:
        technique = SlamTechnique(mode)
    except ValueError:
        raise ConfigurationError(f"mode {mode} is not supported") from None

    if technique == SlamTechnique.EKF:
        return EKFSlamEstimator(config=ekf_config)
    raise ConfigurationError(f"mode {mode} ({technique.name}) is not supported")


class SlamManager:
    """
    ROS-agnostic core of the SLAM node.

    Subscriber callbacks call ``on_command`` and ``on_detections``; the scheduler calls
    ``tick``. Inputs are kept in last-write-wins slots and consumed once per tick.
    """

    def __init__(
        self,
        config: SlamNodeConfig,
        resolver: FrameResolver,
        broadcaster: TransformBroadcaster,
        sink: StateSink,
        ekf_config: Optional[EKFSLAMConfig] = None,
        estimator: Optional[SlamEstimator] = None,
    ):
        """
        Args:
            config: start-up configuration
            resolver: frame tree access
            broadcaster: receives the map -> odom transform
            sink: receives the pose and landmark records
            ekf_config: initial EKF noise configuration
            estimator: an already constructed estimator, overriding ``config.mode``

        Raises:
            ConfigurationError: the configured mode is not supported
        """
        self.config = config
        self.slam_config = SlamConfig()
        self.estimator = estimator if estimator is not None else create_estimator(config.mode, ekf_config)

        self.command_slot: LatestValueSlot[ControlCommand] = LatestValueSlot()
        self.measurement_slot: LatestValueSlot[MeasurementSet] = LatestValueSlot()
        self.adapter = MeasurementAdapter(alt_frame=config.alt_frame)
        self.publisher = StatePublisher(
            self.estimator, resolver, broadcaster, sink, config.frame_ids
        )

        # Re-entrant lock to guard estimator access from callbacks and the tick
        self._lock = threading.RLock()

    @property
    def technique_name(self) -> str:
        return self.estimator.get_type_name()

    def on_command(self, command: ControlCommand) -> None:
        self.command_slot.put(command)

    def on_detections(self, batch: DetectionBatch, sensor_pose: Optional[Pose2D] = None) -> MeasurementSet:
        """
        Adapts a detection batch and replaces the buffered measurement set with it.
        """
        measurement_set = self.adapter.adapt(batch, sensor_pose)
        self.measurement_slot.put(measurement_set)
        return measurement_set

    def on_slam_config(self, slam_config: SlamConfig) -> None:
        self.slam_config = slam_config

    def on_estimator_config(self, config) -> None:
        with self._lock:
            self.estimator.set_config(config)

    def cycle(self, now: float) -> None:
        """
        Runs one estimator step on the buffered inputs, resetting first if requested.
        """
        with self._lock:
            if self.slam_config.reset:
                self.estimator.reset()
            self.estimator.cycle(self.command_slot.take(), self.measurement_slot.take(), now)

    def publish(self) -> PublisherState:
        with self._lock:
            return self.publisher.publish()

    def tick(self, now: float) -> PublisherState:
        """
        One scheduled step: estimator cycle followed by publication.

        Raises:
            StateDesynchronizationError: see StatePublisher.publish
        """
        self.cycle(now)
        return self.publish()
