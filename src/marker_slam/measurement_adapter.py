"""
Adapts detector batches into the measurement sets consumed by the estimator.
"""
import logging
from typing import Optional, Tuple

import numpy as np

from .frame_conversion import convert_detection_pose
from .gating import MeasurementGate
from .types.measurements import DetectionBatch, GatedMeasurement, MeasurementSet
from .types.variables import Pose2D

logger = logging.getLogger("rosout")


class MeasurementAdapter:
    """
    Converts, gates and packages detection batches.

    The adapter remembers the last valid angle bounds: a batch whose view direction
    is not straight ahead is still processed, but with the bounds of the previous
    batch.
    """

    def __init__(self, alt_frame: bool = False):
        """
        Args:
            alt_frame: True if the detector reports in the rotated optical-frame convention
        """
        self.alt_frame = alt_frame
        self.angle_bounds: Tuple[float, float] = (-np.pi, np.pi)

    def _update_angle_bounds(self, batch: DetectionBatch) -> None:
        if batch.is_forward_looking:
            half_fov = batch.fov_horizontal / 2.0
            self.angle_bounds = (-half_fov, half_fov)
        else:
            logger.error(
                f"[adapt] This node only deals with straight forward looking view directions, "
                f"got {batch.view_direction}; keeping angle bounds {self.angle_bounds}"
            )

    def adapt(self, batch: DetectionBatch, sensor_pose: Optional[Pose2D] = None) -> MeasurementSet:
        """
        Builds the measurement set for a detection batch.

        Args:
            batch: the detector batch
            sensor_pose: pose of the detector in the robot base frame, if known

        Returns:
            the measurement set holding the accepted detections in input order
        """
        self._update_angle_bounds(batch)
        angle_min, angle_max = self.angle_bounds
        gate = MeasurementGate(
            range_min=batch.distance_min,
            range_max=batch.distance_max,
            angle_min=angle_min,
            angle_max=angle_max,
        )

        measurements = []
        for detection in batch.detections:
            pose = convert_detection_pose(detection.position, detection.orientation, self.alt_frame)
            polar = gate.evaluate(pose)
            if polar is None:
                continue
            length, angle = polar
            measurements.append(
                GatedMeasurement(
                    ids=detection.ids,
                    confidences=detection.ids_confidence,
                    length=length,
                    angle=angle,
                    orientation=pose.theta,
                    pose=pose,
                )
            )

        logger.debug(
            f"[adapt] kept {len(measurements)} of {len(batch.detections)} detections at t={batch.stamp:.3f}"
        )

        measurement_set = MeasurementSet(
            measurements=measurements,
            range_min=batch.distance_min,
            range_max=batch.distance_max,
            range_max_id=batch.distance_max_id,
            angle_min=angle_min,
            angle_max=angle_max,
            stamp=batch.stamp,
        )
        if sensor_pose is not None:
            measurement_set.sensor_pose = sensor_pose
        return measurement_set
