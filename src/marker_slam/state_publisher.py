"""
Turns the estimator state into pose, landmark and correction-transform outputs once per tick.
"""
import logging
from typing import List

from .config import FrameIds
from .correction import CorrectionTransformComposer
from .covariance import check_state_consistency, marginal_covariance_6x6
from .estimator import SlamEstimator
from .interfaces import FrameResolver, StateSink, TransformBroadcaster
from .types.enums import PublisherState
from .types.records import PublishedLandmark, PublishedLandmarkArray, PublishedPoseRecord

logger = logging.getLogger("rosout")

LANDMARK_CONFIDENCE = 1.0


class StatePublisher:
    """
    Per-tick state machine IDLE -> UPDATED -> PUBLISHED.

    IDLE: the estimator has never updated, nothing is emitted.
    UPDATED: the correction transform was attempted (best effort).
    PUBLISHED: the pose and landmark records were handed to the sink.
    """

    def __init__(
        self,
        estimator: SlamEstimator,
        resolver: FrameResolver,
        broadcaster: TransformBroadcaster,
        sink: StateSink,
        frame_ids: FrameIds,
    ):
        self.estimator = estimator
        self.sink = sink
        self.frame_ids = frame_ids
        self.composer = CorrectionTransformComposer(resolver, broadcaster, frame_ids)
        self.state = PublisherState.IDLE
        self.pose_seq = 0
        self.landmarks_seq = 0

    def publish(self) -> PublisherState:
        """
        Emits the outputs for the current estimator state.

        Returns:
            the state reached in this tick

        Raises:
            StateDesynchronizationError: the joint covariance does not match the state;
                nothing is published for this tick
        """
        self.state = PublisherState.IDLE
        stamp = self.estimator.time_last_update()
        if stamp is None:
            return self.state

        yt = self.estimator.yt
        C_yt = self.estimator.C_yt

        self.state = PublisherState.UPDATED
        if yt:
            self.composer.publish(yt[0], stamp)

        check_state_consistency(yt, C_yt)

        self.pose_seq += 1
        pose_record = PublishedPoseRecord(
            pose=yt[0],
            covariance=marginal_covariance_6x6(C_yt, 0),
            frame_id=self.frame_ids.map,
            stamp=stamp,
            seq=self.pose_seq,
        )

        landmarks: List[PublishedLandmark] = []
        for i in range(1, len(yt)):
            landmarks.append(
                PublishedLandmark(
                    id=i,
                    confidence=LANDMARK_CONFIDENCE,
                    pose=yt[i],
                    covariance=marginal_covariance_6x6(C_yt, i),
                )
            )
        self.landmarks_seq += 1
        landmark_array = PublishedLandmarkArray(
            landmarks=landmarks,
            frame_id=self.frame_ids.map,
            stamp=stamp,
            seq=self.landmarks_seq,
        )

        self.sink.publish_pose(pose_record)
        self.sink.publish_landmarks(landmark_array)
        self.state = PublisherState.PUBLISHED
        return self.state
