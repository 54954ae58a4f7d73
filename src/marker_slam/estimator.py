"""
Abstract base class and interface for SLAM estimation engines.
Defines the narrow API the node drives: cycle, reset, configuration and state access.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

import numpy as np
from numpy import ndarray

from .types.enums import SlamTechnique
from .types.measurements import ControlCommand, MeasurementSet
from .types.variables import Pose2D


class SlamEstimator(ABC):
    """
    Abstract base class for estimation engines.

    The engine owns the state ``yt`` (robot pose first, then landmark poses) and its
    joint covariance ``C_yt``. Callers only read them.
    """

    def __init__(self, technique: SlamTechnique):
        """
        Args:
            technique: The technique implemented by the subclass.
        """
        self.technique: SlamTechnique = technique
        self._yt: List[Pose2D] = [Pose2D(0.0, 0.0, 0.0)]
        self._C_yt: ndarray = np.zeros((3, 3))
        self._time_last_update: Optional[float] = None

    @property
    def yt(self) -> List[Pose2D]:
        """The current state poses, robot pose at index 0."""
        return list(self._yt)

    @property
    def C_yt(self) -> ndarray:
        """The current joint covariance (read-only view)."""
        view = self._C_yt.view()
        view.flags.writeable = False
        return view

    def time_last_update(self) -> Optional[float]:
        """Time of the last state update in seconds, None if there has been none."""
        return self._time_last_update

    def get_type(self) -> SlamTechnique:
        return self.technique

    def get_type_name(self) -> str:
        return self.technique.name

    @abstractmethod
    def cycle(
        self,
        command: Optional[ControlCommand],
        measurement: Optional[MeasurementSet],
        now: float,
    ) -> None:
        """
        Advance one predict/update step.
        Args:
            command: The newest control command, or None if none arrived since the last cycle.
            measurement: The newest measurement set, or None if none arrived since the last cycle.
            now: The current time in seconds.
        """
        raise NotImplementedError(
            "[cycle] This method should be implemented by subclasses."
        )

    @abstractmethod
    def reset(self) -> None:
        """
        Discard all accumulated state (landmarks and covariance).
        """
        raise NotImplementedError(
            "[reset] This method should be implemented by subclasses."
        )

    @abstractmethod
    def set_config(self, config: Any) -> None:
        """
        Apply a technique-specific configuration.
        Args:
            config: The configuration object or mapping.
        """
        raise NotImplementedError(
            "[set_config] This method should be implemented by subclasses."
        )
