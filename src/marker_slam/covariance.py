"""
Marginal covariance extraction from the joint state covariance.

The joint covariance ``C_yt`` is ordered like the state ``yt``: block (i, j) of size
3x3 holds the covariance between state component i and j, where component 0 is the
robot pose and components 1..N are landmark poses. The published layout is the
6-DOF (x, y, z, roll, pitch, yaw) convention, so a planar (x, y, yaw) block lands on
indices {0, 1, 5}.
"""
from typing import Sequence
import numpy as np
from numpy import ndarray

from .exceptions import StateDesynchronizationError
from .types.variables import Pose2D

STATE_BLOCK_SIZE = 3
PLANAR_INDICES_6DOF = (0, 1, 5)


def check_state_consistency(yt: Sequence[Pose2D], C_yt: ndarray) -> None:
    """Checks the joint covariance matches the state it belongs to.

    Args:
        yt: the state poses, robot first
        C_yt: the joint covariance

    Raises:
        StateDesynchronizationError: the state is empty or C_yt is not 3|yt| square
    """
    if len(yt) == 0:
        raise StateDesynchronizationError("state is empty, expected at least the robot pose")
    expected = STATE_BLOCK_SIZE * len(yt)
    shape = getattr(C_yt, "shape", None)
    if shape != (expected, expected):
        raise StateDesynchronizationError(
            f"joint covariance has shape {shape} but the state holds {len(yt)} poses, "
            f"expected ({expected}, {expected})"
        )


def extract_marginal_block(C_yt: ndarray, index: int) -> ndarray:
    """Returns the 3x3 marginal covariance of state component ``index``.

    Args:
        C_yt: the joint covariance
        index: 0 for the robot, k for the k-th landmark

    Returns:
        a copy of the diagonal block at (3 index, 3 index)

    Raises:
        StateDesynchronizationError: the index has no block in C_yt
    """
    start = STATE_BLOCK_SIZE * index
    stop = start + STATE_BLOCK_SIZE
    if index < 0 or stop > C_yt.shape[0]:
        raise StateDesynchronizationError(
            f"state index {index} out of range for a joint covariance of shape {C_yt.shape}"
        )
    return np.array(C_yt[start:stop, start:stop], dtype=float)


def embed_planar_covariance(block: ndarray) -> ndarray:
    """Embeds a 3x3 (x, y, yaw) covariance into the 6x6 layout; all other entries are zero."""
    assert block.shape == (3, 3), f"expected a 3x3 block, got {block.shape}"
    covariance = np.zeros((6, 6))
    covariance[np.ix_(PLANAR_INDICES_6DOF, PLANAR_INDICES_6DOF)] = block
    return covariance


def marginal_covariance_6x6(C_yt: ndarray, index: int) -> ndarray:
    return embed_planar_covariance(extract_marginal_block(C_yt, index))
