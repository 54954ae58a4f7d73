"""marker_slam package init.

Expose the main node core classes at package level for convenient imports.
"""
from .slam_manager import SlamManager, create_estimator
from .types.enums import SlamTechnique

__all__ = ["SlamManager", "create_estimator", "SlamTechnique"]
