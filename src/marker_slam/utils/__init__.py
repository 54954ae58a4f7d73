"""
Utils package for marker_slam utility functions.
"""

__all__ = []

# Utilities are imported explicitly as needed to avoid namespace pollution
# Example usage:
#   from marker_slam.utils.transformations import angle_difference
#   from marker_slam.utils.validation import _check_transformation_matrix
