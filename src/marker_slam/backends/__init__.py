"""
Estimation engine backends.
"""
