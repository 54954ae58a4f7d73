"""Helpers for reading the node configuration from the ROS parameter server.

``get_namespace_param`` searches the private namespace, then the node namespace,
then anywhere via search_param, and optionally warns if the parameter is missing.
"""
from typing import Any

import rospy
from attrs import fields

from ..backends.ekf import EKFSLAMConfig
from ..config import FrameIds, SlamNodeConfig


def get_namespace_param(name: str, default: Any = None, warn_if_missing: bool = False) -> Any:
    """Retrieve a ROS param with namespace-aware searching and optional warning.

    Behaviour:
    - If the private param ``~name`` exists, return it.
    - If param exists exactly as provided, return it.
    - If param exists under the current namespace, return that value.
    - If rospy.search_param finds a parameter, return that value.
    - Otherwise return default and optionally warn.

    Args:
        name: parameter name to look up (relative, without the leading ``~``).
        default: value to return if param not found.
        warn_if_missing: if True, log a warning when param not found.

    Returns:
        The parameter value or default.
    """
    private_name = "~" + name.lstrip("~")
    if rospy.has_param(private_name):
        return rospy.get_param(private_name)

    if rospy.has_param(name):
        return rospy.get_param(name)

    ns = rospy.get_namespace() or ""
    if ns:
        fq = ns.rstrip("/") + "/" + name.lstrip("/")
        if rospy.has_param(fq):
            return rospy.get_param(fq)

    found = rospy.search_param(name)
    if found:
        return rospy.get_param(found)

    if warn_if_missing:
        rospy.logwarn(f"Parameter '{name}' not found (ns='{rospy.get_namespace()}'); using default={default}")

    return default


def load_node_config() -> SlamNodeConfig:
    """Reads the start-up configuration of the node.

    Frame ids are used exactly as given, without a namespace prefix.
    """
    frame_ids = FrameIds(
        map=rospy.get_param("~frame_id_map", "map"),
        odom=rospy.get_param("~frame_id_odom", "odom"),
        base=rospy.get_param("~frame_id_base", "base_link"),
    )
    return SlamNodeConfig(
        mode=rospy.get_param("~mode", 0),
        xzplane=rospy.get_param("~xzplane", False),
        frame_ids=frame_ids,
        rate=rospy.get_param("~rate", 10.0),
        transform_timeout=rospy.get_param("~transform_timeout", 0.1),
    )


def load_ekf_config() -> EKFSLAMConfig:
    """Reads the EKF noise parameters, falling back to the defaults of EKFSLAMConfig."""
    defaults = EKFSLAMConfig()
    values = {}
    for attribute in fields(EKFSLAMConfig):
        values[attribute.name] = get_namespace_param(attribute.name, getattr(defaults, attribute.name))
    return EKFSLAMConfig.from_mapping(values)
