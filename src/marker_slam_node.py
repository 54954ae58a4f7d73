#!/usr/bin/env python3
"""
ROS node running marker-based SLAM at a fixed rate.

This node is a thin entry point; all ROS-specific functionality lives in the
marker_slam.ros module.
"""

import rospy
from marker_slam.exceptions import ConfigurationError
from marker_slam.ros import ROSSlamNode, load_ekf_config, load_node_config


def main() -> None:
    rospy.init_node("slam")

    config = load_node_config()

    try:
        node = ROSSlamNode(config, ekf_config=load_ekf_config())
    except ConfigurationError as e:
        rospy.logfatal(f"[{rospy.get_name()}] {e}")
        return

    node.start()
    rospy.loginfo(f"[{rospy.get_name()}] started at {config.rate} Hz")
    rospy.spin()


if __name__ == "__main__":
    main()
