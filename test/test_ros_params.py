import pytest

ros = pytest.importorskip("marker_slam.ros")
from marker_slam.ros import params


@pytest.fixture
def param_server(monkeypatch):
    values = {}

    def get_param(name, default=None):
        return values.get(name, default)

    monkeypatch.setattr(params.rospy, "get_param", get_param)
    monkeypatch.setattr(params.rospy, "get_namespace", lambda: "/robot_1/")
    return values


def test_frame_ids_are_used_verbatim_in_a_namespace(param_server):
    param_server.update({"~frame_id_odom": "odom", "~frame_id_base": "base_footprint"})

    config = ros.load_node_config()

    assert config.frame_ids.map == "map"
    assert config.frame_ids.odom == "odom"
    assert config.frame_ids.base == "base_footprint"


def test_node_config_defaults(param_server):
    config = ros.load_node_config()
    assert config.mode == 0
    assert not config.alt_frame
    assert config.rate == pytest.approx(10.0)
    assert config.transform_timeout == pytest.approx(0.1)


def test_xzplane_sets_alt_frame(param_server):
    param_server.update({"~xzplane": True, "~mode": 0})
    assert ros.load_node_config().alt_frame
