import pytest
from fastapi.testclient import TestClient

from submap_bridge.app import create_app
from submap_bridge.core import Pose


@pytest.fixture
def client(bridge):
    return TestClient(create_app(bridge))


def test_status(client):
    r = client.get("/api/v1/status")
    assert r.status_code == 200
    body = r.json()
    assert body["state"] == "running"
    assert body["current_trajectory_id"] == 0
    assert body["trajectories"] == [{"trajectory_id": 0, "finished": False}]


def test_submap_query(client, backend):
    backend.add_submap(0, 3, Pose(x=1.0, qw=1.0))
    r = client.get("/api/v1/submap", params={"trajectory_id": 0, "submap_index": 0})
    assert r.status_code == 200
    body = r.json()
    assert body["submap_version"] == 3
    assert body["cells"] == [0, 64, 128, 255]
    assert body["width"] == 2 and body["height"] == 2
    assert body["slice_pose"]["position"]["x"] == 1.0
    assert body["slice_pose"]["orientation"]["w"] == 1.0


def test_submap_query_unknown_trajectory(client):
    r = client.get("/api/v1/submap", params={"trajectory_id": 5, "submap_index": 2})
    assert r.status_code == 404
    assert r.json() == {"error": "unknown trajectory"}


def test_submap_list(client, backend):
    backend.add_submap(0, 9, Pose(y=2.0))
    r = client.get("/api/v1/submap_list")
    assert r.status_code == 200
    body = r.json()
    assert body["header"]["frame_id"] == "map"
    assert body["trajectory"] == [
        {
            "trajectory_id": 0,
            "submap": [
                {
                    "submap_index": 0,
                    "submap_version": 9,
                    "pose": {
                        "position": {"x": 0.0, "y": 2.0, "z": 0.0},
                        "orientation": {"x": 0.0, "y": 0.0, "z": 0.0, "w": 1.0},
                    },
                }
            ],
        }
    ]


def test_submap_list_consistency_violation(client, backend):
    backend.add_submap(0, 1)
    backend.grow_during_transform_fetch = True
    r = client.get("/api/v1/submap_list")
    assert r.status_code == 500
    assert "trajectory 0" in r.json()["error"]


def test_occupancy_grid_absent_then_present(client, backend):
    assert client.get("/api/v1/occupancy_grid").status_code == 204

    backend.add_node(0, 0.0, 0.0, [[1.0, 0.0]])
    r = client.get("/api/v1/occupancy_grid")
    assert r.status_code == 200
    body = r.json()
    info = body["info"]
    assert len(body["data"]) == info["width"] * info["height"]
    assert 100 in body["data"]
    assert body["header"]["frame_id"] == "map"


def test_finish_trajectory(client, backend, writer):
    backend.add_node(0, 0.0, 0.0)
    r = client.post("/api/v1/finish_trajectory", json={"stem": "run1"})
    assert r.status_code == 200
    assert r.json() == {
        "ok": True,
        "previous_trajectory_id": 0,
        "trajectory_id": 1,
        "node_count": 1,
        "assets_written": True,
    }
    assert writer.calls[0][2] == "run1"
    assert client.get("/api/v1/status").json()["current_trajectory_id"] == 1


def test_finish_trajectory_requires_stem(client):
    r = client.post("/api/v1/finish_trajectory", json={"stem": ""})
    assert r.status_code == 422


def test_finish_trajectory_transition_failure(client, backend):
    backend.fail_allocation = True
    r = client.post("/api/v1/finish_trajectory", json={"stem": "run1"})
    assert r.status_code == 500
    assert r.json()["kind"] == "TransitionFailure"


def test_ws_submap_list_pushes_snapshot(client, backend):
    backend.add_submap(0, 2)
    with client.websocket_connect("/ws/submap_list") as ws:
        msg = ws.receive_json()
    assert msg["type"] == "submap_list"
    assert msg["trajectory"][0]["submap"][0]["submap_version"] == 2
