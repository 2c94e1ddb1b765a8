import threading

import pytest

import submap_bridge.__main__ as entry
from submap_bridge import config as C
from submap_bridge.core import Pose
from submap_bridge.errors import BridgeShutdown


def test_status_never_reports_current_outside_trajectory_list(bridge):
    stop = threading.Event()

    def finisher():
        while not stop.is_set():
            bridge.handle_finish_trajectory("s")

    t = threading.Thread(target=finisher)
    t.start()
    torn = []
    try:
        for _ in range(2000):
            st = bridge.status()
            ids = {row["trajectory_id"] for row in st["trajectories"]}
            if st["current_trajectory_id"] not in ids:
                torn.append(st["current_trajectory_id"])
            finished = {row["trajectory_id"] for row in st["trajectories"] if row["finished"]}
            assert st["current_trajectory_id"] not in finished
    finally:
        stop.set()
        t.join(timeout=10)
    assert torn == []


def test_status_after_shutdown(bridge, backend):
    bridge.shutdown()
    st = bridge.status()
    assert st["current_trajectory_id"] is None
    assert st["trajectories"] == [{"trajectory_id": 0, "finished": True}]


def test_finished_trajectories_stay_queryable_after_shutdown(bridge, backend):
    backend.add_submap(0, 3, Pose(x=1.0))
    backend.add_node(0, 0.0, 0.0)
    bridge.shutdown()

    assert bridge.handle_submap_query(0, 0).submap_version == 3
    assert [t.trajectory_id for t in bridge.get_submap_list().trajectories] == [0]
    assert bridge.build_occupancy_grid() is not None
    with pytest.raises(BridgeShutdown):
        bridge.handle_sensor_data("lidar", "late")


def test_main_serves_app_with_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(entry.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    monkeypatch.setattr(C, "PORT", 9123)
    entry.main()
    assert calls == [
        ("submap_bridge.app:app", {"host": C.HOST, "port": 9123, "log_level": C.LOG_LEVEL.lower()})
    ]
