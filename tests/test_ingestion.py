import threading
import time

import pytest

from submap_bridge.core.ingestion import IngestionBinding, IngestionRebinder


class SlowAdapter:
    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.messages = []

    def add_sensor_data(self, sensor_id, message):
        self.started.set()
        self.release.wait(timeout=5)
        self.messages.append(message)


def test_rebind_wires_backend_adapter_for_handle(backend):
    handle = backend.allocate_trajectory(frozenset({"lidar"}))
    binding = IngestionRebinder(backend).rebind(handle)
    assert binding.trajectory_id == handle.trajectory_id
    binding.accept()
    binding.deliver("lidar", "m0")
    assert backend.received == [(handle.trajectory_id, "lidar", "m0")]


def test_closed_binding_refuses_new_messages():
    binding = IngestionBinding(0, SlowAdapter())
    binding.close()
    assert binding.closed
    with pytest.raises(RuntimeError):
        binding.accept()


def test_close_waits_for_accepted_message():
    adapter = SlowAdapter()
    binding = IngestionBinding(0, adapter)
    binding.accept()
    sender = threading.Thread(target=binding.deliver, args=("lidar", "m0"))
    sender.start()
    assert adapter.started.wait(timeout=5)

    closed = threading.Event()
    closer = threading.Thread(target=lambda: (binding.close(), closed.set()))
    closer.start()
    time.sleep(0.05)
    assert not closed.is_set()

    adapter.release.set()
    sender.join(timeout=5)
    closer.join(timeout=5)
    assert closed.is_set()
    assert adapter.messages == ["m0"]
    assert binding.delivered == 1
