# submap_bridge/config.py
import logging
import os

# ---- Frames ----
MAP_FRAME      = "map"
TRACKING_FRAME = "base_link"
LOOKUP_TRANSFORM_TIMEOUT_SEC = 0.2

# ---- Trajectories ----
# Sensor ids every new trajectory is allocated with.
EXPECTED_SENSOR_IDS = ("scan", "imu", "odom")

# Optional YAML blob handed to the backend factory untouched.
BACKEND_OPTIONS_FILE = os.environ.get("SUBMAP_BRIDGE_BACKEND_OPTIONS", "")

# "package.module:factory" returning a SlamBackend, used when the app is
# started without an explicit bridge (`python -m submap_bridge`).
BACKEND_FACTORY = os.environ.get("SUBMAP_BRIDGE_BACKEND", "")

# ---- HTTP server ----
HOST = os.environ.get("SUBMAP_BRIDGE_HOST", "0.0.0.0")
PORT = int(os.environ.get("SUBMAP_BRIDGE_PORT", "8000"))

# ---- Occupancy grid / assets ----
GRID_RESOLUTION = 0.05   # m/cell
GRID_PADDING_CELLS = 2
ASSET_DIR = os.environ.get("SUBMAP_BRIDGE_ASSET_DIR", ".")

# ---- Publish cadence ----
SUBMAP_LIST_WS_HZ = 4.0

# ---- Logging ----
LOG_LEVEL  = os.environ.get("SUBMAP_BRIDGE_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None):
    """Root logging setup for the service process."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
