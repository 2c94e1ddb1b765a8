"""Trajectory-lifecycle and map-snapshot bridge between a SLAM backend and a FastAPI service."""

__version__ = "0.1.0"
