# submap_bridge/core/assets.py
"""
Asset writing for a finished trajectory snapshot.

Given the node snapshot taken after the final optimization, writes into
`options.asset_dir`:
  <stem>.pgm              occupancy grid image (map_server convention)
  <stem>.yaml             map_server metadata for the image
  <stem>_trajectory.csv   one row per trajectory node
"""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List, Sequence

import numpy as np
import yaml
from PIL import Image

from .backend import TrajectoryNode
from .grid import FREE, OCCUPIED, OccupancyGrid, build_occupancy_grid
from .options import Options

logger = logging.getLogger(__name__)

PGM_OCCUPIED = 0
PGM_FREE = 254
PGM_UNKNOWN = 205
OCCUPIED_THRESH = 0.65
FREE_THRESH = 0.196


def _grid_to_image(grid: OccupancyGrid) -> np.ndarray:
    img = np.full(grid.data.shape, PGM_UNKNOWN, dtype=np.uint8)
    img[grid.data == FREE] = PGM_FREE
    img[grid.data == OCCUPIED] = PGM_OCCUPIED
    # image rows run top-down, grid rows bottom-up
    return np.flipud(img)


def write_pgm(path: Path, image: np.ndarray):
    # 8-bit greyscale; Pillow picks binary PGM from the suffix
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(path)


def write_map_yaml(path: Path, image_name: str, grid: OccupancyGrid):
    meta = {
        "image": image_name,
        "resolution": float(grid.resolution),
        "origin": [float(grid.origin.x), float(grid.origin.y), float(grid.origin.yaw)],
        "negate": 0,
        "occupied_thresh": OCCUPIED_THRESH,
        "free_thresh": FREE_THRESH,
    }
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(meta, f, default_flow_style=None, sort_keys=False)


def write_trajectory_csv(path: Path, nodes: Sequence[TrajectoryNode]):
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["trajectory_id", "time", "x", "y", "z", "qx", "qy", "qz", "qw"])
        for n in nodes:
            p = n.pose
            w.writerow([n.trajectory_id, n.time, p.x, p.y, p.z, p.qx, p.qy, p.qz, p.qw])


def write_assets(nodes: Sequence[TrajectoryNode], options: Options, stem: str) -> List[Path]:
    out_dir = Path(options.asset_dir)
    base = out_dir / stem
    base.parent.mkdir(parents=True, exist_ok=True)

    grid = build_occupancy_grid(nodes, options)
    pgm_path = base.with_name(base.name + ".pgm")
    yaml_path = base.with_name(base.name + ".yaml")
    csv_path = base.with_name(base.name + "_trajectory.csv")

    write_pgm(pgm_path, _grid_to_image(grid))
    write_map_yaml(yaml_path, pgm_path.name, grid)
    write_trajectory_csv(csv_path, nodes)

    written = [pgm_path, yaml_path, csv_path]
    logger.info("Wrote %d assets for '%s' (%d nodes)", len(written), stem, len(nodes))
    return written
