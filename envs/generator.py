#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Random walled mazes for benchmarking and randomised tests of the directional
planner.

Layout:
- Outer border is always blocked.
- Start sits in the bottom-left interior corner, goal in the top-right one
  (the same placement as the reference puzzle mazes).
- Interior clutter: rectangles and small blobs stamped until the target
  density is reached, keeping a free moat around each new object.

Reachability is decided by 4-connected component labelling (scipy.ndimage),
which is all `ensure_status` needs; no search is run here.

Dependencies:
    numpy
    scipy.ndimage   (connected-component labelling & binary dilation)
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

try:
    from scipy.ndimage import label as cc_label
    from scipy.ndimage import binary_dilation
except Exception as e:
    raise ImportError(
        "scipy.ndimage is required. Install with: pip install scipy"
    ) from e

from .maze import Cell, Direction, MazeEnvironment, MazeGrid


# 4-connected neighbourhood deltas
DELTAS_4 = np.array([
    (-1, 0), (1, 0), (0, -1), (0, 1)
], dtype=np.int8)

_STRUCT_4 = np.array([[0, 1, 0],
                      [1, 1, 1],
                      [0, 1, 0]], dtype=np.uint8)


def free_components_connected(walls: np.ndarray, start: Cell, goal: Cell) -> bool:
    """True if start and goal lie in the same 4-connected free component."""
    if walls[start] or walls[goal]:
        return False
    labels, _ = cc_label((~walls).astype(np.uint8), structure=_STRUCT_4)
    return bool(labels[start] == labels[goal])


def _dilate_bool(img: np.ndarray, iters: int = 1) -> np.ndarray:
    if iters <= 0:
        return img
    structure = np.ones((3, 3), dtype=bool)
    return binary_dilation(img, structure=structure, iterations=int(iters))


def _stamp_mask(walls: np.ndarray,
                protected: np.ndarray,
                top_left: Tuple[int, int],
                mask: np.ndarray,
                moat: int) -> bool:
    """
    Stamp `mask` onto `walls` at `top_left` unless it overlaps a protected
    cell, lands on the border, or its moat touches existing interior clutter.
    """
    H, W = walls.shape
    mr, mc = mask.shape
    r0, c0 = top_left
    r1, c1 = r0 + mr, c0 + mc
    if r0 < 1 or c0 < 1 or r1 > H - 1 or c1 > W - 1:
        return False
    if (protected[r0:r1, c0:c1] & mask).any():
        return False

    if moat > 0:
        rp0, cp0 = max(1, r0 - moat), max(1, c0 - moat)
        rp1, cp1 = min(H - 1, r1 + moat), min(W - 1, c1 + moat)
        canvas = np.zeros((rp1 - rp0, cp1 - cp0), dtype=bool)
        canvas[r0 - rp0:r1 - rp0, c0 - cp0:c1 - cp0] = mask
        if (_dilate_bool(canvas, moat) & walls[rp0:rp1, cp0:cp1]).any():
            return False

    walls[r0:r1, c0:c1] |= mask
    return True


def _random_rectangle_mask(rng: np.random.Generator,
                           min_h: int, max_h: int,
                           min_w: int, max_w: int) -> np.ndarray:
    h = max(1, int(rng.integers(min_h, max_h + 1)))
    w = max(1, int(rng.integers(min_w, max_w + 1)))
    return np.ones((h, w), dtype=bool)


def _random_blob_mask(rng: np.random.Generator, min_cells: int, max_cells: int) -> np.ndarray:
    """4-connected polyomino grown at random; returns its tight bbox mask."""
    n = max(1, int(rng.integers(min_cells, max_cells + 1)))
    side = int(np.ceil(np.sqrt(n))) + 4
    canvas = np.zeros((side, side), dtype=bool)
    r = c = side // 2
    canvas[r, c] = True
    coords = [(r, c)]
    tries = 0
    while len(coords) < n and tries < 20 * n:
        tries += 1
        base_r, base_c = coords[int(rng.integers(0, len(coords)))]
        dr, dc = DELTAS_4[int(rng.integers(0, 4))]
        nr, nc = base_r + int(dr), base_c + int(dc)
        if 0 <= nr < side and 0 <= nc < side and not canvas[nr, nc]:
            canvas[nr, nc] = True
            coords.append((nr, nc))
    ys, xs = np.where(canvas)
    return canvas[ys.min():ys.max() + 1, xs.min():xs.max() + 1]


def generate_maze(
    H: int = 15,
    W: int = 15,
    *,
    density: float = 0.2,
    moat: int = 0,
    rect_size: Tuple[Tuple[int, int], Tuple[int, int]] = ((1, 3), (1, 4)),
    blob_cells: Tuple[int, int] = (2, 6),
    rect_prob: float = 0.6,
    ensure_status: str = "any",
    rng: Optional[np.random.Generator] = None,
    max_place_tries: int = 2000,
    max_regen: int = 200,
) -> MazeEnvironment:
    """
    Create a walled maze with random interior clutter.

    density        : target fraction of blocked *interior* cells.
    ensure_status  : "any"     no guarantee about reachability,
                     "success" goal reachable from start,
                     "failure" goal not reachable from start.

    Raises RuntimeError if the requested status cannot be produced within
    `max_regen` attempts.
    """
    if H < 3 or W < 3:
        raise ValueError(f"Maze must be at least 3x3, got {H}x{W}")
    if not 0.0 <= density < 1.0:
        raise ValueError(f"density must be in [0, 1), got {density}")
    if ensure_status not in ("any", "success", "failure"):
        raise ValueError(f"Unknown ensure_status '{ensure_status}'. Available: ['any', 'failure', 'success']")
    if rng is None:
        rng = np.random.default_rng()

    start: Cell = (H - 2, 1)
    goal: Cell = (1, W - 2)
    interior = (H - 2) * (W - 2)
    target = int(round(density * interior))

    protected = np.zeros((H, W), dtype=bool)
    protected[start] = True
    protected[goal] = True

    for _ in range(max_regen):
        walls = np.zeros((H, W), dtype=bool)
        walls[0, :] = walls[-1, :] = True
        walls[:, 0] = walls[:, -1] = True

        placed = 0
        for _ in range(max_place_tries):
            if int(walls[1:-1, 1:-1].sum()) >= target:
                break
            if rng.random() < rect_prob:
                (h0, h1), (w0, w1) = rect_size
                mask = _random_rectangle_mask(rng, h0, h1, w0, w1)
            else:
                mask = _random_blob_mask(rng, *blob_cells)
            r0 = int(rng.integers(1, max(2, H - mask.shape[0])))
            c0 = int(rng.integers(1, max(2, W - mask.shape[1])))
            if _stamp_mask(walls, protected, (r0, c0), mask, moat):
                placed += 1

        connected = free_components_connected(walls, start, goal)
        if ensure_status == "any" or (ensure_status == "success") == connected:
            settings: Dict = {
                "H": H, "W": W, "density": density, "moat": moat,
                "rect_size": rect_size, "blob_cells": blob_cells,
                "ensure_status": ensure_status, "objects_placed": placed,
                "connected": connected,
                "actual_density": float(walls[1:-1, 1:-1].mean()) if interior else 0.0,
            }
            return MazeEnvironment(grid=MazeGrid(walls), start=start, goal=goal,
                                   start_dir=Direction.EAST, settings=settings)

    raise RuntimeError(
        f"Could not generate a '{ensure_status}' maze of size {H}x{W} at density {density} "
        f"within {max_regen} attempts"
    )


if __name__ == "__main__":
    from .maze import render_maze
    env = generate_maze(H=15, W=15, density=0.25, ensure_status="success", rng=np.random.default_rng(0))
    print(render_maze(env))
    print(env.settings)
