#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
exact_small.py
--------------
Exhaustive (oracle) optimal routes for *small* mazes.

Idea
----
Enumerate simple state paths (cell, heading) from the start by depth-first
search, stopping each one at the first goal-cell state. Keep the minimum total
cost and the union of cells over all paths that attain it.

Pruning (both keep every tied optimal path):
- branch-and-bound: drop a prefix whose cost already exceeds the best
  complete path;
- dominance: drop a prefix that reaches a state strictly more expensively
  than some earlier prefix did (a prefix of an optimal path is itself optimal).

This shares no code with the Dijkstra search, so it serves as an independent
reference in tests and in the batch CLI.

Returns
-------
{'cost': int | None, 'cells': set[(r,c)], 'paths': int, 'expanded': int, 'time_sec': float}
"""

from __future__ import annotations
from typing import Dict, List, Optional, Set, Tuple
import time

from envs.maze import Cell, Direction, MazeGrid

_DEFAULT_MAX_CELLS = 40


def exact_optimal(grid,
                  start: Cell,
                  goal: Cell,
                  *,
                  start_dir=Direction.EAST,
                  move_cost: int = 1,
                  turn_cost: int = 1000,
                  max_cells: int = _DEFAULT_MAX_CELLS) -> Dict:
    grid = MazeGrid.coerce(grid)
    n_free = len(grid.passable_cells())
    if n_free > max_cells:
        raise ValueError(f"Grid has {n_free} passable cells; exact_optimal is limited to {max_cells}")

    t0 = time.perf_counter()
    start = (int(start[0]), int(start[1]))
    goal = (int(goal[0]), int(goal[1]))
    d0 = Direction.parse(start_dir)

    best: List[Optional[int]] = [None]
    cells: Set[Cell] = set()
    n_paths = [0]
    expanded = [0]
    seen_cost: Dict[Tuple[Cell, Direction], int] = {}
    on_path: Set[Tuple[Cell, Direction]] = set()
    trail: List[Cell] = []

    def visit(cell: Cell, heading: Direction, cost: int):
        if best[0] is not None and cost > best[0]:
            return
        key = (cell, heading)
        if key in on_path:
            return
        prev = seen_cost.get(key)
        if prev is not None and cost > prev:
            return
        seen_cost[key] = cost if prev is None else min(prev, cost)
        expanded[0] += 1

        trail.append(cell)
        if cell == goal:
            if best[0] is None or cost < best[0]:
                best[0] = cost
                cells.clear()
                n_paths[0] = 0
            cells.update(trail)
            n_paths[0] += 1
            trail.pop()
            return

        on_path.add(key)
        dr, dc = heading.delta
        nxt = (cell[0] + dr, cell[1] + dc)
        if grid.passable(*nxt):
            visit(nxt, heading, cost + move_cost)
        for h in heading.turns():
            visit(cell, h, cost + turn_cost)
        on_path.discard(key)
        trail.pop()

    visit(start, d0, 0)
    return {
        'cost': best[0],
        'cells': set(cells) if best[0] is not None else set(),
        'paths': n_paths[0],
        'expanded': expanded[0],
        'time_sec': time.perf_counter() - t0,
    }
