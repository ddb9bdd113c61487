#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
metrics.py
----------
Route-level metrics for heading-aware plans.

Assumptions
-----------
- Planner API: planner.plan(grid, start, goal) -> {'success': bool, 'path': [(r,c), ...], ...}
- A route is a list of 4-adjacent cells; the agent starts facing `start_dir`
  and turns only as needed (90 degrees = 1 turn, 180 degrees = 2 turns).

What's inside
-------------
- is_valid_route(): adjacency / passability check
- route_metrics(): moves, turns and total cost of a route
- optimal_set_agreement(): compare two optimal-cell sets
- runtime helpers
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Set
import numpy as np

from envs.maze import Cell, Direction, MazeGrid

_BY_DELTA = {d.delta: d for d in Direction}


def _turns_between(a: Direction, b: Direction) -> int:
    if a == b:
        return 0
    return 2 if b == a.opposite else 1


def is_valid_route(grid, route: Sequence[Cell]) -> bool:
    grid = MazeGrid.coerce(grid)
    if not route:
        return False
    for cell in route:
        if not grid.passable(int(cell[0]), int(cell[1])):
            return False
    for a, b in zip(route, route[1:]):
        if (b[0] - a[0], b[1] - a[1]) not in _BY_DELTA:
            return False
    return True


def route_metrics(route: Sequence[Cell],
                  start_dir=Direction.EAST,
                  move_cost: int = 1,
                  turn_cost: int = 1000) -> Dict:
    """
    Count moves and minimal turns along `route` and price them.
    Raises ValueError if two consecutive cells are not 4-adjacent.
    """
    heading = Direction.parse(start_dir)
    moves = turns = 0
    for a, b in zip(route, route[1:]):
        step = (b[0] - a[0], b[1] - a[1])
        if step not in _BY_DELTA:
            raise ValueError(f"Cells {a} -> {b} are not 4-adjacent")
        nxt = _BY_DELTA[step]
        turns += _turns_between(heading, nxt)
        heading = nxt
        moves += 1
    return {
        "moves": moves,
        "turns": turns,
        "cost": moves * move_cost + turns * turn_cost,
        "final_dir": heading.name.lower(),
    }


def optimal_set_agreement(a: Iterable[Cell], b: Iterable[Cell]) -> Dict:
    """Jaccard overlap plus the cells only one side reports."""
    sa: Set[Cell] = set(map(tuple, a))
    sb: Set[Cell] = set(map(tuple, b))
    union = sa | sb
    return {
        "jaccard": (len(sa & sb) / len(union)) if union else 1.0,
        "only_a": sorted(sa - sb),
        "only_b": sorted(sb - sa),
    }


def sum_time_sec(results: Iterable[Dict]) -> float:
    return float(sum(r.get("stats", {}).get("time_sec", 0.0) for r in results))


def runtime_statistics(runtime_list: List[float]) -> Optional[Dict]:
    if not runtime_list:
        return None
    arr = np.asarray(runtime_list, dtype=float)
    return {
        "mean_runtime": float(arr.mean()),
        "std_runtime": float(arr.std()),
        "max_runtime": float(arr.max()),
        "min_runtime": float(arr.min()),
    }
