#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Directional Dijkstra planner for grid maps (4-connected, heading-aware).
- State is (cell, heading); moving forward costs `move_cost`, a 90 degree
  turn in place costs `turn_cost`.
- Reports the minimum cost and every cell on at least one minimum-cost route.

Query helpers:
    shortest_cost(grid, start, goal)  -> int
    optimal_cells(grid, start, goal)  -> (int, set[(r,c)])
Both raise Unreachable when the goal cannot be reached.

Planner API (same shape as the other grid planners):
    DirectionalDijkstraPlanner().plan(grid, start, goal)
      -> {'success', 'path', 'cost', 'optimal_cells', 'stats'}
"""

from __future__ import annotations
from typing import Dict, Optional, Set, Tuple
import time

from envs.maze import Cell, Direction, MazeEnvironment, MazeGrid
from .frontier import SearchResult, frontier_search
from .optimal_set import extract_optimal_cells, reconstruct_route
from .state_space import CostModel, DEFAULT_COSTS


class Unreachable(RuntimeError):
    """The frontier was exhausted without reaching the goal cell."""

    def __init__(self, start: Cell, goal: Cell):
        super().__init__(f"No path from {start} to {goal}")
        self.start = start
        self.goal = goal


def _check_endpoint(grid: MazeGrid, cell, name: str) -> Cell:
    r, c = int(cell[0]), int(cell[1])
    if not grid.in_bounds(r, c):
        raise ValueError(f"{name} {cell} is outside the {grid.H}x{grid.W} grid")
    if not grid.passable(r, c):
        raise ValueError(f"{name} {cell} is on a blocked cell")
    return (r, c)


def _search(grid, start, goal, start_dir, costs) -> Tuple[MazeGrid, SearchResult, CostModel]:
    grid = MazeGrid.coerce(grid)
    start = _check_endpoint(grid, start, "start")
    goal = _check_endpoint(grid, goal, "goal")
    costs = costs or DEFAULT_COSTS
    result = frontier_search(grid, start, goal, Direction.parse(start_dir), costs)
    if not result.reached:
        raise Unreachable(start, goal)
    return grid, result, costs


def shortest_cost(grid, start: Cell, goal: Cell, *,
                  start_dir=Direction.EAST,
                  costs: Optional[CostModel] = None) -> int:
    _, result, _ = _search(grid, start, goal, start_dir, costs)
    return result.best_cost


def optimal_cells(grid, start: Cell, goal: Cell, *,
                  start_dir=Direction.EAST,
                  costs: Optional[CostModel] = None) -> Tuple[int, Set[Cell]]:
    grid, result, costs = _search(grid, start, goal, start_dir, costs)
    return result.best_cost, extract_optimal_cells(grid, result, costs)


def solve_environment(env: MazeEnvironment, costs: Optional[CostModel] = None) -> Tuple[int, Set[Cell]]:
    return optimal_cells(env.grid, env.start, env.goal, start_dir=env.start_dir, costs=costs)


class DirectionalDijkstraPlanner:
    def __init__(self, move_cost: int = 1, turn_cost: int = 1000, start_dir="east"):
        self.costs = CostModel(move=move_cost, turn=turn_cost)
        self.start_dir = Direction.parse(start_dir)

    @staticmethod
    def _failure(reason: str, stats: Dict) -> Dict:
        stats["reason"] = reason
        return {'success': False, 'path': None, 'cost': None, 'optimal_cells': set(), 'stats': stats}

    def plan(self, grid, start: Cell, goal: Cell) -> Dict:
        t0 = time.perf_counter()
        stats: Dict = {'settled': 0, 'pushes': 0, 'time_sec': 0.0}
        grid = MazeGrid.coerce(grid)
        try:
            start = _check_endpoint(grid, start, "start")
            goal = _check_endpoint(grid, goal, "goal")
        except ValueError as e:
            return self._failure(str(e), stats)

        result = frontier_search(grid, start, goal, self.start_dir, self.costs)
        stats['settled'] = len(result.settled)
        stats['pushes'] = result.pushes
        if not result.reached:
            stats['time_sec'] = time.perf_counter() - t0
            return self._failure("unreachable", stats)

        cells = extract_optimal_cells(grid, result, self.costs)
        path = reconstruct_route(grid, result, self.costs)
        stats['time_sec'] = time.perf_counter() - t0
        return {'success': True, 'path': path, 'cost': result.best_cost,
                'optimal_cells': cells, 'stats': stats}
