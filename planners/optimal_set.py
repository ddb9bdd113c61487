#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Backward pass over a finished cost table.

A predecessor p of state s lies on an optimal route to s exactly when
cost[p] + edge(p, s) == cost[s]. Walking those tight edges back from the
goal states at the best cost marks every state on some optimal route; the
cells of those states form the optimal set.
"""

from __future__ import annotations
from collections import deque
from typing import Iterator, List, Set

from envs.maze import Cell, MazeGrid
from .frontier import SearchResult
from .state_space import CostModel, DEFAULT_COSTS, State, predecessors


def _tight_predecessors(grid: MazeGrid, result: SearchResult, state: State,
                        costs: CostModel) -> Iterator[State]:
    table = result.cost_table
    here = table[state]
    for prev, edge in predecessors(grid, state, costs):
        # goal states are absorbing, they never lead anywhere
        if prev.cell == result.goal:
            continue
        prev_cost = table.get(prev)
        if prev_cost is not None and prev_cost + edge == here:
            yield prev


def optimal_states(grid: MazeGrid, result: SearchResult,
                   costs: CostModel = DEFAULT_COSTS) -> Set[State]:
    if not result.reached:
        return set()
    seen: Set[State] = set(result.completions)
    todo = deque(result.completions)
    while todo:
        state = todo.popleft()
        for prev in _tight_predecessors(grid, result, state, costs):
            if prev not in seen:
                seen.add(prev)
                todo.append(prev)
    return seen


def extract_optimal_cells(grid: MazeGrid, result: SearchResult,
                          costs: CostModel = DEFAULT_COSTS) -> Set[Cell]:
    return {s.cell for s in optimal_states(grid, result, costs)}


def reconstruct_route(grid: MazeGrid, result: SearchResult,
                      costs: CostModel = DEFAULT_COSTS) -> List[Cell]:
    """
    One optimal route as a list of cells from start to goal, or [] if the
    goal was not reached. Turns in place do not repeat the cell.
    """
    if not result.reached:
        return []
    state = result.completions[0]
    cells: List[Cell] = [state.cell]
    while state != result.start:
        # positive edge costs: every tight predecessor is strictly cheaper
        state = next(_tight_predecessors(grid, result, state, costs))
        if state.cell != cells[-1]:
            cells.append(state.cell)
    cells.reverse()
    return cells
