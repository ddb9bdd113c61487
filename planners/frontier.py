#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Forward cost search (Dijkstra) over (cell, heading) states.

- Equal-cost entries pop in insertion order (sequence counter in the heap key).
- Relaxation accepts ties (<=) so every state on any optimal route ends up
  with its minimal cost in the table.
- Goal-cell states are recorded as completions and never expanded; the
  frontier is drained before returning.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple
import heapq
import itertools

from envs.maze import Cell, Direction, MazeGrid
from .state_space import CostModel, DEFAULT_COSTS, State, successors


@dataclass
class SearchResult:
    start: State
    goal: Cell
    cost_table: Dict[State, int]
    best_cost: Optional[int] = None
    completions: List[State] = field(default_factory=list)
    settled: List[Tuple[State, int]] = field(default_factory=list)  # pop order
    pushes: int = 0

    @property
    def reached(self) -> bool:
        return self.best_cost is not None


def frontier_search(grid: MazeGrid,
                    start: Cell,
                    goal: Cell,
                    start_dir=Direction.EAST,
                    costs: CostModel = DEFAULT_COSTS) -> SearchResult:
    start_state = State(tuple(start), Direction.parse(start_dir))
    goal = tuple(goal)

    cost_table: Dict[State, int] = {start_state: 0}
    result = SearchResult(start=start_state, goal=goal, cost_table=cost_table)
    done: Set[State] = set()

    seq = itertools.count()
    pq: List[Tuple[int, int, State]] = [(0, next(seq), start_state)]
    result.pushes = 1

    while pq:
        cost, _, state = heapq.heappop(pq)
        if state in done or cost > cost_table[state]:
            continue
        done.add(state)
        result.settled.append((state, cost))

        if state.cell == goal:
            if result.best_cost is None or cost < result.best_cost:
                result.best_cost = cost
                result.completions = [state]
            elif cost == result.best_cost:
                result.completions.append(state)
            continue

        for nxt, edge in successors(grid, state, costs):
            if nxt in done:
                continue
            new_cost = cost + edge
            if new_cost <= cost_table.get(nxt, new_cost):
                cost_table[nxt] = new_cost
                heapq.heappush(pq, (new_cost, next(seq), nxt))
                result.pushes += 1

    return result
