# -*- coding: utf-8 -*-
"""
Heading-aware planners on grid maps with the unified API:
planner.plan(grid: np.ndarray[bool] | MazeGrid, start: (r,c), goal: (r,c))
  -> {'success': bool, 'path': List[(r,c)] or None, 'cost', 'optimal_cells', 'stats'}

Query helpers shortest_cost / optimal_cells raise Unreachable instead.
"""

from __future__ import annotations
from typing import Any, Dict, Type

from .state_space import CostModel, DEFAULT_COSTS, State, successors, predecessors
from .frontier import SearchResult, frontier_search
from .optimal_set import extract_optimal_cells, optimal_states, reconstruct_route
from .directional_dijkstra import (
    DirectionalDijkstraPlanner,
    Unreachable,
    optimal_cells,
    shortest_cost,
    solve_environment,
)

# Mapping used by factories/CLIs
PLANNERS: Dict[str, Type] = {
    "directional_dijkstra": DirectionalDijkstraPlanner,
}


def get_planner(name: str, **kwargs) -> Any:
    """
    Factory: instantiate a planner by name.

    Parameters
    ----------
    name : str
        One of the keys of PLANNERS (e.g. 'directional_dijkstra')
    kwargs : dict
        Passed to the planner constructor (e.g., turn_cost=1000)
    """
    key = name.strip().lower()
    if key not in PLANNERS:
        raise ValueError(f"Unknown planner '{name}'. Available: {sorted(PLANNERS)}")
    return PLANNERS[key](**kwargs)


__all__ = [
    "CostModel",
    "DEFAULT_COSTS",
    "State",
    "successors",
    "predecessors",
    "SearchResult",
    "frontier_search",
    "extract_optimal_cells",
    "optimal_states",
    "reconstruct_route",
    "DirectionalDijkstraPlanner",
    "Unreachable",
    "shortest_cost",
    "optimal_cells",
    "solve_environment",
    "PLANNERS",
    "get_planner",
]
