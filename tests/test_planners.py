#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pytest
from envs.maze import Direction, parse_maze
from planners import (PLANNERS, CostModel, State, Unreachable, extract_optimal_cells,
                      frontier_search, get_planner, optimal_cells, predecessors,
                      reconstruct_route, shortest_cost, solve_environment, successors)
from eval.metrics import is_valid_route, route_metrics
from tests.maze_fixtures import (MAZE_A, MAZE_B, MAZE_BACK, MAZE_L, MAZE_LINE,
                                 MAZE_TIE, MAZE_WALLED)

# ---------------- state space ---------------- #

def test_successors_move_and_two_turns():
    env = parse_maze(MAZE_LINE)
    out = dict(successors(env.grid, State((1, 1), Direction.EAST)))
    assert out == {
        State((1, 2), Direction.EAST): 1,
        State((1, 1), Direction.NORTH): 1000,
        State((1, 1), Direction.SOUTH): 1000,
    }

def test_successors_never_reverse_and_skip_walls():
    env = parse_maze(MAZE_LINE)
    out = dict(successors(env.grid, State((1, 1), Direction.WEST)))
    # (1, 0) is a wall: only the two turns remain
    assert set(out) == {State((1, 1), Direction.NORTH), State((1, 1), Direction.SOUTH)}
    assert State((1, 1), Direction.EAST) not in out

def test_successors_at_grid_edge_are_omitted():
    env_grid = parse_maze("SE").grid
    out = dict(successors(env_grid, State((0, 1), Direction.EAST)))
    assert all(s.cell == (0, 1) for s in out)
    assert len(out) == 2

def test_predecessors_invert_successors():
    env = parse_maze(MAZE_TIE)
    costs = CostModel()
    states = [State(c, d) for c in env.grid.passable_cells() for d in Direction]
    forward = {(a, b, w) for a in states for b, w in successors(env.grid, a, costs)}
    backward = {(a, b, w) for b in states for a, w in predecessors(env.grid, b, costs)}
    assert forward == backward

@pytest.mark.parametrize("move, turn", [(0, 1000), (1, 0), (-1, 5), (1.5, 1000), (True, 1000)])
def test_cost_model_rejects_non_positive(move, turn):
    with pytest.raises(ValueError):
        CostModel(move=move, turn=turn)

# ---------------- reference scenarios ---------------- #

def test_reference_maze_a():
    env = parse_maze(MAZE_A)
    assert shortest_cost(env.grid, env.start, env.goal) == 7036
    cost, cells = optimal_cells(env.grid, env.start, env.goal)
    assert cost == 7036
    assert len(cells) == 45
    assert env.start in cells and env.goal in cells

def test_reference_maze_b():
    env = parse_maze(MAZE_B)
    cost, cells = solve_environment(env)
    assert cost == 11048
    assert len(cells) == 64

def test_unreachable_raises():
    env = parse_maze(MAZE_WALLED)
    with pytest.raises(Unreachable):
        shortest_cost(env.grid, env.start, env.goal)
    with pytest.raises(Unreachable) as info:
        optimal_cells(env.grid, env.start, env.goal)
    assert info.value.start == env.start and info.value.goal == env.goal

@pytest.mark.parametrize("text, cost, n_cells", [
    (MAZE_LINE, 2, 3),
    (MAZE_L, 2003, 4),
    (MAZE_BACK, 2002, 3),
    (MAZE_TIE, 3004, 8),
])
def test_small_mazes(text, cost, n_cells):
    env = parse_maze(text)
    got_cost, cells = optimal_cells(env.grid, env.start, env.goal)
    assert got_cost == cost
    assert len(cells) == n_cells
    assert shortest_cost(env.grid, env.start, env.goal) == cost

def test_tie_keeps_both_detours():
    env = parse_maze(MAZE_TIE)
    _, cells = optimal_cells(env.grid, env.start, env.goal)
    assert (1, 2) in cells and (3, 2) in cells
    assert cells == set(env.grid.passable_cells())

def test_start_facing_changes_cost():
    env = parse_maze(MAZE_L)
    assert shortest_cost(env.grid, env.start, env.goal, start_dir=Direction.NORTH) == 1003
    assert shortest_cost(env.grid, env.start, env.goal, start_dir="south") == 2 * 1000 + 1 + 1000 + 2

def test_frontier_search_accepts_heading_names():
    env = parse_maze(MAZE_L)
    by_name = frontier_search(env.grid, env.start, env.goal, "north")
    by_enum = frontier_search(env.grid, env.start, env.goal, Direction.NORTH)
    assert by_name.start.direction == Direction.NORTH
    assert by_name.best_cost == by_enum.best_cost == 1003
    with pytest.raises(ValueError):
        frontier_search(env.grid, env.start, env.goal, "up")

def test_custom_costs():
    env = parse_maze(MAZE_L)
    costs = CostModel(move=2, turn=3)
    assert shortest_cost(env.grid, env.start, env.goal, costs=costs) == 3 + 2 + 3 + 4

def test_start_equals_goal():
    env = parse_maze(MAZE_L)
    assert optimal_cells(env.grid, env.start, env.start) == (0, {env.start})

def test_invalid_endpoints_raise_value_error():
    env = parse_maze(MAZE_L)
    with pytest.raises(ValueError):
        shortest_cost(env.grid, (0, 0), env.goal)
    with pytest.raises(ValueError):
        shortest_cost(env.grid, env.start, (10, 10))

def test_accepts_plain_occupancy_array():
    env = parse_maze(MAZE_A)
    assert shortest_cost(np.array(env.grid.walls), env.start, env.goal) == 7036

# ---------------- search invariants ---------------- #

def test_settled_costs_are_monotone():
    env = parse_maze(MAZE_B)
    res = frontier_search(env.grid, env.start, env.goal)
    costs = [c for _, c in res.settled]
    assert costs == sorted(costs)
    # every state is settled once
    assert len({s for s, _ in res.settled}) == len(res.settled)

def test_frontier_drains_and_keeps_completions_at_best():
    env = parse_maze(MAZE_A)
    res = frontier_search(env.grid, env.start, env.goal)
    assert res.best_cost == 7036
    assert res.completions
    assert all(s.cell == env.goal and res.cost_table[s] == 7036 for s in res.completions)
    # drained past the best completion
    assert res.settled[-1][1] >= res.best_cost

def test_idempotent_queries():
    env = parse_maze(MAZE_B)
    first = optimal_cells(env.grid, env.start, env.goal)
    for _ in range(3):
        assert optimal_cells(env.grid, env.start, env.goal) == first
        assert shortest_cost(env.grid, env.start, env.goal) == first[0]

def test_reconstructed_route_is_optimal():
    for text in (MAZE_A, MAZE_B, MAZE_TIE, MAZE_BACK):
        env = parse_maze(text)
        res = frontier_search(env.grid, env.start, env.goal)
        route = reconstruct_route(env.grid, res)
        cells = extract_optimal_cells(env.grid, res)
        assert route[0] == env.start and route[-1] == env.goal
        assert is_valid_route(env.grid, route)
        assert set(route) <= cells
        assert route_metrics(route, env.start_dir)["cost"] == res.best_cost

def test_route_of_unreached_goal_is_empty():
    env = parse_maze(MAZE_WALLED)
    res = frontier_search(env.grid, env.start, env.goal)
    assert not res.reached
    assert reconstruct_route(env.grid, res) == []
    assert extract_optimal_cells(env.grid, res) == set()

# ---------------- planner API ---------------- #

def test_planner_registry_and_plan():
    assert "directional_dijkstra" in PLANNERS
    planner = get_planner("Directional_Dijkstra")
    env = parse_maze(MAZE_A)
    res = planner.plan(env.grid, env.start, env.goal)
    assert res["success"]
    assert res["cost"] == 7036
    assert len(res["optimal_cells"]) == 45
    assert res["path"][0] == env.start and res["path"][-1] == env.goal
    assert res["stats"]["settled"] > 0 and res["stats"]["pushes"] >= res["stats"]["settled"]

def test_planner_failure_dicts():
    planner = get_planner("directional_dijkstra")
    env = parse_maze(MAZE_WALLED)
    res = planner.plan(env.grid, env.start, env.goal)
    assert res["success"] is False and res["path"] is None
    assert res["stats"]["reason"] == "unreachable"
    res = planner.plan(env.grid, (0, 0), env.goal)
    assert res["success"] is False
    assert "blocked" in res["stats"]["reason"]

def test_unknown_planner():
    with pytest.raises(ValueError):
        get_planner("a_star")
