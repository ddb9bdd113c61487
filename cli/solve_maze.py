#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
solve_maze.py
-------------
Solve one text maze:
- P1: minimum total cost from S to E (move = 1, 90 degree turn = 1000 by default)
- P2: number of cells on at least one minimum-cost route

Example:
    python -m cli.solve_maze mazes/example.txt --render

Exit status: 0 solved, 1 no path, 2 malformed maze.
"""

from __future__ import annotations
import argparse
import sys
import time

from envs.maze import Direction, MalformedGrid, load_maze, render_maze
from planners.directional_dijkstra import Unreachable, optimal_cells, shortest_cost
from planners.state_space import CostModel


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Minimum-cost directional route through a text maze.")
    ap.add_argument("maze", type=str, help="Path to maze text file (#, ., S, E)")
    ap.add_argument("--move-cost", type=int, default=1, help="Cost of one step forward")
    ap.add_argument("--turn-cost", type=int, default=1000, help="Cost of one 90 degree turn")
    ap.add_argument("--facing", type=str, default="east", choices=[d.name.lower() for d in Direction],
                    help="Initial heading at S")
    ap.add_argument("--render", action="store_true", help="Print the maze with optimal cells marked 'O'")
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    try:
        costs = CostModel(move=args.move_cost, turn=args.turn_cost)
    except ValueError as e:
        ap.error(str(e))
    facing = Direction.parse(args.facing)

    t0 = time.perf_counter()
    try:
        env = load_maze(args.maze)
    except MalformedGrid as e:
        print(f"Malformed maze: {e}", file=sys.stderr)
        return 2
    env.start_dir = facing
    print(f"Parsing took {time.perf_counter() - t0:.6f} secs")
    print()

    try:
        t0 = time.perf_counter()
        p1 = shortest_cost(env.grid, env.start, env.goal, start_dir=facing, costs=costs)
        p1_time = time.perf_counter() - t0
        print(f"P1: {p1}")
        print(f"Took {p1_time:.6f} secs")
        print()

        t0 = time.perf_counter()
        _, cells = optimal_cells(env.grid, env.start, env.goal, start_dir=facing, costs=costs)
        p2_time = time.perf_counter() - t0
        print(f"P2: {len(cells)}")
        print(f"Took {p2_time:.6f} secs")
    except Unreachable as e:
        print(f"no path: {e}")
        return 1

    if args.render:
        print()
        print(render_maze(env, cells))
    return 0


if __name__ == "__main__":
    sys.exit(main())
