# -*- coding: utf-8 -*-
"""
Command-line entry points (run with `python -m cli.<name>`):

- solve_maze : P1 (minimum cost) and P2 (optimal-cell count) for one text maze
- run_batch  : benchmark sweep over random mazes, optional oracle cross-check
"""
__all__ = [
    "solve_maze",
    "run_batch",
]
