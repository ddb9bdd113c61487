#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
State space for directional planning on grid maps.

A state is (cell, heading). Edges:
- move : one cell forward in the current heading, cost `move`, only onto a
         passable in-bounds cell.
- turn : rotate 90 degrees in place (either way), cost `turn`, always allowed.

There is no direct 180 degree edge; reversing costs two turns.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple

from envs.maze import Cell, Direction, MazeGrid


@dataclass(frozen=True)
class CostModel:
    move: int = 1
    turn: int = 1000

    def __post_init__(self):
        for name in ("move", "turn"):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, int) or val <= 0:
                raise ValueError(f"{name} cost must be a positive integer, got {val!r}")


DEFAULT_COSTS = CostModel()


@dataclass(frozen=True)
class State:
    cell: Cell
    direction: Direction

    def forward(self) -> Cell:
        dr, dc = self.direction.delta
        return (self.cell[0] + dr, self.cell[1] + dc)

    def backward(self) -> Cell:
        dr, dc = self.direction.delta
        return (self.cell[0] - dr, self.cell[1] - dc)


def successors(grid: MazeGrid, state: State, costs: CostModel = DEFAULT_COSTS) -> Iterator[Tuple[State, int]]:
    nr, nc = state.forward()
    if grid.passable(nr, nc):
        yield State((nr, nc), state.direction), costs.move
    for d in state.direction.turns():
        yield State(state.cell, d), costs.turn


def predecessors(grid: MazeGrid, state: State, costs: CostModel = DEFAULT_COSTS) -> Iterator[Tuple[State, int]]:
    """Inverse of `successors`: states that reach `state` in one edge."""
    pr, pc = state.backward()
    if grid.passable(pr, pc):
        yield State((pr, pc), state.direction), costs.move
    # turning is symmetric: the perpendicular headings are exactly the sources
    for d in state.direction.turns():
        yield State(state.cell, d), costs.turn
