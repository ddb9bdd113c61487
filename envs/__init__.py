# -*- coding: utf-8 -*-
"""
Maze grids and generators.
Exposes:
- MazeGrid, MazeEnvironment, CellKind, Direction (from maze.py)
- parse_maze / load_maze / render_maze
- MalformedGrid
- generate_maze (from generator.py)
"""

from __future__ import annotations

from .maze import (
    Cell,
    CellKind,
    Direction,
    MalformedGrid,
    MazeEnvironment,
    MazeGrid,
    load_maze,
    parse_maze,
    render_maze,
)
from .generator import generate_maze, free_components_connected

__all__ = [
    "Cell",
    "CellKind",
    "Direction",
    "MalformedGrid",
    "MazeEnvironment",
    "MazeGrid",
    "load_maze",
    "parse_maze",
    "render_maze",
    "generate_maze",
    "free_components_connected",
]
