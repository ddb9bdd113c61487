#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maze.py
-------
Read-only occupancy grid for directional route planning, plus the text maze
format it is usually loaded from.

Grid convention: walls[r, c] == True means blocked, False means passable.
Cells are (row, col) pairs.

Text format:
    '#'  blocked
    '.'  passable
    'S'  start (passable, exactly one)
    'E'  end / goal (passable, exactly one)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

Cell = Tuple[int, int]


class MalformedGrid(ValueError):
    """Raised when maze text or an occupancy array cannot form a valid grid."""


class CellKind(Enum):
    PASSABLE = "."
    BLOCKED = "#"


class Direction(IntEnum):
    """Compass heading. Iteration order is fixed: N, E, S, W."""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def delta(self) -> Cell:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    def turns(self) -> Tuple["Direction", "Direction"]:
        """The two headings reachable by a single 90 degree turn."""
        return Direction((self - 1) % 4), Direction((self + 1) % 4)

    @classmethod
    def parse(cls, name) -> "Direction":
        if isinstance(name, Direction):
            return name
        if isinstance(name, (int, np.integer)) and not isinstance(name, bool):
            if not 0 <= int(name) < len(cls):
                raise ValueError(f"Unknown direction index {name}")
            return cls(int(name))
        key = str(name).strip().upper()
        aliases = {"N": "NORTH", "E": "EAST", "S": "SOUTH", "W": "WEST"}
        key = aliases.get(key, key)
        if key not in cls.__members__:
            raise ValueError(f"Unknown direction '{name}'. Available: {[d.name.lower() for d in cls]}")
        return cls[key]


# (dr, dc) per heading, rows grow downwards
_DELTAS: Dict[Direction, Cell] = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}

_SYMBOLS = {"#": True, ".": False, "S": False, "E": False}


class MazeGrid:
    """Immutable rectangular field of passable / blocked cells."""

    def __init__(self, walls):
        try:
            arr = np.array(walls, dtype=bool, copy=True)
        except ValueError as e:
            raise MalformedGrid(f"Grid is not rectangular: {e}") from e
        if arr.ndim != 2:
            raise MalformedGrid(f"Grid must be 2-D, got shape {arr.shape}")
        if arr.size == 0:
            raise MalformedGrid("Grid is empty")
        arr.setflags(write=False)
        self.walls = arr

    @classmethod
    def coerce(cls, grid) -> "MazeGrid":
        """Accept a MazeGrid or a plain (H, W) occupancy array."""
        if isinstance(grid, MazeGrid):
            return grid
        return cls(grid)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.walls.shape

    @property
    def H(self) -> int:
        return self.walls.shape[0]

    @property
    def W(self) -> int:
        return self.walls.shape[1]

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.H and 0 <= c < self.W

    def get(self, r: int, c: int) -> Optional[CellKind]:
        if not self.in_bounds(r, c):
            return None
        return CellKind.BLOCKED if self.walls[r, c] else CellKind.PASSABLE

    def passable(self, r: int, c: int) -> bool:
        return self.in_bounds(r, c) and not self.walls[r, c]

    def passable_cells(self) -> List[Cell]:
        return [(int(r), int(c)) for r, c in np.argwhere(~self.walls)]

    def to_text(self, overlay: Optional[Dict[Cell, str]] = None) -> str:
        overlay = overlay or {}
        lines = []
        for r in range(self.H):
            row = []
            for c in range(self.W):
                ch = overlay.get((r, c))
                if ch is None:
                    ch = "#" if self.walls[r, c] else "."
                row.append(ch)
            lines.append("".join(row))
        return "\n".join(lines)

    def __eq__(self, other) -> bool:
        return isinstance(other, MazeGrid) and np.array_equal(self.walls, other.walls)

    def __hash__(self) -> int:
        return hash((self.walls.shape, self.walls.tobytes()))

    def __repr__(self) -> str:
        return f"MazeGrid(H={self.H}, W={self.W}, blocked={int(self.walls.sum())})"


@dataclass
class MazeEnvironment:
    """A grid together with its start/goal markers."""
    grid: MazeGrid
    start: Cell
    goal: Cell
    start_dir: Direction = Direction.EAST
    settings: Dict = field(default_factory=dict)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape

    @classmethod
    def from_text(cls, text: str) -> "MazeEnvironment":
        return parse_maze(text)


def _clean_lines(text: str) -> List[str]:
    lines = [ln.rstrip("\r") for ln in text.split("\n")]
    while lines and not lines[-1].strip():
        lines.pop()
    while lines and not lines[0].strip():
        lines.pop(0)
    return lines


def parse_maze(text: str) -> MazeEnvironment:
    """
    Parse the text maze format into a MazeEnvironment.

    Raises MalformedGrid for empty or ragged input, unknown symbols, and a
    missing or repeated 'S' / 'E' marker.
    """
    lines = _clean_lines(text)
    if not lines:
        raise MalformedGrid("Maze text is empty")

    width = len(lines[0])
    starts: List[Cell] = []
    goals: List[Cell] = []
    rows: List[List[bool]] = []
    for r, line in enumerate(lines):
        if len(line) != width:
            raise MalformedGrid(f"Row {r} has length {len(line)}, expected {width}")
        row = []
        for c, ch in enumerate(line):
            if ch not in _SYMBOLS:
                raise MalformedGrid(f"Unexpected symbol {ch!r} at row {r}, col {c}")
            if ch == "S":
                starts.append((r, c))
            elif ch == "E":
                goals.append((r, c))
            row.append(_SYMBOLS[ch])
        rows.append(row)

    if len(starts) != 1:
        raise MalformedGrid(f"Expected exactly one start 'S', found {len(starts)}")
    if len(goals) != 1:
        raise MalformedGrid(f"Expected exactly one end 'E', found {len(goals)}")

    return MazeEnvironment(grid=MazeGrid(rows), start=starts[0], goal=goals[0],
                           settings={"source": "text"})


def load_maze(path: str) -> MazeEnvironment:
    with open(path, "r", encoding="utf-8") as f:
        env = parse_maze(f.read())
    env.settings["source"] = path
    return env


def render_maze(env: MazeEnvironment, cells: Optional[Iterable[Cell]] = None, mark: str = "O") -> str:
    """Text form of the maze; `cells` are drawn with `mark`, S/E are kept."""
    overlay: Dict[Cell, str] = {}
    for cell in cells or ():
        overlay[tuple(cell)] = mark
    overlay[env.start] = "S"
    overlay[env.goal] = "E"
    return env.grid.to_text(overlay)

