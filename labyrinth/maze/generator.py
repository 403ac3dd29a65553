"""Perfect maze generator based on randomized depth-first carving."""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..base import ConfigurationError

logger = logging.getLogger(__name__)

WALL = 1
OPEN = 0

MIN_SIZE = 5

Cell = Tuple[int, int]

_CARVE_STEPS = ((-2, 0), (2, 0), (0, -2), (0, 2))


@dataclass(frozen=True, eq=False)
class Maze:
    """Immutable maze grid with an entrance on the left and an exit on the right.

    ``start`` and ``exit`` sit one column inside the border, next to the
    opening carved into the outer wall.
    """

    rows: int
    cols: int
    grid: np.ndarray
    start: Cell
    exit: Cell
    degenerate: bool = False

    def __post_init__(self) -> None:
        if self.grid.shape != (self.rows, self.cols):
            raise ValueError(
                f"Grid shape {self.grid.shape} does not match {self.rows}x{self.cols}"
            )
        self.grid.setflags(write=False)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_open(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.grid[row, col] == OPEN

    def open_cells(self) -> List[Cell]:
        rows, cols = np.nonzero(self.grid == OPEN)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]


class MazeGenerator:
    """Carve perfect mazes from an explicit random source.

    The generator holds no state; every call draws its randomness from the
    ``rng`` it is given, so a seeded ``random.Random`` reproduces a maze.
    """

    def generate(self, requested_rows: int, requested_cols: int, rng: random.Random) -> Maze:
        if requested_rows < MIN_SIZE or requested_cols < MIN_SIZE:
            raise ConfigurationError(
                f"rows and cols must be at least {MIN_SIZE}, got {requested_rows}x{requested_cols}"
            )
        rows = requested_rows if requested_rows % 2 == 1 else requested_rows + 1
        cols = requested_cols if requested_cols % 2 == 1 else requested_cols + 1

        grid = np.full((rows, cols), WALL, dtype=np.uint8)
        self._carve(grid, rng)

        degenerate = False
        entrance_row = self._pick_border_row(grid, 1, rng)
        if entrance_row is None:
            logger.warning("No open cell next to the left border; entrance falls back to row 1")
            entrance_row = 1
            degenerate = True
        else:
            grid[entrance_row, 0] = OPEN

        exit_row = self._pick_border_row(grid, cols - 2, rng)
        if exit_row is None:
            logger.warning(
                "No open cell next to the right border; exit falls back to row %d", rows - 2
            )
            exit_row = rows - 2
            degenerate = True
        else:
            grid[exit_row, cols - 1] = OPEN

        logger.debug(
            "Generated %dx%d maze (entrance row %d, exit row %d)", rows, cols, entrance_row, exit_row
        )
        return Maze(
            rows=rows,
            cols=cols,
            grid=grid,
            start=(entrance_row, 1),
            exit=(exit_row, cols - 2),
            degenerate=degenerate,
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _carve(grid: np.ndarray, rng: random.Random) -> None:
        rows, cols = grid.shape
        origin = (rng.randrange(1, rows - 1, 2), rng.randrange(1, cols - 1, 2))
        grid[origin] = OPEN
        stack: List[Cell] = [origin]

        while stack:
            r, c = stack[-1]
            neighbors = []
            for dr, dc in _CARVE_STEPS:
                nr, nc = r + dr, c + dc
                if 1 <= nr < rows - 1 and 1 <= nc < cols - 1 and grid[nr, nc] == WALL:
                    neighbors.append((nr, nc))

            if neighbors:
                nr, nc = rng.choice(neighbors)
                grid[(r + nr) // 2, (c + nc) // 2] = OPEN
                grid[nr, nc] = OPEN
                stack.append((nr, nc))
            else:
                stack.pop()

    @staticmethod
    def _pick_border_row(grid: np.ndarray, col: int, rng: random.Random) -> Optional[int]:
        rows = grid.shape[0]
        candidates = [r for r in range(1, rows - 1) if grid[r, col] == OPEN]
        if not candidates:
            return None
        return rng.choice(candidates)


_DEFAULT_GENERATOR = MazeGenerator()


def generate_maze(rows: int, cols: int, rng: Optional[random.Random] = None) -> Maze:
    """Generate a maze with ``rng`` or a freshly seeded random source."""

    return _DEFAULT_GENERATOR.generate(rows, cols, rng if rng is not None else random.Random())


__all__ = ["Cell", "Maze", "MazeGenerator", "generate_maze", "WALL", "OPEN", "MIN_SIZE"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a randomly generated perfect maze")
    parser.add_argument("rows", type=int, help="Requested number of rows (rounded up to odd)")
    parser.add_argument("cols", type=int, help="Requested number of columns (rounded up to odd)")
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    from .render import maze_to_text

    args = _parse_args(argv)
    maze = generate_maze(args.rows, args.cols, random.Random(args.seed))
    print(maze_to_text(maze))


if __name__ == "__main__":
    main()
