"""Text and image views of a maze."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from PIL import Image, ImageDraw

from ..base import AbstractRenderer
from .generator import OPEN, Cell, Maze

if TYPE_CHECKING:  # pragma: no cover
    from ..game.controller import GameSnapshot

WALL_CHAR = "█"
OPEN_CHAR = " "
PLAYER_CHAR = "P"
START_CHAR = "S"
EXIT_CHAR = "E"

WALL_COLOR = (0, 0, 0)
OPEN_COLOR = (255, 255, 255)
START_COLOR = (220, 30, 30)
EXIT_COLOR = (40, 180, 80)
PLAYER_COLOR = (30, 90, 220)


def maze_to_text(maze: Maze, player: Optional[Cell] = None) -> str:
    """Draw the maze as text, one line per row.

    The player marker wins over the start and exit markers when they overlap.
    """

    lines: List[str] = []
    for r in range(maze.rows):
        chars: List[str] = []
        for c in range(maze.cols):
            if player is not None and (r, c) == player:
                chars.append(PLAYER_CHAR)
            elif (r, c) == maze.start:
                chars.append(START_CHAR)
            elif (r, c) == maze.exit:
                chars.append(EXIT_CHAR)
            else:
                chars.append(OPEN_CHAR if maze.grid[r, c] == OPEN else WALL_CHAR)
        lines.append("".join(chars))
    return "\n".join(lines)


class MazeImageRenderer(AbstractRenderer):
    """Render game snapshots to a Pillow image, optionally refreshing a PNG file."""

    def __init__(self, *, cell_size: int = 16, path: Optional[Union[str, Path]] = None) -> None:
        if cell_size < 1:
            raise ValueError("cell_size must be positive")
        self.cell_size = cell_size
        self.path = Path(path) if path is not None else None
        self.last_frame: Optional[Image.Image] = None

    def render(self, snapshot: "GameSnapshot") -> None:
        self.last_frame = self.draw(snapshot.maze, player=snapshot.position.as_tuple())
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.last_frame.save(self.path)

    def draw(self, maze: Maze, *, player: Optional[Cell] = None) -> Image.Image:
        canvas = Image.new("RGB", (maze.cols * self.cell_size, maze.rows * self.cell_size), WALL_COLOR)
        draw = ImageDraw.Draw(canvas)

        for r in range(maze.rows):
            for c in range(maze.cols):
                if maze.grid[r, c] == OPEN:
                    self._draw_cell(draw, (r, c), OPEN_COLOR)
        self._draw_cell(draw, maze.start, START_COLOR)
        self._draw_cell(draw, maze.exit, EXIT_COLOR)
        if player is not None:
            self._draw_cell(draw, player, PLAYER_COLOR)
        return canvas

    def _draw_cell(
        self,
        draw: ImageDraw.ImageDraw,
        cell: Cell,
        color: Tuple[int, int, int],
    ) -> None:
        r, c = cell
        left = c * self.cell_size
        top = r * self.cell_size
        draw.rectangle((left, top, left + self.cell_size - 1, top + self.cell_size - 1), fill=color)


__all__ = ["maze_to_text", "MazeImageRenderer"]
