"""Maze generation and rendering package."""

__all__ = [
    "Maze",
    "MazeGenerator",
    "MazeImageRenderer",
    "generate_maze",
    "maze_to_text",
    "WALL",
    "OPEN",
]

from .generator import OPEN, WALL, Maze, MazeGenerator, generate_maze
from .render import MazeImageRenderer, maze_to_text
