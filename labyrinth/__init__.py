"""Terminal maze game with procedurally generated perfect mazes."""

__all__ = [
    "AbstractClock",
    "AbstractInputSource",
    "AbstractRenderer",
    "ConfigurationError",
    "Maze",
    "MazeGenerator",
    "generate_maze",
    "GameConfig",
    "GameController",
    "GameState",
    "Direction",
    "Stopwatch",
]

from .base import AbstractClock, AbstractInputSource, AbstractRenderer, ConfigurationError
from .maze import Maze, MazeGenerator, generate_maze
from .game import Direction, GameConfig, GameController, GameState, Stopwatch
