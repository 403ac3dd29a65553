"""Level loop, stopwatch and terminal front end."""

__all__ = [
    "ConsoleInput",
    "Direction",
    "GameConfig",
    "GameController",
    "GameSnapshot",
    "GameState",
    "Position",
    "Stopwatch",
    "TextRenderer",
    "format_time",
]

from .clock import Stopwatch
from .controller import Direction, GameConfig, GameController, GameSnapshot, GameState, Position
from .console import ConsoleInput, TextRenderer, format_time
