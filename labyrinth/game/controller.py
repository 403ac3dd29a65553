"""Level state machine driving a maze run from the first level to the last."""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

from ..base import AbstractClock, AbstractInputSource, AbstractRenderer, ConfigurationError
from ..maze.generator import MIN_SIZE, Cell, Maze, MazeGenerator
from .clock import Stopwatch

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    WEST = (0, -1)
    EAST = (0, 1)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value


class GameState(enum.Enum):
    PLAYING = "playing"
    CLEARED = "cleared"
    WON = "won"
    QUIT = "quit"


DEFAULT_KEYMAP: Dict[str, Direction] = {
    "W": Direction.NORTH,
    "S": Direction.SOUTH,
    "A": Direction.WEST,
    "D": Direction.EAST,
}


@dataclass
class GameConfig:
    """Level count and maze growth settings.

    Level ``n`` requests a maze of
    ``(base_rows + (n - 1) * size_step, base_cols + (n - 1) * size_step)``.
    """

    total_levels: int = 3
    base_rows: int = 15
    base_cols: int = 29
    size_step: int = 6
    seed: Optional[int] = None
    keymap: Mapping[str, Direction] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
    quit_key: str = "Q"

    def validate(self) -> None:
        if self.total_levels < 1:
            raise ConfigurationError("total_levels must be at least 1")
        if self.base_rows < MIN_SIZE or self.base_cols < MIN_SIZE:
            raise ConfigurationError(
                f"base_rows and base_cols must be at least {MIN_SIZE}, "
                f"got {self.base_rows}x{self.base_cols}"
            )
        if self.size_step < 0:
            raise ConfigurationError("size_step must not be negative")
        if not self.keymap:
            raise ConfigurationError("keymap must bind at least one direction")
        # input is matched on its first character only
        for key in list(self.keymap) + [self.quit_key]:
            if not isinstance(key, str) or len(key) != 1 or key.isspace():
                raise ConfigurationError(f"key {key!r} must be a single non-blank character")
        if self.quit_key.upper() in {key.upper() for key in self.keymap}:
            raise ConfigurationError(f"quit key {self.quit_key!r} is also bound to a direction")


@dataclass
class Position:
    row: int
    col: int

    @classmethod
    def from_cell(cls, cell: Cell) -> "Position":
        return cls(cell[0], cell[1])

    def as_tuple(self) -> Cell:
        return self.row, self.col


@dataclass(frozen=True)
class GameSnapshot:
    maze: Maze
    position: Position
    level: int
    total_levels: int
    elapsed_seconds: int
    state: GameState


class GameController:
    """Run the level loop: build a maze per level, move the player, detect the exit.

    Illegal moves (into a wall or off the grid) leave the player in place.
    Reaching the exit clears the level; clearing the last level wins the game.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        generator: Optional[MazeGenerator] = None,
        clock: Optional[AbstractClock] = None,
        renderer: Optional[AbstractRenderer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.config.validate()
        self.generator = generator or MazeGenerator()
        self.clock = clock or Stopwatch()
        self.renderer = renderer
        self._rng = rng or random.Random(self.config.seed)
        self._keymap = {key.upper(): direction for key, direction in self.config.keymap.items()}
        self._quit_key = self.config.quit_key.upper()

        self.level = 0
        self.state: Optional[GameState] = None
        self.maze: Optional[Maze] = None
        self.position: Optional[Position] = None

    @property
    def finished(self) -> bool:
        return self.state in (GameState.WON, GameState.QUIT)

    def level_size(self, level: int) -> Tuple[int, int]:
        step = (level - 1) * self.config.size_step
        return self.config.base_rows + step, self.config.base_cols + step

    def start(self) -> None:
        self.clock.start()
        self._enter_level(1)

    def move(self, direction: Direction) -> bool:
        """Apply one step; returns whether the player actually moved."""

        if self.state is not GameState.PLAYING:
            return False
        dr, dc = direction.offset
        row, col = self.position.row + dr, self.position.col + dc
        if not self.maze.is_open(row, col):
            return False
        self.position.row, self.position.col = row, col
        if self.position.as_tuple() == self.maze.exit:
            self.state = GameState.CLEARED
            logger.info("Level %d cleared at %d s", self.level, self.clock.elapsed_seconds)
        self._render()
        if self.state is GameState.CLEARED and self.renderer is not None:
            self.renderer.level_cleared(self.snapshot())
        return True

    def advance(self) -> GameState:
        if self.state is not GameState.CLEARED:
            raise ValueError(f"Cannot advance from state {self.state}")
        if self.level < self.config.total_levels:
            self._enter_level(self.level + 1)
        else:
            self.clock.stop()
            self.state = GameState.WON
            logger.info("All %d levels cleared in %d s", self.level, self.clock.elapsed_seconds)
            self._finish()
        return self.state

    def quit(self) -> int:
        self.clock.stop()
        elapsed = self.clock.elapsed_seconds
        self.state = GameState.QUIT
        logger.info("Quit on level %d after %d s", self.level, elapsed)
        self._finish()
        return elapsed

    def handle(
        self,
        symbol: Optional[str],
        *,
        on_cleared: Optional[Callable[[str], None]] = None,
    ) -> Optional[GameState]:
        """Interpret one raw input symbol; blank or unknown symbols change nothing.

        ``on_cleared`` is called with a prompt before moving on to the next
        level, giving the input side a chance to hold the game.
        """

        if self.finished or not symbol:
            return self.state
        key = symbol.strip()[:1].upper()
        if key == self._quit_key:
            self.quit()
        elif key in self._keymap:
            self.move(self._keymap[key])
            if self.state is GameState.CLEARED:
                if on_cleared is not None and self.level < self.config.total_levels:
                    on_cleared(f"Level {self.level} cleared. Press ENTER for the next maze.")
                self.advance()
        return self.state

    def run(self, input_source: AbstractInputSource) -> int:
        """Play until every level is cleared or the player quits; returns elapsed seconds."""

        self.start()
        while not self.finished:
            symbol = input_source.read_symbol()
            if symbol is None:
                return self.quit()
            self.handle(symbol, on_cleared=input_source.pause)
        return self.clock.elapsed_seconds

    def snapshot(self) -> GameSnapshot:
        if self.maze is None:
            raise ValueError("No maze yet; call start() first")
        return GameSnapshot(
            maze=self.maze,
            position=Position(self.position.row, self.position.col),
            level=self.level,
            total_levels=self.config.total_levels,
            elapsed_seconds=self.clock.elapsed_seconds,
            state=self.state,
        )

    # ------------------------------------------------------------------

    def _enter_level(self, level: int) -> None:
        rows, cols = self.level_size(level)
        self.level = level
        self.maze = self.generator.generate(rows, cols, self._rng)
        self.position = Position.from_cell(self.maze.start)
        self.state = GameState.PLAYING
        logger.info("Level %d/%d: %dx%d maze", level, self.config.total_levels, self.maze.rows, self.maze.cols)
        self._render()

    def _render(self) -> None:
        if self.renderer is not None and self.maze is not None:
            self.renderer.render(self.snapshot())

    def _finish(self) -> None:
        if self.renderer is not None and self.maze is not None:
            self.renderer.game_over(self.snapshot())


__all__ = [
    "DEFAULT_KEYMAP",
    "Direction",
    "GameConfig",
    "GameController",
    "GameSnapshot",
    "GameState",
    "Position",
]
