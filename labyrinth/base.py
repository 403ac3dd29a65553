"""Abstract interfaces for the collaborators driven by the game loop."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .game.controller import GameSnapshot


class ConfigurationError(ValueError):
    """Raised when maze or game settings cannot produce a playable maze."""


class AbstractClock(ABC):
    """Elapsed-time source counting whole seconds since ``start()``."""

    @abstractmethod
    def start(self) -> None:
        """Reset the counter to zero and begin counting."""

    @abstractmethod
    def stop(self) -> None:
        """Stop counting. Calling it more than once is harmless."""

    @property
    @abstractmethod
    def elapsed_seconds(self) -> int:
        """Whole seconds counted so far."""


class AbstractInputSource(ABC):
    """Source of raw move/quit symbols."""

    @abstractmethod
    def read_symbol(self) -> Optional[str]:
        """Return the next symbol, an empty string for blank input or ``None`` once input is exhausted."""

    def pause(self, message: str) -> None:
        """Hold the game between levels until the player is ready."""


class AbstractRenderer(ABC):
    """Presentation surface for game snapshots."""

    @abstractmethod
    def render(self, snapshot: "GameSnapshot") -> None:
        """Draw the current maze, player, level and elapsed time."""

    def level_cleared(self, snapshot: "GameSnapshot") -> None:
        """Hook invoked once the player reaches the exit of a level."""

    def game_over(self, snapshot: "GameSnapshot") -> None:
        """Hook invoked when the run ends, either won or quit."""


__all__ = [
    "AbstractClock",
    "AbstractInputSource",
    "AbstractRenderer",
    "ConfigurationError",
]
