"""Terminal front end: line-based input, text rendering and the ``labyrinth`` command."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from ..base import AbstractInputSource, AbstractRenderer, ConfigurationError
from ..maze.render import MazeImageRenderer, maze_to_text
from .clock import Stopwatch
from .controller import GameConfig, GameController, GameSnapshot, GameState

CLEAR_SCREEN = "\033[H\033[2J"


def format_time(total_seconds: int) -> str:
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


class ConsoleInput(AbstractInputSource):
    """Read one command per line from a text stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        output: Optional[TextIO] = None,
        prompt: str = "> ",
    ) -> None:
        self.stream = stream or sys.stdin
        self.output = output or sys.stdout
        self.prompt = prompt

    def read_symbol(self) -> Optional[str]:
        self.output.write(self.prompt)
        self.output.flush()
        line = self.stream.readline()
        if not line:
            return None
        stripped = line.strip()
        return stripped[:1].upper()

    def pause(self, message: str) -> None:
        self.output.write(f"{message}\n")
        self.output.flush()
        self.stream.readline()


class TextRenderer(AbstractRenderer):
    """Draw the maze with block characters, redrawing the whole screen each turn."""

    def __init__(self, stream: Optional[TextIO] = None, *, clear: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.clear = clear

    def render(self, snapshot: GameSnapshot) -> None:
        lines = [
            "Labyrinth - W/A/S/D to move, Q to quit",
            f"Level: {snapshot.level} / {snapshot.total_levels}    "
            f"Time: {format_time(snapshot.elapsed_seconds)}",
            "",
            maze_to_text(snapshot.maze, player=snapshot.position.as_tuple()),
            "",
            "Commands: W (north), S (south), A (west), D (east), Q (quit)",
        ]
        if self.clear:
            self.stream.write(CLEAR_SCREEN)
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()

    def level_cleared(self, snapshot: GameSnapshot) -> None:
        self.stream.write(f"\nYou found the exit of level {snapshot.level}!\n")
        self.stream.flush()

    def game_over(self, snapshot: GameSnapshot) -> None:
        if snapshot.state is GameState.WON:
            message = (
                f"Congratulations! You cleared all {snapshot.total_levels} mazes.\n"
                f"Total time: {format_time(snapshot.elapsed_seconds)}\n"
            )
            if self.clear:
                message = CLEAR_SCREEN + message
        else:
            message = f"Leaving... Total time: {format_time(snapshot.elapsed_seconds)}\n"
        self.stream.write(message)
        self.stream.flush()


class _CompositeRenderer(AbstractRenderer):
    def __init__(self, *renderers: AbstractRenderer) -> None:
        self.renderers = renderers

    def render(self, snapshot: GameSnapshot) -> None:
        for renderer in self.renderers:
            renderer.render(snapshot)

    def level_cleared(self, snapshot: GameSnapshot) -> None:
        for renderer in self.renderers:
            renderer.level_cleared(snapshot)

    def game_over(self, snapshot: GameSnapshot) -> None:
        for renderer in self.renderers:
            renderer.game_over(snapshot)


__all__ = ["ConsoleInput", "TextRenderer", "format_time"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = GameConfig()
    parser = argparse.ArgumentParser(description="Play a series of procedurally generated mazes")
    parser.add_argument("--levels", type=int, default=defaults.total_levels, help="Number of mazes to clear")
    parser.add_argument("--base-rows", type=int, default=defaults.base_rows)
    parser.add_argument("--base-cols", type=int, default=defaults.base_cols)
    parser.add_argument(
        "--size-step",
        type=int,
        default=defaults.size_step,
        help="Rows and columns added to the maze at each new level",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-clear", action="store_true", help="Do not clear the screen between turns")
    parser.add_argument(
        "--frame-path",
        type=Path,
        default=None,
        help="Optional PNG file refreshed with an image of the maze after every turn",
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    config = GameConfig(
        total_levels=args.levels,
        base_rows=args.base_rows,
        base_cols=args.base_cols,
        size_step=args.size_step,
        seed=args.seed,
    )
    renderer: AbstractRenderer = TextRenderer(clear=not args.no_clear)
    if args.frame_path is not None:
        renderer = _CompositeRenderer(renderer, MazeImageRenderer(path=args.frame_path))

    try:
        controller = GameController(config, clock=Stopwatch(), renderer=renderer)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    console = ConsoleInput()
    print("==== LABYRINTH ====")
    print("Reach the exit 'E' of every maze. Move with W/A/S/D, quit with Q.")
    try:
        console.pause("Press ENTER to start...")
        controller.run(console)
    except KeyboardInterrupt:
        controller.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
