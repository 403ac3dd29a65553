import io
import random
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from PIL import Image

from labyrinth.game import ConsoleInput, GameConfig, GameController, GameState, TextRenderer, format_time
from labyrinth.game.console import CLEAR_SCREEN, _parse_args, main
from labyrinth.game.controller import GameSnapshot, Position
from labyrinth.maze import MazeGenerator, MazeImageRenderer, maze_to_text
from labyrinth.maze.render import EXIT_COLOR, OPEN_COLOR, PLAYER_COLOR, START_COLOR, WALL_COLOR


def _snapshot(state=GameState.PLAYING, elapsed=0):
    maze = MazeGenerator().generate(7, 9, random.Random(11))
    return GameSnapshot(
        maze=maze,
        position=Position.from_cell(maze.start),
        level=1,
        total_levels=3,
        elapsed_seconds=elapsed,
        state=state,
    )


class FormatTimeTests(unittest.TestCase):
    def test_minutes_and_seconds(self) -> None:
        self.assertEqual(format_time(0), "00:00")
        self.assertEqual(format_time(75), "01:15")
        self.assertEqual(format_time(3599), "59:59")
        self.assertEqual(format_time(-3), "00:00")


class MazeTextTests(unittest.TestCase):
    def test_markers_and_shape(self) -> None:
        snapshot = _snapshot()
        maze = snapshot.maze
        lines = maze_to_text(maze).split("\n")
        self.assertEqual(len(lines), maze.rows)
        self.assertTrue(all(len(line) == maze.cols for line in lines))
        self.assertEqual(lines[maze.start[0]][maze.start[1]], "S")
        self.assertEqual(lines[maze.exit[0]][maze.exit[1]], "E")
        self.assertEqual(lines[0], "█" * maze.cols)
        self.assertEqual(lines[maze.start[0]][0], " ")

    def test_player_marker_hides_start(self) -> None:
        maze = _snapshot().maze
        lines = maze_to_text(maze, player=maze.start).split("\n")
        self.assertEqual(lines[maze.start[0]][maze.start[1]], "P")


class TextRendererTests(unittest.TestCase):
    def test_render_shows_level_time_and_grid(self) -> None:
        stream = io.StringIO()
        TextRenderer(stream, clear=False).render(_snapshot(elapsed=65))
        output = stream.getvalue()
        self.assertIn("Level: 1 / 3", output)
        self.assertIn("Time: 01:05", output)
        self.assertIn("P", output)
        self.assertNotIn(CLEAR_SCREEN, output)

    def test_render_clears_screen_by_default(self) -> None:
        stream = io.StringIO()
        TextRenderer(stream).render(_snapshot())
        self.assertTrue(stream.getvalue().startswith(CLEAR_SCREEN))

    def test_game_over_messages(self) -> None:
        stream = io.StringIO()
        renderer = TextRenderer(stream, clear=False)
        renderer.game_over(_snapshot(GameState.WON, elapsed=130))
        renderer.game_over(_snapshot(GameState.QUIT, elapsed=5))
        output = stream.getvalue()
        self.assertIn("cleared all 3 mazes", output)
        self.assertIn("Total time: 02:10", output)
        self.assertIn("Leaving... Total time: 00:05", output)


class MazeImageRendererTests(unittest.TestCase):
    def test_draw_colours_each_cell(self) -> None:
        snapshot = _snapshot()
        maze = snapshot.maze
        renderer = MazeImageRenderer(cell_size=4)
        image = renderer.draw(maze)

        self.assertEqual(image.size, (maze.cols * 4, maze.rows * 4))
        self.assertEqual(image.getpixel((1, 1)), WALL_COLOR)
        sr, sc = maze.start
        er, ec = maze.exit
        self.assertEqual(image.getpixel((sc * 4 + 1, sr * 4 + 1)), START_COLOR)
        self.assertEqual(image.getpixel((ec * 4 + 1, er * 4 + 1)), EXIT_COLOR)
        self.assertEqual(image.getpixel((1, sr * 4 + 1)), OPEN_COLOR)

    def test_render_refreshes_frame_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "frames" / "current.png"
            renderer = MazeImageRenderer(cell_size=3, path=path)
            snapshot = _snapshot()
            renderer.render(snapshot)

            self.assertTrue(path.exists())
            sr, sc = snapshot.maze.start
            with Image.open(path) as saved:
                self.assertEqual(saved.convert("RGB").getpixel((sc * 3 + 1, sr * 3 + 1)), PLAYER_COLOR)
            self.assertEqual(renderer.last_frame.size, saved.size)

    def test_cell_size_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            MazeImageRenderer(cell_size=0)


class ConsoleInputTests(unittest.TestCase):
    def test_reads_first_character_upper_cased(self) -> None:
        source = ConsoleInput(io.StringIO("  wasd\n\nq\n"), output=io.StringIO())
        self.assertEqual(source.read_symbol(), "W")
        self.assertEqual(source.read_symbol(), "")
        self.assertEqual(source.read_symbol(), "Q")
        self.assertIsNone(source.read_symbol())

    def test_pause_consumes_a_line(self) -> None:
        output = io.StringIO()
        source = ConsoleInput(io.StringIO("\nd\n"), output=output)
        source.pause("Press ENTER")
        self.assertIn("Press ENTER", output.getvalue())
        self.assertEqual(source.read_symbol(), "D")

    def test_drives_a_controller_until_quit(self) -> None:
        controller = GameController(GameConfig(seed=2))
        source = ConsoleInput(io.StringIO("a\nd\nq\n"), output=io.StringIO())
        controller.run(source)
        self.assertEqual(controller.state, GameState.QUIT)
        self.assertEqual(controller.position.as_tuple(), controller.maze.start)


class CommandLineTests(unittest.TestCase):
    def test_defaults_match_game_config(self) -> None:
        args = _parse_args([])
        self.assertEqual((args.levels, args.base_rows, args.base_cols, args.size_step), (3, 15, 29, 6))
        self.assertIsNone(args.seed)
        self.assertIsNone(args.frame_path)
        self.assertFalse(args.no_clear)

    def test_invalid_configuration_exits_with_error(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            self.assertEqual(main(["--base-rows", "3"]), 2)
        self.assertIn("at least 5", stderr.getvalue())

    def test_interrupt_on_title_screen_exits_cleanly(self) -> None:
        stdout = io.StringIO()
        with mock.patch.object(ConsoleInput, "pause", side_effect=KeyboardInterrupt), redirect_stdout(stdout):
            self.assertEqual(main(["--seed", "4", "--no-clear"]), 0)
        self.assertIn("==== LABYRINTH ====", stdout.getvalue())

    def test_quit_from_the_prompt(self) -> None:
        stdout = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO("\nd\nq\n")), redirect_stdout(stdout):
            self.assertEqual(main(["--seed", "4", "--no-clear"]), 0)
        output = stdout.getvalue()
        self.assertIn("==== LABYRINTH ====", output)
        self.assertIn("Level: 1 / 3", output)
        self.assertIn("Leaving... Total time: 00:00", output)


if __name__ == "__main__":
    unittest.main()
