"""
Unit tests for the interactive shell.

The shell is driven with in-memory streams and a frozen clock.
"""
import io
import random

import pytest
from minefield import Board, GameState
from minefield.shell import Shell, main


def make_shell(
    board: Board, lines: str, output: io.StringIO, rng: random.Random
) -> Shell:
    """Build a shell reading the given lines."""
    return Shell(
        board,
        rng,
        stdin=io.StringIO(lines),
        stdout=output,
        clock=lambda: 0.0,
    )


# ============================================================================
# Loop Tests
# ============================================================================

class TestShellLoop:
    """Test the read-process-print loop."""

    def test_welcome_board_and_status(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """The loop greets, draws the board and the status line."""
        make_shell(walled_board, "q\n", output, rng).run()
        text = output.getvalue()
        assert "Welcome to minefield!" in text
        assert "3x5 cells and 3 mines" in text
        assert "1 | . . . . ." in text
        assert "Located 0 of 3 mines" in text
        assert "Total playing time: 0h 0m 0s" in text
        assert text.rstrip().endswith("Goodbye!")

    def test_eof_ends_loop(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Running out of input ends the session."""
        shell = make_shell(walled_board, "", output, rng)
        shell.run()
        assert "Goodbye!" in output.getvalue()

    def test_blank_lines_are_ignored(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Empty input re-prompts without an error."""
        make_shell(walled_board, "\n  \nq\n", output, rng).run()
        assert "Empty command" not in output.getvalue()

    def test_win_ends_loop(
        self, output: io.StringIO, rng: random.Random
    ) -> None:
        """Revealing the last safe cell congratulates and stops."""
        board = Board.from_layout(1, 2, [(0, 1)])
        shell = make_shell(board, "x 1,1\nx 1,2\n", output, rng)
        shell.run()
        text = output.getvalue()
        assert "Congratulations! All mines have been found!" in text
        assert "1 | 1 *" in text
        assert shell.running is False
        assert board.game_state == GameState.WON

    def test_loss_ends_loop(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Exploring a hazard reports the loss and stops reading."""
        shell = make_shell(walled_board, "x 1,3\nx 1,1\n", output, rng)
        shell.run()
        text = output.getvalue()
        assert ">> The cell is mined!" in text
        assert "Game over!" in text
        assert walled_board.get_cell(0, 0).is_hidden is True


# ============================================================================
# Command Handling Tests
# ============================================================================

class TestShellCommands:
    """Test individual command handling."""

    def test_explore_uses_one_based_coordinates(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """x r,c explores the 0-based cell (r-1, c-1)."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("x 2,2")
        assert walled_board.get_cell(1, 1).is_revealed is True
        assert walled_board.revealed_count == 1

    def test_explore_revealed_cell_reports_clear(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Exploring an open cell again tells the player it is clear."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("x 2,2")
        shell.handle_line("x 2,2")
        assert "the cell at (2, 2) is clear." in output.getvalue()

    def test_explore_without_arguments_picks_cell(
        self, output: io.StringIO, rng: random.Random
    ) -> None:
        """A bare x explores some cell on the board."""
        board = Board.from_layout(3, 3, [])
        shell = make_shell(board, "", output, rng)
        shell.handle_line("x")
        assert board.is_won is True

    def test_explore_off_board_reports(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Off-board coordinates are reported in 1-based form."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("x 9,9")
        assert ">> 'x': position (9, 9) is off the board." in output.getvalue()
        assert shell.running is True

    def test_explore_flagged_reports(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Exploring a flagged cell asks the player to unflag it."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("f 1,1")
        shell.handle_line("x 1,1")
        assert "Unflag it first" in output.getvalue()
        assert walled_board.get_cell(0, 0).is_flagged is True

    def test_flag_toggles(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """f and > toggle the same flag."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("f 3,5")
        assert walled_board.get_cell(2, 4).is_flagged is True
        shell.handle_line("> 3,5")
        assert walled_board.get_cell(2, 4).is_hidden is True

    def test_flag_revealed_reports(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Flagging an open cell is reported."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("x 2,2")
        shell.handle_line("f 2,2")
        assert "'f': cell (2, 2) is already revealed." in output.getvalue()

    def test_new_game_replaces_board(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """n builds a fresh board with the requested parameters."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("x 2,2")
        shell.handle_line("n 4,6,5")
        assert shell.board is not walled_board
        assert (shell.board.rows, shell.board.cols) == (4, 6)
        assert shell.board.hazard_count == 5
        assert shell.board.revealed_count == 0
        assert "4 rows, 6 columns, and 5 mines" in output.getvalue()

    def test_new_game_clamps_hazards(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Too many requested mines are clamped to the board area."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("n 2,2,9")
        assert shell.board.hazard_count == 4

    def test_new_game_after_loss(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """A finished board can be replaced by a new game."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("x 1,3")
        shell.handle_line("n 2,2,1")
        assert shell.board.is_playing is True

    def test_moves_after_loss_are_reported(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Explore and flag on a finished board report the game is over."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("x 1,3")
        shell.handle_line("x 1,1")
        shell.handle_line("f 1,1")
        text = output.getvalue()
        assert ">> 'x': the game is over." in text
        assert ">> 'f': the game is over." in text
        assert walled_board.get_cell(0, 0).is_hidden is True

    def test_help(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """h and ? print the command list."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("?")
        assert "Available commands:" in output.getvalue()

    def test_parse_errors_are_reported(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """Bad input is reported with the prompt prefix."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("z")
        assert ">> Unknown command 'z'." in output.getvalue()
        assert shell.running is True

    def test_quit(
        self, walled_board: Board, output: io.StringIO, rng: random.Random
    ) -> None:
        """q stops the loop."""
        shell = make_shell(walled_board, "", output, rng)
        shell.handle_line("q")
        assert shell.running is False


# ============================================================================
# Entry Point Tests
# ============================================================================

class TestMain:
    """Test the command line entry point."""

    def test_main_runs_until_quit(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """main builds a board from arguments and runs the shell."""
        monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))
        assert main(["--rows", "4", "--cols", "5", "--hazards", "3", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "4x5 cells and 3 mines" in out
        assert "Goodbye!" in out

    def test_main_rejects_bad_dimensions(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        """Non-positive dimensions exit with a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            main(["--rows", "0"])
        assert excinfo.value.code == 2
        assert "dimensions must be positive" in capsys.readouterr().err
