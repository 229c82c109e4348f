"""
Command parsing for the text shell.

Grammar (whitespace is ignored, coordinates are 1-based):
    n [rows][,cols][,hazards]   start a new game
    x [row][,col]               explore a cell
    f row,col  |  > row,col     toggle a flag
    h  |  ?                     help
    q                           quit
"""
import random
from dataclasses import dataclass
from typing import Optional, Tuple


# ============================================================================
# Constants
# ============================================================================

NEW_GAME = "n"
EXPLORE = "x"
FLAG = "f"
HELP = "h"
QUIT = "q"

_ALIASES = {">": FLAG, "?": HELP}

# Command name -> (argument count, arguments mandatory)
_ARITY = {
    NEW_GAME: (3, False),
    EXPLORE: (2, False),
    FLAG: (2, True),
    HELP: (0, False),
    QUIT: (0, False),
}

HELP_TEXT = (
    "Available commands:\n"
    "\n"
    "- n   rows, columns, mines  start a new game with the given board "
    "dimensions and mines.\n"
    "- x   row, col              explore the cell at (row, col).\n"
    "- f/> row, col              flag or unflag the cell at (row, col).\n"
    "- h/?                       print this message.\n"
    "- q                         quit the game.\n"
    "\n"
    "Arguments to the `n' and `x' commands are optional.\n"
    "An appropriate value will be chosen at random for each missing argument.\n"
)


class CommandError(ValueError):
    """A line of input could not be parsed into a command."""


@dataclass(frozen=True)
class Command:
    """
    A parsed command.

    Attributes:
        name: Canonical command letter (n, x, f, h or q).
        args: Positive 1-based arguments, None where omitted.
    """

    name: str
    args: Tuple[Optional[int], ...] = ()


# ============================================================================
# Parsing
# ============================================================================

def parse_command(line: str) -> Command:
    """
    Parse one line of player input.

    Args:
        line: Raw input line.

    Returns:
        The parsed command.

    Raises:
        CommandError: Empty or unknown command, or bad arguments.
    """
    text = "".join(line.split())
    if not text:
        raise CommandError("Empty command.")

    letter, arg_text = text[0], text[1:]
    name = _ALIASES.get(letter, letter)
    if name not in _ARITY:
        raise CommandError(f"Unknown command '{letter}'.")

    count, mandatory = _ARITY[name]
    if count == 0:
        if arg_text:
            raise CommandError(
                f"'{letter}': unknown command. Did you mean '{letter}'?"
            )
        return Command(name)

    return Command(name, _parse_arguments(letter, arg_text, count, mandatory))


def _parse_arguments(
    letter: str, arg_text: str, count: int, mandatory: bool
) -> Tuple[Optional[int], ...]:
    """Split comma-separated positive integers, padding with None."""
    slices = arg_text.split(",") if arg_text else []
    if len(slices) > count:
        raise CommandError(
            f"'{letter}': too many arguments, expected {count} at most."
        )

    args = []
    for piece in slices:
        if not piece:
            args.append(None)
            continue
        if not piece.isdecimal() or int(piece) == 0:
            raise CommandError(f"'{letter}': '{piece}' is not a valid value.")
        args.append(int(piece))
    args.extend([None] * (count - len(args)))

    if mandatory and None in args:
        raise CommandError(f"'{letter}': too few arguments passed in.")
    return tuple(args)


# ============================================================================
# Default Resolution
# ============================================================================

def resolve_new_game(
    command: Command, rows: int, cols: int, rng: random.Random
) -> Tuple[int, int, int]:
    """
    Fill in missing ``n`` arguments.

    Missing dimensions are drawn no larger than the current board; a
    missing hazard count is drawn below the new board's area.

    Returns:
        (rows, cols, hazard_count) for the new board.
    """
    new_rows, new_cols, hazards = command.args
    if new_rows is None:
        new_rows = rng.randint(1, rows)
    if new_cols is None:
        new_cols = rng.randint(1, cols)
    if hazards is None:
        hazards = rng.randrange(new_rows * new_cols)
    return new_rows, new_cols, hazards


def resolve_position(
    command: Command, rows: int, cols: int, rng: random.Random
) -> Tuple[int, int]:
    """
    Fill in missing ``x``/``f`` coordinates and convert to 0-based.

    Returns:
        (row, col) as 0-based indices. Out-of-range input is passed
        through for the board to reject.
    """
    row, col = command.args
    if row is None:
        row = rng.randint(1, rows)
    if col is None:
        col = rng.randint(1, cols)
    return row - 1, col - 1
