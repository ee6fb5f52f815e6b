from __future__ import annotations

import re
from collections.abc import Callable

from .errors import InvalidSelectionError
from .grids import GridSnapshot
from .rendering import (
    direction_text,
    format_box_net,
    format_grid,
    format_position,
)
from .tools import TOOL_NAMES
from .types import GRID_SIZE, Cell, Direction, ToolKind

_POSITION_RE = re.compile(r"^\s*R?\s*(\d+)\s*-\s*C?\s*(\d+)\s*$", re.IGNORECASE)
_VIEW = "VIEW"


def parse_position(text: str) -> Cell:
    """Parse ``R#-C#`` or ``#-#`` (1-based, any case) into a 0-based cell."""
    m = _POSITION_RE.match(str(text or ""))
    if m is None:
        raise InvalidSelectionError(
            f"Invalid position format: {text!r}. Expected format: R#-C# or #-#"
        )
    row, col = int(m.group(1)), int(m.group(2))
    if not (1 <= row <= GRID_SIZE and 1 <= col <= GRID_SIZE):
        raise InvalidSelectionError(
            f"Invalid position: R{row}-C{col} is out of bounds "
            f"(must be 1-{GRID_SIZE})."
        )
    return (row - 1, col - 1)


def parse_index(text: str, label: str) -> int:
    """Parse a single 1-based row or column number into a 0-based index."""
    try:
        n = int(str(text).strip())
    except ValueError:
        raise InvalidSelectionError(
            f"Please enter a valid {label} number (1-{GRID_SIZE})."
        ) from None
    if not 1 <= n <= GRID_SIZE:
        raise InvalidSelectionError(
            f"Please enter a {label} number between 1 and {GRID_SIZE}."
        )
    return n - 1


class ConsolePresentation:
    """Terminal front end: prompts on stdin, prints to stdout.

    Typing ``VIEW`` at any position prompt shows the unfolded faces of a box
    from the last rendered grid.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[..., None] = print,
    ) -> None:
        self._input = input_fn
        self._print = print_fn
        self._snapshot: GridSnapshot | None = None

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _view_box(self) -> None:
        if self._snapshot is None:
            self._print("There is no grid to view yet.")
            return
        while True:
            text = self._ask(
                "Please enter the location of the box you want to view "
                "in the format R#-C# or #-#: "
            )
            try:
                row, col = parse_position(text)
            except InvalidSelectionError as e:
                self._print(f"INCORRECT INPUT: {e.message}")
                continue
            self._print(format_box_net(self._snapshot.box(row, col)))
            self._print()
            return

    def _ask_position(self, prompt: str) -> Cell:
        while True:
            text = self._ask(prompt)
            if text.upper() == _VIEW:
                self._view_box()
                continue
            try:
                return parse_position(text)
            except InvalidSelectionError as e:
                self._print(f"INCORRECT INPUT: {e.message}")

    # Core -> presentation

    def render_welcome(self, target_letter: str) -> None:
        self._print()
        self._print(
            "Welcome to Box Top Side Matching Puzzle App. "
            "An 8x8 box grid is being generated."
        )
        self._print(
            f'Your goal is to maximize the letter "{target_letter}" '
            "on the top sides of the boxes."
        )
        self._print(f"Type {_VIEW} at any location prompt to see all sides of a box.")
        self._print()

    def render_grid(self, snapshot: GridSnapshot) -> None:
        self._snapshot = snapshot
        self._print(format_grid(snapshot))

    def render_turn_header(self, turn: int) -> None:
        self._print(f"=====> TURN {turn}:")

    def render_roll_result(self, direction: Direction, blocked: bool) -> None:
        text = (
            "The chosen box and any box on its path have been rolled "
            f"{direction_text(direction)}"
        )
        if blocked:
            text += " until a FixedBox has been reached."
        else:
            text += "."
        self._print(text)
        self._print("The new state of the box grid:")

    def render_opened(self, tool: ToolKind | None, row: int, col: int) -> None:
        if tool is None:
            self._print(
                f"The box on location {format_position(row, col)} is empty or "
                "already opened. Continuing to the next turn..."
            )
        else:
            self._print(
                f"The box on location {format_position(row, col)} is opened. "
                f"It contains a SpecialTool --> {TOOL_NAMES[tool]}"
            )
        self._print()

    def render_tool_applied(self, tool: ToolKind, row: int, col: int) -> None:
        pos = format_position(row, col)
        if tool is ToolKind.FIX:
            text = f"The box on location {pos} has been fixed and cannot be moved."
        elif tool is ToolKind.FLIP:
            text = f"The chosen box on location {pos} has been flipped upside down."
        elif tool is ToolKind.STAMP_ROW:
            text = f"Top sides of all boxes in row {row + 1} have been stamped."
        elif tool is ToolKind.STAMP_COLUMN:
            text = f"Top sides of all boxes in column {col + 1} have been stamped."
        elif tool is ToolKind.STAMP_PLUS:
            text = (
                f"Top sides of the chosen box ({pos}) and its surrounding "
                "boxes have been stamped."
            )
        else:
            raise ValueError(f"Unknown tool: {tool}")
        self._print(text)
        self._print("The new state of the box grid:")

    def render_error(self, message: str, cell: Cell | None = None) -> None:
        if cell is not None:
            message = f"{message} ({format_position(*cell)})"
        self._print(f"ERROR: {message}")

    def render_game_end(
        self, snapshot: GridSnapshot, target_letter: str, match_count: int
    ) -> None:
        self._snapshot = snapshot
        self._print()
        self._print("******** GAME OVER ********")
        self._print()
        self._print("The final state of the box grid:")
        self._print(format_grid(snapshot))
        self._print(
            f'The total number of "{target_letter}" letters on top sides: '
            f"{match_count}."
        )

    # Presentation -> core

    def request_edge_position(self) -> Cell:
        return self._ask_position(
            "Please enter the location of the edge box you want to roll "
            "in the format R#-C# or #-#: "
        )

    def request_corner_direction(
        self, options: tuple[Direction, Direction]
    ) -> Direction:
        first, second = options
        while True:
            text = self._ask(
                f"The chosen box can be rolled to either [1] "
                f"{direction_text(first)} or [2] {direction_text(second)}: "
            )
            if text == "1":
                return first
            if text == "2":
                return second
            try:
                return Direction.from_name(text)
            except ValueError:
                self._print("INCORRECT INPUT: Please enter 1 or 2.")

    def request_open_position(self, line: list[Cell]) -> Cell:
        first, last = format_position(*line[0]), format_position(*line[-1])
        return self._ask_position(
            f"Please enter the location of the box you want to open "
            f"({first} .. {last}): "
        )

    def request_tool_target(self, tool: ToolKind) -> Cell | int:
        if tool in (ToolKind.STAMP_ROW, ToolKind.STAMP_COLUMN):
            label = "row" if tool is ToolKind.STAMP_ROW else "column"
            while True:
                text = self._ask(
                    f"Please enter the {label} number (1-{GRID_SIZE}) "
                    f"to use {TOOL_NAMES[tool]} on: "
                )
                try:
                    return parse_index(text, label)
                except InvalidSelectionError as e:
                    self._print(f"INCORRECT INPUT: {e.message}")
        return self._ask_position(
            f"Please enter the location of the box to use {TOOL_NAMES[tool]} on: "
        )
