"""Turn controller.

One turn is a small state machine::

    SELECT_EDGE -> [CORNER_DIRECTION] -> PROPAGATE -> OPEN_BOX
        -> [APPLY_TOOL] -> COMPLETE

Every stage has a single transition method that takes the current
``TurnState`` and returns the next one. Aborting a turn is a transition to
COMPLETE with ``wasted=True``; the controller never uses exceptions to move
between stages. Invalid player input is reported through the presentation
and the same stage is asked again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Protocol

from .config import DEFAULT_TURNS
from .errors import AlreadyFixedError, ImmovableTargetError, InvalidSelectionError
from .grids import (
    BoxGrid,
    GridSnapshot,
    corner_directions,
    edge_direction,
    in_bounds,
    is_corner,
    is_edge,
    line_cells,
)
from .tools import apply_tool
from .types import GRID_SIZE, Cell, Direction, ToolKind


class Presentation(Protocol):
    def render_welcome(self, target_letter: str) -> None: ...

    def render_grid(self, snapshot: GridSnapshot) -> None: ...

    def render_turn_header(self, turn: int) -> None: ...

    def render_roll_result(self, direction: Direction, blocked: bool) -> None: ...

    def render_opened(self, tool: ToolKind | None, row: int, col: int) -> None: ...

    def render_tool_applied(self, tool: ToolKind, row: int, col: int) -> None: ...

    def render_error(self, message: str, cell: Cell | None = None) -> None: ...

    def render_game_end(
        self, snapshot: GridSnapshot, target_letter: str, match_count: int
    ) -> None: ...

    def request_edge_position(self) -> Cell: ...

    def request_corner_direction(
        self, options: tuple[Direction, Direction]
    ) -> Direction: ...

    def request_open_position(self, line: list[Cell]) -> Cell: ...

    def request_tool_target(self, tool: ToolKind) -> Cell | int: ...


class TurnStage(Enum):
    SELECT_EDGE = "select_edge"
    CORNER_DIRECTION = "corner_direction"
    PROPAGATE = "propagate"
    OPEN_BOX = "open_box"
    APPLY_TOOL = "apply_tool"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TurnState:
    number: int
    stage: TurnStage = TurnStage.SELECT_EDGE
    edge: Cell | None = None
    direction: Direction | None = None
    blocked: bool | None = None
    opened: Cell | None = None
    tool: ToolKind | None = None
    tool_target: Cell | None = None
    wasted: bool = False
    error: str | None = None


@dataclass
class GameController:
    grid: BoxGrid
    target_letter: str
    presentation: Presentation
    turns: int = DEFAULT_TURNS
    flip_unchanging: bool = True
    history: list[TurnState] = field(default_factory=list)
    ended_early: bool = False

    def __post_init__(self) -> None:
        self._transitions: dict[TurnStage, Callable[[TurnState], TurnState]] = {
            TurnStage.SELECT_EDGE: self._select_edge,
            TurnStage.CORNER_DIRECTION: self._corner_direction,
            TurnStage.PROPAGATE: self._propagate,
            TurnStage.OPEN_BOX: self._open_box,
            TurnStage.APPLY_TOOL: self._apply_tool,
        }

    @property
    def turns_played(self) -> int:
        return len(self.history)

    def score(self) -> int:
        return self.grid.count_matching(self.target_letter)

    def play(self) -> int:
        """Run the whole game and return the final score."""
        self.presentation.render_welcome(self.target_letter)
        self.presentation.render_grid(self.grid.snapshot())

        for number in range(1, self.turns + 1):
            if not self.grid.has_movable_edge():
                logging.info("no movable edge box left, ending early")
                self.presentation.render_error(
                    "No movable edge boxes remain! Game ending early."
                )
                self.ended_early = True
                break
            self.presentation.render_turn_header(number)
            self.run_turn(number)

        match_count = self.score()
        self.presentation.render_game_end(
            self.grid.snapshot(), self.target_letter, match_count
        )
        logging.info(f"game over, score {match_count}")
        return match_count

    def run_turn(self, number: int) -> TurnState:
        state = TurnState(number)
        while state.stage is not TurnStage.COMPLETE:
            state = self._transitions[state.stage](state)
        if state.wasted:
            logging.warning(f"turn {number} wasted: {state.error}")
        else:
            logging.info(f"turn {number} complete")
        self.history.append(state)
        return state

    def _select_edge(self, state: TurnState) -> TurnState:
        while True:
            row, col = self.presentation.request_edge_position()
            if not in_bounds(row, col):
                self.presentation.render_error("position is out of bounds", (row, col))
                continue
            if not is_edge(row, col):
                self.presentation.render_error(
                    "the chosen box is not on any of the edges", (row, col)
                )
                continue
            break

        if is_corner(row, col):
            return replace(state, stage=TurnStage.CORNER_DIRECTION, edge=(row, col))
        return replace(
            state,
            stage=TurnStage.PROPAGATE,
            edge=(row, col),
            direction=edge_direction(row, col),
        )

    def _corner_direction(self, state: TurnState) -> TurnState:
        row, col = state.edge
        options = corner_directions(row, col)
        while True:
            direction = self.presentation.request_corner_direction(options)
            if direction in options:
                return replace(state, stage=TurnStage.PROPAGATE, direction=direction)
            self.presentation.render_error(
                "the chosen direction is not available for this corner", (row, col)
            )

    def _propagate(self, state: TurnState) -> TurnState:
        row, col = state.edge
        try:
            result = self.grid.roll_from_edge(row, col, state.direction)
        except ImmovableTargetError as e:
            self.presentation.render_error(f"{e.message}, turn is wasted", e.cell)
            return replace(
                state, stage=TurnStage.COMPLETE, wasted=True, error=e.message
            )

        self.presentation.render_roll_result(result.direction, result.blocked)
        self.presentation.render_grid(self.grid.snapshot())
        return replace(state, stage=TurnStage.OPEN_BOX, blocked=result.blocked)

    def _open_box(self, state: TurnState) -> TurnState:
        row, col = state.edge
        line = line_cells(row, col, state.direction)
        while True:
            cell = self.presentation.request_open_position(list(line))
            if cell in line:
                break
            self.presentation.render_error(
                "the chosen box was not rolled during the first stage", cell
            )

        tool = self.grid.box(*cell).open()
        self.presentation.render_opened(tool, *cell)
        if tool is None:
            return replace(state, stage=TurnStage.COMPLETE, opened=cell)
        return replace(state, stage=TurnStage.APPLY_TOOL, opened=cell, tool=tool)

    def _tool_cell(self, tool: ToolKind, target: Cell | int) -> Cell:
        if isinstance(target, bool):
            raise InvalidSelectionError("target must be an index or a position")
        if isinstance(target, int):
            if not 0 <= target < GRID_SIZE:
                raise InvalidSelectionError(
                    f"index must be between 1 and {GRID_SIZE}"
                )
            if tool is ToolKind.STAMP_ROW:
                return (target, 0)
            if tool is ToolKind.STAMP_COLUMN:
                return (0, target)
            raise InvalidSelectionError("this tool needs a full position")
        row, col = target
        if not in_bounds(row, col):
            raise InvalidSelectionError("position is out of bounds", (row, col))
        return (row, col)

    def _apply_tool(self, state: TurnState) -> TurnState:
        tool = state.tool
        while True:
            try:
                row, col = self._tool_cell(
                    tool, self.presentation.request_tool_target(tool)
                )
                break
            except InvalidSelectionError as e:
                self.presentation.render_error(e.message, e.cell)

        try:
            changed = apply_tool(
                tool,
                self.grid,
                self.target_letter,
                row,
                col,
                flip_unchanging=self.flip_unchanging,
            )
        except (AlreadyFixedError, ImmovableTargetError) as e:
            # The tool is spent; rolling and opening already happened.
            self.presentation.render_error(e.message, e.cell)
            return replace(
                state, stage=TurnStage.COMPLETE, tool_target=(row, col), error=e.message
            )

        if tool is ToolKind.FLIP and not changed:
            message = "the Unchanging box cannot be flipped"
            self.presentation.render_error(message, (row, col))
            return replace(
                state, stage=TurnStage.COMPLETE, tool_target=(row, col), error=message
            )

        self.presentation.render_tool_applied(tool, row, col)
        self.presentation.render_grid(self.grid.snapshot())
        return replace(state, stage=TurnStage.COMPLETE, tool_target=(row, col))
