from __future__ import annotations

import pytest

from box_puzzle.cube import Box
from box_puzzle.grids import BoxGrid, GridSnapshot
from box_puzzle.types import GRID_SIZE, Cell, Direction, ToolKind, Variant


def make_grid(
    overrides: dict[Cell, Box] | None = None, faces: str = "ABCDEF"
) -> BoxGrid:
    """An 8x8 grid of empty Regular boxes, all showing ``faces``."""
    overrides = overrides or {}
    return BoxGrid(
        [
            [
                overrides.get((r, c), Box(list(faces)))
                for c in range(GRID_SIZE)
            ]
            for r in range(GRID_SIZE)
        ]
    )


def fixed_box(faces: str = "ABCDEF") -> Box:
    return Box(list(faces), Variant.FIXED)


class ScriptedPresentation:
    """Answers requests from queues and records every render call."""

    def __init__(
        self,
        *,
        edges: list[Cell] | None = None,
        corners: list[Direction] | None = None,
        opens: list[Cell] | None = None,
        targets: list[Cell | int] | None = None,
    ) -> None:
        self.edges = list(edges or [])
        self.corners = list(corners or [])
        self.opens = list(opens or [])
        self.targets = list(targets or [])
        self.events: list[tuple] = []
        self.errors: list[tuple[str, Cell | None]] = []

    def render_welcome(self, target_letter: str) -> None:
        self.events.append(("welcome", target_letter))

    def render_grid(self, snapshot: GridSnapshot) -> None:
        self.events.append(("grid",))

    def render_turn_header(self, turn: int) -> None:
        self.events.append(("turn", turn))

    def render_roll_result(self, direction: Direction, blocked: bool) -> None:
        self.events.append(("roll", direction, blocked))

    def render_opened(self, tool: ToolKind | None, row: int, col: int) -> None:
        self.events.append(("opened", tool, (row, col)))

    def render_tool_applied(self, tool: ToolKind, row: int, col: int) -> None:
        self.events.append(("tool", tool, (row, col)))

    def render_error(self, message: str, cell: Cell | None = None) -> None:
        self.errors.append((message, cell))
        self.events.append(("error", message, cell))

    def render_game_end(
        self, snapshot: GridSnapshot, target_letter: str, match_count: int
    ) -> None:
        self.events.append(("end", target_letter, match_count))

    def request_edge_position(self) -> Cell:
        return self.edges.pop(0)

    def request_corner_direction(
        self, options: tuple[Direction, Direction]
    ) -> Direction:
        return self.corners.pop(0)

    def request_open_position(self, line: list[Cell]) -> Cell:
        return self.opens.pop(0)

    def request_tool_target(self, tool: ToolKind) -> Cell | int:
        return self.targets.pop(0)

    def kinds(self) -> list[str]:
        return [e[0] for e in self.events]


@pytest.fixture
def grid() -> BoxGrid:
    return make_grid()
