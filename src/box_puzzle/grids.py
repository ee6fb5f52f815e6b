import logging
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from .cube import Box, BoxView
from .errors import ImmovableTargetError, InvalidSelectionError
from .generator import BoxGenerator
from .types import GRID_SIZE, Cell, Direction

_CORNER_DIRECTIONS: dict[Cell, tuple[Direction, Direction]] = {
    (0, 0): (Direction.RIGHT, Direction.DOWN),
    (0, GRID_SIZE - 1): (Direction.LEFT, Direction.DOWN),
    (GRID_SIZE - 1, 0): (Direction.RIGHT, Direction.UP),
    (GRID_SIZE - 1, GRID_SIZE - 1): (Direction.LEFT, Direction.UP),
}


def _edge_cells_clockwise(size: int) -> list[Cell]:
    """Clockwise edge cells (row, col) starting at the top-left corner.

    Ordering:
      - Top row: (0,0) .. (0,n-1)
      - Right col: (1,n-1) .. (n-2,n-1)
      - Bottom row: (n-1,n-1) .. (n-1,0)
      - Left col: (n-2,0) .. (1,0)
    """
    if size < 2:
        raise ValueError("size must be >= 2")
    cells: list[Cell] = []
    cells.extend((0, c) for c in range(size))
    cells.extend((r, size - 1) for r in range(1, size - 1))
    cells.extend((size - 1, c) for c in range(size - 1, -1, -1))
    cells.extend((r, 0) for r in range(size - 2, 0, -1))
    return cells


_EDGE_CELLS: list[Cell] = _edge_cells_clockwise(GRID_SIZE)
assert len(_EDGE_CELLS) == 4 * (GRID_SIZE - 1)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def is_edge(row: int, col: int) -> bool:
    return in_bounds(row, col) and (
        row in (0, GRID_SIZE - 1) or col in (0, GRID_SIZE - 1)
    )


def is_corner(row: int, col: int) -> bool:
    return (row, col) in _CORNER_DIRECTIONS


def corner_directions(row: int, col: int) -> tuple[Direction, Direction]:
    """The two inward directions a corner box can be rolled in."""
    try:
        return _CORNER_DIRECTIONS[(row, col)]
    except KeyError:
        raise InvalidSelectionError(
            "the chosen box is not a corner", (row, col)
        ) from None


def edge_direction(row: int, col: int) -> Direction:
    """The single inward direction of a non-corner edge box."""
    if is_corner(row, col):
        raise InvalidSelectionError(
            "a corner box needs an explicit direction", (row, col)
        )
    if not is_edge(row, col):
        raise InvalidSelectionError(
            "the chosen box is not on any of the edges", (row, col)
        )
    if row == 0:
        return Direction.DOWN
    if row == GRID_SIZE - 1:
        return Direction.UP
    if col == 0:
        return Direction.RIGHT
    return Direction.LEFT


def resolve_direction(
    row: int, col: int, direction: Direction | None = None
) -> Direction:
    """Validate a roll request and return the direction it will use."""
    if is_corner(row, col):
        options = corner_directions(row, col)
        if direction is None:
            raise InvalidSelectionError(
                "a corner box needs an explicit direction", (row, col)
            )
        if direction not in options:
            raise InvalidSelectionError(
                f"a corner box can only roll {options[0].name.lower()} "
                f"or {options[1].name.lower()}",
                (row, col),
            )
        return direction
    inward = edge_direction(row, col)
    if direction is not None and direction is not inward:
        raise InvalidSelectionError(
            f"this edge box can only roll {inward.name.lower()}", (row, col)
        )
    return inward


def line_cells(row: int, col: int, direction: Direction) -> list[Cell]:
    """The whole row (horizontal roll) or column (vertical roll) of a cell."""
    if direction.is_vertical:
        return [(r, col) for r in range(GRID_SIZE)]
    return [(row, c) for c in range(GRID_SIZE)]


def plus_cells(row: int, col: int) -> list[Cell]:
    """The cell and its in-bounds up/down/left/right neighbours."""
    offsets = [(0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)]
    return [
        (row + dr, col + dc) for dr, dc in offsets if in_bounds(row + dr, col + dc)
    ]


@dataclass(frozen=True)
class RollResult:
    direction: Direction
    blocked: bool
    rolled: tuple[Cell, ...]


@dataclass(frozen=True)
class GridSnapshot:
    cells: tuple[tuple[BoxView, ...], ...]

    def box(self, row: int, col: int) -> BoxView:
        return self.cells[row][col]

    def top_letters(self) -> np.ndarray:
        return np.array([[b.top for b in row] for row in self.cells])

    def count_matching(self, letter: str) -> int:
        return int(np.count_nonzero(self.top_letters() == letter))


class BoxGrid:
    """The 8x8 box grid. Owns domino propagation and scoring."""

    def __init__(self, cells: list[list[Box]]) -> None:
        if len(cells) != GRID_SIZE or any(len(r) != GRID_SIZE for r in cells):
            raise ValueError(f"grid must be {GRID_SIZE}x{GRID_SIZE}")
        self._cells = [list(r) for r in cells]

    @classmethod
    def random(cls, generator: BoxGenerator) -> "BoxGrid":
        return cls(
            [
                [generator.new_box() for _ in range(GRID_SIZE)]
                for _ in range(GRID_SIZE)
            ]
        )

    def box(self, row: int, col: int) -> Box:
        if not in_bounds(row, col):
            raise InvalidSelectionError("position is out of bounds", (row, col))
        return self._cells[row][col]

    def replace(self, row: int, col: int, box: Box) -> None:
        if not in_bounds(row, col):
            raise InvalidSelectionError("position is out of bounds", (row, col))
        self._cells[row][col] = box

    def boxes(self) -> Iterator[tuple[Cell, Box]]:
        for r, row in enumerate(self._cells):
            for c, b in enumerate(row):
                yield (r, c), b

    def edge_cells(self) -> list[Cell]:
        return list(_EDGE_CELLS)

    def has_movable_edge(self) -> bool:
        return any(not self._cells[r][c].is_fixed for r, c in _EDGE_CELLS)

    def roll_from_edge(
        self, row: int, col: int, direction: Direction | None = None
    ) -> RollResult:
        """Roll the edge box at (row, col) and every box behind it.

        The walk stops at the first Fixed box, leaving it and everything
        past it untouched. Nothing is mutated if the request is invalid or
        the starting box itself is Fixed.
        """
        direction = resolve_direction(row, col, direction)
        if self._cells[row][col].is_fixed:
            raise ImmovableTargetError("fixed box cannot be moved", (row, col))

        rolled: list[Cell] = []
        blocked = False
        r, c = row, col
        while in_bounds(r, c):
            box = self._cells[r][c]
            if box.traits.blocks:
                blocked = True
                break
            if box.traits.rollable:
                box.roll(direction)
                rolled.append((r, c))
                logging.debug(f"rolled ({r}, {c}) {direction.name}")
            r += direction.row_delta
            c += direction.col_delta

        logging.info(
            f"roll from ({row}, {col}) {direction.name}: "
            f"{len(rolled)} boxes, blocked={blocked}"
        )
        return RollResult(direction, blocked, tuple(rolled))

    def top_letters(self) -> np.ndarray:
        return np.array([[b.top for b in row] for row in self._cells])

    def count_matching(self, letter: str) -> int:
        return int(np.count_nonzero(self.top_letters() == letter))

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(tuple(tuple(b.view() for b in row) for row in self._cells))
