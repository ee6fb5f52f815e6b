import logging

from .errors import AlreadyFixedError, ImmovableTargetError
from .grids import BoxGrid, plus_cells
from .types import GRID_SIZE, Cell, ToolKind, Variant

TOOL_NAMES: dict[ToolKind, str] = {
    ToolKind.FIX: "BoxFixer",
    ToolKind.FLIP: "BoxFlipper",
    ToolKind.STAMP_ROW: "MassRowStamp",
    ToolKind.STAMP_COLUMN: "MassColumnStamp",
    ToolKind.STAMP_PLUS: "PlusShapeStamp",
}
assert set(TOOL_NAMES) == set(ToolKind)


def _stamp(grid: BoxGrid, cells: list[Cell], letter: str) -> list[Cell]:
    return [(r, c) for r, c in cells if grid.box(r, c).stamp_top(letter)]


def fix_box(grid: BoxGrid, row: int, col: int) -> list[Cell]:
    """Replace the box with a Fixed copy of its faces; any tool inside is lost."""
    box = grid.box(row, col)
    if box.is_fixed:
        raise AlreadyFixedError("box is already a FixedBox", (row, col))
    grid.replace(row, col, box.as_fixed())
    return [(row, col)]


def flip_box(
    grid: BoxGrid, row: int, col: int, *, flip_unchanging: bool = True
) -> list[Cell]:
    box = grid.box(row, col)
    if box.is_fixed:
        raise ImmovableTargetError("cannot flip a FixedBox", (row, col))
    if box.variant is Variant.UNCHANGING and not flip_unchanging:
        logging.info(f"flip on unchanging box ({row}, {col}) has no effect")
        return []
    box.flip()
    return [(row, col)]


def stamp_row(grid: BoxGrid, letter: str, row: int) -> list[Cell]:
    return _stamp(grid, [(row, c) for c in range(GRID_SIZE)], letter)


def stamp_column(grid: BoxGrid, letter: str, col: int) -> list[Cell]:
    return _stamp(grid, [(r, col) for r in range(GRID_SIZE)], letter)


def stamp_plus(grid: BoxGrid, letter: str, row: int, col: int) -> list[Cell]:
    return _stamp(grid, plus_cells(row, col), letter)


def apply_tool(
    kind: ToolKind,
    grid: BoxGrid,
    target_letter: str,
    row: int,
    col: int,
    *,
    flip_unchanging: bool = True,
) -> list[Cell]:
    """Run one tool against the grid and return the cells it wrote to.

    Fix and Flip fail without touching the grid when the target is Fixed.
    The stamps cannot fail; ``row`` is ignored by StampColumn and ``col``
    by StampRow.
    """
    if kind is ToolKind.FIX:
        changed = fix_box(grid, row, col)
    elif kind is ToolKind.FLIP:
        changed = flip_box(grid, row, col, flip_unchanging=flip_unchanging)
    elif kind is ToolKind.STAMP_ROW:
        changed = stamp_row(grid, target_letter, row)
    elif kind is ToolKind.STAMP_COLUMN:
        changed = stamp_column(grid, target_letter, col)
    elif kind is ToolKind.STAMP_PLUS:
        changed = stamp_plus(grid, target_letter, row, col)
    else:
        raise ValueError(f"Unknown tool: {kind}")
    logging.info(f"{TOOL_NAMES[kind]} at ({row}, {col}) wrote {len(changed)} boxes")
    return changed
