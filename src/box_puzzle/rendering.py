"""Plain-text rendering of the grid and single boxes.

Cells are 0-based everywhere in the game; the text shown to a player uses the
1-based ``R#-C#`` scheme, and the conversion happens only here and in
``console.parse_position``.
"""

from .cube import BoxView
from .grids import GridSnapshot
from .types import BACK, BOTTOM, FRONT, GRID_SIZE, LEFT, RIGHT, TOP, Direction

_CELL_WIDTH = 8
_RULE = "-" * (4 + GRID_SIZE * _CELL_WIDTH)

_DIRECTION_TEXT: dict[Direction, str] = {
    Direction.UP: "upwards",
    Direction.DOWN: "downwards",
    Direction.LEFT: "to the left",
    Direction.RIGHT: "to the right",
}


def format_position(row: int, col: int) -> str:
    return f"R{row + 1}-C{col + 1}"


def direction_text(direction: Direction) -> str:
    return _DIRECTION_TEXT[direction]


def format_box(box: BoxView) -> str:
    """``TYPE-TOP-STATUS``, e.g. ``R-E-M`` for an unopened Regular box."""
    status = "M" if box.is_mystery else "O"
    return f"{box.type_char}-{box.top}-{status}"


def format_grid(snapshot: GridSnapshot) -> str:
    header = "    " + "".join(
        f"C{c + 1}".center(_CELL_WIDTH) for c in range(GRID_SIZE)
    )
    lines = [header, _RULE]
    for r, row in enumerate(snapshot.cells):
        cells = "".join(f" {format_box(b)} |" for b in row)
        lines.append(f"R{r + 1} |{cells}")
        lines.append(_RULE)
    return "\n".join(lines)


def format_box_net(box: BoxView) -> str:
    """Unfolded cube: Back on top, then Left/Top/Right, Front, Bottom."""
    f = box.faces
    return "\n".join(
        [
            "    -----",
            f"    | {f[BACK]} |",
            "-------------",
            f"| {f[LEFT]} | {f[TOP]} | {f[RIGHT]} |",
            "-------------",
            f"    | {f[FRONT]} |",
            "    -----",
            f"    | {f[BOTTOM]} |",
            "    -----",
        ]
    )
