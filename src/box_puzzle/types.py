from dataclasses import dataclass
from enum import Enum

Cell = tuple[int, int]

GRID_SIZE = 8
NUM_FACES = 6
ALPHABET: tuple[str, ...] = ("A", "B", "C", "D", "E", "F", "G", "H")

TOP = 0
BOTTOM = 1
FRONT = 2
BACK = 3
LEFT = 4
RIGHT = 5


class Direction(Enum):
    """Roll direction, valued by its (row-delta, col-delta)."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def row_delta(self) -> int:
        return self.value[0]

    @property
    def col_delta(self) -> int:
        return self.value[1]

    @property
    def is_vertical(self) -> bool:
        return self.col_delta == 0

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.row_delta, -self.col_delta))

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        key = str(name or "").strip().upper()
        if key not in cls.__members__:
            raise ValueError(f"Unknown direction: {name!r}")
        return cls[key]


class Variant(Enum):
    REGULAR = "regular"
    UNCHANGING = "unchanging"
    FIXED = "fixed"


class ToolKind(Enum):
    FIX = "fix"
    FLIP = "flip"
    STAMP_ROW = "row"
    STAMP_COLUMN = "column"
    STAMP_PLUS = "plus"


@dataclass(frozen=True)
class VariantTraits:
    rollable: bool
    flippable: bool
    stampable: bool
    blocks: bool
    type_char: str

    def __post_init__(self) -> None:
        if len(self.type_char) != 1:
            raise ValueError("type_char must be a single character")
        if self.blocks and self.rollable:
            raise ValueError("a blocking variant cannot be rollable")


# Flip on UNCHANGING is further gated by GameConfig.flip_unchanging.
VARIANT_TRAITS: dict[Variant, VariantTraits] = {
    Variant.REGULAR: VariantTraits(
        rollable=True, flippable=True, stampable=True, blocks=False, type_char="R"
    ),
    Variant.UNCHANGING: VariantTraits(
        rollable=True, flippable=True, stampable=False, blocks=False, type_char="U"
    ),
    Variant.FIXED: VariantTraits(
        rollable=False, flippable=False, stampable=False, blocks=True, type_char="X"
    ),
}
assert set(VARIANT_TRAITS) == set(Variant)
