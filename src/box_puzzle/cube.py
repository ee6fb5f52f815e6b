from dataclasses import dataclass

from .errors import ImmovableTargetError
from .types import (
    ALPHABET,
    BACK,
    BOTTOM,
    FRONT,
    LEFT,
    NUM_FACES,
    RIGHT,
    TOP,
    VARIANT_TRAITS,
    Direction,
    ToolKind,
    Variant,
    VariantTraits,
)

# Each cycle (a, b, c, d) moves the letter on face a to b, b to c, c to d
# and d back to a. LEFT and DOWN are the reversed cycles of RIGHT and UP.
_RIGHT_CYCLE = (LEFT, TOP, RIGHT, BOTTOM)
_UP_CYCLE = (FRONT, TOP, BACK, BOTTOM)

ROLL_CYCLES: dict[Direction, tuple[int, int, int, int]] = {
    Direction.RIGHT: _RIGHT_CYCLE,
    Direction.LEFT: tuple(reversed(_RIGHT_CYCLE)),
    Direction.UP: _UP_CYCLE,
    Direction.DOWN: tuple(reversed(_UP_CYCLE)),
}


def roll_faces(faces: list[str], direction: Direction) -> list[str]:
    """Return the face list after tipping the cube over one edge."""
    cycle = ROLL_CYCLES[direction]
    out = list(faces)
    for i, src in enumerate(cycle):
        out[cycle[(i + 1) % 4]] = faces[src]
    return out


def _check_faces(faces: list[str]) -> None:
    if len(faces) != NUM_FACES:
        raise ValueError(f"a box must have exactly {NUM_FACES} faces")
    for i, letter in enumerate(faces):
        if letter not in ALPHABET:
            raise ValueError(f"faces[{i}] invalid letter: {letter!r}")


@dataclass(frozen=True)
class BoxView:
    variant: Variant
    faces: tuple[str, ...]
    opened: bool

    @property
    def top(self) -> str:
        return self.faces[TOP]

    @property
    def type_char(self) -> str:
        return VARIANT_TRAITS[self.variant].type_char

    @property
    def is_mystery(self) -> bool:
        return not self.opened


@dataclass
class Box:
    """A six-faced letter cube.

    Faces are indexed Top, Bottom, Front, Back, Left, Right. Behavior that
    differs per variant is looked up in ``VARIANT_TRAITS``.
    """

    faces: list[str]
    variant: Variant = Variant.REGULAR
    tool: ToolKind | None = None
    opened: bool = False

    def __post_init__(self) -> None:
        self.faces = list(self.faces)
        _check_faces(self.faces)
        if self.variant is Variant.FIXED:
            if self.tool is not None:
                raise ValueError("a fixed box cannot contain a tool")
            self.opened = True

    @property
    def traits(self) -> VariantTraits:
        return VARIANT_TRAITS[self.variant]

    @property
    def top(self) -> str:
        return self.faces[TOP]

    @property
    def bottom(self) -> str:
        return self.faces[BOTTOM]

    @property
    def is_fixed(self) -> bool:
        return self.variant is Variant.FIXED

    def roll(self, direction: Direction) -> None:
        if not self.traits.rollable:
            raise ImmovableTargetError(
                f"{self.variant.value} box cannot be rolled"
            )
        self.faces = roll_faces(self.faces, direction)

    def flip(self) -> None:
        if not self.traits.flippable:
            raise ImmovableTargetError(f"cannot flip a {self.variant.value} box")
        self.faces[TOP], self.faces[BOTTOM] = self.faces[BOTTOM], self.faces[TOP]

    def stamp_top(self, letter: str) -> bool:
        """Write ``letter`` on the Top face if this variant allows it."""
        if letter not in ALPHABET:
            raise ValueError(f"invalid letter: {letter!r}")
        if not self.traits.stampable:
            return False
        self.faces[TOP] = letter
        return True

    def open(self) -> ToolKind | None:
        """Open the box and hand out its tool.

        Returns None for an empty or already opened box. Either way the box
        counts as opened afterwards.
        """
        if self.opened:
            return None
        self.opened = True
        tool, self.tool = self.tool, None
        return tool

    def as_fixed(self) -> "Box":
        return Box(list(self.faces), Variant.FIXED)

    def view(self) -> BoxView:
        return BoxView(self.variant, tuple(self.faces), self.opened)
