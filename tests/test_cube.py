import pytest

from box_puzzle.cube import ROLL_CYCLES, Box, roll_faces
from box_puzzle.errors import ImmovableTargetError
from box_puzzle.types import (
    BACK,
    BOTTOM,
    FRONT,
    LEFT,
    RIGHT,
    TOP,
    VARIANT_TRAITS,
    Direction,
    ToolKind,
    Variant,
)

FACES = list("ABCDEF")


@pytest.mark.parametrize("direction", list(Direction))
def test_roll_round_trip(direction):
    once = roll_faces(FACES, direction)
    assert roll_faces(once, direction.opposite) == FACES


@pytest.mark.parametrize("direction", list(Direction))
def test_roll_keeps_exactly_two_faces(direction):
    rolled = roll_faces(FACES, direction)
    unchanged = [i for i in range(6) if rolled[i] == FACES[i]]
    assert len(unchanged) == 2
    assert set(unchanged).isdisjoint(ROLL_CYCLES[direction])


@pytest.mark.parametrize("direction", list(Direction))
def test_four_rolls_are_identity(direction):
    faces = FACES
    for _ in range(4):
        faces = roll_faces(faces, direction)
    assert faces == FACES


@pytest.mark.parametrize(
    "direction, new_top",
    [
        (Direction.RIGHT, FACES[LEFT]),
        (Direction.LEFT, FACES[RIGHT]),
        (Direction.UP, FACES[FRONT]),
        (Direction.DOWN, FACES[BACK]),
    ],
)
def test_roll_new_top(direction, new_top):
    assert roll_faces(FACES, direction)[TOP] == new_top


def test_roll_right_moves_top_to_right():
    rolled = roll_faces(FACES, Direction.RIGHT)
    assert rolled[RIGHT] == "A"
    assert rolled[BOTTOM] == "F"
    assert rolled[LEFT] == "B"
    assert rolled[FRONT] == "C" and rolled[BACK] == "D"


def test_flip_is_an_involution():
    box = Box(list(FACES))
    box.flip()
    assert box.top == "B" and box.bottom == "A"
    box.flip()
    assert box.faces == FACES


def test_fixed_box_cannot_roll_or_flip():
    box = Box(list(FACES), Variant.FIXED)
    with pytest.raises(ImmovableTargetError):
        box.roll(Direction.RIGHT)
    with pytest.raises(ImmovableTargetError):
        box.flip()
    assert box.faces == FACES


def test_fixed_box_is_opened_and_has_no_tool():
    assert Box(list(FACES), Variant.FIXED).opened
    with pytest.raises(ValueError):
        Box(list(FACES), Variant.FIXED, ToolKind.FIX)


def test_invalid_faces_rejected():
    with pytest.raises(ValueError):
        Box(list("ABCDE"))
    with pytest.raises(ValueError):
        Box(list("ABCDEZ"))


def test_stamp_respects_variant():
    regular = Box(list(FACES))
    unchanging = Box(list(FACES), Variant.UNCHANGING)
    fixed = Box(list(FACES), Variant.FIXED)
    assert regular.stamp_top("H") and regular.top == "H"
    assert not unchanging.stamp_top("H") and unchanging.top == "A"
    assert not fixed.stamp_top("H") and fixed.top == "A"


def test_stamp_rejects_letter_outside_alphabet():
    with pytest.raises(ValueError):
        Box(list(FACES)).stamp_top("Z")


def test_open_hands_out_tool_once():
    box = Box(list(FACES), tool=ToolKind.STAMP_PLUS)
    assert box.view().is_mystery
    assert box.open() is ToolKind.STAMP_PLUS
    assert box.opened and box.tool is None
    assert box.open() is None


def test_open_empty_box_marks_it_opened():
    box = Box(list(FACES))
    assert box.open() is None
    assert box.opened


def test_as_fixed_keeps_faces_and_drops_tool():
    box = Box(list(FACES), Variant.UNCHANGING, ToolKind.FLIP)
    fixed = box.as_fixed()
    assert fixed.is_fixed and fixed.faces == FACES and fixed.tool is None


def test_variant_traits():
    assert VARIANT_TRAITS[Variant.REGULAR].stampable
    assert not VARIANT_TRAITS[Variant.UNCHANGING].stampable
    assert VARIANT_TRAITS[Variant.UNCHANGING].rollable
    assert VARIANT_TRAITS[Variant.FIXED].blocks
    assert [VARIANT_TRAITS[v].type_char for v in Variant] == ["R", "U", "X"]


def test_view_is_a_copy():
    box = Box(list(FACES))
    view = box.view()
    box.roll(Direction.RIGHT)
    assert view.top == "A"
    assert view.type_char == "R"
