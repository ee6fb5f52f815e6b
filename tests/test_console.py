import pytest

from box_puzzle.console import ConsolePresentation, parse_index, parse_position
from box_puzzle.cube import Box, BoxView
from box_puzzle.errors import InvalidSelectionError
from box_puzzle.rendering import (
    direction_text,
    format_box,
    format_box_net,
    format_grid,
    format_position,
)
from box_puzzle.types import Direction, ToolKind, Variant
from conftest import fixed_box, make_grid


@pytest.mark.parametrize(
    "text, cell",
    [
        ("R1-C1", (0, 0)),
        ("r3-c5", (2, 4)),
        ("8-8", (7, 7)),
        (" R2 - C7 ", (1, 6)),
    ],
)
def test_parse_position(text, cell):
    assert parse_position(text) == cell


@pytest.mark.parametrize("text", ["", "hello", "R1C1", "R0-C1", "R9-C1", "1-9"])
def test_parse_position_rejects(text):
    with pytest.raises(InvalidSelectionError):
        parse_position(text)


def test_parse_index():
    assert parse_index("1", "row") == 0
    assert parse_index(" 8 ", "column") == 7
    with pytest.raises(InvalidSelectionError):
        parse_index("9", "row")
    with pytest.raises(InvalidSelectionError):
        parse_index("x", "row")


def test_format_position_is_one_based():
    assert format_position(0, 0) == "R1-C1"
    assert format_position(7, 2) == "R8-C3"


def test_format_box():
    assert format_box(BoxView(Variant.REGULAR, tuple("ABCDEF"), False)) == "R-A-M"
    assert format_box(fixed_box("HBCDEF").view()) == "X-H-O"
    assert format_box(BoxView(Variant.UNCHANGING, tuple("CBADEF"), True)) == "U-C-O"


def test_format_grid():
    text = format_grid(make_grid().snapshot())
    lines = text.splitlines()
    assert "C1" in lines[0] and "C8" in lines[0]
    assert lines[2].startswith("R1 |")
    assert lines[2].count("R-A-M") == 8
    assert sum(line.startswith("R") for line in lines) == 8


def test_format_box_net():
    net = format_box_net(Box(list("ABCDEF")).view())
    lines = net.splitlines()
    assert "D" in lines[1]
    assert lines[3] == "| E | A | F |"
    assert "C" in lines[5] and "B" in lines[7]


def test_direction_text():
    assert direction_text(Direction.LEFT) == "to the left"
    assert direction_text(Direction.UP) == "upwards"


class Console:
    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []
        self.lines = []

    def input(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)

    def print(self, *args):
        self.lines.append(" ".join(str(a) for a in args))

    def output(self):
        return "\n".join(self.lines)


def test_view_command_shows_box_net():
    console = Console(["view", "R1-C1", "R1-C2"])
    ui = ConsolePresentation(console.input, console.print)
    ui.render_grid(make_grid().snapshot())

    assert ui.request_edge_position() == (0, 1)
    assert "| E | A | F |" in console.output()


def test_bad_position_is_asked_again():
    console = Console(["nope", "R1-C9", "2-1"])
    ui = ConsolePresentation(console.input, console.print)

    assert ui.request_edge_position() == (1, 0)
    assert len(console.prompts) == 3
    assert console.output().count("INCORRECT INPUT") == 2


def test_corner_direction_by_number_or_name():
    options = (Direction.RIGHT, Direction.DOWN)
    console = Console(["3", "2", "right"])
    ui = ConsolePresentation(console.input, console.print)

    assert ui.request_corner_direction(options) is Direction.DOWN
    assert ui.request_corner_direction(options) is Direction.RIGHT
    assert "INCORRECT INPUT" in console.output()


def test_stamp_row_target_is_an_index():
    console = Console(["0", "4"])
    ui = ConsolePresentation(console.input, console.print)

    assert ui.request_tool_target(ToolKind.STAMP_ROW) == 3
    assert "MassRowStamp" in console.prompts[0]


def test_plus_target_is_a_position():
    console = Console(["R4-C4"])
    ui = ConsolePresentation(console.input, console.print)

    assert ui.request_tool_target(ToolKind.STAMP_PLUS) == (3, 3)


def test_messages():
    console = Console([])
    ui = ConsolePresentation(console.input, console.print)

    ui.render_welcome("C")
    ui.render_roll_result(Direction.RIGHT, True)
    ui.render_opened(None, 0, 3)
    ui.render_opened(ToolKind.FLIP, 0, 3)
    ui.render_error("fixed box cannot be moved, turn is wasted", (0, 3))
    ui.render_game_end(make_grid().snapshot(), "A", 64)

    out = console.output()
    assert '"C"' in out
    assert "until a FixedBox has been reached" in out
    assert "empty or already opened" in out
    assert "BoxFlipper" in out
    assert "ERROR: fixed box cannot be moved, turn is wasted (R1-C4)" in out
    assert "64" in out
