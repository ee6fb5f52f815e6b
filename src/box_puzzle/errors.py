"""Errors raised by the grid, the tools and the turn controller.

An empty (or already opened) box is a normal outcome and has no exception.
Positions are kept as 0-based cells on the exception; turning them into the
player-facing ``R#-C#`` form is left to the presentation.
"""

from .types import Cell


class BoxPuzzleError(Exception):
    """Base class for game rule violations."""

    def __init__(self, message: str, cell: Cell | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cell = cell


class ImmovableTargetError(BoxPuzzleError):
    """A Fixed box was asked to roll or flip."""


class AlreadyFixedError(BoxPuzzleError):
    """A Fix tool was applied to a box that is already Fixed."""


class InvalidSelectionError(BoxPuzzleError, ValueError):
    """A caller-supplied position or direction fails a precondition."""
