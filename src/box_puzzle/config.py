"""Game configuration.

Typed configuration objects with validation on construction. Loading from
and writing to YAML lives in ``yaml_io``.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any

DEFAULT_TURNS = 5
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _check_percent(value: object, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{label} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= 100:
        raise ValueError(f"{label} must be within 0..100, got {value}")


@dataclass
class VariantSplit:
    """Percentages of Regular / Unchanging / Fixed boxes in a new grid."""

    regular: int = 85
    unchanging: int = 10
    fixed: int = 5

    def __post_init__(self) -> None:
        for name in ("regular", "unchanging", "fixed"):
            _check_percent(getattr(self, name), f"variant_split.{name}")
        total = self.regular + self.unchanging + self.fixed
        if total != 100:
            raise ValueError(f"variant_split must sum to 100, got {total}")


@dataclass
class GameConfig:
    turns: int = DEFAULT_TURNS
    seed: int | None = None
    variant_split: VariantSplit = field(default_factory=VariantSplit)
    regular_tool_chance: int = 75
    unchanging_tool_chance: int = 100
    # Whether the Flip tool turns Unchanging boxes upside down.
    flip_unchanging: bool = True
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if isinstance(self.variant_split, dict):
            self.variant_split = VariantSplit(**self.variant_split)
        if not isinstance(self.variant_split, VariantSplit):
            raise TypeError("variant_split must be a mapping")
        if isinstance(self.turns, bool) or not isinstance(self.turns, int):
            raise TypeError("turns must be an integer")
        if self.turns < 1:
            raise ValueError("turns must be a positive integer")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise TypeError("seed must be an integer or null")
        _check_percent(self.regular_tool_chance, "regular_tool_chance")
        _check_percent(self.unchanging_tool_chance, "unchanging_tool_chance")
        if not isinstance(self.flip_unchanging, bool):
            raise TypeError("flip_unchanging must be a boolean")
        level = str(self.log_level).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )
        self.log_level = level

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
