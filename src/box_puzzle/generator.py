import logging

import numpy as np

from .config import GameConfig
from .cube import Box
from .types import ALPHABET, NUM_FACES, ToolKind, Variant

# Every letter twice: a fresh box never shows one letter more than twice.
_FACE_POOL = np.repeat(np.array(ALPHABET), 2)
_TOOLS: tuple[ToolKind, ...] = tuple(ToolKind)


class BoxGenerator:
    """Random source for boxes, tools and the target letter.

    All draws go through one numpy ``Generator`` so a seed reproduces a
    whole game.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    def _percent_roll(self) -> int:
        return int(self.rng.integers(0, 100))

    def chance(self, percent: int) -> bool:
        return self._percent_roll() < percent

    def generate_faces(self) -> list[str]:
        shuffled = self.rng.permutation(_FACE_POOL)
        return [str(letter) for letter in shuffled[:NUM_FACES]]

    def generate_variant(self) -> Variant:
        split = self.config.variant_split
        roll = self._percent_roll()
        if roll < split.regular:
            variant = Variant.REGULAR
        elif roll < split.regular + split.unchanging:
            variant = Variant.UNCHANGING
        else:
            variant = Variant.FIXED
        logging.debug(f"variant roll {roll} -> {variant.value}")
        return variant

    def generate_tool(self) -> ToolKind:
        return _TOOLS[int(self.rng.integers(0, len(_TOOLS)))]

    def generate_target_letter(self) -> str:
        return ALPHABET[int(self.rng.integers(0, len(ALPHABET)))]

    def new_box(self, variant: Variant | None = None) -> Box:
        if variant is None:
            variant = self.generate_variant()
        faces = self.generate_faces()
        if variant is Variant.FIXED:
            return Box(faces, Variant.FIXED)
        if variant is Variant.REGULAR:
            chance = self.config.regular_tool_chance
        else:
            chance = self.config.unchanging_tool_chance
        tool = self.generate_tool() if self.chance(chance) else None
        return Box(faces, variant, tool)
