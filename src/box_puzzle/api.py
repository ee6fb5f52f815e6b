import logging
from pathlib import Path

from .config import GameConfig
from .generator import BoxGenerator
from .grids import BoxGrid
from .turn import GameController, Presentation
from .yaml_io import load_layout_yaml


def new_game(
    config: GameConfig,
    presentation: Presentation,
    *,
    layout_path: str | Path | None = None,
) -> GameController:
    """Build a ready-to-play game.

    With a layout the grid comes from the file; the target letter comes from
    the file too when it names one, otherwise it is drawn at random.
    """
    generator = BoxGenerator(config)
    target: str | None = None
    if layout_path is not None:
        grid, target = load_layout_yaml(layout_path)
        logging.info(f"loaded layout from {layout_path}")
    else:
        grid = BoxGrid.random(generator)
    if target is None:
        target = generator.generate_target_letter()
    logging.info(f"new game: target {target}, {config.turns} turns")
    return GameController(
        grid,
        target,
        presentation,
        turns=config.turns,
        flip_unchanging=config.flip_unchanging,
    )
