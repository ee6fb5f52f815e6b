from pathlib import Path

import yaml

from .config import GameConfig
from .cube import Box
from .grids import BoxGrid
from .types import ALPHABET, GRID_SIZE, NUM_FACES, VARIANT_TRAITS, ToolKind, Variant

_VARIANT_BY_CHAR: dict[str, Variant] = {
    t.type_char: v for v, t in VARIANT_TRAITS.items()
}


def _coerce_letter(value: object, *, label: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{label} must be a string, got {type(value).__name__}")
    s = value.strip().upper()
    if s not in ALPHABET:
        raise ValueError(
            f"{label} must be one of {''.join(ALPHABET)}, got {value!r}"
        )
    return s


def _coerce_cell_spec(value: object, *, label: str) -> Box:
    """Parse ``<R|U|X>:<6 letters>[:<tool>]`` into a Box."""
    if not isinstance(value, str):
        raise TypeError(f"{label} must be a string, got {type(value).__name__}")
    parts = [p.strip() for p in value.split(":")]
    if len(parts) not in (2, 3):
        raise ValueError(
            f"{label} must look like 'R:ABCDEF' or 'R:ABCDEF:fix', got {value!r}"
        )

    type_char = parts[0].upper()
    if type_char not in _VARIANT_BY_CHAR:
        raise ValueError(
            f"{label} invalid box type {parts[0]!r} "
            f"(expected one of {', '.join(_VARIANT_BY_CHAR)})"
        )
    variant = _VARIANT_BY_CHAR[type_char]

    letters = parts[1].upper()
    if len(letters) != NUM_FACES:
        raise ValueError(f"{label} must list exactly {NUM_FACES} face letters")
    for i, letter in enumerate(letters):
        if letter not in ALPHABET:
            raise ValueError(f"{label} face {i} invalid letter: {letter!r}")

    tool = None
    if len(parts) == 3 and parts[2]:
        try:
            tool = ToolKind(parts[2].lower())
        except ValueError:
            raise ValueError(
                f"{label} unknown tool {parts[2]!r} "
                f"(expected one of {', '.join(t.value for t in ToolKind)})"
            ) from None
        if variant is Variant.FIXED:
            raise ValueError(f"{label} a fixed box cannot contain a tool")

    return Box(list(letters), variant, tool)


def load_config_yaml(path: str | Path) -> GameConfig:
    """Load a ``GameConfig`` from a YAML file. An empty file gives defaults."""
    path = Path(path)
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return GameConfig()
    if not isinstance(raw, dict):
        raise ValueError("YAML root must be a mapping")
    return GameConfig.from_dict(raw)


def dump_config_yaml(config: GameConfig) -> str:
    return yaml.safe_dump(config.to_dict(), sort_keys=False)


def write_config_template(
    path: str | Path,
    config: GameConfig | None = None,
    *,
    overwrite: bool = False,
) -> None:
    p = Path(path)
    if p.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing file: {p}")
    if config is None:
        config = GameConfig()
    p.write_text(dump_config_yaml(config), encoding="utf-8")


def load_layout_yaml(path: str | Path) -> tuple[BoxGrid, str | None]:
    """Load a fixed starting grid and optional target letter from YAML."""
    path = Path(path)
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("YAML root must be a mapping")

    unknown = sorted(set(raw) - {"target", "rows"})
    if unknown:
        raise ValueError(f"Unknown layout keys: {', '.join(map(str, unknown))}")

    target = raw.get("target")
    if target is not None:
        target = _coerce_letter(target, label="target")

    rows_node = raw.get("rows")
    if not isinstance(rows_node, list):
        raise ValueError("YAML must contain list key 'rows'")
    if len(rows_node) != GRID_SIZE:
        raise ValueError(f"rows must have length {GRID_SIZE}")

    cells: list[list[Box]] = []
    for r, row in enumerate(rows_node):
        if not isinstance(row, list):
            raise TypeError(f"rows[{r}] must be a list")
        if len(row) != GRID_SIZE:
            raise ValueError(f"rows[{r}] must have length {GRID_SIZE}")
        cells.append(
            [
                _coerce_cell_spec(spec, label=f"rows[{r}][{c}]")
                for c, spec in enumerate(row)
            ]
        )

    return BoxGrid(cells), target
