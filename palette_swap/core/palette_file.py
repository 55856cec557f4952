"""JSON palette files.

A file names one list of base colours and any number of variant palettes
that swap them:

    {
      "name": "hero",
      "base": ["#ffffff", "#000000"],
      "palettes": {
        "blue": ["#0000ff", "#ff0000"],
        "gold": [[255, 215, 0], "#402000ff"]
      }
    }

A single palette may be written as {"base": [...], "replacement": [...]};
it is loaded as a set with one variant named 'default'.

Colours are hex strings (#rgb, #rgba, #rrggbb, #rrggbbaa) or [r, g, b(, a)]
lists.
"""

import json
from pathlib import Path
from typing import Any

from palette_swap.core.colour import RGBA, parse_colour
from palette_swap.core.types import Palette, PaletteFileError, PaletteSet

_NAME_SEPARATORS = ('/', '\\')


def parse_palette_file(path: str | Path) -> PaletteSet:
    """Parse a palette file from disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise PaletteFileError(f'{path}: {e.strerror or e}') from e
    return parse_palette_string(text, default_name=path.stem)


def parse_palette_string(text: str, default_name: str = 'palette') -> PaletteSet:
    """Parse a palette set from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PaletteFileError(f'invalid JSON: {e}') from e
    if not isinstance(data, dict):
        raise PaletteFileError('top level must be an object')

    name = data.get('name', default_name)
    if not isinstance(name, str):
        raise PaletteFileError("'name' must be a string")
    base = _colour_list(data.get('base'), 'base')

    if 'palettes' in data and 'replacement' in data:
        raise PaletteFileError("use either 'palettes' or 'replacement', not both")
    if 'replacement' in data:
        variants = {'default': data['replacement']}
    elif 'palettes' in data:
        variants = data['palettes']
        if not isinstance(variants, dict):
            raise PaletteFileError("'palettes' must be an object of name -> colour list")
    else:
        raise PaletteFileError("missing 'palettes' or 'replacement'")

    palettes: dict[str, Palette] = {}
    for variant, colours in variants.items():
        if not variant or variant.strip() != variant or any(sep in variant for sep in _NAME_SEPARATORS):
            raise PaletteFileError(f'invalid palette name {variant!r}: must be non-empty, without path separators')
        label = 'replacement' if 'replacement' in data else f'palettes.{variant}'
        replacement = _colour_list(colours, label)
        if len(replacement) != len(base):
            raise PaletteFileError(f"'{label}' has {len(replacement)} colours, base has {len(base)}")
        palettes[variant] = Palette(base, replacement, name=variant)

    return PaletteSet(name=name, base=base, palettes=palettes)


def _colour_list(value: Any, label: str) -> tuple[RGBA, ...]:
    if value is None:
        raise PaletteFileError(f"missing '{label}'")
    if not isinstance(value, list):
        raise PaletteFileError(f"'{label}' must be a list of colours")
    out = []
    for i, item in enumerate(value):
        try:
            out.append(parse_colour(item))
        except ValueError as e:
            raise PaletteFileError(f"'{label}[{i}]': {e}") from None
    return tuple(out)


def dump_palette_set(palettes: PaletteSet) -> str:
    """Serialise a palette set back to the JSON file format."""
    obj = {
        'name': palettes.name,
        'base': [str(c) for c in palettes.base],
        'palettes': {name: [str(c) for c in p.replacement] for name, p in palettes.palettes.items()},
    }
    return json.dumps(obj, indent=2)
