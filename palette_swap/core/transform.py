"""The palette transform: exact-match recolouring of a surface.

Every pixel whose canonical word equals a packed base colour becomes the
packed replacement at the lowest matching palette index. Everything else
passes through untouched. The result is the same as scanning rows top to
bottom, pixels left to right, and searching the palette from index 0, but the
search runs as one vectorised lookup against a sorted key table.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
from PIL import Image

from palette_swap.core.colour import CANONICAL, PixelFormat, pack
from palette_swap.core.surface import Surface, allocate, normalize, release, to_image
from palette_swap.core.types import BadArgument, ConversionFailed, Palette, PaletteSwapError


def build_lookup(palette: Palette, fmt: PixelFormat = CANONICAL) -> dict[int, int]:
    """Packed base word -> packed replacement word. First occurrence of a base wins."""
    table: dict[int, int] = {}
    for base, replacement in zip(palette.base, palette.replacement):
        table.setdefault(pack(fmt, base), pack(fmt, replacement))
    return table


def remap_words(words: np.ndarray, table: Mapping[int, int]) -> np.ndarray:
    """Return a new array with every word found in table replaced by its value."""
    if not table or words.size == 0:
        return words.copy()
    keys = np.fromiter(table.keys(), dtype=np.uint32, count=len(table))
    values = np.fromiter(table.values(), dtype=np.uint32, count=len(table))
    order = np.argsort(keys)
    keys = keys[order]
    values = values[order]

    flat = words.ravel()
    idx = np.minimum(np.searchsorted(keys, flat), len(keys) - 1)
    hit = keys[idx] == flat
    return np.where(hit, values[idx], flat).astype(np.uint32, copy=False).reshape(words.shape)


def _dimensions(source: Any) -> tuple[int, int]:
    if isinstance(source, Surface):
        return source.width, source.height
    if isinstance(source, Image.Image):
        return source.size
    raise ConversionFailed(f'unsupported source type {type(source).__name__}')


def _check_arguments(source: Any, palette: Any) -> None:
    if source is None:
        raise BadArgument('Source does not exist')
    if palette is None:
        raise BadArgument('Palette does not exist')


def swap_palette(source: Surface | Image.Image, palette: Palette) -> Surface:
    """Apply palette to a copy of source and return the new canonical surface.

    Raises BadArgument, AllocationFailed or ConversionFailed. On failure no
    surface allocated by this call survives. source is never modified.
    """
    _check_arguments(source, palette)
    width, height = _dimensions(source)
    dest = allocate(width, height)
    try:
        src = normalize(source)
        try:
            dest.pixels[...] = remap_words(src.pixels, build_lookup(palette, dest.format))
        finally:
            release(src)
    except Exception:
        release(dest)
        raise
    return dest


def apply_palette(source: Surface | Image.Image | None, palette: Palette | None) -> Surface | None:
    """Like swap_palette, but failures print a diagnostic to stderr and return None."""
    try:
        return swap_palette(source, palette)
    except PaletteSwapError as e:
        print(e, file=sys.stderr)
        return None


def apply_palettes(
    source: Surface | Image.Image,
    palettes: Mapping[str, Palette] | Iterable[Palette],
) -> dict[str, Surface]:
    """Apply several variant palettes to one source, normalising it once.

    A mapping is keyed by its own keys; otherwise each palette's name is used,
    falling back to its position.
    """
    if source is None:
        raise BadArgument('Source does not exist')
    if isinstance(palettes, Mapping):
        named = list(palettes.items())
    else:
        named = [(getattr(p, 'name', '') or str(i), p) for i, p in enumerate(palettes)]
    for _name, palette in named:
        _check_arguments(source, palette)
    names = [name for name, _ in named]
    if len(set(names)) != len(names):
        raise ValueError(f'duplicate palette names: {names}')

    width, height = _dimensions(source)
    results: dict[str, Surface] = {}
    src = normalize(source)
    try:
        for name, palette in named:
            dest = allocate(width, height)
            results[name] = dest
            dest.pixels[...] = remap_words(src.pixels, build_lookup(palette, dest.format))
    except Exception:
        for dest in results.values():
            release(dest)
        raise
    finally:
        release(src)
    return results


def swap_image(image: Image.Image, palette: Palette) -> Image.Image:
    """Pillow image in, RGBA Pillow image out."""
    surface = swap_palette(image, palette)
    try:
        return to_image(surface)
    finally:
        release(surface)
