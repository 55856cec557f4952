"""Colour census and per-entry swap counts.

Census lists every distinct colour of an image with its pixel count, most
frequent first. It is how base colours for a new palette are usually found.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
from PIL import Image

from palette_swap.core.colour import CANONICAL, RGBA, pack, unpack
from palette_swap.core.surface import Surface, normalize, release
from palette_swap.core.types import Palette


def _word_counts(source: Surface | Image.Image) -> tuple[np.ndarray, np.ndarray]:
    src = normalize(source)
    try:
        return np.unique(src.pixels.ravel(), return_counts=True)
    finally:
        release(src)


def word_counts(source: Surface | Image.Image) -> dict[int, int]:
    """Canonical pixel word -> number of pixels with that word."""
    words, counts = _word_counts(source)
    return dict(zip(words.tolist(), counts.tolist()))


def colour_census(source: Surface | Image.Image, top: int | None = None) -> list[tuple[RGBA, int]]:
    """Distinct colours with pixel counts, most frequent first (ties by colour word)."""
    if top is not None and top < 0:
        raise ValueError(f'top must be non-negative, got {top}')
    words, counts = _word_counts(source)
    order = np.lexsort((words, -counts.astype(np.int64)))
    if top is not None:
        order = order[:top]
    return [(unpack(CANONICAL, int(words[i])), int(counts[i])) for i in order]


def swap_counts(
    source: Surface | Image.Image | None,
    palette: Palette,
    counts: Mapping[int, int] | None = None,
) -> list[int]:
    """Pixels remapped by each palette entry. Shadowed duplicate entries count 0.

    Pass counts from word_counts() to reuse one census across several palettes;
    source is then not read.
    """
    by_word = counts if counts is not None else word_counts(source)
    seen: set[int] = set()
    result = []
    for base in palette.base:
        key = pack(CANONICAL, base)
        result.append(0 if key in seen else by_word.get(key, 0))
        seen.add(key)
    return result
