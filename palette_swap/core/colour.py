"""RGBA colour values, pixel-format descriptors, and the pack/unpack contract.

A PixelFormat describes where each channel lives inside a 32-bit pixel word,
using SDL-style masks. The canonical format used for every surface the
adapter allocates keeps the in-memory byte order R, G, B, A on any host, so
the numeric value of a canonical word depends on byte order but the bytes
never do.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RGBA:
    """An 8-bit-per-channel colour. No gamma, no premultiplication."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ('red', 'green', 'blue', 'alpha'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f'{name} must be an int, got {value!r}')
            if not 0 <= value <= 255:
                raise ValueError(f'{name} out of range 0..255: {value}')

    def __iter__(self) -> Iterator[int]:
        return iter((self.red, self.green, self.blue, self.alpha))

    def __str__(self) -> str:
        return to_hex(self)


def _mask_bits(mask: int) -> tuple[int, int]:
    """Return (shift, width) of a contiguous bit mask. Zero mask -> (0, 0)."""
    if mask == 0:
        return 0, 0
    shift = (mask & -mask).bit_length() - 1
    width = (mask >> shift).bit_length()
    if (mask >> shift) != (1 << width) - 1:
        raise ValueError(f'mask 0x{mask:08x} is not contiguous')
    return shift, width


@dataclass(frozen=True)
class PixelFormat:
    """Channel masks for a 32-bit pixel word."""

    rmask: int
    gmask: int
    bmask: int
    amask: int = 0
    name: str = field(default='', compare=False)

    @classmethod
    def canonical(cls) -> PixelFormat:
        return CANONICAL

    @property
    def has_alpha(self) -> bool:
        return self.amask != 0

    def channels(self) -> tuple[tuple[int, int], ...]:
        """(shift, width) for R, G, B, A.

        Raises ValueError when a mask is not contiguous, wider than 8 bits,
        overlaps another mask, or does not fit in 32 bits.
        """
        masks = (self.rmask, self.gmask, self.bmask, self.amask)
        seen = 0
        out = []
        for mask in masks:
            if mask < 0 or mask > 0xFFFFFFFF:
                raise ValueError(f'mask 0x{mask:x} does not fit in 32 bits')
            if mask & seen:
                raise ValueError(f'mask 0x{mask:08x} overlaps another channel')
            seen |= mask
            shift, width = _mask_bits(mask)
            if width > 8:
                raise ValueError(f'mask 0x{mask:08x} is wider than 8 bits')
            out.append((shift, width))
        if self.rmask == 0 or self.gmask == 0 or self.bmask == 0:
            raise ValueError('red, green and blue masks must be non-zero')
        return tuple(out)

    def __str__(self) -> str:
        if self.name:
            return self.name
        return f'PixelFormat(r=0x{self.rmask:08x}, g=0x{self.gmask:08x}, b=0x{self.bmask:08x}, a=0x{self.amask:08x})'


if sys.byteorder == 'big':
    CANONICAL = PixelFormat(0xFF000000, 0x00FF0000, 0x0000FF00, 0x000000FF, name='RGBA32')
else:
    CANONICAL = PixelFormat(0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000, name='RGBA32')

# Word-order formats, independent of host byte order.
ARGB8888 = PixelFormat(0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000, name='ARGB8888')
BGRA8888 = PixelFormat(0x0000FF00, 0x00FF0000, 0xFF000000, 0x000000FF, name='BGRA8888')
RGB888 = PixelFormat(0x00FF0000, 0x0000FF00, 0x000000FF, 0, name='RGB888')
RGB565 = PixelFormat(0xF800, 0x07E0, 0x001F, 0, name='RGB565')

_HEX_RE = re.compile(r'#?([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})')


def _format_of(target: Any) -> PixelFormat:
    if isinstance(target, PixelFormat):
        return target
    fmt = getattr(target, 'format', None)
    if isinstance(fmt, PixelFormat):
        return fmt
    raise TypeError(f'expected a Surface or PixelFormat, got {type(target).__name__}')


def pack(target: Any, rgba: RGBA) -> int:
    """Map rgba to the pixel word that renders as rgba in target's format.

    target is a Surface or a PixelFormat. Narrow channels keep the high bits.
    """
    fmt = _format_of(target)
    word = 0
    for (shift, width), value in zip(fmt.channels(), rgba):
        if width:
            word |= (value >> (8 - width)) << shift
    return word


def unpack(target: Any, word: int) -> RGBA:
    """Inverse of pack. Narrow channels are expanded to the full 0..255 range."""
    fmt = _format_of(target)
    values = []
    for shift, width in fmt.channels():
        if width == 0:
            values.append(255)
            continue
        top = (1 << width) - 1
        v = (word >> shift) & top
        values.append((v * 255 + top // 2) // top)
    return RGBA(*values)


def to_hex(rgba: RGBA) -> str:
    """'#rrggbbaa', lowercase."""
    return f'#{rgba.red:02x}{rgba.green:02x}{rgba.blue:02x}{rgba.alpha:02x}'


def parse_colour(value: Any) -> RGBA:
    """Coerce a hex string, a 3/4-length int sequence, or an RGBA into an RGBA.

    Hex forms: #rgb, #rgba, #rrggbb, #rrggbbaa (the '#' is optional).
    """
    if isinstance(value, RGBA):
        return value
    if isinstance(value, str):
        return _parse_hex(value)
    if isinstance(value, Sequence) and len(value) in (3, 4):
        items = list(value)
        if any(isinstance(v, bool) or not isinstance(v, int) for v in items):
            raise ValueError(f'colour components must be ints: {value!r}')
        return RGBA(*items)
    raise ValueError(f'not a colour: {value!r}')


def _parse_hex(text: str) -> RGBA:
    m = _HEX_RE.fullmatch(text.strip().lower())
    if m is None:
        raise ValueError(f'hex colour must be #rgb, #rgba, #rrggbb or #rrggbbaa: {text!r}')
    h = m.group(1)
    if len(h) in (3, 4):
        h = ''.join(c * 2 for c in h)
    return RGBA(*(int(h[i : i + 2], 16) for i in range(0, len(h), 2)))
