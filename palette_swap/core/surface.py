"""Surface adapter: 2D pixel buffers in the canonical RGBA layout.

Surfaces hold 32-bit words in a numpy uint32 array of shape (height, width),
row-major. allocate() creates canonical surfaces, normalize() converts a
Surface of any supported PixelFormat or a Pillow image into a fresh canonical
surface, and release() frees the buffer.

Each surface carries a lock. normalize() holds the source's lock only while
copying its pixels out.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import numpy as np
from PIL import Image

from palette_swap.core.colour import CANONICAL, RGBA, PixelFormat, pack, unpack
from palette_swap.core.types import AllocationFailed, ConversionFailed, SurfaceReleased


class Surface:
    """A width x height grid of pixel words in a given PixelFormat."""

    def __init__(self, width: int, height: int, pixels: np.ndarray, format: PixelFormat = CANONICAL):
        pixels = np.ascontiguousarray(pixels, dtype=np.uint32)
        if pixels.shape != (height, width):
            raise ValueError(f'pixel buffer shape {pixels.shape} does not match {width}x{height}')
        self.width = width
        self.height = height
        self.format = format
        self._pixels: np.ndarray | None = pixels
        self._lock = threading.RLock()

    @property
    def pixels(self) -> np.ndarray:
        if self._pixels is None:
            raise SurfaceReleased('surface has been released')
        return self._pixels

    @property
    def pitch(self) -> int:
        """Bytes per row."""
        return self.width * 4

    @property
    def released(self) -> bool:
        return self._pixels is None

    @property
    def is_canonical(self) -> bool:
        return self.format == CANONICAL

    @contextmanager
    def locked(self) -> Iterator[Surface]:
        self._lock.acquire()
        try:
            yield self
        finally:
            self._lock.release()

    def _check_xy(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f'pixel ({x}, {y}) outside {self.width}x{self.height} surface')

    def get_pixel(self, x: int, y: int) -> RGBA:
        self._check_xy(x, y)
        return unpack(self, int(self.pixels[y, x]))

    def set_pixel(self, x: int, y: int, rgba: RGBA) -> None:
        self._check_xy(x, y)
        with self.locked():
            self.pixels[y, x] = pack(self, rgba)

    def __repr__(self) -> str:
        state = ' released' if self.released else ''
        return f'<Surface {self.width}x{self.height} {self.format}{state}>'


def _pack_channels(rgba: np.ndarray) -> np.ndarray:
    """(H, W, 4) uint8 -> (H, W) canonical uint32 words."""
    words = np.zeros(rgba.shape[:2], dtype=np.uint32)
    for i, (shift, _width) in enumerate(CANONICAL.channels()):
        words |= rgba[..., i].astype(np.uint32) << np.uint32(shift)
    return words


def _unpack_channels(words: np.ndarray, fmt: PixelFormat) -> np.ndarray:
    """(H, W) words in fmt -> (H, W, 4) uint8, narrow channels expanded to 0..255."""
    out = np.empty(words.shape + (4,), dtype=np.uint8)
    for i, (shift, width) in enumerate(fmt.channels()):
        if width == 0:
            out[..., i] = 255
            continue
        top = (1 << width) - 1
        v = (words >> np.uint32(shift)) & np.uint32(top)
        if width == 8:
            out[..., i] = v
        else:
            out[..., i] = (v * np.uint32(255) + np.uint32(top // 2)) // np.uint32(top)
    return out


def allocate(width: int, height: int) -> Surface:
    """A new zero-filled canonical surface. Zero width or height is allowed."""
    for dim in (width, height):
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 0:
            raise AllocationFailed(f'invalid dimensions {width!r}x{height!r}')
    try:
        pixels = np.zeros((int(height), int(width)), dtype=np.uint32)
    except (MemoryError, ValueError) as e:
        raise AllocationFailed(f'numpy error={str(e) or type(e).__name__}') from e
    return Surface(int(width), int(height), pixels)


def normalize(source: Any) -> Surface:
    """Return a new canonical surface with the same size and visible colours as source.

    source is a Surface in any supported PixelFormat or a Pillow Image.
    The result never aliases the source buffer.
    """
    if isinstance(source, Surface):
        return _normalize_surface(source)
    if isinstance(source, Image.Image):
        return _normalize_image(source)
    raise ConversionFailed(f'unsupported source type {type(source).__name__}')


def _normalize_surface(source: Surface) -> Surface:
    try:
        source.format.channels()
    except ValueError as e:
        raise ConversionFailed(f'unsupported pixel format {source.format}: {e}') from None

    with source.locked():
        if source.released:
            raise ConversionFailed('source surface has been released')
        raw = source.pixels.copy()

    if source.is_canonical:
        return Surface(source.width, source.height, raw)
    return Surface(source.width, source.height, _pack_channels(_unpack_channels(raw, source.format)))


def _normalize_image(image: Image.Image) -> Surface:
    width, height = image.size
    if width == 0 or height == 0:
        return allocate(width, height)
    try:
        rgba = image if image.mode == 'RGBA' else image.convert('RGBA')
        arr = np.array(rgba, dtype=np.uint8)
    except (ValueError, OSError) as e:
        raise ConversionFailed(f'Pillow error={e}') from e
    if arr.shape != (height, width, 4):
        raise ConversionFailed(f'unexpected pixel array shape {arr.shape} from mode {image.mode}')
    return Surface(width, height, _pack_channels(arr))


def release(surface: Surface) -> None:
    """Free a surface's pixel buffer. Releasing twice raises SurfaceReleased."""
    with surface.locked():
        if surface.released:
            raise SurfaceReleased('surface already released')
        surface._pixels = None


def from_array(array: np.ndarray) -> Surface:
    """Copy an (H, W, 4) or (H, W, 3) uint8 array into a canonical surface."""
    arr = np.asarray(array)
    if arr.dtype != np.uint8 or arr.ndim != 3 or arr.shape[-1] not in (3, 4):
        raise TypeError('expected uint8 (H,W,3/4) array')
    if arr.shape[-1] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)
    height, width = arr.shape[:2]
    return Surface(width, height, _pack_channels(arr))


def to_array(surface: Surface) -> np.ndarray:
    """(H, W, 4) uint8 RGBA copy of a surface in any supported format."""
    with surface.locked():
        return _unpack_channels(surface.pixels, surface.format)


def to_image(surface: Surface) -> Image.Image:
    """Pillow RGBA image of a surface."""
    if surface.width == 0 or surface.height == 0:
        return Image.new('RGBA', (surface.width, surface.height))
    return Image.fromarray(to_array(surface))
