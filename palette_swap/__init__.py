"""palette_swap: exact-match palette swapping for 2D raster images.

Quick start:
    from PIL import Image
    from palette_swap import Palette, swap_image

    palette = Palette(base=['#ffffff', '#000000'], replacement=['#0000ff', '#ff0000'])
    variant = swap_image(Image.open('hero.png'), palette)

Lower level, mirroring the surface API:
    surface = apply_palette(source_surface, palette)  # None + stderr line on failure
    surface = swap_palette(source_surface, palette)   # raises PaletteSwapError
"""

__version__ = '0.1.0'

from palette_swap.core.colour import (
    ARGB8888,
    BGRA8888,
    CANONICAL,
    RGB565,
    RGB888,
    RGBA,
    PixelFormat,
    pack,
    parse_colour,
    unpack,
)
from palette_swap.core.palette_file import parse_palette_file, parse_palette_string
from palette_swap.core.surface import Surface, allocate, from_array, normalize, release, to_array, to_image
from palette_swap.core.transform import apply_palette, apply_palettes, build_lookup, swap_image, swap_palette
from palette_swap.core.types import (
    AllocationFailed,
    BadArgument,
    ConversionFailed,
    Palette,
    PaletteFileError,
    PaletteSet,
    PaletteSwapError,
    SurfaceReleased,
)

__all__ = [
    '__version__',
    'ARGB8888',
    'BGRA8888',
    'CANONICAL',
    'RGB565',
    'RGB888',
    'RGBA',
    'PixelFormat',
    'pack',
    'parse_colour',
    'unpack',
    'parse_palette_file',
    'parse_palette_string',
    'Surface',
    'allocate',
    'from_array',
    'normalize',
    'release',
    'to_array',
    'to_image',
    'apply_palette',
    'apply_palettes',
    'build_lookup',
    'swap_image',
    'swap_palette',
    'AllocationFailed',
    'BadArgument',
    'ConversionFailed',
    'Palette',
    'PaletteFileError',
    'PaletteSet',
    'PaletteSwapError',
    'SurfaceReleased',
]
