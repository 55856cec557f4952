"""List the distinct colours of an image with pixel counts.

Most frequent first. Use it to pick base colours for a palette file;
--template prints a ready-to-edit palette file whose single variant maps
every listed colour to itself.

Example:
    palette-swap colours hero.png
    palette-swap colours hero.png -n 8 --template > hero.json
"""

import argparse
import sys

from PIL import Image, UnidentifiedImageError

from palette_swap.core.analysis import colour_census
from palette_swap.core.palette_file import dump_palette_set
from palette_swap.core.report import format_census_json, format_census_text
from palette_swap.core.types import Command, ConversionFailed, Palette, PaletteSet

command = Command(
    name='colours',
    help='List distinct colours with pixel counts, most frequent first.',
)


def _non_negative(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f'must be non-negative, got {n}')
    return n


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('image', help='Path to image')
    parser.add_argument(
        '-n', '--top', type=_non_negative, default=None, metavar='N', help='Only the N most frequent colours'
    )
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    parser.add_argument('-t', '--template', action='store_true', help='Print a palette file template instead')


@command.run
def run(args) -> int:
    try:
        with Image.open(args.image) as im:
            im.load()
            image = im.copy()
    except (UnidentifiedImageError, OSError) as e:
        print(f'Error: cannot read image {args.image}: {e}', file=sys.stderr)
        return 1

    try:
        census = colour_census(image, top=args.top)
    except ConversionFailed as e:
        print(e, file=sys.stderr)
        return 1

    if args.template:
        base = tuple(c for c, _n in census)
        palette_set = PaletteSet(name='palette', base=base, palettes={'variant': Palette.identity(base, name='variant')})
        print(dump_palette_set(palette_set))
        return 0

    total = image.width * image.height
    if args.json:
        print(format_census_json(census, total))
    else:
        print(f'palette-swap: {args.image} ({image.width}\u00d7{image.height}, {len(census)} colours shown)')
        print(format_census_text(census, total))
    return 0
