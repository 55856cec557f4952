"""Apply every palette of a palette file to an image.

Writes one PNG per variant palette, named <stem>_<variant>.png, into
--outdir (default: $PALETTE_SWAP_OUTDIR, else the image's directory), then
prints how many pixels each base colour remapped.

The palette file defaults to $PALETTE_SWAP_PALETTES. See
palette_swap.core.palette_file for the format.

Example:
    palette-swap apply hero.png -p hero.json -o ./variants
    palette-swap apply hero.png -p hero.json -v blue -v gold --json
"""

import os
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from palette_swap.core.analysis import swap_counts, word_counts
from palette_swap.core.env import OUTDIR_VAR, PALETTES_VAR, env_path
from palette_swap.core.palette_file import parse_palette_file
from palette_swap.core.report import format_json, format_text
from palette_swap.core.surface import release, to_image
from palette_swap.core.transform import apply_palettes
from palette_swap.core.types import Command, PaletteFileError, PaletteSwapError, SwapReport

command = Command(
    name='apply',
    help='Apply the palettes of a palette file to an image, one PNG per variant.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('image', help='Path to source image')
    parser.add_argument('-p', '--palettes', help=f'Palette JSON file (default: ${PALETTES_VAR})')
    parser.add_argument('-o', '--outdir', help=f'Output directory (default: ${OUTDIR_VAR}, else next to image)')
    parser.add_argument(
        '-v',
        '--variant',
        action='append',
        default=None,
        metavar='NAME',
        help='Only apply this variant (repeatable). Default: all.',
    )
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


def _resolve(value: str | None, var: str) -> Path | None:
    return Path(value) if value else env_path(var)


@command.run
def run(args) -> int:
    palettes_path = _resolve(args.palettes, PALETTES_VAR)
    if palettes_path is None:
        print(f'Error: no palette file given (use --palettes or set {PALETTES_VAR})', file=sys.stderr)
        return 1
    try:
        palette_set = parse_palette_file(palettes_path)
    except PaletteFileError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    try:
        selected = {name: palette_set.get(name) for name in (args.variant or palette_set.names())}
    except KeyError as e:
        print(f'Error: {e.args[0]}', file=sys.stderr)
        return 1

    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        return 1
    try:
        with Image.open(args.image) as im:
            im.load()
            image = im.copy()
    except (UnidentifiedImageError, OSError) as e:
        print(f'Error: cannot read image {args.image}: {e}', file=sys.stderr)
        return 1

    image_path = Path(args.image)
    outdir = _resolve(args.outdir, OUTDIR_VAR) or image_path.parent
    try:
        outdir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f'Error: cannot create output directory {outdir}: {e}', file=sys.stderr)
        return 1

    try:
        surfaces = apply_palettes(image, selected)
    except PaletteSwapError as e:
        print(e, file=sys.stderr)
        return 1

    report = SwapReport(
        image_path=str(image_path),
        image_width=image.width,
        image_height=image.height,
        palette_path=str(palettes_path),
        palette_name=palette_set.name,
    )
    counts = word_counts(image)
    try:
        for name, surface in surfaces.items():
            out_path = outdir / f'{image_path.stem}_{name}.png'
            try:
                to_image(surface).save(out_path)
            except OSError as e:
                print(f'Error: cannot write {out_path}: {e}', file=sys.stderr)
                return 1
            report.add(name, selected[name], swap_counts(None, selected[name], counts), output=str(out_path))
    finally:
        for surface in surfaces.values():
            release(surface)

    print(format_json(report) if args.json else format_text(report))
    return 0
