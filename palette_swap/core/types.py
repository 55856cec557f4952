"""Shared types for palette-swap: Palette, PaletteSet, SwapReport, Command, and errors."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from palette_swap.core.colour import RGBA, parse_colour


class PaletteSwapError(Exception):
    """Base class for failures of the palette transform.

    str(err) is the one-line diagnostic written to stderr by apply_palette.
    """


class BadArgument(PaletteSwapError):
    """Source or palette is missing."""


class AllocationFailed(PaletteSwapError):
    """The destination surface could not be created."""

    def __init__(self, detail: str):
        super().__init__(f'Failed to create destination surface, {detail}')
        self.detail = detail


class ConversionFailed(PaletteSwapError):
    """The source could not be expressed in canonical RGBA."""

    def __init__(self, detail: str):
        super().__init__(f'Failed to convert surface, {detail}')
        self.detail = detail


class SurfaceReleased(RuntimeError):
    """A released surface was used."""


class PaletteFileError(ValueError):
    """A palette file could not be parsed."""


def _colours(values: Iterable[Any], label: str) -> tuple[RGBA, ...]:
    out = []
    for i, v in enumerate(values):
        try:
            out.append(parse_colour(v))
        except ValueError as e:
            raise ValueError(f'{label}[{i}]: {e}') from None
    return tuple(out)


@dataclass(frozen=True)
class Palette:
    """Index-aligned base and replacement colours.

    base[i] is swapped for replacement[i]. Duplicate base colours are allowed;
    the lowest index wins.
    """

    base: tuple[RGBA, ...]
    replacement: tuple[RGBA, ...]
    name: str = ''

    def __post_init__(self) -> None:
        base = _colours(self.base, 'base')
        replacement = _colours(self.replacement, 'replacement')
        if len(base) != len(replacement):
            raise ValueError(f'base has {len(base)} colours but replacement has {len(replacement)}')
        # frozen: bypass __setattr__ to store the coerced tuples
        object.__setattr__(self, 'base', base)
        object.__setattr__(self, 'replacement', replacement)

    @property
    def count(self) -> int:
        return len(self.base)

    def __len__(self) -> int:
        return len(self.base)

    def pairs(self) -> list[tuple[RGBA, RGBA]]:
        return list(zip(self.base, self.replacement))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Any, Any]], name: str = '') -> Palette:
        pairs = list(pairs)
        return cls(tuple(b for b, _ in pairs), tuple(r for _, r in pairs), name=name)

    @classmethod
    def identity(cls, colours: Sequence[Any], name: str = 'identity') -> Palette:
        return cls(tuple(colours), tuple(colours), name=name)

    def with_replacement(self, replacement: Sequence[Any], name: str = '') -> Palette:
        """A sibling palette sharing these base colours."""
        return Palette(self.base, tuple(replacement), name=name)


@dataclass(frozen=True)
class PaletteSet:
    """One list of base colours shared by several named variant palettes."""

    name: str
    base: tuple[RGBA, ...]
    palettes: dict[str, Palette] = field(default_factory=dict)

    def get(self, variant: str) -> Palette:
        if variant not in self.palettes:
            raise KeyError(f'Unknown palette: {variant}. Available: {", ".join(sorted(self.palettes))}')
        return self.palettes[variant]

    def names(self) -> list[str]:
        return list(self.palettes)


@dataclass
class SwapReport:
    """Accumulates per-variant results for text/JSON output."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    palette_path: str | None = None
    palette_name: str = ''
    variants: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def pixel_count(self) -> int:
        return self.image_width * self.image_height

    def add(self, variant: str, palette: Palette, counts: Sequence[int], output: str | None = None) -> None:
        """Record the swap counts (and output path) for one variant."""
        entries = [
            {'base': str(base), 'replacement': str(repl), 'pixels': int(n)}
            for (base, repl), n in zip(palette.pairs(), counts)
        ]
        remapped = sum(e['pixels'] for e in entries)
        self.variants[variant] = {
            'output': output,
            'entries': entries,
            'remapped': remapped,
            'passthrough': self.pixel_count - remapped,
        }


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='apply', help='Apply palettes to an image')

        @command.arguments
        def arguments(parser):
            parser.add_argument(...)

        @command.run
        def run(args) -> int:
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable[[Any], int] | None = None
        self._arguments_fn: Callable[[Any], None] | None = None

    def run(self, fn: Callable[[Any], int]) -> Callable[[Any], int]:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def arguments(self, fn: Callable[[Any], None]) -> Callable[[Any], None]:
        """Decorator to register the argparse setup function."""
        self._arguments_fn = fn
        return fn

    def add_arguments(self, parser: Any) -> None:
        if self._arguments_fn is not None:
            self._arguments_fn(parser)

    def execute(self, args: Any) -> int:
        """Execute the command's run function and return its exit status."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        return self._run_fn(args)
