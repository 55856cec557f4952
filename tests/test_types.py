"""Tests for palette_swap.core.types: Palette, errors, SwapReport."""

import pytest
from palette_swap.core.colour import RGBA
from palette_swap.core.types import (
    AllocationFailed,
    BadArgument,
    ConversionFailed,
    Palette,
    PaletteSet,
    PaletteSwapError,
    SwapReport,
)


class TestPalette:
    def test_count(self):
        p = Palette([RGBA(0, 0, 0), RGBA(1, 1, 1)], [RGBA(2, 2, 2), RGBA(3, 3, 3)])
        assert p.count == 2
        assert len(p) == 2

    def test_colours_coerced(self):
        p = Palette(['#fff'], [[0, 0, 255]])
        assert p.base == (RGBA(255, 255, 255),)
        assert p.replacement == (RGBA(0, 0, 255),)

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match='base has 2 colours but replacement has 1'):
            Palette(['#fff', '#000'], ['#f00'])

    def test_bad_colour_reports_index(self):
        with pytest.raises(ValueError, match=r'replacement\[0\]'):
            Palette(['#fff'], ['oops'])

    def test_empty(self):
        assert Palette([], []).count == 0

    def test_duplicates_allowed(self):
        assert Palette(['#000', '#000'], ['#111', '#222']).count == 2

    def test_frozen(self):
        p = Palette([], [])
        with pytest.raises(AttributeError):
            p.name = 'x'

    def test_hashable_and_equal(self):
        assert Palette(['#fff'], ['#000']) == Palette([RGBA(255, 255, 255)], [RGBA(0, 0, 0)])
        assert hash(Palette(['#fff'], ['#000'])) == hash(Palette(['#fff'], ['#000']))

    def test_from_pairs(self):
        p = Palette.from_pairs([('#fff', '#000'), ('#f00', '#0f0')], name='x')
        assert p.pairs() == [(RGBA(255, 255, 255), RGBA(0, 0, 0)), (RGBA(255, 0, 0), RGBA(0, 255, 0))]
        assert p.name == 'x'

    def test_identity(self):
        p = Palette.identity(['#fff', '#000'])
        assert p.base == p.replacement

    def test_with_replacement(self):
        p = Palette(['#fff', '#000'], ['#fff', '#000'])
        q = p.with_replacement(['#00f', '#f00'], name='blue')
        assert q.base == p.base
        assert q.replacement == (RGBA(0, 0, 255), RGBA(255, 0, 0))
        assert q.name == 'blue'


class TestErrors:
    def test_messages(self):
        assert str(BadArgument('Source does not exist')) == 'Source does not exist'
        assert str(AllocationFailed('x')) == 'Failed to create destination surface, x'
        assert str(ConversionFailed('y')) == 'Failed to convert surface, y'

    def test_hierarchy(self):
        for cls in (BadArgument, AllocationFailed, ConversionFailed):
            assert issubclass(cls, PaletteSwapError)

    def test_detail_kept(self):
        assert ConversionFailed('detail').detail == 'detail'


class TestPaletteSet:
    def test_get_and_names(self):
        p = Palette(['#fff'], ['#000'], name='dark')
        s = PaletteSet(name='set', base=p.base, palettes={'dark': p})
        assert s.get('dark') is p
        assert s.names() == ['dark']


class TestSwapReport:
    def test_add_totals(self):
        report = SwapReport(image_path='a.png', image_width=4, image_height=2)
        p = Palette(['#fff', '#000'], ['#00f', '#f00'])
        report.add('blue', p, [3, 2], output='a_blue.png')
        data = report.variants['blue']
        assert data['remapped'] == 5
        assert data['passthrough'] == 3
        assert data['output'] == 'a_blue.png'
        assert data['entries'][0] == {'base': '#ffffffff', 'replacement': '#0000ffff', 'pixels': 3}
