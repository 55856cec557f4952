"""Tests for palette_swap.core.colour: RGBA values, formats, pack/unpack."""

import sys

import pytest
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
    to_hex,
    unpack,
)


class TestRGBA:
    def test_default_alpha_is_opaque(self):
        assert RGBA(1, 2, 3) == RGBA(1, 2, 3, 255)

    def test_equality_is_componentwise(self):
        assert RGBA(10, 20, 30, 40) == RGBA(10, 20, 30, 40)
        assert RGBA(10, 20, 30, 40) != RGBA(10, 20, 30, 41)

    def test_iterates_in_channel_order(self):
        assert tuple(RGBA(1, 2, 3, 4)) == (1, 2, 3, 4)

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            RGBA(256, 0, 0)
        with pytest.raises(ValueError):
            RGBA(0, -1, 0)

    def test_non_int_rejected(self):
        with pytest.raises(ValueError):
            RGBA(1.5, 0, 0)
        with pytest.raises(ValueError):
            RGBA(True, 0, 0)

    def test_str_is_hex(self):
        assert str(RGBA(255, 0, 128, 255)) == '#ff0080ff'


class TestCanonicalFormat:
    def test_memory_bytes_are_rgba(self):
        word = pack(CANONICAL, RGBA(1, 2, 3, 4))
        assert word.to_bytes(4, sys.byteorder) == bytes([1, 2, 3, 4])

    def test_host_mask_layout(self):
        if sys.byteorder == 'little':
            assert CANONICAL.rmask == 0x000000FF
            assert CANONICAL.amask == 0xFF000000
        else:
            assert CANONICAL.rmask == 0xFF000000
            assert CANONICAL.amask == 0x000000FF

    def test_canonical_classmethod(self):
        assert PixelFormat.canonical() is CANONICAL

    def test_unpack_inverts_pack(self):
        for c in (RGBA(0, 0, 0, 0), RGBA(255, 255, 255, 255), RGBA(12, 200, 7, 99)):
            assert unpack(CANONICAL, pack(CANONICAL, c)) == c

    def test_word_equality_matches_colour_equality(self):
        a = RGBA(255, 0, 0, 255)
        b = RGBA(255, 0, 0, 254)
        assert pack(CANONICAL, a) != pack(CANONICAL, b)
        assert pack(CANONICAL, a) == pack(CANONICAL, RGBA(255, 0, 0, 255))


class TestOtherFormats:
    def test_argb8888(self):
        assert pack(ARGB8888, RGBA(0x11, 0x22, 0x33, 0x44)) == 0x44112233

    def test_bgra8888(self):
        assert pack(BGRA8888, RGBA(0x11, 0x22, 0x33, 0x44)) == 0x33221144

    def test_rgb888_drops_alpha(self):
        assert pack(RGB888, RGBA(1, 2, 3, 0)) == 0x010203
        assert unpack(RGB888, 0x010203) == RGBA(1, 2, 3, 255)

    def test_rgb565_pack(self):
        assert pack(RGB565, RGBA(255, 0, 0)) == 0xF800
        assert pack(RGB565, RGBA(0, 255, 0)) == 0x07E0
        assert pack(RGB565, RGBA(0, 0, 255)) == 0x001F

    def test_rgb565_unpack_expands(self):
        assert unpack(RGB565, 0xFFFF) == RGBA(255, 255, 255, 255)
        assert unpack(RGB565, 0x0000) == RGBA(0, 0, 0, 255)

    def test_pack_accepts_surface_like(self):
        class Holder:
            format = ARGB8888

        assert pack(Holder(), RGBA(0, 0, 0, 255)) == 0xFF000000

    def test_pack_rejects_other_targets(self):
        with pytest.raises(TypeError):
            pack('nope', RGBA(0, 0, 0))


class TestFormatValidation:
    def test_wide_mask(self):
        fmt = PixelFormat(0x3FF, 0xFFC00, 0x3FF00000, 0)
        with pytest.raises(ValueError, match='wider than 8 bits'):
            fmt.channels()

    def test_overlapping_masks(self):
        fmt = PixelFormat(0xFF, 0xFF, 0xFF00, 0)
        with pytest.raises(ValueError, match='overlaps'):
            fmt.channels()

    def test_non_contiguous_mask(self):
        fmt = PixelFormat(0x0F0F, 0xF000_0000, 0x00F0_0000, 0)
        with pytest.raises(ValueError, match='not contiguous'):
            fmt.channels()

    def test_missing_colour_mask(self):
        with pytest.raises(ValueError):
            PixelFormat(0xFF, 0, 0xFF00, 0).channels()


class TestParseColour:
    def test_hex_forms(self):
        assert parse_colour('#ffffff') == RGBA(255, 255, 255, 255)
        assert parse_colour('#fff') == RGBA(255, 255, 255, 255)
        assert parse_colour('#ff000080') == RGBA(255, 0, 0, 128)
        assert parse_colour('#f008') == RGBA(255, 0, 0, 136)

    def test_no_hash_and_uppercase(self):
        assert parse_colour('00FF00') == RGBA(0, 255, 0)

    def test_sequences(self):
        assert parse_colour([1, 2, 3]) == RGBA(1, 2, 3, 255)
        assert parse_colour((1, 2, 3, 4)) == RGBA(1, 2, 3, 4)

    def test_rgba_passthrough(self):
        c = RGBA(9, 9, 9)
        assert parse_colour(c) is c

    def test_invalid(self):
        for bad in ('#ff', '#fffffffff', 'zzzzzz', [1, 2], [1, 2, 'x'], 42, None):
            with pytest.raises(ValueError):
                parse_colour(bad)

    def test_hex_rejects_signs_and_inner_whitespace(self):
        for bad in ('#+f+f+f', '# f f f', '##fff', '#ff ff ff', '#-1-1-1', '0x123456'):
            with pytest.raises(ValueError, match='hex colour'):
                parse_colour(bad)

    def test_to_hex_round_trip(self):
        c = RGBA(18, 52, 86, 120)
        assert parse_colour(to_hex(c)) == c
