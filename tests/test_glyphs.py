"""
Tests for the digit glyph tables.
"""

import pytest

from handclock.glyphs import (
    CELLS_PER_DIGIT, DIGIT_PATTERNS, GLYPH_ANGLES, RESTING_ANGLE, Glyph,
    angles_for, cell_angles, pattern_for, render_pattern, validate_tables,
)


class TestGlyphAngles:
    """The glyph table must match the drawing exactly."""

    def test_seven_glyphs(self):
        assert len(Glyph) == 7
        assert set(GLYPH_ANGLES) == set(Glyph)

    @pytest.mark.parametrize("char, expected", [
        ("┌", (90, 180)),
        ("┐", (180, 270)),
        ("┘", (270, 0)),
        ("└", (90, 0)),
        ("─", (90, 270)),
        ("│", (180, 0)),
        (" ", (225, 225)),
    ])
    def test_literal_table(self, char, expected):
        assert angles_for(char) == expected
        assert angles_for(Glyph(char)) == expected

    def test_blank_parks_at_resting_angle(self):
        assert angles_for(Glyph.BLANK) == (RESTING_ANGLE, RESTING_ANGLE)

    def test_unknown_glyph_fails_fast(self):
        with pytest.raises(KeyError):
            angles_for("x")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            GLYPH_ANGLES[Glyph.BLANK] = (0, 0)


class TestDigitPatterns:
    """Every digit has a complete 6x4 pattern."""

    def test_all_digits_present(self):
        assert sorted(DIGIT_PATTERNS) == list(range(10))

    @pytest.mark.parametrize("digit", range(10))
    def test_pattern_has_24_cells(self, digit):
        assert len(pattern_for(digit)) == CELLS_PER_DIGIT

    @pytest.mark.parametrize("digit", range(10))
    def test_every_glyph_has_angles(self, digit):
        for glyph in pattern_for(digit):
            assert glyph in GLYPH_ANGLES

    def test_tables_validate_clean(self):
        assert validate_tables() == []

    def test_zero_corners(self):
        assert pattern_for(0)[0] is Glyph.TOP_LEFT
        assert cell_angles(0, 0) == (90, 180)
        assert pattern_for(0)[23] is Glyph.BOTTOM_RIGHT
        assert cell_angles(0, 23) == (270, 0)

    def test_seven_has_blank_cells(self):
        assert pattern_for(7)[8] is Glyph.BLANK
        assert cell_angles(7, 8) == (225, 225)

    @pytest.mark.parametrize("digit", [-1, 10, 42])
    def test_out_of_range_digit_fails_fast(self, digit):
        with pytest.raises(KeyError):
            pattern_for(digit)

    def test_render_pattern_rows(self):
        assert render_pattern(8).split("\n") == [
            "┌──┐",
            "│┌┐│",
            "│└┘│",
            "│┌┐│",
            "│└┘│",
            "└──┘",
        ]
