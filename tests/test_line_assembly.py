"""
Tests for row assembly and gap spacing.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_fragment(text, x, width, y=0.5, confidence=0.9):
    from layout_recon.utils.fragments import BoundingBox, TextFragment
    return TextFragment(text, confidence, BoundingBox(x, y, width, 0.05))


class TestSpacesForGap:
    """Test gap-to-space mapping."""

    def test_small_gap_is_one_space(self):
        """Gaps at or below the small-gap threshold give one space."""
        from layout_recon.utils.line_assembly import spaces_for_gap

        assert spaces_for_gap(0.0) == 1
        assert spaces_for_gap(0.005) == 1
        assert spaces_for_gap(0.01) == 1

    def test_overlap_is_one_space(self):
        """Overlapping boxes (negative gap) still get one space."""
        from layout_recon.utils.line_assembly import spaces_for_gap

        assert spaces_for_gap(-0.2) == 1

    def test_large_gap_is_proportional(self):
        """Larger gaps get round(gap / space_unit) spaces."""
        from layout_recon.utils.line_assembly import spaces_for_gap

        assert spaces_for_gap(0.03) == 2
        assert spaces_for_gap(0.0999) == 7
        assert spaces_for_gap(0.15) == 10

    def test_just_over_threshold_is_at_least_one(self):
        """A gap just above the threshold never yields zero spaces."""
        from layout_recon.utils.line_assembly import spaces_for_gap

        assert spaces_for_gap(0.011, small_gap_threshold=0.01, space_unit=0.5) == 1

    def test_rounds_half_up(self):
        """Half a space unit rounds up."""
        from layout_recon.utils.line_assembly import spaces_for_gap

        assert spaces_for_gap(2.5, small_gap_threshold=0.01, space_unit=1.0) == 3
        assert spaces_for_gap(3.5, small_gap_threshold=0.01, space_unit=1.0) == 4


class TestAssembleRow:
    """Test assemble_row function."""

    def test_single_fragment(self):
        """One fragment gives its text with no padding."""
        from layout_recon.utils.line_assembly import assemble_row

        assert assemble_row([make_fragment("alone", 0.4, 0.1)]) == "alone"

    def test_two_fragments_with_wide_gap(self):
        """A 0.10 gap becomes seven spaces."""
        from layout_recon.utils.line_assembly import assemble_row

        line = assemble_row([
            make_fragment("Hello", 0.05, 0.15),
            make_fragment("World", 0.30, 0.15),
        ])

        assert line == "Hello" + " " * 7 + "World"

    def test_adjacent_fragments_one_space(self):
        """Touching fragments are separated by a single space."""
        from layout_recon.utils.line_assembly import assemble_row

        line = assemble_row([
            make_fragment("foo", 0.1, 0.1),
            make_fragment("bar", 0.205, 0.1),
        ])

        assert line == "foo bar"

    def test_sorted_left_to_right(self):
        """Input order does not matter; x does."""
        from layout_recon.utils.line_assembly import assemble_row

        fragments = [
            make_fragment("c", 0.5, 0.05),
            make_fragment("a", 0.1, 0.05),
            make_fragment("b", 0.3, 0.05),
        ]

        forward = assemble_row(fragments)
        backward = assemble_row(list(reversed(fragments)))

        assert forward == backward
        assert forward.replace(" ", "") == "abc"
        assert not forward.startswith(" ")

    def test_same_x_tie_is_deterministic(self):
        """Fragments at the same x are ordered by their other fields."""
        from layout_recon.utils.line_assembly import assemble_row

        a = make_fragment("a", 0.1, 0.05)
        b = make_fragment("b", 0.1, 0.05)

        assert assemble_row([a, b]) == assemble_row([b, a]) == "a b"

    def test_accepts_row(self):
        """A Row can be passed directly."""
        from layout_recon.utils.fragments import Row
        from layout_recon.utils.line_assembly import assemble_row

        row = Row.from_fragments([make_fragment("x", 0.1, 0.05), make_fragment("y", 0.16, 0.05)])

        assert assemble_row(row) == "x y"


class TestRowAssembler:
    """Test RowAssembler class."""

    def test_rejects_zero_space_unit(self):
        """space_unit must be positive."""
        from layout_recon.utils.line_assembly import RowAssembler

        with pytest.raises(ValueError):
            RowAssembler(space_unit=0.0)

    def test_custom_space_unit(self):
        """A wider space unit yields fewer spaces."""
        from layout_recon.utils.line_assembly import RowAssembler

        fragments = [make_fragment("a", 0.0, 0.1), make_fragment("b", 0.2, 0.1)]

        assert RowAssembler(space_unit=0.05).assemble(fragments) == "a  b"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
