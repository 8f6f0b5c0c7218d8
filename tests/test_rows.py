"""
Tests for row clustering.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_fragment(text, x, y, width=0.1, height=0.03, confidence=0.9):
    from layout_recon.utils.fragments import BoundingBox, TextFragment
    return TextFragment(text, confidence, BoundingBox(x, y, width, height))


class TestClusterRows:
    """Test cluster_rows function."""

    def test_empty_input(self):
        """No fragments gives no rows."""
        from layout_recon.utils.rows import cluster_rows

        assert cluster_rows([]) == []

    def test_same_row(self):
        """Fragments within the line threshold share a row."""
        from layout_recon.utils.rows import cluster_rows

        rows = cluster_rows([
            make_fragment("b", 0.4, 0.505),
            make_fragment("a", 0.1, 0.5),
        ])

        assert len(rows) == 1
        assert {f.text for f in rows[0]} == {"a", "b"}

    def test_rows_top_first_bottom_left_origin(self):
        """With a bottom-left origin the highest y is the top row."""
        from layout_recon.utils.rows import cluster_rows

        rows = cluster_rows([
            make_fragment("bottom", 0.1, 0.2),
            make_fragment("top", 0.1, 0.9),
            make_fragment("middle", 0.1, 0.5),
        ])

        assert [r.fragments[0].text for r in rows] == ["top", "middle", "bottom"]

    def test_rows_top_first_top_left_origin(self):
        """With a top-left origin the lowest y is the top row."""
        from layout_recon.config import CoordinateOrigin
        from layout_recon.utils.rows import cluster_rows

        rows = cluster_rows(
            [
                make_fragment("bottom", 0.1, 0.9),
                make_fragment("top", 0.1, 0.1),
            ],
            origin=CoordinateOrigin.TOP_LEFT
        )

        assert [r.fragments[0].text for r in rows] == ["top", "bottom"]

    def test_threshold_boundary(self):
        """A gap equal to the threshold stays on the row; a larger one splits."""
        from layout_recon.utils.rows import cluster_rows

        together = cluster_rows(
            [make_fragment("a", 0.1, 0.5), make_fragment("b", 0.3, 0.25)],
            line_threshold=0.25
        )
        apart = cluster_rows(
            [make_fragment("a", 0.1, 0.5), make_fragment("b", 0.3, 0.24)],
            line_threshold=0.25
        )

        assert len(together) == 1
        assert len(apart) == 2

    def test_chained_drift_stays_on_one_row(self):
        """Each fragment is compared with the previous one, not the first."""
        from layout_recon.utils.rows import cluster_rows

        rows = cluster_rows([
            make_fragment("a", 0.1, 0.50),
            make_fragment("b", 0.3, 0.485),
            make_fragment("c", 0.5, 0.47),
        ])

        assert len(rows) == 1

    def test_tall_fragment_forms_own_row(self):
        """A fragment taller than the threshold still forms a non-empty row."""
        from layout_recon.utils.rows import cluster_rows

        rows = cluster_rows([
            make_fragment("tall", 0.1, 0.6, height=0.3),
            make_fragment("next", 0.1, 0.2),
        ])

        assert len(rows) == 2
        assert all(len(r) >= 1 for r in rows)

    def test_order_independent(self):
        """Any input permutation gives the same rows."""
        import itertools
        from layout_recon.utils.rows import cluster_rows

        fragments = [
            make_fragment("a", 0.1, 0.80),
            make_fragment("b", 0.4, 0.80),
            make_fragment("c", 0.1, 0.70),
            make_fragment("d", 0.1, 0.695),
        ]
        expected = cluster_rows(fragments)

        for perm in itertools.permutations(fragments):
            assert cluster_rows(list(perm)) == expected


class TestRowClusterer:
    """Test RowClusterer class."""

    def test_clusterer_uses_threshold(self):
        """The bound threshold is applied."""
        from layout_recon.utils.rows import RowClusterer

        fragments = [make_fragment("a", 0.1, 0.5), make_fragment("b", 0.3, 0.46)]

        assert len(RowClusterer(line_threshold=0.02).cluster(fragments)) == 2
        assert len(RowClusterer(line_threshold=0.05).cluster(fragments)) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
