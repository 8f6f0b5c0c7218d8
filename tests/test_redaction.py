"""
Tests for confidence redaction.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_fragment(text, confidence, x=0.1, y=0.5):
    from layout_recon.utils.fragments import BoundingBox, TextFragment
    return TextFragment(text, confidence, BoundingBox(x, y, 0.1, 0.03))


class TestRedaction:
    """Test redaction helpers."""

    def test_confident_text_unchanged(self):
        """Fragments at or above the threshold keep their text."""
        from layout_recon.utils.redaction import redact_text

        assert redact_text(make_fragment("abc", 0.9)) == "abc"
        assert redact_text(make_fragment("abc", 0.3), confidence_threshold=0.3) == "abc"

    def test_low_confidence_redacted(self):
        """Low-confidence text becomes glyphs of the same length."""
        from layout_recon.utils.redaction import redact_text

        assert redact_text(make_fragment("abc", 0.1)) == "□□□"

    def test_custom_glyph(self):
        """The glyph is configurable."""
        from layout_recon.utils.redaction import redact_text

        assert redact_text(make_fragment("hello", 0.1), glyph="#") == "#####"

    def test_length_preserved_for_unicode(self):
        """Length is counted in characters, not bytes."""
        from layout_recon.utils.redaction import redact_text

        assert redact_text(make_fragment("日本語", 0.0)) == "□□□"

    def test_placeholder_never_empty(self):
        """An empty text still yields one glyph."""
        from layout_recon.utils.redaction import placeholder_for

        assert placeholder_for("") == "□"

    def test_redact_fragment_keeps_geometry(self):
        """Redacted fragments keep box and confidence."""
        from layout_recon.utils.redaction import redact_fragment

        fragment = make_fragment("secret", 0.2, x=0.3)
        redacted = redact_fragment(fragment)

        assert redacted.text == "□□□□□□"
        assert redacted.box == fragment.box
        assert redacted.confidence == 0.2

    def test_redact_fragment_returns_same_when_confident(self):
        """Confident fragments are returned as-is."""
        from layout_recon.utils.redaction import redact_fragment

        fragment = make_fragment("fine", 0.95)

        assert redact_fragment(fragment) is fragment


class TestConfidenceRedactor:
    """Test ConfidenceRedactor class."""

    def test_redact_rows_counts(self):
        """Rows are rewritten and redactions counted."""
        from layout_recon.utils.fragments import Row
        from layout_recon.utils.redaction import ConfidenceRedactor

        rows = [
            Row.from_fragments([make_fragment("ok", 0.9), make_fragment("bad", 0.1, x=0.5)]),
            Row.from_fragments([make_fragment("worse", 0.05, y=0.3)]),
        ]

        redacted, count = ConfidenceRedactor(confidence_threshold=0.3).redact_rows(rows)

        assert count == 2
        assert [f.text for f in redacted[0]] == ["ok", "□□□"]
        assert redacted[1].fragments[0].text == "□□□□□"
        assert [r.y for r in redacted] == [r.y for r in rows]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
