"""
Confidence-based redaction.

Low-confidence fragments keep their position and character count but
their text is replaced with a placeholder glyph, so the consumer sees
where recognition was unreliable and the spacing math stays intact.
"""

import logging
from typing import Iterable, List, Tuple

from ..config import DEFAULT_REDACTION_GLYPH
from .fragments import Row, TextFragment

logger = logging.getLogger(__name__)


def should_redact(fragment: TextFragment, confidence_threshold: float = 0.3) -> bool:
    return fragment.confidence < confidence_threshold


def placeholder_for(text: str, glyph: str = DEFAULT_REDACTION_GLYPH) -> str:
    """A run of the glyph as long as the text, and at least one glyph."""
    return glyph * max(1, len(text))


def redact_text(
    fragment: TextFragment,
    confidence_threshold: float = 0.3,
    glyph: str = DEFAULT_REDACTION_GLYPH
) -> str:
    """Display text for a fragment under the redaction policy."""
    if should_redact(fragment, confidence_threshold):
        return placeholder_for(fragment.text, glyph)
    return fragment.text


def redact_fragment(
    fragment: TextFragment,
    confidence_threshold: float = 0.3,
    glyph: str = DEFAULT_REDACTION_GLYPH
) -> TextFragment:
    """Return the fragment itself, or a copy carrying placeholder text."""
    if should_redact(fragment, confidence_threshold):
        return fragment.with_text(placeholder_for(fragment.text, glyph))
    return fragment


class ConfidenceRedactor:
    """Applies the redaction policy to fragments and rows."""

    def __init__(
        self,
        confidence_threshold: float = 0.3,
        glyph: str = DEFAULT_REDACTION_GLYPH
    ):
        self.confidence_threshold = confidence_threshold
        self.glyph = glyph

    def redact(self, fragment: TextFragment) -> TextFragment:
        return redact_fragment(fragment, self.confidence_threshold, self.glyph)

    def redact_rows(self, rows: Iterable[Row]) -> Tuple[List[Row], int]:
        """
        Redact every fragment of every row.

        Returns:
            The rewritten rows and how many fragments were redacted
        """
        redacted_rows = []
        redacted_count = 0
        for row in rows:
            fragments = []
            for fragment in row:
                if should_redact(fragment, self.confidence_threshold):
                    redacted_count += 1
                fragments.append(self.redact(fragment))
            redacted_rows.append(row.with_fragments(fragments))

        if redacted_count:
            logger.info(
                f"Redacted {redacted_count} fragment(s) below confidence "
                f"{self.confidence_threshold}"
            )
        return redacted_rows, redacted_count
