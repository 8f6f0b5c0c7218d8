"""
Paragraph segmentation.

Rows inside a paragraph sit at a small, fairly regular pitch. A vertical
gap clearly larger than that pitch marks a paragraph or block boundary
and is rendered as one blank line. The paragraph threshold is kept
separate from the line-clustering threshold; one value cannot express
both.
"""

import logging
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)


def segment_paragraphs(
    rows: Iterable[Tuple[float, str]],
    paragraph_threshold: float = 0.05
) -> List[str]:
    """
    Lay out assembled rows as output lines with paragraph breaks.

    Args:
        rows: (representative_y, line_text) pairs in reading order
        paragraph_threshold: Row gap above which a blank line is inserted

    Returns:
        Output lines, blank strings marking paragraph breaks
    """
    lines: List[str] = []
    previous_y = None
    breaks = 0

    for y, text in rows:
        if previous_y is not None and abs(previous_y - y) > paragraph_threshold:
            lines.append("")
            breaks += 1
        lines.append(text)
        previous_y = y

    logger.debug(f"Segmented {len(lines) - breaks} rows with {breaks} paragraph break(s)")
    return lines


class ParagraphSegmenter:
    """Paragraph segmentation bound to one threshold."""

    def __init__(self, paragraph_threshold: float = 0.05):
        self.paragraph_threshold = paragraph_threshold

    def segment(self, rows: Iterable[Tuple[float, str]]) -> List[str]:
        return segment_paragraphs(rows, self.paragraph_threshold)

    def join(self, rows: Iterable[Tuple[float, str]]) -> str:
        return "\n".join(self.segment(rows))
