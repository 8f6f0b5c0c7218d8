"""
Row assembly: turns one row of fragments into one line of text.

Horizontal gaps between fragments are mapped to a proportional run of
spaces, so indentation and column alignment inside a line survive
instead of collapsing to a single space.
"""

import logging
import math
from typing import Iterable, List, Union

from .fragments import Row, TextFragment

logger = logging.getLogger(__name__)


def horizontal_order_key(fragment: TextFragment):
    return (fragment.x, fragment.box.width, fragment.text, fragment.confidence)


def spaces_for_gap(
    gap: float,
    small_gap_threshold: float = 0.01,
    space_unit: float = 0.015
) -> int:
    """
    Number of spaces standing in for a horizontal gap.

    Gaps at or below the small-gap threshold (including overlaps, which are
    negative) get exactly one space. Larger gaps get round(gap / space_unit)
    spaces, rounded half up and never fewer than one.
    """
    if gap <= small_gap_threshold:
        return 1
    return max(1, int(math.floor(gap / space_unit + 0.5)))


def assemble_row(
    row: Union[Row, Iterable[TextFragment]],
    small_gap_threshold: float = 0.01,
    space_unit: float = 0.015
) -> str:
    """
    Join a row's fragments left to right with gap-proportional spacing.

    Args:
        row: A Row or any iterable of fragments on one line
        small_gap_threshold: Gaps up to this width become one space
        space_unit: Normalized width of one space character

    Returns:
        The assembled line, with no leading spaces
    """
    fragments = sorted(row, key=horizontal_order_key)

    parts: List[str] = []
    last_end_x = 0.0
    for index, fragment in enumerate(fragments):
        if index > 0:
            gap = fragment.x - last_end_x
            parts.append(" " * spaces_for_gap(gap, small_gap_threshold, space_unit))
        parts.append(fragment.text)
        last_end_x = fragment.box.end_x

    return "".join(parts)


class RowAssembler:
    """Row assembly bound to one set of spacing constants."""

    def __init__(self, small_gap_threshold: float = 0.01, space_unit: float = 0.015):
        if space_unit <= 0:
            raise ValueError(f"space_unit must be > 0, got {space_unit}")
        self.small_gap_threshold = small_gap_threshold
        self.space_unit = space_unit

    def assemble(self, row: Union[Row, Iterable[TextFragment]]) -> str:
        return assemble_row(row, self.small_gap_threshold, self.space_unit)

    def assemble_all(self, rows: Iterable[Row]) -> List[str]:
        lines = [self.assemble(row) for row in rows]
        logger.debug(f"Assembled {len(lines)} lines")
        return lines
