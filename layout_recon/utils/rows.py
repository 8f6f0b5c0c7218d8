"""
Row clustering for layout reconstruction.

Groups fragments into horizontal text lines using vertical proximity.
The walk compares each fragment with the previous one, so a slowly
drifting baseline (skewed scans) stays on one row.
"""

import logging
from typing import Iterable, List, Tuple

from ..config import CoordinateOrigin, DEFAULT_ORIGIN
from .fragments import Row, TextFragment

logger = logging.getLogger(__name__)


def reading_order_key(
    fragment: TextFragment,
    origin: CoordinateOrigin = DEFAULT_ORIGIN
) -> Tuple:
    """
    Sort key placing fragments top-to-bottom, then left-to-right.

    The trailing fields only break exact ties so that the order is total
    and independent of how the fragments arrived.
    """
    if origin == CoordinateOrigin.BOTTOM_LEFT:
        vertical = -fragment.y
    else:
        vertical = fragment.y
    return (
        vertical,
        fragment.x,
        fragment.box.width,
        fragment.box.height,
        fragment.text,
        fragment.confidence
    )


def sort_reading_order(
    fragments: Iterable[TextFragment],
    origin: CoordinateOrigin = DEFAULT_ORIGIN
) -> List[TextFragment]:
    """Return fragments in top-to-bottom, left-to-right order."""
    return sorted(fragments, key=lambda f: reading_order_key(f, origin))


def cluster_rows(
    fragments: Iterable[TextFragment],
    line_threshold: float = 0.02,
    origin: CoordinateOrigin = DEFAULT_ORIGIN
) -> List[Row]:
    """
    Cluster fragments into rows, top row first.

    Args:
        fragments: Fragments in any order
        line_threshold: Max |dy| between consecutive fragments on one row
        origin: Coordinate convention of the fragment boxes

    Returns:
        Rows in reading order; empty input gives an empty list
    """
    ordered = sort_reading_order(fragments, origin)
    if not ordered:
        return []

    rows: List[Row] = []
    current: List[TextFragment] = []
    last_y = None

    for fragment in ordered:
        if last_y is not None and abs(fragment.y - last_y) > line_threshold:
            rows.append(Row.from_fragments(current))
            current = []
        current.append(fragment)
        last_y = fragment.y

    if current:
        rows.append(Row.from_fragments(current))

    logger.debug(f"Clustered {len(ordered)} fragments into {len(rows)} rows")
    return rows


class RowClusterer:
    """Row clustering bound to one threshold and coordinate convention."""

    def __init__(
        self,
        line_threshold: float = 0.02,
        origin: CoordinateOrigin = DEFAULT_ORIGIN
    ):
        self.line_threshold = line_threshold
        self.origin = origin

    def cluster(self, fragments: Iterable[TextFragment]) -> List[Row]:
        return cluster_rows(fragments, self.line_threshold, self.origin)
