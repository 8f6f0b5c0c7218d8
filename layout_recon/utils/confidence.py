"""
Aggregate confidence for a reconstruction result.
"""

from typing import Iterable

import numpy as np


def aggregate_confidence(confidences: Iterable[float]) -> float:
    """Arithmetic mean of the confidences, or 0.0 when there are none."""
    values = list(confidences)
    if not values:
        return 0.0
    return float(np.mean(values))
