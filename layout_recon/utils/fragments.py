"""
Fragment model for layout reconstruction.

Provides:
- Normalized bounding boxes (clamped, never rejected)
- TextFragment, one recognized text span with its confidence
- Row, a cluster of fragments on one text line

Coordinates are fractions of the image size. The default convention is
a bottom-left origin (y grows upward); see config.CoordinateOrigin.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def _clamp(value: Any, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a value into [low, high]; NaN and garbage become low."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return low
    if math.isnan(value):
        return low
    return min(max(value, low), high)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in normalized coordinates."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        # Recognizer geometry is noisy: clamp instead of failing
        object.__setattr__(self, "x", _clamp(self.x))
        object.__setattr__(self, "y", _clamp(self.y))
        object.__setattr__(self, "width", _clamp(self.width))
        object.__setattr__(self, "height", _clamp(self.height))

    @property
    def end_x(self) -> float:
        return self.x + self.width

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundingBox":
        return cls(
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            width=data.get("width", data.get("w", 0.0)),
            height=data.get("height", data.get("h", 0.0)),
        )

    @classmethod
    def from_pixels(
        cls,
        left: float,
        top: float,
        width: float,
        height: float,
        image_width: int,
        image_height: int
    ) -> "BoundingBox":
        """
        Convert a top-left-origin pixel box into a normalized bottom-left box.

        The returned y is the bottom edge of the box measured upward from
        the bottom of the image.
        """
        if image_width <= 0 or image_height <= 0:
            return cls(0.0, 0.0, 0.0, 0.0)
        bottom = top + height
        return cls(
            x=left / image_width,
            y=1.0 - bottom / image_height,
            width=width / image_width,
            height=height / image_height,
        )


@dataclass(frozen=True)
class TextFragment:
    """One recognized text unit: text, confidence and box."""
    text: str
    confidence: float
    box: BoundingBox

    def __post_init__(self):
        object.__setattr__(self, "text", "" if self.text is None else str(self.text))
        object.__setattr__(self, "confidence", _clamp(self.confidence))
        if not isinstance(self.box, BoundingBox):
            object.__setattr__(self, "box", BoundingBox.from_dict(self.box))

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def x(self) -> float:
        return self.box.x

    @property
    def y(self) -> float:
        return self.box.y

    def with_text(self, text: str) -> "TextFragment":
        """Copy of this fragment carrying different display text."""
        return replace(self, text=text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "box": self.box.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextFragment":
        """
        Build a fragment from a recognizer record.

        Accepts the box under "box" or "boundingBox", or flat x/y/width/height keys.
        """
        box = data.get("box", data.get("boundingBox"))
        if box is None:
            box = data
        return cls(
            text=data.get("text", ""),
            confidence=data.get("confidence", 0.0),
            box=BoundingBox.from_dict(box),
        )


@dataclass(frozen=True)
class Row:
    """Fragments judged to lie on one horizontal text line."""
    fragments: Tuple[TextFragment, ...]
    y: float

    def __post_init__(self):
        if not self.fragments:
            raise ValueError("A row needs at least one fragment")

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self):
        return iter(self.fragments)

    @classmethod
    def from_fragments(cls, fragments: Sequence[TextFragment]) -> "Row":
        """Create a row tagged with the mean y of its fragments."""
        fragments = tuple(fragments)
        y = float(np.mean([f.y for f in fragments])) if fragments else 0.0
        return cls(fragments=fragments, y=y)

    def with_fragments(self, fragments: Iterable[TextFragment]) -> "Row":
        """Same row position, different fragment contents."""
        return Row(fragments=tuple(fragments), y=self.y)


# ============================================================================
# Helpers
# ============================================================================

def drop_blank_fragments(fragments: Iterable[TextFragment]) -> List[TextFragment]:
    """Remove fragments whose text is empty or whitespace only."""
    kept = []
    dropped = 0
    for fragment in fragments:
        if fragment.is_blank:
            dropped += 1
            continue
        kept.append(fragment)

    if dropped:
        logger.debug(f"Dropped {dropped} blank fragment(s)")
    return kept


def fragments_from_records(records: Iterable[Dict[str, Any]]) -> List[TextFragment]:
    """Convert raw recognizer records into fragments."""
    return [TextFragment.from_dict(record) for record in records]
