"""
Layout reconstruction orchestrator.

Provides:
- ReconstructionResult, the value handed back to callers
- LayoutReconstructor, which runs cluster -> redact -> assemble -> segment -> aggregate
- reconstruct(), a functional entry point

A reconstruction pass is a pure function of its fragments and options.
Nothing is kept between calls, so independent calls may run concurrently.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..config import ReconstructionOptions
from ..exceptions import NoTextFound
from .confidence import aggregate_confidence
from .fragments import Row, TextFragment, drop_blank_fragments
from .line_assembly import RowAssembler
from .paragraphs import ParagraphSegmenter
from .redaction import ConfidenceRedactor
from .rows import RowClusterer

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

class ReconstructionStage(Enum):
    """Stages of one reconstruction pass, in order."""
    IDLE = "idle"
    FRAGMENTS_RECEIVED = "fragments_received"
    CLUSTERED = "clustered"
    ASSEMBLED = "assembled"
    SEGMENTED = "segmented"
    DONE = "done"


@dataclass(frozen=True)
class ReconstructionResult:
    """Reconstructed text and its aggregate confidence."""
    text: str
    confidence: float
    fragment_count: int = 0
    line_count: int = 0
    redacted_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": round(self.confidence, 4),
            "fragment_count": self.fragment_count,
            "line_count": self.line_count,
            "redacted_count": self.redacted_count
        }


# ============================================================================
# Layout Reconstructor
# ============================================================================

class LayoutReconstructor:
    """
    Rebuilds layout-faithful text from unordered recognized fragments.

    Coordinates:
    - Row clustering
    - Confidence redaction
    - Row assembly
    - Paragraph segmentation
    - Confidence aggregation
    """

    def __init__(self, options: Optional[ReconstructionOptions] = None):
        self.options = (options or ReconstructionOptions()).validate()

        self.clusterer = RowClusterer(
            line_threshold=self.options.line_threshold,
            origin=self.options.origin
        )
        self.redactor = ConfidenceRedactor(
            confidence_threshold=self.options.confidence_threshold,
            glyph=self.options.redaction_glyph
        )
        self.row_assembler = RowAssembler(
            small_gap_threshold=self.options.small_gap_threshold,
            space_unit=self.options.space_unit
        )
        self.segmenter = ParagraphSegmenter(
            paragraph_threshold=self.options.paragraph_threshold
        )

    def reconstruct(self, fragments: Iterable[TextFragment]) -> ReconstructionResult:
        """
        Reconstruct text from a set of fragments.

        Args:
            fragments: Recognized fragments in any order

        Returns:
            ReconstructionResult with the text and mean confidence

        Raises:
            NoTextFound: If no fragment carries any text
        """
        stage = ReconstructionStage.IDLE

        kept = drop_blank_fragments(fragments)
        stage = self._advance(stage, ReconstructionStage.FRAGMENTS_RECEIVED)
        if not kept:
            logger.info("No text to reconstruct")
            raise NoTextFound()

        rows = self.clusterer.cluster(kept)
        stage = self._advance(stage, ReconstructionStage.CLUSTERED)

        # Confidences are taken before redaction and in reading order
        confidences = [f.confidence for row in rows for f in row]
        redacted_rows, redacted_count = self.redactor.redact_rows(rows)
        lines = self.row_assembler.assemble_all(redacted_rows)
        stage = self._advance(stage, ReconstructionStage.ASSEMBLED)

        output_lines = self.segmenter.segment(
            (row.y, line) for row, line in zip(redacted_rows, lines)
        )
        stage = self._advance(stage, ReconstructionStage.SEGMENTED)

        result = ReconstructionResult(
            text="\n".join(output_lines),
            confidence=aggregate_confidence(confidences),
            fragment_count=len(kept),
            line_count=len(output_lines),
            redacted_count=redacted_count
        )
        self._advance(stage, ReconstructionStage.DONE)

        logger.info(
            f"Reconstructed {result.fragment_count} fragments into "
            f"{len(rows)} rows (confidence {result.confidence:.3f})"
        )
        return result

    def _advance(
        self,
        current: ReconstructionStage,
        target: ReconstructionStage
    ) -> ReconstructionStage:
        logger.debug(f"Stage: {current.value} -> {target.value}")
        return target

    def rows(self, fragments: Iterable[TextFragment]) -> List[Row]:
        """Clustered rows for inspection and debugging, before redaction."""
        return self.clusterer.cluster(drop_blank_fragments(fragments))


def reconstruct(
    fragments: Iterable[TextFragment],
    options: Optional[ReconstructionOptions] = None
) -> ReconstructionResult:
    """Reconstruct text from fragments with the given (or default) options."""
    return LayoutReconstructor(options).reconstruct(fragments)
