"""
Layout Reconstruction Pipeline
==============================

Rebuilds human-readable, layout-faithful text from the unordered text
fragments produced by an OCR engine.

Main components:
- Fragment model (text, normalized box, confidence)
- Row clustering by vertical proximity
- Row assembly with gap-proportional spacing
- Confidence redaction with a placeholder glyph
- Paragraph segmentation on large row gaps
- Aggregate confidence scoring
"""

__version__ = "1.0.0"
__author__ = "Layout Reconstruction Team"

from .config import CoordinateOrigin, ReconstructionOptions
from .exceptions import (
    InvalidImage,
    LayoutReconError,
    NoTextFound,
    RecognitionFailed,
    ReconstructionError,
)
from .utils.assembler import LayoutReconstructor, ReconstructionResult, reconstruct
from .utils.fragments import BoundingBox, TextFragment

__all__ = [
    "reconstruct", "LayoutReconstructor", "ReconstructionResult",
    "ReconstructionOptions", "CoordinateOrigin",
    "BoundingBox", "TextFragment",
    "LayoutReconError", "ReconstructionError", "NoTextFound",
    "InvalidImage", "RecognitionFailed",
]
