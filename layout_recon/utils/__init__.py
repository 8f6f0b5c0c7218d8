"""
Utility modules for the layout reconstruction pipeline.
"""

from .fragments import BoundingBox, TextFragment, Row, drop_blank_fragments
from .rows import RowClusterer, cluster_rows, sort_reading_order
from .line_assembly import RowAssembler, assemble_row, spaces_for_gap
from .redaction import ConfidenceRedactor, redact_fragment, redact_text
from .paragraphs import ParagraphSegmenter, segment_paragraphs
from .confidence import aggregate_confidence
from .assembler import LayoutReconstructor, ReconstructionResult, ReconstructionStage, reconstruct
from .recognizers import Recognizer, TesseractRecognizer, RemoteRecognizer, create_recognizer
from .service import TextRecognitionService, describe_error
from .io import load_fragments, load_image, read_json, save_result

__all__ = [
    # Fragments
    "BoundingBox", "TextFragment", "Row", "drop_blank_fragments",
    # Rows
    "RowClusterer", "cluster_rows", "sort_reading_order",
    # Assembly
    "RowAssembler", "assemble_row", "spaces_for_gap",
    # Redaction
    "ConfidenceRedactor", "redact_fragment", "redact_text",
    # Paragraphs
    "ParagraphSegmenter", "segment_paragraphs",
    # Confidence
    "aggregate_confidence",
    # Orchestration
    "LayoutReconstructor", "ReconstructionResult", "ReconstructionStage", "reconstruct",
    # Recognizers
    "Recognizer", "TesseractRecognizer", "RemoteRecognizer", "create_recognizer",
    "TextRecognitionService", "describe_error",
    # IO
    "load_fragments", "load_image", "read_json", "save_result",
]
