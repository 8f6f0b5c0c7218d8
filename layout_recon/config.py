"""
Configuration and constants for the layout reconstruction pipeline.

This module provides:
- Reconstruction thresholds (line, paragraph, spacing, redaction)
- The recognizer coordinate convention
- Recognizer backend settings
- Environment overrides
"""

import os
import math
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

logger = logging.getLogger("layout_recon")


# ============================================================================
# Coordinate Convention
# ============================================================================

class CoordinateOrigin(Enum):
    """
    Where normalized box coordinates start.

    BOTTOM_LEFT is the convention of the recognizers this engine was built
    for: y grows upward, so reading order runs from high y to low y.
    TOP_LEFT is the usual image convention: y grows downward.
    """
    BOTTOM_LEFT = "bottom_left"
    TOP_LEFT = "top_left"


DEFAULT_ORIGIN = CoordinateOrigin.BOTTOM_LEFT
DEFAULT_REDACTION_GLYPH = "□"  # WHITE SQUARE


# ============================================================================
# Reconstruction Configuration
# ============================================================================

@dataclass
class ReconstructionOptions:
    """Thresholds and policy for one reconstruction pass."""
    # Max vertical distance between fragments on the same row
    line_threshold: float = 0.02
    # Vertical gap between rows that starts a new paragraph
    paragraph_threshold: float = 0.05
    # Gaps at or below this become a single space
    small_gap_threshold: float = 0.01
    # Approximate normalized width of one space character
    space_unit: float = 0.015
    # Fragments below this confidence are redacted
    confidence_threshold: float = 0.3
    redaction_glyph: str = DEFAULT_REDACTION_GLYPH
    origin: CoordinateOrigin = DEFAULT_ORIGIN

    def validate(self) -> "ReconstructionOptions":
        """
        Check option values, raising ValueError on the first bad one.

        Returns a validated copy with the origin converted to a
        CoordinateOrigin; the instance itself is left unchanged.
        """
        for name in ("line_threshold", "paragraph_threshold", "small_gap_threshold"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite value >= 0, got {value}")
        if not math.isfinite(self.space_unit) or self.space_unit <= 0:
            raise ValueError(f"space_unit must be a finite value > 0, got {self.space_unit}")
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(
                f"confidence_threshold must be within [0, 1], got {self.confidence_threshold}"
            )
        if len(self.redaction_glyph) != 1:
            raise ValueError(
                f"redaction_glyph must be a single character, got {self.redaction_glyph!r}"
            )
        return replace(self, origin=CoordinateOrigin(self.origin))


# ============================================================================
# Recognizer Configuration
# ============================================================================

@dataclass
class RecognizerConfig:
    """Recognizer backend configuration."""
    # Backend: tesseract (local) or remote (premium HTTP service)
    engine: str = "tesseract"
    # Tesseract configuration
    tesseract_lang: str = "eng"
    tesseract_config: str = "--oem 3 --psm 11"
    # Remote service
    remote_url: Optional[str] = None
    user_id: Optional[str] = None
    timeout: float = 60.0
    jpeg_quality: int = 80


@dataclass
class PipelineConfig:
    """Main pipeline configuration."""
    reconstruction: ReconstructionOptions = field(default_factory=ReconstructionOptions)
    recognizer: RecognizerConfig = field(default_factory=RecognizerConfig)

    debug_mode: bool = False


# ============================================================================
# Default Configuration Instance
# ============================================================================

def get_config() -> PipelineConfig:
    """Get the default pipeline configuration with environment overrides."""
    config = PipelineConfig()

    if os.environ.get("LAYOUT_RECON_DEBUG", "").lower() == "true":
        config.debug_mode = True

    engine = os.environ.get("LAYOUT_RECON_ENGINE")
    if engine:
        config.recognizer.engine = engine.lower()

    config.recognizer.remote_url = os.environ.get("LAYOUT_RECON_REMOTE_URL")
    config.recognizer.user_id = os.environ.get("LAYOUT_RECON_USER_ID")

    threshold = os.environ.get("LAYOUT_RECON_CONFIDENCE_THRESHOLD")
    if threshold:
        try:
            config.reconstruction.confidence_threshold = float(threshold)
        except ValueError:
            logger.warning(f"Ignoring invalid LAYOUT_RECON_CONFIDENCE_THRESHOLD: {threshold!r}")

    return config
