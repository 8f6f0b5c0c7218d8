"""
Recognition service: recognizer call followed by layout reconstruction.

The recognizer call is the only step that can block or time out. If it
fails, its error propagates unchanged and the engine is never invoked.
"""

import logging
from typing import Optional

import numpy as np

from ..config import ReconstructionOptions
from ..exceptions import InvalidImage, NoTextFound, RecognitionFailed
from .assembler import LayoutReconstructor, ReconstructionResult
from .recognizers import Recognizer

logger = logging.getLogger(__name__)


ERROR_MESSAGES = {
    InvalidImage: "The image is invalid. Please choose another image.",
    RecognitionFailed: "Text recognition failed. Please try again.",
    NoTextFound: "No text was found. Please choose another image.",
}


def describe_error(error: Exception) -> str:
    """User-facing message for a pipeline error."""
    for error_type, message in ERROR_MESSAGES.items():
        if isinstance(error, error_type):
            return message
    return f"An error occurred: {error}"


class TextRecognitionService:
    """Runs one recognizer and reconstructs the layout of its output."""

    def __init__(
        self,
        recognizer: Recognizer,
        options: Optional[ReconstructionOptions] = None
    ):
        self.recognizer = recognizer
        self.reconstructor = LayoutReconstructor(options)

    def recognize_text(self, image: np.ndarray) -> ReconstructionResult:
        """
        Recognize and reconstruct the text of one image.

        Raises:
            InvalidImage, RecognitionFailed: From the recognizer, unchanged
            NoTextFound: If the recognizer returned no text
        """
        fragments = self.recognizer.recognize(image)
        logger.info(f"{self.recognizer.name} returned {len(fragments)} fragments")
        return self.reconstructor.reconstruct(fragments)
