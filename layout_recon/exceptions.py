"""
Exception hierarchy for the layout reconstruction pipeline.

The engine itself only raises NoTextFound. InvalidImage and
RecognitionFailed come from the recognizer adapters and are passed
through unchanged by anything that orchestrates a recognizer call.
"""


class LayoutReconError(Exception):
    """Base class for every error raised by this package."""


# ============================================================================
# Engine Errors
# ============================================================================

class ReconstructionError(LayoutReconError):
    """Raised when the engine cannot produce a result."""


class NoTextFound(ReconstructionError):
    """Nothing remains to reconstruct after dropping blank fragments."""

    def __init__(self, message: str = "No text found in the recognized fragments"):
        super().__init__(message)


# ============================================================================
# Recognizer Errors
# ============================================================================

class RecognizerError(LayoutReconError):
    """Raised by a recognizer backend."""


class InvalidImage(RecognizerError):
    """The image could not be read or encoded."""

    def __init__(self, message: str = "Invalid image"):
        super().__init__(message)


class RecognitionFailed(RecognizerError):
    """The recognizer ran but did not return usable output."""

    def __init__(self, message: str = "Text recognition failed"):
        super().__init__(message)
