"""
Recognizer backends that produce text fragments from an image.

Provides:
- Recognizer, the capability interface every backend implements
- TesseractRecognizer (local)
- RemoteRecognizer (premium HTTP service)
- create_recognizer(), backend selection by name

All backends hand back the same TextFragment shape with normalized,
bottom-left-origin boxes, so the reconstruction engine never needs to
know which one ran.
"""

import base64
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import numpy as np
import requests

from ..config import RecognizerConfig
from ..exceptions import InvalidImage, RecognitionFailed
from .fragments import BoundingBox, TextFragment, fragments_from_records

logger = logging.getLogger(__name__)


def validate_image(image: Any) -> np.ndarray:
    """Return the image if it holds pixels, else raise InvalidImage."""
    if image is None or not isinstance(image, np.ndarray):
        raise InvalidImage("Image must be a numpy array")
    if image.size == 0 or image.ndim < 2:
        raise InvalidImage(f"Image has no pixels (shape {image.shape})")
    return image


# ============================================================================
# Recognizer Interface
# ============================================================================

class Recognizer(ABC):
    """A backend that turns an image into unordered text fragments."""

    name: str = "base"

    @abstractmethod
    def recognize(self, image: np.ndarray) -> List[TextFragment]:
        """
        Recognize text in an image.

        Raises:
            InvalidImage: If the image cannot be used
            RecognitionFailed: If the backend fails
        """


# ============================================================================
# Tesseract Recognizer
# ============================================================================

def fragments_from_tesseract_data(
    data: Dict[str, List[Any]],
    image_width: int,
    image_height: int
) -> List[TextFragment]:
    """
    Convert pytesseract image_to_data output into fragments.

    Entries with a negative confidence (layout rows, not words) or blank
    text are skipped. Confidences are rescaled from 0-100 to 0-1 and the
    top-left pixel boxes are flipped into normalized bottom-left boxes.
    """
    fragments = []
    for i in range(len(data.get("text", []))):
        text = str(data["text"][i]).strip()
        try:
            conf = float(data["conf"][i])
        except (TypeError, ValueError):
            continue

        if conf < 0 or not text:
            continue

        box = BoundingBox.from_pixels(
            left=data["left"][i],
            top=data["top"][i],
            width=data["width"][i],
            height=data["height"][i],
            image_width=image_width,
            image_height=image_height
        )
        fragments.append(TextFragment(text=text, confidence=conf / 100.0, box=box))

    return fragments


class TesseractRecognizer(Recognizer):
    """Local recognition using Tesseract."""

    name = "tesseract"

    def __init__(
        self,
        language: str = "eng",
        config: str = "--oem 3 --psm 11"
    ):
        try:
            import pytesseract
            self.pytesseract = pytesseract

            # Test that tesseract is installed
            pytesseract.get_tesseract_version()

        except Exception as e:
            raise ImportError(
                f"Tesseract not available: {e}\n"
                "Install with: pip install pytesseract\n"
                "Also install Tesseract: https://github.com/tesseract-ocr/tesseract"
            ) from e

        self.language = language
        self.config = config

    def recognize(self, image: np.ndarray) -> List[TextFragment]:
        """Recognize words with Tesseract."""
        image = validate_image(image)
        h, w = image.shape[:2]

        try:
            data = self.pytesseract.image_to_data(
                image,
                lang=self.language,
                config=self.config,
                output_type=self.pytesseract.Output.DICT
            )
        except Exception as e:
            logger.error(f"Tesseract error: {e}")
            raise RecognitionFailed(f"Tesseract error: {e}") from e

        fragments = fragments_from_tesseract_data(data, w, h)
        logger.info(f"Tesseract recognized {len(fragments)} fragments ({w}x{h})")
        return fragments


# ============================================================================
# Remote Recognizer
# ============================================================================

class RemoteRecognizer(Recognizer):
    """
    Premium recognition through an HTTP backend.

    The image is sent as base64 JPEG. The backend answers either with
    {"fragments": [...]} or with plain text (bare, or as {"text": ...}).
    Plain text is already laid out by the backend, so it comes back as a
    single full-page fragment with confidence 1.0.
    """

    name = "remote"

    def __init__(
        self,
        url: str,
        user_id: Optional[str] = None,
        timeout: float = 60.0,
        jpeg_quality: int = 80,
        session: Optional[requests.Session] = None
    ):
        if not url:
            raise ValueError("Remote recognizer needs a URL")
        self.url = url
        self.user_id = user_id
        self.timeout = timeout
        self.jpeg_quality = jpeg_quality
        self.session = session

    def recognize(self, image: np.ndarray) -> List[TextFragment]:
        """Recognize text using the remote backend."""
        body = {"imageBase64": self._encode_image(image)}
        if self.user_id:
            body["userId"] = self.user_id

        logger.info(f"Sending remote OCR request to {self.url} ({len(body['imageBase64'])} base64 chars)")

        post = self.session.post if self.session is not None else requests.post
        try:
            response = post(
                self.url,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Remote OCR request failed: {e}")
            raise RecognitionFailed(f"Remote OCR request failed: {e}") from e

        logger.debug(f"Remote OCR response: HTTP {response.status_code}, {len(response.content)} bytes")
        return self._parse_response(response)

    def _encode_image(self, image: np.ndarray) -> str:
        import cv2

        image = validate_image(image)
        ok, buffer = cv2.imencode(
            ".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality]
        )
        if not ok:
            raise InvalidImage("Could not encode image as JPEG")
        return base64.b64encode(buffer.tobytes()).decode("utf-8")

    def _parse_response(self, response: requests.Response) -> List[TextFragment]:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and isinstance(payload.get("fragments"), list):
            try:
                return fragments_from_records(payload["fragments"])
            except (AttributeError, TypeError) as e:
                raise RecognitionFailed(f"Malformed fragments in response: {e}") from e

        if isinstance(payload, dict) and isinstance(payload.get("text"), str):
            text = payload["text"]
        else:
            # Plain text, or JSON without a usable "text" field: keep the raw body
            if payload is not None:
                logger.warning(f"Remote OCR JSON has no text field ({type(payload).__name__}), using raw body")
            text = response.text

        if not text:
            logger.error("Remote OCR returned an empty body")
            raise RecognitionFailed("Empty response from remote OCR")

        return [
            TextFragment(
                text=text,
                confidence=1.0,
                box=BoundingBox(0.0, 0.0, 1.0, 1.0)
            )
        ]


# ============================================================================
# Backend Selection
# ============================================================================

def create_recognizer(config: Optional[RecognizerConfig] = None) -> Recognizer:
    """Create the recognizer backend named in the configuration."""
    config = config or RecognizerConfig()

    if config.engine == "tesseract":
        return TesseractRecognizer(
            language=config.tesseract_lang,
            config=config.tesseract_config
        )
    elif config.engine == "remote":
        return RemoteRecognizer(
            url=config.remote_url,
            user_id=config.user_id,
            timeout=config.timeout,
            jpeg_quality=config.jpeg_quality
        )
    else:
        raise ValueError(f"Unknown recognizer engine: {config.engine}")
