"""
I/O utilities for the layout reconstruction pipeline.

Handles:
- Fragment JSON loading
- Page image loading
- Result serialization
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import numpy as np

from ..exceptions import InvalidImage
from .fragments import TextFragment, fragments_from_records

logger = logging.getLogger(__name__)


# ============================================================================
# Fragment Loading
# ============================================================================

def read_json(json_path: Union[str, Path]) -> Any:
    """Parse a JSON file, naming the file in any error."""
    json_path = Path(json_path)
    if not json_path.is_file():
        raise FileNotFoundError(f"JSON file not found: {json_path}")

    try:
        return json.loads(json_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {json_path}: {e}") from e


def load_fragments(json_path: Union[str, Path]) -> List[TextFragment]:
    """
    Load recognized fragments from a JSON file.

    The file holds either a list of fragment records or an object with a
    "fragments" list. Each record has text, confidence and a box with
    x, y, width and height.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not JSON or has neither shape
    """
    data = read_json(json_path)

    if isinstance(data, dict):
        data = data.get("fragments")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of fragments in {json_path}")

    fragments = fragments_from_records(data)
    logger.info(f"Loaded {len(fragments)} fragments from {json_path}")
    return fragments


# ============================================================================
# Page Images
# ============================================================================

def load_image(image_path: Union[str, Path]) -> np.ndarray:
    """
    Read a page image as a BGR array for the recognizers.

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidImage: If OpenCV cannot decode the file
    """
    import cv2

    image_path = Path(image_path)
    if not image_path.is_file():
        raise FileNotFoundError(f"Image file not found: {image_path}")

    image = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
    if image is None:
        raise InvalidImage(f"Could not decode image: {image_path}")

    height, width = image.shape[:2]
    logger.debug(f"Loaded page image {image_path.name}: {width}x{height}")
    return image


# ============================================================================
# Result Serialization
# ============================================================================

class ResultJSONEncoder(json.JSONEncoder):
    """JSON encoder for results, fragments and numpy scalars."""

    def default(self, obj):
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        return super().default(obj)


def save_result(result: Union[Dict[str, Any], Any], output_path: Union[str, Path]) -> Path:
    """
    Write a reconstruction result (or its dict) as JSON.

    Redaction glyphs are written as-is rather than \\u escapes.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(result, cls=ResultJSONEncoder, indent=2, ensure_ascii=False)
    output_path.write_text(payload + "\n", encoding="utf-8")

    logger.debug(f"Saved result: {output_path}")
    return output_path
