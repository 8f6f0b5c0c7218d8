#!/usr/bin/env python
"""
Command-line interface for the Layout Reconstruction Pipeline.

Usage:
    layout-recon --input <fragments.json> [options]
    layout-recon --image <page.png> [--engine tesseract|remote] [options]

Examples:
    # Reconstruct text from recognizer output saved as JSON
    layout-recon --input fragments.json

    # Recognize an image locally and save the result
    layout-recon --image page.png --output result.json

    # Stricter redaction
    layout-recon --input fragments.json --confidence-threshold 0.6
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from layout_recon import __version__
from layout_recon.config import CoordinateOrigin, ReconstructionOptions, get_config
from layout_recon.exceptions import LayoutReconError

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("layout_recon")


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    defaults = get_config()
    options = defaults.reconstruction

    parser = argparse.ArgumentParser(
        description="Layout Reconstruction Pipeline - Rebuild layout-faithful text from OCR fragments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Reconstruct saved fragments:
    layout-recon --input fragments.json

  Recognize an image with the remote backend:
    layout-recon --image page.png --engine remote --remote-url https://example.com/api/ocr

  Treat boxes as top-left origin:
    layout-recon --input fragments.json --origin top_left
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input", "-i",
        help="JSON file with recognized fragments"
    )
    source.add_argument(
        "--image",
        help="Image file to recognize before reconstruction"
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the result as JSON to this path"
    )

    parser.add_argument(
        "--engine",
        choices=["tesseract", "remote"],
        default=defaults.recognizer.engine,
        help=f"Recognizer backend for --image (default: {defaults.recognizer.engine})"
    )

    parser.add_argument(
        "--remote-url",
        default=defaults.recognizer.remote_url,
        help="Remote OCR endpoint (default: $LAYOUT_RECON_REMOTE_URL)"
    )

    parser.add_argument(
        "--lang",
        default=defaults.recognizer.tesseract_lang,
        help=f"Tesseract language(s) (default: {defaults.recognizer.tesseract_lang})"
    )

    # Reconstruction options
    parser.add_argument(
        "--line-threshold",
        type=float,
        default=options.line_threshold,
        help=f"Max vertical distance for one row (default: {options.line_threshold})"
    )

    parser.add_argument(
        "--paragraph-threshold",
        type=float,
        default=options.paragraph_threshold,
        help=f"Row gap that starts a paragraph (default: {options.paragraph_threshold})"
    )

    parser.add_argument(
        "--small-gap-threshold",
        type=float,
        default=options.small_gap_threshold,
        help=f"Gaps up to this width become one space (default: {options.small_gap_threshold})"
    )

    parser.add_argument(
        "--space-unit",
        type=float,
        default=options.space_unit,
        help=f"Normalized width of one space (default: {options.space_unit})"
    )

    parser.add_argument(
        "--confidence-threshold",
        type=float,
        default=options.confidence_threshold,
        help=f"Redact fragments below this confidence (default: {options.confidence_threshold})"
    )

    parser.add_argument(
        "--redaction-glyph",
        default=options.redaction_glyph,
        help=f"Placeholder character for redacted text (default: {options.redaction_glyph})"
    )

    parser.add_argument(
        "--origin",
        choices=[o.value for o in CoordinateOrigin],
        default=options.origin.value,
        help=f"Box coordinate origin (default: {options.origin.value})"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-error output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def build_options(args):
    """ReconstructionOptions from parsed arguments."""
    return ReconstructionOptions(
        line_threshold=args.line_threshold,
        paragraph_threshold=args.paragraph_threshold,
        small_gap_threshold=args.small_gap_threshold,
        space_unit=args.space_unit,
        confidence_threshold=args.confidence_threshold,
        redaction_glyph=args.redaction_glyph,
        origin=CoordinateOrigin(args.origin)
    ).validate()


def run_pipeline(args) -> int:
    """Run the layout reconstruction pipeline."""
    from layout_recon.utils.assembler import LayoutReconstructor
    from layout_recon.utils.io import load_fragments, load_image, save_result

    start_time = time.time()
    options = build_options(args)

    if args.input:
        fragments = load_fragments(args.input)
        result = LayoutReconstructor(options).reconstruct(fragments)
    else:
        from layout_recon.utils.recognizers import create_recognizer
        from layout_recon.utils.service import TextRecognitionService

        config = get_config()
        config.recognizer.engine = args.engine
        config.recognizer.remote_url = args.remote_url
        config.recognizer.tesseract_lang = args.lang

        image = load_image(args.image)
        service = TextRecognitionService(create_recognizer(config.recognizer), options)
        result = service.recognize_text(image)

    if args.output:
        path = save_result(result, args.output)
        logger.info(f"Saved JSON: {path}")

    elapsed = time.time() - start_time
    logger.info(
        f"Reconstructed {result.line_count} line(s), confidence "
        f"{result.confidence:.2%}, in {elapsed:.3f}s"
    )

    if not args.quiet:
        print(result.text)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    try:
        return run_pipeline(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (LayoutReconError, ValueError, FileNotFoundError, ImportError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
