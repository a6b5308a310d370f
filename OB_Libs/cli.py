"""
Command-line entry point for Open Blend.

Usage:
    open-blend [--input DIR] [--output DIR] [--width W] [--height H]
               [--alpha A] [--steps] [--skip-bad-files]
               [--resampler {bicubic,nearest}] [--verbose]
"""

import argparse
import logging
import sys
from typing import List, Optional

from OB_Libs.constants import (
    DEFAULT_ALPHA,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RESAMPLER,
    DEFAULT_WIDTH,
    LOG_FORMAT,
    RESAMPLER_BICUBIC,
    RESAMPLER_NEAREST,
)
from OB_Libs.ImageEditingLib.errors import OpenBlendError
from OB_Libs.PipelineLib.pipeline_config import PipelineConfig
from OB_Libs.PipelineLib.pipeline_driver import run_pipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="open-blend",
        description="Load all PNGs in a folder, resize them and blend them "
                    "into one image with a uniform opacity.",
    )
    parser.add_argument(
        '--input',
        type=str,
        default=DEFAULT_INPUT_DIR,
        help=f'Folder with the PNG images (default: {DEFAULT_INPUT_DIR}).'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f'Folder the results are written to (default: {DEFAULT_OUTPUT_DIR}).'
    )
    parser.add_argument(
        '--width',
        type=int,
        default=DEFAULT_WIDTH,
        help=f'Target width in pixels (default: {DEFAULT_WIDTH}).'
    )
    parser.add_argument(
        '--height',
        type=int,
        default=None,
        help='Target height in pixels (default: 2/3 of the width).'
    )
    parser.add_argument(
        '--alpha',
        type=float,
        default=DEFAULT_ALPHA,
        help=f'Opacity of every image, 0 to 1 (default: {DEFAULT_ALPHA}).'
    )
    parser.add_argument(
        '--steps',
        action='store_true',
        help='Also export every resized image and partial composite.'
    )
    parser.add_argument(
        '--skip-bad-files',
        action='store_true',
        help='Skip images that fail to decode instead of aborting.'
    )
    parser.add_argument(
        '--resampler',
        type=str,
        default=DEFAULT_RESAMPLER,
        choices=[RESAMPLER_BICUBIC, RESAMPLER_NEAREST],
        help=f'Interpolation used for resizing (default: {DEFAULT_RESAMPLER}).'
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='Enable debug logging.'
    )
    return parser


def setup_logging(verbose: bool = False) -> None:
    """
    Sets up the logging configuration.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the blend pipeline from command-line arguments.

    Returns:
        Process exit status (0 on success, 1 on any pipeline error)
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = PipelineConfig.from_args(args)
    except OpenBlendError as e:
        logger.error(str(e))
        return 1

    logger.info(f"input folder: {config.input_dir}")
    logger.info(f"width: {config.width}")
    logger.info(f"height: {config.height}")
    logger.info(f"alpha: {config.alpha}")
    logger.info(f"output folder: {config.output_dir}")

    try:
        run_pipeline(config)
    except OpenBlendError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
