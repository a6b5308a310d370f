"""
Constants and configuration values for Open Blend.

This module centralizes all constant values, default settings and
artifact naming templates used throughout the application.
"""

# Command-line defaults
DEFAULT_INPUT_DIR = "./data/flags"
DEFAULT_OUTPUT_DIR = "./results/"
DEFAULT_WIDTH = 1000
DEFAULT_ASPECT_RATIO = 2.0 / 3.0  # most common flag ratio
DEFAULT_ALPHA = 0.1
DEFAULT_EXPORT_STEPS = False
DEFAULT_SKIP_BAD_FILES = False

# Pixel format
CHANNEL_COUNT = 4
MAX_CHANNEL_VALUE = 255
ALPHA_CHANNEL_INDEX = 3
RGBA_MODE = "RGBA"

# Supported input formats
SUPPORTED_IMAGE_EXTENSIONS = {".png"}

# Resampler backends
RESAMPLER_BICUBIC = "bicubic"
RESAMPLER_NEAREST = "nearest"
DEFAULT_RESAMPLER = RESAMPLER_BICUBIC

# Artifact naming
DEFAULT_OUTPUT_FORMAT = "PNG"
RESIZE_STEP_TEMPLATE = "step1_resize_{INDEX}.png"
COMBINED_STEP_TEMPLATE = "step2_combined_{INDEX}.png"
FINAL_TEMPLATE = "step3_final.png"

# Logging
LOG_FORMAT = "%(levelname)s: %(message)s"
