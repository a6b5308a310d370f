"""
Image Import Node for Open Blend.

This module decodes source images and normalizes them to RGBA with a
uniform opacity before they enter the resampler.

Functions:
    normalize: Decode encoded bytes into an RGBA RasterImage with fixed alpha
    normalize_file: Read a file from disk and normalize it
    is_supported_format: Check a path's extension
"""

import io
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from OB_Libs.constants import (
    ALPHA_CHANNEL_INDEX,
    RGBA_MODE,
    SUPPORTED_IMAGE_EXTENSIONS,
)
from OB_Libs.ImageEditingLib.errors import DecodeError
from OB_Libs.ImageEditingLib.image_models import RasterImage, opacity_to_byte


def is_supported_format(file_path: Path) -> bool:
    """
    Check if a file path has a supported format.

    Args:
        file_path: Path to the file

    Returns:
        True if the file extension is supported (case-insensitive)
    """
    return Path(file_path).suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS


def normalize(source_bytes: bytes, opacity: float, name: str = "<bytes>") -> RasterImage:
    """
    Decode an encoded image and force it to RGBA with a uniform alpha.

    Images without an alpha channel are first up-converted with opaque
    alpha; then every alpha byte is overwritten with the 8-bit value of
    ``opacity``, discarding whatever alpha the source carried.

    Args:
        source_bytes: Raw bytes of an encoded image file
        opacity: Opacity in [0, 1]; values above 1 or below 0 are clamped
        name: Source name used in error messages

    Returns:
        Freshly allocated RasterImage

    Raises:
        DecodeError: If the bytes cannot be decoded
    """
    alpha_byte = opacity_to_byte(opacity)

    try:
        with Image.open(io.BytesIO(source_bytes)) as decoded:
            decoded.load()
            rgba = decoded.convert(RGBA_MODE)
    except UnidentifiedImageError as e:
        raise DecodeError(name, "not a recognized image format") from e
    except Exception as e:
        raise DecodeError(name, str(e)) from e

    pixels = np.array(rgba, dtype=np.uint8)
    pixels[:, :, ALPHA_CHANNEL_INDEX] = alpha_byte
    return RasterImage(pixels)


def normalize_file(file_path: Union[str, Path], opacity: float) -> RasterImage:
    """
    Read an image file from disk and normalize it.

    Args:
        file_path: Path to the image file
        opacity: Opacity in [0, 1]

    Returns:
        Normalized RasterImage

    Raises:
        DecodeError: If the file is missing, unreadable or not an image
    """
    path = Path(file_path)
    try:
        source_bytes = path.read_bytes()
    except OSError as e:
        raise DecodeError(path, str(e)) from e

    return normalize(source_bytes, opacity, name=str(path))
