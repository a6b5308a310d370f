"""
ImageEditingLib - Core image data models

This module provides the RGBA raster model, target geometry and the
error types shared by every Open Blend stage.
"""

from OB_Libs.ImageEditingLib.image_models import (
    RasterImage,
    RgbaColor,
    TargetGeometry,
    opacity_to_byte,
)
from OB_Libs.ImageEditingLib.errors import (
    OpenBlendError,
    ConfigError,
    DecodeError,
    ResampleError,
    GeometryMismatchError,
    EncodeError,
)

__all__ = [
    "RasterImage",
    "RgbaColor",
    "TargetGeometry",
    "opacity_to_byte",
    "OpenBlendError",
    "ConfigError",
    "DecodeError",
    "ResampleError",
    "GeometryMismatchError",
    "EncodeError",
]
