"""
Open Blend Nodes Library.

This module contains the pipeline stages every image passes through.

Modules:
    image_import_node: Decode and normalize to RGBA with uniform opacity
    resize_node: Resample to the target geometry
    image_layer_node: Running alpha-over compositor
    output_node: Artifact writer with filename templating
"""

from OB_Libs.NodesLib.image_import_node import (
    normalize,
    normalize_file,
    is_supported_format,
)
from OB_Libs.NodesLib.resize_node import (
    ResizeRect,
    ResizeNode,
    get_resize_rect,
    resample,
    resample_bicubic,
    resample_nearest,
)
from OB_Libs.NodesLib.image_layer_node import (
    ImageLayerCompositor,
    alpha_over,
)
from OB_Libs.NodesLib.output_node import (
    OutputNodeConfig,
    OutputNodeHandler,
)

__all__ = [
    "normalize",
    "normalize_file",
    "is_supported_format",
    "ResizeRect",
    "ResizeNode",
    "get_resize_rect",
    "resample",
    "resample_bicubic",
    "resample_nearest",
    "ImageLayerCompositor",
    "alpha_over",
    "OutputNodeConfig",
    "OutputNodeHandler",
]
