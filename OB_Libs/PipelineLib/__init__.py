"""
PipelineLib - Run configuration and execution

This module scans the input folder, holds the run configuration and the
resampler backend registry, and drives the blend loop.
"""

from OB_Libs.PipelineLib.backend_registry import (
    ResamplerRegistry,
    get_default_registry,
    register_default_resamplers,
)
from OB_Libs.PipelineLib.directory_lister import list_image_files
from OB_Libs.PipelineLib.pipeline_config import PipelineConfig, default_height
from OB_Libs.PipelineLib.pipeline_driver import PipelineResult, run_pipeline

__all__ = [
    "ResamplerRegistry",
    "get_default_registry",
    "register_default_resamplers",
    "list_image_files",
    "PipelineConfig",
    "default_height",
    "PipelineResult",
    "run_pipeline",
]
