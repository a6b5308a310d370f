"""
Blend Pipeline Driver.

Runs every PNG of the input folder, in sorted path order, through
normalize -> resample -> composite, and writes the artifacts:

- step1_resize_<i>.png     each resized layer (steps mode only)
- step2_combined_<i>.png   composite after blending layer i, i >= 1 (steps mode only)
- step3_final.png          composite after the last layer (always)

The first layer only seeds the composite, so it never gets a combined
artifact. Images are handled strictly one after another; the only state
kept between iterations is the compositor's accumulator.

Classes:
    PipelineResult: Summary of one run

Functions:
    run_pipeline: Execute a run for a PipelineConfig
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import logging

from OB_Libs.constants import COMBINED_STEP_TEMPLATE, FINAL_TEMPLATE, RESIZE_STEP_TEMPLATE
from OB_Libs.ImageEditingLib.errors import DecodeError, EncodeError
from OB_Libs.ImageEditingLib.image_models import RasterImage
from OB_Libs.NodesLib.image_import_node import normalize_file
from OB_Libs.NodesLib.image_layer_node import ImageLayerCompositor
from OB_Libs.NodesLib.output_node import OutputNodeConfig, OutputNodeHandler
from OB_Libs.NodesLib.resize_node import ResizeNode
from OB_Libs.PipelineLib.directory_lister import list_image_files
from OB_Libs.PipelineLib.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Summary of one blend run.

    Attributes:
        processed: Source files blended into the composite, in order
        skipped: Source files skipped because they failed to decode
        written: Every artifact written, in order
        final_path: Path of the final composite (None if nothing was blended)
    """
    processed: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    final_path: Optional[Path] = None

    @property
    def image_count(self) -> int:
        return len(self.processed)


def _export(
    handler: OutputNodeHandler,
    image: RasterImage,
    template: str,
    index: int,
    stem: str,
    result: PipelineResult,
) -> None:
    """Write an intermediate artifact; failures are logged, not raised."""
    try:
        path = handler.save_image(image, template, index=index, stem=stem)
    except EncodeError as e:
        logger.warning(f"Could not write intermediate artifact: {e}")
        return

    logger.info(f"  exporting: {path.name}")
    result.written.append(path)


def run_pipeline(
    config: PipelineConfig,
    handler: Optional[OutputNodeHandler] = None,
) -> PipelineResult:
    """
    Blend all images of ``config.input_dir`` into one composite.

    Args:
        config: Run configuration
        handler: Artifact writer (default: one writing to config.output_dir)

    Returns:
        PipelineResult describing what was processed and written

    Raises:
        ConfigError: If the input folder cannot be opened
        DecodeError: If an image fails to decode and skip_bad_files is off
        ResampleError: If resampling fails
        GeometryMismatchError: If a resampled image has the wrong size
        EncodeError: If the final composite cannot be written
    """
    images = list_image_files(config.input_path)
    result = PipelineResult()

    logger.info(f"number of images: {len(images)}")
    if not images:
        logger.warning(f"No PNG images found in {config.input_path}, nothing to blend")
        return result

    if handler is None:
        handler = OutputNodeHandler(OutputNodeConfig(output_dir=config.output_dir))

    geometry = config.target_geometry
    resizer = ResizeNode(geometry, config.resampler)
    compositor = ImageLayerCompositor(geometry)

    logger.info("Start...")
    for index, file_path in enumerate(images):
        logger.info(f"{file_path}")

        try:
            normalized = normalize_file(file_path, config.alpha)
        except DecodeError as e:
            if not config.skip_bad_files:
                raise
            logger.warning(f"Skipping {file_path}: {e}")
            result.skipped.append(file_path)
            continue

        resized = resizer.run(normalized, name=str(file_path))
        if config.export_steps:
            _export(handler, resized, RESIZE_STEP_TEMPLATE, index, file_path.stem, result)

        blended = compositor.is_seeded
        composite = compositor.feed(resized)
        result.processed.append(file_path)

        if blended and config.export_steps:
            _export(handler, composite, COMBINED_STEP_TEMPLATE, index, file_path.stem, result)

    final = compositor.current()
    if final is None:
        logger.warning("Every image was skipped, no composite written")
        return result

    result.final_path = handler.save_image(final, FINAL_TEMPLATE)
    result.written.append(result.final_path)
    logger.info(f"  exporting: {result.final_path.name}")
    logger.info("End.")
    return result
