"""
Run configuration for the blend pipeline.

Classes:
    PipelineConfig: All settings of one run, with defaults

Functions:
    default_height: Height used when only a width is given
"""

from dataclasses import dataclass, asdict
import math
from pathlib import Path
from typing import Any, Dict, Optional

from OB_Libs.constants import (
    DEFAULT_ALPHA,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_EXPORT_STEPS,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RESAMPLER,
    DEFAULT_SKIP_BAD_FILES,
    DEFAULT_WIDTH,
)
from OB_Libs.ImageEditingLib.errors import ConfigError
from OB_Libs.ImageEditingLib.image_models import TargetGeometry


def default_height(width: int) -> int:
    """Height matching the default 2:3 aspect ratio, rounded half up."""
    return int(math.floor(width * DEFAULT_ASPECT_RATIO + 0.5))


@dataclass
class PipelineConfig:
    """Configuration for one blend run.

    Attributes:
        input_dir: Folder the PNG files are read from
        output_dir: Folder artifacts are written to
        width: Target width in pixels
        height: Target height in pixels (None = round(width * 2 / 3))
        alpha: Opacity applied to every image; clamped to [0, 1] on use
        export_steps: Also write resized layers and partial composites
        skip_bad_files: Log and skip images that fail to decode instead
                        of aborting the run
        resampler: Resampler backend name
    """
    input_dir: str = DEFAULT_INPUT_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    width: int = DEFAULT_WIDTH
    height: Optional[int] = None
    alpha: float = DEFAULT_ALPHA
    export_steps: bool = DEFAULT_EXPORT_STEPS
    skip_bad_files: bool = DEFAULT_SKIP_BAD_FILES
    resampler: str = DEFAULT_RESAMPLER

    def __post_init__(self):
        """Fill derived defaults and validate."""
        self.input_dir = str(self.input_dir)
        self.output_dir = str(self.output_dir)
        self.resampler = str(self.resampler).strip().lower()

        try:
            self.width = int(self.width)
            if self.height is None:
                self.height = default_height(self.width)
            self.height = int(self.height)
            self.alpha = float(self.alpha)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {str(e)}") from e

        if self.width <= 0 or self.height <= 0:
            raise ConfigError(
                f"width and height must be positive, got {self.width}x{self.height}"
            )

        if math.isnan(self.alpha):
            raise ConfigError("alpha must be a number, got NaN")

    @property
    def target_geometry(self) -> TargetGeometry:
        return TargetGeometry(self.width, self.height)

    @property
    def input_path(self) -> Path:
        return Path(self.input_dir)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)

    @classmethod
    def from_args(cls, args: Any) -> "PipelineConfig":
        """Create from an argparse namespace."""
        return cls(
            input_dir=args.input,
            output_dir=args.output,
            width=args.width,
            height=args.height,
            alpha=args.alpha,
            export_steps=args.steps,
            skip_bad_files=args.skip_bad_files,
            resampler=args.resampler,
        )
