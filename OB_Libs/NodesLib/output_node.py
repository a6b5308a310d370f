"""
Output Node for Open Blend.

Writes pipeline artifacts (resized layers, partial composites and the
final composite) into the output folder. Filenames are templates with
delimited tags:

Supported tags (case-insensitive):
- {INDEX} or {INDEX:width} - Iteration index (width: 0-pad width)
- {STEM} - Stem of the source file the artifact came from

Classes:
    OutputNodeConfig: Configuration for artifact output
    OutputNodeHandler: Handles tag substitution and file writing
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import re

from OB_Libs.constants import DEFAULT_OUTPUT_DIR, DEFAULT_OUTPUT_FORMAT
from OB_Libs.ImageEditingLib.errors import EncodeError
from OB_Libs.ImageEditingLib.image_models import RasterImage


@dataclass
class OutputNodeConfig:
    """Configuration for artifact output.

    Attributes:
        output_dir: Folder all artifacts are written into
        save_format: Image format passed to Pillow (default: PNG)

    The output folder is created on first write and existing files are
    replaced, so re-runs reuse the same names.
    """
    output_dir: str = DEFAULT_OUTPUT_DIR
    save_format: str = DEFAULT_OUTPUT_FORMAT


class OutputNodeHandler:
    """Handles dynamic filename generation and file I/O for artifacts."""

    # Regex patterns for tag detection
    INDEX_PATTERN = r'\{INDEX(?::([^\}]*))?\}'
    STEM_PATTERN = r'\{STEM\}'

    def __init__(self, config: OutputNodeConfig):
        """Initialize handler with configuration."""
        self.config = config
        self._base_dir = Path(config.output_dir).resolve()

    @property
    def output_dir(self) -> Path:
        return self._base_dir

    def resolve_filename(
        self,
        template: str,
        index: Optional[int] = None,
        stem: Optional[str] = None,
    ) -> Path:
        """
        Resolve a filename template to a path inside the output folder.

        Args:
            template: Filename with optional tags
            index: Value substituted for {INDEX}
            stem: Value substituted for {STEM}

        Returns:
            Absolute path of the artifact

        Raises:
            ValueError: If a tag has no value or the path escapes the
                        output folder
        """
        filename = template
        filename = self._replace_index(filename, index)
        filename = self._replace_stem(filename, stem)

        return self._validate_output_path(filename)

    def _validate_output_path(self, path_str: str) -> Path:
        """
        Reject filenames that would land outside the output folder.

        Raises:
            ValueError: If the path contains '..' or resolves outside output_dir
        """
        path = Path(path_str)

        for part in path.parts:
            if part == "..":
                raise ValueError(
                    f"Path traversal detected: filename contains '..': {path_str}"
                )

        resolved_path = (self._base_dir / path).resolve()
        try:
            resolved_path.relative_to(self._base_dir)
        except ValueError:
            raise ValueError(
                f"Filename '{path_str}' resolves to '{resolved_path}' "
                f"which is outside the output folder '{self._base_dir}'"
            )

        return resolved_path

    def save_image(
        self,
        image: RasterImage,
        template: str,
        index: Optional[int] = None,
        stem: Optional[str] = None,
    ) -> Path:
        """
        Encode an image and write it to the resolved filename.

        Args:
            image: RasterImage to write
            template: Filename template
            index: Value for {INDEX}
            stem: Value for {STEM}

        Returns:
            Path where the image was written

        Raises:
            TypeError: If image is not a RasterImage
            EncodeError: If the name is invalid, the folder cannot be created,
                         or encoding/writing fails
        """
        if not isinstance(image, RasterImage):
            raise TypeError(f"Expected RasterImage, got {type(image)}")

        try:
            output_file = self.resolve_filename(template, index=index, stem=stem)
        except ValueError as e:
            raise EncodeError(f"Invalid output filename '{template}': {str(e)}") from e

        if not output_file.parent.exists():
            try:
                output_file.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise EncodeError(
                    f"Failed to create output folder {output_file.parent}: {str(e)}"
                ) from e

        try:
            image.to_pil().save(output_file, format=self.config.save_format.upper())
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(f"Failed to save image to {output_file}: {str(e)}") from e

        return output_file

    def _replace_index(self, text: str, index: Optional[int]) -> str:
        """Replace {INDEX} tags."""
        def replacer(match):
            if index is None:
                raise ValueError(f"{{INDEX}} tag used without an index in '{text}'")
            width_str = match.group(1) or "0"
            try:
                width = int(width_str)
            except ValueError:
                width = 0

            return str(index).zfill(width)

        return re.sub(self.INDEX_PATTERN, replacer, text, flags=re.IGNORECASE)

    def _replace_stem(self, text: str, stem: Optional[str]) -> str:
        """Replace {STEM} tags."""
        def replacer(match):
            if stem is None:
                raise ValueError(f"{{STEM}} tag used without a source file in '{text}'")
            return stem

        return re.sub(self.STEM_PATTERN, replacer, text, flags=re.IGNORECASE)
