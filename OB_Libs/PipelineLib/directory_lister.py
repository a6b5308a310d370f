"""
Input folder scanning.

Functions:
    list_image_files: Sorted list of supported image files in a folder
"""

from pathlib import Path
from typing import List, Union
import logging
import os

from OB_Libs.ImageEditingLib.errors import ConfigError
from OB_Libs.NodesLib.image_import_node import is_supported_format

logger = logging.getLogger(__name__)


def list_image_files(input_dir: Union[str, Path]) -> List[Path]:
    """
    List the regular files in a folder with a supported extension.

    Only direct children are considered; symlinks and sub-folders are
    skipped. The result is sorted lexicographically by path, which is the
    order images are blended in.

    Args:
        input_dir: Folder to scan

    Returns:
        Sorted list of file paths

    Raises:
        ConfigError: If input_dir is not an openable directory
    """
    folder = Path(input_dir)
    if not folder.is_dir():
        raise ConfigError(f"Could not open directory {folder}")

    images = []
    try:
        with os.scandir(folder) as entries:
            for entry in entries:
                if not entry.is_file(follow_symlinks=False):
                    continue
                path = folder / entry.name
                if is_supported_format(path):
                    images.append(path)
    except OSError as e:
        raise ConfigError(f"Could not open directory {folder}: {str(e)}") from e

    images.sort(key=str)
    logger.debug(f"Found {len(images)} image(s) in {folder}")
    return images
