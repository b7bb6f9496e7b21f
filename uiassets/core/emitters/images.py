from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from ..config import BuildPaths

_log = logging.getLogger("uiassets.images")


def copy_images(paths: BuildPaths, pattern: str = "*.png") -> List[Path]:
    """Copy the theme images, subdirectories included, byte for byte."""
    source_dir = paths.image_source_dir
    target_dir = paths.image_target_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    _log.info("Copying images")

    copied: List[Path] = []
    for src in sorted(source_dir.rglob(pattern)):
        if not src.is_file():
            continue
        dest = target_dir / src.relative_to(source_dir)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(src, dest)
        copied.append(dest)
    _log.debug("Copied %d images to %s", len(copied), target_dir)
    return copied
