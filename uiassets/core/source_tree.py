from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Tuple

from .config import BuildConfig, BuildPaths
from .errors import SourceTreeError

_log = logging.getLogger("uiassets.source_tree")


def _run(cwd: Path, args: List[str]) -> Tuple[int, str, str]:
    p = subprocess.run(
        args,
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        env={**os.environ, "GIT_PAGER": "cat", "PAGER": "cat"},
    )
    return p.returncode, (p.stdout or "").strip(), (p.stderr or "").strip()


def is_populated(paths: BuildPaths, cfg: BuildConfig) -> bool:
    return (paths.source_root / cfg.fetch_marker).exists()


def ensure_source_tree(paths: BuildPaths, cfg: BuildConfig) -> bool:
    """
    Fetch the vendored library once. Returns True when a fetch ran.

    An absent tree is expected on a fresh checkout; only a failing fetch
    command is an error.
    """
    if is_populated(paths, cfg):
        return False

    _log.info("Fetching vendored source tree: %s", " ".join(cfg.fetch_command))
    try:
        rc, out, err = _run(paths.project_root, list(cfg.fetch_command))
    except OSError as exc:
        raise SourceTreeError(f"cannot run {cfg.fetch_command[0]}: {exc}") from exc
    if rc != 0:
        raise SourceTreeError(f"{' '.join(cfg.fetch_command)} failed: {err or out}")
    if out:
        _log.debug(out)
    return True
