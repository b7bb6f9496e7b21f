"""
Build configuration.

Every naming constant of the asset build lives on ``BuildConfig``. Defaults
reproduce the jQuery UI layout; an optional override file in the project
root can change any of them without code changes.

Override file format (YAML or JSON):
    source_dir: third_party/jquery-ui
    output_dir: build/assets
    image_namespace: jquery-ui

Default search path: <project_root>/uiassets.yaml, then uiassets.json.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import AssetBuildError

_log = logging.getLogger("uiassets.config")

DEFAULT_CONFIG_NAMES = ("uiassets.yaml", "uiassets.yml", "uiassets.json")


class BuildConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # layout, relative to the project root unless absolute
    source_dir: str = "jquery-ui"
    output_dir: str = "vendor/assets"
    clean_dir: str = "vendor"

    # naming conventions of the vendored library
    version_token: str = "@VERSION"
    root_dependency: str = "jquery"
    root_file: str = "jquery.js"
    core_module: str = "jquery.ui.core.js"
    image_namespace: str = "jquery-ui"
    template_extension: str = ".erb"

    # one-time fetch of the vendored tree
    fetch_command: List[str] = Field(default_factory=lambda: ["git", "submodule", "update", "--init"], min_length=1)
    fetch_marker: str = "README.md"

    def resolve(self, project_root: Path) -> "BuildPaths":
        root = Path(project_root).resolve()
        source = _under(root, self.source_dir)
        output = _under(root, self.output_dir)
        clean = _under(root, self.clean_dir)
        return BuildPaths(
            project_root=root,
            source_root=source,
            output_root=output,
            clean_root=clean,
            js_source_dir=source / "ui",
            i18n_source_dir=source / "ui" / "i18n",
            css_source_dir=source / "themes" / "base",
            image_source_dir=source / "themes" / "base" / "images",
            js_target_dir=output / "javascripts",
            css_target_dir=output / "stylesheets",
            image_target_dir=output / "images" / self.image_namespace,
            asset_manifest_path=clean / "asset_manifest.json",
        )


@dataclass(frozen=True)
class BuildPaths:
    project_root: Path
    source_root: Path
    output_root: Path
    clean_root: Path
    js_source_dir: Path
    i18n_source_dir: Path
    css_source_dir: Path
    image_source_dir: Path
    js_target_dir: Path
    css_target_dir: Path
    image_target_dir: Path
    asset_manifest_path: Path


def _under(root: Path, rel: str) -> Path:
    p = Path(rel)
    return p if p.is_absolute() else root / p


def load_build_config(project_root: Path, path: Optional[Path] = None) -> BuildConfig:
    """
    Load ``BuildConfig`` from an override file.

    A missing default file yields the built-in defaults. An unreadable or
    non-mapping file is logged and ignored. Unknown keys or bad values are a
    fatal ``AssetBuildError``.
    """
    resolved = _resolve_path(Path(project_root), path)
    if resolved is None:
        return BuildConfig()
    if not resolved.exists():
        if path is not None:
            raise AssetBuildError(f"config file not found: {resolved}")
        return BuildConfig()

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read config file %s: %s", resolved, exc)
        return BuildConfig()

    # JSON first, YAML for everything else
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse config file %s as JSON or YAML: %s", resolved, exc)
            return BuildConfig()

    if data is None:
        return BuildConfig()
    if not isinstance(data, dict):
        _log.warning("Config file %s must be a mapping, got %s", resolved, type(data).__name__)
        return BuildConfig()

    try:
        cfg = BuildConfig(**data)
    except ValidationError as exc:
        raise AssetBuildError(f"invalid config file {resolved}: {exc}") from exc

    _log.info("Loaded %d config overrides from %s", len(data), resolved)
    return cfg


def _resolve_path(project_root: Path, path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return _under(project_root, str(path))
    for name in DEFAULT_CONFIG_NAMES:
        candidate = project_root / name
        if candidate.exists():
            return candidate
    return None
