from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from ..config import BuildConfig, BuildPaths
from ..dependencies.manifest import DependencyTable, dependencies_for
from .text import (
    protect_copyright_notice,
    read_source,
    remove_js_extension,
    substitute_version,
    write_asset,
)

_log = logging.getLogger("uiassets.javascripts")

EFFECTS_AGGREGATE = "jquery.ui.effect.all.js"
ALL_AGGREGATE = "jquery.ui.all.js"
EFFECT_GLOB = "jquery.ui.effect*.js"


def require_line(module: str) -> str:
    return f"//= require {module}\n"


def render_javascript(
    source_code: str,
    dependencies: Iterable[str],
    *,
    version: str,
    version_token: str = "@VERSION",
) -> str:
    """
    Prefix ``source_code`` with one ``//= require`` directive per dependency
    (declaration order, ``.js`` stripped) and a blank separator line.
    """
    modules = [remove_js_extension(d) for d in dependencies]
    header = "".join(require_line(m) for m in modules)
    if modules:
        header += "\n"
    body = substitute_version(source_code, version, version_token)
    return header + protect_copyright_notice(body)


def render_aggregate(basenames: Iterable[str]) -> str:
    return "".join(require_line(remove_js_extension(b)) for b in sorted(basenames))


def generate_javascripts(
    paths: BuildPaths,
    cfg: BuildConfig,
    table: DependencyTable,
    version: str,
) -> List[Path]:
    target_dir = paths.js_target_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    _log.info("Generating javascripts")

    written: List[Path] = []
    sources = sorted(paths.js_source_dir.glob("*.js"))
    for path in sources:
        deps = dependencies_for(
            table,
            path.name,
            js_source_dir=paths.js_source_dir,
            root_file=cfg.root_file,
        )
        out = render_javascript(
            read_source(path),
            deps,
            version=version,
            version_token=cfg.version_token,
        )
        written.append(write_asset(target_dir / path.name, out))

    # locale files never carry dependencies
    for path in sorted(paths.i18n_source_dir.glob("*.js")):
        out = render_javascript(read_source(path), [], version=version, version_token=cfg.version_token)
        written.append(write_asset(target_dir / path.name, out))

    effects = [p.name for p in paths.js_source_dir.glob(EFFECT_GLOB)]
    written.append(write_asset(target_dir / EFFECTS_AGGREGATE, render_aggregate(effects)))
    written.append(write_asset(target_dir / ALL_AGGREGATE, render_aggregate(p.name for p in sources)))

    _log.debug("Wrote %d javascript assets to %s", len(written), target_dir)
    return written
