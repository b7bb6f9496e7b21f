from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from ..config import BuildConfig, BuildPaths
from ..dependencies.manifest import DependencyTable
from ..errors import ImportParseError
from .text import protect_copyright_notice, read_source, substitute_version, write_asset

_log = logging.getLogger("uiassets.stylesheets")

CORE_STYLESHEET = "jquery.ui.core"
THEME_STYLESHEET = "jquery.ui.theme"

_NO_CORE_DEPENDENCY = re.compile(r"\.(all|base|core)\.")
_NO_THEME_DEPENDENCY = re.compile(r"\.(all|base|core|theme)\.")

# empty or up to the first "*/" line ending at the top of the file
_LEADING_COMMENT = re.compile(r"\A((.*?\*/\r?\n)?)", re.S)
_IMPORT_LINE = re.compile(r"^@import (.*)$", re.M)
_IMPORT_STATEMENT = re.compile(r'^@import (url\()?"(?P<module>[-_.a-zA-Z]+)\.css"\)?;')
_ADJACENT_REQUIRES = re.compile(r"^( \*= require .*)\n \*/(\n+)/\*\n(?= \*= require )", re.M)
_IMAGE_URL = re.compile(r"url\(images/([-_.a-zA-Z0-9]+)\)")


def require_block(module: str) -> str:
    return f"/*\n *= require {module}\n */"


def implicit_dependencies(basename: str, table: DependencyTable) -> List[str]:
    """
    Stylesheets the pipeline must load before ``basename``.

    Every stylesheet needs the core one. Widgets whose JavaScript module has
    a manifest entry also need the theme.
    """
    deps: List[str] = []
    if not _NO_CORE_DEPENDENCY.search(basename):
        deps.append(CORE_STYLESHEET)
    if not _NO_THEME_DEPENDENCY.search(basename):
        js_name = basename.replace(".css", ".js", 1)
        if table.get(js_name) is None:
            _log.warning("No matching JavaScript dependencies found for %s", basename)
        else:
            deps.append(THEME_STYLESHEET)
    return deps


def insert_requires(source_code: str, dependencies: List[str]) -> str:
    if not dependencies:
        return source_code
    # insertion point comes from the original text, blocks stay in declared order
    head = _LEADING_COMMENT.match(source_code).group(1)
    blocks = "".join(require_block(dep) + "\n" for dep in dependencies)
    return head + blocks + source_code[len(head):]


def _rewrite_import(match: "re.Match[str]") -> str:
    statement = match.group(0)
    m = _IMPORT_STATEMENT.match(statement)
    if m is None:
        raise ImportParseError(statement)
    return require_block(m.group("module"))


def rewrite_imports(source_code: str) -> str:
    return _IMPORT_LINE.sub(_rewrite_import, source_code)


def coalesce_requires(source_code: str) -> str:
    return _ADJACENT_REQUIRES.sub(r"\1\2", source_code)


def rewrite_image_urls(source_code: str, namespace: str = "jquery-ui") -> str:
    return _IMAGE_URL.sub(
        lambda m: f'url(<%= image_path("{namespace}/{m.group(1)}") %>)',
        source_code,
    )


def render_stylesheet(
    basename: str,
    source_code: str,
    table: DependencyTable,
    *,
    version: str,
    version_token: str = "@VERSION",
    image_namespace: str = "jquery-ui",
) -> str:
    source_code = substitute_version(source_code, version, version_token)
    source_code = protect_copyright_notice(source_code)
    source_code = insert_requires(source_code, implicit_dependencies(basename, table))
    source_code = rewrite_imports(source_code)
    source_code = coalesce_requires(source_code)
    return rewrite_image_urls(source_code, image_namespace)


def generate_stylesheets(
    paths: BuildPaths,
    cfg: BuildConfig,
    table: DependencyTable,
    version: str,
) -> List[Path]:
    target_dir = paths.css_target_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    _log.info("Generating stylesheets")

    written: List[Path] = []
    for path in sorted(paths.css_source_dir.glob("*.css")):
        out = render_stylesheet(
            path.name,
            read_source(path),
            table,
            version=version,
            version_token=cfg.version_token,
            image_namespace=cfg.image_namespace,
        )
        written.append(write_asset(target_dir / f"{path.name}{cfg.template_extension}", out))
    return written
