"""
Module manifests and the dependency table.

The vendored library ships one ``<module>.jquery.json`` descriptor per
module, e.g. ``ui.widget.jquery.json``:

    "dependencies": {
      "jquery": ">=1.6",
      "ui.core": "1.9.2"
    }

The dependency keys are logical names; ``build_dependency_table`` turns them
into the source file names the asset pipeline requires.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from pydantic import BaseModel, Field

from ..errors import MissingDependencyError

_log = logging.getLogger("uiassets.manifest")

BUILD_FILE_SUFFIX = ".jquery.json"
SOURCE_PREFIX = "jquery."

DependencyTable = Mapping[str, Tuple[str, ...]]


class ModuleManifest(BaseModel):
    build_file: str
    # declaration order is the require order
    dependencies: Dict[str, Any] = Field(default_factory=dict)

    @property
    def dependency_names(self) -> List[str]:
        return list(self.dependencies.keys())


def source_file_for_build_file(build_file: str) -> str:
    """``ui.core.jquery.json`` -> ``jquery.ui.core.js``"""
    stem = build_file.replace(BUILD_FILE_SUFFIX, "", 1)
    return f"{SOURCE_PREFIX}{stem}.js"


def source_file_for_dependency_entry(dep_entry: str, *, root_dependency: str = "jquery", root_file: str = "jquery.js") -> str:
    # the root library does not follow the module naming convention
    if dep_entry == root_dependency:
        return root_file
    return f"{SOURCE_PREFIX}{dep_entry}.js"


def parse_manifest(build_file: str, raw: Any) -> ModuleManifest:
    deps = raw.get("dependencies") if isinstance(raw, dict) else None
    return ModuleManifest(build_file=build_file, dependencies=deps or {})


def load_manifests(source_root: Path) -> List[ModuleManifest]:
    out: List[ModuleManifest] = []
    for p in sorted(Path(source_root).glob(f"*{BUILD_FILE_SUFFIX}")):
        raw = json.loads(p.read_text(encoding="utf-8"))
        out.append(parse_manifest(p.name, raw))
    _log.debug("Loaded %d module manifests from %s", len(out), source_root)
    return out


def build_dependency_table(
    manifests: Iterable[ModuleManifest],
    *,
    core_module: str = "jquery.ui.core.js",
    root_dependency: str = "jquery",
    root_file: str = "jquery.js",
) -> DependencyTable:
    """
    Map every module's source file to the ordered source files it requires.

    Only the core module depends on the root library directly; the root
    dependency is dropped from every other module.
    """
    table: Dict[str, Tuple[str, ...]] = {}
    for m in manifests:
        source_file = source_file_for_build_file(m.build_file)
        names = m.dependency_names
        if source_file != core_module:
            names = [d for d in names if d != root_dependency]
        table[source_file] = tuple(
            source_file_for_dependency_entry(d, root_dependency=root_dependency, root_file=root_file)
            for d in names
        )
    return MappingProxyType(table)


def dependencies_for(
    table: DependencyTable,
    basename: str,
    *,
    js_source_dir: Path,
    root_file: str = "jquery.js",
) -> List[str]:
    deps = table.get(basename)
    if deps is None:
        _log.warning("No dependencies found for %s", basename)
        return []

    # never package assets with broken dependencies
    for dep in deps:
        if dep != root_file and not (Path(js_source_dir) / dep).exists():
            raise MissingDependencyError(basename, dep)
    return list(deps)


def read_version(source_root: Path) -> str:
    data = json.loads((Path(source_root) / "package.json").read_text(encoding="utf-8"))
    return str(data["version"])
