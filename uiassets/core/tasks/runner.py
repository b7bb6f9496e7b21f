from __future__ import annotations

import logging
import shutil
from functools import cached_property
from pathlib import Path
from typing import List, Optional

from ..config import BuildConfig, BuildPaths, load_build_config
from ..dependencies.manifest import (
    DependencyTable,
    build_dependency_table,
    load_manifests,
    read_version,
)
from ..emitters.images import copy_images
from ..emitters.javascripts import generate_javascripts
from ..emitters.stylesheets import generate_stylesheets
from ..errors import ManifestDriftError
from ..packaging.asset_manifest import (
    generate_asset_manifest,
    load_manifest,
    manifest_drift,
    write_manifest,
)
from ..source_tree import ensure_source_tree
from .graph import TaskGraph, TaskNode

_log = logging.getLogger("uiassets.tasks")

DEFAULT_TASK = "default"


class BuildContext:
    """
    State shared by the tasks of one run.

    The dependency table and version are read on first use, after the
    source tree has been fetched, and never change afterwards.
    """

    def __init__(self, project_root: Path, config: Optional[BuildConfig] = None):
        self.config = config or load_build_config(project_root)
        self.paths: BuildPaths = self.config.resolve(project_root)

    @cached_property
    def table(self) -> DependencyTable:
        return build_dependency_table(
            load_manifests(self.paths.source_root),
            core_module=self.config.core_module,
            root_dependency=self.config.root_dependency,
            root_file=self.config.root_file,
        )

    @cached_property
    def version(self) -> str:
        return read_version(self.paths.source_root)


def task_submodule(ctx: BuildContext):
    ensure_source_tree(ctx.paths, ctx.config)


def task_clean(ctx: BuildContext):
    _log.info("rm -rf %s", ctx.paths.clean_root)
    shutil.rmtree(ctx.paths.clean_root, ignore_errors=True)


def task_javascripts(ctx: BuildContext):
    return generate_javascripts(ctx.paths, ctx.config, ctx.table, ctx.version)


def task_stylesheets(ctx: BuildContext):
    return generate_stylesheets(ctx.paths, ctx.config, ctx.table, ctx.version)


def task_images(ctx: BuildContext):
    return copy_images(ctx.paths)


def _current_manifest(ctx: BuildContext):
    return generate_asset_manifest(
        output_root=ctx.paths.output_root,
        version=ctx.version,
        exclude=[ctx.paths.asset_manifest_path],
    )


def task_manifest(ctx: BuildContext):
    manifest = _current_manifest(ctx)
    write_manifest(ctx.paths.asset_manifest_path, manifest)
    _log.info("Wrote %s (%d files)", ctx.paths.asset_manifest_path, len(manifest["files"]))


def task_verify(ctx: BuildContext):
    path = ctx.paths.asset_manifest_path
    if not path.exists():
        raise ManifestDriftError(f"{path} missing. Run the 'assets' task to generate it.")
    problems = manifest_drift(_current_manifest(ctx), load_manifest(path))
    if problems:
        for p in problems:
            _log.error("drift: %s", p)
        raise ManifestDriftError(f"{len(problems)} generated assets differ from {path.name}")
    _log.info("OK: generated assets match %s", path.name)


def default_graph() -> TaskGraph:
    g = TaskGraph()
    g.add_node(TaskNode(name="submodule", action=task_submodule))
    g.add_node(TaskNode(name="clean", description="Remove the vendor directory", action=task_clean))
    g.add_node(
        TaskNode(
            name="javascripts",
            description="Generate the JavaScript assets",
            depends_on=["submodule"],
            action=task_javascripts,
        )
    )
    g.add_node(
        TaskNode(
            name="stylesheets",
            description="Generate the CSS assets",
            depends_on=["submodule"],
            action=task_stylesheets,
        )
    )
    g.add_node(
        TaskNode(
            name="images",
            description="Generate the image assets",
            depends_on=["submodule"],
            action=task_images,
        )
    )
    g.add_node(
        TaskNode(
            name="manifest",
            description="Record checksums of the generated assets",
            depends_on=["submodule"],
            action=task_manifest,
        )
    )
    g.add_node(
        TaskNode(
            name="verify",
            description="Fail if the generated assets drift from their manifest",
            depends_on=["submodule"],
            action=task_verify,
        )
    )
    g.add_node(
        TaskNode(
            name="assets",
            description="Clean and then generate everything (default)",
            depends_on=["clean", "javascripts", "stylesheets", "images", "manifest"],
        )
    )
    g.add_node(TaskNode(name="build", depends_on=["assets"]))
    g.add_node(TaskNode(name=DEFAULT_TASK, depends_on=["assets"]))
    return g


def run_tasks(ctx: BuildContext, targets: Optional[List[str]] = None, graph: Optional[TaskGraph] = None) -> List[str]:
    """Run ``targets`` and their prerequisites; returns the tasks run, in order."""
    graph = graph or default_graph()
    order = graph.execution_order(list(targets or [DEFAULT_TASK]))
    for name in order:
        node = graph.get(name)
        if node.action is None:
            continue
        _log.debug("** Execute %s", name)
        node.action(ctx)
    return order
