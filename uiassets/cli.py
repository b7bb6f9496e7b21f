from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import load_build_config
from .core.errors import AssetBuildError
from .core.tasks.runner import BuildContext, default_graph, run_tasks


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="uiassets",
        description="Package the vendored jQuery UI tree for the asset pipeline.",
    )
    ap.add_argument("tasks", nargs="*", help="Tasks to run (default: assets)")
    ap.add_argument("--root", default=".", help="Project root holding the vendored tree (default .)")
    ap.add_argument("--config", default=None, help="Config override file (YAML or JSON), relative to --root")
    ap.add_argument("-T", "--list", action="store_true", help="List tasks with descriptions and exit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    graph = default_graph()
    if args.list:
        width = max(len(n.name) for n in graph.described())
        for node in graph.described():
            print(f"uiassets {node.name.ljust(width)}  # {node.description}")
        return 0

    root = Path(args.root).resolve()
    try:
        # relative to --root, like the default config file
        config_path = Path(args.config) if args.config else None
        ctx = BuildContext(root, load_build_config(root, config_path))
        run_tasks(ctx, args.tasks or None, graph=graph)
    except AssetBuildError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0
