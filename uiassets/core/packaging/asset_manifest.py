from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Dict, Iterable, List

MANIFEST_KIND = "asset_manifest"


def iter_asset_files(output_root: Path) -> Iterable[Path]:
    if not output_root.exists():
        return
    for f in output_root.rglob("*"):
        if f.is_file():
            yield f


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as fp:
        for chunk in iter(lambda: fp.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def generate_asset_manifest(*, output_root: Path, version: str, exclude: Iterable[Path] = ()) -> Dict:
    """Inventory of the generated tree, paths relative to ``output_root``."""
    # the manifest itself may live under output_root
    skip = {Path(p).resolve() for p in exclude}
    out_files = []
    for f in sorted(iter_asset_files(output_root), key=lambda p: p.relative_to(output_root).as_posix()):
        if f.resolve() in skip:
            continue
        out_files.append(
            {
                "path": f.relative_to(output_root).as_posix(),
                "sha256": sha256_file(f),
                "size": f.stat().st_size,
            }
        )
    return {
        "kind": MANIFEST_KIND,
        "version": version,
        "files": out_files,
    }


def write_manifest(path: Path, manifest: Dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(manifest, indent=2, sort_keys=True), encoding="utf-8")


def load_manifest(path: Path) -> Dict:
    return json.loads(path.read_text(encoding="utf-8"))


def _files_by_path(m: Dict) -> Dict[str, Dict]:
    out: Dict[str, Dict] = {}
    for e in (m.get("files") or []):
        if not isinstance(e, dict):
            continue
        p = e.get("path")
        if not p:
            continue
        out[str(p).replace("\\", "/")] = e
    return out


def manifest_drift(current: Dict, expected: Dict) -> List[str]:
    """
    Human-readable differences between two manifests; empty when equal.
    """
    problems: List[str] = []
    if current.get("kind") != expected.get("kind"):
        problems.append(f"kind: {expected.get('kind')!r} != {current.get('kind')!r}")
    if current.get("version") != expected.get("version"):
        problems.append(f"version: {expected.get('version')!r} != {current.get('version')!r}")

    A = _files_by_path(current)
    B = _files_by_path(expected)

    for p in sorted(set(B) - set(A)):
        problems.append(f"missing: {p}")
    for p in sorted(set(A) - set(B)):
        problems.append(f"extra: {p}")
    for p in sorted(set(A) & set(B)):
        if A[p].get("sha256") != B[p].get("sha256"):
            problems.append(f"changed: {p}")
            continue
        sa, sb = A[p].get("size"), B[p].get("size")
        if sa is not None and sb is not None and sa != sb:
            problems.append(f"changed: {p}")
    return problems
