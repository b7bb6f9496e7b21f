from __future__ import annotations

from pathlib import Path
import sys

# ---- sys.path bootstrap (Windows-friendly) ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ---------------------------------------------

from uiassets.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main(["--root", str(PROJECT_ROOT), *sys.argv[1:]]))
