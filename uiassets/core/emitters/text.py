from __future__ import annotations

import re
from pathlib import Path

# minifiers keep "/*!" comments; i18n files open with a one-line
# non-copyright comment, so a newline must follow the opener
_COPYRIGHT_OPENER = re.compile(r"\A\s*/\*\r?\n")
PROTECTED_OPENER = "/*!\n"


def substitute_version(source_code: str, version: str, token: str = "@VERSION") -> str:
    return source_code.replace(token, version)


def protect_copyright_notice(source_code: str) -> str:
    return _COPYRIGHT_OPENER.sub(PROTECTED_OPENER, source_code, count=1)


def remove_js_extension(path: str) -> str:
    return path[:-3] if path.endswith(".js") else path


def read_source(path: Path) -> str:
    # keep line endings as vendored
    with Path(path).open("r", encoding="utf-8", newline="") as fp:
        return fp.read()


def write_asset(path: Path, content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fp:
        fp.write(content)
    return path
