import json
from pathlib import Path

import pytest

VERSION = "1.9.2"

MANIFESTS = {
    "ui.core.jquery.json": {"jquery": ">=1.6"},
    "ui.widget.jquery.json": {"jquery": ">=1.6"},
    "ui.mouse.jquery.json": {"jquery": ">=1.6", "ui.widget": VERSION},
    "ui.button.jquery.json": {"jquery": ">=1.6", "ui.core": VERSION, "ui.widget": VERSION},
    "ui.effect.jquery.json": {"jquery": ">=1.6"},
    "ui.effect-blind.jquery.json": {"jquery": ">=1.6", "ui.effect": VERSION},
}

JS_SOURCES = {
    "jquery.ui.core.js": "/*!\n * jQuery UI Core @VERSION\n */\n(function( $ ) { $.ui = { version: \"@VERSION\" }; })( jQuery );\n",
    "jquery.ui.widget.js": "/*\n * jQuery UI Widget @VERSION\n */\n(function( $ ) { $.widget = function() {}; })( jQuery );\n",
    "jquery.ui.mouse.js": "/*\n * jQuery UI Mouse @VERSION\n */\n(function( $ ) {})( jQuery );\n",
    "jquery.ui.button.js": "/*\n * jQuery UI Button @VERSION\n */\n(function( $ ) {})( jQuery );\n",
    "jquery.ui.effect.js": "/*\n * jQuery UI Effects @VERSION\n */\n;(jQuery.effects || (function($) {})(jQuery));\n",
    "jquery.ui.effect-blind.js": "/*\n * jQuery UI Effects Blind @VERSION\n */\n(function( $ ) {})( jQuery );\n",
}

I18N_SOURCES = {
    "jquery.ui.datepicker-de.js": "/* German initialisation for the jQuery UI date picker plugin. */\njQuery(function($){ $.datepicker.regional['de'] = {}; });\n",
}

CSS_SOURCES = {
    "jquery.ui.core.css": "/*\n * jQuery UI CSS Framework @VERSION\n */\n.ui-helper-hidden { display: none; }\n",
    "jquery.ui.theme.css": "/*\n * jQuery UI CSS Framework @VERSION\n */\n.ui-widget-content { background: #fff url(images/ui-bg_flat_75_ffffff_40x100.png) 50% 50% repeat-x; }\n",
    "jquery.ui.button.css": "/*\n * jQuery UI Button @VERSION\n */\n.ui-button { display: inline-block; }\n",
    "jquery.ui.progressbar.css": "/*\n * jQuery UI Progressbar @VERSION\n */\n.ui-progressbar { height: 2em; }\n",
    "jquery.ui.base.css": "@import \"jquery.ui.core.css\";\n@import url(\"jquery.ui.button.css\");\n",
    "jquery.ui.all.css": "@import \"jquery.ui.base.css\";\n@import \"jquery.ui.theme.css\";\n",
}

IMAGES = {
    "ui-bg_flat_75_ffffff_40x100.png": b"\x89PNG\r\n\x1a\nflat",
    "ui-icons_222222_256x240.png": b"\x89PNG\r\n\x1a\nicons",
}


def write_source_tree(project_root: Path, source_dir: str = "jquery-ui") -> Path:
    src = project_root / source_dir
    (src / "ui" / "i18n").mkdir(parents=True, exist_ok=True)
    (src / "themes" / "base" / "images").mkdir(parents=True, exist_ok=True)

    (src / "README.md").write_text("jQuery UI\n", encoding="utf-8")
    (src / "package.json").write_text(json.dumps({"name": "jquery-ui", "version": VERSION}), encoding="utf-8")

    for name, deps in MANIFESTS.items():
        (src / name).write_text(json.dumps({"name": name, "dependencies": deps}), encoding="utf-8")
    for name, body in JS_SOURCES.items():
        (src / "ui" / name).write_text(body, encoding="utf-8")
    for name, body in I18N_SOURCES.items():
        (src / "ui" / "i18n" / name).write_text(body, encoding="utf-8")
    for name, body in CSS_SOURCES.items():
        (src / "themes" / "base" / name).write_text(body, encoding="utf-8")
    for name, data in IMAGES.items():
        (src / "themes" / "base" / "images" / name).write_bytes(data)
    return src


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    write_source_tree(root)
    return root


@pytest.fixture()
def make_source_tree():
    return write_source_tree
