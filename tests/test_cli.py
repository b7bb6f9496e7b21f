import json

from uiassets.cli import main
from uiassets.core import source_tree


def test_list_tasks(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "uiassets javascripts" in out
    assert "# Generate the CSS assets" in out


def test_runs_named_tasks(project_root, monkeypatch):
    monkeypatch.setattr(source_tree, "_run", lambda cwd, args: (0, "", ""))
    assert main(["--root", str(project_root), "javascripts"]) == 0
    assert (project_root / "vendor" / "assets" / "javascripts" / "jquery.ui.core.js").exists()
    assert not (project_root / "vendor" / "assets" / "stylesheets").exists()


def test_config_override(project_root, tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"output_dir": "public/assets", "clean_dir": "public"}), encoding="utf-8")
    assert main(["--root", str(project_root), "--config", str(cfg), "images"]) == 0
    assert (project_root / "public" / "assets" / "images" / "jquery-ui" / "ui-icons_222222_256x240.png").exists()


def test_relative_config_resolves_against_root(project_root, tmp_path, monkeypatch):
    (project_root / "cfg.json").write_text(json.dumps({"output_dir": "public/assets"}), encoding="utf-8")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    assert main(["--root", str(project_root), "--config", "cfg.json", "images"]) == 0
    assert (project_root / "public" / "assets" / "images" / "jquery-ui").is_dir()


def test_build_error_exits_nonzero(project_root, capsys):
    (project_root / "jquery-ui" / "ui" / "jquery.ui.core.js").unlink()
    assert main(["--root", str(project_root), "javascripts"]) == 1
    assert "ERROR: jquery.ui.button.js: missing jquery.ui.core.js" in capsys.readouterr().err


def test_unknown_task_exits_nonzero(project_root, capsys):
    assert main(["--root", str(project_root), "deploy"]) == 1
    assert "deploy" in capsys.readouterr().err
