from __future__ import annotations

from pathlib import Path

from scenepanel_core.home import ensure_scenepanel_layout, resolve_scenepanel_home


def test_resolve_scenepanel_home_from_env(tmp_path: Path) -> None:
    home = resolve_scenepanel_home({"SCENEPANEL_HOME": str(tmp_path)})
    assert home == tmp_path.resolve()


def test_resolve_scenepanel_home_relative_is_under_user_home() -> None:
    home = resolve_scenepanel_home({"SCENEPANEL_HOME": "panel-data"})
    assert home == (Path.home() / "panel-data").resolve()


def test_ensure_scenepanel_layout_creates_required_dirs(tmp_path: Path) -> None:
    paths = ensure_scenepanel_layout(tmp_path)

    assert paths.home.exists()
    assert paths.logs_dir.is_dir()
    assert paths.config_dir.is_dir()
    assert paths.core_config_path == tmp_path / "config" / "core.json"
