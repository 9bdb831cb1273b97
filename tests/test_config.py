# test_config.py
import json
import pathlib
import sys
from pathlib import Path

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from config import Settings, get_settings

CONFIG_JSON = Path(__file__).resolve().parents[1] / "config.json"


def _settings():
    get_settings.cache_clear()
    return get_settings()


def test_defaults_from_config():
    settings = _settings()
    assert settings.icon_dest_dirs == json.loads(CONFIG_JSON.read_text())["icon_dest_dirs"]
    assert settings.itunes_lookup_url == "https://itunes.apple.com/lookup"
    assert settings.http_timeout is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ITUNES_COUNTRY", "de")
    monkeypatch.setenv("HTTP_TIMEOUT", "7.5")
    settings = _settings()
    assert settings.itunes_country == "de"
    assert settings.http_timeout == 7.5


def test_relative_paths_anchor_at_project_root(tmp_path):
    settings = Settings(project_root=tmp_path, icon_dest_dirs=["a/icons", "/abs/icons"])
    assert settings.dest_dirs == [tmp_path / "a/icons", Path("/abs/icons")]
    assert settings.config_files[0] == tmp_path / "frontend/public/assets/app-config.json"
