import json

import pytest

from ghrelease.config import DEFAULT_RELEASE_FILE, get_config, load_json_config
from ghrelease.errors import ConfigError


def test_defaults(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    config = get_config()

    assert config.release_file == DEFAULT_RELEASE_FILE
    assert config.github_api_url == "https://api.github.com"
    assert config.git_path == "git"
    assert config.github_token is None


def test_precedence(tmp_path, monkeypatch) -> None:
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"release_file": "from-json", "git_path": "/opt/git"}), encoding="utf-8")

    assert get_config(str(settings)).release_file == "from-json"

    monkeypatch.setenv("INPUT_RELEASE_FILE", "from-actions")
    config = get_config(str(settings))
    assert config.release_file == "from-actions"
    assert config.git_path == "/opt/git"

    monkeypatch.setenv("GHRELEASE_RELEASE_FILE", "from-ghrelease")
    assert get_config(str(settings)).release_file == "from-ghrelease"


def test_actions_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("INPUT_TOKEN", "t0ken")
    monkeypatch.setenv("GITHUB_WORKSPACE", "/work")
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
    monkeypatch.setenv("GITHUB_EVENT_PATH", "/event.json")
    monkeypatch.setenv("GITHUB_API_URL", "ghe.example.com/api/v3/")
    monkeypatch.setenv("INPUT_RELEASE_FILE", "")

    config = get_config()

    assert config.github_token == "t0ken"
    assert config.workspace == "/work"
    assert config.event_name == "push"
    assert config.event_path == "/event.json"
    assert config.github_api_url == "https://ghe.example.com/api/v3"
    assert config.release_file == DEFAULT_RELEASE_FILE


def test_settings_file_is_discovered(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".ghrelease.json").write_text('{"release_file": "**/RELEASE"}', encoding="utf-8")
    assert get_config().release_file == "**/RELEASE"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_bad_settings_file(tmp_path, content) -> None:
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_json_config(str(path))


def test_unknown_setting_is_rejected(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"unknown_option": "x"}', encoding="utf-8")
    with pytest.raises(ConfigError):
        get_config(str(path))
