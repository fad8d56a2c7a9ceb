import json

import pytest

from ollama_manager.config import DEFAULT_HOST, Settings, load_settings
from ollama_manager.errors import ConfigError


def test_defaults_without_file_or_env(tmp_path):
    settings = load_settings(tmp_path / "missing.json", environ={})
    assert settings == Settings()
    assert settings.host == DEFAULT_HOST
    assert not settings.quiet


def test_quiet_flag_from_config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"QUIET": True, "CLIPBOARD_MANAGER": "pbcopy"}))

    settings = load_settings(path, environ={})

    assert settings.quiet
    assert settings.clipboard_manager == "pbcopy"


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"HOST": "http://file:11434"}))

    settings = load_settings(path, environ={
        "OLLAMA_HOST": "http://env:11434",
        "OLLAMA_MANAGER_LOG_LEVEL": "DEBUG",
        "OLLAMA_MANAGER_TIMEOUT": "30",
    })

    assert settings.host == "http://env:11434"
    assert settings.log_level == "DEBUG"
    assert settings.request_timeout == 30.0


def test_override_ignores_none():
    settings = Settings(quiet=True).override(quiet=None, host="http://other:1")
    assert settings.quiet
    assert settings.host == "http://other:1"


def test_malformed_config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_settings(path, environ={})


def test_config_file_must_be_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_settings(path, environ={})


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_invalid_timeout(tmp_path, raw):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "missing.json", environ={"OLLAMA_MANAGER_TIMEOUT": raw})
