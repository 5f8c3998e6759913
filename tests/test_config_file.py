"""Tests for configuration loading"""

import pytest

from protocol_risk.utils import config_file
from protocol_risk.utils.config_file import (
    ClientConfig,
    find_config_file,
    load_config,
    load_env_config,
    merge_config,
    save_sample_config,
)


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config_file, "USER_CONFIG_DIR", tmp_path / "user-config")


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config(env={})

    assert config.service_url is None
    assert config.simulate is True
    assert config.simulated_delay == 2.0
    assert config.request_timeout == 30.0
    assert config.animations is True
    assert config.log_level == "INFO"


def test_load_yaml(tmp_path):
    path = tmp_path / ".protocol-risk.yml"
    path.write_text(
        "simulate: false\n"
        "service_url: https://risk.example.com/api/\n"
        "log_level: debug\n"
    )

    config = load_config(path, env={})

    assert config.simulate is False
    assert config.service_url == "https://risk.example.com/api"
    assert config.log_level == "DEBUG"


def test_load_pyproject_section(tmp_path):
    path = tmp_path / "pyproject.toml"
    path.write_text(
        '[project]\nname = "demo"\n\n'
        '[tool.protocol-risk]\nsimulated_delay = 0.5\nanimations = false\n'
    )

    config = load_config(path, env={})

    assert config.simulated_delay == 0.5
    assert config.animations is False


def test_find_config_prefers_working_directory(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[tool.protocol-risk]\nsimulate = true\n')
    (tmp_path / ".protocol-risk.yml").write_text("simulate: true\n")

    assert find_config_file(tmp_path) == tmp_path / ".protocol-risk.yml"


def test_find_config_skips_unrelated_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')

    assert find_config_file(tmp_path) is None


def test_find_config_falls_back_to_user_config(tmp_path):
    user_dir = tmp_path / "user-config"
    user_dir.mkdir()
    (user_dir / "config.yml").write_text("animations: false\n")
    project = tmp_path / "project"
    project.mkdir()

    assert find_config_file(project) == user_dir / "config.yml"


def test_env_overrides_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("simulated_delay: 1.0\n")

    config = load_config(path, env={"PROTOCOL_RISK_SIMULATED_DELAY": "0"})

    assert config.simulated_delay == 0.0


def test_overrides_win_and_none_is_skipped(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("simulate: false\nanimations: false\n")

    config = load_config(
        path,
        overrides={"simulate": True, "animations": None},
        env={"PROTOCOL_RISK_SIMULATE": "false"},
    )

    assert config.simulate is True
    assert config.animations is False


def test_env_ignores_api_key_and_other_variables():
    env = {
        "PROTOCOL_RISK_API_KEY": "secret",
        "PROTOCOL_RISK_LOG_LEVEL": "warning",
        "HOME": "/root",
    }

    assert load_env_config(env) == {"log_level": "warning"}


def test_merge_config():
    assert merge_config({"a": 1, "b": 2}, {"b": None, "c": 3}, {"a": 4}) == {
        "a": 4,
        "b": 2,
        "c": 3,
    }


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("simulate: true\ntheme: light\n")

    config = load_config(path, env={})

    assert not hasattr(config, "theme")


@pytest.mark.parametrize(
    "content",
    [
        "service_url: ftp://risk.example.com\n",
        "simulated_delay: -1\n",
        "request_timeout: 0\n",
        "log_level: LOUD\n",
    ],
)
def test_invalid_values_raise(tmp_path, content):
    path = tmp_path / "config.yml"
    path.write_text(content)

    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path, env={})


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("simulate: [unclosed\n")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(path, env={})


def test_yaml_must_be_mapping(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("- simulate\n")

    with pytest.raises(ValueError, match="mapping"):
        load_config(path, env={})


def test_blank_service_url_means_none():
    assert ClientConfig(service_url="  ").service_url is None


def test_sample_config_is_loadable(tmp_path):
    path = tmp_path / "nested" / ".protocol-risk.yml"
    save_sample_config(path)

    config = load_config(path, env={})

    assert config == ClientConfig()
