"""Tests for settings loading."""

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from breed_fetch.client import DEFAULT_URL_TEMPLATE, Transport
from breed_fetch.config import (
    DEFAULT_OUTPUT_PATH,
    Settings,
    load_config_file,
    load_settings,
    settings_from_env,
)
from breed_fetch.errors import ConfigError
from breed_fetch.prompt import DEFAULT_PROMPT


def test_defaults() -> None:
    settings = load_settings()
    assert settings.url_template == DEFAULT_URL_TEMPLATE
    assert settings.output_path == DEFAULT_OUTPUT_PATH == "img.txt"
    assert settings.prompt == DEFAULT_PROMPT
    assert settings.transport is Transport.CLIENT
    assert settings.timeout is None
    assert settings.allow_missing is False
    assert settings.echo_breed is False


def test_config_file(fs: FakeFilesystem) -> None:
    fs.create_file(
        "breed.yaml",
        contents="output_path: out.txt\ntransport: buffered\ntimeout: 5\n",
    )
    settings = load_settings("breed.yaml")
    assert settings.output_path == "out.txt"
    assert settings.transport is Transport.BUFFERED
    assert settings.timeout == 5.0


def test_empty_config_file(fs: FakeFilesystem) -> None:
    fs.create_file("breed.yaml", contents="")
    assert load_config_file("breed.yaml") == {}


def test_config_file_missing(fs: FakeFilesystem) -> None:
    with pytest.raises(ConfigError) as exc_info:
        load_config_file("nope.yaml")
    assert "Could not read config file nope.yaml" in exc_info.value.message


def test_config_file_invalid_yaml(fs: FakeFilesystem) -> None:
    fs.create_file("breed.yaml", contents="output_path: [unclosed\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config_file("breed.yaml")
    assert "Invalid YAML" in exc_info.value.message


def test_config_file_not_a_mapping(fs: FakeFilesystem) -> None:
    fs.create_file("breed.yaml", contents="- a\n- b\n")
    with pytest.raises(ConfigError):
        load_config_file("breed.yaml")


def test_config_file_unknown_key(fs: FakeFilesystem) -> None:
    fs.create_file("breed.yaml", contents="colour: brown\n")
    with pytest.raises(ConfigError):
        load_settings("breed.yaml")


def test_settings_from_env() -> None:
    environ = {
        "BREED_FETCH_OUTPUT": "env.txt",
        "BREED_FETCH_TIMEOUT": "2.5",
        "BREED_FETCH_TRANSPORT": "",
        "UNRELATED": "x",
    }
    assert settings_from_env(environ) == {"output_path": "env.txt", "timeout": "2.5"}


def test_precedence(fs: FakeFilesystem) -> None:
    """Flags beat the environment, which beats the config file."""
    fs.create_file("breed.yaml", contents="output_path: file.txt\ntimeout: 1\n")
    settings = load_settings(
        "breed.yaml",
        overrides={"output_path": "flag.txt", "timeout": None},
        environ={"BREED_FETCH_OUTPUT": "env.txt", "BREED_FETCH_TIMEOUT": "3"},
    )
    assert settings.output_path == "flag.txt"
    assert settings.timeout == 3.0


def test_env_read_from_process(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BREED_FETCH_TRANSPORT", "buffered")
    assert load_settings().transport is Transport.BUFFERED


@pytest.mark.parametrize(
    "overrides",
    [
        {"url_template": "https://dog.ceo/api/breed/images/random"},
        {"transport": "carrier-pigeon"},
        {"timeout": 0},
        {"timeout": "soon"},
    ],
)
def test_invalid_settings(overrides: dict) -> None:
    with pytest.raises(ConfigError) as exc_info:
        load_settings(overrides=overrides)
    assert exc_info.value.message.startswith("Invalid settings")


def test_settings_model_accepts_enum_and_name() -> None:
    assert Settings(transport="buffered").transport is Transport.BUFFERED
    assert Settings(transport=Transport.CLIENT).transport is Transport.CLIENT
