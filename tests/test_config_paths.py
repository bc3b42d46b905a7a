"""Tests for the config_paths module."""

from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from s3_provider_registry.config_paths import (
    APP_NAME,
    ENV_PROVIDERS_PATH,
    PROVIDERS_FILENAME,
    copy_default_to_user_config,
    ensure_user_config_dir_exists,
    get_bundled_providers_path,
    get_providers_path,
    get_providers_path_source,
    get_user_config_dir,
)


@pytest.fixture
def user_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point the user config directory at a temporary location."""
    config_dir = tmp_path / "config" / APP_NAME
    monkeypatch.delenv(ENV_PROVIDERS_PATH, raising=False)
    with patch("s3_provider_registry.config_paths.platformdirs.user_config_dir") as mock_user_config_dir:
        mock_user_config_dir.return_value = str(config_dir)
        yield config_dir


def test_user_config_dir_contains_app_name() -> None:
    """Test that the user config directory contains the app name."""
    assert APP_NAME in str(get_user_config_dir())


def test_bundled_document_exists() -> None:
    """The package ships its providers document."""
    assert get_bundled_providers_path().is_file()
    assert get_bundled_providers_path().name == PROVIDERS_FILENAME


def test_user_config_dir_is_created(user_config_dir: Path) -> None:
    """Test that the user config directory is created if it doesn't exist."""
    assert not user_config_dir.exists()
    ensure_user_config_dir_exists()
    assert user_config_dir.is_dir()


def test_bundled_is_the_fallback(user_config_dir: Path) -> None:
    path = get_providers_path()
    assert path == get_bundled_providers_path()
    assert get_providers_path_source(path) == "Bundled package data"


def test_user_copy_wins_over_bundled(user_config_dir: Path) -> None:
    written = copy_default_to_user_config()
    assert written == user_config_dir / PROVIDERS_FILENAME
    assert written.read_bytes() == get_bundled_providers_path().read_bytes()

    path = get_providers_path()
    assert path == written
    assert get_providers_path_source(path) == "User config directory"


def test_copy_does_not_overwrite(user_config_dir: Path) -> None:
    user_config_dir.mkdir(parents=True)
    user_file = user_config_dir / PROVIDERS_FILENAME
    user_file.write_text("{}", encoding="utf-8")

    assert copy_default_to_user_config() is None
    assert user_file.read_text(encoding="utf-8") == "{}"

    assert copy_default_to_user_config(overwrite=True) == user_file
    assert user_file.read_bytes() == get_bundled_providers_path().read_bytes()


def test_env_var_wins(user_config_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    copy_default_to_user_config()
    env_file = tmp_path / "env-providers.json"
    env_file.write_text("{}", encoding="utf-8")
    monkeypatch.setenv(ENV_PROVIDERS_PATH, str(env_file))

    path = get_providers_path()
    assert path == env_file
    assert get_providers_path_source(path) == f"Environment variable ({ENV_PROVIDERS_PATH})"


def test_env_var_pointing_nowhere_is_ignored(
    user_config_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(ENV_PROVIDERS_PATH, str(tmp_path / "missing.json"))
    assert get_providers_path() == get_bundled_providers_path()


def test_explicit_path_source(user_config_dir: Path, tmp_path: Path) -> None:
    assert get_providers_path_source(tmp_path / "elsewhere.json") == "Explicit path"
