"""Data file path handling for the provider registry.

The bundled providers document ships inside the package. Applications and
the CLI may point at another document through ``S3PR_PROVIDERS_PATH`` or by
placing ``providers.json`` in the user config directory, which follows the
XDG Base Directory Specification via ``platformdirs``.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import platformdirs

# Application name used for directory paths
APP_NAME = "s3-provider-registry"

# Environment variable names
ENV_PROVIDERS_PATH = "S3PR_PROVIDERS_PATH"

# Default filenames
PROVIDERS_FILENAME = "providers.json"

logger = logging.getLogger(__name__)


def get_package_data_dir() -> Path:
    """Get the path to the package's bundled data directory."""
    return Path(__file__).parent / "data"


def get_bundled_providers_path() -> Path:
    """Get the path to the bundled providers document."""
    return get_package_data_dir() / PROVIDERS_FILENAME


def get_user_config_dir() -> Path:
    """Get the path to the user's config directory for this application."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def ensure_user_config_dir_exists() -> None:
    """Ensure that the user config directory exists.

    Raises:
        OSError: If the directory cannot be created
        PermissionError: If the directory exists but is not writable
    """
    user_dir = get_user_config_dir()

    if user_dir.exists():
        if not os.access(user_dir, os.W_OK):
            raise PermissionError(f"Config directory exists but is not writable: {user_dir}")
        return

    os.makedirs(user_dir, exist_ok=True)

    if not os.access(user_dir, os.W_OK):
        raise PermissionError(f"Created config directory but it is not writable: {user_dir}")


def copy_default_to_user_config(overwrite: bool = False) -> Optional[Path]:
    """Copy the bundled providers document to the user config directory.

    Args:
        overwrite: Replace an existing user copy

    Returns:
        Path of the written file, or None if a user copy already existed

    Raises:
        OSError: If the directory cannot be created or the file cannot be written
    """
    user_file = get_user_config_dir() / PROVIDERS_FILENAME
    if user_file.exists() and not overwrite:
        return None

    try:
        ensure_user_config_dir_exists()
        user_file.write_bytes(get_bundled_providers_path().read_bytes())
    except OSError as e:
        logger.error(f"Failed to copy {PROVIDERS_FILENAME} to {user_file}: {e}")
        raise

    return user_file


def get_providers_path() -> Path:
    """Get the providers document to use when none was given explicitly.

    Returns:
        ``S3PR_PROVIDERS_PATH`` if it names a file, else the user config copy
        if present, else the bundled document
    """
    # 1. Check environment variable
    env_path = os.environ.get(ENV_PROVIDERS_PATH)
    if env_path and Path(env_path).is_file():
        return Path(env_path)

    # 2. Check user config directory
    user_path = get_user_config_dir() / PROVIDERS_FILENAME
    if user_path.is_file():
        return user_path

    # 3. Fall back to package directory
    return get_bundled_providers_path()


def get_providers_path_source(path: Path) -> str:
    """Describe where a resolved providers path comes from."""
    env_path = os.environ.get(ENV_PROVIDERS_PATH)
    if env_path and Path(env_path) == path:
        return f"Environment variable ({ENV_PROVIDERS_PATH})"
    if path == get_user_config_dir() / PROVIDERS_FILENAME:
        return "User config directory"
    if path == get_bundled_providers_path():
        return "Bundled package data"
    return "Explicit path"
