# wallpaper_switch/core/paths.py
import logging
import os
from pathlib import Path

from .errors import StorageError

logger = logging.getLogger(__name__)

APP_NAME = "wallpaper-switch"  # Used for config/data dir names


def _base_dir(environ, var: str, fallback: str) -> Path:
    """Returns $var, or $HOME/<fallback> when the variable is unset or empty."""
    value = environ.get(var, "")
    if value:
        return Path(value)
    home = environ.get("HOME", "")
    return (Path(home) if home else Path.home()) / fallback


def _ensure_dir(directory: Path):
    try:
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Error creating directory {directory}: {e}")
        raise StorageError(f"Cannot create directory {directory}: {e}") from e


def get_directories(environ=None) -> tuple[Path, Path]:
    """
    Resolves the XDG config and data directories for the application and makes
    sure both exist.

    Args:
        environ: Mapping to read XDG_CONFIG_HOME, XDG_DATA_HOME and HOME from.
                 Defaults to os.environ.

    Returns:
        tuple[Path, Path]: (config_dir, data_dir)

    Raises:
        StorageError: If either directory cannot be created.
    """
    if environ is None:
        environ = os.environ

    config_dir = _base_dir(environ, "XDG_CONFIG_HOME", ".config") / APP_NAME
    data_dir = _base_dir(environ, "XDG_DATA_HOME", ".local/share") / APP_NAME

    _ensure_dir(config_dir)
    _ensure_dir(data_dir)
    logger.debug(f"Using config dir {config_dir} and data dir {data_dir}")
    return config_dir, data_dir
