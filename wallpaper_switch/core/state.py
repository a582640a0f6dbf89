# wallpaper_switch/core/state.py
"""
Persistent record of the wallpaper that is currently applied.

The state file is a small INI document with a single [State] section. It is
read once when a run starts and written at most once, after a wallpaper change
has fully succeeded. The image URL stored in it is the key that decides whether
a run has anything to do.
"""

import configparser
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .errors import StorageError

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "status.ini"
SECTION = "State"


@dataclass
class State:
    """The last applied wallpaper. State() is the first-run value."""

    last_modification: datetime | None = None
    source_url: str = ""
    picture_file_path: str = ""
    rotation_count: int = 0


def get_state_file(data_dir: Path) -> Path:
    return Path(data_dir) / STATE_FILE_NAME


def _parse_timestamp(value: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Ignoring unparseable last_modification '{value}' in state file.")
        return None


def _parse_count(value: str) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring unparseable rotation_count '{value}' in state file.")
        return 0


def load_state(path: Path) -> State:
    """
    Loads the state record from path.

    A missing file is the normal first-run case and yields State(). A file that
    cannot be parsed is treated the same way, with a warning. Individual fields
    that are missing or malformed fall back to their zero values.

    Raises:
        StorageError: If the file exists but cannot be read.
    """
    path = Path(path)
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            parser.read_file(f)
    except FileNotFoundError:
        logger.info(f"No state file at {path}. Starting from empty state.")
        return State()
    except (configparser.Error, UnicodeDecodeError) as e:
        logger.warning(f"Problem reading state file {path}: {e}. Starting from empty state.")
        return State()
    except OSError as e:
        raise StorageError(f"Cannot read state file {path}: {e}") from e

    if not parser.has_section(SECTION):
        logger.warning(f"State file {path} has no [{SECTION}] section. Starting from empty state.")
        return State()

    section = parser[SECTION]
    state = State(
        last_modification=_parse_timestamp(section.get('last_modification', '')),
        source_url=section.get('source_url', ''),
        picture_file_path=section.get('picture_file_path', ''),
        rotation_count=_parse_count(section.get('rotation_count', '')),
    )
    logger.debug(f"Loaded state from {path}: {state}")
    return state


def store_state(path: Path, state: State):
    """
    Writes state to path, fully replacing the previous content.

    The new content is written to a temporary file in the same directory and
    then renamed over the target, so readers never see old and new content
    interleaved.

    Raises:
        StorageError: If the file cannot be written.
    """
    path = Path(path)
    parser = configparser.ConfigParser(interpolation=None)
    parser[SECTION] = {
        'last_modification': state.last_modification.isoformat() if state.last_modification else '',
        'source_url': state.source_url,
        'picture_file_path': state.picture_file_path,
        'rotation_count': str(state.rotation_count),
    }

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            parser.write(f)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        logger.error(f"Error writing state file {path}: {e}")
        raise StorageError(f"Cannot write state file {path}: {e}") from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass

    logger.info(f"State saved to {path}")


def is_unchanged(state: State, image_url: str) -> bool:
    """True when image_url is exactly the source of the applied wallpaper."""
    return state.source_url == image_url
