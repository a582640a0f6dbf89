# wallpaper_switch/core/wallpaper.py
"""
Applies a downloaded picture to the GNOME desktop and screensaver and tells the
user about it, using the gsettings and notify-send command-line tools.
"""

import logging
import subprocess
from pathlib import Path

from .errors import CommandError

logger = logging.getLogger(__name__)

# GNOME settings schemas and keys
SCHEMA_BACKGROUND = "org.gnome.desktop.background"
SCHEMA_SCREENSAVER = "org.gnome.desktop.screensaver"
KEY_PICTURE_URI = "picture-uri"

NOTIFICATION_TITLE = "New Wallpaper"
COMMAND_TIMEOUT = 10  # seconds


def build_commands(picture_path: Path, link: str) -> list[list[str]]:
    """
    Builds the commands that set the background, set the screensaver background
    and send a notification naming the page the picture came from.
    """
    # gsettings expects an absolute file URI (e.g., "file:///...")
    file_uri = Path(picture_path).absolute().as_uri()
    return [
        ["gsettings", "set", SCHEMA_BACKGROUND, KEY_PICTURE_URI, file_uri],
        ["gsettings", "set", SCHEMA_SCREENSAVER, KEY_PICTURE_URI, file_uri],
        ["notify-send", NOTIFICATION_TITLE, link],
    ]


def run_commands(commands: list[list[str]], timeout: float = COMMAND_TIMEOUT):
    """
    Runs each command in order and stops at the first failure.

    Raises:
        CommandError: If a command is not found, times out or exits non-zero.
    """
    for cmd in commands:
        logger.debug(f"Running command: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, capture_output=True, text=True, check=True, timeout=timeout)
        except FileNotFoundError as e:
            logger.error(f"Command failed: '{cmd[0]}' not found. Check PATH.")
            raise CommandError(f"'{cmd[0]}' not found", cmd=cmd) from e
        except subprocess.TimeoutExpired as e:
            logger.error(f"Command timed out: {' '.join(cmd)}")
            raise CommandError(f"Command timed out: {' '.join(cmd)}", cmd=cmd) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.error(f"Command failed: {' '.join(cmd)}")
            logger.error(f"  Return Code: {e.returncode}")
            logger.error(f"  Stderr: {stderr}")
            raise CommandError(
                f"Command exited with status {e.returncode}: {' '.join(cmd)}", cmd=cmd, stderr=stderr
            ) from e


def apply_wallpaper(picture_path: Path, link: str, timeout: float = COMMAND_TIMEOUT):
    """Sets picture_path as desktop and screensaver background and notifies the user."""
    commands = build_commands(picture_path, link)
    logger.info(f"Setting wallpaper using {len(commands)} command(s). Target: {picture_path}")
    run_commands(commands, timeout=timeout)
    logger.info("Successfully executed desktop commands for wallpaper.")
