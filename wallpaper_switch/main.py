#!/usr/bin/env python3
# wallpaper_switch/main.py
"""
wallpaper-switch - Picture-of-the-day wallpaper changer for GNOME

Entry point. There are no command-line options: each invocation performs a
single update run and exits.
"""

import logging
import sys
from pathlib import Path

from wallpaper_switch import headless
from wallpaper_switch.core import paths as core_paths
from wallpaper_switch.core.errors import WallpaperSwitchError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = "wallpaper-switch.log"


def setup_logging(log_dir: Path):
    """Logs to <log_dir>/wallpaper-switch.log and to stderr."""
    log_file_path = Path(log_dir) / LOG_FILE_NAME
    try:
        logging.basicConfig(
            level=logging.INFO,
            format=LOG_FORMAT,
            handlers=[
                logging.FileHandler(log_file_path),
                logging.StreamHandler()
            ]
        )
    except OSError as e:
        # Fallback basic logging if file handler fails
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        logging.critical(f"Failed to configure file logging: {e}")


def main() -> int:
    """Runs one update. Returns the process exit code."""
    try:
        config_dir, data_dir = core_paths.get_directories()
    except WallpaperSwitchError as e:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        logger.critical(f"Cannot set up application directories: {e}")
        return 1

    setup_logging(data_dir)

    logger.info("=" * 20 + " Update Run Start " + "=" * 20)
    try:
        result = headless.run_update(config_dir, data_dir)
    except WallpaperSwitchError as e:
        logger.error(f"Update failed ({type(e).__name__}): {e}")
        logger.info("=" * 20 + " Update Run End (Success: False) " + "=" * 20)
        return 1

    logger.info("=" * 20 + f" Update Run End (Result: {result.value}) " + "=" * 20)
    return 0


if __name__ == "__main__":
    sys.exit(main())
