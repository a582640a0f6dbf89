# wallpaper_switch/__main__.py
"""
Entry point for running wallpaper-switch as a module using 'python -m wallpaper_switch'.

This script simply imports and calls the main function from the main module.
"""

import sys
import logging

logger = logging.getLogger(__name__)

from .main import main as main_entry_point

if __name__ == "__main__":
    exit_code = 1  # Default to error
    try:
        exit_code = main_entry_point()
    except Exception as e:
        logger.critical(
            f"An unexpected error occurred calling main_entry_point: {e}", exc_info=True
        )
        print(
            f"FATAL: An unexpected error occurred during execution: {e}",
            file=sys.stderr,
        )
        exit_code = 1

    sys.exit(exit_code)
