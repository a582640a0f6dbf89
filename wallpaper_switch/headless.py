#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
wallpaper-switch update run

This module is intended to be run periodically (e.g., by a systemd timer). It
reads the picture-of-the-day feed, finds the image of the selected item, and if
that image differs from the one currently applied it downloads it, sets it as
desktop and screensaver background, and records the new state.
"""

import enum
import logging
from datetime import datetime, timezone
from pathlib import Path

from wallpaper_switch.core import config as core_config
from wallpaper_switch.core import downloader as core_downloader
from wallpaper_switch.core import feed as core_feed
from wallpaper_switch.core import locator as core_locator
from wallpaper_switch.core import state as core_state
from wallpaper_switch.core import wallpaper as core_wallpaper
from wallpaper_switch.core.errors import StorageError
from wallpaper_switch.core.feed import FeedItem
from wallpaper_switch.core.state import State

logger = logging.getLogger(__name__)

NO_CHANGE_MESSAGE = "Same file, not changing"


class UpdateResult(enum.Enum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"


def _remove_old_picture(picture_file_path: str):
    """Deletes a superseded picture. Failures are logged, never raised."""
    if not picture_file_path:
        return
    try:
        Path(picture_file_path).unlink()
        logger.info(f"Deleted old wallpaper: {picture_file_path}")
    except FileNotFoundError:
        logger.debug(f"Old wallpaper {picture_file_path} is already gone")
    except OSError as e:
        logger.warning(f"Could not delete old wallpaper {picture_file_path}: {e}")


def apply_and_persist(image_url: str, item: FeedItem, state: State, data_dir: Path,
                      state_path: Path, rotated: bool = False,
                      timeout: float = core_downloader.DOWNLOAD_TIMEOUT) -> State:
    """
    Downloads image_url, applies it and records it as the current wallpaper.

    The previous picture is deleted only after the new state has been written,
    so the state file never names a file that was already removed. If the
    download or a desktop command fails, nothing is persisted and the previous
    picture stays in place.

    Returns:
        State: The newly persisted state.
    """
    picture_path = core_downloader.new_picture_path(data_dir, image_url)
    try:
        core_downloader.download_image(image_url, picture_path, timeout=timeout)
        core_wallpaper.apply_wallpaper(picture_path, item.link)
    except Exception:
        # Only the new file is discarded; the old picture is still current
        picture_path.unlink(missing_ok=True)
        raise

    new_state = State(
        last_modification=datetime.now(timezone.utc),
        source_url=image_url,
        picture_file_path=str(picture_path),
        rotation_count=state.rotation_count + 1 if rotated else state.rotation_count,
    )
    try:
        core_state.store_state(state_path, new_state)
    except StorageError:
        logger.error(f"Wallpaper set to {picture_path} but state was not saved; remove it by hand once replaced")
        raise

    if state.picture_file_path != new_state.picture_file_path:
        _remove_old_picture(state.picture_file_path)

    return new_state


def run_update(config_dir: Path, data_dir: Path, settings=None) -> UpdateResult:
    """
    Performs one complete update run.

    Args:
        config_dir (Path): Directory holding config.ini.
        data_dir (Path): Directory holding the state file and pictures.
        settings (SourceSettings | None): Effective source settings. Read from
            config.ini when not given.

    Returns:
        UpdateResult: UNCHANGED if the selected image is already applied,
            CHANGED after a successful wallpaper change.

    Raises:
        WallpaperSwitchError: On any fatal failure. State is left untouched.
    """
    if settings is None:
        settings = core_config.resolve_source(core_config.load_config(config_dir))

    state_path = core_state.get_state_file(data_dir)
    state = core_state.load_state(state_path)
    logger.info(f"Current wallpaper source: {state.source_url or '(none)'}")

    locator = core_locator.get_locator(settings)
    items = core_feed.fetch_feed(settings.feed_url, timeout=settings.timeout)
    index = core_feed.select_index(len(items), state.rotation_count, settings.rotate)
    item = items[index]
    logger.info(f"Selected feed item {index + 1}/{len(items)}: '{item.title}' ({item.link})")

    image_url = core_locator.resolve_image_url(locator, item.link, timeout=settings.timeout)

    if core_state.is_unchanged(state, image_url):
        logger.info(f"Image {image_url} is already the wallpaper. Nothing to do.")
        print(NO_CHANGE_MESSAGE)
        return UpdateResult.UNCHANGED

    new_state = apply_and_persist(image_url, item, state, data_dir, state_path,
                                  rotated=settings.rotate, timeout=settings.timeout)
    logger.info(f"Wallpaper changed to {new_state.picture_file_path}")
    return UpdateResult.CHANGED
