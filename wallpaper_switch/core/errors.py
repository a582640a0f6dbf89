# wallpaper_switch/core/errors.py
"""
Exception types raised by the wallpaper-switch pipeline.

Every fatal condition of a run surfaces as a subclass of WallpaperSwitchError so
the entry point can log it and exit non-zero, and tests can assert on the kind
of failure instead of a crashed process.
"""


class WallpaperSwitchError(Exception):
    """Base class for all errors raised by wallpaper-switch."""

    pass


class NetworkError(WallpaperSwitchError):
    """Raised when an HTTP request fails, times out or returns a bad status."""

    pass


class ParseError(WallpaperSwitchError):
    """Raised when fetched content does not have the expected structure."""

    pass


class FeedParseError(ParseError):
    """Raised when a feed cannot be parsed or contains no usable items."""

    pass


class ImageNotFoundError(ParseError):
    """Raised when no image URL can be located on an item page."""

    pass


class InvalidImageError(ParseError):
    """Raised when downloaded content is not a supported image."""

    pass


class StorageError(WallpaperSwitchError):
    """Raised when a directory or file cannot be created or written."""

    pass


class CommandError(WallpaperSwitchError):
    """
    Raised when a desktop-integration command is missing, times out or exits
    with a non-zero status.
    """

    def __init__(self, message: str, cmd: list[str] | None = None, stderr: str = ""):
        super().__init__(message)
        self.cmd = cmd or []
        self.stderr = stderr


class ConfigError(WallpaperSwitchError):
    """Raised when the configuration names an unknown source or locator."""

    pass
