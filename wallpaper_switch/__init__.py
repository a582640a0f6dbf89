"""wallpaper-switch: sets the GNOME wallpaper from a picture-of-the-day feed."""

__version__ = "0.1.0"
