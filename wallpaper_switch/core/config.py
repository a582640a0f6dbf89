# wallpaper_switch/core/config.py
import configparser
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.ini"

# Default settings. Empty values mean "use the source's default".
DEFAULT_SETTINGS = {
    'Settings': {
        'source': 'apod',  # One of the keys of SOURCES
        'feed_url': '',
        'locator': '',  # 'tree' or 'selector'
        'image_selector': '',
        'image_attribute': '',
        'rotate': '',  # 'true' / 'false'
        'timeout': '30',  # Seconds per network request or command
    }
}

# Built-in picture-of-the-day sources
SOURCES = {
    'apod': {
        'feed_url': 'http://apod.nasa.gov/apod.rss',
        'locator': 'tree',
        'image_selector': '',
        'image_attribute': '',
        'rotate': False,
    },
    '500px': {
        'feed_url': 'https://500px.com/editors.rss',
        'locator': 'selector',
        'image_selector': 'img.photo',
        'image_attribute': 'src',
        'rotate': True,
    },
}


@dataclass
class SourceSettings:
    """Effective feed settings after merging config overrides over source defaults."""

    name: str
    feed_url: str
    locator: str
    image_selector: str
    image_attribute: str
    rotate: bool
    timeout: float


def get_config_file(config_dir: Path) -> Path:
    return Path(config_dir) / CONFIG_FILE_NAME


def _new_parser() -> configparser.ConfigParser:
    # Feed URLs may contain '%' escapes
    return configparser.ConfigParser(interpolation=None)


def create_default_config_if_missing(config_dir: Path) -> bool:
    """Creates the default config file ONLY if it doesn't exist."""
    config_file = get_config_file(config_dir)
    if config_file.is_file():
        return True

    logger.info(f"Config file not found. Creating default config at {config_file}")
    try:
        config = _new_parser()
        config.read_dict(DEFAULT_SETTINGS)
        with open(config_file, 'w') as configfile:
            config.write(configfile)
        return True
    except (OSError, configparser.Error) as e:
        logger.error(f"Error writing initial default config file {config_file}: {e}")
        return False


def load_config(config_dir: Path) -> configparser.ConfigParser:
    """Loads the configuration, creates defaults if missing, and ensures all keys exist."""
    config = _new_parser()
    config_file = get_config_file(config_dir)

    if not create_default_config_if_missing(config_dir):
        logger.warning("Failed to create or access config file. Using in-memory defaults.")
        config.read_dict(DEFAULT_SETTINGS)
        return config

    try:
        read_files = config.read(config_file)
        if not read_files:
            logger.warning(f"Config file {config_file} couldn't be read. Using defaults.")
            config.read_dict(DEFAULT_SETTINGS)
    except configparser.Error as e:
        logger.error(f"Error reading config file {config_file}: {e}. Using defaults.")
        config = _new_parser()
        config.read_dict(DEFAULT_SETTINGS)
        return config

    # --- Check for and add missing keys/sections ---
    needs_save = False
    for section, defaults in DEFAULT_SETTINGS.items():
        if not config.has_section(section):
            config.add_section(section)
            logger.info(f"Added missing section [{section}] to config.")
            needs_save = True
        for key, value in defaults.items():
            if not config.has_option(section, key):
                config.set(section, key, value)
                logger.info(f"Added missing key '{key}' to section [{section}] in config.")
                needs_save = True

    if needs_save:
        save_config(config_dir, config)

    return config


def save_config(config_dir: Path, config: configparser.ConfigParser) -> bool:
    """Saves the configuration object to the INI file."""
    config_file = get_config_file(config_dir)
    try:
        with open(config_file, 'w') as configfile:
            config.write(configfile)
        return True
    except (OSError, configparser.Error) as e:
        logger.error(f"Error writing config file {config_file}: {e}")
        return False


def resolve_source(config: configparser.ConfigParser) -> SourceSettings:
    """
    Merges the [Settings] overrides over the defaults of the configured source.

    Raises:
        ConfigError: If the source or locator name is unknown, or a value has the
                     wrong type.
    """
    name = config.get('Settings', 'source', fallback='apod').strip() or 'apod'
    if name not in SOURCES:
        raise ConfigError(f"Unknown source '{name}'. Known sources: {', '.join(sorted(SOURCES))}")
    defaults = SOURCES[name]

    def _override(key):
        value = config.get('Settings', key, fallback='').strip()
        return value or defaults[key]

    rotate_raw = config.get('Settings', 'rotate', fallback='').strip()
    try:
        rotate = config.getboolean('Settings', 'rotate') if rotate_raw else defaults['rotate']
        timeout = config.getfloat('Settings', 'timeout', fallback=30.0)
    except ValueError as e:
        raise ConfigError(f"Invalid value in [Settings]: {e}") from e
    if timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {timeout}")

    locator = _override('locator')
    if locator not in ('tree', 'selector'):
        raise ConfigError(f"Unknown locator '{locator}'. Expected 'tree' or 'selector'.")

    settings = SourceSettings(
        name=name,
        feed_url=_override('feed_url'),
        locator=locator,
        image_selector=_override('image_selector'),
        image_attribute=_override('image_attribute') or 'src',
        rotate=rotate,
        timeout=timeout,
    )
    logger.info(f"Config loaded: source={settings.name}, feed={settings.feed_url}, "
                f"locator={settings.locator}, rotate={settings.rotate}, timeout={settings.timeout}")
    return settings
