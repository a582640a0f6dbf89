# wallpaper_switch/core/locator.py
"""
Strategies for finding the direct image URL on a feed item's page.

Each feed source links to an HTML page rather than to the picture itself. An
ImageLocator knows where that source puts the picture in its markup:

- TreeWalkLocator follows the APOD convention, where the full-size image is the
  target of the link wrapping the first <img> on the page.
- SelectorLocator reads an attribute from the first element matching a CSS
  selector, for sites that mark their photo with a known class.
"""

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from . import http
from .config import SourceSettings
from .errors import ConfigError, ImageNotFoundError

logger = logging.getLogger(__name__)

PARSER = "html.parser"


class ImageLocator:
    """Finds the image URL in an item page's HTML."""

    def locate(self, html: str, page_url: str) -> str:
        raise NotImplementedError


class TreeWalkLocator(ImageLocator):
    def locate(self, html, page_url):
        soup = BeautifulSoup(html, PARSER)
        img = soup.find("img")  # first <img> in document order
        if img is None:
            raise ImageNotFoundError(f"No <img> element on {page_url}")

        parent = img.parent
        if parent is None or not parent.attrs:
            raise ImageNotFoundError(f"Element containing the image on {page_url} has no attributes")

        value = next(iter(parent.attrs.values()))
        if isinstance(value, list):  # multi-valued attributes such as class
            value = " ".join(value)
        value = value.strip()
        if not value:
            raise ImageNotFoundError(f"Empty image reference on {page_url}")

        return urljoin(page_url, value)


class SelectorLocator(ImageLocator):
    def __init__(self, selector: str, attribute: str = "src"):
        self.selector = selector
        self.attribute = attribute

    def locate(self, html, page_url):
        soup = BeautifulSoup(html, PARSER)
        element = soup.select_one(self.selector)
        if element is None:
            raise ImageNotFoundError(f"Nothing matches '{self.selector}' on {page_url}")

        value = element.get(self.attribute)
        if isinstance(value, list):
            value = " ".join(value)
        if not value or not value.strip():
            raise ImageNotFoundError(
                f"Element '{self.selector}' on {page_url} has no '{self.attribute}' attribute")

        return urljoin(page_url, value.strip())


def get_locator(settings: SourceSettings) -> ImageLocator:
    """Builds the locator strategy named by the source settings."""
    if settings.locator == "tree":
        return TreeWalkLocator()
    if settings.locator == "selector":
        if not settings.image_selector:
            raise ConfigError("The 'selector' locator needs an image_selector setting.")
        return SelectorLocator(settings.image_selector, settings.image_attribute or "src")
    raise ConfigError(f"Unknown locator '{settings.locator}'")


def resolve_image_url(locator: ImageLocator, page_url: str, timeout: float = http.DEFAULT_TIMEOUT) -> str:
    """Fetches the item page and returns the absolute image URL found on it."""
    logger.info(f"Looking for image on {page_url}")
    response = http.get(page_url, timeout=timeout)
    image_url = locator.locate(response.text, page_url)
    logger.info(f"Found image URL: {image_url}")
    return image_url
