# wallpaper_switch/core/feed.py
import logging
from dataclasses import dataclass

import feedparser

from . import http
from .errors import FeedParseError

logger = logging.getLogger(__name__)


@dataclass
class FeedItem:
    title: str
    link: str


def parse_feed(content: bytes) -> list[FeedItem]:
    """
    Parses an RSS or Atom document into its items, in document order.

    Entries without a link are skipped. A feed that feedparser flags as
    malformed is still accepted as long as it yields at least one item.

    Raises:
        FeedParseError: If the document yields no usable items.
    """
    parsed = feedparser.parse(content)

    items = []
    for entry in parsed.entries:
        link = (entry.get('link') or '').strip()
        if not link:
            logger.debug(f"Skipping feed entry without link: {entry.get('title', '')!r}")
            continue
        items.append(FeedItem(title=entry.get('title', ''), link=link))

    if not items:
        reason = parsed.get('bozo_exception', 'no items with a link')
        raise FeedParseError(f"Feed contains no usable items ({reason})")

    if parsed.get('bozo'):
        logger.warning(f"Feed is malformed but usable: {parsed.get('bozo_exception')}")

    logger.info(f"Parsed {len(items)} feed items")
    return items


def fetch_feed(url: str, timeout: float = http.DEFAULT_TIMEOUT) -> list[FeedItem]:
    """Downloads the feed at url and parses it. See parse_feed."""
    logger.info(f"Fetching feed from {url}")
    response = http.get(url, timeout=timeout)
    return parse_feed(response.content)


def select_index(item_count: int, rotation_count: int, rotate: bool) -> int:
    """
    Picks the feed item to use for this run.

    Without rotation the newest (first) item is always used. With rotation the
    item after the one picked by the previous run is used, wrapping around, so
    that successive runs cycle through the whole feed.
    """
    if item_count <= 0:
        raise FeedParseError("Feed has no items to select from")
    if not rotate:
        return 0
    return (rotation_count + 1) % item_count
