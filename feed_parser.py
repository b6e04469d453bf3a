"""
feed_parser.py — RSS 2.0 parsing
==================================
Turns the raw feed document into FeedMetadata plus an ordered list of
ArticleRecord. Every optional field has a named accessor and a fixed
fallback, so a missing or broken field never fails the whole feed.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config import DISPLAY_TIMEZONE, MAX_ARTICLES
from feed_errors import MalformedFeedError

log = logging.getLogger(__name__)

# ── RSS extension namespaces ──
NS = {
    "dc": "http://purl.org/dc/elements/1.1/",
    "media": "http://search.yahoo.com/mrss/",
    "content": "http://purl.org/rss/1.0/modules/content/",
}

DEFAULT_FEED_TITLE = "RSS Feed"
DEFAULT_TITLE = "No title available"
DEFAULT_LINK = "#"
DEFAULT_AUTHOR = "Mashable"
DESCRIPTION_LIMIT = 200
ELLIPSIS = "..."

TAG_RE = re.compile(r"<[^>]*>")
IMG_SRC_RE = re.compile(r'<img[^>]+src="([^">]+)"')


@dataclass(frozen=True)
class FeedMetadata:
    title: str = DEFAULT_FEED_TITLE
    description: str = ""


@dataclass(frozen=True)
class ArticleRecord:
    title: str = DEFAULT_TITLE
    link: str = DEFAULT_LINK
    description: str = ""
    published_at: str = ""
    author: str = DEFAULT_AUTHOR
    image_url: Optional[str] = None


@dataclass(frozen=True)
class ParsedFeed:
    metadata: FeedMetadata
    articles: List[ArticleRecord] = field(default_factory=list)


# ══════════════════════════════════════════
# FIELD EXTRACTION
# ══════════════════════════════════════════

def strip_tags(text: str) -> str:
    """Remove every markup tag, leaving the text between them."""
    if not text:
        return ""
    return TAG_RE.sub("", text)


def summarize_description(text: str) -> str:
    """Strip tags, cut to DESCRIPTION_LIMIT characters and append an ellipsis."""
    if not text:
        return ""
    return strip_tags(text)[:DESCRIPTION_LIMIT] + ELLIPSIS


def load_display_timezone(name: str):
    """Resolve the display zone once; an unknown name falls back to UTC with a warning."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        log.warning("Unknown DISPLAY_TIMEZONE %r, showing dates in UTC", name)
        return timezone.utc


DISPLAY_TZ = load_display_timezone(DISPLAY_TIMEZONE)


def _parse_date(value: str) -> datetime:
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass
    return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))


def format_published(value: Optional[str]) -> str:
    """Format a feed date as "Jan 5, 2024, 03:04 PM"; empty string when unparsable."""
    if not value or not value.strip():
        return ""
    try:
        dt = _parse_date(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        dt = dt.astimezone(DISPLAY_TZ)
        return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"
    except (TypeError, ValueError, OverflowError):
        return ""


def _text(el: Optional[ET.Element]) -> str:
    if el is None:
        return ""
    return "".join(el.itertext())


def _child_text(parent: ET.Element, path: str) -> str:
    return _text(parent.find(path, NS))


def resolve_image_url(item: ET.Element) -> Optional[str]:
    """
    Pick the article image: media:content url first, then the first
    <img src="..."> inside content:encoded, otherwise None.
    """
    media = item.find("media:content", NS)
    if media is not None and media.get("url"):
        return media.get("url")

    encoded = item.find("content:encoded", NS)
    if encoded is not None:
        match = IMG_SRC_RE.search(_text(encoded))
        if match:
            return match.group(1)
    return None


def parse_item(item: ET.Element) -> ArticleRecord:
    return ArticleRecord(
        title=_child_text(item, "title") or DEFAULT_TITLE,
        link=_child_text(item, "link") or DEFAULT_LINK,
        description=summarize_description(_child_text(item, "description")),
        published_at=format_published(_child_text(item, "pubDate")),
        author=_child_text(item, "dc:creator") or DEFAULT_AUTHOR,
        image_url=resolve_image_url(item),
    )


# ══════════════════════════════════════════
# DOCUMENT
# ══════════════════════════════════════════

def parse_feed(raw_xml: str, max_items: int = MAX_ARTICLES) -> ParsedFeed:
    """Parse an RSS 2.0 document. Raises MalformedFeedError if it is not one."""
    try:
        root = ET.fromstring(raw_xml)
    except ET.ParseError as e:
        raise MalformedFeedError(f"Failed to parse RSS XML: {e}") from e

    channel = root.find("channel") if root.tag == "rss" else None
    if channel is None:
        raise MalformedFeedError("Invalid RSS format: missing rss/channel element")

    metadata = FeedMetadata(
        title=_child_text(channel, "title") or DEFAULT_FEED_TITLE,
        description=_child_text(channel, "description"),
    )
    items = channel.findall("item")[:max_items]
    return ParsedFeed(metadata=metadata, articles=[parse_item(item) for item in items])
