"""
tests/test_feed_parser.py — RSS parsing and field extraction
===============================================================
Run: pytest tests/test_feed_parser.py -v
"""

import logging
import os
import sys
from datetime import timezone

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from feed_errors import MalformedFeedError
from feed_parser import (
    ArticleRecord,
    format_published,
    load_display_timezone,
    parse_feed,
    strip_tags,
    summarize_description,
)
from feed_samples import make_feed, make_item, numbered_feed


# ═══════════════════════════════════════════
# DOCUMENT STRUCTURE
# ═══════════════════════════════════════════

def test_metadata_extracted():
    feed = parse_feed(make_feed(title="Mashable", description="Tech news"))
    assert feed.metadata.title == "Mashable"
    assert feed.metadata.description == "Tech news"
    assert feed.articles == []


def test_metadata_title_fallback():
    xml = '<rss version="2.0"><channel><item><title>A</title></item></channel></rss>'
    feed = parse_feed(xml)
    assert feed.metadata.title == "RSS Feed"
    assert feed.metadata.description == ""


def test_order_preserved():
    feed = parse_feed(numbered_feed(5))
    assert [a.title for a in feed.articles] == [f"Story {i}" for i in range(5)]


def test_truncated_to_first_hundred():
    feed = parse_feed(numbered_feed(130))
    assert len(feed.articles) == 100
    assert feed.articles[0].title == "Story 0"
    assert feed.articles[-1].title == "Story 99"


def test_custom_item_cap():
    feed = parse_feed(numbered_feed(10), max_items=3)
    assert [a.title for a in feed.articles] == ["Story 0", "Story 1", "Story 2"]


def test_missing_channel_is_malformed():
    with pytest.raises(MalformedFeedError):
        parse_feed('<rss version="2.0"><item><title>orphan</title></item></rss>')


def test_non_rss_root_is_malformed():
    with pytest.raises(MalformedFeedError):
        parse_feed('<feed xmlns="http://www.w3.org/2005/Atom"><channel/></feed>')


def test_invalid_xml_is_malformed():
    with pytest.raises(MalformedFeedError) as exc:
        parse_feed("<rss><channel><item></rss>")
    assert "Failed to parse RSS XML" in str(exc.value)


# ═══════════════════════════════════════════
# FALLBACKS
# ═══════════════════════════════════════════

def test_missing_optional_fields_fall_back():
    xml = make_feed([make_item(title=None, link=None, description=None, pub_date=None)])
    article = parse_feed(xml).articles[0]
    assert article == ArticleRecord(
        title="No title available",
        link="#",
        description="",
        published_at="",
        author="Mashable",
        image_url=None,
    )


def test_empty_title_falls_back():
    article = parse_feed(make_feed([make_item(title="")])).articles[0]
    assert article.title == "No title available"


def test_author_from_dc_creator():
    article = parse_feed(make_feed([make_item(author="Jane Doe")])).articles[0]
    assert article.author == "Jane Doe"


# ═══════════════════════════════════════════
# DESCRIPTION
# ═══════════════════════════════════════════

def test_strip_tags():
    assert strip_tags("<p>Hello <b>World</b></p>") == "Hello World"
    assert strip_tags("") == ""


def test_description_truncated_with_ellipsis():
    raw = "<p>Hello <b>World</b></p>" + "x" * 250
    result = summarize_description(raw)
    assert result == "Hello World" + "x" * 189 + "..."
    assert len(result) == 203


def test_short_description_still_gets_ellipsis():
    assert summarize_description("<i>Short</i>") == "Short..."


@pytest.mark.parametrize("raw", ["a", "<b>bold</b>" * 40, "plain " * 100, "<div>" + "y" * 200 + "</div>"])
def test_description_length_bound(raw):
    result = summarize_description(raw)
    assert result.endswith("...")
    assert len(result[:-3]) <= 200


def test_description_from_feed_item():
    xml = make_feed([make_item(description="<p>Hello <b>World</b></p>" + "x" * 250)])
    article = parse_feed(xml).articles[0]
    assert article.description == "Hello World" + "x" * 189 + "..."


# ═══════════════════════════════════════════
# DATES
# ═══════════════════════════════════════════

def test_rfc822_date_formatted():
    assert format_published("Fri, 05 Jan 2024 15:04:05 +0000") == "Jan 5, 2024, 03:04 PM"


def test_offset_converted_to_display_timezone():
    assert format_published("Fri, 05 Jan 2024 10:04:05 -0500") == "Jan 5, 2024, 03:04 PM"


def test_iso_date_formatted():
    assert format_published("2024-01-05T09:30:00Z") == "Jan 5, 2024, 09:30 AM"


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", "32/13/2024", "Fri, 99 Foo 2024"])
def test_unparsable_dates_are_empty(value):
    assert format_published(value) == ""


def test_unknown_display_timezone_falls_back_to_utc(caplog):
    with caplog.at_level(logging.WARNING, logger="feed_parser"):
        tz = load_display_timezone("Not/AZone")
    assert tz is timezone.utc
    assert "Not/AZone" in caplog.text


def test_dates_still_render_after_bad_timezone(monkeypatch):
    import feed_parser

    monkeypatch.setattr(feed_parser, "DISPLAY_TZ", load_display_timezone("Not/AZone"))
    assert format_published("Fri, 05 Jan 2024 15:04:05 +0000") == "Jan 5, 2024, 03:04 PM"


def test_utc_display_timezone_needs_no_lookup(caplog):
    with caplog.at_level(logging.WARNING, logger="feed_parser"):
        assert load_display_timezone("utc") is timezone.utc
    assert caplog.text == ""


# ═══════════════════════════════════════════
# IMAGES
# ═══════════════════════════════════════════

def test_image_from_media_content():
    xml = make_feed([make_item(
        media_url="https://cdn.example.com/lead.jpg",
        encoded='<img src="https://cdn.example.com/other.jpg">',
    )])
    assert parse_feed(xml).articles[0].image_url == "https://cdn.example.com/lead.jpg"


def test_image_sniffed_from_first_img_in_encoded_content():
    encoded = (
        '<p>Intro</p><img class="a" src="https://cdn.example.com/first.png" alt="x">'
        '<img src="https://cdn.example.com/second.png">'
    )
    xml = make_feed([make_item(encoded=encoded)])
    assert parse_feed(xml).articles[0].image_url == "https://cdn.example.com/first.png"


def test_no_image():
    xml = make_feed([make_item(encoded="<p>No pictures here</p>")])
    assert parse_feed(xml).articles[0].image_url is None
