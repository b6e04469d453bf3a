"""
page_renderer.py — HTML rendering for the feed page and the error page.
Registered on the main app as a blueprint so its template filter is available:

    from page_renderer import renderer_bp
    app.register_blueprint(renderer_bp)
"""

from datetime import datetime
from typing import Optional, Sequence

from flask import Blueprint, render_template
from markupsafe import Markup, escape

from config import SITE_NAME, SITE_TAGLINE
from feed_parser import ArticleRecord, FeedMetadata
from search_filter import build_index, status_message

renderer_bp = Blueprint("renderer", __name__)


@renderer_bp.app_template_filter("quote_attr")
def quote_attr(value) -> Markup:
    """HTML-escape a value for a double-quoted attribute, quotes as &quot;."""
    return Markup(str(escape(value)).replace("&#34;", "&quot;"))


def format_generated_at(dt: datetime) -> str:
    """Timestamp shown in the header, e.g. "1/5/2024, 3:04:05 PM"."""
    hour = dt.hour % 12 or 12
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt:%M:%S} {dt:%p}"


def render_feed_page(
    metadata: FeedMetadata,
    articles: Sequence[ArticleRecord],
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the full page. Must run inside an application context."""
    generated_at = generated_at or datetime.now()
    index = build_index(articles)
    return render_template(
        "feed.html",
        site_name=SITE_NAME,
        site_tagline=SITE_TAGLINE,
        feed=metadata,
        entries=list(zip(articles, index)),
        initial_status=status_message("", len(articles), len(articles)),
        generated_at=format_generated_at(generated_at),
    )


def render_error_page(message: str) -> str:
    return render_template("feed_error.html", message=message)
