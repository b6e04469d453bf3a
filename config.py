"""
config.py — Runtime configuration for NEXUS FEED.
Every value is read once from the environment at import time.
"""

import os

PORT = int(os.getenv("PORT", "3000"))
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SENTRY_DSN = os.getenv("SENTRY_DSN")

# ── Upstream feed ──
FEED_URL = os.getenv("FEED_URL", "https://mashable.com/feeds/rss/all")
FEED_TIMEOUT_SECONDS = float(os.getenv("FEED_TIMEOUT_SECONDS", "15"))
MAX_ARTICLES = int(os.getenv("MAX_ARTICLES", "100"))

REQUEST_HEADERS = {
    "User-Agent": "RSS-Reader/1.0",
    "Accept": "application/rss+xml, application/xml, text/xml",
}

# ── Presentation ──
SITE_NAME = os.getenv("SITE_NAME", "NEXUS FEED")
SITE_TAGLINE = os.getenv("SITE_TAGLINE", "Rss scraper from Mashable")
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")
