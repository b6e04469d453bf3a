import logging

from flask import Flask

from config import FEED_TIMEOUT_SECONDS, FEED_URL, FLASK_DEBUG, MAX_ARTICLES, PORT, SITE_NAME
from feed_errors import FeedError
from feed_fetcher import fetch_feed
from feed_parser import parse_feed
from observability import configure_logging, init_observability
from page_renderer import render_error_page, render_feed_page, renderer_bp
from platform_infra import init_platform

configure_logging()
log = logging.getLogger("nexus_feed")

app = Flask(__name__)
app.register_blueprint(renderer_bp)
init_observability(app)
init_platform(app)


# ==========================
# ROUTES
# ==========================
@app.route("/")
def home():
    try:
        raw_xml = fetch_feed(FEED_URL, FEED_TIMEOUT_SECONDS)
        feed = parse_feed(raw_xml, MAX_ARTICLES)
    except FeedError as e:
        log.error("Error fetching RSS feed: %s", e)
        return render_error_page(str(e)), 500

    log.info("Rendering %d articles from %s", len(feed.articles), FEED_URL)
    return render_feed_page(feed.metadata, feed.articles)


# ==========================
# ERRORS
# ==========================
@app.errorhandler(500)
def internal_error(error):
    original = getattr(error, "original_exception", None) or error
    log.error("Server Error: %s", original, exc_info=original)
    return "Internal Server Error", 500


if __name__ == "__main__":
    log.info("%s server running on port %d", SITE_NAME, PORT)
    log.info("Access at: http://localhost:%d", PORT)
    app.run(host="0.0.0.0", port=PORT, debug=FLASK_DEBUG)
