"""
observability.py — Logging, request timing and error tracking
===============================================================
Covers: root logging setup, one access-log line per request,
        X-Response-Time-Ms / X-Trace-Id headers, slow-request warnings,
        optional Sentry error tracking.

Setup in app.py:
    from observability import configure_logging, init_observability
    configure_logging()
    init_observability(app)
"""

import logging
import time
import uuid

from flask import g, request

import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

from config import ENVIRONMENT, LOG_LEVEL, SENTRY_DSN

SLOW_REQUEST_MS = 1000

log = logging.getLogger("nexus_feed.access")


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def init_observability(app):
    """Initialize request timing and error tracking. Call once at app startup."""

    # ── 1. Sentry error tracking ──
    if SENTRY_DSN:
        sentry_sdk.init(
            dsn=SENTRY_DSN,
            integrations=[FlaskIntegration()],
            environment=ENVIRONMENT,
        )
        log.info("Sentry initialized")

    # ── 2. Request timing middleware ──
    @app.before_request
    def _start_timer():
        g.start_time = time.time()
        g.trace_id = request.headers.get("X-Trace-Id", str(uuid.uuid4())[:16])

    @app.after_request
    def _record_timing(response):
        if hasattr(g, "start_time"):
            latency = (time.time() - g.start_time) * 1000
            response.headers["X-Response-Time-Ms"] = str(int(latency))
            response.headers["X-Trace-Id"] = getattr(g, "trace_id", "")

            level = logging.WARNING if latency > SLOW_REQUEST_MS else logging.INFO
            log.log(level, "%s %s -> %s (%d ms)", request.method, request.path,
                    response.status_code, int(latency))
        return response
