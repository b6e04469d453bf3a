"""
platform_infra.py — Security headers
=====================================
HSTS and a Content-Security-Policy that fits the feed page: inline style and
script blocks, Google Fonts, and article images from any HTTPS host.
"""

import logging

from flask_talisman import Talisman

from config import ENVIRONMENT

log = logging.getLogger(__name__)

CSP = {
    "default-src": "'self'",
    "script-src": "'self' 'unsafe-inline'",
    "style-src": "'self' 'unsafe-inline' https://fonts.googleapis.com",
    "font-src": "'self' https://fonts.gstatic.com",
    "img-src": "'self' https: data:",
}


def init_platform(app):
    """Apply security headers. HTTPS is only forced in production."""
    Talisman(
        app,
        force_https=ENVIRONMENT == "production",
        strict_transport_security=True,
        strict_transport_security_max_age=31536000,
        content_security_policy=CSP,
        session_cookie_secure=True,
        session_cookie_http_only=True,
    )
    log.debug("Security headers enabled (environment=%s)", ENVIRONMENT)
