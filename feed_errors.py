"""
Exceptions raised while fetching or parsing the upstream feed.
"""


class FeedError(Exception):
    """Base class for every failure that aborts a page render."""

    pass


class NetworkError(FeedError):
    """Raised when the feed host cannot be reached."""

    pass


class FeedTimeoutError(FeedError):
    """Raised when the feed request exceeds its time budget."""

    pass


class HttpStatusError(FeedError):
    """Raised when the feed host answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        message = f"HTTP {status_code}: {reason}" if reason else f"HTTP {status_code}"
        super().__init__(message)


class MalformedFeedError(FeedError):
    """Raised when the document is not RSS with a channel element."""

    pass
