"""
feed_fetcher.py — Upstream RSS download.
One GET per call, bounded by a total deadline, no retries.

The download runs on a worker thread so the caller gets control back once the
deadline passes, even while the upstream is still trickling bytes.
"""

import concurrent.futures as futures
import logging
import time

import requests

from config import FEED_TIMEOUT_SECONDS, FEED_URL, REQUEST_HEADERS
from feed_errors import FeedTimeoutError, HttpStatusError, NetworkError

log = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def _timeout_message(url: str, timeout: float) -> str:
    return f"Request to {url} timed out after {timeout:g} seconds"


def _download(url: str, timeout: float, deadline: float) -> bytes:
    response = requests.get(url, headers=REQUEST_HEADERS, timeout=timeout, stream=True)
    try:
        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code, response.reason or "")

        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if time.monotonic() > deadline:
                raise FeedTimeoutError(_timeout_message(url, timeout))
            chunks.append(chunk)
        return b"".join(chunks)
    finally:
        response.close()


def fetch_feed(url: str = FEED_URL, timeout: float = FEED_TIMEOUT_SECONDS) -> str:
    """Download the feed and return its body as text."""
    log.debug("Fetching feed %s (timeout=%ss)", url, timeout)
    deadline = time.monotonic() + timeout
    executor = futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="feed-fetch")
    try:
        body = executor.submit(_download, url, timeout, deadline).result(timeout=timeout)
    except futures.TimeoutError as e:
        raise FeedTimeoutError(_timeout_message(url, timeout)) from e
    except requests.exceptions.Timeout as e:
        raise FeedTimeoutError(_timeout_message(url, timeout)) from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"Fetch failed: {e}") from e
    finally:
        # a stalled worker is abandoned; its result is never used
        executor.shutdown(wait=False)

    log.debug("Fetched %d bytes from %s", len(body), url)
    return body.decode("utf-8", errors="replace")
