"""Network fetch helpers for the color-scheme downloader."""
import logging
import os
import random
import re
import time
from typing import Optional
from urllib.parse import unquote, urlparse

import requests
import urllib3

from utils.constants import USER_AGENTS
from .errors import FetchExhausted

# vim.org and some mirrors still serve outdated certificate chains
urllib3.disable_warnings()


def _get_random_user_agent() -> str:
    """Return a random user agent."""
    return random.choice(USER_AGENTS)


def fetch_page(session: requests.Session, url: str, timeout: float = 30):
    """Fetch a single URL once, raising on HTTP errors."""
    headers = {
        'User-Agent': _get_random_user_agent(),
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    }
    response = session.get(url, headers=headers, verify=False, allow_redirects=True, timeout=timeout)
    response.raise_for_status()
    return response


def fetch_with_retry(session: requests.Session, url: str, max_retries: int = 6, backoff: float = 1,
                     timeout: float = 30, logger: Optional[logging.Logger] = None):
    """Fetch `url`, retrying with a linearly growing pause.

    Attempt n waits (n - 1) * backoff seconds first, so the default schedule is
    0, 1, 2, 3, 4, 5 seconds. Raises FetchExhausted when every attempt fails.
    """
    last_error: Optional[Exception] = None
    for attempt in range(1, max_retries + 1):
        wait = (attempt - 1) * backoff
        if wait > 0:
            if logger:
                logger.info(f"Waiting {wait}s before attempt {attempt}/{max_retries} for {url}")
            time.sleep(wait)
        try:
            return fetch_page(session, url, timeout=timeout)
        except requests.RequestException as e:
            last_error = e
            if logger:
                logger.warning(f"Attempt {attempt}/{max_retries} failed for {url}: {e}")

    raise FetchExhausted(url, max_retries, last_error)


def filename_from_response(response, fallback_url: str) -> str:
    """Filename from Content-Disposition, else the last path segment of the URL."""
    content_disp = ''
    headers = getattr(response, 'headers', None) or {}
    if headers:
        content_disp = headers.get('Content-Disposition', '') or ''
    filename_match = re.findall(r'filename="?([^";]+)"?', content_disp)
    if filename_match:
        return os.path.basename(filename_match[0].strip())

    path = urlparse(getattr(response, 'url', None) or fallback_url).path
    name = os.path.basename(unquote(path))
    return name or 'download'
