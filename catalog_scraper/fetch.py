from __future__ import annotations

from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import settings
from .errors import FetchError


Fetcher = Callable[[str], str]


def create_session(user_agent: Optional[str] = None, total_retries: int = 0) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Connection": "keep-alive",
        }
    )

    retry = Retry(
        total=total_retries,
        backoff_factor=0.7,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_page(
    url: str,
    session: Optional[requests.Session] = None,
    timeout_seconds: Optional[float] = None,
) -> str:
    """
    Fetch the markup of a single page.
    Raises FetchError on transport errors, timeouts and non-success statuses.
    """
    sess = session or create_session(total_retries=settings.RETRIES)
    timeout = settings.REQUEST_TIMEOUT if timeout_seconds is None else timeout_seconds
    try:
        response = sess.get(url, timeout=timeout, allow_redirects=True)
        response.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        reason = exc.response.reason if exc.response is not None else str(exc)
        raise FetchError(url, reason or "HTTP error", status=status) from exc
    except requests.Timeout as exc:
        raise FetchError(url, f"timed out after {timeout}s") from exc
    except requests.RequestException as exc:
        raise FetchError(url, str(exc)) from exc
    if not 200 <= response.status_code < 300:
        raise FetchError(url, response.reason or "unexpected status", status=response.status_code)
    return response.text


def make_fetcher(
    session: Optional[requests.Session] = None,
    timeout_seconds: Optional[float] = None,
    user_agent: Optional[str] = None,
    retries: Optional[int] = None,
) -> Fetcher:
    """Bind a session and timeout into a ``url -> markup`` callable."""
    sess = session or create_session(
        user_agent=user_agent,
        total_retries=settings.RETRIES if retries is None else retries,
    )

    def _fetch(url: str) -> str:
        return fetch_page(url, session=sess, timeout_seconds=timeout_seconds)

    return _fetch
