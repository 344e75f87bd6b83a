"""Exception classes for the scraper."""

from __future__ import annotations

from typing import Optional


BAD_REQUEST_MESSAGE = "A full startUrl query parameter is required."
INTERNAL_ERROR_MESSAGE = "An error occurred while fetching products."


class CatalogScraperError(Exception):
    """Base exception for all scraper errors."""

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE):
        self.message = message
        super().__init__(self.message)


class FetchError(CatalogScraperError):
    """Raised when a page cannot be retrieved (transport failure or non-success status)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status = status
        detail = f"{status} {reason}" if status is not None else reason
        super().__init__(f"Failed to fetch {url}: {detail}")


class BadRequest(CatalogScraperError):
    """Raised when the caller did not supply a usable starting URL."""

    def __init__(self, detail: str = "a starting URL is required"):
        self.detail = detail
        super().__init__(detail)


class InternalError(CatalogScraperError):
    """Raised for any unexpected fault while handling a scrape request."""

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE):
        super().__init__(message)
