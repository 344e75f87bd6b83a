"""Pytest configuration and shared fixtures."""

import logging

import pytest

from catalog_scraper.errors import FetchError


def listing_html(entries, total=None):
    """Build a listing page. ``entries`` is a list of (name, href, price_text)."""
    items = []
    for name, href, price in entries:
        href_attr = f' href="{href}"' if href is not None else ""
        items.append(
            '<div class="product-item__info-inner">'
            f'<a class="product-item__title"{href_attr}>  {name}  </a>'
            f'<div class="product-item__price-list"><span class="price">{price}</span></div>'
            "</div>"
        )
    count = f"<p>Showing 1 - {len(entries)} of {total} products</p>" if total is not None else ""
    return f"<html><body>{count}<div class='grid'>{''.join(items)}</div></body></html>"


def make_entries(prefix, n, start=0):
    return [
        (f"{prefix} {i}", f"/products/{prefix}-{i}?variant=1", f"${i}.00")
        for i in range(start, start + n)
    ]


class FakeFetcher:
    """Serves canned pages by URL and records every URL requested."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, "Not Found", status=404)
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def quiet_logger():
    logger = logging.getLogger("catalog_scraper.tests")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
