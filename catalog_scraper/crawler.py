from __future__ import annotations

import logging
import math
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

from .errors import FetchError
from .extract import DEFAULT_SELECTORS, ListingPage, ListingSelectors, extract_products, parse_total_count
from .fetch import Fetcher, make_fetcher
from .types import Product


module_logger = logging.getLogger(__name__)


def canonical_collection_url(url: str) -> str:
    """Drop the query string (and fragment) from a collection URL."""
    parts = urlsplit(url.strip())
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def page_url(collection_url: str, page: int) -> str:
    return f"{collection_url}?page={page}"


def compute_total_pages(total_products: int, per_page: int) -> int:
    if total_products > 0 and per_page > 0:
        return math.ceil(total_products / per_page)
    return 1


def scrape_collection(
    collection_url: str,
    fetch: Optional[Fetcher] = None,
    logger: Optional[logging.Logger] = None,
    selectors: ListingSelectors = DEFAULT_SELECTORS,
) -> List[Product]:
    """
    Walk every listing page of one collection and collect its products.

    Page 1 decides how many pages to expect: the "of N products" phrase
    divided by the number of entries on page 1. Pagination stops at that
    page count, on the first page that fails to load, or on the first page
    with no entries. Results are not deduplicated here.
    """
    log = logger or module_logger
    fetch = fetch or make_fetcher()
    products: List[Product] = []

    first_url = page_url(collection_url, 1)
    log.info("Fetching first page: %s", first_url)
    try:
        html = fetch(first_url)
    except FetchError as exc:
        log.error("Error fetching %s: %s", first_url, exc)
        return products

    first_page = ListingPage(html, selectors)
    total_products = parse_total_count(first_page.visible_text())
    if total_products:
        log.info("Found total products: %d", total_products)
    else:
        log.warning("Could not determine total product count for %s", collection_url)

    products.extend(extract_products(first_page))

    per_page = len(first_page.entries())
    total_pages = compute_total_pages(total_products, per_page)
    log.info("Expecting %d pages for %s", total_pages, collection_url)

    for page in range(2, total_pages + 1):
        url = page_url(collection_url, page)
        log.info("Fetching collection page: %s", url)
        try:
            html = fetch(url)
        except FetchError as exc:
            log.error("Error fetching %s: %s", url, exc)
            break
        listing = ListingPage(html, selectors)
        if not listing.entries():
            log.info("No products found on %s; ending pagination.", url)
            break
        products.extend(extract_products(listing))

    return products
