"""Request-level handling: validate the start URL, scrape, dedupe."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from urllib.parse import urlsplit

from .crawler import canonical_collection_url, scrape_collection
from .errors import BadRequest, InternalError
from .extract import DEFAULT_SELECTORS, ListingSelectors
from .fetch import Fetcher, make_fetcher
from .types import CollectionResult, Product


module_logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


def origin_of(url: str) -> str:
    """Scheme and host of an absolute http(s) URL, e.g. ``https://shop.example.com``."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS or not parts.hostname:
        raise BadRequest(f"not an absolute http(s) URL: {url!r}")
    try:
        port = parts.port
    except ValueError as exc:
        raise BadRequest(f"invalid port in URL: {url!r}") from exc
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != DEFAULT_PORTS[scheme]:
        host = f"{host}:{port}"
    return f"{scheme}://{host}"


def dedupe_products(products: Iterable[Product]) -> List[Product]:
    seen = set()
    result: List[Product] = []
    for p in products:
        if p.url in seen:
            continue
        seen.add(p.url)
        result.append(p)
    return result


def _validate_start_url(start_url) -> str:
    if not isinstance(start_url, str) or not start_url.strip():
        raise BadRequest()
    try:
        return canonical_collection_url(start_url)
    except ValueError as exc:
        raise BadRequest(f"malformed URL: {start_url!r}") from exc


def handle_many(
    start_urls: List[str],
    fetch: Optional[Fetcher] = None,
    logger: Optional[logging.Logger] = None,
    selectors: ListingSelectors = DEFAULT_SELECTORS,
) -> CollectionResult:
    """
    Scrape several collections into one result.

    ``baseUrl`` comes from the first start URL. When the same product URL
    shows up in more than one collection the entry from the earliest
    collection is kept.
    """
    log = logger or module_logger
    if not start_urls:
        raise BadRequest()
    collection_urls = [_validate_start_url(u) for u in start_urls]
    base_url = origin_of(collection_urls[0])
    for url in collection_urls[1:]:
        origin_of(url)
    log.info("Collection URLs to process: %s", collection_urls)

    try:
        fetch = fetch or make_fetcher()
        all_products: List[Product] = []
        for collection_url in collection_urls:
            log.info("Processing collection: %s", collection_url)
            products = scrape_collection(collection_url, fetch=fetch, logger=log, selectors=selectors)
            log.info("Found %d products in collection %s", len(products), collection_url)
            all_products.extend(products)

        deduped = dedupe_products(all_products)
        log.info("Total unique products: %d", len(deduped))
        return CollectionResult(base_url=base_url, products=deduped)
    except Exception as exc:
        log.exception("Unexpected error while scraping %s", collection_urls)
        raise InternalError() from exc


def handle(
    start_url: str,
    fetch: Optional[Fetcher] = None,
    logger: Optional[logging.Logger] = None,
    selectors: ListingSelectors = DEFAULT_SELECTORS,
) -> CollectionResult:
    return handle_many([start_url], fetch=fetch, logger=logger, selectors=selectors)
