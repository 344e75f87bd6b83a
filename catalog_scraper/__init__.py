"""
Collection catalog scraper package.

Exports:
- Product, CollectionResult: dataclasses for scraped data
- scrape_collection: paginate one collection and extract its products
- handle: request-level scrape of a start URL (validate, scrape, dedupe)
"""

from .types import CollectionResult, Product
from .crawler import scrape_collection
from .service import handle

__all__ = ["CollectionResult", "Product", "scrape_collection", "handle"]
