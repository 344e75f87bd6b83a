from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .types import Product


TOTAL_COUNT_RE = re.compile(r"of\s+(\d+)\s+products?", re.IGNORECASE)
NON_PRICE_CHARS_RE = re.compile(r"[^0-9.]")
# Longest leading number, the way a lenient float parse reads "12.5.0" as 12.5
LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


@dataclass(frozen=True)
class ListingSelectors:
    entry: str = ".product-item__info-inner"
    title: str = "a.product-item__title"
    price: str = ".price"


DEFAULT_SELECTORS = ListingSelectors()


def _text(el) -> str:
    return (el.get_text() if el else "").strip()


class ListingPage:
    """Query helpers over one parsed collection listing page."""

    def __init__(self, html: str, selectors: ListingSelectors = DEFAULT_SELECTORS) -> None:
        self.soup = BeautifulSoup(html, "lxml")
        self.selectors = selectors

    def entries(self) -> List[Tag]:
        return self.soup.select(self.selectors.entry)

    def text_of(self, node: Tag, selector: str) -> str:
        return _text(node.select_one(selector))

    def attr_of(self, node: Tag, selector: str, name: str) -> Optional[str]:
        el = node.select_one(selector)
        if el is None:
            return None
        value = el.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        return value

    def visible_text(self) -> str:
        return self.soup.get_text(separator=" ")


def parse_total_count(text: str) -> int:
    """Return N from an "of N products" phrase, or 0 when there is none."""
    m = TOTAL_COUNT_RE.search(text or "")
    if not m:
        return 0
    return int(m.group(1))


def parse_price(text: str) -> Optional[float]:
    if not text:
        return None
    cleaned = NON_PRICE_CHARS_RE.sub("", text)
    m = LEADING_NUMBER_RE.match(cleaned)
    if not m:
        return None
    value = float(m.group(0))
    # Very long digit runs overflow to inf
    if not math.isfinite(value):
        return None
    return value


def _strip_query(href: Optional[str]) -> str:
    if not href:
        return ""
    return href.split("?", 1)[0].strip()


def extract_products(page: ListingPage) -> List[Product]:
    products: List[Product] = []
    sel = page.selectors
    for node in page.entries():
        name = page.text_of(node, sel.title)
        url = _strip_query(page.attr_of(node, sel.title, "href"))
        price = parse_price(page.text_of(node, sel.price))
        if name and url and price is not None:
            products.append(Product(name=name, url=url, price=price))
    return products
