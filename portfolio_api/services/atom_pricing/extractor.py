"""Price and logo extraction from marketplace "name" pages.

The page is scanned by an ordered list of independent strategies. Each one
returns a price string or ``None``; the first hit wins and the rest are
skipped. When nothing matches the item is reported as "Price Request".
The logo is looked up separately and never influences the price.
"""

from __future__ import annotations

import json
import logging
import re
from decimal import Decimal
from typing import Any, Callable, Iterator, Optional, Sequence

from bs4 import BeautifulSoup, ParserRejectedMarkup

from .models import PRICE_REQUEST, ExtractionResult
from .utils import ensure_dollar_prefix

logger = logging.getLogger("atom_pricing.extractor")

PriceStrategy = Callable[[str, BeautifulSoup], Optional[str]]

MAX_JSON_DEPTH = 64
MAX_JSON_NODES = 10_000

_REQUEST_MARKER = re.compile(r"price\s*request|request\s*price", re.IGNORECASE)
_JSON_LD_TYPE = re.compile(r"^\s*application/ld\+json\s*$", re.IGNORECASE)
_SCRIPT_CLOSE = re.compile(r"</script>", re.IGNORECASE)
_ITEMPROP_PRICE = re.compile(r"^\s*price\s*$", re.IGNORECASE)
_OG_IMAGE = re.compile(r"^\s*og:image\s*$", re.IGNORECASE)
_LOGO_SRC = re.compile(r"logo-image")
_DIGIT = re.compile(r"\d")
_PRICE_CONTEXT = re.compile(r".{0,200}(?:price|amount|cost).{0,200}", re.IGNORECASE)
_DOLLAR_AMOUNT = re.compile(r"\$\s?\d[\d,]*(?:\.\d{2})?")
_FALLBACK_WINDOW = 2000
_NON_BLANK = re.compile(r"\S")


def _number_text(value: float) -> str:
    """``1288.0`` -> ``1288``, ``950.5`` -> ``950.5``, ``1e3`` -> ``1000``."""
    if value != value or value in (float("inf"), float("-inf")):
        return repr(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" in text and 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    return text


def _price_text(value: Any) -> str:
    """Render a JSON scalar as the page would display it."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _number_text(value)
    return str(value).strip()


def _walk_objects(value: Any) -> Iterator[dict]:
    """Yield every JSON object in ``value``, depth-first, in document order."""
    stack = [(value, 0)]
    seen = 0
    while stack:
        node, depth = stack.pop()
        seen += 1
        if seen > MAX_JSON_NODES:
            logger.debug("JSON-LD walk stopped after %d nodes", MAX_JSON_NODES)
            return
        if isinstance(node, dict):
            yield node
            children = list(node.values())
        elif isinstance(node, list):
            children = node
        else:
            continue
        if depth >= MAX_JSON_DEPTH:
            continue
        stack.extend(
            (child, depth + 1)
            for child in reversed(children)
            if isinstance(child, (dict, list))
        )


def _json_ld_documents(soup: BeautifulSoup) -> Iterator[Any]:
    for script in soup.find_all("script", attrs={"type": _JSON_LD_TYPE}):
        block = script.get_text()
        # One block may hold several documents glued together with </script>.
        for fragment in _SCRIPT_CLOSE.split(block):
            fragment = fragment.strip()
            if not fragment:
                continue
            try:
                yield json.loads(fragment)
            except (ValueError, RecursionError):
                logger.debug("Skipping malformed JSON-LD fragment (%d chars)", len(fragment))


def _node_price(node: dict) -> Optional[str]:
    offers = node.get("offers")
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    if isinstance(offers, dict):
        raw = _price_text(offers.get("price"))
        if raw:
            return raw
    if "price" in node:
        raw = _price_text(node["price"])
        if raw:
            return raw
    return None


def from_request_marker(html: str, soup: Optional[BeautifulSoup]) -> Optional[str]:
    if _REQUEST_MARKER.search(html):
        return PRICE_REQUEST
    return None


def from_json_ld(html: str, soup: BeautifulSoup) -> Optional[str]:
    for document in _json_ld_documents(soup):
        for node in _walk_objects(document):
            raw = _node_price(node)
            if raw:
                return ensure_dollar_prefix(raw)
    return None


def from_meta_price(html: str, soup: BeautifulSoup) -> Optional[str]:
    """``<meta itemprop="price" content="1288">``"""
    tag = soup.find("meta", attrs={"itemprop": _ITEMPROP_PRICE, "content": True})
    if tag is None:
        return None
    raw = tag["content"].strip()
    return ensure_dollar_prefix(raw) if raw else None


def from_price_span(html: str, soup: BeautifulSoup) -> Optional[str]:
    # The span text is returned as displayed, without a "$" prefix.
    span = soup.select_one('span[class*="price-show"]')
    if span is None:
        return None
    text = span.get_text().strip()
    if _REQUEST_MARKER.search(text):
        return PRICE_REQUEST
    if _DIGIT.search(text):
        return text
    return None


def from_dollar_amount(html: str, soup: Optional[BeautifulSoup]) -> Optional[str]:
    context = _PRICE_CONTEXT.search(html)
    window = context.group(0) if context else html[:_FALLBACK_WINDOW]
    match = _DOLLAR_AMOUNT.search(window)
    if match is None:
        return None
    return re.sub(r"\s+", "", match.group(0))


PRICE_STRATEGIES: Sequence[PriceStrategy] = (
    from_request_marker,
    from_json_ld,
    from_meta_price,
    from_price_span,
    from_dollar_amount,
)

# Strategies that only read the raw text, usable when the markup cannot be parsed.
RAW_TEXT_STRATEGIES: Sequence[PriceStrategy] = (
    from_request_marker,
    from_dollar_amount,
)


def extract_logo(soup: BeautifulSoup) -> Optional[str]:
    """Prefer the og:image, then the first ``logo-image`` <img>.

    A blank og:image ``content`` counts as absent.
    """
    og = soup.find("meta", attrs={"property": _OG_IMAGE, "content": _NON_BLANK})
    if og is not None:
        return og["content"]
    img = soup.find("img", src=_LOGO_SRC)
    if img is not None:
        return img["src"]
    return None


def _parse(html: str) -> Optional[BeautifulSoup]:
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.debug("Markup rejected by the parser, scanning raw text only: %s", exc)
        return None


def extract_price_and_logo(html: str) -> ExtractionResult:
    """Run the strategy cascade over a page and return its price and logo."""
    html = html or ""
    soup = _parse(html)
    if soup is None:
        strategies, logo = RAW_TEXT_STRATEGIES, None
    else:
        strategies, logo = PRICE_STRATEGIES, extract_logo(soup)

    for strategy in strategies:
        price = strategy(html, soup)
        if price is not None:
            logger.debug("Price %r matched by %s", price, strategy.__name__)
            return ExtractionResult(price=price, logo=logo)

    logger.debug("No price signal found, defaulting to %r", PRICE_REQUEST)
    return ExtractionResult.price_request(logo)
