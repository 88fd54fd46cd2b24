"""Atom marketplace price provider."""

from __future__ import annotations

import logging

import requests

from .extractor import extract_price_and_logo
from .models import AtomFetchError, AtomPriceError, LookupResult, UpstreamStatusError
from .utils import ATOM_BASE_URL, ATOM_SITE, DEFAULT_HEADERS, derive_item_url

logger = logging.getLogger("atom_pricing.provider")


class AtomPriceProvider:
    """Fetch an Atom "name" page and scrape its price and logo."""

    site_name = ATOM_SITE

    def __init__(self, base_url: str = ATOM_BASE_URL, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def lookup(self, domain: str) -> LookupResult:
        """Public lookup entry point with error handling."""
        domain = (domain or "").strip()
        url = derive_item_url(domain, self.base_url)
        try:
            html = self._fetch_page(url)
        except UpstreamStatusError as exc:
            logger.warning("%s answered %s for %s", exc.site, exc.status_code, url)
            return LookupResult(
                domain=domain, url=url, error=exc.error, status_code=exc.status_code
            )
        except AtomPriceError as exc:
            logger.warning("Could not fetch %s: %s", url, exc.message)
            return LookupResult(
                domain=domain, url=url, error=exc.error, message=exc.message
            )
        except Exception as exc:  # pragma: no cover
            logger.exception("Unexpected error while fetching %s", url)
            return LookupResult(
                domain=domain, url=url, error=AtomPriceError.error, message=str(exc)
            )

        extraction = extract_price_and_logo(html)
        logger.info("Price for %s: %s", domain, extraction.price)
        return LookupResult(domain=domain, url=url, extraction=extraction)

    def _fetch_page(self, url: str) -> str:
        headers = {**DEFAULT_HEADERS, "Referer": f"{self.base_url}/"}
        try:
            response = requests.get(
                url,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise AtomFetchError(self.site_name, str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise UpstreamStatusError(self.site_name, response.status_code)

        return response.text
