"""Domain models for marketplace price lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

PRICE_REQUEST = "Price Request"


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Price and logo scraped from a single marketplace page."""

    price: str
    logo: Optional[str] = None

    @property
    def is_request(self) -> bool:
        """True when the item is listed as contact-for-price."""
        return self.price == PRICE_REQUEST

    @classmethod
    def price_request(cls, logo: Optional[str] = None) -> "ExtractionResult":
        return cls(price=PRICE_REQUEST, logo=logo)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"price": self.price, "isRequest": self.is_request}
        if self.logo is not None:
            payload["logo"] = self.logo
        return payload


@dataclass(slots=True)
class LookupResult:
    """Outcome of fetching and parsing the page of one domain."""

    domain: str
    url: str
    extraction: Optional[ExtractionResult] = None
    error: Optional[str] = None
    message: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> Dict[str, Any]:
        """JSON body for a single lookup; the status code stays internal."""
        payload: Dict[str, Any] = {"domain": self.domain, "url": self.url}
        if self.extraction is not None:
            payload.update(self.extraction.as_dict())
        if self.error is not None:
            payload["error"] = self.error
        if self.message is not None:
            payload["message"] = self.message
        return payload


class AtomPriceError(RuntimeError):
    """Raised when a marketplace page cannot be retrieved."""

    error = "Fetch failed"

    def __init__(self, site: str, message: str) -> None:
        super().__init__(message)
        self.site = site
        self.message = message


class UpstreamStatusError(AtomPriceError):
    """The marketplace answered with a non-2xx status."""

    def __init__(self, site: str, status_code: int) -> None:
        super().__init__(site, f"Upstream {status_code}")
        self.status_code = status_code
        self.error = f"Upstream {status_code}"


class AtomFetchError(AtomPriceError):
    """Transport-level failure: DNS, TLS, timeout, connection reset."""
