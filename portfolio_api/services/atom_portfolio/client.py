"""Client for the consultant's public Atom portfolio listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from configs import settings

logger = logging.getLogger("atom_portfolio.client")

MAKE_OFFER = "Make Offer"

PORTFOLIO_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/117.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Origin": "https://www.atom.com",
}


class PortfolioFetchError(RuntimeError):
    """Raised when the portfolio API cannot be read."""


@dataclass(slots=True)
class PortfolioDomain:
    """One domain listed in the portfolio."""

    name: str
    price: Any
    logo: Optional[str]
    status: Optional[str]
    url: str

    @classmethod
    def from_api(cls, entry: Dict[str, Any], site_url: str) -> "PortfolioDomain":
        name = entry.get("name") or ""
        return cls(
            name=name,
            price=entry.get("buy_now_price") or MAKE_OFFER,
            logo=entry.get("logo_url") or None,
            status=entry.get("status"),
            url=f"{site_url}/domain/{name}",
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "price": self.price,
            "logo": self.logo,
            "status": self.status,
            "url": self.url,
        }


class AtomPortfolioClient:
    """Read the domains of one portfolio from the Atom JSON API."""

    def __init__(
        self,
        portfolio_id: str,
        api_url: str = "https://api.atom.com/v2",
        site_url: str = "https://www.atom.com",
        timeout: float = 10.0,
    ) -> None:
        self.portfolio_id = portfolio_id
        self.api_url = api_url.rstrip("/")
        self.site_url = site_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.api_url}/portfolios/{self.portfolio_id}/domains"

    def list_domains(self) -> List[PortfolioDomain]:
        headers = {
            **PORTFOLIO_HEADERS,
            "Referer": f"{self.site_url}/domain-portfolio/{self.portfolio_id}",
        }
        try:
            response = requests.get(self.endpoint, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise PortfolioFetchError(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise PortfolioFetchError(f"Failed to fetch Atom API: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise PortfolioFetchError("Atom API returned invalid JSON") from exc

        entries = data.get("domains") if isinstance(data, dict) else None
        domains = [
            PortfolioDomain.from_api(entry, self.site_url)
            for entry in entries or []
            if isinstance(entry, dict)
        ]
        logger.info(
            "Portfolio %s lists %d domain(s)", self.portfolio_id, len(domains)
        )
        return domains


def get_portfolio_client() -> AtomPortfolioClient:
    """FastAPI dependency that wires the portfolio client from the settings."""
    return AtomPortfolioClient(
        portfolio_id=settings.ATOM_PORTFOLIO_ID,
        api_url=settings.ATOM_API_URL,
        site_url=settings.ATOM_BASE_URL,
        timeout=settings.ATOM_REQUEST_TIMEOUT,
    )
