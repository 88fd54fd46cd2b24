"""Expose the consultant's Atom portfolio to the site."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from portfolio_api.models.pricing_models import ErrorResponse, PortfolioResponse
from portfolio_api.services.atom_portfolio.client import (
    AtomPortfolioClient,
    PortfolioFetchError,
    get_portfolio_client,
)

logger = logging.getLogger("portfolio_api.portfolio")

portfolio_router = APIRouter(tags=["Portfolio"])


@portfolio_router.get(
    "/atom-portfolio",
    responses={
        200: {"model": PortfolioResponse, "description": "Successful Response"},
        500: {"model": ErrorResponse, "description": "Portfolio API failure"},
    },
)
def get_atom_portfolio(
    client: AtomPortfolioClient = Depends(get_portfolio_client),
) -> JSONResponse:
    """List the portfolio domains with their buy-now price and logo."""
    try:
        domains = client.list_domains()
    except PortfolioFetchError as exc:
        logger.warning("Portfolio lookup failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )
    return JSONResponse(content={"results": [domain.as_dict() for domain in domains]})
