"""Serve live marketplace prices for the domains shown on the site.

Both endpoints fetch the public Atom page of each domain and scrape the
listed price and logo from it.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from configs import settings
from portfolio_api.models.pricing_models import (
    BatchPriceRequest,
    BatchPriceResponse,
    ErrorResponse,
    PriceResponse,
)
from portfolio_api.services.atom_pricing.service import (
    PriceLookupService,
    get_price_lookup_service,
)

logger = logging.getLogger("portfolio_api.pricing")

MISSING_DOMAIN = "Missing ?domain=example.com"
INVALID_BATCH_BODY = "Body must be { domains: [...] }"
POST_ONLY = "Use POST with JSON body"

pricing_router = APIRouter(tags=["Pricing"])


def _cache_headers() -> dict[str, str]:
    return {"Cache-Control": settings.cache_control}


@pricing_router.get(
    "/atom-price",
    responses={
        200: {"model": PriceResponse, "description": "Successful Response"},
        400: {"model": ErrorResponse, "description": "Missing domain"},
        500: {"model": ErrorResponse, "description": "Marketplace unreachable"},
    },
)
def get_atom_price(
    domain: Optional[str] = None,
    service: PriceLookupService = Depends(get_price_lookup_service),
) -> JSONResponse:
    """
    Look up the listed price of a single domain.

    Args:
        domain (str): Domain name, with or without the ``.com`` suffix.

    Returns:
        The price, request flag and logo merged with the domain and page URL.
        Upstream failures mirror the marketplace status code.
    """
    domain = (domain or "").strip()
    if not domain:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": MISSING_DOMAIN}
        )

    result = service.lookup(domain)
    if result.status_code is not None:
        return JSONResponse(
            status_code=result.status_code,
            content={"error": result.error, "url": result.url},
        )
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": result.error, "message": result.message, "url": result.url},
        )

    return JSONResponse(content=result.as_dict(), headers=_cache_headers())


@pricing_router.post(
    "/atom-prices-batch",
    responses={
        200: {"model": BatchPriceResponse, "description": "Successful Response"},
        400: {"model": ErrorResponse, "description": "Invalid body"},
    },
)
async def post_atom_prices_batch(
    request: Request,
    service: PriceLookupService = Depends(get_price_lookup_service),
) -> JSONResponse:
    """Look up several domains at once; per-domain failures are reported inline."""
    raw = await request.body()
    try:
        payload = BatchPriceRequest.model_validate_json(raw or b"{}")
    except ValidationError as exc:
        logger.info("Rejecting batch body: %d validation error(s)", exc.error_count())
        payload = BatchPriceRequest()

    if not payload.domains:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_BATCH_BODY},
        )

    results = await run_in_threadpool(service.lookup_many, payload.domains)
    return JSONResponse(
        content={"results": [result.as_dict() for result in results]},
        headers=_cache_headers(),
    )


@pricing_router.api_route(
    "/atom-prices-batch",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def reject_atom_prices_batch() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": POST_ONLY},
        headers={"Allow": "POST"},
    )
