"""Request and response models for the pricing endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BatchPriceRequest(BaseModel):
    """Body of the batch price endpoint."""

    domains: List[str] = Field(
        default_factory=list, description="Domains to look up, e.g. ChicDrift.com."
    )


class PriceResponse(BaseModel):
    """Price of one domain as listed on the marketplace."""

    model_config = ConfigDict(populate_by_name=True)

    domain: str = Field(..., description="Domain as requested.")
    url: str = Field(..., description="Marketplace page the price was read from.")
    price: Optional[str] = Field(
        None, description='Listed price, e.g. "$1,288", or "Price Request".'
    )
    is_request: Optional[bool] = Field(
        None,
        alias="isRequest",
        description="Whether the domain is listed as contact-for-price.",
    )
    logo: Optional[str] = Field(None, description="Logo image URL, when found.")
    error: Optional[str] = Field(None, description="Set when the lookup failed.")
    message: Optional[str] = Field(None, description="Transport error detail.")


class BatchPriceResponse(BaseModel):
    """Prices of several domains, in completion order."""

    results: List[PriceResponse]


class ErrorResponse(BaseModel):
    """Error body shared by the pricing endpoints."""

    error: str = Field(..., description="Short error description.")
    message: Optional[str] = Field(None, description="Underlying error detail.")
    url: Optional[str] = Field(None, description="Marketplace URL involved.")


class PortfolioDomainModel(BaseModel):
    """Domain listed in the consultant's portfolio."""

    name: str
    price: Optional[str | int | float] = Field(
        None, description='Buy-now price, or "Make Offer".'
    )
    logo: Optional[str] = None
    status: Optional[str] = None
    url: str


class PortfolioResponse(BaseModel):
    """Every domain in the portfolio, in the order the API lists them."""

    results: List[PortfolioDomainModel]
