"""FastAPI application."""

import argparse
import logging
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from configs import settings
from portfolio_api.controllers.portfolio_controllers import portfolio_router
from portfolio_api.controllers.pricing_controllers import pricing_router
from portfolio_api.logger_config import get_logger, setup_logging

setup_logging(logging.INFO)
logger = get_logger("portfolio_api.app")

logger.info("Starting FastAPI application...")
app = FastAPI(
    title="Domain Portfolio API",
    root_path=settings.ROOT_PATH_BACKEND,
    description="Live marketplace prices and portfolio listing for the domain showcase site",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.include_router(pricing_router)
app.include_router(portfolio_router)


@app.get("/", response_description="Api healthcheck")  # type: ignore[misc]
async def index() -> Dict[str, str]:
    """Define a route for handling HTTP GET requests to the root URL ("/")."""
    return {"status": "ok"}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("--docker", action="store_true", help="Running with docker")
    parser.add_argument("--host", required=True, help="Application host.")
    parser.add_argument("--port", required=True, help="Application port.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development purposes.",
    )
    return parser.parse_args()


if __name__ == "__main__":
    import uvicorn

    args = _parse_args()
    if not args.docker:
        from dotenv import load_dotenv

        load_dotenv()

    uvicorn.run("app:app", host=args.host, port=int(args.port), reload=args.reload)
