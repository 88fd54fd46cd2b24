"""Console logging shared by the API process."""

import logging
from typing import Iterable

from uvicorn.logging import DefaultFormatter

FORMAT = "%(levelprefix)s %(asctime)s [%(threadName)s] [%(name)s] %(message)s"

# Namespaces used by the service modules (``atom_pricing.provider`` etc.).
APP_LOGGERS = ("portfolio_api", "atom_pricing", "atom_portfolio")


def get_logger(name: str = __name__, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` with a uvicorn-styled stream handler attached once."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(DefaultFormatter(FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def setup_logging(
    level: int = logging.INFO, names: Iterable[str] = APP_LOGGERS
) -> None:
    """Attach the console handler to every application logger namespace."""
    for name in names:
        get_logger(name, level)
